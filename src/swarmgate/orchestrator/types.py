"""Data types shared by the orchestrator, agents and channels."""

from dataclasses import dataclass, field
from typing import Any, Literal, Protocol, runtime_checkable

TaskState = Literal["pending", "working", "completed", "failed"]


@dataclass
class ChatTurn:
    """One prior exchange in a conversation, passed to agents as history."""

    role: Literal["user", "assistant"]
    content: str


@dataclass
class AgentResult:
    """What an agent returns for a single request."""

    text: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class TaskRecord:
    """Lifecycle record of one agent invocation."""

    id: str
    context_id: str
    agent_id: str
    state: TaskState
    created_at: str
    updated_at: str


@dataclass
class Attachment:
    name: str
    mime_type: str
    data: str | bytes


@dataclass
class NormalizedMessage:
    """Channel-independent request shape handed to ``Orchestrator.handle``."""

    channel_id: str
    user_id: str
    conversation_id: str
    text: str
    attachments: list[Attachment] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class NormalizedResponse:
    text: str
    attachments: list[Attachment] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class AgentHandle(Protocol):
    """Capability every agent variant implements.

    The orchestrator only ever talks to this interface; whether the agent runs
    in-process or behind a remote protocol endpoint is invisible to it.
    """

    id: str
    name: str
    description: str | None

    async def handle(
        self,
        context_id: str,
        text: str,
        history: list[ChatTurn] | None = None,
        options: dict[str, Any] | None = None,
    ) -> AgentResult: ...
