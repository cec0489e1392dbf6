"""Agent invocation and task lifecycle tracking."""

from swarmgate.orchestrator.orchestrator import Orchestrator
from swarmgate.orchestrator.tasks import TaskManager
from swarmgate.orchestrator.types import (
    AgentHandle,
    AgentResult,
    Attachment,
    ChatTurn,
    NormalizedMessage,
    NormalizedResponse,
    TaskRecord,
    TaskState,
)
from swarmgate.orchestrator.worker import InboundWorker

__all__ = [
    "Orchestrator",
    "TaskManager",
    "InboundWorker",
    "AgentHandle",
    "AgentResult",
    "Attachment",
    "ChatTurn",
    "NormalizedMessage",
    "NormalizedResponse",
    "TaskRecord",
    "TaskState",
]
