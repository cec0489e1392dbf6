"""Executor bridging protocol tasks to the orchestrator."""

import logging
from collections.abc import Awaitable, Callable

from a2a.server.agent_execution import AgentExecutor, RequestContext
from a2a.server.events import EventQueue
from a2a.server.tasks import TaskUpdater
from a2a.types import Message, Part, Role, Task, TaskState, TextPart
from a2a.utils import get_message_text

from swarmgate.orchestrator.types import AgentResult, ChatTurn

logger = logging.getLogger(__name__)

# (context_id, text, history) -> result, already bound to one agent
BoundInvokeFn = Callable[[str, str, list[ChatTurn] | None], Awaitable[AgentResult]]


def convert_history(
    task: Task | None, current: Message | None = None
) -> list[ChatTurn] | None:
    """Turn a protocol task's message history into chat turns.

    ``current`` is the message being answered; it is already part of the
    task history and is left out.
    """
    if task is None or not task.history:
        return None
    turns = [
        ChatTurn(
            role="user" if message.role == Role.user else "assistant",
            content=get_message_text(message),
        )
        for message in task.history
        if current is None or message.message_id != current.message_id
    ]
    return turns or None


def _text_parts(text: str) -> list[Part]:
    return [Part(root=TextPart(text=text))]


class GatewayExecutor(AgentExecutor):
    """Runs a ``message/send`` request against one agent.

    Drives the protocol task through submitted, working, then completed or
    failed, attaching the agent reply as an artifact. Agent errors end up in
    the failed status message; they are not raised to the transport.
    """

    def __init__(self, invoke: BoundInvokeFn):
        self.invoke = invoke

    async def execute(self, context: RequestContext, event_queue: EventQueue) -> None:
        task_id = context.task_id
        context_id = context.context_id
        updater = TaskUpdater(event_queue, task_id, context_id)
        history = convert_history(context.current_task, context.message)

        if context.current_task is None:
            await updater.update_status(TaskState.submitted)
        await updater.update_status(TaskState.working)

        try:
            result = await self.invoke(context_id, context.get_user_input(), history)
        except Exception as e:
            logger.error(f"Protocol task {task_id} failed: {e}")
            await updater.update_status(
                TaskState.failed,
                message=updater.new_agent_message(_text_parts(str(e) or "Unknown error")),
                final=True,
            )
            return

        await updater.add_artifact(_text_parts(result.text), name="response")
        await updater.update_status(
            TaskState.completed,
            message=updater.new_agent_message(_text_parts(result.text)),
            final=True,
        )

    async def cancel(self, context: RequestContext, event_queue: EventQueue) -> None:
        updater = TaskUpdater(event_queue, context.task_id, context.context_id)
        await updater.update_status(TaskState.canceled, final=True)
