"""In-memory task lifecycle tracking."""

import logging
import uuid
from collections import Counter
from datetime import datetime, timezone

from swarmgate.errors import InvalidTaskTransitionError, TaskNotFoundError
from swarmgate.orchestrator.types import TaskRecord, TaskState

logger = logging.getLogger(__name__)

_ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"working", "failed"}),
    "working": frozenset({"completed", "failed"}),
    "completed": frozenset(),
    "failed": frozenset(),
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class TaskManager:
    """Creates and mutates task records. Pure state, no I/O.

    Tasks live for the lifetime of the process and are never deleted. State
    only moves forward: pending → working → completed | failed (a pending task
    may also fail directly).
    """

    def __init__(self) -> None:
        self._tasks: dict[str, TaskRecord] = {}

    def create(self, context_id: str, agent_id: str) -> TaskRecord:
        """Create a new pending task.

        Args:
            context_id: Conversation the task belongs to
            agent_id: Agent that will handle the task

        Returns:
            The new TaskRecord
        """
        now = _now()
        task = TaskRecord(
            id=str(uuid.uuid4()),
            context_id=context_id,
            agent_id=agent_id,
            state="pending",
            created_at=now,
            updated_at=now,
        )
        self._tasks[task.id] = task
        logger.debug(f"Created task {task.id} for agent {agent_id}")
        return task

    def update_state(self, task_id: str, state: TaskState) -> TaskRecord:
        """Move a task to a new state and bump its updated_at timestamp.

        Raises:
            TaskNotFoundError: If the task id is unknown
            InvalidTaskTransitionError: If the move would go backwards or leave
                a terminal state
        """
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        if state not in _ALLOWED_TRANSITIONS[task.state]:
            raise InvalidTaskTransitionError(task_id, task.state, state)

        task.state = state
        task.updated_at = _now()
        logger.debug(f"Task {task_id} -> {state}")
        return task

    def get(self, task_id: str) -> TaskRecord | None:
        return self._tasks.get(task_id)

    def list_by_context(self, context_id: str) -> list[TaskRecord]:
        return [task for task in self._tasks.values() if task.context_id == context_id]

    def counts(self) -> dict[str, int]:
        """Number of tasks currently in each state."""
        counter = Counter(task.state for task in self._tasks.values())
        return {state: counter.get(state, 0) for state in _ALLOWED_TRANSITIONS}

    def __len__(self) -> int:
        return len(self._tasks)
