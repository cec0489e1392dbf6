"""Domain exceptions raised by swarmgate components.

HTTP routers translate these into ``{"error": "..."}`` JSON bodies; inside the
process they propagate like any other exception.
"""


class SwarmGateError(Exception):
    """Base class for all swarmgate errors."""


class AgentNotFoundError(SwarmGateError):
    """Raised when an agent id cannot be resolved."""

    def __init__(self, agent_id: str):
        self.agent_id = agent_id
        super().__init__(f"Agent not found: {agent_id}")


class NoDefaultAgentError(SwarmGateError):
    """Raised when no agent id was given and no fallback agent exists."""

    def __init__(self) -> None:
        super().__init__("No agent registered")


class TaskNotFoundError(SwarmGateError):
    """Raised when updating a task id the TaskManager does not know."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class InvalidTaskTransitionError(SwarmGateError, ValueError):
    """Raised when a task state change would break pending → working → done."""

    def __init__(self, task_id: str, current: str, requested: str):
        self.task_id = task_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Task {task_id} cannot move from '{current}' to '{requested}'"
        )


class ValidationError(SwarmGateError, ValueError):
    """Raised when a request is missing required fields or carries bad values."""


class RegistrationError(SwarmGateError):
    """Raised when an external agent cannot be registered or reached."""


class TransportError(RegistrationError):
    """Raised when the protocol transport to a remote agent fails."""


class ChannelNotFoundError(SwarmGateError, LookupError):
    """Raised when an outbound message names a channel that is not registered."""

    def __init__(self, channel: str):
        self.channel = channel
        super().__init__(f"Channel not found: {channel}")
