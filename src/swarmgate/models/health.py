"""Health and status response models."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of swarmgate.
        ollama_connected: Whether the local agent's Ollama server is reachable.
        ollama_host: The Ollama host URL, if a local agent is configured.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of swarmgate")
    ollama_connected: bool | None = Field(
        default=None,
        description="Whether Ollama is connected",
    )
    ollama_host: str | None = Field(
        default=None,
        description="Ollama host URL",
    )


class ChannelStatus(BaseModel):
    enabled: bool
    running: bool


class StatusResponse(BaseModel):
    """Operational snapshot of the running server."""

    agents: int = Field(description="Number of registered agents")
    default_agent: str | None = Field(default=None, description="Fallback agent id")
    channels: dict[str, ChannelStatus] = Field(default_factory=dict)
    inbound_queue: int = Field(description="Inbound messages waiting to be handled")
    outbound_queue: int = Field(description="Outbound messages waiting to be sent")
    dropped_outbound: int = Field(
        description="Outbound messages dropped because their channel was unknown"
    )
    tasks: dict[str, int] = Field(
        default_factory=dict, description="Number of tasks in each state"
    )
    cached_handlers: list[str] = Field(
        default_factory=list, description="Agent ids with a built protocol handler"
    )
