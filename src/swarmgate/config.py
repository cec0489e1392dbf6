"""Configuration module for swarmgate using pydantic-settings."""

from pathlib import Path

from a2a.types import AgentSkill
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from swarmgate.agents.remote import ExternalAgentDefinition


def _default_local_skills() -> list[AgentSkill]:
    return [
        AgentSkill(
            id="chat",
            name="chat",
            description="General conversation and question answering",
            tags=["chat"],
        )
    ]


class SwarmGateSettings(BaseSettings):
    """Main configuration settings for swarmgate.

    All settings can be overridden via environment variables with the
    SWARMGATE_ prefix. For example, SWARMGATE_OLLAMA_HOST will override the
    ollama_host setting. List settings such as external_agents take JSON.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    public_url: str | None = None

    # Data directories (relative to data_dir)
    data_dir: str = "."
    registry_dir: str = "registry"

    # Ollama
    ollama_host: str = "http://localhost:11434"

    # Local agent
    local_agent_enabled: bool = True
    local_agent_id: str = "assistant"
    local_agent_name: str = "Assistant"
    local_agent_description: str = "General purpose assistant running on a local model"
    local_agent_model: str = "llama3.2:latest"
    local_agent_system_prompt: str | None = None
    local_agent_skills: list[AgentSkill] = Field(default_factory=_default_local_skills)
    max_history_messages: int = 20

    # External agents
    external_agents: list[ExternalAgentDefinition] = Field(default_factory=list)
    external_skill_exclude_tags: list[str] = Field(default_factory=lambda: ["internal"])
    remote_timeout: float = 60.0

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="SWARMGATE_")

    @property
    def resolved_registry_dir(self) -> Path:
        """Get the full path to the registered-agent directory."""
        return Path(self.data_dir) / self.registry_dir

    @property
    def resolved_public_url(self) -> str:
        """Base URL under which this server is reachable by other agents."""
        if self.public_url:
            return self.public_url.rstrip("/")
        return f"http://{self.host}:{self.port}"
