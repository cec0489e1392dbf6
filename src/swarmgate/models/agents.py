"""Pydantic models for agent management endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(description="Human readable error message")


class AgentSummary(BaseModel):
    id: str = Field(description="Agent identifier")
    name: str = Field(description="Display name")
    description: str | None = Field(default=None, description="What the agent does")


class AgentListResponse(BaseModel):
    """Response body for GET /api/v1/agents."""

    agents: list[AgentSummary] = Field(default_factory=list)


class RegisterAgentRequest(BaseModel):
    """Request body for POST /api/v1/agents/register.

    All fields are optional in the schema; missing required ones produce a
    single 400 naming id, name and url.
    """

    id: str | None = Field(default=None, description="Agent identifier")
    name: str | None = Field(default=None, description="Display name")
    url: str | None = Field(default=None, description="Base URL of the external agent")
    description: str | None = Field(default=None, description="What the agent does")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "id": "code-reviewer",
                    "name": "Code Reviewer",
                    "url": "http://localhost:5001",
                    "description": "Reviews pull requests",
                }
            ]
        }
    )


class RegisterAgentResponse(BaseModel):
    ok: bool = True
    agent_id: str = Field(alias="agentId")
    has_card: bool = Field(default=False, alias="hasCard")

    model_config = ConfigDict(populate_by_name=True)


class OkResponse(BaseModel):
    ok: bool = True


class RegisteredAgentItem(BaseModel):
    id: str
    name: str
    url: str
    description: str | None = None
    status: str
    created_by: str = Field(alias="createdBy")
    created_at: str = Field(alias="createdAt")
    skills: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class SkillSearchResponse(BaseModel):
    """Response body for GET /api/v1/agents/search."""

    agents: list[RegisteredAgentItem] = Field(default_factory=list)
