"""Pydantic models for API request and response schemas."""

from swarmgate.models.agents import (
    AgentListResponse,
    AgentSummary,
    ErrorResponse,
    OkResponse,
    RegisterAgentRequest,
    RegisterAgentResponse,
    RegisteredAgentItem,
    SkillSearchResponse,
)
from swarmgate.models.chat import ChatRequest, ChatResponse
from swarmgate.models.health import ChannelStatus, HealthResponse, StatusResponse

__all__ = [
    "AgentListResponse",
    "AgentSummary",
    "ChannelStatus",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "OkResponse",
    "RegisterAgentRequest",
    "RegisterAgentResponse",
    "RegisteredAgentItem",
    "SkillSearchResponse",
    "StatusResponse",
]
