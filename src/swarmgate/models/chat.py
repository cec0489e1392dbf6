"""Pydantic models for the REST chat endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request body for POST /api/v1/chat.

    ``message`` is optional at the schema level so that a missing message is
    answered with a 400 and an explanatory error rather than a schema dump.
    """

    message: str | None = Field(default=None, description="The user message to send")
    user_id: str | None = Field(
        default=None, alias="userId", description="Caller identity (default: anonymous)"
    )
    conversation_id: str | None = Field(
        default=None,
        alias="conversationId",
        description="Conversation to continue; a new one is started if omitted",
    )
    agent_id: str | None = Field(
        default=None,
        alias="agentId",
        description="Agent that should answer; the default agent if omitted",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"message": "What is the capital of France?"},
                {
                    "message": "Review this diff",
                    "userId": "alice",
                    "conversationId": "c0ffee",
                    "agentId": "code-reviewer",
                },
            ]
        },
    )


class ChatResponse(BaseModel):
    """Response body for POST /api/v1/chat."""

    text: str = Field(description="The agent's reply")
    conversation_id: str = Field(alias="conversationId", description="Conversation id")
    metadata: dict[str, Any] | None = Field(
        default=None, description="Agent metadata, always including agentId"
    )

    model_config = ConfigDict(populate_by_name=True)
