"""Paths and serialization shared by the protocol endpoints and clients."""

from typing import Any

from pydantic import BaseModel

AGENT_CARD_PATH = ".well-known/agent-card.json"
JSONRPC_PATH = "jsonrpc"


def to_wire(model: BaseModel) -> dict[str, Any]:
    """Serialize a protocol model with camelCase keys, omitting unset fields."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
