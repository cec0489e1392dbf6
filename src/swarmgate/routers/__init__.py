"""FastAPI routers for API endpoints.

REST endpoints live under /api/v1; the per-agent protocol endpoints live
under /agents/{agent_id}.
"""

from swarmgate.routers import agents, chat, gateway, health

__all__ = ["agents", "chat", "gateway", "health"]
