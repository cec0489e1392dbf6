"""swarmgate: multi-agent gateway.

Routes chat-channel messages and agent-to-agent JSON-RPC calls to local and
remote agents, and keeps a durable registry of external agents.
"""

from swarmgate.app import create_app

__version__ = "0.1.0"

__all__ = ["create_app", "__version__"]
