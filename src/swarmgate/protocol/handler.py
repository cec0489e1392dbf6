"""JSON-RPC request handler for a single agent.

Supports ``message/send``, ``tasks/get`` and ``tasks/cancel``. Requests are
answered with JSON-RPC 2.0 response objects; transport errors never surface
as exceptions.
"""

import json
import logging
from typing import Any

from a2a.server.context import ServerCallContext
from a2a.server.request_handlers import DefaultRequestHandler, JSONRPCHandler
from a2a.server.tasks import InMemoryTaskStore, TaskStore
from a2a.types import (
    AgentCard,
    CancelTaskRequest,
    GetTaskRequest,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    JSONParseError,
    JSONRPCErrorResponse,
    MethodNotFoundError,
    SendMessageRequest,
    TaskNotFoundError,
)
from pydantic import ValidationError as PydanticValidationError

from swarmgate.protocol.executor import GatewayExecutor
from swarmgate.protocol.wire import to_wire

logger = logging.getLogger(__name__)


def _error(request_id: str | int | None, error: Any) -> dict[str, Any]:
    response = to_wire(JSONRPCErrorResponse(id=request_id, error=error))
    # JSON-RPC requires "id": null when the request id is unknown
    response["id"] = request_id
    return response


class ProtocolHandler:
    """Protocol request handler bound to one agent card and executor."""

    def __init__(
        self,
        card: AgentCard,
        executor: GatewayExecutor,
        task_store: TaskStore | None = None,
    ):
        self.card = card
        self.executor = executor
        self.task_store = task_store if task_store is not None else InMemoryTaskStore()
        self.request_handler = DefaultRequestHandler(
            agent_executor=executor, task_store=self.task_store
        )
        self.jsonrpc = JSONRPCHandler(
            agent_card=card, request_handler=self.request_handler
        )
        self._methods = {
            "message/send": (SendMessageRequest, self.jsonrpc.on_message_send),
            "tasks/get": (GetTaskRequest, self.jsonrpc.on_get_task),
            "tasks/cancel": (CancelTaskRequest, self.jsonrpc.on_cancel_task),
        }

    async def handle(self, body: bytes | str | dict[str, Any]) -> dict[str, Any]:
        """Handle one JSON-RPC request and return the response object."""
        if isinstance(body, (bytes, str)):
            try:
                payload = json.loads(body)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                return _error(None, JSONParseError(message=f"Parse error: {e}"))
        else:
            payload = body

        if not isinstance(payload, dict):
            return _error(None, InvalidRequestError())
        request_id = payload.get("id")
        method = payload.get("method")
        if (
            payload.get("jsonrpc") != "2.0"
            or not isinstance(method, str)
            or not isinstance(request_id, (str, int))
        ):
            return _error(request_id, InvalidRequestError())

        entry = self._methods.get(method)
        if entry is None:
            return _error(
                request_id, MethodNotFoundError(message=f"Method not found: {method}")
            )
        request_model, dispatch = entry

        try:
            request = request_model.model_validate(payload)
        except PydanticValidationError as e:
            return _error(
                request_id,
                InvalidParamsError(message=f"Invalid params: {e.error_count()} error(s)"),
            )

        if isinstance(request, SendMessageRequest):
            task_id = request.params.message.task_id
            if task_id and await self.task_store.get(task_id) is None:
                return _error(
                    request_id, TaskNotFoundError(message=f"Task not found: {task_id}")
                )

        try:
            response = await dispatch(request, ServerCallContext())
        except Exception as e:
            logger.error(f"Internal error handling {method}: {e}")
            return _error(request_id, InternalError(message=str(e) or "Internal error"))

        return to_wire(response)
