"""Async Ollama client wrapper.

This module provides an async wrapper around the ollama.AsyncClient used by
locally hosted agents. The client is created once at startup and shared by
every local agent.
"""

import logging
from typing import Any, AsyncIterator

import ollama

logger = logging.getLogger(__name__)


class OllamaClient:
    """Async client for interacting with the Ollama API.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(self, host: str) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
        """
        self.host = host
        self._client = ollama.AsyncClient(host=host)
        logger.info(f"OllamaClient initialized with host: {host}")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def chat_stream(
        self,
        model: str,
        messages: list[dict[str, Any]],
        options: dict[str, Any] | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Stream chat responses from Ollama.

        Args:
            model: The model name to use for the chat
            messages: List of message dicts in Ollama format:
                      [{"role": "user", "content": "..."}, ...]
            options: Optional model parameters (temperature, etc.)

        Yields:
            dict: Response chunks from Ollama. The final chunk has done=True
                  and carries eval_count / prompt_eval_count.

        Raises:
            Exception: If the Ollama API request fails
        """
        try:
            logger.debug(f"Starting chat stream with model: {model}")

            async for chunk in await self._client.chat(
                model=model,
                messages=messages,
                stream=True,
                options=options,
            ):
                if hasattr(chunk, "model_dump"):
                    chunk_dict = chunk.model_dump()
                elif isinstance(chunk, dict):
                    chunk_dict = chunk
                else:
                    chunk_dict = vars(chunk)

                yield chunk_dict

            logger.debug("Chat stream completed")

        except Exception as e:
            logger.error(f"Chat stream failed: {e}")
            raise

    async def chat(
        self,
        model: str,
        messages: list[dict[str, Any]],
        options: dict[str, Any] | None = None,
    ) -> tuple[str, dict[str, Any]]:
        """Collect a complete response from the streaming API.

        Returns:
            Tuple of (complete_content, final_chunk)

        Raises:
            RuntimeError: If the stream ends without a completion marker
        """
        content_parts: list[str] = []
        final_chunk: dict[str, Any] | None = None

        async for chunk in self.chat_stream(model, messages, options):
            content = (chunk.get("message") or {}).get("content") or ""
            if content:
                content_parts.append(content)
            if chunk.get("done"):
                final_chunk = chunk

        if final_chunk is None:
            raise RuntimeError("Stream ended without completion marker")

        return "".join(content_parts), final_chunk

    async def close(self) -> None:
        """Close the client.

        ollama.AsyncClient uses httpx internally, which handles cleanup.
        """
        logger.debug("OllamaClient closed")
