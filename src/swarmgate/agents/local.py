"""Locally hosted agent answering through an Ollama chat model."""

import logging
from typing import Any

from swarmgate.ollama import OllamaClient
from swarmgate.orchestrator.types import AgentResult, ChatTurn

logger = logging.getLogger(__name__)


def _to_ollama_messages(
    system_prompt: str | None, turns: list[ChatTurn], text: str
) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.extend({"role": turn.role, "content": turn.content} for turn in turns)
    messages.append({"role": "user", "content": text})
    return messages


class LocalAgent:
    """Agent running in-process on top of an Ollama model.

    When the caller supplies no history, the agent keeps its own per-context
    conversation memory, capped at ``max_history`` turns.
    """

    def __init__(
        self,
        agent_id: str,
        name: str,
        ollama_client: OllamaClient,
        model: str,
        description: str | None = None,
        system_prompt: str | None = None,
        max_history: int = 20,
    ):
        self.id = agent_id
        self.name = name
        self.description = description
        self.ollama_client = ollama_client
        self.model = model
        self.system_prompt = system_prompt
        self.max_history = max_history
        self._conversations: dict[str, list[ChatTurn]] = {}

    def conversation(self, context_id: str) -> list[ChatTurn]:
        return list(self._conversations.get(context_id, []))

    async def handle(
        self,
        context_id: str,
        text: str,
        history: list[ChatTurn] | None = None,
        options: dict[str, Any] | None = None,
    ) -> AgentResult:
        turns = history if history is not None else self._conversations.get(context_id, [])
        messages = _to_ollama_messages(self.system_prompt, turns, text)

        logger.debug(
            f"Agent {self.id} sending {len(messages)} messages to model {self.model}"
        )
        content, final_chunk = await self.ollama_client.chat(
            model=self.model, messages=messages, options=options
        )

        if history is None:
            memory = self._conversations.setdefault(context_id, [])
            memory.append(ChatTurn(role="user", content=text))
            memory.append(ChatTurn(role="assistant", content=content))
            if len(memory) > self.max_history:
                del memory[: len(memory) - self.max_history]

        metadata: dict[str, Any] = {"model": self.model}
        if final_chunk.get("eval_count") is not None:
            metadata["eval_count"] = final_chunk["eval_count"]
        if final_chunk.get("prompt_eval_count") is not None:
            metadata["prompt_eval_count"] = final_chunk["prompt_eval_count"]

        return AgentResult(text=content, metadata=metadata)
