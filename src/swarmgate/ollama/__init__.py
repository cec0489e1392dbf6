"""Ollama client used by locally hosted agents."""

from swarmgate.ollama.client import OllamaClient

__all__ = ["OllamaClient"]
