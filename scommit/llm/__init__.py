"""LLM Client Package"""

from scommit.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT
from scommit.llm.claude import ClaudeClient


def get_client(model: str | None = None, api_key: str | None = None, timeout: float | None = None) -> LLMClient:
    """Build the AI transport. Raises LLMError when it can't be used."""
    return ClaudeClient(api_key=api_key, model=model, timeout=timeout)


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "ClaudeClient",
    "get_client",
    "SYSTEM_PROMPT",
]
