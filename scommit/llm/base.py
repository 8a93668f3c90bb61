"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from scommit import SUBJECT_LIMIT


SYSTEM_PROMPT = f"""You are a git commit assistant. Produce informative, specific commit messages that mirror the repository's tone.

Respond strictly as a JSON object with keys "subject" and "body":
- "subject": at most {SUBJECT_LIMIT} characters, sentence case, no trailing period
- "body": 2-5 bullets, each starting with "- ", focused on concrete changes and motivations

Mention new commands, flags, examples or doc sections touched, and any behavioral impacts.
Avoid generic wording; be specific to these changes. No markdown, no text outside the JSON."""


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail, including timeouts."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients. Returns the raw reply; parsing happens elsewhere."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        """Send the prompt and return the raw reply.

        Raises LLMError on failure. Unwrapped TimeoutError or ConnectionError
        is also treated as a transport failure by the caller.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
