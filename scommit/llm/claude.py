"""Claude (Anthropic) LLM Client"""

import logging

from scommit.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class ClaudeClient(LLMClient):
    """Claude API client. The API key comes from the resolved settings."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    DEFAULT_TIMEOUT = 20
    MAX_TOKENS = 480
    TEMPERATURE = 0.25

    def __init__(self, api_key: str | None = None, model: str | None = None, timeout: float | None = None):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout or self.DEFAULT_TIMEOUT

        if not self.api_key:
            raise LLMError(
                "No API key found. Set ANTHROPIC_API_KEY environment variable:\n"
                "  export ANTHROPIC_API_KEY='your-key-here'"
            )

        try:
            from anthropic import Anthropic
            # Retries would stretch the bounded wait; a failed call falls back instead
            self._client = Anthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from anthropic import APIError, APITimeoutError, AuthenticationError

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}]
            )
        except APITimeoutError:
            raise LLMError(f"Request timed out after {self.timeout}s")
        except AuthenticationError:
            raise LLMError("Invalid API key. Check your ANTHROPIC_API_KEY.")
        except APIError as e:
            raise LLMError(f"Claude API error: {e.message}")

        content = ""
        for block in response.content:
            if block.type == "text":
                content = block.text.strip()
                break

        tokens = response.usage.input_tokens + response.usage.output_tokens
        logger.debug("Claude replied with %d characters (%d tokens)", len(content), tokens)
        return LLMResponse(content=content, model=self.model, tokens_used=tokens)
