"""Message Generator - AI first, heuristic fallback, optional subject override."""

import logging
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence

from scommit.config import GeneratorSettings
from scommit.git.analyzer import StagedChangeSet
from scommit.llm import LLMClient, LLMError, get_client
from scommit.message.builder import CommitMessage, build_heuristic_message
from scommit.message.errors import ResponseError
from scommit.message.sanitizer import parse_ai_response
from scommit.prompts.builder import PromptBuilder

logger = logging.getLogger(__name__)


class GenerationState(Enum):
    START = "start"
    AI_SKIPPED = "ai_skipped"
    AI_ATTEMPTED = "ai_attempted"
    HEURISTIC_FALLBACK = "heuristic_fallback"
    DONE = "done"


class MessageGenerator:
    """Produces exactly one CommitMessage per call.

    Holds only read-only settings; nothing carries over between calls.
    """

    def __init__(
        self,
        settings: GeneratorSettings,
        client: Optional[LLMClient] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        self.settings = settings
        self._client = client
        self.prompt_builder = prompt_builder or PromptBuilder()

    def generate(
        self,
        changes: StagedChangeSet,
        recent_subjects: Sequence[str] = (),
        now: Optional[datetime] = None,
    ) -> CommitMessage:
        """Build the message for `changes`.

        Raises InvalidInput for an empty change set. AI failures never
        escape; they send the run down the heuristic path.
        """
        timestamp = now or datetime.now()
        self._transition(GenerationState.START)

        message = None
        if self.settings.use_ai:
            self._transition(GenerationState.AI_ATTEMPTED)
            message = self._try_ai(changes, recent_subjects)
        else:
            self._transition(GenerationState.AI_SKIPPED)

        if message is None:
            if self.settings.use_ai:
                self._transition(GenerationState.HEURISTIC_FALLBACK)
            message = build_heuristic_message(changes, timestamp)

        if self.settings.subject_override:
            message = message.with_subject(self.settings.subject_override)

        self._transition(GenerationState.DONE)
        return message

    def _try_ai(self, changes: StagedChangeSet, recent_subjects: Sequence[str]) -> Optional[CommitMessage]:
        if changes.is_empty:
            return None
        try:
            client = self._get_client()
            prompt = self.prompt_builder.build(changes, list(recent_subjects))
            response = client.generate(prompt)
            message = parse_ai_response(response.content)
        except (LLMError, ResponseError, OSError) as e:
            # OSError covers TimeoutError and ConnectionError from clients that don't wrap them
            logger.warning("AI generation failed (%s); falling back to heuristic.", e)
            return None

        logger.debug("AI message accepted from %s", response.model or "model")
        return message

    def _get_client(self) -> LLMClient:
        if self._client is None:
            self._client = get_client(
                model=self.settings.model,
                api_key=self.settings.api_key,
                timeout=self.settings.timeout,
            )
        return self._client

    @property
    def client_name(self) -> Optional[str]:
        return self._client.name if self._client is not None else None

    def _transition(self, state: GenerationState) -> None:
        logger.debug("message generation: %s", state.value)
