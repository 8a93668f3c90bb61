"""
Tests for MessageGenerator: AI path, heuristic fallback, subject override,
plus the Claude transport and prompt summary it relies on.

Run with:
    pytest tests/test_generator.py -v
"""

import json
from datetime import datetime
from types import SimpleNamespace

import anthropic
import httpx
import pytest

from scommit import SUBJECT_LIMIT
from scommit.config import GeneratorSettings
from scommit.git.analyzer import ChangeStatus, FileChange, StagedChangeSet
from scommit.llm import ClaudeClient, LLMClient, LLMError, LLMResponse
from scommit.message.builder import GenerationPath, build_heuristic_message
from scommit.message.errors import InvalidInput
from scommit.message.generator import MessageGenerator
from scommit.prompts.builder import PromptBuilder, PromptConfig

NOW = datetime(2026, 10, 19, 9, 30)

AI_REPLY = '```json\n{"subject": "Add retry support to uploader", "body": ["- retry failed chunks", "- log each attempt"]}\n```'


class FakeClient(LLMClient):
    """Records prompts; replies with fixed content or raises."""

    def __init__(self, content: str = AI_REPLY, error: BaseException | None = None):
        self.content = content
        self.error = error
        self.prompts = []

    @property
    def name(self) -> str:
        return "Fake"

    def generate(self, prompt: str) -> LLMResponse:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model="fake-model")


@pytest.fixture
def changes():
    return StagedChangeSet(files=(
        FileChange(path="src/uploader.py", additions=40, deletions=0, status=ChangeStatus.ADDED),
    ))


@pytest.fixture
def ai_settings():
    return GeneratorSettings(ai_enabled=True, model="fake-model", api_key="sk-test")


# ---------------------------------------------------------------------------
# Path selection
# ---------------------------------------------------------------------------

class TestMessageGenerator:

    def test_ai_disabled_uses_heuristic(self, changes):
        client = FakeClient()
        settings = GeneratorSettings(ai_enabled=False, api_key="sk-test")
        message = MessageGenerator(settings, client=client).generate(changes, now=NOW)

        assert message.path is GenerationPath.HEURISTIC
        assert message.subject.startswith("feat: ")
        assert client.prompts == []

    def test_missing_credential_uses_heuristic(self, changes):
        client = FakeClient()
        settings = GeneratorSettings(ai_enabled=True, api_key=None)
        message = MessageGenerator(settings, client=client).generate(changes, now=NOW)

        assert message == build_heuristic_message(changes, NOW)
        assert client.prompts == []

    def test_ai_success(self, changes, ai_settings):
        message = MessageGenerator(ai_settings, client=FakeClient()).generate(changes, now=NOW)

        assert message.path is GenerationPath.AI
        assert message.subject == "Add retry support to uploader"
        assert message.body == "- retry failed chunks\n- log each attempt"

    def test_timeout_falls_back_to_heuristic(self, changes, ai_settings):
        client = FakeClient(error=LLMError("Request timed out after 20s"))
        message = MessageGenerator(ai_settings, client=client).generate(changes, now=NOW)

        assert message == build_heuristic_message(changes, NOW)
        assert len(client.prompts) == 1

    @pytest.mark.parametrize("error", [
        TimeoutError("read timed out"),
        ConnectionError("reset"),
    ])
    def test_unwrapped_transport_error_falls_back(self, changes, ai_settings, error):
        client = FakeClient(error=error)
        message = MessageGenerator(ai_settings, client=client).generate(changes, now=NOW)

        assert message == build_heuristic_message(changes, NOW)
        assert len(client.prompts) == 1

    @pytest.mark.parametrize("content", [
        "I think you should call it 'feat: uploader'",
        '{"body": "- no subject here"}',
        '{"subject": 42}',
        "",
    ])
    def test_bad_reply_falls_back_to_heuristic(self, changes, ai_settings, content):
        message = MessageGenerator(ai_settings, client=FakeClient(content=content)).generate(changes, now=NOW)
        assert message == build_heuristic_message(changes, NOW)

    def test_client_construction_failure_falls_back(self, changes, ai_settings, monkeypatch):
        def broken_client(**kwargs):
            raise LLMError("Anthropic SDK not installed")

        monkeypatch.setattr("scommit.message.generator.get_client", broken_client)
        message = MessageGenerator(ai_settings).generate(changes, now=NOW)
        assert message == build_heuristic_message(changes, NOW)

    def test_fallback_is_logged(self, changes, ai_settings, caplog):
        client = FakeClient(error=LLMError("boom"))
        with caplog.at_level("WARNING", logger="scommit.message.generator"):
            MessageGenerator(ai_settings, client=client).generate(changes, now=NOW)
        assert "falling back to heuristic" in caplog.text

    def test_interrupt_propagates(self, changes, ai_settings):
        client = FakeClient(error=KeyboardInterrupt())
        with pytest.raises(KeyboardInterrupt):
            MessageGenerator(ai_settings, client=client).generate(changes, now=NOW)

    def test_empty_change_set_is_invalid(self, ai_settings):
        with pytest.raises(InvalidInput):
            MessageGenerator(ai_settings, client=FakeClient()).generate(StagedChangeSet(), now=NOW)

    def test_recent_subjects_reach_prompt(self, changes, ai_settings):
        client = FakeClient()
        MessageGenerator(ai_settings, client=client).generate(
            changes, recent_subjects=["Fix flaky upload test"], now=NOW
        )
        assert "Fix flaky upload test" in client.prompts[0]
        assert "src/uploader.py" in client.prompts[0]

    def test_default_timestamp_is_sampled(self, changes):
        message = MessageGenerator(GeneratorSettings(ai_enabled=False)).generate(changes)
        assert "Generated " in message.body.split("\n")[-1]


# ---------------------------------------------------------------------------
# Subject override
# ---------------------------------------------------------------------------

class TestSubjectOverride:

    def test_override_keeps_heuristic_body(self, changes):
        settings = GeneratorSettings(ai_enabled=False, subject_override="chore: ship it")
        message = MessageGenerator(settings).generate(changes, now=NOW)

        assert message.subject == "chore: ship it"
        assert message.body == build_heuristic_message(changes, NOW).body

    def test_override_keeps_ai_body(self, changes):
        settings = GeneratorSettings(ai_enabled=True, api_key="sk-test", subject_override="feat: uploader")
        message = MessageGenerator(settings, client=FakeClient()).generate(changes, now=NOW)

        assert message.subject == "feat: uploader"
        assert message.body == "- retry failed chunks\n- log each attempt"
        assert message.path is GenerationPath.AI

    def test_long_override_is_capped(self, changes):
        settings = GeneratorSettings(ai_enabled=False, subject_override="word " * 30)
        message = MessageGenerator(settings).generate(changes, now=NOW)
        assert len(message.subject) <= SUBJECT_LIMIT


# ---------------------------------------------------------------------------
# Claude transport
# ---------------------------------------------------------------------------

def _raising_messages(error):
    def create(**kwargs):
        raise error
    return SimpleNamespace(messages=SimpleNamespace(create=create))


class TestClaudeClient:

    def test_requires_api_key(self):
        with pytest.raises(LLMError):
            ClaudeClient(api_key=None)

    def test_timeout_becomes_llm_error(self):
        client = ClaudeClient(api_key="sk-test", timeout=1)
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client._client = _raising_messages(anthropic.APITimeoutError(request=request))

        with pytest.raises(LLMError, match="timed out"):
            client.generate("prompt")

    def test_timeout_end_to_end_matches_heuristic(self, changes):
        client = ClaudeClient(api_key="sk-test", timeout=1)
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client._client = _raising_messages(anthropic.APITimeoutError(request=request))

        settings = GeneratorSettings(ai_enabled=True, api_key="sk-test")
        message = MessageGenerator(settings, client=client).generate(changes, now=NOW)
        assert message == build_heuristic_message(changes, NOW)

    def test_returns_first_text_block(self):
        client = ClaudeClient(api_key="sk-test", model="claude-test")
        reply = SimpleNamespace(
            content=[SimpleNamespace(type="text", text='  {"subject": "Add x"}  ')],
            usage=SimpleNamespace(input_tokens=10, output_tokens=5),
        )
        client._client = SimpleNamespace(messages=SimpleNamespace(create=lambda **kwargs: reply))

        response = client.generate("prompt")
        assert response.content == '{"subject": "Add x"}'
        assert response.tokens_used == 15
        assert response.model == "claude-test"


# ---------------------------------------------------------------------------
# Prompt summary
# ---------------------------------------------------------------------------

class TestPromptBuilder:

    def test_summary_counts_and_categories(self):
        changes = StagedChangeSet(files=(
            FileChange(path="src/app.py", additions=10, deletions=2),
            FileChange(path="docs/new.md", additions=5, deletions=0, status=ChangeStatus.RENAMED, old_path="docs/old.md"),
        ))
        summary = PromptBuilder().summarize(changes, ["Fix typo"])

        assert summary["totals"] == {"files": 2, "additions": 15, "deletions": 2, "new_files": 0, "removed_files": 0}
        assert summary["categories"] == {"code": 1, "docs": 1}
        assert summary["files"][1] == {
            "action": "rename", "path": "docs/new.md", "from": "docs/old.md",
            "category": "docs", "additions": 5, "deletions": 0,
        }
        assert summary["recent_subjects"] == ["Fix typo"]
        json.dumps(summary)

    def test_file_list_is_capped(self):
        changes = StagedChangeSet(files=[FileChange(path=f"src/m{i}.py", additions=1) for i in range(30)])
        summary = PromptBuilder(PromptConfig(max_files=24)).summarize(changes)
        assert len(summary["files"]) == 24
        assert summary["omitted_files"] == 6

    def test_diff_excerpt_truncated(self):
        changes = StagedChangeSet(files=[FileChange(path="a.py", additions=1)], diff="+" * 50)
        prompt = PromptBuilder(PromptConfig(max_diff_chars=10)).build(changes)
        assert "+" * 10 in prompt
        assert "+" * 11 not in prompt
        assert "truncated due to size" in prompt

    def test_no_diff_section_without_diff(self):
        changes = StagedChangeSet(files=[FileChange(path="a.py", additions=1)])
        assert "<diff>" not in PromptBuilder().build(changes)
