"""
Tests for outreach draft prompts, reply parsing and provider error handling.
"""
from types import SimpleNamespace

import httpx
import openai
import pytest
from tenacity import wait_none

from pitchintel.models.brief import Brief
from pitchintel.services import llm
from pitchintel.services.drafts import (
    DEFAULT_EXPLANATION,
    DraftGenerator,
    build_prompt,
    parse_draft,
)
from pitchintel.services.errors import DraftConfigurationError, DraftGenerationError

GROQ_REQUEST = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeClient:
    """Stands in for openai.OpenAI; replies are returned (or raised) in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return completion(reply)


@pytest.fixture
def brief():
    return Brief(
        company_name="Acme",
        website=None,
        user_intent="sell observability",
        summary="Acme is growing.",
        pitch_angle="Lead with uptime.",
        what_not_to_pitch="Avoid cost cutting.",
        signal_tag="Scaling Operations - Positive Market Position",
    )


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(DraftGenerator._complete.retry, "wait", wait_none())


class TestPrompts:

    def test_email_prompt_carries_brief_fields(self, brief):
        prompt = build_prompt(brief, "email")
        assert "Company: Acme" in prompt
        assert "Website: N/A" in prompt
        assert "Signal Tag: Scaling Operations - Positive Market Position" in prompt
        assert "What NOT to pitch: Avoid cost cutting." in prompt
        assert prompt.rstrip().endswith('"draft" and "explanation" fields.')

    def test_followup_defaults_outcome(self, brief):
        assert "Last Outcome: No response" in build_prompt(brief, "followup")
        assert "Last Outcome: Asked for pricing" in build_prompt(brief, "followup", "Asked for pricing")

    def test_rebuttal_uses_objection(self, brief):
        assert "Objection/Outcome: Generic objection" in build_prompt(brief, "rebuttal")

    def test_unknown_type(self, brief):
        with pytest.raises(ValueError):
            build_prompt(brief, "fax")


class TestParseDraft:

    def test_json_reply(self):
        out = parse_draft('{"draft": "Hi Acme", "explanation": "Short and direct"}')
        assert out.draft == "Hi Acme"
        assert out.explanation == "Short and direct"

    def test_fenced_json_reply(self):
        out = parse_draft('```json\n{"draft": "Hi", "explanation": "why"}\n```')
        assert (out.draft, out.explanation) == ("Hi", "why")

    def test_missing_explanation_gets_default(self):
        assert parse_draft('{"draft": "Hi"}').explanation == DEFAULT_EXPLANATION

    def test_plain_text_reply(self):
        out = parse_draft("  Hello there, Acme team.  ")
        assert out.draft == "Hello there, Acme team."
        assert out.explanation == DEFAULT_EXPLANATION


class TestDraftGenerator:

    def test_generates_with_configured_model(self, brief, make_settings):
        client = FakeClient('{"draft": "Hi Acme", "explanation": "e"}')
        gen = DraftGenerator(make_settings(GROQ_MODEL="test-model", GROQ_MAX_TOKENS=50), client=client)

        out = gen.generate(brief, "dm")

        assert out.draft == "Hi Acme"
        call = client.calls[0]
        assert call["model"] == "test-model"
        assert call["max_tokens"] == 50
        assert call["messages"][0]["role"] == "user"
        assert "LinkedIn DM" in call["messages"][0]["content"]

    def test_transient_errors_are_retried(self, brief, make_settings):
        client = FakeClient(
            openai.APIConnectionError(request=GROQ_REQUEST),
            openai.APIConnectionError(request=GROQ_REQUEST),
            "Plain draft",
        )
        out = DraftGenerator(make_settings(), client=client).generate(brief, "email")
        assert out.draft == "Plain draft"
        assert len(client.calls) == 3

    def test_gives_up_after_three_attempts(self, brief, make_settings):
        client = FakeClient(*[openai.APIConnectionError(request=GROQ_REQUEST)] * 3)
        with pytest.raises(DraftGenerationError):
            DraftGenerator(make_settings(), client=client).generate(brief, "email")
        assert len(client.calls) == 3

    def test_client_errors_are_not_retried(self, brief, make_settings):
        error = openai.BadRequestError(
            "bad model",
            response=httpx.Response(400, request=GROQ_REQUEST),
            body=None,
        )
        client = FakeClient(error)
        with pytest.raises(DraftGenerationError):
            DraftGenerator(make_settings(), client=client).generate(brief, "email")
        assert len(client.calls) == 1

    def test_empty_reply_is_an_error(self, brief, make_settings):
        with pytest.raises(DraftGenerationError):
            DraftGenerator(make_settings(), client=FakeClient("   ")).generate(brief, "email")


class TestLlmClient:

    def test_missing_key_is_configuration_error(self, make_settings, monkeypatch):
        monkeypatch.setattr(llm, "get_settings", lambda: make_settings(GROQ_API_KEY=None))
        llm.get_llm_client.cache_clear()
        try:
            with pytest.raises(DraftConfigurationError):
                llm.get_llm_client()
        finally:
            llm.get_llm_client.cache_clear()

    def test_client_points_at_groq(self, make_settings, monkeypatch):
        monkeypatch.setattr(llm, "get_settings", lambda: make_settings(GROQ_API_KEY=" groq-key "))
        llm.get_llm_client.cache_clear()
        try:
            client = llm.get_llm_client()
            assert client.api_key == "groq-key"
            assert str(client.base_url).startswith("https://api.groq.com/openai/v1")
        finally:
            llm.get_llm_client.cache_clear()
