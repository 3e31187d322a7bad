"""
Outreach draft generation (email, LinkedIn DM, follow-up, rebuttal).

Prompts are built from a stored brief and sent to Groq's
OpenAI-compatible chat endpoint. The model is asked for JSON
({"draft", "explanation"}); anything else is returned as a raw draft.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, Optional

import openai
from openai import OpenAI
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..core.config import Settings, get_settings
from ..models.brief import Brief
from ..schemas.brief import DraftOut
from .errors import DraftGenerationError
from .llm import get_llm_client, limit_llm_concurrency

logger = logging.getLogger(__name__)

DEFAULT_EXPLANATION = "AI-generated draft based on your brief insights"
JSON_INSTRUCTION = 'Format the response as JSON with "draft" and "explanation" fields.'

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)

RETRYABLE_ERRORS = (
    openai.APIConnectionError,
    openai.APITimeoutError,
    openai.RateLimitError,
)


def _email_prompt(brief: Brief, last_outcome: str | None) -> str:
    return f"""Generate a professional B2B sales email draft based on this brief:

Company: {brief.company_name}
Website: {brief.website or 'N/A'}
User Intent: {brief.user_intent}
Summary: {brief.summary}
Pitch Angle: {brief.pitch_angle}
What NOT to pitch: {brief.what_not_to_pitch}
Signal Tag: {brief.signal_tag}

Create a personalized email that:
1. Uses the signal tag as conversation starter
2. Follows the pitch angle
3. Avoids what NOT to pitch
4. Includes a clear call-to-action
5. Sounds natural and human

{JSON_INSTRUCTION}"""


def _dm_prompt(brief: Brief, last_outcome: str | None) -> str:
    return f"""Generate a LinkedIn DM based on this brief:

Company: {brief.company_name}
Website: {brief.website or 'N/A'}
User Intent: {brief.user_intent}
Summary: {brief.summary}
Pitch Angle: {brief.pitch_angle}
Signal Tag: {brief.signal_tag}

Create a short, engaging LinkedIn message that:
1. References the signal tag naturally
2. Follows the pitch angle
3. Feels personal, not salesy
4. Has a soft ask or question
5. Is under 100 words

{JSON_INSTRUCTION}"""


def _followup_prompt(brief: Brief, last_outcome: str | None) -> str:
    return f"""Generate a follow-up message based on this context:

Company: {brief.company_name}
Original Pitch Angle: {brief.pitch_angle}
Last Outcome: {last_outcome or 'No response'}

Create a follow-up that:
1. Acknowledges the previous message
2. Adds new value or angle
3. Handles common objections
4. Has a different call-to-action
5. Maintains professionalism

{JSON_INSTRUCTION}"""


def _rebuttal_prompt(brief: Brief, last_outcome: str | None) -> str:
    return f"""Generate a rebuttal/objection handler based on this context:

Company: {brief.company_name}
Original Pitch Angle: {brief.pitch_angle}
Objection/Outcome: {last_outcome or 'Generic objection'}

Create a response that:
1. Acknowledges their concern
2. Provides social proof or case study
3. Reframes the value proposition
4. Offers a low-commitment next step
5. Remains respectful and helpful

{JSON_INSTRUCTION}"""


PROMPT_BUILDERS: Dict[str, Callable[[Brief, Optional[str]], str]] = {
    "email": _email_prompt,
    "dm": _dm_prompt,
    "followup": _followup_prompt,
    "rebuttal": _rebuttal_prompt,
}


def build_prompt(brief: Brief, draft_type: str, last_outcome: str | None = None) -> str:
    try:
        builder = PROMPT_BUILDERS[draft_type]
    except KeyError:
        raise ValueError(f"Unknown draft type: {draft_type}") from None
    return builder(brief, last_outcome)


def parse_draft(content: str) -> DraftOut:
    """
    Accept `{"draft": ..., "explanation": ...}` (optionally fenced in
    ```json), otherwise treat the whole reply as the draft.
    """
    text = content.strip()
    match = _FENCE_RE.match(text)
    candidate = match.group(1) if match else text

    try:
        data: Any = json.loads(candidate)
    except ValueError:
        data = None

    if isinstance(data, dict) and isinstance(data.get("draft"), str):
        explanation = data.get("explanation")
        return DraftOut(
            draft=data["draft"],
            explanation=explanation if isinstance(explanation, str) and explanation else DEFAULT_EXPLANATION,
        )
    return DraftOut(draft=text, explanation=DEFAULT_EXPLANATION)


class DraftGenerator:
    def __init__(self, settings: Optional[Settings] = None, client: Optional[OpenAI] = None) -> None:
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = get_llm_client()
        return self._client

    @retry(
        wait=wait_exponential(multiplier=1, min=1, max=10),
        stop=stop_after_attempt(3),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        reraise=True,
    )
    def _complete(self, prompt: str) -> str:
        with limit_llm_concurrency():
            resp = self.client.chat.completions.create(
                model=self.settings.GROQ_MODEL,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.settings.GROQ_TEMPERATURE,
                max_tokens=self.settings.GROQ_MAX_TOKENS,
            )
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""

    def generate(self, brief: Brief, draft_type: str, last_outcome: str | None = None) -> DraftOut:
        prompt = build_prompt(brief, draft_type, last_outcome)

        try:
            content = self._complete(prompt)
        except openai.OpenAIError as e:
            logger.exception(
                "Draft generation failed: %s",
                e,
                extra={"brief_id": str(brief.id), "step": f"draft:{draft_type}"},
            )
            raise DraftGenerationError(str(e)) from e

        if not content.strip():
            raise DraftGenerationError("Draft provider returned an empty response")

        logger.info(
            "Draft generated",
            extra={"brief_id": str(brief.id), "step": f"draft:{draft_type}"},
        )
        return parse_draft(content)
