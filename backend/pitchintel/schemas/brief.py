# backend/pitchintel/schemas/brief.py
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_COMPANY_NAME_LEN = 200
MAX_INTENT_LEN = 4000
MAX_WEBSITE_LEN = 2048

Confidence = Literal["High", "Medium", "Low"]
Sentiment = Literal["positive", "negative", "neutral"]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------

class NewsItem(CamelModel):
    title: str
    description: str = ""
    url: str = ""
    published_at: str | None = None
    source: str = ""
    source_favicon: str | None = None


class JobSignal(CamelModel):
    title: str
    company: str = ""
    location: str = ""
    posted_date: str | None = None
    description: str = ""
    salary: str | None = None


class TechStackItem(CamelModel):
    name: str
    confidence: Confidence
    source: str = "Job Analysis"
    category: str = "Other"
    first_detected: str | None = None


class EmotionScore(CamelModel):
    name: str
    score: float


class ToneInsights(CamelModel):
    emotion: str | None = None
    confidence: float | None = None
    mood: str | None = None
    sentiment: Sentiment | None = None
    emotions: list[EmotionScore] = Field(default_factory=list)


class IntelligenceSources(CamelModel):
    news: int = 0
    jobs: int = 0
    technologies: int = 0
    stock_data: bool = False
    tone_analysis: bool = False
    built_with_used: bool = False


# ---------------------------------------------------------------------------
# Requests / responses
# ---------------------------------------------------------------------------

class UserCompany(CamelModel):
    """Context about the company requesting the brief."""

    name: str = ""
    industry: str = ""
    product: str = ""
    value_proposition: str = ""
    website: str | None = None
    goals: str = ""


class CreateBriefRequest(CamelModel):
    # Required fields default to "" so emptiness is reported by the
    # orchestrator as a 400 rather than a schema error.
    company_name: str = ""
    website: str | None = None
    user_intent: str = ""
    user_id: str | None = None
    user_company: UserCompany | None = None

    @field_validator("company_name", "user_intent", mode="before")
    @classmethod
    def _none_to_blank(cls, v):
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("website", "user_id", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if v is None:
            return None
        if isinstance(v, str):
            stripped = v.strip()
            return stripped or None
        return v


class BriefOut(CamelModel):
    id: UUID
    user_id: str | None = None
    created_at: datetime

    company_name: str
    website: str | None = None
    user_intent: str
    user_company: UserCompany | None = None

    summary: str
    pitch_angle: str
    subject_line: str
    what_not_to_pitch: str
    signal_tag: str
    hiring_trends: str | None = None
    news_trends: str | None = None
    company_logo: str | None = None
    outreach_copy: str | None = None

    news: list[NewsItem] = Field(default_factory=list)
    job_signals: list[JobSignal] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list)
    tech_stack_data: list[TechStackItem] = Field(default_factory=list)
    tone_insights: ToneInsights | None = None
    intelligence_sources: IntelligenceSources | None = None


class BriefUpdate(CamelModel):
    """Fields an improve pass may overwrite. Inputs and signals stay fixed."""

    summary: str | None = None
    pitch_angle: str | None = None
    subject_line: str | None = None
    what_not_to_pitch: str | None = None
    signal_tag: str | None = None
    hiring_trends: str | None = None
    news_trends: str | None = None
    outreach_copy: str | None = None

    # May be omitted, but never cleared: these columns are NOT NULL.
    @field_validator("summary", "pitch_angle", "subject_line", "what_not_to_pitch", "signal_tag")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v


DraftType = Literal["email", "dm", "followup", "rebuttal"]


class DraftRequest(CamelModel):
    draft_type: DraftType
    last_outcome: str | None = None


class DraftOut(CamelModel):
    draft: str
    explanation: str
