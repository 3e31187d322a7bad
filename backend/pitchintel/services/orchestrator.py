from __future__ import annotations

from typing import Optional, Sequence
from urllib.parse import urlsplit
from uuid import uuid4
import logging

from ..core.config import Settings, get_settings
from ..models.brief import Brief
from ..schemas.brief import (
    CreateBriefRequest,
    IntelligenceSources,
    JobSignal,
    NewsItem,
    TechStackItem,
    ToneInsights,
    MAX_COMPANY_NAME_LEN,
    MAX_INTENT_LEN,
    MAX_WEBSITE_LEN,
)
from .brief_store import BriefRepository
from .connectors import SignalCollector, get_signal_collector
from .errors import BriefValidationError
from .narrative import compose_narrative, normalise_sentiment
from .tech_stack import infer_tech_stack

logger = logging.getLogger(__name__)


def validate_request(request: CreateBriefRequest) -> None:
    """Raise BriefValidationError for requests the pipeline must not start on."""
    if not request.company_name.strip() or not request.user_intent.strip():
        raise BriefValidationError("Company name and user intent are required")
    if len(request.company_name) > MAX_COMPANY_NAME_LEN:
        raise BriefValidationError(
            f"Company name must be at most {MAX_COMPANY_NAME_LEN} characters"
        )
    if len(request.user_intent) > MAX_INTENT_LEN:
        raise BriefValidationError(
            f"User intent is too long; maximum length is {MAX_INTENT_LEN} characters"
        )
    if request.website and len(request.website) > MAX_WEBSITE_LEN:
        raise BriefValidationError("Website URL is too long")


def company_domain(website: str | None) -> str | None:
    """Hostname of `website` without a leading www., or None if it is not a URL."""
    if not website:
        return None
    try:
        host = urlsplit(website).hostname
    except ValueError:
        return None
    if not host:
        return None
    return host[4:] if host.startswith("www.") else host


def company_logo_for(website: str | None, logo_base_url: str) -> str | None:
    domain = company_domain(website)
    if not domain:
        return None
    return f"{logo_base_url.rstrip('/')}/{domain}"


def hiring_trends_for(jobs: Sequence[JobSignal]) -> str:
    locations = {job.location.split(",")[0] for job in jobs}
    return f"Active hiring: {len(jobs)} roles across {len(locations)} locations"


def news_trends_for(news: Sequence[NewsItem], tone: ToneInsights) -> str:
    return f"{len(news)} recent articles - {normalise_sentiment(tone.sentiment)} sentiment"


def intelligence_sources_for(
    news: Sequence[NewsItem],
    jobs: Sequence[JobSignal],
    tech: Sequence[TechStackItem],
    tone: ToneInsights,
) -> IntelligenceSources:
    return IntelligenceSources(
        news=len(news),
        jobs=len(jobs),
        technologies=len(tech),
        stock_data=False,
        tone_analysis=bool(tone.emotion),
        built_with_used=False,
    )


class BriefOrchestrator:
    """
    Builds and stores one brief per call:

        validate -> news + jobs -> tone, tech stack -> narrative -> insert

    Provider failures never reach the caller (connectors fall back to mock
    data). Only validation and the final insert can fail.
    """

    def __init__(
        self,
        repository: BriefRepository,
        collector: Optional[SignalCollector] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.repository = repository
        self.collector = collector or get_signal_collector(self.settings)

    def create_brief(self, request: CreateBriefRequest, user_id: Optional[str] = None) -> Brief:
        validate_request(request)

        request_id = str(uuid4())
        company_name = request.company_name.strip()
        user_intent = request.user_intent.strip()
        owner_id = user_id or request.user_id

        logger.info(
            "Creating brief",
            extra={"request_id": request_id, "company_name": company_name, "step": "start"},
        )

        company_logo = company_logo_for(request.website, self.settings.LOGO_BASE_URL)

        signals = self.collector.collect(company_name, user_intent)
        if signals.degraded:
            logger.warning(
                "Brief built with mock data for %s",
                ", ".join(sorted(signals.degraded)),
                extra={"request_id": request_id, "step": "signals_degraded"},
            )

        tech = infer_tech_stack(signals.jobs)
        narrative = compose_narrative(
            company_name,
            user_intent,
            signals.news,
            signals.jobs,
            tech,
            signals.tone,
            request.user_company,
        )

        values = {
            "user_id": owner_id,
            "company_name": company_name,
            "website": request.website,
            "user_intent": user_intent,
            "user_company": request.user_company.model_dump() if request.user_company else None,
            "summary": narrative.summary,
            "pitch_angle": narrative.pitch_angle,
            "subject_line": narrative.subject_line,
            "what_not_to_pitch": narrative.what_not_to_pitch,
            "signal_tag": narrative.signal_tag,
            "hiring_trends": hiring_trends_for(signals.jobs),
            "news_trends": news_trends_for(signals.news, signals.tone),
            "company_logo": company_logo,
            "news": [n.model_dump() for n in signals.news],
            "job_signals": [j.model_dump() for j in signals.jobs],
            "tech_stack": [t.name for t in tech],
            "tech_stack_data": [t.model_dump() for t in tech],
            "tone_insights": signals.tone.model_dump(),
            "intelligence_sources": intelligence_sources_for(
                signals.news, signals.jobs, tech, signals.tone
            ).model_dump(),
        }

        brief = self.repository.insert(values)

        logger.info(
            "Brief created",
            extra={
                "request_id": request_id,
                "brief_id": str(brief.id),
                "step": "completed",
            },
        )
        return brief
