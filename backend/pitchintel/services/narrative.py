"""
Narrative composer: turns collected signals into the brief's outreach copy.

Everything here is a pure function of its inputs. The copy is assembled
from fixed sentence templates; no model is called.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from ..schemas.brief import JobSignal, NewsItem, TechStackItem, ToneInsights, UserCompany

POSITIVE_NEWS_TERMS = ("growth", "funding", "expansion", "partnership")
NEGATIVE_NEWS_TERMS = ("layoffs", "decline", "loss")
SENTIMENTS = ("positive", "negative", "neutral")

ACTIVE_HIRING_THRESHOLD = 5
STACK_MENTIONS = 3

SCALING_TAG = "Scaling Operations"
GROWTH_TAG = "Strategic Growth"

SUMMARY_CLOSING = (
    "The timing appears optimal for strategic engagement based on their "
    "current trajectory and market positioning."
)


@dataclass(frozen=True)
class Narrative:
    summary: str
    pitch_angle: str
    subject_line: str
    what_not_to_pitch: str
    signal_tag: str


@dataclass(frozen=True)
class SignalReading:
    """Flags and counts the templates interpolate."""

    news_count: int
    job_count: int
    has_positive_news: bool
    has_negative_news: bool
    is_actively_hiring: bool
    sentiment: str
    emotion: str
    technologies: tuple[str, ...]


@dataclass(frozen=True)
class RequesterPhrases:
    """Sentence fragments about the requesting company, blank when unknown."""

    opening: str
    product_fit: str
    value_alignment: str
    replacement_warning: str
    partner_name: str


def _titles_mention(news: Iterable[NewsItem], terms: Sequence[str]) -> bool:
    return any(term in item.title.lower() for item in news for term in terms)


def normalise_sentiment(value: str | None) -> str:
    value = (value or "").lower()
    return value if value in SENTIMENTS else "neutral"


def read_signals(
    news: Sequence[NewsItem],
    jobs: Sequence[JobSignal],
    tech: Sequence[TechStackItem],
    tone: ToneInsights | None,
) -> SignalReading:
    tone = tone or ToneInsights()
    return SignalReading(
        news_count=len(news),
        job_count=len(jobs),
        has_positive_news=_titles_mention(news, POSITIVE_NEWS_TERMS),
        has_negative_news=_titles_mention(news, NEGATIVE_NEWS_TERMS),
        is_actively_hiring=len(jobs) > ACTIVE_HIRING_THRESHOLD,
        sentiment=normalise_sentiment(tone.sentiment),
        emotion=tone.emotion or "neutral",
        technologies=tuple(t.name for t in tech),
    )


def requester_phrases(user_company: UserCompany | None, signals: SignalReading) -> RequesterPhrases:
    company = user_company or UserCompany()

    if company.industry and company.product:
        opening = f"As a {company.industry} company offering {company.product}, "
    else:
        opening = "Given your strategic objectives, "

    product_fit = ""
    replacement_warning = ""
    if company.product:
        product_fit = (
            f"Your {company.product} directly addresses their expansion needs, particularly "
            f"given their {signals.job_count} active hiring positions. "
        )
        replacement_warning = (
            f"Don't position your {company.product} as a replacement for their existing systems "
            f"without acknowledging their current {signals.sentiment} market approach. "
        )

    value_alignment = ""
    if company.value_proposition:
        value_alignment = (
            f"Your unique value proposition of {company.value_proposition} aligns well with "
            f"their {signals.sentiment} market position. "
        )

    return RequesterPhrases(
        opening=opening,
        product_fit=product_fit,
        value_alignment=value_alignment,
        replacement_warning=replacement_warning,
        partner_name=company.name,
    )


def signal_tag_for(is_actively_hiring: bool, sentiment: str) -> str:
    base = SCALING_TAG if is_actively_hiring else GROWTH_TAG
    return f"{base} - {normalise_sentiment(sentiment).capitalize()} Market Position"


def subject_line_for(company_name: str, signals: SignalReading, phrases: RequesterPhrases) -> str:
    if phrases.partner_name:
        timing = " - Perfect Timing" if signals.has_positive_news else ""
        return f"Strategic Partnership: {phrases.partner_name} + {company_name}{timing}"
    timing = " - Capitalizing on Growth" if signals.has_positive_news else ""
    return f"Strategic Partnership Opportunity for {company_name}{timing}"


def _overview_sentence(company_name: str, s: SignalReading, p: RequesterPhrases) -> str:
    if s.has_positive_news:
        momentum = "positive momentum"
    elif s.has_negative_news:
        momentum = "market challenges"
    else:
        momentum = "stable operations"
    growth = "aggressive expansion" if s.is_actively_hiring else "selective growth"
    return (
        f"{p.opening}{company_name} presents a compelling strategic opportunity with "
        f"{s.sentiment} market sentiment and {s.emotion} emotional positioning. "
        f"Their {s.news_count} recent news mentions indicate {momentum}, while "
        f"{s.job_count} active job postings suggest {growth}."
    )


def _timing_sentence(company_name: str, s: SignalReading, p: RequesterPhrases) -> str:
    objectives = "scaling initiatives" if s.is_actively_hiring else "operational objectives"
    return (
        f"{p.opening}the strategic timing for engaging {company_name} is exceptionally "
        f"favorable. Their {s.sentiment} sentiment combined with {s.emotion} emotional "
        f"state creates receptiveness to partnerships that support their {objectives}."
    )


def _anti_pitch_sentence(company_name: str, s: SignalReading, p: RequesterPhrases) -> str:
    if s.is_actively_hiring:
        phase = "Never pitch cost-reduction or efficiency-only solutions during their expansion phase. "
    else:
        phase = "Avoid aggressive scaling pitches if they're in maintenance mode. "
    sensitivity = (
        "Be sensitive to recent market challenges and avoid highlighting competitive threats. "
        if s.has_negative_news
        else ""
    )
    return (
        f"{p.opening}avoid approaches that contradict {company_name}'s current "
        f"{s.sentiment} sentiment and {s.emotion} emotional state. "
        f"{phase}{sensitivity}{p.replacement_warning}"
        f"Avoid generic pitches that ignore their specific {s.news_count} recent developments, "
        f"{s.job_count} hiring signals, and {s.emotion} emotional positioning. "
        "Never underestimate their strategic sophistication or current market intelligence."
    )


def _stack_sentence(s: SignalReading) -> str:
    if not s.technologies:
        return ""
    names = ", ".join(s.technologies[:STACK_MENTIONS])
    return f"Their job postings point to a stack built on {names}. "


def unique_sentences(candidates: Iterable[str]) -> List[str]:
    """Order-preserving de-duplication of generated sentences."""
    return list(dict.fromkeys(c for c in candidates if c))


def compose_narrative(
    company_name: str,
    user_intent: str,
    news: Sequence[NewsItem],
    jobs: Sequence[JobSignal],
    tech: Sequence[TechStackItem],
    tone: ToneInsights | None,
    user_company: UserCompany | None = None,
) -> Narrative:
    signals = read_signals(news, jobs, tech, tone)
    phrases = requester_phrases(user_company, signals)

    overview = _overview_sentence(company_name, signals, phrases)
    timing = _timing_sentence(company_name, signals, phrases)
    anti_pitch = _anti_pitch_sentence(company_name, signals, phrases)
    signal_tag = signal_tag_for(signals.is_actively_hiring, signals.sentiment)

    summary = " ".join(unique_sentences([overview, timing, anti_pitch, signal_tag]) + [SUMMARY_CLOSING])

    pitch_angle = (
        f"{timing} {phrases.product_fit}{phrases.value_alignment}{_stack_sentence(signals)}"
        "The convergence of their market position, emotional readiness, and operational "
        f"scaling creates an ideal window for {user_intent}. Their {signals.news_count} recent "
        "news mentions and hiring patterns suggest they're actively seeking solutions that "
        "align with your strategic offering."
    )

    return Narrative(
        summary=summary,
        pitch_angle=pitch_angle,
        subject_line=subject_line_for(company_name, signals, phrases),
        what_not_to_pitch=anti_pitch,
        signal_tag=signal_tag,
    )
