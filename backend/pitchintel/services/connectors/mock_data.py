"""
Stand-in records used when a signal provider is unavailable.

Every generator takes a `random.Random` so tests (or MOCK_DATA_SEED) can
make the fallback path reproducible. Shapes match what the real
connectors return so the rest of the pipeline cannot tell the difference.
"""
from __future__ import annotations

import random
import re
from datetime import datetime, timedelta

from ...schemas.brief import EmotionScore, JobSignal, NewsItem, ToneInsights

MOCK_ROLES = [
    "Senior Software Engineer",
    "Product Manager",
    "Data Scientist",
    "DevOps Engineer",
    "UX Designer",
]

MOCK_LOCATIONS = [
    "San Francisco, CA",
    "New York, NY",
    "Remote",
    "Seattle, WA",
    "Austin, TX",
]

MOCK_EMOTIONS = ["joy", "trust", "anticipation", "surprise", "fear", "sadness"]

POSITIVE_EMOTIONS = {"joy", "trust"}
NEGATIVE_EMOTIONS = {"fear", "sadness"}


def sentiment_for_emotion(emotion: str | None) -> str:
    if emotion in POSITIVE_EMOTIONS:
        return "positive"
    if emotion in NEGATIVE_EMOTIONS:
        return "negative"
    return "neutral"


def _slug(company_name: str) -> str:
    return re.sub(r"\s+", "-", company_name.lower())


def _days_ago(rng: random.Random, max_days: int, now: datetime) -> str:
    return (now - timedelta(days=rng.random() * max_days)).isoformat() + "Z"


def mock_news(company_name: str, rng: random.Random, now: datetime | None = None) -> list[NewsItem]:
    now = now or datetime.utcnow()
    slug = _slug(company_name)
    return [
        NewsItem(
            title=f"{company_name} announces strategic expansion plans",
            description=(
                f"{company_name} has unveiled comprehensive growth initiatives focusing "
                "on market expansion and technology advancement."
            ),
            url=f"https://example.com/news/{slug}",
            published_at=_days_ago(rng, 7, now),
            source="TechCrunch",
            source_favicon="https://techcrunch.com/favicon.ico",
        ),
        NewsItem(
            title=f"{company_name} secures significant funding round",
            description=(
                "The company raised substantial investment to accelerate product "
                "development and team expansion."
            ),
            url=f"https://example.com/funding/{slug}",
            published_at=_days_ago(rng, 14, now),
            source="VentureBeat",
            source_favicon="https://venturebeat.com/favicon.ico",
        ),
    ]


def mock_jobs(company_name: str, rng: random.Random, now: datetime | None = None) -> list[JobSignal]:
    now = now or datetime.utcnow()
    jobs: list[JobSignal] = []
    for role in MOCK_ROLES:
        low = rng.randint(100, 199)
        high = rng.randint(150, 249)
        jobs.append(
            JobSignal(
                title=role,
                company=company_name,
                location=rng.choice(MOCK_LOCATIONS),
                posted_date=_days_ago(rng, 30, now),
                description=(
                    f"Join our growing team as a {role}. We're looking for talented "
                    "individuals to help build scalable solutions."
                ),
                salary=f"${low}k - ${high}k",
            )
        )
    return jobs


def mock_tone(rng: random.Random) -> ToneInsights:
    primary = rng.choice(MOCK_EMOTIONS)
    sentiment = sentiment_for_emotion(primary)
    emotions = [
        EmotionScore(
            name=emotion,
            score=rng.random() * 0.3 + 0.7 if emotion == primary else rng.random() * 0.4,
        )
        for emotion in MOCK_EMOTIONS
    ]
    return ToneInsights(
        emotion=primary,
        confidence=rng.random() * 0.4 + 0.6,
        mood=sentiment,
        sentiment=sentiment,
        emotions=emotions,
    )
