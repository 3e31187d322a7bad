"""
Shared fixtures: settings without provider keys, an in-memory database,
and an httpx.MockTransport that plays the three signal providers.
"""
import json
from typing import Any, Callable

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pitchintel.core.config import Settings
from pitchintel.core.db import Base
from pitchintel.models.brief import Brief  # noqa: F401
from pitchintel.models.outreach_session import OutreachSession  # noqa: F401
from pitchintel.models.feedback import Feedback  # noqa: F401

NEWS_HOST = "newsdata.io"
JOBS_HOST = "jsearch.p.rapidapi.com"
TONE_HOST = "twinword-emotion-analysis-v1.p.rapidapi.com"

ALL_KEYS = {
    "NEWSDATA_API_KEY": "news-key",
    "JSEARCH_API_KEY": "jobs-key",
    "TWINWORD_API_KEY": "tone-key",
}


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**overrides: Any) -> Settings:
        values = {
            "DATABASE_URL": "sqlite://",
            "NEWSDATA_API_KEY": None,
            "JSEARCH_API_KEY": None,
            "TWINWORD_API_KEY": None,
            "GROQ_API_KEY": None,
            "MOCK_DATA_SEED": 7,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def keyed_settings(make_settings) -> Settings:
    return make_settings(**ALL_KEYS)


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


class ProviderStub:
    """
    Routes requests by host to canned answers.

    Each answer is a dict (served as 200 JSON), an int (bare status code),
    or an exception instance (raised as a transport failure).
    """

    def __init__(self, news: Any = None, jobs: Any = None, tone: Any = None) -> None:
        self.answers = {NEWS_HOST: news, JOBS_HOST: jobs, TONE_HOST: tone}
        self.requests: list[httpx.Request] = []

    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        answer = self.answers.get(request.url.host)
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, int):
            return httpx.Response(answer, request=request)
        if answer is None:
            return httpx.Response(404, request=request)
        return httpx.Response(
            200,
            content=json.dumps(answer).encode(),
            headers={"content-type": "application/json"},
            request=request,
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def provider_stub() -> Callable[..., ProviderStub]:
    return ProviderStub


def job_posting(title: str, description: str = "", city: str = "Austin", state: str = "TX", **extra: Any) -> dict:
    posting = {
        "job_title": title,
        "employer_name": "Acme",
        "job_city": city,
        "job_state": state,
        "job_posted_at_datetime_utc": "2026-10-01T00:00:00.000Z",
        "job_description": description,
    }
    posting.update(extra)
    return posting


def news_article(title: str, link: str, source_id: str = "reuters", **extra: Any) -> dict:
    article = {
        "title": title,
        "description": f"About {title}",
        "link": link,
        "pubDate": "2026-10-10 08:00:00",
        "source_id": source_id,
    }
    article.update(extra)
    return article


@pytest.fixture
def make_job() -> Callable[..., dict]:
    return job_posting


@pytest.fixture
def make_article() -> Callable[..., dict]:
    return news_article


@pytest.fixture
def tone_payload() -> dict:
    return {
        "emotions_detected": ["joy", "anticipation"],
        "emotion_scores": {
            "joy": 0.42,
            "anticipation": 0.31,
            "surprise": 0.12,
            "fear": 0.05,
            "sadness": 0.02,
            "anger": 0.01,
            "disgust": 0.0,
        },
        "sentiment": "positive",
        "mood": "optimistic",
    }


@pytest.fixture
def scenario_a_jobs(make_job) -> dict:
    """Six postings: React in three titles, Python in two."""
    return {
        "data": [
            make_job("React Developer"),
            make_job("Senior React Engineer", city="Denver", state="CO"),
            make_job("React Native Lead", city="Remote", state=None),
            make_job("Python Engineer"),
            make_job("Python Data Analyst", city="Boston", state="MA"),
            make_job("Office Manager"),
        ]
    }
