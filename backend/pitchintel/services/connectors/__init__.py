from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging
import random

import httpx

from .base import BaseConnector, SignalResult
from .newsdata import NewsDataConnector
from .jsearch import JSearchConnector
from .twinword import TwinwordToneConnector
from ...core.config import Settings, get_settings
from ...schemas.brief import JobSignal, NewsItem, ToneInsights

logger = logging.getLogger(__name__)


@dataclass
class CollectedSignals:
    news: List[NewsItem]
    jobs: List[JobSignal]
    tone: ToneInsights
    # connector name -> reason, for every provider that fell back to mock data
    degraded: Dict[str, str] = field(default_factory=dict)


class SignalCollector:
    """
    Runs the external signal connectors for one brief.

    - News and jobs are fetched concurrently; tone waits on news because
      headlines are part of the analysed text.
    - Connectors absorb provider failures themselves. Anything they let
      slip is caught here and replaced by the connector's mock data, so
      `collect` never raises.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> None:
        settings = settings or get_settings()
        rng = rng or random.Random(settings.MOCK_DATA_SEED)
        self.news = NewsDataConnector(settings, transport=transport, rng=rng)
        self.jobs = JSearchConnector(settings, transport=transport, rng=rng)
        self.tone = TwinwordToneConnector(settings, transport=transport, rng=rng)

    async def _guarded(self, conn: BaseConnector, call, fallback) -> SignalResult:
        try:
            return await call
        except Exception as e:
            logger.exception(
                "Connector '%s' raised unexpectedly: %s",
                conn.name,
                e,
                extra={"connector": conn.name},
            )
            return fallback(f"{type(e).__name__}: {e}")

    async def collect_async(self, company_name: str, user_intent: str) -> CollectedSignals:
        news_res, jobs_res = await asyncio.gather(
            self._guarded(
                self.news,
                self.news.fetch(company_name),
                lambda reason: self.news.fallback(company_name, reason),
            ),
            self._guarded(
                self.jobs,
                self.jobs.fetch(company_name),
                lambda reason: self.jobs.fallback(company_name, reason),
            ),
        )
        tone_res = await self._guarded(
            self.tone,
            self.tone.fetch(user_intent, news_res.data),
            self.tone.fallback,
        )

        degraded = {
            conn.name: res.reason or "unknown"
            for conn, res in ((self.news, news_res), (self.jobs, jobs_res), (self.tone, tone_res))
            if res.degraded
        }
        return CollectedSignals(
            news=list(news_res.data),
            jobs=list(jobs_res.data),
            tone=tone_res.data,
            degraded=degraded,
        )

    def collect(self, company_name: str, user_intent: str) -> CollectedSignals:
        """
        Blocking entrypoint for sync callers (FastAPI threadpool routes).

        Must not be called from a thread with a running event loop; async
        callers await `collect_async` instead.
        """
        return asyncio.run(self.collect_async(company_name, user_intent))


def get_signal_collector(settings: Optional[Settings] = None) -> SignalCollector:
    return SignalCollector(settings)
