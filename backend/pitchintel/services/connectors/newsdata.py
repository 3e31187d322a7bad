# backend/pitchintel/services/connectors/newsdata.py
from __future__ import annotations

import logging
import random
from typing import Any, Dict, Iterable, List, Optional

import httpx

from .base import BaseConnector, SignalResult
from .mock_data import mock_news
from ...core.config import Settings, get_settings
from ...schemas.brief import NewsItem

logger = logging.getLogger(__name__)


def dedupe_news(items: Iterable[NewsItem]) -> List[NewsItem]:
    """Drop repeated (title, url) pairs; first occurrence wins."""
    seen: set[tuple[str, str]] = set()
    unique: List[NewsItem] = []
    for item in items:
        key = (item.title, item.url)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


class NewsDataConnector(BaseConnector):
    """
    Recent press coverage for a company from NewsData.io.

    One GET against /api/1/news, no retries. Anything other than a
    well-formed `results` list falls back to mock articles.
    """

    name = "newsdata"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(settings or get_settings(), transport)
        self.api_key: Optional[str] = self.settings.NEWSDATA_API_KEY
        self.base_url: str = self.settings.NEWSDATA_BASE_URL
        self.timeout: float = self.settings.NEWSDATA_TIMEOUT_SECONDS
        self.page_size: int = self.settings.NEWSDATA_PAGE_SIZE
        self.rng = rng or random.Random(self.settings.MOCK_DATA_SEED)

    def _favicon_for(self, source_id: str) -> str | None:
        if not source_id:
            return None
        return f"{self.settings.FAVICON_BASE_URL}?domain={source_id}"

    def _normalise(self, raw: Dict[str, Any]) -> NewsItem:
        source_id = raw.get("source_id") or ""
        return NewsItem(
            title=raw.get("title") or "",
            description=raw.get("description") or "",
            url=raw.get("link") or "",
            published_at=raw.get("pubDate"),
            source=source_id,
            source_favicon=self._favicon_for(source_id),
        )

    def fallback(self, company_name: str, reason: str) -> SignalResult[List[NewsItem]]:
        logger.warning(
            "News provider unavailable; using mock articles",
            extra={"connector": self.name, "reason": reason, "company_name": company_name},
        )
        return SignalResult.fallback(mock_news(company_name, self.rng), reason)

    async def fetch(self, company_name: str) -> SignalResult[List[NewsItem]]:
        if not self.api_key:
            return self.fallback(company_name, "NEWSDATA_API_KEY not configured")

        params = {
            "apikey": self.api_key,
            "q": company_name,
            "language": "en",
            "size": self.page_size,
        }
        try:
            async with self._client(self.timeout) as client:
                resp = await client.get(self.base_url, params=params)
                resp.raise_for_status()
                payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            return self.fallback(company_name, f"{type(e).__name__}: {e}")

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            return self.fallback(company_name, "response carried no results list")

        items = dedupe_news(self._normalise(r) for r in results if isinstance(r, dict))
        logger.info(
            "Fetched %d news articles",
            len(items),
            extra={"connector": self.name, "company_name": company_name},
        )
        return SignalResult.ok(items)
