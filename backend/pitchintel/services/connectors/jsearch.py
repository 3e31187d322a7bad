# backend/pitchintel/services/connectors/jsearch.py
from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

import httpx

from .base import BaseConnector, SignalResult
from .mock_data import mock_jobs
from ...core.config import Settings, get_settings
from ...schemas.brief import JobSignal

logger = logging.getLogger(__name__)

DESCRIPTION_LIMIT = 200


def _format_salary(low: Any, high: Any) -> str | None:
    if not isinstance(low, (int, float)) or not isinstance(high, (int, float)):
        return None
    if not low or not high:
        return None
    return f"${low:,.0f} - ${high:,.0f}"


class JSearchConnector(BaseConnector):
    """
    Open job postings for a company from JSearch (RapidAPI).

    Postings feed both the hiring signals on the brief and the
    tech-stack inference, so descriptions are kept (truncated).
    """

    name = "jsearch"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(settings or get_settings(), transport)
        self.api_key: Optional[str] = self.settings.JSEARCH_API_KEY
        self.base_url: str = self.settings.JSEARCH_BASE_URL
        self.host: str = self.settings.JSEARCH_HOST
        self.timeout: float = self.settings.JSEARCH_TIMEOUT_SECONDS
        self.max_results: int = self.settings.JSEARCH_MAX_RESULTS
        self.rng = rng or random.Random(self.settings.MOCK_DATA_SEED)

    def _headers(self) -> Dict[str, str]:
        return {
            "X-RapidAPI-Key": self.api_key or "",
            "X-RapidAPI-Host": self.host,
        }

    def _normalise(self, raw: Dict[str, Any]) -> JobSignal:
        location = ", ".join(
            part for part in (raw.get("job_city"), raw.get("job_state")) if part
        )
        description = raw.get("job_description") or ""
        if description:
            description = description[:DESCRIPTION_LIMIT] + "..."
        return JobSignal(
            title=raw.get("job_title") or "",
            company=raw.get("employer_name") or "",
            location=location,
            posted_date=raw.get("job_posted_at_datetime_utc"),
            description=description,
            salary=_format_salary(raw.get("job_min_salary"), raw.get("job_max_salary")),
        )

    def fallback(self, company_name: str, reason: str) -> SignalResult[List[JobSignal]]:
        logger.warning(
            "Jobs provider unavailable; using mock postings",
            extra={"connector": self.name, "reason": reason, "company_name": company_name},
        )
        return SignalResult.fallback(mock_jobs(company_name, self.rng), reason)

    async def fetch(self, company_name: str) -> SignalResult[List[JobSignal]]:
        if not self.api_key:
            return self.fallback(company_name, "JSEARCH_API_KEY not configured")

        params = {"query": company_name, "page": 1, "num_pages": 1}
        try:
            async with self._client(self.timeout, headers=self._headers()) as client:
                resp = await client.get(self.base_url, params=params)
                resp.raise_for_status()
                payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            return self.fallback(company_name, f"{type(e).__name__}: {e}")

        postings = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(postings, list):
            return self.fallback(company_name, "response carried no data list")

        jobs = [
            self._normalise(p)
            for p in postings[: self.max_results]
            if isinstance(p, dict)
        ]
        logger.info(
            "Fetched %d job postings",
            len(jobs),
            extra={"connector": self.name, "company_name": company_name},
        )
        return SignalResult.ok(jobs)
