# backend/pitchintel/services/connectors/twinword.py
from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional, Sequence

import httpx

from .base import BaseConnector, SignalResult
from .mock_data import mock_tone, sentiment_for_emotion
from ...core.config import Settings, get_settings
from ...schemas.brief import EmotionScore, NewsItem, ToneInsights

logger = logging.getLogger(__name__)

MAX_EMOTIONS = 6
HEADLINES_FOR_TONE = 3
SENTIMENTS = {"positive", "negative", "neutral"}


def tone_text(user_intent: str, news: Sequence[NewsItem]) -> str:
    """Intent plus the first few headlines, as sent to the provider."""
    headlines = " ".join(n.title for n in news[:HEADLINES_FOR_TONE])
    return f"{user_intent} {headlines}"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _ranked_emotions(payload: Dict[str, Any]) -> List[EmotionScore]:
    """
    Twinword has shipped two shapes for `emotions_detected`: a list of
    {emotion, emotion_score} objects, and a list of names alongside an
    `emotion_scores` map. Both are folded into one ranked list.
    """
    detected = payload.get("emotions_detected") or []
    scores = payload.get("emotion_scores")
    scores = scores if isinstance(scores, dict) else {}

    ranked: List[EmotionScore] = []
    seen: set[str] = set()
    for entry in detected:
        if isinstance(entry, dict):
            name, score = entry.get("emotion"), entry.get("emotion_score")
        else:
            name, score = entry, scores.get(entry)
        if not isinstance(name, str) or not _is_number(score) or name in seen:
            continue
        seen.add(name)
        ranked.append(EmotionScore(name=name, score=float(score)))

    # Pad with the remaining scored emotions, strongest first
    rest = sorted(
        ((k, v) for k, v in scores.items() if k not in seen and _is_number(v)),
        key=lambda kv: kv[1],
        reverse=True,
    )
    ranked.extend(EmotionScore(name=k, score=float(v)) for k, v in rest)
    return ranked[:MAX_EMOTIONS]


class TwinwordToneConnector(BaseConnector):
    """
    Emotion / sentiment reading over the user's intent and recent headlines.
    """

    name = "twinword"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(settings or get_settings(), transport)
        self.api_key: Optional[str] = self.settings.TWINWORD_API_KEY
        self.url: str = self.settings.TWINWORD_URL
        self.host: str = self.settings.TWINWORD_HOST
        self.timeout: float = self.settings.TWINWORD_TIMEOUT_SECONDS
        self.rng = rng or random.Random(self.settings.MOCK_DATA_SEED)

    def _headers(self) -> Dict[str, str]:
        return {
            "X-RapidAPI-Key": self.api_key or "",
            "X-RapidAPI-Host": self.host,
        }

    def fallback(self, reason: str) -> SignalResult[ToneInsights]:
        logger.warning(
            "Sentiment provider unavailable; using mock tone",
            extra={"connector": self.name, "reason": reason},
        )
        return SignalResult.fallback(mock_tone(self.rng), reason)

    def _parse(self, payload: Dict[str, Any]) -> ToneInsights:
        emotions = _ranked_emotions(payload)
        top = emotions[0] if emotions else None
        emotion = top.name if top else None

        sentiment = payload.get("sentiment")
        if isinstance(sentiment, str) and sentiment.lower() in SENTIMENTS:
            sentiment = sentiment.lower()
        else:
            sentiment = sentiment_for_emotion(emotion) if emotion else None

        mood = payload.get("mood")
        if not isinstance(mood, str) or not mood:
            mood = sentiment

        return ToneInsights(
            emotion=emotion,
            confidence=top.score if top else None,
            mood=mood,
            sentiment=sentiment,
            emotions=emotions,
        )

    async def fetch(self, user_intent: str, news: Sequence[NewsItem] = ()) -> SignalResult[ToneInsights]:
        if not self.api_key:
            return self.fallback("TWINWORD_API_KEY not configured")

        try:
            async with self._client(self.timeout, headers=self._headers()) as client:
                resp = await client.post(self.url, data={"text": tone_text(user_intent, news)})
                resp.raise_for_status()
                payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            return self.fallback(f"{type(e).__name__}: {e}")

        if not isinstance(payload, dict) or not isinstance(payload.get("emotions_detected"), list):
            return self.fallback("response carried no emotions_detected list")

        return SignalResult.ok(self._parse(payload))
