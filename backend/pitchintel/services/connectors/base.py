from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx

from ...core.config import Settings

T = TypeVar("T")


@dataclass(frozen=True)
class SignalResult(Generic[T]):
    """
    Outcome of one provider call.

    `degraded` is True when the provider could not be used and `data`
    holds mock records instead. Callers treat both cases the same way;
    only logging distinguishes them.
    """

    data: T
    degraded: bool = False
    reason: str | None = None

    @classmethod
    def ok(cls, data: T) -> "SignalResult[T]":
        return cls(data=data)

    @classmethod
    def fallback(cls, data: T, reason: str) -> "SignalResult[T]":
        return cls(data=data, degraded=True, reason=reason)


class BaseConnector(ABC):
    name: str

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        # Tests inject an httpx.MockTransport here
        self._transport = transport

    def _client(self, timeout: float, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self._transport, **kwargs)

    @abstractmethod
    async def fetch(self, **kwargs) -> SignalResult:
        ...
