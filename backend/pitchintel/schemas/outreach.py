from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from .brief import CamelModel


class OutreachSessionIn(CamelModel):
    id: UUID | None = None  # set to update an existing session
    brief_id: UUID
    messages: list[dict[str, Any]] = Field(default_factory=list)
    session_name: str | None = None


class BriefHeadline(CamelModel):
    company_name: str
    website: str | None = None
    signal_tag: str


class OutreachSessionOut(CamelModel):
    id: UUID
    user_id: str | None = None
    brief_id: UUID
    session_name: str
    messages: list[dict[str, Any]] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    brief: BriefHeadline | None = None
