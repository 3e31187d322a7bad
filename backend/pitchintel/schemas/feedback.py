from datetime import datetime
from typing import Literal
from uuid import UUID

from .brief import CamelModel

FeedbackType = Literal["like", "dislike"]


class FeedbackIn(CamelModel):
    type: FeedbackType
    page: str = "landing"


class FeedbackOut(CamelModel):
    id: UUID
    type: FeedbackType
    page: str | None = None
    created_at: datetime
