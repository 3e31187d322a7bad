from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.feedback import Feedback
from ..schemas.feedback import FeedbackIn
from .brief_store import db_error_message
from .errors import PersistenceError

logger = logging.getLogger(__name__)


def record_feedback(db: Session, payload: FeedbackIn) -> Feedback:
    """Store one like/dislike reaction. Feedback is anonymous."""
    row = Feedback(type=payload.type, page=payload.page)
    try:
        db.add(row)
        db.commit()
        db.refresh(row)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to save feedback", extra={"step": "feedback:save"})
        raise PersistenceError(db_error_message(e)) from e
    return row
