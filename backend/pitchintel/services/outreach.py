from __future__ import annotations

from datetime import datetime
from typing import List
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.outreach_session import OutreachSession
from ..schemas.outreach import OutreachSessionIn
from .brief_store import BriefRepository, db_error_message
from .errors import BriefNotFound, PersistenceError

logger = logging.getLogger(__name__)


def default_session_name(now: datetime | None = None) -> str:
    now = now or datetime.utcnow()
    return f"Session {now.month}/{now.day}/{now.year}"


def save_session(db: Session, payload: OutreachSessionIn, user_id: str) -> OutreachSession:
    """
    Insert a session, or update it in place when `payload.id` names a
    session this user already owns.
    """
    if BriefRepository(db).get_by_id(payload.brief_id, owner_id=user_id) is None:
        raise BriefNotFound(str(payload.brief_id))

    now = datetime.utcnow()
    session: OutreachSession | None = None
    if payload.id is not None:
        session = (
            db.query(OutreachSession)
            .filter(OutreachSession.id == payload.id, OutreachSession.user_id == user_id)
            .first()
        )

    if session is None:
        session = OutreachSession(user_id=user_id, created_at=now)
        db.add(session)

    session.brief_id = payload.brief_id
    session.messages = payload.messages
    session.session_name = payload.session_name or session.session_name or default_session_name(now)
    session.updated_at = now

    try:
        db.commit()
        db.refresh(session)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to save outreach session", extra={"step": "outreach:save"})
        raise PersistenceError(db_error_message(e)) from e
    return session


def list_sessions(db: Session, user_id: str) -> List[OutreachSession]:
    try:
        return (
            db.query(OutreachSession)
            .filter(OutreachSession.user_id == user_id)
            .order_by(OutreachSession.updated_at.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Failed to list outreach sessions", extra={"step": "outreach:list"})
        raise PersistenceError(db_error_message(e)) from e
