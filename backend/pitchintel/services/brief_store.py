from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..models.brief import Brief
from .errors import PersistenceError

logger = logging.getLogger(__name__)


def db_error_message(e: SQLAlchemyError) -> str:
    """Driver message without the SQL statement and parameters SQLAlchemy appends."""
    orig = getattr(e, "orig", None)
    return str(orig) if orig is not None else str(e)


class BriefRepository:
    """
    Row store for briefs.

    Every operation takes an optional `owner_id`. When given, rows that
    belong to someone else (or to nobody) are treated as absent. This is
    the only authorization the backend applies to briefs.

    With `guest_scope=True` (the HTTP API), calls without an owner see
    only ownerless guest briefs instead of every row.
    """

    def __init__(self, db: Session, guest_scope: bool = False) -> None:
        self.db = db
        self.guest_scope = guest_scope

    def _scoped(self, owner_id: Optional[str]) -> Query:
        query = self.db.query(Brief)
        if owner_id:
            query = query.filter(Brief.user_id == owner_id)
        elif self.guest_scope:
            query = query.filter(Brief.user_id.is_(None))
        return query

    def _fail(self, action: str, e: SQLAlchemyError) -> PersistenceError:
        self.db.rollback()
        logger.exception("Brief %s failed", action, extra={"step": f"brief_store:{action}"})
        return PersistenceError(db_error_message(e))

    def insert(self, values: Dict[str, Any]) -> Brief:
        brief = Brief(**values)
        try:
            self.db.add(brief)
            self.db.commit()
            self.db.refresh(brief)
        except SQLAlchemyError as e:
            raise self._fail("insert", e) from e
        return brief

    def get_by_id(self, brief_id: UUID, owner_id: Optional[str] = None) -> Brief | None:
        try:
            return self._scoped(owner_id).filter(Brief.id == brief_id).first()
        except SQLAlchemyError as e:
            raise self._fail("get", e) from e

    def get_all(
        self,
        owner_id: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Brief]:
        query = self._scoped(owner_id).order_by(Brief.created_at.desc(), Brief.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        try:
            return query.all()
        except SQLAlchemyError as e:
            raise self._fail("list", e) from e

    def update(
        self,
        brief_id: UUID,
        fields: Dict[str, Any],
        owner_id: Optional[str] = None,
    ) -> Brief | None:
        brief = self.get_by_id(brief_id, owner_id)
        if brief is None:
            return None
        for key, value in fields.items():
            setattr(brief, key, value)
        try:
            self.db.commit()
            self.db.refresh(brief)
        except SQLAlchemyError as e:
            raise self._fail("update", e) from e
        return brief

    def delete(self, brief_id: UUID, owner_id: Optional[str] = None) -> int:
        """Returns the number of rows removed (0 when not visible to `owner_id`)."""
        try:
            deleted = (
                self._scoped(owner_id)
                .filter(Brief.id == brief_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", e) from e
        return deleted
