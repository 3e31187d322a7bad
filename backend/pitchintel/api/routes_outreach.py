from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.outreach import OutreachSessionIn, OutreachSessionOut
from ..services.errors import BriefNotFound, PersistenceError
from ..services.outreach import list_sessions, save_session
from .deps import require_owner, verify_api_key

router = APIRouter(tags=["outreach"], dependencies=[Depends(verify_api_key)])


@router.post("/outreach/sessions", response_model=OutreachSessionOut, status_code=201)
def save_outreach_session(
    payload: OutreachSessionIn,
    owner_id: str = Depends(require_owner),
    db: Session = Depends(get_db),
):
    try:
        return save_session(db, payload, owner_id)
    except BriefNotFound:
        raise HTTPException(status_code=404, detail="Brief not found")
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=f"Failed to save session: {e}")


@router.get("/outreach/sessions", response_model=list[OutreachSessionOut])
def list_outreach_sessions(
    owner_id: str = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """Sessions of the caller, most recently updated first."""
    try:
        return list_sessions(db, owner_id)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=f"Failed to get sessions: {e}")
