from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.feedback import FeedbackIn, FeedbackOut
from ..services.errors import PersistenceError
from ..services.feedback import record_feedback
from .deps import verify_api_key

router = APIRouter(tags=["feedback"], dependencies=[Depends(verify_api_key)])


@router.post("/feedback", response_model=FeedbackOut, status_code=201)
def submit_feedback(payload: FeedbackIn, db: Session = Depends(get_db)):
    try:
        return record_feedback(db, payload)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=f"Failed to save feedback: {e}")
