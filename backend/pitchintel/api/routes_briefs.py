from uuid import UUID
import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from ..core.config import get_settings
from ..schemas.brief import BriefOut, BriefUpdate, CreateBriefRequest, DraftOut, DraftRequest
from ..services.brief_store import BriefRepository
from ..services.drafts import DraftGenerator
from ..services.errors import (
    BriefValidationError,
    DraftConfigurationError,
    DraftGenerationError,
    PersistenceError,
)
from ..services.orchestrator import BriefOrchestrator
from .deps import (
    current_owner,
    get_brief_repository,
    get_draft_generator,
    get_orchestrator,
    verify_api_key,
)

router = APIRouter(tags=["briefs"], dependencies=[Depends(verify_api_key)])

settings = get_settings()
logger = logging.getLogger(__name__)


def _persistence_failure(message: str, e: PersistenceError) -> HTTPException:
    return HTTPException(status_code=500, detail={"error": message, "details": str(e)})


@router.post("/briefs", response_model=BriefOut, status_code=201)
def create_brief(
    payload: CreateBriefRequest,
    owner_id: str | None = Depends(current_owner),
    orchestrator: BriefOrchestrator = Depends(get_orchestrator),
):
    try:
        return orchestrator.create_brief(payload, user_id=owner_id)
    except BriefValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise _persistence_failure("Failed to save brief to database", e)


@router.get("/briefs", response_model=list[BriefOut])
def list_briefs(
    limit: int = 50,
    offset: int = 0,
    owner_id: str | None = Depends(current_owner),
    repo: BriefRepository = Depends(get_brief_repository),
):
    # Hard cap to avoid unbounded scans
    safe_limit = max(1, min(limit, settings.MAX_PAGE_SIZE))
    try:
        return repo.get_all(owner_id=owner_id, limit=safe_limit, offset=max(0, offset))
    except PersistenceError as e:
        raise _persistence_failure("Failed to load briefs", e)


@router.get("/briefs/{brief_id}", response_model=BriefOut)
def get_brief(
    brief_id: UUID,
    owner_id: str | None = Depends(current_owner),
    repo: BriefRepository = Depends(get_brief_repository),
):
    try:
        brief = repo.get_by_id(brief_id, owner_id=owner_id)
    except PersistenceError as e:
        raise _persistence_failure("Failed to load brief", e)
    if not brief:
        raise HTTPException(status_code=404, detail="Brief not found")
    return brief


@router.patch("/briefs/{brief_id}", response_model=BriefOut)
def update_brief(
    brief_id: UUID,
    payload: BriefUpdate,
    owner_id: str | None = Depends(current_owner),
    repo: BriefRepository = Depends(get_brief_repository),
):
    """Overwrite derived fields, e.g. after an improve pass regenerated them."""
    fields = payload.model_dump(exclude_unset=True)
    try:
        brief = repo.update(brief_id, fields, owner_id=owner_id)
    except PersistenceError as e:
        raise _persistence_failure("Failed to update brief", e)
    if not brief:
        raise HTTPException(status_code=404, detail="Brief not found")
    return brief


@router.delete("/briefs/{brief_id}", status_code=204)
def delete_brief(
    brief_id: UUID,
    owner_id: str | None = Depends(current_owner),
    repo: BriefRepository = Depends(get_brief_repository),
):
    try:
        deleted = repo.delete(brief_id, owner_id=owner_id)
    except PersistenceError as e:
        raise _persistence_failure("Failed to delete brief", e)
    if not deleted:
        raise HTTPException(status_code=404, detail="Brief not found")
    return Response(status_code=204)


@router.post("/briefs/{brief_id}/drafts", response_model=DraftOut)
def create_draft(
    brief_id: UUID,
    payload: DraftRequest,
    owner_id: str | None = Depends(current_owner),
    repo: BriefRepository = Depends(get_brief_repository),
    generator: DraftGenerator = Depends(get_draft_generator),
):
    try:
        brief = repo.get_by_id(brief_id, owner_id=owner_id)
    except PersistenceError as e:
        raise _persistence_failure("Failed to load brief", e)
    if not brief:
        raise HTTPException(status_code=404, detail="Brief not found")

    try:
        return generator.generate(brief, payload.draft_type, payload.last_outcome)
    except DraftConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except DraftGenerationError as e:
        raise HTTPException(status_code=502, detail=f"Draft provider error: {e}")
