from fastapi import Depends, Header, HTTPException, Security
from fastapi.security.api_key import APIKeyHeader
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.db import get_db
from ..services.brief_store import BriefRepository
from ..services.drafts import DraftGenerator
from ..services.orchestrator import BriefOrchestrator

settings = get_settings()
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def verify_api_key(api_key: str | None = Security(api_key_header)) -> None:
    """
    Simple header-based API key authentication.

    - In dev, if API_AUTH_KEY is not set, auth is skipped.
    - Otherwise, require X-API-Key == API_AUTH_KEY.
    """
    expected = settings.API_AUTH_KEY

    # In dev with no configured key, skip auth for convenience
    if settings.ENV == "dev" and not expected:
        return

    if not expected:
        # In non-dev environments, missing config is treated as misconfiguration
        raise HTTPException(status_code=401, detail="API key not configured")

    if api_key != expected:
        raise HTTPException(status_code=401, detail="Invalid API key")


def current_owner(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> str | None:
    """Owner id forwarded by the auth layer in front of the API. None for guests."""
    if x_user_id is None:
        return None
    return x_user_id.strip() or None


def require_owner(owner_id: str | None = Depends(current_owner)) -> str:
    if not owner_id:
        raise HTTPException(status_code=400, detail="X-User-Id header is required")
    return owner_id


def get_brief_repository(db: Session = Depends(get_db)) -> BriefRepository:
    return BriefRepository(db, guest_scope=True)


def get_orchestrator(repo: BriefRepository = Depends(get_brief_repository)) -> BriefOrchestrator:
    return BriefOrchestrator(repo)


def get_draft_generator() -> DraftGenerator:
    return DraftGenerator()
