"""Router for administrative data operations."""

import secrets
from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from funnel_analytics.config import Settings
from funnel_analytics.generator import generate_events
from funnel_analytics.server.dependencies import get_settings, get_store
from funnel_analytics.store import EventStore

log = structlog.get_logger()
router = APIRouter(prefix="/api/admin", tags=["admin"])

security = HTTPBearer(auto_error=False)


def require_scheduler_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject the request unless it carries the scheduler token, when one is set."""
    if not settings.scheduler_token:
        return
    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode(), settings.scheduler_token.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.post("/regenerate-data", dependencies=[Depends(require_scheduler_token)])
def regenerate_data(store: EventStore = Depends(get_store)):
    """
    Replace the event data with freshly generated sample data.

    Intended to be called by a scheduler once a day. Subsequent requests see
    the new data.
    """
    log.info("admin.regenerate.started")
    try:
        events = generate_events()
        store.replace(events)
    except Exception as e:
        log.error("admin.regenerate.failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to regenerate data: {e}")

    log.info("admin.regenerate.completed", count=len(events))
    return {
        "success": True,
        "message": "Data regenerated successfully",
        "events": len(events),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
