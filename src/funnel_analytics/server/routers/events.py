"""Router for browsing raw events."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from funnel_analytics.engine import list_events
from funnel_analytics.schemas import EventPage
from funnel_analytics.server.dependencies import get_snapshot
from funnel_analytics.store import EventSnapshot

log = structlog.get_logger()
router = APIRouter(prefix="/api/events", tags=["events"])


@router.get("", response_model=EventPage)
def get_events(
    # Raw strings: malformed values fall back to defaults instead of a 422.
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    session_id: Optional[str] = Query(default=None),
    snapshot: EventSnapshot = Depends(get_snapshot),
):
    """Paginated events, newest first, optionally for a single session."""
    try:
        return list_events(
            snapshot.events,
            session_id=session_id,
            page=page,
            limit=limit,
            frame=snapshot.frame if session_id else None,
        )
    except Exception as e:
        log.error("events.list.failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch events")
