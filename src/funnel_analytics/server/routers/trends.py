"""Router for daily trends."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from funnel_analytics.engine import compute_trends
from funnel_analytics.schemas import TrendPoint
from funnel_analytics.server.dependencies import get_snapshot
from funnel_analytics.store import EventSnapshot

log = structlog.get_logger()
router = APIRouter(prefix="/api/trends", tags=["trends"])


@router.get("", response_model=list[TrendPoint])
def get_trends(snapshot: EventSnapshot = Depends(get_snapshot)):
    """Sessions, conversions and revenue per day."""
    try:
        return compute_trends(snapshot.frame)
    except Exception as e:
        log.error("trends.compute.failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to calculate trends")
