"""Router for the filtered overview summary."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from funnel_analytics.engine import compute_overview
from funnel_analytics.schemas import OverviewSummary
from funnel_analytics.server.dependencies import get_snapshot
from funnel_analytics.store import EventSnapshot

log = structlog.get_logger()
router = APIRouter(prefix="/api/overview", tags=["overview"])


@router.get("", response_model=OverviewSummary)
def get_overview(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    device: Optional[str] = Query(default=None),
    channel: Optional[str] = Query(default=None),
    snapshot: EventSnapshot = Depends(get_snapshot),
):
    """
    Summary statistics and hourly breakdown.

    Filters are optional: startDate and endDate (ISO dates, inclusive),
    device (mobile|desktop|tablet) and channel
    (organic|paid_search|social|email|direct).
    """
    try:
        return compute_overview(
            snapshot.frame,
            start_date=start_date,
            end_date=end_date,
            device=device,
            channel=channel,
        )
    except Exception as e:
        log.error(
            "overview.compute.failed",
            error=str(e),
            start_date=start_date,
            end_date=end_date,
            device=device,
            channel=channel,
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail="Failed to calculate overview")
