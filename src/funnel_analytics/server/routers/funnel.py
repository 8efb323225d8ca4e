"""Router for the conversion funnel."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from funnel_analytics.engine import compute_funnel
from funnel_analytics.schemas import FunnelStep
from funnel_analytics.server.dependencies import get_snapshot
from funnel_analytics.store import EventSnapshot

log = structlog.get_logger()
router = APIRouter(prefix="/api/funnel", tags=["funnel"])


@router.get("", response_model=list[FunnelStep])
def get_funnel(snapshot: EventSnapshot = Depends(get_snapshot)):
    """page_view -> add_to_cart -> begin_checkout -> purchase, by unique sessions."""
    try:
        return compute_funnel(snapshot.frame)
    except Exception as e:
        log.error("funnel.compute.failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to calculate funnel")
