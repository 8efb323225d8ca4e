"""Paginated event browsing."""

import math
from collections.abc import Sequence
from typing import Any, Optional

import pandas as pd

from funnel_analytics.engine.filters import filter_events
from funnel_analytics.schemas import Event, EventPage, Pagination

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
MAX_LIMIT = 200


def _as_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def coerce_page(value: Any) -> int:
    """Page number from raw input: non-numeric is page 1, and so is anything below 1."""
    return max(_as_int(value, DEFAULT_PAGE), 1)


def coerce_limit(value: Any) -> int:
    """Page size from raw input, capped at MAX_LIMIT."""
    limit = _as_int(value, DEFAULT_LIMIT)
    if limit < 1:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def list_events(
    events: Sequence[Event],
    session_id: Optional[str] = None,
    page: Any = DEFAULT_PAGE,
    limit: Any = DEFAULT_LIMIT,
    frame: Optional[pd.DataFrame] = None,
) -> EventPage:
    """
    Return one page of events, newest first.

    Timestamps are compared as strings. A page past the end is empty.
    `frame` is an optional prepared frame built from `events`.
    """
    page = coerce_page(page)
    limit = coerce_limit(limit)

    selected = filter_events(events, frame=frame, session_id=session_id)
    ordered = sorted(selected, key=lambda event: event.timestamp, reverse=True)

    start = (page - 1) * limit
    total = len(ordered)
    return EventPage(
        data=ordered[start : start + limit],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        ),
    )
