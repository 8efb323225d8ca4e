"""Composable filters over an event collection.

Every filter is optional and all supplied filters are combined with a
logical AND. A filter value that matches nothing yields an empty result,
never an error.
"""

from collections.abc import Sequence
from typing import Optional

import numpy as np
import pandas as pd

from funnel_analytics.engine.frame import EventsLike, as_frame
from funnel_analytics.schemas import Event


def _prefix(timestamps: pd.Series, bound: str) -> pd.Series:
    return timestamps.str.slice(0, len(bound))


def filter_mask(
    frame: pd.DataFrame,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    device: Optional[str] = None,
    channel: Optional[str] = None,
    session_id: Optional[str] = None,
) -> pd.Series:
    """
    Boolean mask selecting the rows of a prepared frame that pass all filters.

    Date bounds are compared lexicographically against the same number of
    leading characters of the ISO timestamp, inclusive on both ends. An end
    date of ``2024-01-02`` therefore keeps every event on that day.
    """
    mask = pd.Series(True, index=frame.index)
    if start_date:
        mask &= _prefix(frame["timestamp"], start_date) >= start_date
    if end_date:
        mask &= _prefix(frame["timestamp"], end_date) <= end_date
    if device:
        mask &= frame["device"] == device
    if channel:
        mask &= frame["channel"] == channel
    if session_id:
        mask &= frame["session_id"] == session_id
    return mask


def filter_frame(events: EventsLike, **filters: Optional[str]) -> pd.DataFrame:
    """Prepared frame restricted to the rows that pass `filters`."""
    frame = as_frame(events)
    return frame[filter_mask(frame, **filters)]


def filter_events(
    events: Sequence[Event],
    frame: Optional[pd.DataFrame] = None,
    **filters: Optional[str],
) -> list[Event]:
    """
    The events that pass `filters`, in their original order.

    `frame` may be a prepared frame already built from `events`, row for row.
    """
    if not any(filters.values()):
        return list(events)
    if frame is None:
        frame = as_frame(events)
    mask = filter_mask(frame, **filters)
    return [events[i] for i in np.flatnonzero(mask.to_numpy())]
