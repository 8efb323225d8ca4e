"""Conversion of an event sequence into the DataFrame every aggregator reads."""

from collections.abc import Sequence
from typing import Union

import pandas as pd

from funnel_analytics.schemas import PURCHASE, Event

EVENT_COLUMNS = list(Event.model_fields)

# Columns added on top of the raw event fields.
DERIVED_COLUMNS = ["ts", "date", "hour", "is_purchase", "revenue"]

EventsLike = Union[Sequence[Event], pd.DataFrame]


def events_to_frame(events: Sequence[Event]) -> pd.DataFrame:
    """
    Build a prepared DataFrame from a sequence of events.

    Raises
    ------
    TypeError
        If `events` is not a sequence of `Event` records.
    """
    if isinstance(events, (str, bytes)) or not isinstance(events, Sequence):
        raise TypeError(
            f"events must be a sequence of Event records, got {type(events).__name__}"
        )
    records = []
    for event in events:
        if not isinstance(event, Event):
            raise TypeError(
                f"events must contain Event records, got {type(event).__name__}"
            )
        records.append(event.model_dump())
    frame = pd.DataFrame.from_records(records, columns=EVENT_COLUMNS)
    return prepare_frame(frame)


def prepare_frame(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Add the derived columns to a frame holding the raw event fields.

    `date` and `hour` are read from the timestamp's own wall-clock fields, in
    whatever offset the timestamp was written with, so they agree with the
    string-prefix date filters. `ts` is the parsed instant in UTC. Rows whose
    timestamp cannot be parsed get a null `ts`, `date` and `hour`.
    """
    frame = frame.reindex(columns=EVENT_COLUMNS).copy()
    frame["timestamp"] = frame["timestamp"].fillna("").astype(str)
    frame["value"] = (
        pd.to_numeric(frame["value"], errors="coerce").fillna(0).astype("int64")
    )

    ts = pd.to_datetime(frame["timestamp"], utc=True, errors="coerce", format="ISO8601")
    parsed = ts.notna()
    frame["ts"] = ts
    frame["date"] = frame["timestamp"].str.slice(0, 10).where(parsed)
    # Date-only timestamps have no hour field and start at midnight.
    hour = pd.to_numeric(frame["timestamp"].str.slice(11, 13), errors="coerce")
    frame["hour"] = hour.fillna(0).where(parsed)
    frame["is_purchase"] = frame["event_name"] == PURCHASE
    # Never sum `value` outside purchase events.
    frame["revenue"] = frame["value"].where(frame["is_purchase"], 0)
    return frame


def as_frame(events: EventsLike) -> pd.DataFrame:
    """Return a prepared frame, building it when given a sequence of events."""
    if isinstance(events, pd.DataFrame):
        if all(column in events.columns for column in DERIVED_COLUMNS):
            return events
        return prepare_frame(events)
    return events_to_frame(events)


def timed_rows(frame: pd.DataFrame) -> pd.DataFrame:
    """Rows with a parseable timestamp, with `hour` as a plain integer."""
    timed = frame[frame["ts"].notna()]
    return timed.assign(hour=timed["hour"].astype("int64"))


def rate(numerator: float, denominator: float) -> float:
    """Percentage of `numerator` over `denominator`, 0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return 100.0 * numerator / denominator


def ratio(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator
