"""Top-line summary and hourly breakdown for the overview page."""

from collections import defaultdict
from typing import Optional

import pandas as pd

from funnel_analytics.engine.filters import filter_frame
from funnel_analytics.engine.frame import EventsLike, rate, ratio, timed_rows
from funnel_analytics.schemas import (
    CHANNELS,
    DateRange,
    HourlyMetric,
    OverviewSummary,
    to_dollars,
)

HOURS_PER_DAY = 24


def _bucket_stats(timed: pd.DataFrame, keys: list[str]) -> dict[tuple, dict]:
    """Sessions, purchases, revenue and channel mix per bucket key tuple."""
    if timed.empty:
        return {}

    grouped = timed.groupby(keys)
    stats = pd.DataFrame(
        {
            "sessions": grouped["session_id"].nunique(),
            "conversions": grouped["is_purchase"].sum(),
            "revenue": grouped["revenue"].sum(),
        }
    )

    channels: dict[tuple, dict[str, int]] = defaultdict(dict)
    known = timed[timed["channel"].isin(CHANNELS)]
    for index, count in known.groupby(keys + ["channel"]).size().items():
        *key, channel = index
        channels[tuple(key)][channel] = int(count)

    buckets = {}
    for index, row in stats.iterrows():
        key = index if isinstance(index, tuple) else (index,)
        buckets[key] = {
            "sessions": int(row["sessions"]),
            "conversions": int(row["conversions"]),
            "revenue": to_dollars(row["revenue"]),
            "channel_counts": channels.get(key, {}),
        }
    return buckets


def _single_day_metrics(timed: pd.DataFrame) -> list[HourlyMetric]:
    buckets = _bucket_stats(timed, ["hour"])
    empty = {
        "sessions": 0,
        "conversions": 0,
        "revenue": to_dollars(0),
        "channel_counts": {},
    }
    return [
        HourlyMetric(
            hour_label=f"{hour:02d}:00",
            hour_of_day=hour,
            **buckets.get((hour,), empty),
        )
        for hour in range(HOURS_PER_DAY)
    ]


def _multi_day_metrics(timed: pd.DataFrame) -> list[HourlyMetric]:
    buckets = _bucket_stats(timed, ["date", "hour"])
    metrics = []
    # Keys sort by date string, then by numeric hour.
    for date, hour in sorted(buckets):
        hour = int(hour)
        metrics.append(
            HourlyMetric(
                hour_label=f"{date[5:]} {hour:02d}:00",
                hour_of_day=hour,
                day=date,
                **buckets[(date, hour)],
            )
        )
    return metrics


def compute_overview(
    events: EventsLike,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    device: Optional[str] = None,
    channel: Optional[str] = None,
) -> OverviewSummary:
    """
    Summarize the filtered events and break them down by hour.

    When every filtered event falls on the same timestamp date (or there are no
    events) the breakdown has one bucket per hour of day, 0 to 23. Otherwise
    it has one bucket per (date, hour) pair that actually occurs.

    Revenue in the hourly buckets is in dollars; everywhere else it is in
    cents.
    """
    frame = filter_frame(
        events,
        start_date=start_date,
        end_date=end_date,
        device=device,
        channel=channel,
    )

    sessions = int(frame["session_id"].nunique())
    purchases = int(frame["is_purchase"].sum())
    revenue = int(frame["revenue"].sum())

    dates = frame["date"].dropna()
    date_range = DateRange(
        start=str(dates.min()) if not dates.empty else None,
        end=str(dates.max()) if not dates.empty else None,
    )
    is_single_day = date_range.start == date_range.end

    timed = timed_rows(frame)
    if is_single_day:
        hourly_metrics = _single_day_metrics(timed)
    else:
        hourly_metrics = _multi_day_metrics(timed)

    return OverviewSummary(
        sessions=sessions,
        purchases=purchases,
        conversion_rate=rate(purchases, sessions),
        revenue=revenue,
        aov=ratio(revenue, purchases),
        date_range=date_range,
        hourly_metrics=hourly_metrics,
        is_single_day=is_single_day,
    )
