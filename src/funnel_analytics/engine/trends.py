"""Daily trend series."""

from funnel_analytics.engine.frame import EventsLike, as_frame, rate
from funnel_analytics.schemas import TrendPoint


def compute_trends(events: EventsLike) -> list[TrendPoint]:
    """
    Bucket events by the calendar date in their timestamps, oldest day first.

    A day whose events carry no session id reports a conversion rate of 0.
    """
    frame = as_frame(events)
    dated = frame[frame["date"].notna()]
    if dated.empty:
        return []

    sessions = dated.groupby("date")["session_id"].nunique().sort_index()
    purchases = dated[dated["is_purchase"]].groupby("date")
    conversions = purchases.size().reindex(sessions.index, fill_value=0)
    revenue = purchases["revenue"].sum().reindex(sessions.index, fill_value=0)

    return [
        TrendPoint(
            date=str(date),
            sessions=int(n_sessions),
            conversions=int(conversions[date]),
            revenue=int(revenue[date]),
            conversion_rate=rate(int(conversions[date]), int(n_sessions)),
        )
        for date, n_sessions in sessions.items()
    ]
