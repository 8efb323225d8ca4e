"""Conversion funnel over unique sessions."""

from funnel_analytics.engine.frame import EventsLike, as_frame, rate
from funnel_analytics.schemas import (
    ADD_TO_CART,
    BEGIN_CHECKOUT,
    PAGE_VIEW,
    PURCHASE,
    FunnelStep,
)

FUNNEL_STEPS = (PAGE_VIEW, ADD_TO_CART, BEGIN_CHECKOUT, PURCHASE)


def compute_funnel(events: EventsLike) -> list[FunnelStep]:
    """
    Count the distinct sessions reaching each funnel step.

    A session counts once per step no matter how many matching events it
    produced. The first step always reports 100% from previous; later steps
    report 0% when the previous step has no sessions.
    """
    frame = as_frame(events)
    stepped = frame[frame["event_name"].isin(FUNNEL_STEPS)]
    counts = stepped.groupby("event_name")["session_id"].nunique()

    first_count = int(counts.get(FUNNEL_STEPS[0], 0))
    funnel = []
    previous_count = 0
    for index, step in enumerate(FUNNEL_STEPS):
        current_count = int(counts.get(step, 0))
        pct_from_previous = 100.0 if index == 0 else rate(current_count, previous_count)
        funnel.append(
            FunnelStep(
                step_name=step.replace("_", " "),
                sessions=current_count,
                pct_from_previous=pct_from_previous,
                pct_from_start=rate(current_count, first_count),
            )
        )
        previous_count = current_count
    return funnel
