"""Aggregation engine: pure, read-only views over an event collection."""

from funnel_analytics.engine.ab_test import compare_variants, compute_ab_results
from funnel_analytics.engine.filters import filter_events, filter_frame, filter_mask
from funnel_analytics.engine.frame import as_frame, events_to_frame
from funnel_analytics.engine.funnel import FUNNEL_STEPS, compute_funnel
from funnel_analytics.engine.listing import (
    coerce_limit,
    coerce_page,
    list_events,
)
from funnel_analytics.engine.overview import compute_overview
from funnel_analytics.engine.trends import compute_trends

__all__ = [
    "FUNNEL_STEPS",
    "as_frame",
    "coerce_limit",
    "coerce_page",
    "compare_variants",
    "compute_ab_results",
    "compute_funnel",
    "compute_overview",
    "compute_trends",
    "events_to_frame",
    "filter_events",
    "filter_frame",
    "filter_mask",
    "list_events",
]
