"""Shared fixtures for the funnel-analytics test suite."""

from itertools import count

import pytest

from funnel_analytics.schemas import Event

_ids = count()


def make_event(
    session_id="s1",
    event_name="page_view",
    timestamp="2024-01-01T10:00:00Z",
    value=None,
    variant="A",
    device="mobile",
    channel="organic",
    experiment_id="exp_001",
    experiment_name="Homepage Hero Text",
    user_id=None,
) -> Event:
    return Event(
        event_id=f"evt_{next(_ids)}",
        timestamp=timestamp,
        session_id=session_id,
        user_id=user_id or f"user_{session_id}",
        event_name=event_name,
        variant=variant,
        device=device,
        channel=channel,
        experiment_id=experiment_id,
        experiment_name=experiment_name,
        value=value,
    )


@pytest.fixture
def event_factory():
    """Build a single event; every field has a sensible default."""
    return make_event


@pytest.fixture
def scenario_events():
    """s1 views and buys for $50.00, s2 only views."""
    return [
        make_event("s1", "page_view", "2024-01-01T10:00:00Z"),
        make_event("s1", "purchase", "2024-01-01T10:05:00Z", value=5000),
        make_event("s2", "page_view", "2024-01-01T11:00:00Z", variant="B"),
    ]


@pytest.fixture
def multi_day_events():
    """Two days of traffic across two experiments, devices and channels."""
    return [
        # Day 1
        make_event("s1", "page_view", "2024-01-01T09:00:00Z"),
        make_event("s1", "add_to_cart", "2024-01-01T09:01:00Z"),
        make_event("s1", "begin_checkout", "2024-01-01T09:02:00Z"),
        make_event("s1", "purchase", "2024-01-01T09:03:00Z", value=2500),
        make_event("s2", "page_view", "2024-01-01T14:00:00Z", variant="B",
                   device="desktop", channel="email"),
        make_event("s2", "add_to_cart", "2024-01-01T14:02:00Z", variant="B",
                   device="desktop", channel="email"),
        # Day 2
        make_event("s3", "page_view", "2024-01-02T02:00:00Z", variant="B",
                   channel="social"),
        make_event("s3", "page_view", "2024-01-02T02:10:00Z", variant="B",
                   channel="social"),
        make_event("s3", "add_to_cart", "2024-01-02T02:11:00Z", variant="B",
                   channel="social"),
        make_event("s3", "begin_checkout", "2024-01-02T02:12:00Z", variant="B",
                   channel="social"),
        make_event("s3", "purchase", "2024-01-02T02:13:00Z", value=10000,
                   variant="B", channel="social"),
        make_event("s4", "page_view", "2024-01-02T10:00:00Z",
                   experiment_id="exp_002", experiment_name="CTA Button Color",
                   device="tablet", channel="direct"),
    ]
