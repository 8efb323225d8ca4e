"""Synthetic event data with realistic funnel drop-off."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import numpy as np

from funnel_analytics.engine.frame import events_to_frame
from funnel_analytics.engine.funnel import compute_funnel
from funnel_analytics.schemas import (
    ADD_TO_CART,
    BEGIN_CHECKOUT,
    CHANNELS,
    DEVICES,
    PAGE_VIEW,
    PURCHASE,
    VARIANTS,
    Event,
)

EXPERIMENTS = (
    ("exp_001", "Homepage Hero Text"),
    ("exp_002", "CTA Button Color"),
    ("exp_003", "Checkout Flow"),
)

DEVICE_WEIGHTS = (0.60, 0.35, 0.05)
CHANNEL_WEIGHTS = (0.30, 0.25, 0.20, 0.15, 0.10)

# Order values in cents.
MIN_ORDER_VALUE = 2000
MAX_ORDER_VALUE = 30000


@dataclass(frozen=True)
class FunnelRates:
    """Probability of moving from each funnel step to the next."""

    view_to_cart: float = 0.60
    cart_to_checkout: float = 0.40
    checkout_to_purchase: float = 0.70
    extra_page_views: float = 0.40


def _isoformat(ts: datetime) -> str:
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _session_start(
    rng: np.random.Generator,
    end_day: datetime,
    session_index: int,
    num_sessions: int,
    days: int,
) -> datetime:
    # Spread sessions evenly across the date range, earliest day first.
    day_offset = (session_index * days) // num_sessions
    day = end_day - timedelta(days=days - day_offset - 1)
    return day.replace(
        hour=int(rng.integers(8, 23)),
        minute=int(rng.integers(0, 60)),
        second=int(rng.integers(0, 60)),
        microsecond=0,
    )


def generate_session_events(
    rng: np.random.Generator,
    start: datetime,
    rates: FunnelRates = FunnelRates(),
    **attributes: str,
) -> list[Event]:
    """
    Generate the events of one session.

    `attributes` are the session-level fields shared by every event:
    session_id, user_id, variant, device, channel, experiment_id and
    experiment_name.
    """
    events = []
    current = start

    def add(event_name: str, value: Optional[int] = None) -> None:
        nonlocal current
        events.append(
            Event(
                event_id=f"evt_{int(rng.integers(0, 2**62)):016x}",
                timestamp=_isoformat(current),
                event_name=event_name,
                value=value,
                **attributes,
            )
        )
        current += timedelta(seconds=int(rng.integers(10, 121)))

    add(PAGE_VIEW)
    if rng.random() < rates.extra_page_views:
        for _ in range(int(rng.integers(1, 4))):
            add(PAGE_VIEW)

    if rng.random() < rates.view_to_cart:
        add(ADD_TO_CART)
        if rng.random() < rates.cart_to_checkout:
            add(BEGIN_CHECKOUT)
            if rng.random() < rates.checkout_to_purchase:
                value = int(rng.integers(MIN_ORDER_VALUE, MAX_ORDER_VALUE + 1))
                add(PURCHASE, value)
    return events


def generate_events(
    num_sessions: int = 2000,
    num_users: int = 500,
    days: int = 7,
    experiments: tuple[tuple[str, str], ...] = EXPERIMENTS,
    rates: FunnelRates = FunnelRates(),
    now: Optional[datetime] = None,
    random_seed: Optional[int] = None,
) -> list[Event]:
    """
    Generate events for several concurrently running experiments.

    Parameters
    ----------
    num_sessions : int, optional
        Sessions per experiment.
    num_users : int, optional
        Size of the user pool each experiment draws from; users may have
        several sessions.
    days : int, optional
        Number of days of data, ending on the day of `now`.
    experiments : tuple of (experiment_id, experiment_name), optional
        The experiments to generate.
    rates : FunnelRates, optional
        Step-to-step conversion probabilities.
    now : datetime, optional
        End of the generated range, defaults to the current UTC time.
    random_seed : int, optional
        Seed for reproducible output.

    Returns
    -------
    list[Event]
        All events, sorted by timestamp.
    """
    rng = np.random.default_rng(random_seed)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    end_day = now.astimezone(timezone.utc)

    events: list[Event] = []
    for experiment_id, experiment_name in experiments:
        for session_index in range(num_sessions):
            start = _session_start(rng, end_day, session_index, num_sessions, days)
            events.extend(
                generate_session_events(
                    rng,
                    start,
                    rates,
                    session_id=f"{experiment_id}_session_{session_index:06d}",
                    user_id=f"user_{int(rng.integers(0, num_users)):05d}",
                    variant=str(rng.choice(VARIANTS)),
                    device=str(rng.choice(DEVICES, p=DEVICE_WEIGHTS)),
                    channel=str(rng.choice(CHANNELS, p=CHANNEL_WEIGHTS)),
                    experiment_id=experiment_id,
                    experiment_name=experiment_name,
                )
            )

    events.sort(key=lambda event: event.timestamp)
    return events


def summarize_events(events: list[Event]) -> dict:
    """Per-experiment counts, funnel and revenue, ordered by experiment id."""
    frame = events_to_frame(events)
    experiments = []
    for experiment_id, group in frame.groupby("experiment_id", sort=True):
        revenue = int(group["revenue"].sum())
        purchases = int(group["is_purchase"].sum())
        experiments.append(
            {
                "experiment_id": experiment_id,
                "experiment_name": group["experiment_name"].iloc[0],
                "events": len(group),
                "sessions": int(group["session_id"].nunique()),
                "funnel": [step.model_dump() for step in compute_funnel(group)],
                "revenue": revenue,
                "average_order_value": revenue / purchases if purchases else 0.0,
            }
        )
    return {
        "events": len(frame),
        "sessions": int(frame["session_id"].nunique()),
        "users": int(frame["user_id"].nunique()),
        "experiments": experiments,
    }
