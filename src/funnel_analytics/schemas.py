"""Pydantic models for events and the views derived from them."""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

PAGE_VIEW = "page_view"
ADD_TO_CART = "add_to_cart"
BEGIN_CHECKOUT = "begin_checkout"
PURCHASE = "purchase"

EVENT_NAMES = (PAGE_VIEW, ADD_TO_CART, BEGIN_CHECKOUT, PURCHASE)
VARIANTS = ("A", "B")
DEVICES = ("mobile", "desktop", "tablet")
CHANNELS = ("organic", "paid_search", "social", "email", "direct")

# Revenue in minor currency units (cents).
Cents = int

# Revenue in major currency units, only used by the hourly overview buckets.
Dollars = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


def to_dollars(cents: Cents) -> Dollars:
    """Convert an amount in cents to a two-place decimal amount."""
    return (Decimal(int(cents)) / 100).quantize(Decimal("0.01"))


class Event(BaseModel):
    """A single user-interaction event."""

    model_config = ConfigDict(frozen=True)

    event_id: str
    timestamp: str  # ISO 8601
    session_id: str
    user_id: str
    event_name: str
    variant: str
    device: str
    channel: str
    experiment_id: str
    experiment_name: str
    value: Optional[Cents] = None  # only set on purchase events


class FunnelStep(BaseModel):
    """Unique-session count for one funnel step."""

    step_name: str
    sessions: int
    pct_from_previous: float
    pct_from_start: float


class ABTestResult(BaseModel):
    """Metrics for one arm of an experiment."""

    variant: str
    sessions: int
    conversions: int
    conversion_rate: float
    revenue: Cents
    revenue_per_session: float


class VariantComparison(BaseModel):
    """Point-estimate comparison of every arm against a baseline arm."""

    baseline: str
    winner: Optional[str] = None
    # Relative lift in percent per non-baseline arm; None when the
    # baseline conversion rate is zero.
    lifts: dict[str, Optional[float]] = {}


class ExperimentResults(BaseModel):
    experiment_id: str
    experiment_name: str
    results: list[ABTestResult]
    comparison: VariantComparison


class TrendPoint(BaseModel):
    date: str
    sessions: int
    conversions: int
    revenue: Cents
    conversion_rate: float


class DateRange(BaseModel):
    start: Optional[str] = None
    end: Optional[str] = None


class HourlyMetric(BaseModel):
    hour_label: str
    hour_of_day: int
    day: Optional[str] = None
    sessions: int
    conversions: int
    revenue: Dollars
    channel_counts: dict[str, int]


class OverviewSummary(BaseModel):
    sessions: int
    purchases: int
    conversion_rate: float
    revenue: Cents
    aov: float
    date_range: DateRange
    hourly_metrics: list[HourlyMetric]
    is_single_day: bool


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")


class EventPage(BaseModel):
    """A page of events, newest first."""

    data: list[Event]
    pagination: Pagination
