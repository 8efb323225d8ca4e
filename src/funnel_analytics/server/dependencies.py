"""FastAPI dependencies shared by the routers."""

from fastapi import Request

from funnel_analytics.config import Settings
from funnel_analytics.store import EventSnapshot, EventStore


def get_store(request: Request) -> EventStore:
    """The event store owned by the running app."""
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_snapshot(request: Request) -> EventSnapshot:
    """The snapshot captured at the start of the request."""
    return get_store(request).snapshot()
