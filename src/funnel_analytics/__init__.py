"""Funnel, A/B test, trend and overview analytics over a flat event log."""

__version__ = "0.1.0"
