"""Tests for the event filter primitives."""

from funnel_analytics.engine import filter_events, filter_frame


class TestFilterEvents:
    def test_no_filters_returns_everything(self, multi_day_events):
        assert filter_events(multi_day_events) == multi_day_events

    def test_filters_combine_with_and(self, multi_day_events):
        selected = filter_events(
            multi_day_events, device="mobile", channel="social"
        )

        assert {e.session_id for e in selected} == {"s3"}
        assert len(selected) == 5

    def test_session_filter_keeps_order(self, multi_day_events):
        selected = filter_events(multi_day_events, session_id="s1")

        assert [e.event_name for e in selected] == [
            "page_view",
            "add_to_cart",
            "begin_checkout",
            "purchase",
        ]

    def test_date_bounds_are_inclusive(self, multi_day_events):
        selected = filter_events(
            multi_day_events, start_date="2024-01-01", end_date="2024-01-01"
        )

        assert {e.session_id for e in selected} == {"s1", "s2"}

    def test_date_time_bound(self, multi_day_events):
        selected = filter_events(multi_day_events, end_date="2024-01-01T09:02:00Z")

        assert [e.event_name for e in selected] == [
            "page_view",
            "add_to_cart",
            "begin_checkout",
        ]

    def test_unmatched_values_give_empty_result(self, multi_day_events):
        assert filter_events(multi_day_events, channel="billboard") == []
        assert filter_events(multi_day_events, start_date="2030-01-01") == []
        assert filter_events([], device="mobile") == []

    def test_filter_frame(self, multi_day_events):
        frame = filter_frame(multi_day_events, device="tablet")

        assert list(frame["session_id"]) == ["s4"]
