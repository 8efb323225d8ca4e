"""Tests for the daily trend series."""

from funnel_analytics.engine import compute_trends


class TestComputeTrends:
    def test_daily_buckets(self, multi_day_events):
        trends = compute_trends(multi_day_events)

        assert [point.date for point in trends] == ["2024-01-01", "2024-01-02"]
        first, second = trends
        assert (first.sessions, first.conversions, first.revenue) == (2, 1, 2500)
        assert first.conversion_rate == 50.0
        assert (second.sessions, second.conversions, second.revenue) == (2, 1, 10000)

    def test_dates_strictly_ascending_for_unordered_input(self, multi_day_events):
        trends = compute_trends(list(reversed(multi_day_events)))

        dates = [point.date for point in trends]
        assert dates == sorted(set(dates))

    def test_days_follow_the_timestamp_offset(self, event_factory):
        events = [
            event_factory("s1", timestamp="2024-01-01T10:00:00-05:00"),
            event_factory("s2", timestamp="2024-01-01T21:00:00-05:00"),
            event_factory("s3", timestamp="2024-01-02T01:00:00-05:00"),
        ]

        trends = compute_trends(events)

        assert [(p.date, p.sessions) for p in trends] == [
            ("2024-01-01", 2),
            ("2024-01-02", 1),
        ]

    def test_unparseable_timestamps_are_skipped(self, event_factory):
        events = [
            event_factory("s1", timestamp="not a timestamp"),
            event_factory("s2", timestamp="2024-01-01T10:00:00Z"),
        ]

        trends = compute_trends(events)

        assert [(p.date, p.sessions) for p in trends] == [("2024-01-01", 1)]

    def test_empty_input(self):
        assert compute_trends([]) == []

    def test_naive_timestamps_use_their_own_date(self, event_factory):
        events = [event_factory("s1", timestamp="2024-03-05T23:59:00")]

        assert [p.date for p in compute_trends(events)] == ["2024-03-05"]
