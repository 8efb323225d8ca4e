"""Tests for paginated event listing."""

import pytest

from funnel_analytics.engine import coerce_limit, coerce_page, list_events


@pytest.fixture
def many_events(event_factory):
    return [
        event_factory(f"s{i % 3}", timestamp=f"2024-01-01T10:{i:02d}:00Z")
        for i in range(30)
    ]


class TestListEvents:
    def test_newest_first(self, multi_day_events):
        page = list_events(multi_day_events)

        timestamps = [e.timestamp for e in page.data]
        assert timestamps == sorted(timestamps, reverse=True)
        assert page.data[0].session_id == "s4"

    def test_pagination(self, many_events):
        page = list_events(many_events, page=2, limit=7)

        assert [e.timestamp for e in page.data] == [
            f"2024-01-01T10:{minute:02d}:00Z" for minute in range(22, 15, -1)
        ]
        assert page.pagination.page == 2
        assert page.pagination.limit == 7
        assert page.pagination.total == 30
        assert page.pagination.total_pages == 5

    def test_last_partial_page(self, many_events):
        page = list_events(many_events, page=5, limit=7)

        assert len(page.data) == 2

    def test_page_beyond_range_is_empty(self, many_events):
        page = list_events(many_events, page=99, limit=50)

        assert page.data == []
        assert page.pagination.total == 30

    def test_empty_collection(self):
        page = list_events([], page=1, limit=50)

        assert page.data == []
        assert page.pagination.total == 0
        assert page.pagination.total_pages == 0

    def test_session_filter(self, many_events):
        page = list_events(many_events, session_id="s1")

        assert page.pagination.total == 10
        assert {e.session_id for e in page.data} == {"s1"}

    def test_wire_name_for_total_pages(self, many_events):
        dumped = list_events(many_events).pagination.model_dump(by_alias=True)

        assert dumped["totalPages"] == 1


class TestCoercion:
    @pytest.mark.parametrize(
        "raw, expected",
        [(None, 1), ("3", 3), (0, 1), (-4, 1), ("abc", 1), (float("inf"), 1)],
    )
    def test_page(self, raw, expected):
        assert coerce_page(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 50),
            ("20", 20),
            (500, 200),
            ("abc", 50),
            (0, 50),
            ("200", 200),
            (float("inf"), 50),
            (float("-inf"), 50),
        ],
    )
    def test_limit(self, raw, expected):
        assert coerce_limit(raw) == expected
