"""Tests for the conversion funnel."""

import pytest

from funnel_analytics.engine import FUNNEL_STEPS, compute_funnel, events_to_frame


class TestComputeFunnel:
    def test_scenario_with_empty_middle_steps(self, scenario_events):
        funnel = compute_funnel(scenario_events)

        assert [step.step_name for step in funnel] == [
            "page view",
            "add to cart",
            "begin checkout",
            "purchase",
        ]
        assert [step.sessions for step in funnel] == [2, 0, 0, 1]
        assert [step.pct_from_start for step in funnel] == [100.0, 0.0, 0.0, 50.0]
        # The purchase step follows an empty step, so it reports 0 from previous.
        assert [step.pct_from_previous for step in funnel] == [100.0, 0.0, 0.0, 0.0]

    def test_monotone_funnel(self, multi_day_events):
        funnel = compute_funnel(multi_day_events)

        assert [step.sessions for step in funnel] == [4, 3, 2, 2]
        assert [step.pct_from_start for step in funnel] == [100.0, 75.0, 50.0, 50.0]
        assert funnel[1].pct_from_previous == 75.0
        assert funnel[2].pct_from_previous == pytest.approx(200 / 3)
        assert funnel[3].pct_from_previous == 100.0
        starts = [step.pct_from_start for step in funnel]
        assert starts == sorted(starts, reverse=True)

    def test_sessions_count_once_per_step(self, event_factory):
        events = [
            event_factory("s1", "page_view", "2024-01-01T10:00:00Z"),
            event_factory("s1", "page_view", "2024-01-01T10:01:00Z"),
            event_factory("s1", "page_view", "2024-01-01T10:02:00Z"),
        ]

        assert compute_funnel(events)[0].sessions == 1

    def test_empty_input(self):
        funnel = compute_funnel([])

        assert len(funnel) == len(FUNNEL_STEPS)
        assert all(step.sessions == 0 for step in funnel)
        assert all(step.pct_from_start == 0.0 for step in funnel)
        assert funnel[0].pct_from_previous == 100.0
        assert all(step.pct_from_previous == 0.0 for step in funnel[1:])

    def test_unknown_event_names_are_ignored(self, event_factory):
        events = [
            event_factory("s1", "page_view"),
            event_factory("s2", "signup"),
        ]

        funnel = compute_funnel(events)

        assert funnel[0].sessions == 1
        assert sum(step.sessions for step in funnel) == 1

    def test_accepts_prepared_frame(self, multi_day_events):
        frame = events_to_frame(multi_day_events)

        assert compute_funnel(frame) == compute_funnel(multi_day_events)

    def test_rejects_non_event_collections(self):
        with pytest.raises(TypeError):
            compute_funnel(42)
        with pytest.raises(TypeError):
            compute_funnel([{"session_id": "s1", "event_name": "page_view"}])
