"""Tests for the StormAnalysis pipeline object."""

from __future__ import annotations

import pandas as pd

from stormstat.engine import StormAnalysis


def test_construction_builds_all_tables(events: pd.DataFrame) -> None:
    analysis = StormAnalysis(events=events)

    assert set(analysis.health["event_type"]) == {"FLOOD", "HAIL", "HEAT"}
    assert set(analysis.economic["event_type"]) == {"FLOOD", "HAIL", "HEAT"}
    assert "damage" in analysis.events.columns
    # caller's frame is left untouched
    assert "damage" not in events.columns


def test_top_health_is_union_of_injury_and_fatality_rankings(events: pd.DataFrame) -> None:
    selection = StormAnalysis(events=events).top_health(1)

    # HEAT leads mean injuries, FLOOD leads mean fatalities
    assert selection.event_types == ["HEAT", "FLOOD"]
    assert selection.metric_columns == ("injuries_mean", "fatalities_mean")
    assert selection.summary["event_type"].tolist() == ["HEAT", "FLOOD"]
    assert sorted(selection.yearly["event_type"].unique()) == ["FLOOD", "HEAT"]
    assert len(selection.yearly) == 3


def test_top_economic(events: pd.DataFrame) -> None:
    selection = StormAnalysis(events=events).top_economic(1)

    assert selection.event_types == ["FLOOD"]
    assert selection.summary.iloc[0]["damage_mean"] == 1_002_500.0
    assert selection.yearly["year"].tolist() == ["2001", "2002"]


def test_selection_never_exceeds_available_types(events: pd.DataFrame) -> None:
    analysis = StormAnalysis(events=events)

    assert len(analysis.top_health(5).event_types) == 3
    assert len(analysis.top_economic(3).event_types) == 3


def test_stats(events: pd.DataFrame) -> None:
    stats = StormAnalysis(events=events).stats()

    assert stats == {
        "records": 6,
        "missing_year": 1,
        "event_types": 3,
        "year_min": "2001",
        "year_max": "2003",
    }
