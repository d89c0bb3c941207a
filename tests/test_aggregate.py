"""Tests for the two-stage aggregation (by type+year, then by type)."""

from __future__ import annotations

import math

import pandas as pd
import pytest

from stormstat.aggregate import (
    economic_by_type_year,
    economic_summary,
    health_by_type_year,
    health_summary,
    summarize_by_type,
)
from stormstat.loader import load_storm_data
from stormstat.normalize import add_normalized_damage


def _row(df: pd.DataFrame, event_type: str, year: str) -> pd.Series:
    hit = df[(df["event_type"] == event_type) & (df["year"] == year)]
    assert len(hit) == 1
    return hit.iloc[0]


def test_health_stage_a_sums_per_type_and_year(events: pd.DataFrame) -> None:
    yearly = health_by_type_year(events)

    assert list(yearly.columns) == ["event_type", "year", "fatalities", "injuries"]
    assert _row(yearly, "FLOOD", "2001")[["fatalities", "injuries"]].tolist() == [3.0, 1.0]
    assert _row(yearly, "FLOOD", "2002")[["fatalities", "injuries"]].tolist() == [4.0, 1.0]
    # HAIL row without a year is not grouped
    assert _row(yearly, "HAIL", "2001")["fatalities"] == 0.0
    assert len(yearly) == 4
    assert not yearly.duplicated(subset=["event_type", "year"]).any()


def test_economic_stage_a_is_property_plus_crop(events: pd.DataFrame) -> None:
    normalized = add_normalized_damage(events)
    yearly = economic_by_type_year(events)

    keyed = normalized.dropna(subset=["year"])
    for (event_type, year), block in keyed.groupby(["event_type", "year"]):
        expected = block["prop_damage"].fillna(0).sum() + block["crop_damage"].fillna(0).sum()
        assert _row(yearly, event_type, year)["damage"] == pytest.approx(expected)

    assert _row(yearly, "FLOOD", "2001")["damage"] == 2_002_000.0


def test_stage_a_is_order_independent(events: pd.DataFrame) -> None:
    shuffled = events.sample(frac=1.0, random_state=7)

    pd.testing.assert_frame_equal(economic_by_type_year(events), economic_by_type_year(shuffled))
    pd.testing.assert_frame_equal(health_by_type_year(events), health_by_type_year(shuffled))


def test_summary_mean_and_sample_std() -> None:
    yearly = pd.DataFrame({"event_type": ["FLOOD", "FLOOD"], "year": ["2001", "2002"], "damage": [1000.0, 3000.0]})

    summary = summarize_by_type(yearly, ["damage"])

    assert list(summary.columns) == ["event_type", "damage_mean", "damage_std", "n_years"]
    row = summary.iloc[0]
    assert row["damage_mean"] == 2000.0
    assert row["damage_std"] == pytest.approx(1414.21, abs=0.005)
    assert row["n_years"] == 2


def test_single_year_std_is_nan(events: pd.DataFrame) -> None:
    summary = health_summary(health_by_type_year(events)).set_index("event_type")

    assert math.isnan(summary.loc["HEAT", "fatalities_std"])
    assert summary.loc["HEAT", "fatalities_mean"] == 3.0
    assert summary.loc["FLOOD", "fatalities_mean"] == 3.5
    assert summary.loc["FLOOD", "fatalities_std"] == pytest.approx(math.sqrt(0.5))
    assert summary.loc["FLOOD", "injuries_std"] == 0.0


def test_resummarizing_stage_a_output_is_idempotent(events: pd.DataFrame) -> None:
    yearly = economic_by_type_year(events)
    again = economic_by_type_year(yearly)

    pd.testing.assert_frame_equal(yearly, again)
    pd.testing.assert_frame_equal(economic_summary(yearly), economic_summary(again))


def test_near_duplicate_labels_are_not_merged() -> None:
    events = pd.DataFrame(
        {
            "event_type": ["TSTM WIND", "THUNDERSTORM WIND", "TSTM WIND "],
            "year": ["2000", "2000", "2000"],
            "fatalities": [1.0, 2.0, 3.0],
            "injuries": [0.0, 0.0, 0.0],
        }
    )

    yearly = health_by_type_year(events)

    assert sorted(yearly["event_type"]) == ["THUNDERSTORM WIND", "TSTM WIND", "TSTM WIND "]


def test_empty_input_gives_empty_summary() -> None:
    yearly = pd.DataFrame(columns=["event_type", "year", "damage"])

    summary = summarize_by_type(yearly, ["damage"])

    assert summary.empty
    assert list(summary.columns) == ["event_type", "damage_mean", "damage_std", "n_years"]


def test_missing_column_raises(events: pd.DataFrame) -> None:
    with pytest.raises(KeyError):
        health_by_type_year(events.drop(columns=["injuries"]))


def test_file_to_economic_summary(storm_file) -> None:
    events = load_storm_data(storm_file)

    summary = economic_summary(economic_by_type_year(events)).set_index("event_type")

    assert summary.loc["FLOOD", "damage_mean"] == 2000.0
    assert summary.loc["FLOOD", "damage_std"] == pytest.approx(1414.2136, abs=1e-3)
    assert summary.loc["TORNADO", "damage_mean"] == 1_262_500.0
    # lowercase "k" is left unscaled; the undated 1B row is not grouped
    assert summary.loc["TSTM WIND", "damage_mean"] == 10.0
