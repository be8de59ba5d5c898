from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from satwatch.core.risk import (
    ThreatAssessment,
    assess_threats,
    calculate_threat_level,
    hours_until,
    suggest_action,
)
from satwatch.data.records import ConjunctionRecord

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _conjunction(risk: str, hours: float, sat_id: str = "25544", miss: float = 1.0) -> ConjunctionRecord:
    return ConjunctionRecord(
        satellite_id=sat_id,
        object_name=f"DEBRIS-{risk}-{hours}",
        tca=NOW + timedelta(hours=hours),
        miss_distance_km=miss,
        relative_velocity_km_s=10.0,
        probability=1e-5,
        risk=risk,
    )


class TestThreatLevel:
    """Threat level from miss distance and probability."""

    def test_high(self):
        assert calculate_threat_level(0.5, 2e-5) == "high"

    def test_close_but_unlikely_is_medium(self):
        assert calculate_threat_level(0.5, 5e-6) == "medium"

    def test_medium(self):
        assert calculate_threat_level(3.0, 1e-5) == "medium"

    def test_probability_boundaries_are_exclusive(self):
        assert calculate_threat_level(0.5, 1e-5) == "medium"
        assert calculate_threat_level(3.0, 1e-6) == "low"

    def test_far(self):
        assert calculate_threat_level(5.0, 1.0) == "low"


class TestSuggestAction:
    def test_high_risk_soon_is_evasive(self):
        action = suggest_action(_conjunction("high", 1), NOW)
        assert action.type == "evasive_maneuver"
        assert action.priority == "critical"
        assert action.delta_v_m_s == 5.0
        assert action.burn_duration_s == 300
        assert "1.0h until closest approach" in action.description

    def test_high_risk_later_is_monitored(self):
        action = suggest_action(_conjunction("high", 30), NOW)
        assert action.type == "attitude_change"
        assert action.priority == "medium"

    def test_medium_risk_within_three_days(self):
        action = suggest_action(_conjunction("medium", 48), NOW)
        assert action.type == "orbit_adjustment"
        assert action.priority == "high"
        assert action.success_probability == 0.92

    def test_medium_risk_beyond_three_days(self):
        assert suggest_action(_conjunction("medium", 80), NOW).type == "attitude_change"

    def test_low_risk(self):
        action = suggest_action(_conjunction("low", 2), NOW)
        assert action.type == "attitude_change"
        assert action.estimated_fuel_cost == 0.1

    def test_naive_tca_is_utc(self):
        c = _conjunction("high", 2)
        c.tca = c.tca.replace(tzinfo=None)
        assert hours_until(c.tca, NOW) == pytest.approx(2.0)


class TestAssessThreats:
    def test_only_satellites_with_conjunctions(self):
        result = assess_threats(["25544", "43013"], [_conjunction("low", 5)], NOW)
        assert list(result) == ["25544"]
        assert isinstance(result["25544"], ThreatAssessment)

    def test_levels(self):
        conj = [
            _conjunction("high", 1, "a"),
            _conjunction("low", 1, "a"),
            _conjunction("medium", 1, "b"),
            _conjunction("low", 1, "c"),
        ]
        result = assess_threats(["a", "b", "c"], conj, NOW)
        assert result["a"].threat_level == "critical"
        assert result["b"].threat_level == "high"
        assert result["c"].threat_level == "medium"

    def test_threat_details(self):
        result = assess_threats(["a"], [_conjunction("medium", 2, "a", miss=2.3)], NOW)
        [threat] = result["a"].threats
        assert threat.type == "collision"
        assert threat.severity == 6
        assert threat.time_to_impact_min == pytest.approx(120)
        assert threat.description.endswith("Miss distance: 2.3km")
        assert result["a"].last_assessment == NOW

    def test_actions_sorted_by_priority(self):
        conj = [_conjunction("low", 100, "a"), _conjunction("high", 1, "a"), _conjunction("medium", 10, "a")]
        for c in conj:
            c.suggested_action = suggest_action(c, NOW)
        result = assess_threats(["a"], conj, NOW)
        priorities = [a.priority for a in result["a"].recommended_actions]
        assert priorities == ["critical", "high", "medium"]

    def test_naive_now_is_utc(self):
        naive_now = NOW.replace(tzinfo=None)
        assert hours_until(NOW + timedelta(hours=3), naive_now) == pytest.approx(3.0)
        action = suggest_action(_conjunction("high", 1), naive_now)
        assert action.type == "evasive_maneuver"
        result = assess_threats(["25544"], [_conjunction("medium", 2)], naive_now)
        assert result["25544"].threats[0].time_to_impact_min == pytest.approx(120)
