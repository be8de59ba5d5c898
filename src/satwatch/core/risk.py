from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from satwatch.data.records import ConjunctionRecord, SuggestedAction
from satwatch.utils.constants import (
    HIGH_THREAT_MISS_KM,
    HIGH_THREAT_PROBABILITY,
    MEDIUM_THREAT_MISS_KM,
    MEDIUM_THREAT_PROBABILITY,
)

logger = logging.getLogger(__name__)

_PRIORITY_ORDER = {"critical": 4, "high": 3, "medium": 2, "low": 1}
_SEVERITY = {"high": 9, "medium": 6, "low": 3}


@dataclass
class Threat:
    type: str                   # collision
    severity: int               # 3/6/9
    time_to_impact_min: float
    description: str


@dataclass
class ThreatAssessment:
    satellite_id: str
    threat_level: str           # critical/high/medium
    threats: list[Threat]
    recommended_actions: list[SuggestedAction] = field(default_factory=list)
    last_assessment: datetime | None = None


def calculate_threat_level(miss_distance_km: float, probability: float) -> str:
    """
    Classify a conjunction from miss distance and collision probability.

    Args:
        miss_distance_km: Predicted miss distance in kilometers
        probability: Collision probability

    Returns:
        "high", "medium" or "low"
    """
    if miss_distance_km < HIGH_THREAT_MISS_KM and probability > HIGH_THREAT_PROBABILITY:
        return "high"
    if miss_distance_km < MEDIUM_THREAT_MISS_KM and probability > MEDIUM_THREAT_PROBABILITY:
        return "medium"
    return "low"


def hours_until(tca: datetime, now: datetime) -> float:
    """Hours from ``now`` to ``tca``; naive datetimes are taken as UTC."""
    if tca.tzinfo is None:
        tca = tca.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (tca - now).total_seconds() / 3600


def suggest_action(conjunction: ConjunctionRecord, now: datetime | None = None) -> SuggestedAction:
    """
    Propose an operator action for a conjunction.

    High risk within 24 hours calls for an evasive maneuver, medium risk
    within 72 hours for an orbit adjustment; anything else is monitored
    with an attitude change.

    Args:
        conjunction: The conjunction to act on
        now: Reference time (defaults to current UTC time)

    Returns:
        SuggestedAction
    """
    if now is None:
        now = datetime.now(timezone.utc)
    hours = hours_until(conjunction.tca, now)

    if conjunction.risk == "high" and hours < 24:
        return SuggestedAction(
            type="evasive_maneuver",
            description=f"Execute emergency evasive maneuver - {hours:.1f}h until closest approach",
            priority="critical",
            estimated_time_to_execute_min=15,
            success_probability=0.85,
            estimated_fuel_cost=2.5,
            delta_v_m_s=5.0,
            burn_duration_s=300,
        )
    elif conjunction.risk == "medium" and hours < 72:
        return SuggestedAction(
            type="orbit_adjustment",
            description=f"Plan orbit adjustment maneuver - {hours:.1f}h until closest approach",
            priority="high",
            estimated_time_to_execute_min=30,
            success_probability=0.92,
            estimated_fuel_cost=1.2,
            delta_v_m_s=2.5,
            burn_duration_s=180,
        )
    else:
        return SuggestedAction(
            type="attitude_change",
            description=f"Monitor situation - {hours:.1f}h until closest approach",
            priority="medium",
            estimated_time_to_execute_min=5,
            success_probability=0.98,
            estimated_fuel_cost=0.1,
            delta_v_m_s=0.5,
            burn_duration_s=60,
        )


def assess_threats(
    satellite_ids: list[str],
    conjunctions: list[ConjunctionRecord],
    now: datetime | None = None,
) -> dict[str, ThreatAssessment]:
    """
    Build a threat assessment for every satellite with conjunctions.

    Args:
        satellite_ids: Tracked satellites
        conjunctions: Conjunctions, optionally carrying suggested actions
        now: Reference time (defaults to current UTC time)

    Returns:
        Mapping of satellite id to ThreatAssessment; satellites without
        conjunctions are absent
    """
    if now is None:
        now = datetime.now(timezone.utc)

    assessments: dict[str, ThreatAssessment] = {}
    for sat_id in satellite_ids:
        own = [c for c in conjunctions if c.satellite_id == sat_id]
        if not own:
            continue

        threats = [
            Threat(
                type="collision",
                severity=_SEVERITY.get(c.risk, 3),
                time_to_impact_min=hours_until(c.tca, now) * 60,
                description=f"{c.object_name} - Miss distance: {c.miss_distance_km}km",
            )
            for c in own
        ]

        if any(c.risk == "high" for c in own):
            level = "critical"
        elif any(c.risk == "medium" for c in own):
            level = "high"
        else:
            level = "medium"

        actions = [c.suggested_action for c in own if c.suggested_action is not None]
        actions.sort(key=lambda a: _PRIORITY_ORDER.get(a.priority, 0), reverse=True)

        assessments[sat_id] = ThreatAssessment(
            satellite_id=sat_id,
            threat_level=level,
            threats=threats,
            recommended_actions=actions,
            last_assessment=now,
        )

    logger.debug("Assessed threats for %d/%d satellites", len(assessments), len(satellite_ids))
    return assessments
