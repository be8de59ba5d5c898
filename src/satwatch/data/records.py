"""Plain records consumed from upstream space-data services.

The shapes follow the JSON returned by the conjunction feed, NASA DONKI
CME analyses and NOAA SWPC planetary K-index products. Fetching them is
the caller's job; these classes only validate and convert.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


def _parse_datetime(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, assuming UTC when no offset is given."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass
class SuggestedAction:
    """An operator action proposed for a threat."""

    type: str               # evasive_maneuver / orbit_adjustment / attitude_change / monitor
    description: str
    priority: str           # critical / high / medium / low
    estimated_time_to_execute_min: float
    success_probability: float
    estimated_fuel_cost: float | None = None
    delta_v_m_s: float | None = None
    burn_duration_s: float | None = None


@dataclass
class ConjunctionRecord:
    """A predicted close approach involving one tracked satellite.

    Attributes:
        satellite_id: Id of the tracked satellite.
        object_name: Name of the other object.
        tca: Time of closest approach (UTC).
        miss_distance_km: Predicted miss distance in km.
        relative_velocity_km_s: Relative velocity in km/s.
        probability: Collision probability.
        risk: ``low``, ``medium`` or ``high``.
        suggested_action: Filled in by threat processing.
    """

    satellite_id: str
    object_name: str
    tca: datetime
    miss_distance_km: float
    relative_velocity_km_s: float
    probability: float
    risk: str
    suggested_action: SuggestedAction | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConjunctionRecord:
        """Parse a camelCase conjunction record.

        Raises:
            ValueError: If required fields are missing or malformed.
        """
        try:
            tca = data["tca"]
            return cls(
                satellite_id=str(data["satelliteId"]),
                object_name=str(data["objectName"]),
                tca=tca if isinstance(tca, datetime) else _parse_datetime(tca),
                miss_distance_km=float(data["missDistance"]),
                relative_velocity_km_s=float(data.get("relativeVelocity", 0.0)),
                probability=float(data.get("probability", 0.0)),
                risk=str(data["risk"]).lower(),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Invalid conjunction record: %s", e)
            raise ValueError(f"Invalid conjunction record: {e}")


@dataclass
class CMEPrediction:
    """One DONKI CME arrival prediction."""

    method: str
    predicted_arrival: datetime
    submission_time: datetime
    lead_time_hours: float | None
    kp_lower: float | None
    kp_upper: float | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CMEPrediction:
        """Parse a DONKI prediction record.

        Raises:
            ValueError: If required fields are missing or malformed.
        """
        try:
            lead = data.get("leadTimeInHrs")
            lower = data.get("predictedMaxKpLowerRange")
            upper = data.get("predictedMaxKpUpperRange")
            return cls(
                method=str(data["predictedMethodName"]),
                predicted_arrival=_parse_datetime(data["predictedArrivalTime"]),
                submission_time=_parse_datetime(data["submissionTime"]),
                lead_time_hours=float(lead) if lead is not None else None,
                kp_lower=float(lower) if lower is not None else None,
                kp_upper=float(upper) if upper is not None else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Invalid CME prediction record: %s", e)
            raise ValueError(f"Invalid CME prediction record: {e}")


@dataclass
class KpReading:
    """A planetary K-index sample from NOAA SWPC."""

    time: datetime
    kp_index: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KpReading:
        try:
            return cls(time=_parse_datetime(data["time_tag"]), kp_index=float(data["kp_index"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Invalid Kp reading: %s", e)
            raise ValueError(f"Invalid Kp reading: {e}")


@dataclass
class SpaceWeatherAlert:
    """A space-weather alert affecting the tracked satellites."""

    id: str
    type: str               # cme / geomagnetic
    severity: str
    message: str
    timestamp: datetime
    affected_satellites: list[str] = field(default_factory=list)
    suggested_action: SuggestedAction | None = None
