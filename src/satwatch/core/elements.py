"""Satellite descriptors and the Keplerian elements derived from them."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from satwatch.utils.constants import (
    DEFAULT_ECCENTRICITY,
    EARTH_MU_KM3_S2 as MU,
    EARTH_RADIUS_KM as RE,
)

logger = logging.getLogger(__name__)


class OrbitFamily(str, Enum):
    """Orbit family tag selecting which family parameters apply."""

    LEO = "LEO"
    POLAR = "Polar"


@dataclass(frozen=True)
class LeoParameters:
    """LEO-specific parameters.

    Attributes:
        eccentricity: Orbital eccentricity; ``None`` means the default of 0.01.
        argument_of_periapsis_deg: Argument of periapsis in degrees.
    """

    eccentricity: float | None = None
    argument_of_periapsis_deg: float = 0.0


@dataclass(frozen=True)
class PolarParameters:
    """Polar-specific parameters.

    Attributes:
        raan_deg: Right ascension of the ascending node in degrees.
        mean_anomaly_deg: Mean anomaly at epoch in degrees.
    """

    raan_deg: float = 0.0
    mean_anomaly_deg: float = 0.0


FamilyParameters = Union[LeoParameters, PolarParameters]

_FAMILY_TYPES: dict[OrbitFamily, type] = {
    OrbitFamily.LEO: LeoParameters,
    OrbitFamily.POLAR: PolarParameters,
}


@dataclass(frozen=True)
class SatelliteDescriptor:
    """User-supplied description of a simulated satellite.

    Attributes:
        altitude_km: Altitude above the mean Earth radius in km.
        inclination_deg: Orbital inclination in degrees.
        velocity_km_s: Nominal speed in km/s (informational only).
        orbit_type: Orbit family tag.
        family: Family-specific parameters matching ``orbit_type``, or None
            for all defaults.
        id: Satellite identifier used by fleets.
        name: Display name.
    """

    altitude_km: float
    inclination_deg: float
    velocity_km_s: float = 0.0
    orbit_type: OrbitFamily = OrbitFamily.LEO
    family: FamilyParameters | None = None
    id: str | None = None
    name: str = ""

    def __post_init__(self) -> None:
        orbit_type = OrbitFamily(self.orbit_type)
        object.__setattr__(self, "orbit_type", orbit_type)
        expected = _FAMILY_TYPES[orbit_type]
        if self.family is not None and not isinstance(self.family, expected):
            raise ValueError(
                f"{orbit_type.value} satellite cannot carry {type(self.family).__name__}"
            )

    @property
    def parameters(self) -> FamilyParameters:
        """Family parameters with defaults filled in."""
        if self.family is not None:
            return self.family
        return _FAMILY_TYPES[self.orbit_type]()

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> SatelliteDescriptor:
        """Build a descriptor from a dashboard satellite record.

        Args:
            record: Mapping with camelCase keys (``altitude``, ``inclination``,
                ``velocity``, ``orbitType`` and the family-specific fields).
                An explicit ``eccentricity`` of 0 is kept as a circular orbit;
                only a missing or null value falls back to the 0.01 default.

        Returns:
            A SatelliteDescriptor.

        Raises:
            ValueError: If required fields are missing or the orbit type is unknown.
        """
        try:
            altitude = float(record["altitude"])
            inclination = float(record["inclination"])
            orbit_type = OrbitFamily(record.get("orbitType", OrbitFamily.LEO.value))
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Invalid satellite record: %s", e)
            raise ValueError(f"Invalid satellite record: {e}")

        family: FamilyParameters
        if orbit_type is OrbitFamily.LEO:
            eccentricity = record.get("eccentricity")
            family = LeoParameters(
                eccentricity=float(eccentricity) if eccentricity is not None else None,
                argument_of_periapsis_deg=float(record.get("argumentOfPeriapsis") or 0.0),
            )
        else:
            family = PolarParameters(
                raan_deg=float(record.get("rightAscensionOfAscendingNode") or 0.0),
                mean_anomaly_deg=float(record.get("meanAnomaly") or 0.0),
            )

        sat_id = record.get("id")
        return cls(
            altitude_km=altitude,
            inclination_deg=inclination,
            velocity_km_s=float(record.get("velocity") or 0.0),
            orbit_type=orbit_type,
            family=family,
            id=str(sat_id) if sat_id is not None else None,
            name=str(record.get("name", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Inverse of :meth:`from_dict`."""
        record: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "altitude": self.altitude_km,
            "inclination": self.inclination_deg,
            "velocity": self.velocity_km_s,
            "orbitType": self.orbit_type.value,
        }
        params = self.parameters
        if isinstance(params, LeoParameters):
            record["eccentricity"] = params.eccentricity
            record["argumentOfPeriapsis"] = params.argument_of_periapsis_deg
        else:
            record["rightAscensionOfAscendingNode"] = params.raan_deg
            record["meanAnomaly"] = params.mean_anomaly_deg
        return record


@dataclass(frozen=True)
class OrbitalElements:
    """Keplerian elements of a simulated orbit.

    Attributes:
        semi_major_axis_km: Semi-major axis in km.
        inclination_rad: Inclination in radians.
        eccentricity: Eccentricity (dimensionless).
        argument_of_periapsis_rad: Argument of periapsis in radians.
        raan_rad: Right ascension of the ascending node in radians.
        mean_anomaly_rad: Mean anomaly at simulation time zero in radians.
        mean_motion_rad_s: Mean motion in rad/s.
        orbital_period_s: Orbital period in seconds.
    """

    semi_major_axis_km: float
    inclination_rad: float
    eccentricity: float
    argument_of_periapsis_rad: float
    raan_rad: float
    mean_anomaly_rad: float
    mean_motion_rad_s: float
    orbital_period_s: float

    @classmethod
    def from_descriptor(cls, descriptor: SatelliteDescriptor) -> OrbitalElements:
        """Derive elements from a satellite descriptor.

        Semi-major axis is altitude plus the mean Earth radius; period and
        mean motion follow from Kepler's third law. LEO satellites take
        eccentricity and argument of periapsis from their parameters, polar
        satellites take RAAN and mean anomaly; the remaining angles are zero.
        """
        a = descriptor.altitude_km + RE
        period = 2 * math.pi * math.sqrt(a ** 3 / MU)

        eccentricity = 0.0
        argp = 0.0
        raan = 0.0
        mean_anomaly = 0.0

        params = descriptor.parameters
        if isinstance(params, LeoParameters):
            eccentricity = DEFAULT_ECCENTRICITY if params.eccentricity is None else params.eccentricity
            argp = math.radians(params.argument_of_periapsis_deg)
        else:
            raan = math.radians(params.raan_deg)
            mean_anomaly = math.radians(params.mean_anomaly_deg)

        return cls(
            semi_major_axis_km=a,
            inclination_rad=math.radians(descriptor.inclination_deg),
            eccentricity=eccentricity,
            argument_of_periapsis_rad=argp,
            raan_rad=raan,
            mean_anomaly_rad=mean_anomaly,
            mean_motion_rad_s=2 * math.pi / period,
            orbital_period_s=period,
        )
