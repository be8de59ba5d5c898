"""TLE (Two-Line Element) parsing and conversion to simulated satellites.

Lines are decoded with the sgp4 library; the resulting mean elements are
mapped onto a :class:`SatelliteDescriptor` so catalog objects can be
simulated alongside user-defined satellites.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sgp4.api import Satrec, WGS72

from satwatch.core.elements import (
    LeoParameters,
    OrbitFamily,
    PolarParameters,
    SatelliteDescriptor,
)
from satwatch.utils.constants import (
    EARTH_MU_KM3_S2 as MU,
    EARTH_RADIUS_KM as RE,
    POLAR_MAX_INCLINATION_DEG,
    POLAR_MIN_INCLINATION_DEG,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TLE:
    """A parsed Two-Line Element set.

    Attributes:
        name: Satellite name (line 0, if provided).
        line1: Raw TLE line 1.
        line2: Raw TLE line 2.
        norad_id: NORAD catalog number.
        epoch: Epoch as a UTC datetime.
        inclination_deg: Orbital inclination in degrees.
        raan_deg: Right ascension of ascending node in degrees.
        eccentricity: Orbital eccentricity (dimensionless).
        arg_perigee_deg: Argument of perigee in degrees.
        mean_anomaly_deg: Mean anomaly in degrees.
        mean_motion_rev_per_day: Mean motion in revolutions per day.
    """

    name: str
    line1: str
    line2: str
    norad_id: int
    epoch: datetime
    inclination_deg: float
    raan_deg: float
    eccentricity: float
    arg_perigee_deg: float
    mean_anomaly_deg: float
    mean_motion_rev_per_day: float

    @classmethod
    def from_lines(cls, line1: str, line2: str, name: str = "") -> TLE:
        """Parse a TLE from its two element lines.

        Args:
            line1: TLE line 1 (69 characters).
            line2: TLE line 2 (69 characters).
            name: Optional satellite name (line 0).

        Returns:
            A parsed TLE object.

        Raises:
            ValueError: If the TLE lines are malformed.
        """
        line1 = line1.strip()
        line2 = line2.strip()

        if len(line1) != 69 or not line1.startswith("1"):
            logger.error("Invalid TLE line 1: %r", line1)
            raise ValueError(f"Invalid TLE line 1: {line1!r}")
        if len(line2) != 69 or not line2.startswith("2"):
            logger.error("Invalid TLE line 2: %r", line2)
            raise ValueError(f"Invalid TLE line 2: {line2!r}")

        sat = Satrec.twoline2rv(line1, line2, WGS72)

        year = sat.epochyr + (2000 if sat.epochyr < 57 else 1900)
        epoch = datetime(year, 1, 1, tzinfo=timezone.utc) + timedelta(days=sat.epochdays - 1)

        tle = cls(
            name=name.strip(),
            line1=line1,
            line2=line2,
            norad_id=sat.satnum,
            epoch=epoch,
            inclination_deg=math.degrees(sat.inclo),
            raan_deg=math.degrees(sat.nodeo),
            eccentricity=sat.ecco,
            arg_perigee_deg=math.degrees(sat.argpo),
            mean_anomaly_deg=math.degrees(sat.mo),
            mean_motion_rev_per_day=sat.no_kozai * 1440 / (2 * math.pi),
        )
        logger.debug("Parsed TLE for NORAD %d (epoch %s)", tle.norad_id, epoch.isoformat())
        return tle

    @property
    def semi_major_axis_km(self) -> float:
        """Semi-major axis from the mean motion via Kepler's third law."""
        n_rad_s = self.mean_motion_rev_per_day * 2 * math.pi / 86400.0
        return (MU / n_rad_s ** 2) ** (1.0 / 3.0)

    @property
    def altitude_km(self) -> float:
        """Mean altitude above the mean Earth radius."""
        return self.semi_major_axis_km - RE

    @property
    def orbit_family(self) -> OrbitFamily:
        if POLAR_MIN_INCLINATION_DEG <= self.inclination_deg <= POLAR_MAX_INCLINATION_DEG:
            return OrbitFamily.POLAR
        return OrbitFamily.LEO

    def to_descriptor(self) -> SatelliteDescriptor:
        """Map the TLE onto a simulated satellite.

        Near-polar orbits keep RAAN and mean anomaly, all others keep
        eccentricity and argument of perigee. The nominal speed is the
        circular speed at the mean radius.
        """
        family = self.orbit_family
        params: LeoParameters | PolarParameters
        if family is OrbitFamily.POLAR:
            params = PolarParameters(raan_deg=self.raan_deg, mean_anomaly_deg=self.mean_anomaly_deg)
        else:
            params = LeoParameters(
                eccentricity=self.eccentricity, argument_of_periapsis_deg=self.arg_perigee_deg
            )

        return SatelliteDescriptor(
            altitude_km=self.altitude_km,
            inclination_deg=self.inclination_deg,
            velocity_km_s=math.sqrt(MU / self.semi_major_axis_km),
            orbit_type=family,
            family=params,
            id=str(self.norad_id),
            name=self.name or str(self.norad_id),
        )

    def __str__(self) -> str:
        header = f"{self.name}\n" if self.name else ""
        return f"{header}{self.line1}\n{self.line2}"


def parse_tle(text: str) -> list[TLE]:
    """Parse one or more TLEs from text.

    Handles both 2-line and 3-line (with name) formats, as served by
    CelesTrak's ``FORMAT=tle`` endpoint.

    Args:
        text: Raw TLE text, one or more TLE sets separated by newlines.

    Returns:
        A list of parsed TLE objects.
    """
    lines = [l.rstrip() for l in text.strip().splitlines() if l.strip()]
    tles: list[TLE] = []
    i = 0

    while i < len(lines):
        if lines[i].startswith("1 ") and i + 1 < len(lines) and lines[i + 1].startswith("2 "):
            tles.append(TLE.from_lines(lines[i], lines[i + 1]))
            i += 2
        elif (
            not lines[i].startswith("1 ")
            and not lines[i].startswith("2 ")
            and i + 2 < len(lines)
            and lines[i + 1].startswith("1 ")
            and lines[i + 2].startswith("2 ")
        ):
            name = lines[i][2:] if lines[i].startswith("0 ") else lines[i]
            tles.append(TLE.from_lines(lines[i + 1], lines[i + 2], name=name))
            i += 3
        else:
            i += 1  # skip unrecognized lines

    logger.debug("Parsed %d TLEs from text", len(tles))
    return tles
