"""Stateless orbit helpers used for display annotations."""
from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

from satwatch.utils.constants import (
    EARTH_MU_KM3_S2 as MU,
    EARTH_RADIUS_KM as RE,
    EARTH_ROTATION_RAD_S,
    LEO_MAX_ALT_KM,
    MIN_STABLE_ALT_KM,
)


def is_stable_orbit(altitude_km: float, eccentricity: float = 0.0) -> bool:
    """Whether an orbit falls in the stable LEO band.

    Stable means 160 km <= altitude <= 2000 km and 0 <= eccentricity < 1.
    Has no influence on propagation.
    """
    return (
        MIN_STABLE_ALT_KM <= altitude_km <= LEO_MAX_ALT_KM
        and 0 <= eccentricity < 1
    )


def orbital_period(altitude_km: float) -> float:
    """Circular orbital period in seconds for an altitude in km."""
    a = altitude_km + RE
    return 2 * math.pi * math.sqrt(a ** 3 / MU)


def circular_velocity(altitude_km: float) -> float:
    """Circular orbital speed in km/s for an altitude in km."""
    return math.sqrt(MU / (altitude_km + RE))


def ground_track(position_km: ArrayLike, time_s: float) -> tuple[float, float]:
    """Sub-satellite latitude and longitude in degrees.

    Longitude is the inertial right ascension minus the Earth rotation
    accumulated over ``time_s``; it is not wrapped to [-180, 180).

    Args:
        position_km: [x, y, z] inertial position in km.
        time_s: Elapsed simulation time in seconds.

    Returns:
        Tuple of (latitude_deg, longitude_deg).

    Raises:
        ValueError: If the position is the zero vector, as reported by a
            propagator that has not been stepped yet.
    """
    x, y, z = (float(c) for c in np.asarray(position_km, dtype=np.float64))
    r = math.sqrt(x * x + y * y + z * z)
    if r == 0:
        raise ValueError("Ground track undefined for a zero position vector")
    latitude = math.asin(z / r)
    longitude = math.atan2(y, x) - time_s * EARTH_ROTATION_RAD_S
    return math.degrees(latitude), math.degrees(longitude)
