"""Two-body Keplerian orbit propagation."""
from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from satwatch.core.elements import OrbitalElements, SatelliteDescriptor
from satwatch.utils.constants import (
    DEFAULT_TIME_STEP_S,
    EARTH_MU_KM3_S2 as MU,
    EARTH_RADIUS_KM as RE,
    KEPLER_MAX_ITERATIONS,
    KEPLER_TOLERANCE,
)

logger = logging.getLogger(__name__)


@dataclass
class StateVector:
    """Position and velocity in the Earth-centered inertial frame.

    Attributes:
        position_km: [x, y, z] position in km.
        velocity_km_s: [vx, vy, vz] velocity in km/s.
        simulation_time_s: Elapsed simulation time of this state.
    """

    position_km: NDArray[np.float64]  # shape (3,)
    velocity_km_s: NDArray[np.float64]  # shape (3,)
    simulation_time_s: float


@dataclass(frozen=True)
class KeplerSolution:
    """Result of a bounded Newton-Raphson solve of Kepler's equation.

    Attributes:
        eccentric_anomaly: Best estimate of E in radians.
        iterations: Number of Newton updates applied.
        residual: |E - e sin E - M| at the returned estimate.
    """

    eccentric_anomaly: float
    iterations: int
    residual: float

    @property
    def converged(self) -> bool:
        return self.residual < KEPLER_TOLERANCE


@dataclass
class OrbitalSnapshot:
    """Read-only view of a propagator for display."""

    orbital_period_hours: float
    altitude_km: float
    eccentricity: float
    inclination_deg: float
    position_km: NDArray[np.float64]
    velocity_km_s: NDArray[np.float64]
    simulation_time_s: float

    def to_dict(self) -> dict[str, Any]:
        """Dashboard record with camelCase keys and x/y/z vectors."""
        return {
            "orbitalPeriod": self.orbital_period_hours,
            "altitude": self.altitude_km,
            "eccentricity": self.eccentricity,
            "inclination": self.inclination_deg,
            "currentPosition": _xyz(self.position_km),
            "currentVelocity": _xyz(self.velocity_km_s),
            "simulationTime": self.simulation_time_s,
        }


def _xyz(vec: NDArray[np.float64]) -> dict[str, float]:
    return {"x": float(vec[0]), "y": float(vec[1]), "z": float(vec[2])}


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
    tolerance: float = KEPLER_TOLERANCE,
) -> KeplerSolution:
    """Solve Kepler's equation M = E - e sin E for the eccentric anomaly.

    Newton-Raphson starting from E = M. Stops once the residual drops below
    ``tolerance``; after ``max_iterations`` updates the current estimate is
    returned whatever its residual.

    Args:
        mean_anomaly: Mean anomaly M in radians.
        eccentricity: Eccentricity e in [0, 1).
        max_iterations: Upper bound on Newton updates.
        tolerance: Convergence threshold on |f(E)|.

    Returns:
        KeplerSolution with the estimate, update count and final residual.
    """
    E = mean_anomaly
    iterations = 0

    for _ in range(max_iterations):
        f = E - eccentricity * math.sin(E) - mean_anomaly
        if abs(f) < tolerance:
            break
        fp = 1.0 - eccentricity * math.cos(E)
        E = E - f / fp
        iterations += 1

    residual = abs(E - eccentricity * math.sin(E) - mean_anomaly)
    if residual >= tolerance:
        logger.warning(
            "Kepler solve not converged after %d iterations (e=%.6f, residual=%.3e)",
            iterations, eccentricity, residual,
        )
    return KeplerSolution(eccentric_anomaly=E, iterations=iterations, residual=residual)


class OrbitPropagator:
    """Propagates one satellite along a two-body Keplerian orbit.

    The propagator owns the simulation state of its satellite: elapsed
    simulation time, current position and current velocity. Position and
    velocity read as zero vectors until the first :meth:`step`.

    Example::

        prop = OrbitPropagator(SatelliteDescriptor(altitude_km=408, inclination_deg=51.6))
        prop.step(60)
        prop.compute_velocity()
        print(prop.orbital_parameters())
    """

    def __init__(self, descriptor: SatelliteDescriptor) -> None:
        self.descriptor = descriptor
        self.time_s = 0.0
        self.position_km = np.zeros(3)
        self.velocity_km_s = np.zeros(3)
        self.elements = OrbitalElements.from_descriptor(descriptor)

    def __repr__(self) -> str:
        return (
            f"OrbitPropagator(id={self.descriptor.id!r}, "
            f"a={self.elements.semi_major_axis_km:.1f} km, t={self.time_s:.1f} s)"
        )

    def position_at(self, elapsed_s: float) -> NDArray[np.float64]:
        """Position in km at an absolute elapsed simulation time.

        Does not modify the propagator.
        """
        el = self.elements
        e = el.eccentricity

        M = el.mean_anomaly_rad + el.mean_motion_rad_s * elapsed_s
        E = solve_kepler(M, e).eccentric_anomaly

        nu = 2 * math.atan2(
            math.sqrt(1 + e) * math.sin(E / 2),
            math.sqrt(1 - e) * math.cos(E / 2),
        )
        r = el.semi_major_axis_km * (1 - e * math.cos(E))

        x_orb = r * math.cos(nu)
        y_orb = r * math.sin(nu)

        cos_raan, sin_raan = math.cos(el.raan_rad), math.sin(el.raan_rad)
        cos_inc, sin_inc = math.cos(el.inclination_rad), math.sin(el.inclination_rad)
        cos_argp, sin_argp = math.cos(el.argument_of_periapsis_rad), math.sin(el.argument_of_periapsis_rad)

        # 3-1-3 rotation (RAAN, inclination, argument of periapsis) to ECI
        x = (x_orb * (cos_raan * cos_argp - sin_raan * sin_argp * cos_inc)
             - y_orb * (cos_raan * sin_argp + sin_raan * cos_argp * cos_inc))
        y = (x_orb * (sin_raan * cos_argp + cos_raan * sin_argp * cos_inc)
             - y_orb * (sin_raan * sin_argp - cos_raan * cos_argp * cos_inc))
        z = x_orb * sin_argp * sin_inc + y_orb * cos_argp * sin_inc

        return np.array([x, y, z], dtype=np.float64)

    def step(self, delta_seconds: float = DEFAULT_TIME_STEP_S) -> NDArray[np.float64]:
        """Advance simulation time and recompute the position.

        Args:
            delta_seconds: Simulated seconds to advance.

        Returns:
            The new position in km.
        """
        self.time_s += delta_seconds
        self.position_km = self.position_at(self.time_s)
        return self.position_km

    def compute_velocity(self) -> NDArray[np.float64]:
        """Recompute the velocity from the current position.

        The magnitude follows the vis-viva equation. The direction is a
        planar approximation for display: perpendicular to the position in
        the x-y plane, with no z component. It is not the true orbital
        velocity vector of an inclined orbit.

        Returns:
            The new velocity in km/s (zero before the first step).
        """
        r = float(np.linalg.norm(self.position_km))
        if r == 0.0:
            logger.debug("compute_velocity called before first step; velocity stays zero")
            self.velocity_km_s = np.zeros(3)
            return self.velocity_km_s

        speed = math.sqrt(MU * (2 / r - 1 / self.elements.semi_major_axis_km))
        angle = math.atan2(self.position_km[1], self.position_km[0]) + math.pi / 2

        self.velocity_km_s = np.array(
            [speed * math.cos(angle), speed * math.sin(angle), 0.0], dtype=np.float64
        )
        return self.velocity_km_s

    def orbital_parameters(self) -> OrbitalSnapshot:
        """Snapshot of the orbit and current state."""
        el = self.elements
        return OrbitalSnapshot(
            orbital_period_hours=el.orbital_period_s / 3600,
            altitude_km=el.semi_major_axis_km - RE,
            eccentricity=el.eccentricity,
            inclination_deg=math.degrees(el.inclination_rad),
            position_km=self.position_km.copy(),
            velocity_km_s=self.velocity_km_s.copy(),
            simulation_time_s=self.time_s,
        )

    def current_state(self) -> StateVector:
        return StateVector(
            position_km=self.position_km.copy(),
            velocity_km_s=self.velocity_km_s.copy(),
            simulation_time_s=self.time_s,
        )

    def reset(self) -> None:
        """Return to simulation time zero and rederive the elements."""
        self.time_s = 0.0
        self.position_km = np.zeros(3)
        self.velocity_km_s = np.zeros(3)
        self.elements = OrbitalElements.from_descriptor(self.descriptor)

    def update_parameters(self, **changes: Any) -> None:
        """Override descriptor fields and rederive the elements.

        Simulation time, position and velocity are kept. Changing
        ``orbit_type`` without passing ``family`` drops the old family
        parameters in favour of the new family's defaults.

        Raises:
            ValueError: If the resulting descriptor is inconsistent.
        """
        if "orbit_type" in changes and "family" not in changes:
            if changes["orbit_type"] != self.descriptor.orbit_type:
                changes["family"] = None
        self.descriptor = dataclasses.replace(self.descriptor, **changes)
        self.elements = OrbitalElements.from_descriptor(self.descriptor)
        logger.debug("Updated parameters for %s: %s", self.descriptor.id, sorted(changes))
