"""A collection of propagators keyed by satellite id."""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from typing import Any

from satwatch.core.elements import SatelliteDescriptor
from satwatch.core.propagation import OrbitalSnapshot, OrbitPropagator, StateVector
from satwatch.core.screening import CollisionPolicy, CollisionPrediction, screen_fleet
from satwatch.utils.constants import SIMULATION_TIME_STEP_S

logger = logging.getLogger(__name__)


class Fleet:
    """Owns one propagator per tracked satellite.

    Propagators are created on :meth:`add` and dropped on :meth:`remove`;
    nothing else creates or shares them. All operations hold the fleet lock,
    so a running simulation never interleaves with callers.
    """

    def __init__(self) -> None:
        self._propagators: dict[str, OrbitPropagator] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._propagators)

    def __contains__(self, satellite_id: object) -> bool:
        with self._lock:
            return satellite_id in self._propagators

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._propagators))

    def ids(self) -> list[str]:
        with self._lock:
            return list(self._propagators)

    def add(self, descriptor: SatelliteDescriptor) -> OrbitPropagator:
        """Start tracking a satellite.

        Raises:
            ValueError: If the descriptor has no id or the id is already tracked.
        """
        if descriptor.id is None:
            raise ValueError("Satellite descriptor needs an id to join a fleet")
        with self._lock:
            if descriptor.id in self._propagators:
                raise ValueError(f"Satellite {descriptor.id!r} is already tracked")
            propagator = OrbitPropagator(descriptor)
            self._propagators[descriptor.id] = propagator
        logger.debug("Added satellite %s (%s)", descriptor.id, descriptor.name)
        return propagator

    def remove(self, satellite_id: str) -> OrbitPropagator:
        """Stop tracking a satellite and return its propagator.

        Raises:
            KeyError: If the id is not tracked.
        """
        with self._lock:
            propagator = self._propagators.pop(satellite_id)
        logger.debug("Removed satellite %s", satellite_id)
        return propagator

    def get(self, satellite_id: str) -> OrbitPropagator | None:
        with self._lock:
            return self._propagators.get(satellite_id)

    def update(self, satellite_id: str, **changes: Any) -> None:
        """Override descriptor fields of a tracked satellite, keeping its state.

        Raises:
            KeyError: If the id is not tracked.
            ValueError: If ``changes`` tries to rename the satellite.
        """
        if "id" in changes and changes["id"] != satellite_id:
            raise ValueError("Satellite ids cannot be changed; remove and add instead")
        with self._lock:
            self._propagators[satellite_id].update_parameters(**changes)

    def propagators(self) -> dict[str, OrbitPropagator]:
        """Shallow copy of the id to propagator mapping."""
        with self._lock:
            return dict(self._propagators)

    def tick(self, time_step_s: float = SIMULATION_TIME_STEP_S) -> dict[str, StateVector]:
        """Advance every satellite by ``time_step_s``, one after another.

        Returns:
            Mapping of satellite id to its new state.
        """
        states: dict[str, StateVector] = {}
        with self._lock:
            for sat_id, propagator in self._propagators.items():
                propagator.step(time_step_s)
                propagator.compute_velocity()
                states[sat_id] = propagator.current_state()
        logger.debug("Fleet tick of %.1f s over %d satellites", time_step_s, len(states))
        return states

    def reset(self) -> None:
        with self._lock:
            for propagator in self._propagators.values():
                propagator.reset()

    def snapshots(self) -> dict[str, OrbitalSnapshot]:
        with self._lock:
            return {sid: p.orbital_parameters() for sid, p in self._propagators.items()}

    def predict_collisions(self, policy: CollisionPolicy | None = None) -> list[CollisionPrediction]:
        """Medium and high risk pairs over the policy window."""
        with self._lock:
            return screen_fleet(self._propagators, policy)

    def collision_alerts(self, policy: CollisionPolicy | None = None) -> list[str]:
        """Human-readable alerts for every non-low risk pair."""
        alerts = []
        with self._lock:
            for prediction in screen_fleet(self._propagators, policy):
                first = self._propagators[prediction.primary_id].descriptor
                second = self._propagators[prediction.secondary_id].descriptor
                alerts.append(
                    f"{prediction.risk.upper()} collision risk between "
                    f"{first.name or first.id} and {second.name or second.id} - "
                    f"Min distance: {prediction.min_distance_km:.2f}km"
                )
        return alerts
