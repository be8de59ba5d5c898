"""Close-approach screening between simulated satellites.

The heuristic samples predicted positions over a short forward window and
reports the smallest sampled separation. It gives no guarantee beyond the
sampled minimum: a closer approach between two samples goes unseen.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

from satwatch.core.propagation import OrbitPropagator
from satwatch.utils.constants import (
    DEFAULT_SCREENING_HORIZON_S,
    DEFAULT_SCREENING_STEP_S,
    HIGH_RISK_DISTANCE_KM,
    MEDIUM_RISK_DISTANCE_KM,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollisionPolicy:
    """Sampling policy of the collision heuristic.

    Attributes:
        horizon_s: Forward window sampled from each propagator's current time.
        step_s: Spacing between samples.
        high_km: Separation below which the risk is ``high``.
        medium_km: Separation below which the risk is ``medium``.
    """

    horizon_s: float = DEFAULT_SCREENING_HORIZON_S
    step_s: float = DEFAULT_SCREENING_STEP_S
    high_km: float = HIGH_RISK_DISTANCE_KM
    medium_km: float = MEDIUM_RISK_DISTANCE_KM

    def __post_init__(self) -> None:
        if self.step_s <= 0:
            raise ValueError(f"step_s must be positive, got {self.step_s}")
        if self.horizon_s < 0:
            raise ValueError(f"horizon_s must be non-negative, got {self.horizon_s}")

    def offsets(self) -> NDArray[np.float64]:
        """Sample offsets in seconds, 0 through the horizon inclusive."""
        count = int(self.horizon_s // self.step_s) + 1
        return np.arange(count, dtype=np.float64) * self.step_s

    def tier(self, distance_km: float) -> str:
        if distance_km < self.high_km:
            return "high"
        if distance_km < self.medium_km:
            return "medium"
        return "low"


@dataclass
class CollisionPrediction:
    """Sampled closest approach between two propagators.

    Attributes:
        risk: ``high``, ``medium`` or ``low``.
        min_distance_km: Smallest sampled separation in km.
        time_offset_s: Offset from the current simulation time of that sample.
        primary_id: Satellite id of the first object, when screened from a fleet.
        secondary_id: Satellite id of the second object, when screened from a fleet.
    """

    risk: str
    min_distance_km: float
    time_offset_s: float
    primary_id: str | None = None
    secondary_id: str | None = None


def _sample(propagator: OrbitPropagator, offsets: NDArray[np.float64]) -> NDArray[np.float64]:
    """Positions of one propagator at its current time plus each offset, shape (n, 3)."""
    t0 = propagator.time_s
    return np.array([propagator.position_at(t0 + dt) for dt in offsets], dtype=np.float64)


def predict_collision_risk(
    first: OrbitPropagator,
    second: OrbitPropagator,
    policy: CollisionPolicy | None = None,
) -> CollisionPrediction:
    """Estimate collision risk between two propagators.

    Both objects are sampled forward from their own current simulation
    time; neither propagator is modified.

    Args:
        first: First propagator.
        second: Second propagator.
        policy: Sampling policy. Defaults to :class:`CollisionPolicy`.

    Returns:
        CollisionPrediction for the sampled minimum separation.
    """
    policy = policy or CollisionPolicy()
    offsets = policy.offsets()

    separations = np.linalg.norm(_sample(first, offsets) - _sample(second, offsets), axis=1)
    idx = int(np.argmin(separations))
    min_distance = float(separations[idx])

    logger.debug(
        "Collision risk %s/%s: min %.3f km at +%.0f s over %d samples",
        first.descriptor.id, second.descriptor.id, min_distance, offsets[idx], len(offsets),
    )
    return CollisionPrediction(
        risk=policy.tier(min_distance),
        min_distance_km=min_distance,
        time_offset_s=float(offsets[idx]),
        primary_id=first.descriptor.id,
        secondary_id=second.descriptor.id,
    )


def screen_fleet(
    propagators: Mapping[str, OrbitPropagator],
    policy: CollisionPolicy | None = None,
) -> list[CollisionPrediction]:
    """Screen every pair of propagators for sampled close approaches.

    Positions of all objects are sampled on the policy grid and indexed
    with a KD-tree per sample, so only pairs within ``policy.medium_km``
    are ever compared.

    Args:
        propagators: Mapping of satellite id to propagator.
        policy: Sampling policy. Defaults to :class:`CollisionPolicy`.

    Returns:
        Medium and high risk predictions sorted by minimum distance.
    """
    policy = policy or CollisionPolicy()
    if len(propagators) < 2:
        return []

    ids = list(propagators)
    offsets = policy.offsets()
    # shape (n_objects, n_samples, 3)
    positions = np.stack([_sample(propagators[sid], offsets) for sid in ids])

    logger.info("screen_fleet: %d objects, %d samples, %.1f km threshold",
                len(ids), len(offsets), policy.medium_km)

    pairs: dict[tuple[int, int], CollisionPrediction] = {}
    for ti, offset in enumerate(offsets):
        pos = positions[:, ti, :]
        tree = cKDTree(pos)
        for a, b in tree.query_pairs(policy.medium_km):
            key = (min(a, b), max(a, b))
            dist = float(np.linalg.norm(pos[a] - pos[b]))
            if dist >= policy.medium_km:
                continue
            if key not in pairs or dist < pairs[key].min_distance_km:
                pairs[key] = CollisionPrediction(
                    risk=policy.tier(dist),
                    min_distance_km=dist,
                    time_offset_s=float(offset),
                    primary_id=ids[key[0]],
                    secondary_id=ids[key[1]],
                )

    predictions = sorted(pairs.values(), key=lambda p: p.min_distance_km)
    logger.info("screen_fleet: found %d close pairs", len(predictions))
    return predictions
