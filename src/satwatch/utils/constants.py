from __future__ import annotations

"""Physical constants and default thresholds for the orbit simulator.

Distances in km, times in seconds, angles in degrees unless noted.
"""

# --- Earth parameters ---
EARTH_RADIUS_KM: float = 6371.0
"""Mean radius of Earth in km, used to convert altitude to semi-major axis."""

EARTH_MU_KM3_S2: float = 3.986004418e5
"""Earth gravitational parameter (GM) in km³/s²."""

EARTH_ROTATION_RAD_S: float = 7.292115e-5
"""Earth rotation rate in rad/s."""

# --- Propagation ---
DEFAULT_ECCENTRICITY: float = 0.01
"""Eccentricity assumed for LEO satellites that do not state one."""

KEPLER_TOLERANCE: float = 1e-6
"""Residual below which the Kepler solver stops iterating."""

KEPLER_MAX_ITERATIONS: int = 10
"""Iteration bound of the Newton-Raphson Kepler solver."""

DEFAULT_TIME_STEP_S: float = 1.0
"""Default propagation step in seconds."""

# --- Orbit regime boundaries ---
MIN_STABLE_ALT_KM: float = 160.0
"""Lowest altitude considered a stable orbit in km."""

LEO_MAX_ALT_KM: float = 2000.0
"""Maximum altitude for Low Earth Orbit in km."""

POLAR_MIN_INCLINATION_DEG: float = 80.0
"""Lower inclination bound of the polar orbit family."""

POLAR_MAX_INCLINATION_DEG: float = 100.0
"""Upper inclination bound of the polar orbit family."""

# --- Collision screening ---
DEFAULT_SCREENING_HORIZON_S: float = 5400.0
"""Forward sampling window of the collision heuristic (about one LEO period)."""

DEFAULT_SCREENING_STEP_S: float = 60.0
"""Sampling step of the collision heuristic."""

HIGH_RISK_DISTANCE_KM: float = 1.0
"""Sampled separation below which a pair is high risk."""

MEDIUM_RISK_DISTANCE_KM: float = 5.0
"""Sampled separation below which a pair is medium risk."""

# --- Simulation loop ---
SIMULATION_INTERVAL_S: float = 1.0
"""Wall-clock seconds between simulation ticks."""

SIMULATION_TIME_STEP_S: float = 60.0
"""Simulated seconds advanced per tick."""

THREAT_POLL_INTERVAL_S: float = 30.0
"""Suggested wall-clock seconds between threat monitor polls."""

# --- Threat thresholds ---
HIGH_THREAT_MISS_KM: float = 1.0
HIGH_THREAT_PROBABILITY: float = 1e-5
MEDIUM_THREAT_MISS_KM: float = 5.0
MEDIUM_THREAT_PROBABILITY: float = 1e-6

GEOMAGNETIC_STORM_KP: float = 5.0
"""Kp index above which a geomagnetic storm alert is raised."""

CME_CONSENSUS_METHOD: str = "Average of all Methods"
"""DONKI prediction method used for CME arrival alerts."""
