"""
satwatch: satellite orbit simulation and threat monitoring for Python.

Two-body Keplerian propagation of user-defined or catalog satellites,
sampled close-approach screening between them, and alerting on
conjunction and space-weather feeds supplied by the caller.
"""

from __future__ import annotations

__version__ = "0.1.0-dev"

from satwatch.core.elements import (
    LeoParameters,
    OrbitFamily,
    OrbitalElements,
    PolarParameters,
    SatelliteDescriptor,
)
from satwatch.core.propagation import OrbitPropagator, OrbitalSnapshot, StateVector, solve_kepler
from satwatch.core.orbits import circular_velocity, ground_track, is_stable_orbit, orbital_period
from satwatch.core.screening import CollisionPolicy, CollisionPrediction, predict_collision_risk, screen_fleet
from satwatch.core.fleet import Fleet
from satwatch.core.simulation import SimulationHandle, start_simulation, stop_simulation
from satwatch.core.risk import ThreatAssessment, assess_threats, calculate_threat_level, suggest_action
from satwatch.core.monitor import MonitorReport, ThreatMonitor
from satwatch.core.tle import TLE, parse_tle
from satwatch.data.records import CMEPrediction, ConjunctionRecord, KpReading, SpaceWeatherAlert
from satwatch.data.mock import mock_conjunctions

__all__ = [
    "__version__",
    "LeoParameters",
    "OrbitFamily",
    "OrbitalElements",
    "PolarParameters",
    "SatelliteDescriptor",
    "OrbitPropagator",
    "OrbitalSnapshot",
    "StateVector",
    "solve_kepler",
    "circular_velocity",
    "ground_track",
    "is_stable_orbit",
    "orbital_period",
    "CollisionPolicy",
    "CollisionPrediction",
    "predict_collision_risk",
    "screen_fleet",
    "Fleet",
    "SimulationHandle",
    "start_simulation",
    "stop_simulation",
    "ThreatAssessment",
    "assess_threats",
    "calculate_threat_level",
    "suggest_action",
    "MonitorReport",
    "ThreatMonitor",
    "TLE",
    "parse_tle",
    "CMEPrediction",
    "ConjunctionRecord",
    "KpReading",
    "SpaceWeatherAlert",
    "mock_conjunctions",
]
