"""Tests for fleet management and the simulation handle."""
from __future__ import annotations

import time

import numpy as np
import pytest

from satwatch.core.elements import OrbitFamily, PolarParameters, SatelliteDescriptor
from satwatch.core.fleet import Fleet
from satwatch.core.screening import CollisionPolicy
from satwatch.core.simulation import start_simulation, stop_simulation


def _sat(sat_id: str | None, altitude_km: float = 500.0, name: str = "") -> SatelliteDescriptor:
    return SatelliteDescriptor(
        altitude_km=altitude_km,
        inclination_deg=0.0,
        orbit_type=OrbitFamily.POLAR,
        family=PolarParameters(),
        id=sat_id,
        name=name,
    )


@pytest.fixture
def fleet() -> Fleet:
    f = Fleet()
    f.add(_sat("a", 500, "Alpha"))
    f.add(_sat("b", 500, "Bravo"))
    f.add(_sat("c", 1500, "Charlie"))
    return f


class TestFleet:
    def test_membership(self, fleet: Fleet) -> None:
        assert len(fleet) == 3
        assert "a" in fleet
        assert "z" not in fleet
        assert list(fleet) == ["a", "b", "c"]
        assert fleet.ids() == ["a", "b", "c"]

    def test_add_requires_id(self) -> None:
        with pytest.raises(ValueError, match="needs an id"):
            Fleet().add(_sat(None))

    def test_duplicate_id_rejected(self, fleet: Fleet) -> None:
        with pytest.raises(ValueError, match="already tracked"):
            fleet.add(_sat("a"))

    def test_remove(self, fleet: Fleet) -> None:
        prop = fleet.remove("b")
        assert prop.descriptor.id == "b"
        assert "b" not in fleet
        assert fleet.get("b") is None

    def test_remove_unknown(self, fleet: Fleet) -> None:
        with pytest.raises(KeyError):
            fleet.remove("missing")

    def test_each_satellite_has_its_own_propagator(self, fleet: Fleet) -> None:
        fleet.get("a").step(100)
        assert fleet.get("b").time_s == 0

    def test_tick_advances_all(self, fleet: Fleet) -> None:
        states = fleet.tick(60)
        assert set(states) == {"a", "b", "c"}
        for sat_id, state in states.items():
            assert state.simulation_time_s == 60
            assert np.linalg.norm(state.velocity_km_s) > 0
            assert fleet.get(sat_id).time_s == 60

    def test_update_keeps_time(self, fleet: Fleet) -> None:
        fleet.tick(60)
        fleet.update("a", altitude_km=900)
        prop = fleet.get("a")
        assert prop.time_s == 60
        assert prop.orbital_parameters().altitude_km == pytest.approx(900)

    def test_update_cannot_rename(self, fleet: Fleet) -> None:
        with pytest.raises(ValueError, match="cannot be changed"):
            fleet.update("a", id="zzz")

    def test_update_unknown(self, fleet: Fleet) -> None:
        with pytest.raises(KeyError):
            fleet.update("missing", altitude_km=400)

    def test_reset(self, fleet: Fleet) -> None:
        fleet.tick(60)
        fleet.reset()
        assert all(s.simulation_time_s == 0 for s in fleet.snapshots().values())

    def test_collision_alerts(self, fleet: Fleet) -> None:
        alerts = fleet.collision_alerts(CollisionPolicy(horizon_s=600, step_s=60))
        assert len(alerts) == 1
        assert alerts[0].startswith("HIGH collision risk between Alpha and Bravo")
        assert "Min distance: 0.00km" in alerts[0]

    def test_predict_collisions(self, fleet: Fleet) -> None:
        [pred] = fleet.predict_collisions()
        assert {pred.primary_id, pred.secondary_id} == {"a", "b"}


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


class TestSimulation:
    def test_start_and_stop(self, fleet: Fleet) -> None:
        seen = []
        handle = start_simulation(fleet, interval_s=0.01, time_step_s=60, on_tick=seen.append)
        assert handle.running
        assert _wait_for(lambda: handle.ticks >= 3)
        stop_simulation(handle, timeout=5.0)
        assert not handle.running

        ticks = handle.ticks
        assert fleet.get("a").time_s == pytest.approx(60 * ticks)
        assert len(seen) == ticks
        time.sleep(0.05)
        assert handle.ticks == ticks

    def test_stop_twice(self, fleet: Fleet) -> None:
        handle = start_simulation(fleet, interval_s=0.01)
        stop_simulation(handle, timeout=5.0)
        stop_simulation(handle, timeout=5.0)
        assert not handle.running

    def test_handles_are_independent(self) -> None:
        first, second = Fleet(), Fleet()
        first.add(_sat("x"))
        second.add(_sat("y"))
        h1 = start_simulation(first, interval_s=0.01)
        h2 = start_simulation(second, interval_s=0.01)
        stop_simulation(h1, timeout=5.0)
        assert _wait_for(lambda: h2.ticks >= 2)
        assert h2.running
        stop_simulation(h2, timeout=5.0)

    def test_invalid_interval(self, fleet: Fleet) -> None:
        with pytest.raises(ValueError, match="interval_s"):
            start_simulation(fleet, interval_s=0)
