"""Periodic fleet simulation driven by an owned handle.

Example::

    handle = start_simulation(fleet, interval_s=1.0, time_step_s=60.0)
    ...
    stop_simulation(handle)
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from satwatch.core.fleet import Fleet
from satwatch.core.propagation import StateVector
from satwatch.utils.constants import SIMULATION_INTERVAL_S, SIMULATION_TIME_STEP_S

logger = logging.getLogger(__name__)

TickCallback = Callable[[dict[str, StateVector]], None]


@dataclass
class SimulationHandle:
    """A running simulation. Pass it to :func:`stop_simulation` to end it.

    Attributes:
        fleet: The simulated fleet.
        interval_s: Wall-clock seconds between ticks.
        time_step_s: Simulated seconds per tick.
        ticks: Number of ticks completed so far.
    """

    fleet: Fleet
    interval_s: float
    time_step_s: float
    on_tick: TickCallback | None = None
    ticks: int = 0
    _stop: threading.Event = field(default_factory=threading.Event, repr=False)
    _thread: threading.Thread | None = field(default=None, repr=False)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop.wait(self.interval_s):
            states = self.fleet.tick(self.time_step_s)
            self.ticks += 1
            if self.on_tick is not None:
                self.on_tick(states)


def start_simulation(
    fleet: Fleet,
    interval_s: float = SIMULATION_INTERVAL_S,
    time_step_s: float = SIMULATION_TIME_STEP_S,
    on_tick: TickCallback | None = None,
) -> SimulationHandle:
    """Tick ``fleet`` every ``interval_s`` seconds on a background thread.

    Args:
        fleet: Fleet to advance.
        interval_s: Wall-clock seconds between ticks.
        time_step_s: Simulated seconds advanced per tick.
        on_tick: Optional callback receiving each tick's states.

    Returns:
        The handle owning the running simulation.

    Raises:
        ValueError: If ``interval_s`` is not positive.
    """
    if interval_s <= 0:
        raise ValueError(f"interval_s must be positive, got {interval_s}")

    handle = SimulationHandle(
        fleet=fleet, interval_s=interval_s, time_step_s=time_step_s, on_tick=on_tick
    )
    handle._thread = threading.Thread(
        target=handle._run, name="satwatch-simulation", daemon=True
    )
    handle._thread.start()
    logger.info("Simulation started: %d satellites, %.1f s every %.2f s",
                len(fleet), time_step_s, interval_s)
    return handle


def stop_simulation(handle: SimulationHandle, timeout: float | None = None) -> None:
    """Stop a simulation and wait for its worker to finish. Idempotent."""
    handle._stop.set()
    thread = handle._thread
    if thread is not None and thread is not threading.current_thread():
        thread.join(timeout)
    logger.info("Simulation stopped after %d ticks", handle.ticks)
