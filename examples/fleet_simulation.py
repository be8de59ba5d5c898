"""satwatch Fleet Simulation: run a fleet, screen it and poll for threats.

Uses offline mock conjunctions; plug real feeds in as ThreatMonitor sources.
"""

import logging
import time

from satwatch import (
    Fleet,
    SatelliteDescriptor,
    ThreatMonitor,
    mock_conjunctions,
    start_simulation,
    stop_simulation,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

fleet = Fleet()
fleet.add(SatelliteDescriptor.from_dict(
    {"id": "25544", "name": "ISS", "altitude": 408, "inclination": 51.6, "orbitType": "LEO"}
))
fleet.add(SatelliteDescriptor.from_dict(
    {"id": "28654", "name": "NOAA 18", "altitude": 850, "inclination": 99.0, "orbitType": "Polar",
     "rightAscensionOfAscendingNode": 100.8, "meanAnomaly": 46.4}
))
fleet.add(SatelliteDescriptor.from_dict(
    {"id": "chaser", "name": "Chaser", "altitude": 408.5, "inclination": 51.6, "orbitType": "LEO"}
))

handle = start_simulation(fleet, interval_s=0.5, time_step_s=60.0)
time.sleep(3)
stop_simulation(handle)

for sat_id, snap in fleet.snapshots().items():
    print(f"{sat_id:>8}: t={snap.simulation_time_s:.0f} s  |r|={sum(snap.position_km ** 2) ** 0.5:.1f} km")

for alert in fleet.collision_alerts():
    print(alert)

monitor = ThreatMonitor(conjunctions=mock_conjunctions)
for alert in monitor.poll(fleet.ids()).alerts:
    print(alert)
