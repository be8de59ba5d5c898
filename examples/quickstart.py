"""satwatch Quickstart: propagate a satellite and inspect its orbit."""

from satwatch import OrbitPropagator, SatelliteDescriptor, is_stable_orbit

iss = SatelliteDescriptor.from_dict({
    "id": "25544",
    "name": "ISS (ZARYA)",
    "altitude": 408,
    "inclination": 51.6,
    "velocity": 7.66,
    "orbitType": "LEO",
    "eccentricity": 0.0003,
    "argumentOfPeriapsis": 0,
})

prop = OrbitPropagator(iss)
prop.step(5400)
prop.compute_velocity()

snap = prop.orbital_parameters()
print(f"Satellite: {iss.name}")
print(f"Period:    {snap.orbital_period_hours * 60:.1f} min")
print(f"Altitude:  {snap.altitude_km:.1f} km")
print(f"Incl:      {snap.inclination_deg:.2f}°")
print(f"Position:  {snap.position_km.round(1)} km")
print(f"Velocity:  {snap.velocity_km_s.round(3)} km/s")
print(f"Stable:    {is_stable_orbit(snap.altitude_km, snap.eccentricity)}")
