"""Tests for TLE parsing and descriptor mapping."""

import pytest

from satwatch.core.elements import LeoParameters, OrbitFamily, PolarParameters
from satwatch.core.propagation import OrbitPropagator
from satwatch.core.tle import TLE, parse_tle

# ISS (ZARYA) TLE, a well-known reference
ISS_NAME = "ISS (ZARYA)"
ISS_LINE1 = "1 25544U 98067A   24045.54896019  .00016717  00000-0  30093-3 0  9993"
ISS_LINE2 = "2 25544  51.6412 207.4925 0004948 290.5508 178.9792 15.49583488439596"

NOAA18_NAME = "NOAA 18"
NOAA18_LINE1 = "1 28654U 05018A   24045.52083333  .00000149  00000-0  10834-3 0  9994"
NOAA18_LINE2 = "2 28654  98.9710 100.7890 0014048 313.6230  46.3750 14.12905012970123"


class TestTLEFromLines:
    def test_parse_basic(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2, name=ISS_NAME)
        assert tle.norad_id == 25544
        assert tle.name == ISS_NAME

    def test_orbital_elements_reasonable(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2)
        assert 51.0 < tle.inclination_deg < 52.0
        assert 0.0 < tle.eccentricity < 0.01
        assert 15.0 < tle.mean_motion_rev_per_day < 16.0

    def test_epoch_parsed(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2)
        assert tle.epoch.year == 2024
        assert tle.epoch.month == 2  # day 45 ~ Feb 14

    def test_altitude_from_mean_motion(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2)
        assert 380.0 < tle.altitude_km < 450.0

    def test_str_contains_lines(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2, name=ISS_NAME)
        text = str(tle)
        assert ISS_LINE1 in text
        assert ISS_LINE2 in text
        assert ISS_NAME in text

    def test_invalid_line1_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid TLE line 1"):
            TLE.from_lines("garbage", ISS_LINE2)

    def test_invalid_line2_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid TLE line 2"):
            TLE.from_lines(ISS_LINE1, "garbage")


class TestToDescriptor:
    def test_inclined_orbit_is_leo_family(self) -> None:
        desc = TLE.from_lines(ISS_LINE1, ISS_LINE2, name=ISS_NAME).to_descriptor()
        assert desc.orbit_type is OrbitFamily.LEO
        assert isinstance(desc.family, LeoParameters)
        assert desc.family.eccentricity == pytest.approx(0.0004948)
        assert desc.family.argument_of_periapsis_deg == pytest.approx(290.5508)
        assert desc.id == "25544"
        assert desc.name == ISS_NAME
        assert 7.5 < desc.velocity_km_s < 7.8

    def test_near_polar_orbit_is_polar_family(self) -> None:
        desc = TLE.from_lines(NOAA18_LINE1, NOAA18_LINE2, name=NOAA18_NAME).to_descriptor()
        assert desc.orbit_type is OrbitFamily.POLAR
        assert isinstance(desc.family, PolarParameters)
        assert desc.family.raan_deg == pytest.approx(100.7890)
        assert desc.family.mean_anomaly_deg == pytest.approx(46.3750)
        assert 800.0 < desc.altitude_km < 900.0

    def test_unnamed_uses_norad_id(self) -> None:
        assert TLE.from_lines(ISS_LINE1, ISS_LINE2).to_descriptor().name == "25544"

    def test_descriptor_is_propagatable(self) -> None:
        prop = OrbitPropagator(TLE.from_lines(ISS_LINE1, ISS_LINE2).to_descriptor())
        prop.step(600)
        snap = prop.orbital_parameters()
        assert snap.orbital_period_hours == pytest.approx(24 / 15.49583488, rel=1e-3)


class TestParseTLE:
    def test_two_line_format(self) -> None:
        text = f"{ISS_LINE1}\n{ISS_LINE2}"
        tles = parse_tle(text)
        assert len(tles) == 1
        assert tles[0].norad_id == 25544

    def test_three_line_format(self) -> None:
        text = f"{ISS_NAME}\n{ISS_LINE1}\n{ISS_LINE2}"
        tles = parse_tle(text)
        assert len(tles) == 1
        assert tles[0].name == ISS_NAME

    def test_zero_prefixed_name(self) -> None:
        tles = parse_tle(f"0 {ISS_NAME}\n{ISS_LINE1}\n{ISS_LINE2}")
        assert tles[0].name == ISS_NAME

    def test_multiple_tles(self) -> None:
        text = f"{ISS_NAME}\n{ISS_LINE1}\n{ISS_LINE2}\n{NOAA18_NAME}\n{NOAA18_LINE1}\n{NOAA18_LINE2}"
        tles = parse_tle(text)
        assert [t.norad_id for t in tles] == [25544, 28654]
