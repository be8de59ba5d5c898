"""Offline conjunction data used when no live feed is available."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from satwatch.data.records import ConjunctionRecord


def mock_conjunctions(now: datetime | None = None) -> list[ConjunctionRecord]:
    """Four representative conjunctions with TCAs relative to ``now``.

    Args:
        now: Reference time. Defaults to the current UTC time; a naive
            value is taken as UTC.

    Returns:
        ConjunctionRecords for ISS, Starlink and Hubble.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    return [
        ConjunctionRecord(
            satellite_id="25544",  # ISS
            object_name="DEBRIS-2024-001",
            tca=now + timedelta(hours=1),
            miss_distance_km=0.5,
            relative_velocity_km_s=14.2,
            probability=1e-5,
            risk="high",
        ),
        ConjunctionRecord(
            satellite_id="25544",
            object_name="DEBRIS-2024-045",
            tca=now + timedelta(days=1),
            miss_distance_km=2.3,
            relative_velocity_km_s=8.7,
            probability=1e-6,
            risk="medium",
        ),
        ConjunctionRecord(
            satellite_id="43013",  # Starlink
            object_name="DEBRIS-2024-078",
            tca=now + timedelta(hours=2),
            miss_distance_km=1.8,
            relative_velocity_km_s=12.1,
            probability=5e-6,
            risk="medium",
        ),
        ConjunctionRecord(
            satellite_id="43175",  # Hubble
            object_name="DEBRIS-2024-123",
            tca=now + timedelta(days=2),
            miss_distance_km=5.2,
            relative_velocity_km_s=6.8,
            probability=1e-7,
            risk="low",
        ),
    ]
