"""Threat monitoring over independently failable data sources.

Each poll recomputes every alert from scratch. A source that raises is
logged and treated as empty; the other sources still contribute.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from satwatch.core.risk import ThreatAssessment, assess_threats, hours_until, suggest_action
from satwatch.data.records import (
    CMEPrediction,
    ConjunctionRecord,
    KpReading,
    SpaceWeatherAlert,
    SuggestedAction,
)
from satwatch.utils.constants import CME_CONSENSUS_METHOD, GEOMAGNETIC_STORM_KP

logger = logging.getLogger(__name__)

Source = Callable[[], Iterable[Any]]


@dataclass
class MonitorReport:
    """Outcome of one monitoring poll.

    Attributes:
        alerts: Human-readable alert lines.
        conjunctions: Conjunctions of tracked satellites, with suggested actions.
        space_weather_alerts: Structured space-weather alerts.
        threat_assessments: Per-satellite threat assessments.
        failed_sources: Names of sources that raised during this poll.
        offline: True when every configured source failed.
    """

    alerts: list[str] = field(default_factory=list)
    conjunctions: list[ConjunctionRecord] = field(default_factory=list)
    space_weather_alerts: list[SpaceWeatherAlert] = field(default_factory=list)
    threat_assessments: dict[str, ThreatAssessment] = field(default_factory=dict)
    failed_sources: list[str] = field(default_factory=list)
    offline: bool = False


def _coerce(items: Iterable[Any], record_type: type) -> list[Any]:
    return [item if isinstance(item, record_type) else record_type.from_dict(item) for item in items]


class ThreatMonitor:
    """Turns conjunction and space-weather feeds into alerts.

    Args:
        conjunctions: Source of conjunction records.
        cme: Source of DONKI CME predictions.
        geomagnetic: Source of Kp readings, oldest first.
        weather: Source of raw SWPC alert records (collected, not interpreted).

    Every source is a zero-argument callable returning an iterable of
    records or plain dicts. Sources left as None are skipped.
    """

    def __init__(
        self,
        conjunctions: Source | None = None,
        cme: Source | None = None,
        geomagnetic: Source | None = None,
        weather: Source | None = None,
    ) -> None:
        self.sources: dict[str, Source | None] = {
            "conjunctions": conjunctions,
            "cme": cme,
            "geomagnetic": geomagnetic,
            "weather": weather,
        }

    def _collect(self, name: str, record_type: type | None, report: MonitorReport) -> list[Any]:
        source = self.sources[name]
        if source is None:
            return []
        try:
            items = list(source())
            return _coerce(items, record_type) if record_type is not None else items
        except Exception as e:
            logger.warning("Source %r failed, continuing without it: %s", name, e)
            report.failed_sources.append(name)
            return []

    def poll(self, satellite_ids: Iterable[str], now: datetime | None = None) -> MonitorReport:
        """Recompute alerts for the tracked satellites.

        Args:
            satellite_ids: Ids of the satellites currently tracked.
            now: Reference time. Defaults to the current UTC time.

        Returns:
            A fresh MonitorReport. Empty when no satellite is tracked.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        ids = list(satellite_ids)
        report = MonitorReport()
        if not ids:
            return report

        conjunctions = self._collect("conjunctions", ConjunctionRecord, report)
        predictions = self._collect("cme", CMEPrediction, report)
        readings = self._collect("geomagnetic", KpReading, report)
        self._collect("weather", None, report)

        configured = [name for name, src in self.sources.items() if src is not None]
        report.offline = bool(configured) and len(report.failed_sources) == len(configured)

        report.alerts.extend(self._conjunction_alerts(ids, conjunctions, now, report))
        report.alerts.extend(self._cme_alerts(ids, predictions, report))
        report.alerts.extend(self._geomagnetic_alerts(readings))
        report.threat_assessments = assess_threats(ids, report.conjunctions, now)

        logger.info("Monitor poll: %d alerts, %d conjunctions, %d failed sources",
                    len(report.alerts), len(report.conjunctions), len(report.failed_sources))
        return report

    def _conjunction_alerts(
        self,
        ids: list[str],
        conjunctions: list[ConjunctionRecord],
        now: datetime,
        report: MonitorReport,
    ) -> list[str]:
        alerts = []
        tracked = set(ids)
        for c in conjunctions:
            if c.satellite_id not in tracked:
                continue
            c = replace(c, suggested_action=suggest_action(c, now))
            report.conjunctions.append(c)

            hours = math.floor(hours_until(c.tca, now) + 0.5)
            if c.risk in ("high", "medium"):
                alerts.append(
                    f"{c.risk.upper()} RISK: {c.object_name} approaching {c.satellite_id} "
                    f"in {hours}h - Miss distance: {c.miss_distance_km}km"
                )
        return alerts

    def _cme_alerts(
        self, ids: list[str], predictions: list[CMEPrediction], report: MonitorReport
    ) -> list[str]:
        prediction = next((p for p in predictions if p.method == CME_CONSENSUS_METHOD), None)
        if prediction is None:
            return []

        arrival = prediction.predicted_arrival.isoformat()
        kp_range = f"{prediction.kp_lower}-{prediction.kp_upper}"
        report.space_weather_alerts.append(
            SpaceWeatherAlert(
                id=f"cme-{prediction.method}",
                type="cme",
                severity="medium",
                message=f"CME predicted by {prediction.method}: Arrival on {arrival} with Kp range {kp_range}",
                timestamp=prediction.submission_time,
                affected_satellites=list(ids),
                suggested_action=SuggestedAction(
                    type="monitor",
                    description="Monitor satellite systems for potential impact",
                    priority="medium",
                    estimated_time_to_execute_min=15,
                    success_probability=0.9,
                ),
            )
        )
        return [
            f"CME PREDICTION: {prediction.method} predicts arrival on {arrival} with Kp range {kp_range}"
        ]

    def _geomagnetic_alerts(self, readings: list[KpReading]) -> list[str]:
        if not readings:
            return []
        latest = readings[-1]
        if latest.kp_index > GEOMAGNETIC_STORM_KP:
            return [f"GEOMAGNETIC STORM: Kp index {latest.kp_index} - Monitor satellite health"]
        return []
