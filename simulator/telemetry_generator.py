# simulator/telemetry_generator.py

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from schemas.telemetry import BATTERY, THERMOSTAT, TelemetryReading


@dataclass(frozen=True)
class ComponentLimits:
    red_high: float
    yellow_high: float
    yellow_low: float
    red_low: float


# reference limits from the ground-station sample feed
COMPONENT_LIMITS = {
    THERMOSTAT: ComponentLimits(red_high=101.0, yellow_high=98.0, yellow_low=25.0, red_low=20.0),
    BATTERY: ComponentLimits(red_high=17.0, yellow_high=15.0, yellow_low=9.0, red_low=8.0),
}

FAULTS = ("LOW_BATTERY", "OVERHEAT")

DEFAULT_START = datetime(2018, 1, 1, 23, 1, 5, 1000, tzinfo=timezone.utc)


class TelemetrySimulator:
    """
    Satellite telemetry simulator (limit-checked readings).

    Usage:
        sim = TelemetrySimulator()
        readings = sim.generate_batch(20, fault="LOW_BATTERY")
    """

    def __init__(
        self,
        satellite_ids: Sequence[int] = (1000, 1001),
        start: datetime = DEFAULT_START,
        interval: timedelta = timedelta(seconds=30),
        seed: Optional[int] = 42,
    ):
        self.satellite_ids = tuple(satellite_ids)
        self.interval = interval
        self._clock = start
        self._rng = random.Random(seed)

    # ---------- Nominal generators ----------

    def _nominal_value(self, limits: ComponentLimits) -> float:
        # stays inside the yellow band
        value = self._rng.uniform(limits.yellow_low, limits.yellow_high)
        return round(value, 1)

    def _tick(self) -> datetime:
        now = self._clock
        self._clock = now + self.interval
        return now

    def generate_reading(
        self,
        satellite_id: int,
        component: str,
        fault: Optional[str] = None,
    ) -> TelemetryReading:
        limits = COMPONENT_LIMITS.get(component)
        if limits is None:
            raise ValueError(
                f"Unknown component {component!r}, expected one of {tuple(COMPONENT_LIMITS)}"
            )
        raw_value = self._nominal_value(limits)

        # --- Fault injection ---
        if fault == "LOW_BATTERY" and component == BATTERY:
            raw_value = round(limits.red_low - self._rng.uniform(0.1, 1.0), 1)

        elif fault == "OVERHEAT" and component == THERMOSTAT:
            raw_value = round(limits.red_high + self._rng.uniform(0.1, 2.0), 1)

        return TelemetryReading(
            timestamp=self._tick(),
            satellite_id=satellite_id,
            red_high_limit=limits.red_high,
            yellow_high_limit=limits.yellow_high,
            yellow_low_limit=limits.yellow_low,
            red_low_limit=limits.red_low,
            raw_value=raw_value,
            component=component,
        )

    def generate_batch(self, count: int, fault: Optional[str] = None) -> list[TelemetryReading]:
        """
        Round-robin over every (satellite, component) pair.
        """
        if fault is not None and fault not in FAULTS:
            raise ValueError(f"Unknown fault {fault!r}, expected one of {FAULTS}")

        pairs = [
            (satellite_id, component)
            for satellite_id in self.satellite_ids
            for component in COMPONENT_LIMITS
        ]

        return [
            self.generate_reading(*pairs[i % len(pairs)], fault=fault)
            for i in range(count)
        ]
