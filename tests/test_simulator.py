# tests/test_simulator.py

import pytest

from processing.alert_engine import detect_alerts
from processing.violations import is_violation
from schemas.telemetry import Severity
from simulator.telemetry_generator import TelemetrySimulator


def test_nominal_batch_has_no_violations():
    sim = TelemetrySimulator(seed=1)
    readings = sim.generate_batch(40)

    assert len(readings) == 40
    assert not any(is_violation(r) for r in readings)
    assert detect_alerts(readings) == []


def test_batch_round_robins_pairs():
    sim = TelemetrySimulator(satellite_ids=(1000, 1001), seed=1)
    readings = sim.generate_batch(4)

    assert [(r.satellite_id, r.component) for r in readings] == [
        (1000, "TSTAT"),
        (1000, "BATT"),
        (1001, "TSTAT"),
        (1001, "BATT"),
    ]


def test_timestamps_advance_by_interval():
    sim = TelemetrySimulator(seed=1)
    a, b = sim.generate_batch(2)

    assert b.timestamp - a.timestamp == sim.interval


def test_low_battery_fault_raises_red_low_alerts():
    sim = TelemetrySimulator(seed=1)
    readings = sim.generate_batch(24, fault="LOW_BATTERY")

    alerts = detect_alerts(readings)

    assert {(a.satellite_id, a.component) for a in alerts} == {(1000, "BATT"), (1001, "BATT")}
    assert all(a.severity == Severity.RED_LOW for a in alerts)


def test_overheat_fault_only_affects_thermostat():
    sim = TelemetrySimulator(seed=1)
    readings = sim.generate_batch(24, fault="OVERHEAT")

    violating = [r for r in readings if is_violation(r)]

    assert violating
    assert all(r.component == "TSTAT" for r in violating)


def test_unknown_fault_rejected():
    sim = TelemetrySimulator()

    with pytest.raises(ValueError):
        sim.generate_batch(4, fault="HIGH_SPIN")


def test_unknown_component_rejected():
    sim = TelemetrySimulator()

    with pytest.raises(ValueError, match="GYRO"):
        sim.generate_reading(1000, "GYRO")
