# processing/violations.py

from schemas.telemetry import BATTERY, THERMOSTAT, Severity, TelemetryReading


def is_violation(reading: TelemetryReading) -> bool:
    """
    Red-limit check for a single reading.

    - battery trips below its red low limit
    - thermostat trips above its red high limit
    - every other component is never a violation

    Comparisons are strict: a value sitting on the limit is in tolerance.
    """

    if reading.component == BATTERY:
        return reading.raw_value < reading.red_low_limit

    if reading.component == THERMOSTAT:
        return reading.raw_value > reading.red_high_limit

    return False


def severity_for(component: str) -> Severity:
    if component == BATTERY:
        return Severity.RED_LOW
    return Severity.RED_HIGH
