# tests/test_schemas.py

from datetime import datetime, timezone, timedelta

import pytest
from pydantic import ValidationError

from schemas.telemetry import Alert, Severity, TelemetryReading


def reading_data(**overrides) -> dict:
    data = {
        "timestamp": datetime(2018, 1, 1, 23, 1, 5, 1000, tzinfo=timezone.utc),
        "satellite_id": 1000,
        "red_high_limit": 17.0,
        "yellow_high_limit": 15.0,
        "yellow_low_limit": 9.0,
        "red_low_limit": 8.0,
        "raw_value": 7.8,
        "component": "BATT",
    }
    data.update(overrides)
    return data


def test_valid_reading_passes_schema():
    reading = TelemetryReading(**reading_data())
    # Should not raise
    TelemetryReading.model_validate(reading.model_dump())


def test_reading_is_immutable():
    reading = TelemetryReading(**reading_data())

    with pytest.raises(ValidationError):
        reading.raw_value = 12.0


def test_naive_timestamp_is_utc():
    reading = TelemetryReading(**reading_data(timestamp=datetime(2018, 1, 1, 23, 1, 5)))

    assert reading.timestamp.tzinfo == timezone.utc
    assert reading.timestamp.hour == 23


def test_aware_timestamp_converted_to_utc():
    plus_two = timezone(timedelta(hours=2))
    reading = TelemetryReading(**reading_data(timestamp=datetime(2018, 1, 2, 1, 1, 5, tzinfo=plus_two)))

    assert reading.timestamp == datetime(2018, 1, 1, 23, 1, 5, tzinfo=timezone.utc)
    assert reading.timestamp.utcoffset() == timedelta(0)


def test_extra_field_rejected():
    with pytest.raises(ValidationError):
        TelemetryReading(**reading_data(severity="RED"))


def test_missing_field_rejected():
    data = reading_data()
    del data["red_low_limit"]

    with pytest.raises(ValidationError):
        TelemetryReading(**data)


def test_alert_json_uses_wire_names():
    alert = Alert(
        satellite_id=1000,
        severity=Severity.RED_LOW,
        component="BATT",
        trigger_timestamp=datetime(2018, 1, 1, 23, 1, 9, 521000, tzinfo=timezone.utc),
    )

    assert alert.model_dump(mode="json", by_alias=True) == {
        "satelliteId": 1000,
        "severity": "RED LOW",
        "component": "BATT",
        "timestamp": "2018-01-01T23:01:09.521Z",
    }


def test_alert_timestamp_always_has_milliseconds():
    alert = Alert(
        satellite_id=1001,
        severity=Severity.RED_HIGH,
        component="TSTAT",
        trigger_timestamp=datetime(2018, 1, 1, 23, 1, 38),
    )

    assert alert.model_dump(mode="json", by_alias=True)["timestamp"] == "2018-01-01T23:01:38.000Z"
