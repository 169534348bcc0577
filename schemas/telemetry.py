# schemas/telemetry.py
# Pydantic models for telemetry readings and the alerts raised from them (v2).

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


# ---------- Errors ----------

class TelemetryValidationError(ValueError):
    """Raised when a telemetry record cannot be turned into a reading."""


# ---------- Components ----------

BATTERY = "BATT"
THERMOSTAT = "TSTAT"


class Severity(str, Enum):
    RED_LOW = "RED LOW"
    RED_HIGH = "RED HIGH"


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are ground-station UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ---------- Reading ----------

class TelemetryReading(BaseModel):
    """
    One limit-checked measurement from a satellite component.

    Yellow limits are carried along with the reading but only the red
    limits decide whether it is a violation.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    timestamp: datetime = Field(..., description="Measurement time in UTC, millisecond precision")
    satellite_id: int = Field(..., ge=-(2**31), le=2**31 - 1)

    red_high_limit: float
    yellow_high_limit: float
    yellow_low_limit: float
    red_low_limit: float
    raw_value: float

    component: str = Field(..., min_length=1, examples=["BATT", "TSTAT"])

    @field_validator("timestamp")
    @classmethod
    def timestamp_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


# ---------- Alert ----------

class Alert(BaseModel):
    """
    Sustained violation on one (satellite, component) pair.

    trigger_timestamp is the first violation of the window that
    crossed the threshold, not the one that completed it.
    """
    model_config = ConfigDict(frozen=True)

    satellite_id: int = Field(..., serialization_alias="satelliteId")
    severity: Severity
    component: str
    trigger_timestamp: datetime = Field(..., serialization_alias="timestamp")

    @field_validator("trigger_timestamp")
    @classmethod
    def trigger_timestamp_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @field_serializer("trigger_timestamp", when_used="json")
    def serialize_trigger_timestamp(self, value: datetime) -> str:
        # 2018-01-01T23:01:09.521Z
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
