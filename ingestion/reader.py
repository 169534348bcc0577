# ingestion/reader.py

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from schemas.telemetry import TelemetryReading, TelemetryValidationError


# timestamp|satelliteId|redHigh|yellowHigh|yellowLow|redLow|rawValue|component
FIELD_SEPARATOR = "|"
FIELD_NAMES = (
    "timestamp",
    "satellite_id",
    "red_high_limit",
    "yellow_high_limit",
    "yellow_low_limit",
    "red_low_limit",
    "raw_value",
    "component",
)

TIMESTAMP_FORMAT = "%Y%m%d %H:%M:%S.%f"
_TIMESTAMP_RE = re.compile(r"^\d{8} \d{2}:\d{2}:\d{2}\.\d{3}$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)

INTEGER_FIELDS = ("satellite_id",)
DECIMAL_FIELDS = (
    "red_high_limit",
    "yellow_high_limit",
    "yellow_low_limit",
    "red_low_limit",
    "raw_value",
)


def _parse_timestamp(text: str) -> datetime:
    if not _TIMESTAMP_RE.match(text):
        raise TelemetryValidationError(
            f"Invalid timestamp {text!r}, expected YYYYMMDD HH:MM:SS.mmm"
        )
    try:
        parsed = datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise TelemetryValidationError(f"Invalid timestamp {text!r}: {exc}") from exc
    return parsed.replace(tzinfo=timezone.utc)


def _check_numbers(raw: dict[str, str]) -> None:
    # plain digits only: no underscores, no inf/nan, no "1000.0" ids
    for name in INTEGER_FIELDS:
        if not _INTEGER_RE.fullmatch(raw[name]):
            raise TelemetryValidationError(f"Invalid integer for {name}: {raw[name]!r}")

    for name in DECIMAL_FIELDS:
        if not _DECIMAL_RE.fullmatch(raw[name]):
            raise TelemetryValidationError(f"Invalid number for {name}: {raw[name]!r}")


def parse_reading(line: str) -> TelemetryReading:
    """
    Parse one pipe-delimited record into a reading.
    Raises TelemetryValidationError instead of filling in defaults.
    """
    parts = [part.strip() for part in line.split(FIELD_SEPARATOR)]

    if len(parts) != len(FIELD_NAMES):
        raise TelemetryValidationError(
            f"Invalid telemetry record, expected {len(FIELD_NAMES)} fields "
            f"but got {len(parts)}: {line.strip()!r}"
        )

    raw = dict(zip(FIELD_NAMES, parts))
    _check_numbers(raw)
    raw["timestamp"] = _parse_timestamp(raw["timestamp"])

    try:
        return TelemetryReading(**raw)
    except ValidationError as exc:
        raise TelemetryValidationError(
            f"Invalid telemetry record {line.strip()!r}: {exc}"
        ) from exc


def parse_lines(lines: Iterable[str]) -> list[TelemetryReading]:
    """
    Parse a whole batch. Blank lines are skipped; the first bad line
    aborts the batch.
    """
    readings: list[TelemetryReading] = []

    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            readings.append(parse_reading(line))
        except TelemetryValidationError as exc:
            raise TelemetryValidationError(f"line {line_no}: {exc}") from exc

    return readings


def read_readings(path: str | Path) -> list[TelemetryReading]:
    with Path(path).open(encoding="utf-8") as fh:
        try:
            return parse_lines(fh)
        except UnicodeDecodeError as exc:
            raise TelemetryValidationError(f"{path} is not valid UTF-8: {exc}") from exc


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_reading(reading: TelemetryReading) -> str:
    ts = reading.timestamp
    stamp = ts.strftime("%Y%m%d %H:%M:%S.") + f"{ts.microsecond // 1000:03d}"

    return FIELD_SEPARATOR.join(
        [
            stamp,
            str(reading.satellite_id),
            _format_number(reading.red_high_limit),
            _format_number(reading.yellow_high_limit),
            _format_number(reading.yellow_low_limit),
            _format_number(reading.red_low_limit),
            _format_number(reading.raw_value),
            reading.component,
        ]
    )
