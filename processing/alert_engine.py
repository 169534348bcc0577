# processing/alert_engine.py

from __future__ import annotations

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import Iterable, Optional, Sequence

from processing.violations import is_violation, severity_for
from schemas.telemetry import Alert, TelemetryReading


WINDOW_DURATION = timedelta(minutes=5)
VIOLATION_THRESHOLD = 3

GroupKey = tuple[int, str]

logger = logging.getLogger(__name__)


def group_violations(
    readings: Iterable[TelemetryReading],
) -> dict[GroupKey, list[TelemetryReading]]:
    """
    Bucket violating readings by (satellite_id, component).
    Non-violating readings are dropped; encounter order is kept per bucket.
    """
    groups: dict[GroupKey, list[TelemetryReading]] = defaultdict(list)

    for reading in readings:
        if is_violation(reading):
            groups[(reading.satellite_id, reading.component)].append(reading)

    return dict(groups)


def _check_window(window: timedelta, threshold: int) -> None:
    if threshold < 1:
        raise ValueError(f"threshold must be >= 1, got {threshold}")
    if window < timedelta(0):
        raise ValueError(f"window must not be negative, got {window}")


def build_alert(reading: TelemetryReading) -> Alert:
    return Alert(
        satellite_id=reading.satellite_id,
        severity=severity_for(reading.component),
        component=reading.component,
        trigger_timestamp=reading.timestamp,
    )


def scan_violations(
    violations: Sequence[TelemetryReading],
    window: timedelta = WINDOW_DURATION,
    threshold: int = VIOLATION_THRESHOLD,
) -> Optional[Alert]:
    """
    Find the earliest window holding `threshold` or more violations.

    `violations` must already be sorted by timestamp. The window is
    inclusive: a span of exactly `window` still counts. Scanning stops
    at the first qualifying window and the alert is stamped with the
    window's first reading.
    """
    _check_window(window, threshold)

    window_start = 0

    for window_end in range(len(violations)):
        end_time = violations[window_end].timestamp

        while (
            window_start < window_end
            and end_time - violations[window_start].timestamp > window
        ):
            window_start += 1

        if window_end - window_start + 1 >= threshold:
            return build_alert(violations[window_start])

    return None


def _scan_group(
    group: list[TelemetryReading],
    window: timedelta,
    threshold: int,
) -> Optional[Alert]:
    # sorted() is stable, ties keep encounter order
    ordered = sorted(group, key=lambda r: r.timestamp)
    return scan_violations(ordered, window=window, threshold=threshold)


def detect_alerts(
    readings: Iterable[TelemetryReading],
    *,
    window: timedelta = WINDOW_DURATION,
    threshold: int = VIOLATION_THRESHOLD,
    max_workers: Optional[int] = None,
) -> list[Alert]:
    """
    Run the whole batch: classify, group, sort and scan each group.

    Returns at most one alert per (satellite_id, component). The order
    of alerts across groups carries no meaning. Groups are independent,
    so with max_workers > 1 they are scanned on a thread pool.
    """
    _check_window(window, threshold)
    groups = group_violations(readings)

    if max_workers is not None and max_workers > 1 and len(groups) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(
                pool.map(
                    lambda group: _scan_group(group, window, threshold),
                    groups.values(),
                )
            )
    else:
        results = [_scan_group(group, window, threshold) for group in groups.values()]

    alerts = [alert for alert in results if alert is not None]

    logger.debug(
        "Scanned %d violation group(s), %d alert(s) raised",
        len(groups),
        len(alerts),
    )
    return alerts
