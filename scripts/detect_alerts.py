# scripts/detect_alerts.py

import os
import sys
import logging
import argparse
from datetime import timedelta
from typing import Optional, Sequence

from ingestion.reader import read_readings
from processing.alert_engine import VIOLATION_THRESHOLD, WINDOW_DURATION, detect_alerts
from reporting.alert_report import render_json, render_table, write_csv
from schemas.telemetry import TelemetryValidationError


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"), format=LOG_FORMAT)
logger = logging.getLogger("telemetry-alerts")


def parse_args(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(
        description="Detect sustained red-limit violations in a telemetry file"
    )
    parser.add_argument(
        "input",
        help="Path to pipe-delimited telemetry file",
    )
    parser.add_argument(
        "--format",
        choices=["json", "table"],
        default="json",
        help="Output format for alerts on stdout",
    )
    parser.add_argument(
        "--csv",
        default=None,
        help="Also export alerts to this CSV file",
    )
    parser.add_argument(
        "--window-minutes",
        type=float,
        default=WINDOW_DURATION.total_seconds() / 60,
        help="Rolling window length in minutes",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=VIOLATION_THRESHOLD,
        help="Violations inside one window needed to raise an alert",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Scan violation groups on a thread pool of this size",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        readings = read_readings(args.input)
    except (OSError, TelemetryValidationError) as exc:
        logger.error(f"Failed to load telemetry from {args.input}: {exc}")
        return 1

    logger.info(f"Loaded {len(readings)} readings from {args.input}")

    try:
        alerts = detect_alerts(
            readings,
            window=timedelta(minutes=args.window_minutes),
            threshold=args.threshold,
            max_workers=args.workers,
        )
    except (ValueError, OverflowError) as exc:
        logger.error(f"Invalid detection parameters: {exc}")
        return 1

    logger.info(f"Raised {len(alerts)} alert(s)")

    if args.format == "table":
        print(render_table(alerts))
    else:
        print(render_json(alerts))

    if args.csv:
        path = write_csv(alerts, args.csv)
        logger.info(f"Alerts exported to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
