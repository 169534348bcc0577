# scripts/generate_telemetry.py

import os
import sys
import logging
import argparse
from pathlib import Path
from typing import Optional, Sequence

from ingestion.reader import format_reading
from simulator.telemetry_generator import FAULTS, TelemetrySimulator


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"), format=LOG_FORMAT)
logger = logging.getLogger("telemetry-generator")


def parse_args(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(
        description="Write a simulated pipe-delimited telemetry file"
    )
    parser.add_argument(
        "output",
        help="Destination file",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=40,
        help="Number of readings to generate",
    )
    parser.add_argument(
        "--fault",
        choices=FAULTS,
        default=None,
        help="Inject a persistent fault",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    simulator = TelemetrySimulator(seed=args.seed)
    if args.fault:
        logger.warning(f"Fault injection enabled: {args.fault}")

    readings = simulator.generate_batch(args.count, fault=args.fault)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        "\n".join(format_reading(r) for r in readings) + "\n",
        encoding="utf-8",
    )

    logger.info(f"Wrote {len(readings)} readings to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
