# reporting/alert_report.py

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd
from pydantic import TypeAdapter

from schemas.telemetry import Alert


ALERT_COLUMNS = ["satelliteId", "severity", "component", "timestamp"]

_ALERT_LIST = TypeAdapter(list[Alert])


def sort_alerts(alerts: Iterable[Alert]) -> list[Alert]:
    """
    Engine output has no order across groups; reports always do.
    """
    return sorted(
        alerts,
        key=lambda a: (a.trigger_timestamp, a.satellite_id, a.component),
    )


def render_json(alerts: Iterable[Alert], indent: int = 4) -> str:
    return _ALERT_LIST.dump_json(
        sort_alerts(alerts), indent=indent, by_alias=True
    ).decode("utf-8")


def alerts_to_frame(alerts: Iterable[Alert]) -> pd.DataFrame:
    """
    Flatten alerts into one row each, using the JSON field names.
    """
    rows = [
        alert.model_dump(mode="json", by_alias=True) for alert in sort_alerts(alerts)
    ]
    return pd.DataFrame(rows, columns=ALERT_COLUMNS)


def render_table(alerts: Iterable[Alert]) -> str:
    df = alerts_to_frame(alerts)
    if df.empty:
        return "No alerts"
    return df.to_string(index=False)


def write_csv(alerts: Iterable[Alert], path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    alerts_to_frame(alerts).to_csv(path, index=False)
    return path
