from datetime import timedelta

from processing.alert_engine import detect_alerts
from reporting.alert_report import render_json
from simulator.telemetry_generator import TelemetrySimulator

sim = TelemetrySimulator(interval=timedelta(seconds=20))

readings = sim.generate_batch(24, fault="LOW_BATTERY")
print(render_json(detect_alerts(readings)))
