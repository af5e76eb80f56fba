"""Flask JSON API serving maintenance analytics per logbook."""

import logging
import os
from pathlib import Path

from flask import Flask, abort, jsonify, request

from maint_analytics import (
    alert_to_dict,
    load_logbook,
    mileage_stats_to_dict,
    result_to_dict,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)

# Directory of logbook YAML files (default: vehicles/ in the project root)
app.config["LOGBOOK_DIR"] = Path(
    os.environ.get("LOGBOOK_DIR", Path(__file__).parent.parent / "vehicles")
)


def get_logbook_files():
    """Get all logbook YAML files."""
    return sorted(Path(app.config["LOGBOOK_DIR"]).glob("*.yaml"))


def get_logbook_path(vehicle_id: str) -> Path:
    """Get full path for a vehicle ID (filename without extension)."""
    return Path(app.config["LOGBOOK_DIR"]) / f"{vehicle_id}.yaml"


def load_or_404(vehicle_id: str):
    path = get_logbook_path(vehicle_id)
    if path.parent.resolve() != Path(app.config["LOGBOOK_DIR"]).resolve():
        abort(404, description=f"Vehicle '{vehicle_id}' not found")
    if not path.exists():
        abort(404, description=f"Vehicle '{vehicle_id}' not found")
    return load_logbook(path)


@app.errorhandler(404)
def not_found(error):
    return jsonify({"error": error.description}), 404


@app.route("/")
def index():
    """All logbooks with a short alert summary."""
    vehicles = []
    for path in get_logbook_files():
        logbook = load_logbook(path)
        result = logbook.analyze()
        vehicles.append({
            "id": path.stem,
            "name": logbook.vehicle.name,
            "currentOdometer": logbook.vehicle.current_odometer,
            "records": len(logbook.records_for_vehicle()),
            "alerts": len(result.alerts),
            "overdue": sum(1 for a in result.alerts if a.is_overdue),
        })
    return jsonify({"vehicles": vehicles})


@app.route("/vehicle/<vehicle_id>/analytics")
def vehicle_analytics(vehicle_id: str):
    """Full analytics bundle for one vehicle."""
    logbook = load_or_404(vehicle_id)
    logger.debug("Serving analytics for %s", vehicle_id)
    return jsonify(result_to_dict(logbook.analyze()))


@app.route("/vehicle/<vehicle_id>/alerts")
def vehicle_alerts(vehicle_id: str):
    """Predictive alerts only; ?overdue=true keeps overdue services."""
    logbook = load_or_404(vehicle_id)
    alerts = logbook.analyze().alerts
    if request.args.get("overdue", "").lower() == "true":
        alerts = [a for a in alerts if a.is_overdue]
    return jsonify({"alerts": [alert_to_dict(a) for a in alerts]})


@app.route("/vehicle/<vehicle_id>/mileage")
def vehicle_mileage(vehicle_id: str):
    """Distance and fuel statistics from the mileage log."""
    logbook = load_or_404(vehicle_id)
    return jsonify(mileage_stats_to_dict(logbook.mileage_stats()))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, port=5000)
