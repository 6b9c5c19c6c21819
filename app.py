"""
RUNAWAY - Runaway black hole bow shock and wake explorer.
Flask application factory.

Serves the physics core to the browser front end (3D scene, PV and wake
plots, dashboard) as a JSON API via registered RunawayService instances.

Usage:
    python app.py              # Development server on http://localhost:5000
    flask run                  # Same, via Flask CLI

Configuration keys (override with RUNAWAY_<KEY> environment variables or
the mapping passed to create_app):
    OBSERVATIONS_DIR   directory holding observed-pv.json / observed-wake.json
    MAX_CURVE_POINTS   upper bound on curve sample counts
    MAX_GRID_POINTS    upper bound on surface grid size per axis
    LOG_LEVEL          logging level when run as a script
"""

__version__ = "0.1.0"

import logging

from flask import Flask, jsonify

from data.observations import DEFAULT_OBSERVATIONS_DIR
from physics.services import ServiceRegistry
from physics.services.bowshock import BowShockService
from physics.services.pv import PVService
from physics.services.wake import WakeService
from physics.services.dashboard import DashboardService

log = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "OBSERVATIONS_DIR": DEFAULT_OBSERVATIONS_DIR,
    "MAX_CURVE_POINTS": 2000,
    "MAX_GRID_POINTS": 256,
    "LOG_LEVEL": "INFO",
}


def create_registry(config):
    """Build and populate the service registry."""
    max_points = int(config["MAX_CURVE_POINTS"])
    registry = ServiceRegistry()
    registry.register(BowShockService(
        max_points=max_points,
        max_grid=int(config["MAX_GRID_POINTS"]),
    ))
    registry.register(PVService(max_points=max_points))
    registry.register(WakeService(max_points=max_points))
    registry.register(DashboardService())
    return registry


def create_app(config=None):
    """Application factory for the RUNAWAY Flask app."""
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env("RUNAWAY")
    if config:
        app.config.from_mapping(config)

    registry = create_registry(app.config)

    from api.routes import create_api_blueprint
    api = create_api_blueprint(registry)
    app.register_blueprint(api)

    @app.route("/")
    def index():
        return jsonify({
            "name": "RUNAWAY",
            "version": __version__,
            "services": registry.list_all(),
        })

    log.debug("Registered services: %s", [s["id"] for s in registry.list_all()])
    return app


if __name__ == "__main__":
    app = create_app()
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(debug=True, host="127.0.0.1", port=5000)
