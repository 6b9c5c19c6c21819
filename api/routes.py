"""
Flask API routes for RUNAWAY.

Shared endpoints (service-owned endpoints are mounted by each
RunawayService via register_routes):
  GET  /api/services             - registered service metadata
  GET  /api/defaults             - default parameters, ranges, slider groups
  GET  /api/observations/<kind>  - observed-data fixture ('pv' or 'wake')
"""

import logging

from flask import Blueprint, current_app, jsonify

from data.observations import OBSERVATION_FILES, load_observation_kind
from physics.constants import DEFAULTS
from physics.params import (
    PARAMETER_RANGES,
    POSITIVE_PARAMETERS,
    SLIDER_GROUPS,
    ParameterSet,
)

log = logging.getLogger(__name__)


def create_api_blueprint(registry):
    """
    Build the /api blueprint: shared routes plus every service's routes.

    Parameters
    ----------
    registry : ServiceRegistry
        Populated service registry.
    """
    api = Blueprint("api", __name__, url_prefix="/api")

    @api.route("/services", methods=["GET"])
    def list_services():
        """Return metadata for all registered services."""
        return jsonify(registry.list_all())

    @api.route("/defaults", methods=["GET"])
    def defaults():
        """
        Default parameter snapshot and the interactive control layout.

        Response JSON:
        {
            "params": {...},            // every field plus derived R_0
            "ranges": {"v_star": [400, 1600], ...},
            "positive": ["r_star", ...],
            "sliders": {"pv": [...], "wake": [...]}
        }
        """
        return jsonify({
            "params": ParameterSet().as_dict(),
            "ranges": {k: list(v) for k, v in PARAMETER_RANGES.items()},
            "positive": list(POSITIVE_PARAMETERS),
            "sliders": SLIDER_GROUPS,
            "paper_defaults": DEFAULTS,
        })

    @api.route("/observations/<kind>", methods=["GET"])
    def observations(kind):
        """Return the observed points for one fixture kind."""
        if kind not in OBSERVATION_FILES:
            return jsonify({"error": "Unknown observation kind"}), 404
        directory = current_app.config["OBSERVATIONS_DIR"]
        try:
            points = load_observation_kind(kind, directory)
        except FileNotFoundError:
            return jsonify({"error": "Observation fixture not found"}), 404
        except ValueError as e:
            log.warning("Serving error for %s fixture: %s", kind, e)
            return jsonify({"error": str(e)}), 500
        return jsonify({"kind": kind, "points": points})

    for service in registry.all():
        service.register_routes(api)

    return api
