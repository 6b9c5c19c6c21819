"""
Wake and Shock Velocity Service.

Serves the delayed-mixing wake profile (Eq 19) and the shock velocity
profile (Eq 13) on a shared r grid over [0, r_star], their comparison
with observed wake points, and a fit of the wake model to those points.

Endpoints:
    POST /api/wake/curve   - {r, wake, shock} curves
    POST /api/wake/compare - curves plus wake fit metrics against
                             caller-supplied observations
    POST /api/wake/fit     - best-fit (v0, dr_delay, l_mix) and the
                             fitted wake curve

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging

from flask import jsonify, request

from data.observations import validate_points
from physics.fitting import compute_fit_metrics, fit_wake_profile
from physics.params import validate_parameters
from physics.services import RunawayService, clamp_points, round_list
from physics.shockvel import shock_velocity_curve
from physics.wake import wake_velocity_curve

log = logging.getLogger(__name__)


class WakeService(RunawayService):

    id = "wake"
    name = "Wake Profile"
    description = "Delayed-mixing wake velocity and shock velocity along the wake"
    category = "kinematics"

    def __init__(self, max_points=2000):
        self.max_points = max_points

    def validate(self, config):
        """Validate wake request payload."""
        observations = config.get("observations")
        return {
            "params": validate_parameters(config),
            "n_points": clamp_points(config.get("n_points"), 300, 10, self.max_points),
            "observations": (
                validate_points(observations, "r") if observations is not None else None
            ),
        }

    def _curves(self, config):
        params = config["params"]
        wake = wake_velocity_curve(params, config["n_points"])
        shock = shock_velocity_curve(params, config["n_points"])
        return wake, shock

    def _curve_result(self, params, wake, shock):
        return {
            "r": round_list(wake["r"], 6),
            "wake": round_list(wake["v"], 4),
            "shock": round_list(shock["v"], 4),
            "r_star": params.r_star,
            "R_0": params.R_0,
        }

    def compute(self, config):
        """Wake and shock velocity curves for one parameter snapshot."""
        wake, shock = self._curves(config)
        return self._curve_result(config["params"], wake, shock)

    def compute_comparison(self, config):
        """Curves plus wake fit metrics against the supplied observations."""
        wake, shock = self._curves(config)
        result = self._curve_result(config["params"], wake, shock)
        result["metrics"] = compute_fit_metrics(
            wake["r"], wake["v"], config["observations"], key="r"
        )
        return result

    def compute_fit(self, config):
        """
        Fit the wake model to the supplied observations.

        Returns None when there are too few usable points.
        """
        fit = fit_wake_profile(config["observations"], config["params"])
        if fit is None:
            return None

        fitted = fit.pop("params")
        wake = wake_velocity_curve(fitted, config["n_points"])
        fit["r"] = round_list(wake["r"], 6)
        fit["wake"] = round_list(wake["v"], 4)
        fit["metrics"] = compute_fit_metrics(
            wake["r"], wake["v"], config["observations"], key="r"
        )
        return fit

    def register_routes(self, bp):
        """Register wake API endpoints on the given blueprint."""
        service = self

        @bp.route("/wake/curve", methods=["POST"])
        def wake_curve():
            return service.handle(service.compute)

        @bp.route("/wake/compare", methods=["POST"])
        def wake_compare():
            return service.handle(service.compute_comparison)

        @bp.route("/wake/fit", methods=["POST"])
        def wake_fit():
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return jsonify({"error": "Request body must be a JSON object"}), 400
            if not data.get("observations"):
                return jsonify({"error": "observations are required"}), 400
            try:
                config = service.validate(data)
            except ValueError as e:
                log.debug("Rejected wake fit request: %s", e)
                return jsonify({"error": str(e)}), 400

            result = service.compute_fit(config)
            if result is None:
                return jsonify({"error": "At least 3 observed points are required"}), 400
            return jsonify(result)
