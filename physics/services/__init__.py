"""
RUNAWAY Service Layer: RunawayService ABC and ServiceRegistry.

Each physics consumer (bow shock geometry, PV model, wake profiles,
dashboard) is a RunawayService registered with the ServiceRegistry. A
service owns its request validation, its computation and its /api routes.
Validation happens once, at this boundary: the physics functions below it
receive a ParameterSet snapshot and never check ranges.

Classes:
    RunawayService  - Abstract base class for all physics services
    ServiceRegistry - Central lookup container for registered services

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
from abc import ABC, abstractmethod

from flask import jsonify, request

log = logging.getLogger(__name__)


def clamp_points(raw, default, lo, hi, name="n_points"):
    """
    Parse a sample count and clamp it to [lo, hi].

    Raises
    ------
    ValueError
        If raw is present but not an integer-like number.
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        raise ValueError("'{}' must be an integer".format(name))
    try:
        value = int(raw)
    except (TypeError, ValueError, OverflowError):
        raise ValueError("'{}' must be an integer".format(name))
    return max(lo, min(value, hi))


def round_list(values, ndigits):
    return [round(float(v), ndigits) for v in values]


class RunawayService(ABC):
    """
    Abstract base class for a RUNAWAY physics service.

    Class Attributes
    ----------------
    id : str
        Unique service identifier (e.g. "pv", "wake").
    name : str
        Human-readable display name.
    description : str
        One-liner for the service index.
    category : str
        One of "geometry", "kinematics", "energetics".
    """

    id = ""
    name = ""
    description = ""
    category = ""

    @abstractmethod
    def validate(self, config):
        """
        Validate raw input and return a normalized config dict.

        Parameters
        ----------
        config : dict
            Raw request payload. Model parameters sit at the top level
            next to service options such as n_points.

        Returns
        -------
        dict
            Normalized configuration; 'params' holds the ParameterSet.

        Raises
        ------
        ValueError
            If the config is invalid.
        """

    @abstractmethod
    def compute(self, config):
        """
        Run the service computation and return results.

        Parameters
        ----------
        config : dict
            Validated configuration from validate().

        Returns
        -------
        dict
            JSON-serializable result.
        """

    def register_routes(self, blueprint):
        """
        Mount service-specific API endpoints onto a Flask blueprint.

        Parameters
        ----------
        blueprint : flask.Blueprint
            The API blueprint to mount routes on.
        """

    def metadata(self):
        """
        Return service metadata for the registry index.

        Returns
        -------
        dict
            Service info: id, name, description, category.
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
        }

    def handle(self, compute_fn):
        """
        Validate the JSON body and run compute_fn on the result.

        Returns the Flask response: 400 with {"error": ...} on invalid
        input, otherwise the JSON-serialized computation.
        """
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400
        try:
            config = self.validate(data)
        except ValueError as e:
            log.debug("Rejected %s request: %s", self.id, e)
            return jsonify({"error": str(e)}), 400
        return jsonify(compute_fn(config))


class ServiceRegistry:
    """
    Central lookup container for registered RunawayService instances.

    Services register at app startup. The registry provides lookup by
    id, the service index, and iteration for API route mounting.
    """

    def __init__(self):
        self._services = {}

    def register(self, service):
        """
        Register a service instance.

        Raises
        ------
        ValueError
            If a service with the same id is already registered.
        """
        if service.id in self._services:
            raise ValueError(
                "Service '{}' is already registered".format(service.id)
            )
        self._services[service.id] = service

    def get(self, service_id):
        """Look up a service by id; None if not registered."""
        return self._services.get(service_id)

    def list_all(self):
        """Metadata for all registered services, in registration order."""
        return [s.metadata() for s in self._services.values()]

    def all(self):
        """All registered service instances, in registration order."""
        return list(self._services.values())
