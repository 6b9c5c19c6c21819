"""
Observed-data fixtures for the PV and wake plots.

Each fixture is a JSON file of digitized figure data:

    {"points": [{"x": ..., "v": ..., "v_err": ...}, ...]}   (PV, x in kpc)
    {"points": [{"r": ..., "v": ..., "v_err": ...}, ...]}   (wake, r in kpc)

Velocities in km/s. The physics core never reads these; they are loaded
here for the API and the plotting scripts, which compare them against
model curves on the same axes.

IMPORTANT: No unicode in code or messages (Windows charmap).
"""

import json
import logging
import math
import os

log = logging.getLogger(__name__)

# Fixture file per observation kind, and the position field it uses.
OBSERVATION_FILES = {
    "pv": "observed-pv.json",
    "wake": "observed-wake.json",
}
POSITION_KEYS = {
    "pv": "x",
    "wake": "r",
}

_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DEFAULT_OBSERVATIONS_DIR = os.path.join(_REPO_ROOT, "data", "observed")


def _number(value, field, index):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Point {}: '{}' must be a number".format(index, field))
    value = float(value)
    if not math.isfinite(value):
        raise ValueError("Point {}: '{}' must be finite".format(index, field))
    return value


def validate_points(points, position_key=None):
    """
    Validate and normalize a list of observed points.

    Parameters
    ----------
    points : list of dict
        Raw points. Each needs a position ('x' or 'r', or position_key if
        given) and 'v'; 'v_err' is optional and must be >= 0.
    position_key : str, optional
        Required position field. When omitted, 'x' or 'r' is accepted.

    Returns
    -------
    list of dict
        Points with float values, keeping only the position, 'v' and
        'v_err' fields.

    Raises
    ------
    ValueError
        If the structure or any value is invalid.
    """
    if not isinstance(points, list):
        raise ValueError("'points' must be a list")

    out = []
    for idx, pt in enumerate(points):
        if not isinstance(pt, dict):
            raise ValueError("Point {} must be an object".format(idx))

        if position_key is not None:
            key = position_key
        else:
            key = "x" if "x" in pt else "r"
        if key not in pt:
            raise ValueError("Point {}: missing position '{}'".format(idx, key))
        if "v" not in pt:
            raise ValueError("Point {}: missing 'v'".format(idx))

        clean = {
            key: _number(pt[key], key, idx),
            "v": _number(pt["v"], "v", idx),
        }
        if pt.get("v_err") is not None:
            err = _number(pt["v_err"], "v_err", idx)
            if err < 0:
                raise ValueError("Point {}: 'v_err' must be >= 0".format(idx))
            clean["v_err"] = err
        out.append(clean)
    return out


def load_observations(path, position_key=None):
    """
    Load a fixture file and return its validated points.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file is not valid JSON or not in the fixture format.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        log.warning("Malformed observation fixture %s: %s", path, e)
        raise ValueError("Invalid JSON in {}".format(os.path.basename(path)))

    if not isinstance(raw, dict) or "points" not in raw:
        log.warning("Observation fixture %s has no 'points' list", path)
        raise ValueError("Fixture must be an object with a 'points' list")

    points = validate_points(raw["points"], position_key)
    log.info("Loaded %d observed points from %s", len(points), path)
    return points


def load_observation_kind(kind, directory=None):
    """
    Load the fixture for one observation kind ('pv' or 'wake').

    Raises
    ------
    KeyError
        If kind is unknown.
    """
    filename = OBSERVATION_FILES[kind]
    directory = directory or DEFAULT_OBSERVATIONS_DIR
    return load_observations(os.path.join(directory, filename), POSITION_KEYS[kind])
