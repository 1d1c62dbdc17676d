"""Utility functions for the network resilience engine."""

import math
from collections.abc import Hashable
from pathlib import Path

from .config import get_config
from .exceptions import ValidationError


def ensure_results_dir() -> Path:
    """Ensure results directory exists and return its path."""
    config = get_config()
    config.results_dir.mkdir(parents=True, exist_ok=True)
    return config.results_dir


def euclidean_distance(a: tuple[float, float], b: tuple[float, float]) -> float:
    """Straight-line distance between two canvas positions."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def parse_link(spec: str) -> tuple[str, str]:
    """
    Parse a link given on the command line.

    Accepts ``U-V``, ``U:V`` or ``U,V``. Node ids are returned as strings.

    Raises:
        ValidationError: If the spec does not name exactly two nodes.
    """
    for sep in (":", ",", "-"):
        if sep in spec:
            parts = [p.strip() for p in spec.split(sep)]
            if len(parts) == 2 and all(parts):
                return parts[0], parts[1]
            break
    raise ValidationError(f"Invalid link: {spec}", "Expected U-V, U:V or U,V")


def coerce_node_id(value: Hashable, known: set) -> Hashable:
    """Match a string id typed by a user against ids that may be integers."""
    if value in known:
        return value
    if isinstance(value, str) and value.lstrip("-").isdigit() and int(value) in known:
        return int(value)
    return value
