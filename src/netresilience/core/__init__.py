"""Core module - configuration, exceptions, and utilities."""

from .config import Config, get_config, set_config
from .exceptions import (
    EmptyGraph,
    InvalidNodeReference,
    NetResilienceError,
    TopologyFileError,
    ValidationError,
)
from .utils import coerce_node_id, ensure_results_dir, euclidean_distance, parse_link

__all__ = [
    "Config",
    "get_config",
    "set_config",
    "NetResilienceError",
    "ValidationError",
    "InvalidNodeReference",
    "EmptyGraph",
    "TopologyFileError",
    "ensure_results_dir",
    "euclidean_distance",
    "parse_link",
    "coerce_node_id",
]
