"""Configuration tree: nodes, deep merge and path addressing."""

from __future__ import annotations

from .node import MAX_DEPTH, ConfigNode, NodeKind, merge_nodes, normalize_scalar
from .path import DEFAULT_SEPARATOR, PathResolver, parse_index, split_path

__all__ = [
    "DEFAULT_SEPARATOR",
    "MAX_DEPTH",
    "ConfigNode",
    "NodeKind",
    "PathResolver",
    "merge_nodes",
    "normalize_scalar",
    "parse_index",
    "split_path",
]
