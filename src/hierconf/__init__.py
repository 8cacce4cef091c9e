"""hierconf - hierarchical configuration aggregation.

This package merges configuration from raw objects, command-line
arguments, environment variables, byte buffers, files and URLs into a
single tree addressable by ``:``-separated paths. Later sources override
earlier ones: dictionaries are deep-merged, everything else is replaced.
"""

from hierconf.config.settings import ManagerSettings
from hierconf.core.node import ConfigNode, NodeKind, merge_nodes
from hierconf.core.path import PathResolver
from hierconf.deserializers import (
    JSON_DESERIALIZER,
    PLIST_DESERIALIZER,
    YAML_DESERIALIZER,
    DeserializerRegistry,
    JSONDeserializer,
    PlistDeserializer,
    YAMLDeserializer,
)
from hierconf.exceptions import (
    ConfigError,
    ConfigSettingsError,
    DeserializationError,
    ResourceFetchError,
    UnknownDeserializerError,
)
from hierconf.loader import BasePath, ResourceFetcher
from hierconf.manager import ConfigurationManager, Source
from hierconf.types import Deserializer, GenericValue, LoadOutcome, LoadStatus

__all__ = [
    "JSON_DESERIALIZER",
    "PLIST_DESERIALIZER",
    "YAML_DESERIALIZER",
    "BasePath",
    "ConfigError",
    "ConfigNode",
    "ConfigSettingsError",
    "ConfigurationManager",
    "DeserializationError",
    "Deserializer",
    "DeserializerRegistry",
    "GenericValue",
    "JSONDeserializer",
    "LoadOutcome",
    "LoadStatus",
    "ManagerSettings",
    "NodeKind",
    "PathResolver",
    "PlistDeserializer",
    "ResourceFetchError",
    "ResourceFetcher",
    "Source",
    "UnknownDeserializerError",
    "YAMLDeserializer",
    "merge_nodes",
]
