"""Shared type definitions: value aliases, protocols and result models."""

from hierconf.types.aliases import Environment, GenericValue, ScalarValue
from hierconf.types.models import LoadOutcome, LoadStatus
from hierconf.types.protocols import Deserializer, ResourceReader

__all__ = [
    "Deserializer",
    "Environment",
    "GenericValue",
    "LoadOutcome",
    "LoadStatus",
    "ResourceReader",
    "ScalarValue",
]
