"""Deserializers turning raw configuration bytes into generic values."""

from __future__ import annotations

from .json_deserializer import JSON_DESERIALIZER, JSONDeserializer
from .plist_deserializer import PLIST_DESERIALIZER, PlistDeserializer
from .registry import DeserializerRegistry
from .yaml_deserializer import YAML_DESERIALIZER, YAMLDeserializer

__all__ = [
    "JSON_DESERIALIZER",
    "PLIST_DESERIALIZER",
    "YAML_DESERIALIZER",
    "DeserializerRegistry",
    "JSONDeserializer",
    "PlistDeserializer",
    "YAMLDeserializer",
]
