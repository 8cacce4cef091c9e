"""Tests for the deserializer registry."""

from __future__ import annotations

import pytest

from hierconf.deserializers.json_deserializer import JSON_DESERIALIZER
from hierconf.deserializers.registry import DeserializerRegistry
from hierconf.exceptions import DeserializationError, UnknownDeserializerError
from hierconf.types.aliases import GenericValue


class KeyValueDeserializer:
    """Deserializer for ``key=value`` lines, used for testing."""

    name: str = "keyvalue"

    def deserialize(self, data: bytes) -> GenericValue:
        text = data.decode("utf-8")
        lines = [line for line in text.splitlines() if line.strip()]
        if not lines or any("=" not in line for line in lines):
            raise DeserializationError("Not key=value lines", self.name)
        return {key.strip(): value.strip() for key, value in (line.split("=", 1) for line in lines)}


class AcceptAllDeserializer:
    """Deserializer accepting anything, used to check ordering."""

    def __init__(self, name: str = "accept-all", result: GenericValue = "accepted") -> None:
        self.name: str = name
        self.result: GenericValue = result

    def deserialize(self, data: bytes) -> GenericValue:
        return self.result


class TestDeserializerRegistry:
    """Test suite for DeserializerRegistry."""

    def test_defaults(self) -> None:
        """Test that JSON and plist are registered, in that order."""
        registry = DeserializerRegistry.with_defaults()
        assert registry.names() == ["json", "plist"]
        assert "json" in registry
        assert len(registry) == 2

    def test_register_and_get(self) -> None:
        """Test registering a custom deserializer."""
        registry = DeserializerRegistry()
        deserializer = KeyValueDeserializer()
        registry.register(deserializer)
        assert registry.get("keyvalue") is deserializer
        assert registry.get("missing") is None

    def test_reregistering_keeps_position(self) -> None:
        """Test that replacing a deserializer keeps its fallback position."""
        registry = DeserializerRegistry.with_defaults()
        replacement = AcceptAllDeserializer(name="json")
        registry.register(replacement)
        assert registry.names() == ["json", "plist"]
        assert registry.get("json") is replacement

    def test_unregister(self) -> None:
        """Test removing a deserializer."""
        registry = DeserializerRegistry.with_defaults()
        registry.unregister("plist")
        assert registry.names() == ["json"]
        with pytest.raises(UnknownDeserializerError):
            registry.unregister("plist")

    def test_fallback_uses_registration_order(self) -> None:
        """Test that the first deserializer accepting the data wins."""
        registry = DeserializerRegistry([JSON_DESERIALIZER, AcceptAllDeserializer()])
        assert registry.deserialize(b'{"a": 1}') == ({"a": 1}, "json")
        assert registry.deserialize(b"not json") == ("accepted", "accept-all")

    def test_named_deserializer_only(self) -> None:
        """Test that a named deserializer is the only one tried."""
        registry = DeserializerRegistry([JSON_DESERIALIZER, AcceptAllDeserializer()])
        with pytest.raises(DeserializationError):
            _ = registry.deserialize(b"not json", "json")

    def test_unknown_name(self) -> None:
        """Test that an unregistered name raises."""
        registry = DeserializerRegistry.with_defaults()
        with pytest.raises(UnknownDeserializerError) as exc_info:
            _ = registry.deserialize(b"{}", "toml")
        assert exc_info.value.deserializer == "toml"

    def test_all_fail(self) -> None:
        """Test the error raised when no deserializer accepts the data."""
        registry = DeserializerRegistry.with_defaults()
        with pytest.raises(DeserializationError) as exc_info:
            _ = registry.deserialize(b"plain text")
        assert exc_info.value.context["tried"] == ["json", "plist"]

    def test_try_deserialize(self) -> None:
        """Test the non-raising variant."""
        registry = DeserializerRegistry.with_defaults()
        assert registry.try_deserialize(b"[1]") == ([1], "json")
        assert registry.try_deserialize(b"plain text") is None
        assert registry.try_deserialize(b"[1]", "missing") is None

    def test_custom_deserializer(self) -> None:
        """Test a custom format after the built-ins."""
        registry = DeserializerRegistry.with_defaults()
        registry.register(KeyValueDeserializer())
        value, name = registry.deserialize(b"host = db\nport = 5432\n")
        assert name == "keyvalue"
        assert value == {"host": "db", "port": "5432"}

    def test_iteration_order(self) -> None:
        """Test iterating deserializers in fallback order."""
        registry = DeserializerRegistry.with_defaults()
        assert [deserializer.name for deserializer in registry] == ["json", "plist"]
