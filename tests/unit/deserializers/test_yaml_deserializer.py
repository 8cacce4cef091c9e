"""Tests for the YAML deserializer."""

from __future__ import annotations

import pytest

from hierconf.deserializers.yaml_deserializer import YAML_DESERIALIZER, YAMLDeserializer
from hierconf.exceptions import DeserializationError


class TestYAMLDeserializer:
    """Test suite for YAMLDeserializer."""

    def test_mapping(self) -> None:
        """Test parsing a YAML mapping."""
        data = b"database:\n  host: localhost\n  ports: [5432, 5433]\n"
        assert YAML_DESERIALIZER.deserialize(data) == {"database": {"host": "localhost", "ports": [5432, 5433]}}

    def test_dates_and_keys_are_normalized(self) -> None:
        """Test that YAML timestamps and non-string keys become generic values."""
        data = b"released: 2024-01-31\n1: one\n"
        assert YAML_DESERIALIZER.deserialize(data) == {"released": "2024-01-31", "1": "one"}

    def test_plain_scalar_document(self) -> None:
        """Test that a bare scalar is a valid document by default."""
        assert YAML_DESERIALIZER.deserialize(b"just text") == "just text"

    def test_mappings_only_rejects_scalars(self) -> None:
        """Test the stricter mode used to avoid swallowing plain strings."""
        with pytest.raises(DeserializationError):
            _ = YAMLDeserializer(mappings_only=True).deserialize(b"just text")

    def test_invalid_yaml(self) -> None:
        """Test that malformed YAML is rejected."""
        with pytest.raises(DeserializationError) as exc_info:
            _ = YAML_DESERIALIZER.deserialize(b"a: [1, 2\n")
        assert exc_info.value.deserializer == "yaml"

    def test_unsafe_tags_rejected(self) -> None:
        """Test that safe loading refuses arbitrary Python objects."""
        with pytest.raises(DeserializationError):
            _ = YAML_DESERIALIZER.deserialize(b"!!python/object/apply:os.system ['true']\n")

    def test_recursive_anchor_rejected(self) -> None:
        """Test that a sequence containing itself is rejected instead of recursing forever."""
        with pytest.raises(DeserializationError) as exc_info:
            _ = YAML_DESERIALIZER.deserialize(b"&a [*a]\n")
        assert exc_info.value.deserializer == "yaml"

    def test_excessive_nesting_rejected(self) -> None:
        """Test that deeply nested flow sequences are rejected."""
        with pytest.raises(DeserializationError):
            _ = YAML_DESERIALIZER.deserialize(b"[" * 100000 + b"]" * 100000)
