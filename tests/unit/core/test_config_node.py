"""Test suite for configuration tree nodes and merging."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from hierconf.core.node import MAX_DEPTH, ConfigNode, NodeKind, merge_nodes, normalize_scalar


class TestConversion:
    """Test conversion between generic values and nodes."""

    def test_dictionary_conversion(self) -> None:
        """Test that mappings become dictionary nodes."""
        node = ConfigNode.from_generic({"a": 1, "b": {"c": "x"}})
        assert node.kind is NodeKind.DICTIONARY
        assert node.entries["a"] == ConfigNode.scalar(1)
        assert node.entries["b"].is_dictionary

    def test_sequence_conversion(self) -> None:
        """Test that lists and tuples become sequence nodes."""
        assert ConfigNode.from_generic([1, 2]).is_sequence
        assert ConfigNode.from_generic((1, 2)).to_generic() == [1, 2]

    def test_strings_and_bytes_are_scalars(self) -> None:
        """Test that text and bytes are not treated as sequences."""
        assert ConfigNode.from_generic("abc").is_scalar
        assert ConfigNode.from_generic(b"abc").to_generic() == "abc"

    def test_round_trip(self) -> None:
        """Test that to_generic inverts from_generic."""
        value = {"a": [1, 2.5, {"b": None}], "c": True, "d": "text"}
        assert ConfigNode.from_generic(value).to_generic() == value

    def test_non_string_keys_are_stringified(self) -> None:
        """Test that mapping keys are converted to strings."""
        node = ConfigNode.from_generic({1: "one", 2.5: "two and a half"})
        assert set(node.entries) == {"1", "2.5"}

    def test_conversion_copies_input(self) -> None:
        """Test that the tree does not alias caller data."""
        source: dict[str, object] = {"items": [1, 2]}
        node = ConfigNode.from_generic(source)
        source["items"].append(3)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownMemberType]
        assert node.to_generic() == {"items": [1, 2]}

    def test_snapshot_is_independent(self) -> None:
        """Test that mutating a snapshot does not affect the tree."""
        node = ConfigNode.from_generic({"a": {"b": 1}})
        snapshot = node.to_generic()
        snapshot["a"]["b"] = 2  # pyright: ignore[reportIndexIssue, reportOptionalSubscript, reportArgumentType, reportCallIssue]
        assert node.to_generic() == {"a": {"b": 1}}

    def test_nesting_limit(self) -> None:
        """Test that conversion refuses trees nested deeper than MAX_DEPTH."""
        value: object = 1
        for _ in range(MAX_DEPTH + 1):
            value = [value]
        with pytest.raises(ValueError, match="nesting exceeds"):
            _ = ConfigNode.from_generic(value)

    def test_nesting_at_limit_accepted(self) -> None:
        """Test that trees just inside the limit convert."""
        value: object = 1
        for _ in range(MAX_DEPTH):
            value = {"k": value}
        assert ConfigNode.from_generic(value).to_generic() == value


class TestNormalizeScalar:
    """Test scalar normalization."""

    def test_generic_scalars_unchanged(self) -> None:
        """Test that generic scalars pass through."""
        for value in (None, True, 3, 1.5, "x"):
            assert normalize_scalar(value) == value

    def test_dates_become_iso_strings(self) -> None:
        """Test that dates and datetimes become ISO-8601 strings."""
        assert normalize_scalar(date(2024, 2, 29)) == "2024-02-29"
        assert normalize_scalar(datetime(2024, 2, 29, 12, 30)) == "2024-02-29T12:30:00"

    def test_invalid_utf8_bytes_are_replaced(self) -> None:
        """Test that undecodable bytes do not raise."""
        assert normalize_scalar(b"ok\xff") == "ok\ufffd"

    def test_other_objects_become_strings(self) -> None:
        """Test the string fallback for unknown objects."""
        assert normalize_scalar(NodeKind.SCALAR) == "NodeKind.SCALAR"


class TestAccessors:
    """Test kind-specific accessors."""

    def test_entries_on_scalar_raises(self) -> None:
        """Test that asking a scalar for entries fails."""
        with pytest.raises(TypeError):
            _ = ConfigNode.scalar(1).entries

    def test_elements_on_dictionary_raises(self) -> None:
        """Test that asking a dictionary for elements fails."""
        with pytest.raises(TypeError):
            _ = ConfigNode.dictionary().elements

    def test_value_on_sequence_raises(self) -> None:
        """Test that asking a sequence for a scalar value fails."""
        with pytest.raises(TypeError):
            _ = ConfigNode.sequence().value

    def test_len(self) -> None:
        """Test child counts."""
        assert len(ConfigNode.from_generic({"a": 1, "b": 2})) == 2
        assert len(ConfigNode.from_generic([1, 2, 3])) == 3
        assert len(ConfigNode.scalar("abc")) == 0

    def test_equality_distinguishes_bool_from_int(self) -> None:
        """Test that True and 1 are different settings."""
        assert ConfigNode.scalar(True) != ConfigNode.scalar(1)
        assert ConfigNode.scalar(1) == ConfigNode.scalar(1)

    def test_equality_is_structural(self) -> None:
        """Test that equal trees compare equal."""
        assert ConfigNode.from_generic({"a": [1]}) == ConfigNode.from_generic({"a": [1]})
        assert ConfigNode.from_generic({"a": [1]}) != ConfigNode.from_generic({"a": 1})

    def test_copy_is_deep(self) -> None:
        """Test that copies do not share children."""
        node = ConfigNode.from_generic({"a": {"b": 1}})
        clone = node.copy()
        clone.entries["a"].entries["b"] = ConfigNode.scalar(2)
        assert node.to_generic() == {"a": {"b": 1}}


class TestMerge:
    """Test the deep-merge algorithm."""

    def test_scalar_override(self) -> None:
        """Test that the overlay wins for scalars."""
        base = ConfigNode.from_generic({"foo": "bar"})
        base.merge(ConfigNode.from_generic({"foo": "baz"}))
        assert base.to_generic() == {"foo": "baz"}

    def test_dictionaries_deep_merge(self) -> None:
        """Test that dictionaries are merged key by key."""
        base = ConfigNode.from_generic({"a": {"x": 1, "y": 2}, "keep": True})
        base.merge(ConfigNode.from_generic({"a": {"y": 3}, "new": "added"}))
        assert base.to_generic() == {"a": {"x": 1, "y": 3}, "keep": True, "new": "added"}

    def test_deeply_nested_merge(self) -> None:
        """Test merging several levels down."""
        base = ConfigNode.from_generic({"l1": {"l2": {"l3": {"value": 1, "keep": True}}}})
        base.merge(ConfigNode.from_generic({"l1": {"l2": {"l3": {"value": 2, "new": "x"}}}}))
        assert base.to_generic() == {"l1": {"l2": {"l3": {"value": 2, "keep": True, "new": "x"}}}}

    def test_sequences_are_replaced(self) -> None:
        """Test that sequences are never merged element-wise."""
        base = ConfigNode.from_generic({"a": [1, 2]})
        base.merge(ConfigNode.from_generic({"a": [3]}))
        assert base.to_generic() == {"a": [3]}

    def test_empty_sequence_replaces(self) -> None:
        """Test that an empty overlay sequence still replaces."""
        base = ConfigNode.from_generic({"a": [1, 2]})
        base.merge(ConfigNode.from_generic({"a": []}))
        assert base.to_generic() == {"a": []}

    def test_empty_dictionary_is_noop(self) -> None:
        """Test that an empty overlay dictionary leaves the base untouched."""
        base = ConfigNode.from_generic({"a": {"x": 1}})
        base.merge(ConfigNode.from_generic({"a": {}}))
        assert base.to_generic() == {"a": {"x": 1}}

    def test_type_conflict_overlay_wins(self) -> None:
        """Test that differing kinds are resolved in favour of the overlay."""
        base = ConfigNode.from_generic({"value": {"nested": True}, "other": "text"})
        base.merge(ConfigNode.from_generic({"value": "string", "other": {"now": "dict"}}))
        assert base.to_generic() == {"value": "string", "other": {"now": "dict"}}

    def test_null_overlay_wins(self) -> None:
        """Test that an explicit null in the overlay replaces the base value."""
        base = ConfigNode.from_generic({"a": 1, "c": {"x": 10}})
        base.merge(ConfigNode.from_generic({"a": None, "c": None}))
        assert base.to_generic() == {"a": None, "c": None}

    def test_root_kind_replaced(self) -> None:
        """Test that a non-dictionary overlay replaces the whole base."""
        base = ConfigNode.from_generic({"a": 1})
        base.merge(ConfigNode.from_generic([1, 2]))
        assert base.is_sequence
        assert base.to_generic() == [1, 2]

    def test_new_keys_are_adopted(self) -> None:
        """Test that overlay-only children are moved, not copied."""
        overlay = ConfigNode.from_generic({"new": {"x": 1}})
        child = overlay.entries["new"]
        base = ConfigNode.dictionary()
        base.merge(overlay)
        assert base.entries["new"] is child

    def test_merge_nodes_is_pure(self) -> None:
        """Test that the functional merge leaves both inputs unchanged."""
        base = ConfigNode.from_generic({"a": 1, "b": {"x": 10}})
        overlay = ConfigNode.from_generic({"b": {"y": 20}})
        result = merge_nodes(base, overlay)
        assert result.to_generic() == {"a": 1, "b": {"x": 10, "y": 20}}
        assert base.to_generic() == {"a": 1, "b": {"x": 10}}
        assert overlay.to_generic() == {"b": {"y": 20}}
