"""Configuration tree nodes and the deep-merge algorithm.

A configuration tree is made of ``ConfigNode`` instances, each one tagged
with a ``NodeKind``: a dictionary of child nodes, a sequence of child
nodes, or a scalar leaf. Trees are built by converting generic values
(the dict/list/scalar shapes produced by every configuration source) and
combined with ``ConfigNode.merge``:

- two dictionaries merge key by key, recursing into common keys
- any other combination is won by the overlay, wholesale

Sequences are never merged element-wise; a later sequence replaces an
earlier one at the same position.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from enum import Enum, auto
from typing import Final, override

from hierconf.types.aliases import GenericValue, ScalarValue

# Deepest dictionary/sequence nesting accepted when building a tree
MAX_DEPTH: Final[int] = 200


class NodeKind(Enum):
    """Discriminant of a configuration node."""

    DICTIONARY = auto()
    SEQUENCE = auto()
    SCALAR = auto()


def normalize_scalar(value: object) -> ScalarValue:
    """Coerce a leaf value to the closest generic scalar.

    Args:
        value: Leaf value produced by a deserializer or supplied by a caller

    Returns:
        The value itself for generic scalars, an ISO-8601 string for
        dates and times, decoded text for bytes, ``str(value)`` otherwise
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


class ConfigNode:
    """A node of the configuration tree.

    Nodes own their children exclusively: conversion from generic values
    always copies, so no node aliases a caller-supplied structure.
    """

    __slots__ = ("_kind", "_payload")

    def __init__(
        self,
        kind: NodeKind,
        payload: dict[str, ConfigNode] | list[ConfigNode] | ScalarValue,
    ) -> None:
        """Initialize a node. Prefer the ``dictionary``/``sequence``/``scalar`` constructors.

        Args:
            kind: Node discriminant
            payload: Children mapping, children list or scalar value matching ``kind``
        """
        self._kind: NodeKind = kind
        self._payload: dict[str, ConfigNode] | list[ConfigNode] | ScalarValue = payload

    @classmethod
    def dictionary(cls, entries: Mapping[str, ConfigNode] | None = None) -> ConfigNode:
        """Create a dictionary node."""
        return cls(NodeKind.DICTIONARY, dict(entries or {}))

    @classmethod
    def sequence(cls, elements: Sequence[ConfigNode] | None = None) -> ConfigNode:
        """Create a sequence node."""
        return cls(NodeKind.SEQUENCE, list(elements or []))

    @classmethod
    def scalar(cls, value: object) -> ConfigNode:
        """Create a scalar node, normalizing the value."""
        return cls(NodeKind.SCALAR, normalize_scalar(value))

    @classmethod
    def from_generic(cls, value: object, _depth: int = 0) -> ConfigNode:
        """Recursively convert a generic value into a tree.

        Mappings become dictionary nodes (keys converted with ``str``),
        sequences other than text and bytes become sequence nodes, and
        everything else becomes a scalar node.

        Args:
            value: Generic value to convert

        Returns:
            Newly built tree that shares nothing with ``value``

        Raises:
            ValueError: If containers are nested deeper than ``MAX_DEPTH``
        """
        if isinstance(value, Mapping):
            if _depth >= MAX_DEPTH:
                raise ValueError(f"Configuration nesting exceeds {MAX_DEPTH} levels")
            return cls.dictionary(
                {str(key): cls.from_generic(item, _depth + 1) for key, item in value.items()}  # pyright: ignore[reportUnknownVariableType, reportUnknownArgumentType]
            )
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            if _depth >= MAX_DEPTH:
                raise ValueError(f"Configuration nesting exceeds {MAX_DEPTH} levels")
            return cls.sequence([cls.from_generic(item, _depth + 1) for item in value])  # pyright: ignore[reportUnknownVariableType]
        return cls.scalar(value)

    def to_generic(self) -> GenericValue:
        """Convert the tree back into plain dicts, lists and scalars.

        Returns:
            A fresh generic value; mutating it does not affect the tree
        """
        if self._kind is NodeKind.DICTIONARY:
            return {key: child.to_generic() for key, child in self.entries.items()}
        if self._kind is NodeKind.SEQUENCE:
            return [child.to_generic() for child in self.elements]
        return self.value

    @property
    def kind(self) -> NodeKind:
        """Node discriminant."""
        return self._kind

    @property
    def is_dictionary(self) -> bool:
        return self._kind is NodeKind.DICTIONARY

    @property
    def is_sequence(self) -> bool:
        return self._kind is NodeKind.SEQUENCE

    @property
    def is_scalar(self) -> bool:
        return self._kind is NodeKind.SCALAR

    @property
    def entries(self) -> dict[str, ConfigNode]:
        """Children of a dictionary node.

        Raises:
            TypeError: If the node is not a dictionary
        """
        if self._kind is not NodeKind.DICTIONARY:
            raise TypeError(f"{self._kind.name.lower()} node has no entries")
        return self._payload  # pyright: ignore[reportReturnType]

    @property
    def elements(self) -> list[ConfigNode]:
        """Children of a sequence node.

        Raises:
            TypeError: If the node is not a sequence
        """
        if self._kind is not NodeKind.SEQUENCE:
            raise TypeError(f"{self._kind.name.lower()} node has no elements")
        return self._payload  # pyright: ignore[reportReturnType]

    @property
    def value(self) -> ScalarValue:
        """Value of a scalar node.

        Raises:
            TypeError: If the node is not a scalar
        """
        if self._kind is not NodeKind.SCALAR:
            raise TypeError(f"{self._kind.name.lower()} node has no scalar value")
        return self._payload  # pyright: ignore[reportReturnType]

    def replace_with(self, other: ConfigNode) -> None:
        """Take over another node's kind and children in place.

        Args:
            other: Node whose content is adopted; it should not be used afterwards
        """
        self._kind = other._kind
        self._payload = other._payload

    def merge(self, overlay: ConfigNode) -> None:
        """Merge ``overlay`` into this node in place.

        When both nodes are dictionaries the key sets are unioned and
        common keys are merged recursively; keys only present in the
        overlay are adopted as-is. In every other case the overlay wins
        outright and this node takes over its content.

        Args:
            overlay: The more recently loaded tree; its nodes are adopted
        """
        if self.is_dictionary and overlay.is_dictionary:
            entries = self.entries
            for key, child in overlay.entries.items():
                existing = entries.get(key)
                if existing is None:
                    entries[key] = child
                else:
                    existing.merge(child)
        else:
            self.replace_with(overlay)

    def copy(self) -> ConfigNode:
        """Deep copy of the tree."""
        if self._kind is NodeKind.DICTIONARY:
            return ConfigNode.dictionary({key: child.copy() for key, child in self.entries.items()})
        if self._kind is NodeKind.SEQUENCE:
            return ConfigNode.sequence([child.copy() for child in self.elements])
        return ConfigNode(NodeKind.SCALAR, self.value)

    def __len__(self) -> int:
        """Number of children; scalars have none."""
        if self.is_scalar:
            return 0
        return len(self._payload)  # pyright: ignore[reportArgumentType]

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigNode):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if self.is_scalar:
            # bool is an int subclass; True and 1 are different settings
            return type(self._payload) is type(other._payload) and self._payload == other._payload
        return self._payload == other._payload

    __hash__ = None  # pyright: ignore[reportAssignmentType] # Mutable tree

    @override
    def __repr__(self) -> str:
        return f"ConfigNode({self._kind.name.lower()}, {self.to_generic()!r})"


def merge_nodes(base: ConfigNode, overlay: ConfigNode) -> ConfigNode:
    """Merge two trees without mutating either.

    Args:
        base: Previously accumulated tree
        overlay: More recently loaded tree (takes precedence)

    Returns:
        New merged tree
    """
    result = base.copy()
    result.merge(overlay.copy())
    return result
