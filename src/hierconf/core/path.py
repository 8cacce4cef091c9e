"""Path addressing for configuration trees.

A path is a string of segments joined by a separator (``:`` by default),
e.g. ``"VCAP_SERVICES:db:0:credentials:host"``. Each segment is a
dictionary key, or an array index when the node reached so far is a
sequence and the segment is a non-negative decimal integer. Paths are
matched against the live tree on every call; nothing is precompiled.

Writes only ever create dictionary nodes. Indices can traverse an
existing sequence but never grow one.
"""

from __future__ import annotations

from typing import Final

from hierconf.core.node import ConfigNode
from hierconf.types.aliases import GenericValue

DEFAULT_SEPARATOR: Final[str] = ":"


def split_path(path: str, separator: str = DEFAULT_SEPARATOR) -> list[str]:
    """Split a path into its segments.

    Args:
        path: Separator-delimited path
        separator: Segment separator

    Returns:
        Ordered segments; an empty path yields a single empty segment

    Raises:
        ValueError: If the separator is empty
    """
    if not separator:
        raise ValueError("Path separator must not be empty")
    return path.split(separator)


def parse_index(segment: str) -> int | None:
    """Parse a segment as a sequence index.

    Args:
        segment: Path segment

    Returns:
        The index, or None unless the segment is made only of ASCII digits
    """
    if segment and segment.isascii() and segment.isdigit():
        return int(segment)
    return None


class PathResolver:
    """Resolve and create tree locations for a given separator."""

    def __init__(self, separator: str = DEFAULT_SEPARATOR) -> None:
        if not separator:
            raise ValueError("Path separator must not be empty")
        self._separator: str = separator

    @property
    def separator(self) -> str:
        return self._separator

    def split(self, path: str) -> list[str]:
        return split_path(path, self._separator)

    def join(self, segments: list[str]) -> str:
        return self._separator.join(segments)

    def translate(self, path: str, separator: str) -> str:
        """Rewrite a path written with another separator into this resolver's separator.

        Args:
            path: Path using ``separator`` between segments
            separator: Foreign separator (e.g. ``.`` for argv, ``__`` for the environment)

        Returns:
            Equivalent path using this resolver's separator
        """
        if not separator or separator == self._separator:
            return path
        return path.replace(separator, self._separator)

    def resolve(self, root: ConfigNode, path: str) -> ConfigNode | None:
        """Find the node at a path.

        Args:
            root: Tree to walk
            path: Path to resolve; the empty path is the root itself

        Returns:
            The live node, or None if any segment cannot be followed
        """
        if path == "":
            return root

        current = root
        for segment in self.split(path):
            child = self._child(current, segment)
            if child is None:
                return None
            current = child
        return current

    def get(self, root: ConfigNode, path: str) -> GenericValue | None:
        """Snapshot of the value at a path, or None if it does not resolve."""
        node = self.resolve(root, path)
        if node is None:
            return None
        return node.to_generic()

    def assign(self, root: ConfigNode, path: str, node: ConfigNode) -> None:
        """Place a node at a path, replacing whatever was there.

        Missing intermediate segments are created as dictionaries. A
        scalar found on the way is replaced by a dictionary, and so is a
        sequence the segment cannot index into.

        Args:
            root: Tree to modify
            path: Target path; the empty path replaces the root's content
            node: Node to place; it is adopted, not copied
        """
        if path == "":
            root.replace_with(node)
            return

        *parents, last = self.split(path)
        current = root
        for segment in parents:
            current = self._descend_or_create(current, segment)

        if current.is_dictionary:
            current.entries[last] = node
            return

        if current.is_sequence:
            index = parse_index(last)
            if index is not None and index < len(current.elements):
                current.elements[index] = node
                return

        current.replace_with(ConfigNode.dictionary({last: node}))

    def merge_at(self, root: ConfigNode, path: str, overlay: ConfigNode) -> None:
        """Merge a node into whatever currently lives at a path.

        Args:
            root: Tree to modify
            path: Target path
            overlay: Node merged over the existing one, or placed if none exists
        """
        existing = self.resolve(root, path)
        if existing is None:
            self.assign(root, path, overlay)
        else:
            existing.merge(overlay)

    def _child(self, node: ConfigNode, segment: str) -> ConfigNode | None:
        if node.is_dictionary:
            return node.entries.get(segment)
        if node.is_sequence:
            index = parse_index(segment)
            if index is None or index >= len(node.elements):
                return None
            return node.elements[index]
        return None

    def _descend_or_create(self, node: ConfigNode, segment: str) -> ConfigNode:
        child = self._child(node, segment)
        if child is not None:
            if child.is_scalar:
                child.replace_with(ConfigNode.dictionary())
            return child

        if not node.is_dictionary:
            # Sequence slots are never created
            node.replace_with(ConfigNode.dictionary())
        child = ConfigNode.dictionary()
        node.entries[segment] = child
        return child
