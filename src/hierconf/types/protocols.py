"""Protocol definitions for component interfaces.

This module defines structural subtyping protocols that establish
contracts for pluggable components without requiring inheritance.
"""

from typing import Protocol, runtime_checkable

from hierconf.types.aliases import GenericValue


@runtime_checkable
class Deserializer(Protocol):
    """Protocol for wire-format parsers.

    Defines the interface for turning raw bytes of a specific format
    (JSON, property lists, YAML, ...) into a generic value that can be
    merged into the configuration tree.
    """

    @property
    def name(self) -> str:
        """Unique name used to register and select the deserializer."""
        ...

    def deserialize(self, data: bytes) -> GenericValue:
        """Parse raw bytes into a generic value.

        Args:
            data: Raw bytes to parse

        Returns:
            Parsed value made of dicts, lists and scalars

        Raises:
            DeserializationError: If the bytes do not conform to the format
        """
        ...


class ResourceReader(Protocol):
    """Protocol for fetching raw bytes from a file or network location."""

    def fetch(self, location: str) -> bytes:
        """Read all bytes from a location.

        Args:
            location: Filesystem path or URL

        Returns:
            Raw content of the resource

        Raises:
            ResourceFetchError: If the location cannot be read
        """
        ...
