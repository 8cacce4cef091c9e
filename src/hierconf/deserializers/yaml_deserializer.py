"""YAML deserializer."""

from __future__ import annotations

from typing import ClassVar, Final

import yaml

from hierconf.core.node import ConfigNode
from hierconf.exceptions import DeserializationError
from hierconf.types.aliases import GenericValue


class YAMLDeserializer:
    """Deserializer for YAML documents.

    Not registered by default: almost any text is valid YAML (a plain
    scalar), so this deserializer would accept input that other formats
    rightly reject. Opt in with ``ConfigurationManager.use``.
    """

    NAME: ClassVar[str] = "yaml"

    def __init__(self, mappings_only: bool = False) -> None:
        """Initialize YAMLDeserializer.

        Args:
            mappings_only: Reject documents whose root is not a mapping,
                so bare scalars fall through to other deserializers
        """
        self.mappings_only: bool = mappings_only

    @property
    def name(self) -> str:
        return self.NAME

    def deserialize(self, data: bytes) -> GenericValue:
        """Parse a YAML document with ``yaml.safe_load``.

        Args:
            data: YAML bytes

        Returns:
            Parsed value; dates and other YAML-specific scalars are normalized

        Raises:
            DeserializationError: If the data is not valid YAML
        """
        try:
            content: object = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise DeserializationError(f"Invalid YAML: {e}", self.NAME) from e
        except RecursionError as e:
            raise DeserializationError("Invalid YAML: nesting too deep", self.NAME) from e

        if self.mappings_only and not isinstance(content, dict):
            raise DeserializationError("YAML document root is not a mapping", self.NAME)

        # Round-trip through the tree to normalize dates and non-string keys
        try:
            return ConfigNode.from_generic(content).to_generic()
        except ValueError as e:
            raise DeserializationError(f"Invalid YAML: {e}", self.NAME) from e


YAML_DESERIALIZER: Final[YAMLDeserializer] = YAMLDeserializer()
