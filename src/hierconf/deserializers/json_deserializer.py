"""JSON deserializer."""

from __future__ import annotations

import json
from typing import ClassVar, Final

from hierconf.exceptions import DeserializationError
from hierconf.types.aliases import GenericValue


def _reject_constant(token: str) -> GenericValue:
    raise ValueError(f"Non-standard JSON constant: {token}")


class JSONDeserializer:
    """Deserializer for standard JSON documents.

    Objects, arrays, strings, numbers, booleans and null map one-to-one
    onto generic values. ``NaN`` and ``Infinity`` are rejected.
    """

    NAME: ClassVar[str] = "json"

    @property
    def name(self) -> str:
        return self.NAME

    def deserialize(self, data: bytes) -> GenericValue:
        """Parse a JSON document.

        Args:
            data: UTF-8 encoded JSON, with or without a byte order mark

        Returns:
            Parsed value

        Raises:
            DeserializationError: If the data is not valid JSON
        """
        try:
            text = data.decode("utf-8-sig")
            return json.loads(text, parse_constant=_reject_constant)  # pyright: ignore[reportAny] # json.loads returns Any
        except (UnicodeDecodeError, ValueError) as e:
            raise DeserializationError(f"Invalid JSON: {e}", self.NAME) from e
        except RecursionError as e:
            raise DeserializationError("Invalid JSON: nesting too deep", self.NAME) from e


JSON_DESERIALIZER: Final[JSONDeserializer] = JSONDeserializer()
