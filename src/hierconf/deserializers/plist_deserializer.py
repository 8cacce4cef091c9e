"""Property list deserializer."""

from __future__ import annotations

import plistlib
from typing import ClassVar, Final

from hierconf.exceptions import DeserializationError
from hierconf.types.aliases import GenericValue


def _normalize(value: object) -> GenericValue:
    """Map plist-specific types onto the closest generic values.

    Dates become ISO-8601 strings, data blobs become text and UIDs
    become their integer payload.
    """
    if isinstance(value, dict):
        return {str(key): _normalize(item) for key, item in value.items()}  # pyright: ignore[reportUnknownVariableType, reportUnknownArgumentType]
    if isinstance(value, list):
        return [_normalize(item) for item in value]  # pyright: ignore[reportUnknownVariableType]
    if isinstance(value, plistlib.UID):
        return value.data
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if hasattr(value, "isoformat"):
        return value.isoformat()  # pyright: ignore[reportAttributeAccessIssue, reportUnknownMemberType, reportUnknownVariableType]
    return str(value)


class PlistDeserializer:
    """Deserializer for XML and binary property lists."""

    NAME: ClassVar[str] = "plist"

    @property
    def name(self) -> str:
        return self.NAME

    def deserialize(self, data: bytes) -> GenericValue:
        """Parse a property list.

        Args:
            data: XML or binary plist bytes; the format is detected

        Returns:
            Parsed value with plist types normalized

        Raises:
            DeserializationError: If the data is not a property list
        """
        try:
            parsed: object = plistlib.loads(data)
        except Exception as e:
            # plistlib raises InvalidFileException, ExpatError, ValueError, ... depending on input
            raise DeserializationError(f"Invalid property list: {e}", self.NAME) from e
        try:
            return _normalize(parsed)
        except RecursionError as e:
            raise DeserializationError("Invalid property list: nesting too deep", self.NAME) from e


PLIST_DESERIALIZER: Final[PlistDeserializer] = PlistDeserializer()
