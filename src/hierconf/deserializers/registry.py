"""Deserializer registry for parsing raw configuration bytes."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from hierconf.deserializers.json_deserializer import JSON_DESERIALIZER
from hierconf.deserializers.plist_deserializer import PLIST_DESERIALIZER
from hierconf.exceptions import DeserializationError, UnknownDeserializerError
from hierconf.types.aliases import GenericValue
from hierconf.types.protocols import Deserializer

logger = logging.getLogger(__name__)


class DeserializerRegistry:
    """Registry of named deserializers.

    Deserializers are tried in registration order when no name is given,
    so fallback parsing is deterministic. Registering a name again
    replaces the deserializer but keeps its original position.
    """

    def __init__(self, deserializers: Iterable[Deserializer] = ()) -> None:
        """Initialize the registry.

        Args:
            deserializers: Deserializers to register, in fallback order
        """
        self._deserializers: dict[str, Deserializer] = {}
        for deserializer in deserializers:
            self.register(deserializer)

    @classmethod
    def with_defaults(cls) -> DeserializerRegistry:
        """Create a registry holding the JSON and property list deserializers."""
        return cls([JSON_DESERIALIZER, PLIST_DESERIALIZER])

    def register(self, deserializer: Deserializer) -> None:
        """Register a deserializer, replacing any previous one with the same name.

        Args:
            deserializer: Deserializer to register
        """
        name = deserializer.name
        if name in self._deserializers:
            logger.debug("Replacing deserializer: %s", name)
        else:
            logger.debug("Registered deserializer: %s", name)
        self._deserializers[name] = deserializer

    def unregister(self, name: str) -> None:
        """Remove a deserializer.

        Args:
            name: Name of the deserializer to remove

        Raises:
            UnknownDeserializerError: If no deserializer has that name
        """
        if name not in self._deserializers:
            raise UnknownDeserializerError(f"Deserializer '{name}' is not registered", name)
        del self._deserializers[name]
        logger.debug("Unregistered deserializer: %s", name)

    def get(self, name: str) -> Deserializer | None:
        return self._deserializers.get(name)

    def names(self) -> list[str]:
        """Registered names in fallback order."""
        return list(self._deserializers)

    def __contains__(self, name: object) -> bool:
        return name in self._deserializers

    def __len__(self) -> int:
        return len(self._deserializers)

    def __iter__(self) -> Iterator[Deserializer]:
        return iter(list(self._deserializers.values()))

    def deserialize(self, data: bytes, name: str | None = None) -> tuple[GenericValue, str]:
        """Parse bytes with a named deserializer or the first one that accepts them.

        Args:
            data: Raw bytes to parse
            name: Deserializer to use; None tries every registered one in order

        Returns:
            Tuple of the parsed value and the name of the deserializer that produced it

        Raises:
            UnknownDeserializerError: If ``name`` is not registered
            DeserializationError: If the data could not be parsed
        """
        if name is not None:
            deserializer = self._deserializers.get(name)
            if deserializer is None:
                raise UnknownDeserializerError(f"Deserializer '{name}' is not registered", name)
            return deserializer.deserialize(data), name

        for deserializer in self:
            try:
                return deserializer.deserialize(data), deserializer.name
            except DeserializationError as e:
                logger.debug("Deserializer %s rejected data: %s", deserializer.name, e)
                continue

        raise DeserializationError(
            "Unable to deserialize data using any known deserializer",
            context={"tried": self.names()},
        )

    def try_deserialize(self, data: bytes, name: str | None = None) -> tuple[GenericValue, str] | None:
        """Like ``deserialize`` but returns None instead of raising."""
        try:
            return self.deserialize(data, name)
        except DeserializationError:
            return None
