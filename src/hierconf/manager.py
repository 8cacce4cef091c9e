"""Configuration manager aggregating values from every supported source.

Typical use::

    manager = (
        ConfigurationManager()
        .load({"database": {"host": "localhost", "port": 5432}})
        .load_file("config.json", relative_from=BasePath.PWD)
        .load_environment()
        .load_arguments()
    )
    host = manager["database:host"]

Each ``load*`` call merges its source over everything loaded before it.
Bad sources never raise: they are logged as warnings and recorded in
``history`` as skipped.
"""

from __future__ import annotations

import logging
import os
import sys
from collections import deque
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import ClassVar, Self, override

from pydantic import ValidationError

from hierconf.config.settings import ManagerSettings
from hierconf.core.node import ConfigNode
from hierconf.core.path import PathResolver
from hierconf.deserializers.registry import DeserializerRegistry
from hierconf.exceptions import (
    ConfigError,
    ConfigSettingsError,
    DeserializationError,
    ResourceFetchError,
    get_error_context,
    handle_config_error,
    log_config_error,
)
from hierconf.loader.argument_loader import ArgumentLoader
from hierconf.loader.env_loader import EnvLoader
from hierconf.loader.resource_loader import BasePath, ResourceFetcher, resolve_file
from hierconf.types.aliases import GenericValue
from hierconf.types.models import LoadOutcome, LoadStatus
from hierconf.types.protocols import Deserializer, ResourceReader
from hierconf.utils.sanitization import sanitize_mapping, sanitize_url, sanitize_value

logger = logging.getLogger(__name__)


class Source(Enum):
    """Process-level sources that need no location."""

    COMMAND_LINE_ARGUMENTS = "arguments"
    ENVIRONMENT_VARIABLES = "environment"


class ConfigurationManager:
    """One-stop aggregator of configuration values.

    Holds a single configuration tree, merges sources into it and gives
    path-based access to the result. Not thread-safe: use one manager
    per owner or synchronize externally.
    """

    HISTORY_LIMIT: ClassVar[int] = 100

    def __init__(
        self,
        settings: ManagerSettings | None = None,
        *,
        registry: DeserializerRegistry | None = None,
        fetcher: ResourceReader | None = None,
        **options: object,
    ) -> None:
        """Initialize ConfigurationManager.

        Args:
            settings: Parsing settings; keyword ``options`` override individual fields
            registry: Deserializers to use (defaults to JSON and property lists)
            fetcher: Reader for files and URLs (defaults to ``ResourceFetcher``)
            **options: ``ManagerSettings`` fields, e.g. ``parse_string_to_object=False``

        Raises:
            ConfigSettingsError: If the settings are invalid
        """
        try:
            if settings is None:
                settings = ManagerSettings.model_validate(options)
            elif options:
                settings = ManagerSettings.model_validate({**settings.model_dump(), **options})
        except ValidationError as e:
            raise ConfigSettingsError("Invalid configuration manager settings", pydantic_error=e) from e

        self._settings: ManagerSettings = settings
        self._root: ConfigNode = ConfigNode.dictionary()
        self._resolver: PathResolver = PathResolver(settings.node_separator)
        self._registry: DeserializerRegistry = registry if registry is not None else DeserializerRegistry.with_defaults()
        self._fetcher: ResourceReader = fetcher if fetcher is not None else ResourceFetcher()
        self._history: deque[LoadOutcome] = deque(maxlen=self.HISTORY_LIMIT)

    @property
    def settings(self) -> ManagerSettings:
        return self._settings

    @property
    def registry(self) -> DeserializerRegistry:
        return self._registry

    @property
    def history(self) -> list[LoadOutcome]:
        """Outcomes of the most recent load calls, oldest first."""
        return list(self._history)

    @property
    def last_outcome(self) -> LoadOutcome | None:
        return self._history[-1] if self._history else None

    def load(self, value: object) -> Self:
        """Merge a raw object into the configuration.

        Args:
            value: Generic value (dicts, lists, scalars) or a ``ConfigNode``

        Returns:
            The manager, for chaining
        """
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Loading object: %s", sanitize_value(value))
        if self._merge(value, "object"):
            self._record("object", LoadStatus.LOADED)
        return self

    def load_source(self, source: Source, values: Sequence[str] | Mapping[str, str] | None = None) -> Self:
        """Merge command-line arguments or environment variables.

        Args:
            source: Which process-level source to read
            values: Argument vector or environment mapping to read instead of the process's own

        Returns:
            The manager, for chaining
        """
        if source is Source.COMMAND_LINE_ARGUMENTS:
            if isinstance(values, Mapping):
                raise TypeError("Command-line arguments must be a sequence of strings")
            return self.load_arguments(values)

        if values is not None and not isinstance(values, Mapping):
            raise TypeError("Environment variables must be a mapping")
        return self.load_environment(values)

    def load_arguments(self, argv: Sequence[str] | None = None) -> Self:
        """Merge ``<prefix><path>=<value>`` command-line arguments.

        Args:
            argv: Argument vector including the program name (defaults to ``sys.argv``)

        Returns:
            The manager, for chaining
        """
        arguments = list(sys.argv if argv is None else argv)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Loading command-line arguments: %s", sanitize_value(arguments))

        loader = ArgumentLoader(
            key_prefix=self._settings.command_line_argument_key_prefix,
            path_separator=self._settings.command_line_argument_path_separator,
            node_separator=self._settings.node_separator,
        )
        entries = loader.load(arguments)
        merged = self._merge_entries(entries)
        self._record("arguments", LoadStatus.LOADED, f"{merged} argument(s) merged")
        return self

    def load_environment(self, environ: Mapping[str, str] | None = None) -> Self:
        """Merge environment variables, one path per variable.

        Args:
            environ: Variables to read (defaults to ``os.environ``)

        Returns:
            The manager, for chaining
        """
        variables = os.environ if environ is None else environ
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Loading environment variables: %s", sanitize_mapping(dict(variables)))

        loader = EnvLoader(
            separator=self._settings.environment_variable_path_separator,
            node_separator=self._settings.node_separator,
        )
        entries = loader.load(variables)
        merged = self._merge_entries(entries)
        self._record("environment", LoadStatus.LOADED, f"{merged} variable(s) merged")
        return self

    def load_data(self, data: bytes, deserializer_name: str | None = None) -> Self:
        """Deserialize bytes and merge the result.

        Args:
            data: Raw configuration bytes
            deserializer_name: Deserializer to use; None tries every registered
                one in registration order and keeps the first success

        Returns:
            The manager, for chaining
        """
        logger.debug("Loading data: %d bytes", len(data))
        self._load_bytes(data, deserializer_name, "data", None)
        return self

    def load_file(
        self,
        file: str | os.PathLike[str],
        relative_from: BasePath = BasePath.EXECUTABLE,
        deserializer_name: str | None = None,
    ) -> Self:
        """Read a configuration file and merge its content.

        Args:
            file: Absolute, ``~``-prefixed or relative path
            relative_from: Base directory for relative paths (defaults to the executable's)
            deserializer_name: Deserializer to use; None tries every registered one

        Returns:
            The manager, for chaining
        """
        path = resolve_file(file, relative_from)
        self._load_resource(path, deserializer_name, "file")
        return self

    def load_url(self, url: str | os.PathLike[str], deserializer_name: str | None = None) -> Self:
        """Fetch a configuration resource and merge its content.

        Args:
            url: ``http(s)://`` or ``file://`` URL, or a filesystem path
            deserializer_name: Deserializer to use; None tries every registered one

        Returns:
            The manager, for chaining
        """
        self._load_resource(url, deserializer_name, "url")
        return self

    def use(self, deserializer: Deserializer) -> Self:
        """Register a deserializer, replacing any with the same name.

        Args:
            deserializer: Deserializer to add

        Returns:
            The manager, for chaining
        """
        self._registry.register(deserializer)
        return self

    def get_configs(self) -> GenericValue:
        """Snapshot of the whole configuration as plain dicts, lists and scalars."""
        return self._root.to_generic()

    def get(self, path: str, default: object = None) -> GenericValue | object:
        """Value at a path.

        Args:
            path: Separator-delimited path, e.g. ``"database:hosts:0"``
            default: Returned when the path does not resolve

        Returns:
            Snapshot of the value, or ``default``
        """
        node = self._resolver.resolve(self._root, path)
        if node is None:
            return default
        return node.to_generic()

    def set(self, path: str, value: object) -> Self:
        """Place a value at a path, replacing whatever was there.

        Unlike ``load``, this does not merge: an existing subtree at the
        path is discarded. ``None`` is stored as an explicit null.

        Args:
            path: Separator-delimited path; missing segments are created as dictionaries
            value: Generic value to store

        Returns:
            The manager, for chaining

        Raises:
            ValueError: If the value is nested deeper than ``MAX_DEPTH`` levels
        """
        self._resolver.assign(self._root, path, self._to_node(value))
        return self

    def __getitem__(self, path: str) -> GenericValue | None:
        """Value at a path, or None if it does not resolve."""
        return self._resolver.get(self._root, path)

    def __setitem__(self, path: str, value: object) -> None:
        """Place a value at a path; assigning None does nothing."""
        if value is None:
            return
        _ = self.set(path, value)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self._resolver.resolve(self._root, path) is not None

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={list(self._root.entries) if self._root.is_dictionary else []!r})"

    def _to_node(self, value: object) -> ConfigNode:
        if isinstance(value, ConfigNode):
            return value.copy()
        return ConfigNode.from_generic(value)

    def _merge(self, value: object, source: str, location: str | None = None) -> bool:
        try:
            node = self._to_node(value)
        except ValueError as e:
            self._skip(handle_config_error(e, f"loading {source}"), source, location)
            return False
        self._root.merge(node)
        return True

    def _merge_entries(self, entries: list[tuple[str, str]]) -> int:
        merged = 0
        for path, raw_value in entries:
            if not path:
                logger.debug("Skipping entry with an empty path")
                continue
            self._resolver.merge_at(self._root, path, self._entry_node(raw_value))
            merged += 1
        return merged

    def _entry_node(self, text: str) -> ConfigNode:
        """Tree for an argument or variable value: parsed when possible, else the raw string."""
        if self._settings.parse_string_to_object:
            result = self._registry.try_deserialize(text.encode("utf-8"))
            if result is not None:
                try:
                    return ConfigNode.from_generic(result[0])
                except ValueError as e:
                    logger.debug("Keeping raw string value: %s", e)
        return ConfigNode.scalar(text)

    def _load_resource(self, location: str | os.PathLike[str], deserializer_name: str | None, source: str) -> None:
        display = sanitize_url(os.fspath(location))
        logger.debug("Loading %s: %s", source, display)
        try:
            data = self._fetcher.fetch(os.fspath(location))
        except ResourceFetchError as e:
            self._skip(e, source)
            return
        self._load_bytes(data, deserializer_name, source, display)

    def _load_bytes(self, data: bytes, deserializer_name: str | None, source: str, location: str | None) -> None:
        name = deserializer_name
        if name is not None and name not in self._registry:
            logger.warning("Unknown deserializer \"%s\"; trying all known deserializers", name)
            name = None

        try:
            value, used = self._registry.deserialize(data, name)
        except DeserializationError as e:
            error = e
            if name is not None:
                error = DeserializationError(
                    f"Unable to deserialize data using \"{name}\" deserializer: {e}",
                    deserializer=name,
                )
            self._skip(error, source, location)
            return

        if self._merge(value, source, location):
            self._record(source, LoadStatus.LOADED, deserializer=used)

    def _skip(self, error: ConfigError, source: str, location: str | None = None) -> None:
        error.context.update(get_error_context(location=location, source=source))
        log_config_error(error)
        self._record(source, LoadStatus.SKIPPED, str(error))

    def _record(
        self,
        source: str,
        status: LoadStatus,
        detail: str | None = None,
        deserializer: str | None = None,
    ) -> None:
        self._history.append(LoadOutcome(source, status, detail, deserializer))
