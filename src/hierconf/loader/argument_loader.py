"""Command-line argument configuration loader."""

from __future__ import annotations

from collections.abc import Sequence

from hierconf.core.path import DEFAULT_SEPARATOR, PathResolver


class ArgumentLoader:
    """Extract configuration path-value pairs from command-line arguments.

    Arguments are recognized in the form ``<prefix><path>=<value>``, e.g.
    ``--database.host=localhost``. Anything else is ignored, including
    positional arguments and flags without ``=``.
    """

    def __init__(
        self,
        key_prefix: str = "--",
        path_separator: str = ".",
        node_separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        """Initialize ArgumentLoader.

        Args:
            key_prefix: Prefix marking a configuration argument
            path_separator: Separator between path segments within an argument
            node_separator: Separator used by the configuration tree
        """
        self.key_prefix: str = key_prefix
        self.path_separator: str = path_separator
        self._resolver: PathResolver = PathResolver(node_separator)

    def load(self, argv: Sequence[str]) -> list[tuple[str, str]]:
        """Parse arguments into tree paths and raw string values.

        Args:
            argv: Full argument vector; the first element (the program) is skipped

        Returns:
            Ordered list of (path, raw value) pairs
        """
        entries: list[tuple[str, str]] = []
        for argument in argv[1:]:
            entry = self.parse(argument)
            if entry is not None:
                entries.append(entry)
        return entries

    def parse(self, argument: str) -> tuple[str, str] | None:
        """Parse a single argument.

        Args:
            argument: One command-line argument

        Returns:
            (path, raw value) pair, or None if the argument is not a configuration argument
        """
        if not argument.startswith(self.key_prefix):
            return None

        body = argument[len(self.key_prefix):]
        key, delimiter, value = body.partition("=")
        if not delimiter:
            return None

        return self._resolver.translate(key, self.path_separator), value
