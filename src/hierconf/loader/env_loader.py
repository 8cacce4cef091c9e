"""Environment variable configuration loader."""

from __future__ import annotations

import os
from collections.abc import Mapping

from hierconf.core.path import DEFAULT_SEPARATOR, PathResolver


class EnvLoader:
    """Extract configuration path-value pairs from environment variables.

    Every variable is used. Occurrences of the separator in a variable
    name become path separators, so ``DATABASE__HOST=db`` addresses
    ``DATABASE:HOST``. Names keep their original case.
    """

    def __init__(
        self,
        separator: str = "__",
        node_separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        """Initialize EnvLoader.

        Args:
            separator: Separator between path segments within variable names
            node_separator: Separator used by the configuration tree
        """
        self.separator: str = separator
        self._resolver: PathResolver = PathResolver(node_separator)

    def load(self, environ: Mapping[str, str] | None = None) -> list[tuple[str, str]]:
        """Read variables into tree paths and raw string values.

        Args:
            environ: Variables to read (defaults to the process environment)

        Returns:
            List of (path, raw value) pairs sorted by variable name
        """
        source = os.environ if environ is None else environ
        return [
            (self._resolver.translate(name, self.separator), value)
            for name, value in sorted(source.items())
        ]
