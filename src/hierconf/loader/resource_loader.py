"""File and URL resource loading."""

from __future__ import annotations

import logging
import os
import sys
import warnings
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import ClassVar, Final
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from hierconf.exceptions import ResourceFetchError
from hierconf.utils.sanitization import sanitize_url

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

# Files whose presence marks a project root
PROJECT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", "setup.py", "setup.cfg")


def executable_folder() -> Path:
    """Directory of the running program.

    Uses the script named by ``sys.argv[0]``, falling back to the
    interpreter's directory when there is no script.
    """
    if sys.argv and sys.argv[0] and sys.argv[0] != "-c":
        return Path(sys.argv[0]).resolve().parent
    return Path(sys.executable).resolve().parent


def project_folder(start: Path | None = None) -> Path:
    """Nearest ancestor of ``start`` holding a project marker file.

    Args:
        start: Directory to search upwards from (defaults to the executable folder)

    Returns:
        Project root, or ``start`` itself when no marker is found
    """
    origin = start or executable_folder()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).is_file() for marker in PROJECT_MARKERS):
            return candidate
    return origin


class BasePathKind(Enum):
    """Anchors for resolving relative configuration file paths."""

    EXECUTABLE = auto()
    PWD = auto()
    PROJECT = auto()  # Deprecated
    CUSTOM = auto()


@dataclass(slots=True, frozen=True)
class BasePath:
    """Base directory used to resolve relative file paths.

    Use the ``EXECUTABLE``, ``PWD`` and ``PROJECT`` constants or
    ``BasePath.custom(path)``.
    """

    kind: BasePathKind
    custom_path: str | None = None

    EXECUTABLE: ClassVar[BasePath]
    PWD: ClassVar[BasePath]
    PROJECT: ClassVar[BasePath]

    @classmethod
    def custom(cls, path: str | os.PathLike[str]) -> BasePath:
        """Base path anchored at an arbitrary directory."""
        return cls(BasePathKind.CUSTOM, os.fspath(path))

    @property
    def path(self) -> Path:
        """Absolute directory denoted by this base path."""
        if self.kind is BasePathKind.EXECUTABLE:
            return executable_folder()
        if self.kind is BasePathKind.PWD:
            return Path.cwd()
        if self.kind is BasePathKind.PROJECT:
            warnings.warn(
                "BasePath.PROJECT is deprecated; project layouts change between "
                "packaging tools. Use BasePath.custom() instead.",
                DeprecationWarning,
                stacklevel=2,
            )
            return project_folder()
        return Path(self.custom_path or "").expanduser().absolute()


BasePath.EXECUTABLE = BasePath(BasePathKind.EXECUTABLE)
BasePath.PWD = BasePath(BasePathKind.PWD)
BasePath.PROJECT = BasePath(BasePathKind.PROJECT)


def resolve_file(file: str | os.PathLike[str], relative_from: BasePath = BasePath.EXECUTABLE) -> Path:
    """Turn a configuration file reference into an absolute path.

    Args:
        file: Absolute, ``~``-prefixed or relative path
        relative_from: Base directory for relative paths

    Returns:
        Normalized absolute path
    """
    expanded = Path(file).expanduser()
    if expanded.is_absolute():
        return expanded
    return Path(os.path.normpath(relative_from.path / expanded))


class ResourceFetcher:
    """Synchronous reader for configuration resources.

    Reads plain filesystem paths and ``file://`` URLs from disk and
    fetches ``http://``/``https://`` URLs with httpx. There are no
    retries: a failure is reported once.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize ResourceFetcher.

        Args:
            timeout: Network timeout in seconds
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
        """
        self.timeout: float = timeout
        self._transport: httpx.BaseTransport | None = transport

    def fetch(self, location: str | os.PathLike[str]) -> bytes:
        """Read all bytes from a path or URL.

        Args:
            location: Filesystem path, ``file://`` URL or ``http(s)://`` URL

        Returns:
            Resource content

        Raises:
            ResourceFetchError: If the resource cannot be read
        """
        if isinstance(location, os.PathLike):
            return self._read_file(Path(location))

        try:
            parsed = urlparse(location)
        except ValueError as e:
            raise ResourceFetchError(
                f"Invalid location: {e}",
                location=sanitize_url(location),
            ) from e
        scheme = parsed.scheme.lower()

        if scheme in ("http", "https"):
            return self._get(location)
        if scheme == "file":
            return self._read_file(Path(url2pathname(parsed.path)))
        # Single letters are Windows drive letters, not schemes
        if not scheme or len(scheme) == 1:
            return self._read_file(Path(location))

        raise ResourceFetchError(
            f"Unsupported URL scheme: {scheme}",
            location=sanitize_url(location),
        )

    def _read_file(self, path: Path) -> bytes:
        logger.debug("Reading configuration file: %s", path)
        try:
            return path.read_bytes()
        except OSError as e:
            raise ResourceFetchError(
                f"Unable to read file {path}: {e.strerror or e}",
                location=str(path),
            ) from e
        except ValueError as e:
            # Paths with embedded NUL bytes
            raise ResourceFetchError(
                f"Unable to read file {path!r}: {e}",
                location=repr(str(path)),
            ) from e

    def _get(self, url: str) -> bytes:
        safe_url = sanitize_url(url)
        logger.debug("Fetching configuration URL: %s", safe_url)
        try:
            with httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url)
                _ = response.raise_for_status()
                return response.content
        except httpx.HTTPStatusError as e:
            raise ResourceFetchError(
                f"Unable to fetch {safe_url}: HTTP {e.response.status_code}",
                location=safe_url,
                context={"status_code": e.response.status_code},
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ResourceFetchError(
                f"Unable to fetch {safe_url}: {type(e).__name__}",
                location=safe_url,
            ) from e
