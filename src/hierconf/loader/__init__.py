"""Source loaders: command-line arguments, environment variables, files and URLs."""

from __future__ import annotations

from hierconf.exceptions import ResourceFetchError

from .argument_loader import ArgumentLoader
from .env_loader import EnvLoader
from .resource_loader import (
    BasePath,
    BasePathKind,
    ResourceFetcher,
    executable_folder,
    project_folder,
    resolve_file,
)

__all__ = [
    "ArgumentLoader",
    "BasePath",
    "BasePathKind",
    "EnvLoader",
    "ResourceFetchError",
    "ResourceFetcher",
    "executable_folder",
    "project_folder",
    "resolve_file",
]
