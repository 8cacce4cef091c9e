"""Settings for the configuration manager."""

from __future__ import annotations

from .settings import ManagerSettings

__all__ = [
    "ManagerSettings",
]
