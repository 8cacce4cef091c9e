"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from hierconf import ConfigurationManager


@pytest.fixture
def manager() -> ConfigurationManager:
    """Provide a manager with default settings."""
    return ConfigurationManager()


@pytest.fixture
def vcap_config() -> dict[str, object]:
    """Provide a Cloud Foundry style configuration with nested arrays."""
    return {
        "VCAP_SERVICES": {
            "db": [
                {
                    "name": "primary",
                    "credentials": {"host": "h1", "port": 5432},
                },
            ],
        },
        "app": {"name": "demo", "workers": 4},
    }


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str | bytes], Path]:
    """Provide a helper writing configuration files into a temporary directory."""

    def _write(name: str, content: str | bytes) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            _ = path.write_bytes(content)
        else:
            _ = path.write_text(content, encoding="utf-8")
        return path

    return _write
