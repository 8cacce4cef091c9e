"""Data models for hierconf.

This module defines small dataclasses used to report what happened
during configuration loading.
"""

from dataclasses import dataclass
from enum import Enum


class LoadStatus(Enum):
    """Outcome of a single load call."""

    LOADED = "loaded"  # Source contributed to the tree
    SKIPPED = "skipped"  # Source failed and was ignored


@dataclass(slots=True, frozen=True)
class LoadOutcome:
    """Record of a single load call.

    Load entry points never raise on bad input; this record is the
    programmatic view of whether a source was merged or skipped.
    """

    source: str  # "object", "arguments", "environment", "data", "url", ...
    status: LoadStatus
    detail: str | None = None
    deserializer: str | None = None

    @property
    def loaded(self) -> bool:
        """Whether the source contributed to the tree."""
        return self.status is LoadStatus.LOADED
