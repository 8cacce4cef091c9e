"""Type aliases using modern PEP 695 syntax.

This module defines the format-agnostic value shapes that every
configuration source produces and that the configuration tree consumes.
"""

from collections.abc import Mapping

# Leaf values a configuration tree can hold
type ScalarValue = str | int | float | bool | None

# Universal representation of parsed configuration data
# Every source (objects, argv, environment, files, URLs) normalizes into this shape
type GenericValue = ScalarValue | list[GenericValue] | dict[str, GenericValue]

# Environment-like mapping of variable names to raw string values
type Environment = Mapping[str, str]
