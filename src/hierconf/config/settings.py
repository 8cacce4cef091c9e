"""Settings model for the configuration manager."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hierconf.core.path import DEFAULT_SEPARATOR


class ManagerSettings(BaseModel):
    """Parsing options of a ``ConfigurationManager``, fixed at construction."""

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        extra="forbid",
        validate_assignment=True,
        validate_default=True,
        frozen=True,
    )

    command_line_argument_key_prefix: str = Field(
        default="--",
        min_length=1,
        description="Prefix marking an argument as a configuration path-value pair",
    )
    command_line_argument_path_separator: str = Field(
        default=".",
        min_length=1,
        description="Separator between path segments in command-line arguments",
    )
    environment_variable_path_separator: str = Field(
        default="__",
        min_length=1,
        description="Separator between path segments in environment variable names",
    )
    parse_string_to_object: bool = Field(
        default=True,
        description="Parse argument and environment values with known deserializers when possible",
    )
    node_separator: str = Field(
        default=DEFAULT_SEPARATOR,
        min_length=1,
        description="Separator between path segments in programmatic paths",
    )

    @model_validator(mode="after")
    def _prefix_without_delimiter(self) -> ManagerSettings:
        """Ensure the argument prefix cannot swallow the key/value delimiter."""
        if "=" in self.command_line_argument_key_prefix:
            raise ValueError("command_line_argument_key_prefix must not contain '='")
        return self
