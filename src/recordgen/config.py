"""
Configuration management for recordgen.

Settings control the auto-synthesis rules and edge-case policies. They can be
built in code, read from ``RECORDGEN_*`` environment variables, or loaded from
a TOML file using Pydantic settings.
"""

from __future__ import annotations

import tomllib
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenerationSettings(BaseSettings):
    """Settings for field auto-synthesis."""

    model_config = SettingsConfigDict(env_prefix="RECORDGEN_", extra="forbid")

    float_factor: float = Field(
        default=1.1, description="Float fields get (index + 1) * float_factor"
    )
    text_template: str = Field(
        default="{name}_{number}",
        description="Text fields; name is the lowercased field name, number is index + 1",
    )
    primitive_text_prefix: str = Field(
        default="text", description="Prefix for generate_list(str, ...) values"
    )
    negative_count: Literal["empty", "error"] = Field(
        default="empty",
        description="Negative counts yield an empty list or raise InvalidCountError",
    )
    allow_int_for_float: bool = Field(
        default=False, description="Accept int override values for float fields"
    )
    utc_timestamps: bool = Field(
        default=False, description="Default clock returns timezone-aware UTC datetimes"
    )

    @classmethod
    def from_toml(cls, path: Path | str) -> GenerationSettings:
        """
        Load settings from a TOML file.

        Args:
            path: Path to a TOML file with top-level setting keys

        Returns:
            GenerationSettings instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file holds unknown or invalid settings
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(**data)

    def default_clock(self) -> Callable[[], datetime]:
        """Return the current-time source used for timestamp fields."""
        if self.utc_timestamps:
            return lambda: datetime.now(timezone.utc)
        return datetime.now

    def text_value(self, field_name: str, index: int) -> str:
        """Auto-synthesized text for a field at an index."""
        return self.text_template.format(name=field_name.lower(), number=index + 1)

    def float_value(self, index: int) -> float:
        """Auto-synthesized float for an index."""
        return (index + 1) * self.float_factor
