"""Provenance of configuration fragments.

Each fragment carries the source it came from so that log lines and
deserialization errors can say where a bad value was loaded from.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union


@dataclass(frozen=True)
class DotEnvSource:
    """The config section of a ``.env.toml`` style file."""

    path: Path

    def __str__(self) -> str:
        return f"dotenv TOML file {str(self.path)!r}"


@dataclass(frozen=True)
class FileSource:
    """A standalone config file."""

    path: Path

    def __str__(self) -> str:
        return f"config TOML file {str(self.path)!r}"


@dataclass(frozen=True)
class EnvironmentSource:
    """One or more environment variables."""

    variable_names: Tuple[str, ...]

    def __str__(self) -> str:
        return f"environment variables {', '.join(self.variable_names)}"


@dataclass(frozen=True)
class MergedSource:
    """``overlay`` merged on top of ``base``."""

    base: "ConfigSource"
    overlay: "ConfigSource"

    def __str__(self) -> str:
        return f"({self.overlay}) merged into ({self.base})"


ConfigSource = Union[DotEnvSource, FileSource, EnvironmentSource, MergedSource]


__all__ = ["ConfigSource", "DotEnvSource", "FileSource", "EnvironmentSource", "MergedSource"]
