"""Exceptions raised while initializing configuration.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging

Usage:
    from toml_env.exceptions import TomlEnvError, ConfigParseError

    try:
        config = initialize(MyConfig)
    except ConfigParseError as e:
        print(e.details["source"])
"""

from toml_env.exceptions.base import (
    ConfigIOError,
    ConfigParseError,
    DeserializeError,
    InvalidAutoMapNameError,
    InvalidKeyPathError,
    MissingSourceError,
    SectionTypeError,
    TomlEnvError,
)

__all__ = [
    "TomlEnvError",
    "ConfigIOError",
    "ConfigParseError",
    "SectionTypeError",
    "InvalidKeyPathError",
    "InvalidAutoMapNameError",
    "DeserializeError",
    "MissingSourceError",
]
