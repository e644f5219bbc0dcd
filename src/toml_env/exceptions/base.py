"""Base exception classes for toml-env.

All toml-env exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context (which source failed, offending key, ...)
"""

from typing import Any, Dict, Optional


class TomlEnvError(Exception):
    """Base exception for all configuration initialization errors.

    Attributes:
        code: Machine-readable error code (e.g., "PARSE_ERROR")
        message: Human-readable error message
        details: Optional additional context for debugging
    """

    default_code = "TOML_ENV_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize error with structured information.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (defaults to the class code)
            details: Optional additional context
        """
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return formatted error string."""
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message, and details keys.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigIOError(TomlEnvError):
    """A source file exists but could not be read."""

    default_code = "IO_ERROR"


class ConfigParseError(TomlEnvError):
    """Malformed TOML in one of the sources.

    ``details["source"]`` names the source that failed to parse.
    """

    default_code = "PARSE_ERROR"


class SectionTypeError(TomlEnvError):
    """The reserved config key exists but does not hold a table."""

    default_code = "SECTION_TYPE_ERROR"


class InvalidKeyPathError(TomlEnvError):
    """A dotted key path string could not be parsed."""

    default_code = "INVALID_KEY_PATH"


class InvalidAutoMapNameError(TomlEnvError):
    """An environment variable name cannot be turned into a key path."""

    default_code = "INVALID_AUTO_MAP_NAME"


class DeserializeError(TomlEnvError):
    """The merged configuration does not fit the requested type."""

    default_code = "DESERIALIZE_ERROR"


class MissingSourceError(TomlEnvError):
    """A source marked as required does not exist."""

    default_code = "MISSING_SOURCE"
