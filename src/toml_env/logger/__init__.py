"""
toml-env Logger Module

Logging used while configuration is being resolved. Messages describe which
sources were found and which variables were exported or mapped; they never
influence the resolved configuration.

Usage:
    from toml_env.logger import get_logger, create_logger

    logger = get_logger()
    logger.info("Loading config")

    logger = create_logger(level=logging.DEBUG, json_format=True)

Environment Variables:
    {PREFIX}_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    {PREFIX}_LOG_FILE: Optional file path for log output
    {PREFIX}_LOG_JSON: Set to "true" for JSON output format

    Where {PREFIX} is derived from the logger name (TOML_ENV for "toml-env")
"""

import logging
import os
from typing import Optional

from .default_logger import DefaultLogger
from .interface import Logger, NullLogger
from .structured_logger import JsonFormatter, StructuredLogger, TextFormatter


def _get_env_prefix(name: str) -> str:
    """Convert logger name to environment variable prefix.

    Examples:
        "toml-env" -> "TOML_ENV"
        "toml_env" -> "TOML_ENV"
    """
    return name.upper().replace("-", "_").replace(".", "_")


def create_logger(
    name: str = "toml_env",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> Logger:
    """Create a new StructuredLogger with the specified configuration.

    Parameters that are not provided are read from {PREFIX}_LOG_LEVEL,
    {PREFIX}_LOG_FILE and {PREFIX}_LOG_JSON.

    Args:
        name: Logger name
        level: Logging level (defaults to INFO or env var)
        log_file: Optional file path for log output
        json_format: If True, output logs as JSON

    Returns:
        A configured Logger instance
    """
    env_prefix = _get_env_prefix(name)

    if level is None:
        level_str = os.environ.get(f"{env_prefix}_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_str, logging.INFO)

    if log_file is None:
        log_file = os.environ.get(f"{env_prefix}_LOG_FILE")

    if json_format is None:
        json_format = os.environ.get(f"{env_prefix}_LOG_JSON", "false").lower() == "true"

    return StructuredLogger(
        name=name,
        level=level,
        log_file=log_file,
        json_format=json_format,
    )


def get_logger(name: str = "toml_env") -> Logger:
    """Get a logger configured from environment variables."""
    return create_logger(name=name)


def _env_configured(env_prefix: str) -> bool:
    return any(
        f"{env_prefix}_LOG_{setting}" in os.environ for setting in ("LEVEL", "FILE", "JSON")
    )


def get_host_logger(name: str = "toml_env") -> Logger:
    """Logger for ``Logging.LOG``.

    Emits on the named :mod:`logging` logger and leaves handlers to the host
    application, unless any {PREFIX}_LOG_* variable is set, in which case the
    logger is configured from them like :func:`get_logger`.
    """
    if _env_configured(_get_env_prefix(name)):
        return create_logger(name=name)
    return StructuredLogger(name=name, attach_handlers=False)


__all__ = [
    "Logger",
    "NullLogger",
    "DefaultLogger",
    "StructuredLogger",
    "JsonFormatter",
    "TextFormatter",
    "create_logger",
    "get_logger",
    "get_host_logger",
]
