"""Export the top-level values of a ``.env.toml`` file as environment variables."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, List, Optional

from toml_env.environment import Environment
from toml_env.logger import Logger, NullLogger


def scalar_to_string(value: Any) -> Optional[str]:
    """String form of a TOML scalar, or None for tables and arrays.

    Booleans are written the way TOML spells them (``true``/``false``).
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return None


def export(
    tree: Dict[str, Any],
    environment: Optional[Environment] = None,
    section_key: Optional[str] = None,
    override: bool = False,
    logger: Optional[Logger] = None,
) -> List[str]:
    """Set an environment variable for every top-level scalar in ``tree``.

    Args:
        tree: Parsed ``.env.toml`` document
        environment: Where to write (default: the process environment)
        section_key: Top-level key holding the config section; never exported
        override: Overwrite variables that are already set. By default a
            variable set in the process wins over the file.
        logger: Receives a warning for every skipped table or array, and for
            every name or value the environment rejects

    Returns:
        Names of the variables that were written, in document order.
    """
    environment = environment or Environment()
    logger = logger or NullLogger()

    exported: List[str] = []
    for key, value in tree.items():
        if key == section_key:
            continue

        value_string = scalar_to_string(value)
        if value_string is None:
            logger.warning(
                f"Cannot export {key!r} as an environment variable: "
                f"{type(value).__name__} values are not supported",
                key=key,
            )
            continue

        if key in environment and not override:
            logger.debug(f"Environment variable {key} is already set, keeping its value")
            continue

        try:
            environment.set(key, value_string)
        except ValueError as e:
            # e.g. an empty name, "=" in the name or NUL in the value
            logger.warning(f"Cannot export {key!r} as an environment variable: {e}", key=key)
            continue
        exported.append(key)

    if exported:
        logger.info(f"Set environment variables: {', '.join(exported)}")
    return exported


__all__ = ["export", "scalar_to_string"]
