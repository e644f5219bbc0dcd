"""Loading TOML documents from files and environment variables.

Every loader returns a plain ``dict`` tree (tomlkit containers are unwrapped)
or None when the source is absent. A missing optional source is never an
error; a source that exists but cannot be read or parsed always is.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import tomlkit
from tomlkit.exceptions import TOMLKitError

from toml_env.environment import Environment
from toml_env.exceptions import (
    ConfigIOError,
    ConfigParseError,
    MissingSourceError,
    SectionTypeError,
)
from toml_env.logger import Logger, NullLogger

PathLike = Union[str, Path]


def parse_document(text: str, source: str) -> Dict[str, Any]:
    """Parse ``text`` as a TOML document.

    Args:
        text: Document contents
        source: Description of where the text came from, used in errors

    Raises:
        ConfigParseError: The text is not valid TOML.
    """
    try:
        document = tomlkit.parse(text)
    except TOMLKitError as e:
        raise ConfigParseError(
            f"Error parsing TOML from {source}: {e}",
            details={"source": source},
        ) from e
    return document.unwrap()


def _without_nulls(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _without_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_without_nulls(v) for v in value if v is not None]
    return value


def render_document(tree: Dict[str, Any]) -> str:
    """Serialize a tree back to TOML text.

    ``None`` array placeholders have no TOML representation and are left out.
    """
    return tomlkit.dumps(_without_nulls(tree))


def _read_document(path: Path, source: str) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigIOError(
            f"Error reading TOML file {str(path)!r}: {e}",
            details={"source": source, "path": str(path)},
        ) from e
    return parse_document(text, source)


def _load_file(
    path: PathLike, required: bool, role: str, logger: Logger
) -> Optional[Dict[str, Any]]:
    path = Path(path)
    source = f"{role} {str(path)!r}"
    if not path.exists():
        if required:
            raise MissingSourceError(
                f"Required {source} does not exist",
                details={"source": source, "path": str(path)},
            )
        logger.debug(f"No {source} found, skipping")
        return None

    logger.info(f"Loading config from {source}")
    return _read_document(path, source)


def load_dotenv(
    path: PathLike,
    required: bool = False,
    logger: Optional[Logger] = None,
) -> Optional[Dict[str, Any]]:
    """Load a ``.env.toml`` style file.

    Returns:
        The parsed document, or None when the file does not exist and is not
        required.

    Raises:
        MissingSourceError: ``required`` is set and the file does not exist.
        ConfigIOError: The file exists but cannot be read.
        ConfigParseError: The file is not valid TOML.
    """
    return _load_file(path, required, "dotenv TOML file", logger or NullLogger())


def load_config_file(
    path: PathLike,
    required: bool = False,
    logger: Optional[Logger] = None,
) -> Optional[Dict[str, Any]]:
    """Load an application config file. Same rules as :func:`load_dotenv`."""
    return _load_file(path, required, "config TOML file", logger or NullLogger())


def load_env_variable(
    name: str,
    environment: Optional[Environment] = None,
    logger: Optional[Logger] = None,
) -> Optional[Dict[str, Any]]:
    """Parse the value of environment variable ``name`` as a TOML document.

    When the value is not valid TOML but names an existing file, that file is
    loaded instead, so ``CONFIG=/etc/app/config.toml`` works as well as
    ``CONFIG='port = 80'``.

    Raises:
        ConfigParseError: The value is neither valid TOML nor an existing file,
            or the file it names is not valid TOML.
        ConfigIOError: The value names a file that cannot be read.
    """
    environment = environment or Environment()
    logger = logger or NullLogger()

    value = environment.get(name)
    if value is None:
        logger.info(f"No environment variable with the name {name} found")
        return None

    source = f"environment variable {name}"
    try:
        document = parse_document(value, source)
    except ConfigParseError as e:
        # must not raise for long or NUL-containing values
        if not os.path.isfile(value):
            raise ConfigParseError(
                f"Error parsing config environment variable ({name}={value!r}) as the config, "
                "and it is not the name of an existing file",
                details={"source": source, "value": value},
            ) from e
        path = Path(value)
        logger.info(f"Loading config from file {str(path)!r} named by `{name}` environment variable")
        return _read_document(path, f"config TOML file {str(path)!r} (from {name})")

    logger.info(f"Options loaded from `{name}` environment variable")
    return document


def extract_section(tree: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    """Return the table stored under top-level ``key``.

    Raises:
        SectionTypeError: ``key`` exists but is not a table.
    """
    if key not in tree:
        return None

    section = tree[key]
    if not isinstance(section, dict):
        raise SectionTypeError(
            f"Expected {key!r} to be a table, found {type(section).__name__}",
            details={"key": key, "type": type(section).__name__},
        )
    return section


__all__ = [
    "parse_document",
    "render_document",
    "load_dotenv",
    "load_config_file",
    "load_env_variable",
    "extract_section",
]
