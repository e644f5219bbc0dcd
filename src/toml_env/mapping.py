"""Mapping environment variables onto configuration key paths.

Two strategies produce a configuration tree from the environment:

- Explicit: the caller names each variable and the key path it fills,
  e.g. ``{"VALUE_5": "child.value_5"}``.
- Automatic: every variable starting with ``PREFIX__`` is mapped by
  splitting the rest of its name on the divider, so with prefix ``MY_APP``
  ``MY_APP__CHILD__VALUE_6`` fills ``child.value_6`` and
  ``MY_APP__ARRAY__0`` fills ``array[0]``.

Values are always inserted as strings; converting them to the types of the
target structure is left to deserialization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from toml_env.environment import Environment
from toml_env.exceptions import InvalidAutoMapNameError
from toml_env.key_path import KeyPath, parse_key_path
from toml_env.logger import Logger, NullLogger

DEFAULT_MAP_ENV_DIVIDER = "__"
DEFAULT_AUTO_MAP_PREFIX = "CONFIG"


def lowercase(name: str) -> str:
    return name.lower()


@dataclass(frozen=True)
class AutoMapEnvArgs:
    """Settings for automatic mapping.

    Attributes:
        divider: Separates levels of the key path inside a variable name
        prefix: Only variables named ``{prefix}{divider}...`` are mapped;
            None maps every variable in the environment
        transform: Applied to each name component before it becomes a key
    """

    divider: str = DEFAULT_MAP_ENV_DIVIDER
    prefix: Optional[str] = DEFAULT_AUTO_MAP_PREFIX
    transform: Callable[[str], str] = field(default=lowercase)

    def __post_init__(self) -> None:
        if not self.divider:
            raise ValueError("AutoMapEnvArgs.divider must not be empty")

    @property
    def full_prefix(self) -> str:
        if self.prefix is None:
            return ""
        return f"{self.prefix}{self.divider}"


def auto_map_key_path(name: str, args: AutoMapEnvArgs) -> KeyPath:
    """Derive the key path for variable ``name``.

    The caller is expected to have checked that ``name`` carries the prefix.

    Raises:
        InvalidAutoMapNameError: Nothing is left after the prefix, or the name
            contains an empty component (e.g. ``MY_APP__A____B``).
    """
    remainder = name[len(args.full_prefix):]
    if not remainder:
        raise InvalidAutoMapNameError(
            f"Environment variable {name} has nothing after the prefix {args.full_prefix!r}",
            details={"variable": name},
        )

    components = [args.transform(component) for component in remainder.split(args.divider)]
    if any(not component for component in components):
        raise InvalidAutoMapNameError(
            f"Environment variable {name} contains an empty key component",
            details={"variable": name},
        )
    return KeyPath.from_segments(components)


def map_env(
    mapping_table: Mapping[str, Union[str, KeyPath]],
    environment: Optional[Environment] = None,
    logger: Optional[Logger] = None,
) -> Dict[str, Any]:
    """Build a tree from explicitly mapped environment variables.

    Unset variables are skipped, so their paths are absent from the result.
    When two entries target the same path the later one wins.

    Raises:
        InvalidKeyPathError: A path string in ``mapping_table`` is malformed.
    """
    environment = environment or Environment()
    logger = logger or NullLogger()

    paths = {name: parse_key_path(path) for name, path in mapping_table.items()}

    tree: Dict[str, Any] = {}
    mapped: List[str] = []
    for name, path in paths.items():
        value = environment.get(name)
        if value is None:
            continue
        path.insert_into(tree, value)
        mapped.append(f"{name} => {path}")

    if mapped:
        logger.info("Loading config from environment variables: " + "; ".join(mapped))
    return tree


def auto_map_env(
    args: AutoMapEnvArgs,
    environment: Optional[Environment] = None,
    logger: Optional[Logger] = None,
) -> Dict[str, Any]:
    """Build a tree from every environment variable carrying the prefix.

    Variables are visited in sorted order. A numeric component becomes an
    array index, except where a table already sits at that position, in which
    case it stays a table key. Names that cannot be turned into a key path are
    skipped with a warning.
    """
    environment = environment or Environment()
    logger = logger or NullLogger()
    prefix = args.full_prefix

    tree: Dict[str, Any] = {}
    mapped: List[str] = []
    for name in environment.names():
        if not name.startswith(prefix):
            continue
        try:
            path = auto_map_key_path(name, args)
        except InvalidAutoMapNameError as e:
            logger.warning(e.message, variable=name)
            continue
        path.insert_into(tree, environment.get(name))
        mapped.append(f"{name} => {path}")

    if mapped:
        logger.info("Automatically mapped environment variables: " + "; ".join(mapped))
    return tree


__all__ = [
    "DEFAULT_MAP_ENV_DIVIDER",
    "DEFAULT_AUTO_MAP_PREFIX",
    "AutoMapEnvArgs",
    "auto_map_key_path",
    "lowercase",
    "map_env",
    "auto_map_env",
]
