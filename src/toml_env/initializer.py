"""Configuration initialization.

Resolves configuration from all available sources and deserializes it into
the caller's type. Sources, lowest precedence first:

1. config file (``Args.config_path``, only when given)
2. the ``[CONFIG]`` table of the ``.env.toml`` file
3. the ``CONFIG`` environment variable (TOML text or the name of a TOML file)
4. explicitly mapped environment variables (``Args.map_env``)
5. automatically mapped environment variables (``Args.auto_map_env``)

Before any environment variable is read, the top-level scalars of the
``.env.toml`` file are exported to the environment, so they can feed the
CONFIG variable and both mappers.

Example:
    from pydantic import BaseModel
    from toml_env import Args, AutoMapEnvArgs, initialize

    class Config(BaseModel):
        port: int
        host: str = "localhost"

    config = initialize(Config, Args(
        config_path="config.toml",
        map_env={"PORT": "port"},
        auto_map_env=AutoMapEnvArgs(prefix="MY_APP"),
    ))
    if config is None:
        raise SystemExit("no configuration found")
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from toml_env.environment import Environment
from toml_env.exceptions import DeserializeError
from toml_env.exporter import export
from toml_env.key_path import KeyPath
from toml_env.loader import (
    extract_section,
    load_config_file,
    load_dotenv,
    load_env_variable,
    render_document,
)
from toml_env.logger import DefaultLogger, Logger, NullLogger, get_host_logger
from toml_env.mapping import AutoMapEnvArgs, auto_map_env, map_env
from toml_env.merge import Fragment, Layer, merge_fragments
from toml_env.sources import ConfigSource, DotEnvSource, EnvironmentSource, FileSource

T = TypeVar("T")

DEFAULT_DOTENV_PATH = ".env.toml"
DEFAULT_CONFIG_VARIABLE_NAME = "CONFIG"


class Logging(Enum):
    """Where initialization messages go."""

    NONE = "none"
    # Useful when the configuration being loaded is what sets up logging.
    STDOUT = "stdout"
    # The "toml_env" logging logger; TOML_ENV_LOG_* variables configure it.
    LOG = "log"


class InitState(Enum):
    START = "start"
    DOTENV_LOADED = "dotenv_loaded"
    ENV_EXPORTED = "env_exported"
    SOURCES_MERGED = "sources_merged"
    DONE = "done"
    NOTHING_FOUND = "nothing_found"


@dataclass(frozen=True)
class Args:
    """Options for :func:`initialize`.

    Attributes:
        dotenv_path: Path to the ``.env.toml`` style file
        dotenv_required: Fail when the dotenv file does not exist
        dotenv_override: Let the dotenv file overwrite variables that are
            already set in the environment
        config_path: Optional config file, lowest precedence
        config_required: Fail when ``config_path`` does not exist
        config_variable_name: Environment variable holding TOML config; also
            the name of the config table inside the dotenv file
        map_env: Environment variable name -> key path (string or KeyPath)
        auto_map_env: Enables automatic mapping when set
        logging: A :class:`Logging` mode or a Logger instance
        environment: Environment store (default: the process environment)
    """

    dotenv_path: Union[str, Path] = DEFAULT_DOTENV_PATH
    dotenv_required: bool = False
    dotenv_override: bool = False
    config_path: Optional[Union[str, Path]] = None
    config_required: bool = False
    config_variable_name: str = DEFAULT_CONFIG_VARIABLE_NAME
    map_env: Mapping[str, Union[str, KeyPath]] = field(default_factory=dict)
    auto_map_env: Optional[AutoMapEnvArgs] = None
    logging: Union[Logging, Logger] = Logging.NONE
    environment: Optional[Environment] = None


@dataclass
class InitResult:
    """Outcome of :func:`resolve`.

    ``tree`` and ``source`` are None exactly when ``state`` is NOTHING_FOUND.
    """

    state: InitState
    tree: Optional[Dict[str, Any]] = None
    source: Optional[ConfigSource] = None
    exported: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.state is not InitState.NOTHING_FOUND


def build_logger(logging: Union[Logging, Logger]) -> Logger:
    if isinstance(logging, Logger):
        return logging
    if logging is Logging.STDOUT:
        return DefaultLogger(output=sys.stdout)
    if logging is Logging.LOG:
        return get_host_logger()
    return NullLogger()


def _load_dotenv_fragment(
    args: Args, environment: Environment, logger: Logger, result: InitResult
) -> Optional[Fragment]:
    dotenv_path = Path(args.dotenv_path)
    dotenv = load_dotenv(dotenv_path, required=args.dotenv_required, logger=logger)
    if dotenv is None:
        return None
    result.state = InitState.DOTENV_LOADED

    # Validated before any variable is exported.
    section = extract_section(dotenv, args.config_variable_name)

    result.exported = export(
        dotenv,
        environment,
        section_key=args.config_variable_name,
        override=args.dotenv_override,
        logger=logger,
    )
    result.state = InitState.ENV_EXPORTED

    if section is None:
        return None
    return Fragment(Layer.DOTENV_SECTION, section, DotEnvSource(dotenv_path))


def resolve(args: Optional[Args] = None, logger: Optional[Logger] = None) -> InitResult:
    """Load, export, map and merge every source without deserializing.

    Raises:
        TomlEnvError: Any loading or mapping failure; nothing is merged then.
    """
    args = args or Args()
    logger = logger or build_logger(args.logging)
    environment = args.environment or Environment()
    result = InitResult(state=InitState.START)

    fragments: List[Optional[Fragment]] = []

    fragments.append(_load_dotenv_fragment(args, environment, logger, result))

    variable_tree = load_env_variable(args.config_variable_name, environment, logger)
    if variable_tree is not None:
        fragments.append(
            Fragment(
                Layer.CONFIG_VARIABLE,
                variable_tree,
                EnvironmentSource((args.config_variable_name,)),
            )
        )

    if args.config_path is not None:
        config_path = Path(args.config_path)
        file_tree = load_config_file(config_path, required=args.config_required, logger=logger)
        if file_tree is not None:
            fragments.append(Fragment(Layer.CONFIG_FILE, file_tree, FileSource(config_path)))

    if args.map_env:
        explicit_tree = map_env(args.map_env, environment, logger)
        if explicit_tree:
            names = tuple(name for name in args.map_env if name in environment)
            fragments.append(
                Fragment(Layer.EXPLICIT_MAPPING, explicit_tree, EnvironmentSource(names))
            )

    if args.auto_map_env is not None:
        auto_tree = auto_map_env(args.auto_map_env, environment, logger)
        if auto_tree:
            prefix = args.auto_map_env.full_prefix
            names = tuple(name for name in environment.names() if name.startswith(prefix))
            fragments.append(
                Fragment(Layer.AUTOMATIC_MAPPING, auto_tree, EnvironmentSource(names))
            )

    merged = merge_fragments(fragments)
    if merged is None:
        logger.info("No configuration found")
        result.state = InitState.NOTHING_FOUND
        return result

    result.tree, result.source = merged
    result.state = InitState.SOURCES_MERGED
    logger.debug(f"Merged configuration from {result.source}")
    return result


def deserialize(
    target: Type[T],
    tree: Dict[str, Any],
    source: ConfigSource,
    logger: Optional[Logger] = None,
) -> T:
    """Validate ``tree`` into ``target`` (dataclass, pydantic model, TypedDict, ...).

    Raises:
        DeserializeError: ``tree`` does not fit ``target``.
    """
    logger = logger or NullLogger()
    adapter = TypeAdapter(target)
    try:
        config = adapter.validate_python(tree)
    except ValidationError as e:
        raise DeserializeError(
            f"Error parsing merged configuration from {source}: "
            f"{e.error_count()} validation error(s)",
            details={"source": str(source), "errors": e.errors(include_url=False)},
        ) from e

    if not isinstance(logger, NullLogger):
        dumped = adapter.dump_python(config, mode="json")
        if isinstance(dumped, dict):
            logger.info(f"Parsed configuration:\n{render_document(dumped)}")
    return config


def initialize(target: Type[T], args: Optional[Args] = None) -> Optional[T]:
    """Resolve configuration from all sources into an instance of ``target``.

    Returns:
        The configuration, or None when no source contributed anything.

    Raises:
        TomlEnvError: Loading, mapping or deserialization failed.
    """
    args = args or Args()
    logger = build_logger(args.logging)

    result = resolve(args, logger)
    if not result.found:
        return None

    config = deserialize(target, result.tree, result.source, logger)  # type: ignore[arg-type]
    result.state = InitState.DONE
    logger.debug(f"Configuration initialized ({result.state.value})")
    return config


__all__ = [
    "DEFAULT_DOTENV_PATH",
    "DEFAULT_CONFIG_VARIABLE_NAME",
    "Logging",
    "InitState",
    "Args",
    "InitResult",
    "build_logger",
    "resolve",
    "deserialize",
    "initialize",
]
