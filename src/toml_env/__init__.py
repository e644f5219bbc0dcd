"""toml-env - Layered TOML and environment variable configuration.

Merges configuration from a config file, a ``.env.toml`` file, a ``CONFIG``
environment variable and mapped environment variables into one typed object
at process startup:
- initializer: ``initialize()`` / ``resolve()`` and their ``Args``
- key_path: dotted key paths into configuration trees
- mapping: explicit and automatic environment variable mapping
- merge: deep merge with fixed precedence
- logger: progress logging (stdout, the logging module, or nothing)
- exceptions: structured error classes
"""

__version__ = "0.4.0"

from toml_env.environment import Environment

from toml_env.exceptions import (
    ConfigIOError,
    ConfigParseError,
    DeserializeError,
    InvalidAutoMapNameError,
    InvalidKeyPathError,
    MissingSourceError,
    SectionTypeError,
    TomlEnvError,
)

from toml_env.initializer import (
    DEFAULT_CONFIG_VARIABLE_NAME,
    DEFAULT_DOTENV_PATH,
    Args,
    InitResult,
    InitState,
    Logging,
    initialize,
    resolve,
)

from toml_env.key_path import Field, Index, KeyPath

from toml_env.logger import (
    DefaultLogger,
    Logger,
    NullLogger,
    StructuredLogger,
    create_logger,
    get_logger,
)

from toml_env.mapping import DEFAULT_MAP_ENV_DIVIDER, AutoMapEnvArgs

from toml_env.merge import merge

from toml_env.sources import (
    ConfigSource,
    DotEnvSource,
    EnvironmentSource,
    FileSource,
    MergedSource,
)

__all__ = [
    "__version__",
    # Initialization
    "initialize",
    "resolve",
    "Args",
    "AutoMapEnvArgs",
    "InitResult",
    "InitState",
    "Logging",
    "Environment",
    "DEFAULT_DOTENV_PATH",
    "DEFAULT_CONFIG_VARIABLE_NAME",
    "DEFAULT_MAP_ENV_DIVIDER",
    # Key paths and merging
    "KeyPath",
    "Field",
    "Index",
    "merge",
    # Sources
    "ConfigSource",
    "DotEnvSource",
    "FileSource",
    "EnvironmentSource",
    "MergedSource",
    # Logger
    "Logger",
    "NullLogger",
    "DefaultLogger",
    "StructuredLogger",
    "create_logger",
    "get_logger",
    # Exceptions
    "TomlEnvError",
    "ConfigIOError",
    "ConfigParseError",
    "SectionTypeError",
    "InvalidKeyPathError",
    "InvalidAutoMapNameError",
    "DeserializeError",
    "MissingSourceError",
]
