"""Print the configuration toml-env would resolve in the current directory.

Usage:
    toml-env [--dotenv PATH] [--config PATH] [--variable NAME]
             [--map VAR=key.path ...] [--auto-prefix PREFIX] [--auto-divider DIV]
             [--no-auto-prefix] [--override] [--verbose]

Examples:
    # What would the app see?
    toml-env --config config.toml --auto-prefix MY_APP

    # Map two variables explicitly
    toml-env --map PORT=server.port --map HOST=server.host

Exit codes:
    0  configuration printed as TOML
    1  a source could not be loaded
    2  no configuration was found
"""

import argparse
import sys
from typing import Dict, List, Optional

from toml_env.exceptions import TomlEnvError
from toml_env.initializer import (
    DEFAULT_CONFIG_VARIABLE_NAME,
    DEFAULT_DOTENV_PATH,
    Args,
    Logging,
    resolve,
)
from toml_env.loader import render_document
from toml_env.mapping import DEFAULT_MAP_ENV_DIVIDER, AutoMapEnvArgs


def parse_mappings(values: List[str]) -> Dict[str, str]:
    """Turn ``VAR=key.path`` arguments into a mapping table."""
    mappings: Dict[str, str] = {}
    for item in values:
        name, sep, path = item.partition("=")
        if not sep or not name:
            raise argparse.ArgumentTypeError(f"Expected VAR=key.path, got {item!r}")
        mappings[name] = path
    return mappings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toml-env",
        description="Resolve layered TOML/environment configuration and print it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--dotenv",
        default=DEFAULT_DOTENV_PATH,
        help=f"Path to the dotenv TOML file (default: {DEFAULT_DOTENV_PATH})",
    )
    parser.add_argument("--config", default=None, help="Path to a config TOML file")
    parser.add_argument(
        "--variable",
        default=DEFAULT_CONFIG_VARIABLE_NAME,
        help=f"Name of the config environment variable (default: {DEFAULT_CONFIG_VARIABLE_NAME})",
    )
    parser.add_argument(
        "--map",
        action="append",
        default=[],
        metavar="VAR=key.path",
        help="Map an environment variable to a key path (repeatable)",
    )
    parser.add_argument("--auto-prefix", default=None, help="Enable automatic mapping with this prefix")
    parser.add_argument(
        "--no-auto-prefix",
        action="store_true",
        help="Enable automatic mapping of every environment variable",
    )
    parser.add_argument(
        "--auto-divider",
        default=DEFAULT_MAP_ENV_DIVIDER,
        help=f"Divider between key levels in variable names (default: {DEFAULT_MAP_ENV_DIVIDER})",
    )
    parser.add_argument(
        "--override",
        action="store_true",
        help="Let the dotenv file overwrite variables already set",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stdout")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    options = parser.parse_args(argv)

    try:
        mappings = parse_mappings(options.map)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    auto_map = None
    if options.no_auto_prefix:
        auto_map = AutoMapEnvArgs(divider=options.auto_divider, prefix=None)
    elif options.auto_prefix is not None:
        auto_map = AutoMapEnvArgs(divider=options.auto_divider, prefix=options.auto_prefix)

    args = Args(
        dotenv_path=options.dotenv,
        dotenv_override=options.override,
        config_path=options.config,
        config_variable_name=options.variable,
        map_env=mappings,
        auto_map_env=auto_map,
        logging=Logging.STDOUT if options.verbose else Logging.NONE,
    )

    try:
        result = resolve(args)
    except TomlEnvError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if not result.found:
        print("No configuration found", file=sys.stderr)
        return 2

    print(f"# {result.source}")
    print(render_document(result.tree), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
