"""Test utilities for code that loads configuration with toml-env.

Tests should never mutate the real process environment. These helpers build
an :class:`~toml_env.environment.Environment` over a plain dict and write
TOML fixture files.

Usage in project tests:
    from toml_env.testing import isolated_environment, write_document

    env = isolated_environment({"MY_APP__PORT": "80"})
    write_document(tmp_path / ".env.toml", '''
        SECRET = "hello"
        [CONFIG]
        value_1 = "x"
    ''')

Or load the pytest fixtures in a conftest.py:
    pytest_plugins = ["toml_env.testing.pytest_fixtures"]
"""

from pathlib import Path
from textwrap import dedent
from typing import Dict, Optional, Union

from toml_env.environment import Environment

__all__ = [
    "isolated_environment",
    "write_document",
]


def isolated_environment(variables: Optional[Dict[str, str]] = None) -> Environment:
    """Environment backed by a copy of ``variables`` instead of ``os.environ``."""
    return Environment(dict(variables or {}))


def write_document(path: Union[str, Path], text: str) -> Path:
    """Write dedented ``text`` to ``path`` and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
    return path
