"""Access to environment variables.

Every read and write of process environment variables goes through an
:class:`Environment`. By default it wraps :data:`os.environ`; tests (and
callers that must not touch global state) pass their own mapping.
"""

from __future__ import annotations

import os
from typing import Iterator, MutableMapping, Optional


class Environment:
    """Key/value store of environment variables."""

    def __init__(self, variables: Optional[MutableMapping[str, str]] = None) -> None:
        self._variables = variables if variables is not None else os.environ

    @property
    def is_process_environment(self) -> bool:
        return self._variables is os.environ

    def get(self, name: str) -> Optional[str]:
        """Return the value of ``name`` or None when it is not set."""
        return self._variables.get(name)

    def set(self, name: str, value: str) -> None:
        self._variables[name] = value

    def names(self) -> Iterator[str]:
        """Names of all currently set variables, in sorted order."""
        return iter(sorted(self._variables))

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __repr__(self) -> str:
        kind = "process" if self.is_process_environment else "isolated"
        return f"Environment({kind}, {len(self._variables)} variables)"


__all__ = ["Environment"]
