"""Deep merge of configuration fragments.

Merge rules:
- table + table: merged key by key, recursing into tables present on both sides
- anything else: the overlay replaces the base (arrays are replaced as a
  whole, never concatenated or merged element by element)

Fragments are folded from lowest to highest precedence::

    config file < dotenv section < CONFIG variable < explicit mapping < automatic mapping
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from toml_env.sources import ConfigSource, MergedSource


class Layer(Enum):
    """Precedence tiers, lowest first."""

    CONFIG_FILE = 1
    DOTENV_SECTION = 2
    CONFIG_VARIABLE = 3
    EXPLICIT_MAPPING = 4
    AUTOMATIC_MAPPING = 5


PRECEDENCE: Tuple[Layer, ...] = tuple(sorted(Layer, key=lambda layer: layer.value))


@dataclass(frozen=True)
class Fragment:
    """A tree contributed by one source."""

    layer: Layer
    tree: Dict[str, Any]
    source: ConfigSource


def merge(base: Any, overlay: Any) -> Any:
    """Merge ``overlay`` on top of ``base`` and return the result.

    Never raises and never mutates its arguments.

    Example:
        >>> merge({"a": 1, "b": {"x": 1}}, {"b": {"y": 2}})
        {'a': 1, 'b': {'x': 1, 'y': 2}}
        >>> merge({"arr": [1, 2]}, {"arr": [9]})
        {'arr': [9]}
    """
    if not (isinstance(base, dict) and isinstance(overlay, dict)):
        return deepcopy(overlay)

    result = deepcopy(base)
    for key, value in overlay.items():
        if key in result:
            result[key] = merge(result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


def merge_fragments(
    fragments: Iterable[Optional[Fragment]],
) -> Optional[Tuple[Dict[str, Any], ConfigSource]]:
    """Fold the present fragments in precedence order.

    ``None`` entries (absent sources) are ignored. Fragments are sorted by
    their position in :data:`PRECEDENCE`, whatever order they are passed in.

    Returns:
        The merged tree and its combined source, or None when no fragment
        was present.
    """
    present = sorted(
        (fragment for fragment in fragments if fragment is not None),
        key=lambda fragment: PRECEDENCE.index(fragment.layer),
    )
    if not present:
        return None

    tree: Dict[str, Any] = deepcopy(present[0].tree)
    source: ConfigSource = present[0].source
    for fragment in present[1:]:
        tree = merge(tree, fragment.tree)
        source = MergedSource(base=source, overlay=fragment.source)
    return tree, source


__all__ = ["Layer", "PRECEDENCE", "Fragment", "merge", "merge_fragments"]
