"""Resolve raw catalog property values into numbers.

Catalog values arrive as numbers, numeric strings, or strings carrying a
unit ("5m", "+12%", "0.4s"). Every numeric read in the planner goes through
resolve_value(); nothing re-parses values locally.

Malformed data resolves to 0.0; resolve_value() never raises.
"""

import re

from deadlock_planner.models.item import ItemProperty


_NON_NUMERIC = re.compile(r"[^0-9.+-]")


def resolve_value(raw: object) -> float:
    """Return the numeric value of a raw property value (0.0 if unparsable)."""
    if isinstance(raw, bool) or raw is None:
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw)
    if not isinstance(raw, str):
        return 0.0
    text = _NON_NUMERIC.sub("", raw)
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        # "1.2.3", "+-", "." and friends
        return 0.0


def resolve_property(prop: ItemProperty | None) -> float:
    """Resolve an optional property descriptor."""
    if prop is None:
        return 0.0
    return resolve_value(prop.value)


def sum_property(items, keys: tuple[str, ...]) -> float:
    """Sum the resolved values of `keys` across every item's property bag."""
    total = 0.0
    for item in items:
        for key in keys:
            total += resolve_property(item.properties.get(key))
    return total
