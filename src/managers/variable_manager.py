"""Detect data-layer variable references inside GTM tag configurations."""

from __future__ import annotations

from typing import Any, Iterable


def contains_variable(node: Any, needle: str) -> bool:
    """Return True if any string reachable from `node` contains `needle`.

    Mapping values and sequence items are visited recursively; mapping keys,
    numbers, booleans and None never match. The comparison is a plain
    case-sensitive substring check.
    """
    if isinstance(node, str):
        return needle in node
    if isinstance(node, dict):
        return any(contains_variable(value, needle) for value in node.values())
    if isinstance(node, (list, tuple)):
        return any(contains_variable(item, needle) for item in node)
    return False


def contains_any_variable(node: Any, needles: Iterable[str]) -> bool:
    """Return True if `node` references at least one of `needles`."""
    return any(contains_variable(node, needle) for needle in needles)
