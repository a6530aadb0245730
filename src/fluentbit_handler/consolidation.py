"""
Attribute consolidation.

Merges the attributes accumulated on a handler with the attributes of a
record into a single nested dict. Duplicate keys are resolved by keeping the
last value seen while walking the attributes left to right, outer to inner.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .attrs import Attr, Group
from .record import Record


def consolidate_attrs(
    handler_attrs: Iterable[Attr],
    active_group: str,
    record: Record,
) -> dict[str, Any]:
    """Build the attribute tree emitted for ``record``.

    Record attributes are placed inside ``active_group`` when one is open,
    after every handler attribute.

    Example:
        >>> record = Record.create("INFO", "hi", a=3)
        >>> consolidate_attrs([Attr("a", 1), Attr("a", 2)], "", record)
        {'a': 3}
    """
    attrs = list(handler_attrs)
    if record.attrs:
        if active_group:
            attrs.append(Attr(active_group, Group(record.attrs)))
        else:
            attrs.extend(record.attrs)

    tree: dict[str, Any] = {}
    _merge(tree, attrs)
    return tree


def _merge(tree: dict[str, Any], attrs: Iterable[Attr]) -> None:
    for attr in attrs:
        if attr.is_group:
            members = attr.value.attrs
            if not members:
                continue
            if not attr.key:
                # unnamed groups are inlined into the enclosing level
                _merge(tree, members)
                continue
            existing = tree.get(attr.key)
            # copy so caller-owned dict values are never mutated
            child = dict(existing) if isinstance(existing, dict) else {}
            _merge(child, members)
            if child:
                tree[attr.key] = child
        elif attr.key:
            tree[attr.key] = attr.value
