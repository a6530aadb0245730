"""
Attribute model.

An :class:`Attr` is an immutable key/value pair. When its value is a
:class:`Group` the attribute is a namespace holding further attributes, which
is how nested objects end up in the emitted record.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Group:
    """Ordered, immutable collection of attributes."""

    attrs: tuple[Attr, ...] = ()

    def __len__(self) -> int:
        return len(self.attrs)

    def __iter__(self):
        return iter(self.attrs)


@dataclass(frozen=True, slots=True)
class Attr:
    """A single key/value attribute."""

    key: str
    value: Any

    @property
    def is_group(self) -> bool:
        return isinstance(self.value, Group)


def attrs_from(values: Mapping[str, Any] | Iterable[Attr] | None) -> tuple[Attr, ...]:
    """Normalize a mapping or an iterable of attributes into a tuple.

    Nested mappings become groups, so ``{"http": {"status": 200}}`` is the
    same as ``group("http", status=200)``.
    """
    if values is None:
        return ()
    if isinstance(values, Mapping):
        result = []
        for key, value in values.items():
            if isinstance(value, Mapping):
                result.append(Attr(str(key), Group(attrs_from(value))))
            else:
                result.append(Attr(str(key), value))
        return tuple(result)

    result = []
    for item in values:
        if not isinstance(item, Attr):
            raise TypeError(f"expected Attr, got {type(item).__name__}")
        result.append(item)
    return tuple(result)


def group(name: str, *attrs: Attr, **values: Any) -> Attr:
    """Build a group attribute.

    Example:
        >>> group("request", Attr("id", "abc"), method="GET")
        Attr(key='request', value=Group(attrs=(Attr(key='id', value='abc'), Attr(key='method', value='GET'))))
    """
    return Attr(name, Group(attrs_from(attrs) + attrs_from(values)))
