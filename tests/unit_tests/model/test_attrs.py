"""
Attribute model unit tests.
"""

from __future__ import annotations

import dataclasses
import logging

import pytest

from fluentbit_handler.attrs import Attr, Group, attrs_from, group
from fluentbit_handler.record import Record, level_name, parse_level


class TestAttr:
    def test_attr_is_immutable(self) -> None:
        attr = Attr("a", 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            attr.key = "b"  # type: ignore[misc]

    def test_group_attr_is_group(self) -> None:
        assert group("g", x=1).is_group
        assert not Attr("x", 1).is_group

    def test_group_keeps_positional_then_keyword_order(self) -> None:
        attr = group("req", Attr("id", "abc"), method="GET")
        assert attr.key == "req"
        assert [a.key for a in attr.value] == ["id", "method"]


class TestAttrsFrom:
    def test_none_is_empty(self) -> None:
        assert attrs_from(None) == ()

    def test_nested_mapping_becomes_group(self) -> None:
        result = attrs_from({"http": {"status": 200}, "ok": True})
        assert result == (Attr("http", Group((Attr("status", 200),))), Attr("ok", True))

    def test_iterable_of_attrs_is_kept(self) -> None:
        attrs = [Attr("a", 1), Attr("b", 2)]
        assert attrs_from(attrs) == tuple(attrs)

    def test_rejects_non_attr_items(self) -> None:
        with pytest.raises(TypeError):
            attrs_from([("a", 1)])  # type: ignore[list-item]


class TestRecord:
    def test_create_stamps_aware_time(self) -> None:
        record = Record.create("warning", "hello", Attr("a", 1), b=2)
        assert record.level == logging.WARNING
        assert record.time.tzinfo is not None
        assert [a.key for a in record.attrs] == ["a", "b"]

    def test_parse_level_accepts_numbers(self) -> None:
        assert parse_level(25) == 25

    def test_parse_level_rejects_unknown_names(self) -> None:
        with pytest.raises(ValueError):
            parse_level("loud")

    @pytest.mark.parametrize(
        ("level", "name"),
        [(logging.INFO, "INFO"), (logging.INFO + 2, "INFO+2"), (5, "DEBUG-5")],
    )
    def test_level_name(self, level: int, name: str) -> None:
        assert level_name(level) == name
