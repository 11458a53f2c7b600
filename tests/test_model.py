"""Tests for toml_core.model."""

import datetime as dt

import pytest

from toml_core.errors import TomlTypeError
from toml_core.model import (
    Array,
    Table,
    ValueType,
    VBoolean,
    VDateTime,
    VFloat,
    VInteger,
    VString,
)


class TestTable:
    def test_set_and_get(self):
        t = Table()
        t.set("a", VInteger(1))
        assert t.get("a") == VInteger(1)
        assert "a" in t
        assert len(t) == 1

    def test_get_absent(self):
        assert Table().get("missing") is None

    def test_replace_keeps_position(self):
        t = Table()
        t.set("a", VInteger(1))
        t.set("b", VInteger(2))
        t.set("a", VInteger(3))
        assert list(t.items()) == [("a", VInteger(3)), ("b", VInteger(2))]
        assert len(t) == 2

    def test_iteration_is_insertion_order(self):
        t = Table()
        for key in ("zeta", "alpha", "mid"):
            t.set(key, VBoolean(True))
        assert list(t) == ["zeta", "alpha", "mid"]

    def test_typed_accessors(self):
        t = Table()
        t.set("s", VString("x"))
        t.set("i", VInteger(7))
        t.set("f", VFloat(1.5))
        t.set("b", VBoolean(False))
        t.set("t", Table())
        t.set("a", Array())
        t.set("d", VDateTime(year=2024, month=1, day=15))
        assert t.get_as_string("s") == "x"
        assert t.get_as_integer("i") == 7
        assert t.get_as_float("f") == 1.5
        assert t.get_as_boolean("b") is False
        assert isinstance(t.get_as_table("t"), Table)
        assert isinstance(t.get_as_array("a"), Array)
        assert t.get_as_datetime("d").year == 2024

    def test_typed_accessor_wrong_type(self):
        t = Table()
        t.set("i", VInteger(7))
        with pytest.raises(TomlTypeError) as excinfo:
            t.get_as_string("i")
        assert "integer" in str(excinfo.value)
        assert isinstance(excinfo.value, TypeError)

    def test_typed_accessor_missing_key(self):
        with pytest.raises(KeyError):
            Table().get_as_integer("nope")

    def test_to_python(self):
        inner = Table()
        inner.set("x", VInteger(1))
        t = Table()
        t.set("inner", inner)
        t.set("list", Array([VString("a"), VFloat(2.0)]))
        assert t.to_python() == {"inner": {"x": 1}, "list": ["a", 2.0]}


class TestArray:
    def test_append_and_index(self):
        a = Array()
        a.append(VInteger(1))
        a.append(VString("two"))
        assert len(a) == 2
        assert a[0] == VInteger(1)
        assert a[-1] == VString("two")
        assert list(a) == [VInteger(1), VString("two")]


class TestValueTypes:
    def test_type_tags(self):
        assert Table.type is ValueType.TABLE
        assert Array().type is ValueType.ARRAY
        assert VString("").type is ValueType.STRING
        assert VInteger(0).type is ValueType.INTEGER
        assert VFloat(0.0).type is ValueType.FLOAT
        assert VDateTime().type is ValueType.DATETIME
        assert VBoolean(True).type is ValueType.BOOLEAN

    def test_string_to_bytes(self):
        assert VString("é").to_bytes() == b"\xc3\xa9"

    def test_string_keeps_undecodable_bytes(self):
        raw = b"\xfc\x84\x80\x80\x80\x80"
        s = VString(raw.decode("utf-8", "surrogateescape"))
        assert s.to_bytes() == raw

    def test_boolean_str(self):
        assert str(VBoolean(True)) == "true"


class TestDateTime:
    def test_offset_datetime(self):
        d = VDateTime(1979, 5, 27, 0, 32, 0, "999999", "-07:00")
        assert str(d) == "1979-05-27T00:32:00.999999-07:00"
        value = d.to_python()
        assert value.microsecond == 999999
        assert value.utcoffset() == dt.timedelta(hours=-7)

    def test_utc(self):
        d = VDateTime(1979, 5, 27, 7, 32, 0, offset="Z")
        assert d.to_python() == dt.datetime(1979, 5, 27, 7, 32, tzinfo=dt.timezone.utc)

    def test_local_date(self):
        d = VDateTime(year=1979, month=5, day=27)
        assert d.to_python() == dt.date(1979, 5, 27)
        assert str(d) == "1979-05-27"

    def test_local_time(self):
        d = VDateTime(hour=7, minute=32, second=0, fraction="5")
        assert d.to_python() == dt.time(7, 32, 0, 500000)
        assert str(d) == "07:32:00.5"

    def test_not_calendar_checked_until_conversion(self):
        d = VDateTime(year=2023, month=2, day=30)
        assert d.day == 30
        with pytest.raises(ValueError):
            d.to_python()
