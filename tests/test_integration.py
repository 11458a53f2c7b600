"""End-to-end tests over whole documents."""

import datetime as dt
import math
from pathlib import Path

import pytest

from toml_core import ValueType, load_file

DATA = Path(__file__).parent / "data"


@pytest.fixture(scope="module")
def key_values():
    return load_file(DATA / "key-values.toml")


@pytest.fixture(scope="module")
def fruit():
    return load_file(DATA / "fruit.toml")


# ---------------------------------------------------------------------------
# key-values.toml
# ---------------------------------------------------------------------------

def test_keys_in_document_order(key_values):
    keys = list(key_values)
    assert keys[0] == "key1-bare-with-dash"
    assert keys[3] == "key 4 double quoted\n"
    assert keys[-1] == "points"

def test_basic_and_literal_strings(key_values):
    assert key_values.get_as_string("key1-bare-with-dash") == "basic string 1"
    assert key_values.get_as_string("key2-bare_with_underscore") == "literal string 2"

def test_escapes(key_values):
    assert key_values.get_as_string("3-key-start-with-digit") == (
        'basic string \b 3 with \t space \f and"escapes \\א\n'
    )

def test_multiline_strings(key_values):
    assert key_values.get_as_string("key 5 single quoted") == "multi line basic string"
    assert key_values.get_as_string(
        "key 6 multi-line basic string strip beginning new line"
    ) == "  There should be no new line, but two leading spaces."
    assert key_values.get_as_string("key 7 line ending backslash") == (
        "lines with ending backslash should be concatenated into a single "
        "line and new lines and spaces after the line ending backslash "
        "should be stripped."
    )
    assert key_values.get_as_string("key 8 multi-line basic string with escapes") == (
        'Escapes \b\n should\t\nalso \f\n work "\nin \\\nmulti-line \nbasic string.'
    )

def test_multiline_literal(key_values):
    assert key_values.get_as_string("key 9 multi-line literal string") == (
        "The first newline is\n"
        "trimmed in raw strings.\n"
        "   All other whitespace or [(*&%$@!/\\~`^#)]\n"
        "   is preserved.\n"
    )

@pytest.mark.parametrize("key, expected", [
    ("int1", 99),
    ("int2", 42),
    ("int3", 0),
    ("int4", -17),
    ("int5", 1000),
    ("int6", 5349221),
    ("int7", 12345),
    ("hex1", 0xDEADBEEF),
    ("hex2", 0xDEADBEEF),
    ("hex3", 0xDEADBEEF),
    ("oct1", 0o01234567),
    ("oct2", 0o755),
    ("oct3", 0o01234567),
    ("oct4", 0o755),
    ("bin1", 0b11010110),
    ("bin2", 0b11010110),
])
def test_integers(key_values, key, expected):
    assert key_values.get_as_integer(key) == expected

@pytest.mark.parametrize("key, expected", [
    ("flt1", 1.0),
    ("flt2", 3.1415),
    ("flt3", -0.01),
    ("flt4", 5e22),
    ("flt5", 1e6),
    ("flt6", -2e-2),
    ("flt7", 6.626e-34),
    ("flt8", 9224617.445991228313),
])
def test_floats(key_values, key, expected):
    assert key_values.get_as_float(key) == expected

def test_special_floats(key_values):
    assert key_values.get_as_float("sf1") == math.inf
    assert key_values.get_as_float("sf2") == math.inf
    assert key_values.get_as_float("sf3") == -math.inf
    for key in ("sf4", "sf5", "sf6"):
        assert math.isnan(key_values.get_as_float(key))

def test_booleans(key_values):
    assert key_values.get_as_boolean("bool1") is True
    assert key_values.get_as_boolean("bool2") is False

def test_arrays(key_values):
    assert key_values.get_as_array("arr1").to_python() == [1, 2, 3]
    assert key_values.get_as_array("arr3").to_python() == [[1, 2], [3, 4, 5]]
    assert key_values.get_as_array("arr4").to_python() == ["all", "strings", "are the same", "type"]
    assert key_values.get_as_array("arr5").to_python() == [[1, 2], ["a", "b", "c"]]
    assert key_values.get_as_array("arr7").to_python() == [1, 2, 3]
    assert key_values.get_as_array("arr8").to_python() == [1, 2]
    assert "arr6" not in key_values

def test_inline_tables(key_values):
    assert key_values.get_as_table("name").to_python() == {
        "first": "Tom", "last": "Preston-Werner",
    }
    assert key_values.get_as_table("point").to_python() == {"x": 1, "y": 2}
    points = key_values.get_as_array("points")
    assert [p.get_as_integer("z") for p in points] == [3, 9, 8]


# ---------------------------------------------------------------------------
# fruit.toml
# ---------------------------------------------------------------------------

def test_root_and_tables(fruit):
    assert list(fruit) == ["title", "owner", "database", "fruit"]
    conn = fruit.get_as_table("database").get_as_table("connection")
    assert conn.get_as_array("ports").to_python() == [8001, 8001, 8002]
    assert conn.get_as_boolean("enabled") is True

def test_datetime_value(fruit):
    dob = fruit.get_as_table("owner").get_as_datetime("dob")
    assert dob.type is ValueType.DATETIME
    assert dob.offset == "-08:00"
    assert dob.to_python() == dt.datetime(
        1979, 5, 27, 7, 32, tzinfo=dt.timezone(dt.timedelta(hours=-8))
    )

def test_arrays_of_tables(fruit):
    assert fruit.get_as_array("fruit").to_python() == [
        {
            "name": "apple",
            "physical": {"color": "red", "shape": "round"},
            "variety": [{"name": "red delicious"}, {"name": "granny smith"}],
        },
        {
            "name": "banana",
            "variety": [{"name": "plantain"}],
        },
    ]
