"""TOML Core — parser for TOML documents into an ordered document model."""

from .errors import (
    ErrorKind,
    TomlError,
    TomlMemoryError,
    TomlOSError,
    TomlSyntaxError,
    TomlTypeError,
    TomlUnicodeError,
)
from .loader import load, load_file, loads
from .model import (
    Array,
    Table,
    Value,
    ValueType,
    VBoolean,
    VDateTime,
    VFloat,
    VInteger,
    VString,
)
from .parser import Parser, parse

__all__ = [
    "loads",
    "load",
    "load_file",
    "parse",
    "Parser",
    "Array",
    "Table",
    "Value",
    "ValueType",
    "VBoolean",
    "VDateTime",
    "VFloat",
    "VInteger",
    "VString",
    "ErrorKind",
    "TomlError",
    "TomlMemoryError",
    "TomlOSError",
    "TomlSyntaxError",
    "TomlTypeError",
    "TomlUnicodeError",
]
