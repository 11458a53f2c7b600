"""Document model for TOML Core: values, tables and arrays."""

from __future__ import annotations

import datetime as _dt
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, ClassVar, Union

from .errors import TomlTypeError


# ---------------------------------------------------------------------------
# ValueType
# ---------------------------------------------------------------------------

class ValueType(Enum):
    TABLE = auto()
    ARRAY = auto()
    STRING = auto()
    INTEGER = auto()
    FLOAT = auto()
    DATETIME = auto()
    BOOLEAN = auto()


# ---------------------------------------------------------------------------
# Scalar value types
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class VString:
    value: str  # decoded with surrogateescape, see to_bytes()

    type: ClassVar[ValueType] = ValueType.STRING

    def to_bytes(self) -> bytes:
        """The exact bytes the scanner produced for this string."""
        return self.value.encode("utf-8", "surrogateescape")

    def to_python(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class VInteger:
    value: int

    type: ClassVar[ValueType] = ValueType.INTEGER

    def to_python(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(slots=True)
class VFloat:
    value: float

    type: ClassVar[ValueType] = ValueType.FLOAT

    def to_python(self) -> float:
        return self.value

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(slots=True)
class VBoolean:
    value: bool

    type: ClassVar[ValueType] = ValueType.BOOLEAN

    def to_python(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass(slots=True)
class VDateTime:
    """Structural date/time literal.

    Fields are kept exactly as written and are not checked against the
    calendar. ``fraction`` holds the digits after the decimal point and
    ``offset`` is ``"Z"`` or ``"+HH:MM"`` / ``"-HH:MM"``.
    """

    year: int | None = None
    month: int | None = None
    day: int | None = None
    hour: int | None = None
    minute: int | None = None
    second: int | None = None
    fraction: str | None = None
    offset: str | None = None

    type: ClassVar[ValueType] = ValueType.DATETIME

    @property
    def has_date(self) -> bool:
        return self.year is not None

    @property
    def has_time(self) -> bool:
        return self.hour is not None

    def _tzinfo(self) -> _dt.tzinfo | None:
        if self.offset is None:
            return None
        if self.offset in ("Z", "z"):
            return _dt.timezone.utc
        sign = -1 if self.offset[0] == "-" else 1
        hours, minutes = self.offset[1:].split(":")
        delta = _dt.timedelta(hours=int(hours), minutes=int(minutes))
        return _dt.timezone(sign * delta)

    def _microsecond(self) -> int:
        if not self.fraction:
            return 0
        return int(self.fraction[:6].ljust(6, "0"))

    def to_python(self) -> _dt.datetime | _dt.date | _dt.time:
        """Convert to a :mod:`datetime` object.

        Raises ``ValueError`` when the fields do not name a real instant.
        """
        if self.has_date and self.has_time:
            return _dt.datetime(
                self.year, self.month, self.day,
                self.hour, self.minute, self.second or 0,
                self._microsecond(), tzinfo=self._tzinfo(),
            )
        if self.has_date:
            return _dt.date(self.year, self.month, self.day)
        return _dt.time(
            self.hour, self.minute, self.second or 0, self._microsecond()
        )

    def __str__(self) -> str:
        parts: list[str] = []
        if self.has_date:
            parts.append(f"{self.year:04d}-{self.month:02d}-{self.day:02d}")
        if self.has_time:
            time = f"{self.hour:02d}:{self.minute:02d}"
            if self.second is not None:
                time += f":{self.second:02d}"
            if self.fraction:
                time += f".{self.fraction}"
            parts.append(time)
        text = "T".join(parts)
        if self.offset is not None:
            text += self.offset
        return text


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@dataclass(slots=True, weakref_slot=True)
class Array:
    """Ordered, 0-indexed sequence of owned values."""

    items: list[Value] = field(default_factory=list)

    type: ClassVar[ValueType] = ValueType.ARRAY

    def append(self, value: Value) -> None:
        self.items.append(value)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def to_python(self) -> list[Any]:
        return [v.to_python() for v in self.items]


@dataclass(slots=True, weakref_slot=True)
class Table:
    """Ordered key/value mapping with unique keys.

    Setting an existing key replaces the value where it stands; iteration
    order is insertion order of the first ``set`` of each key.
    """

    entries: dict[str, Value] = field(default_factory=dict)

    type: ClassVar[ValueType] = ValueType.TABLE

    # -- Mutation -------------------------------------------------------

    def set(self, key: str, value: Value) -> None:
        self.entries[key] = value

    # -- Lookup ---------------------------------------------------------

    def get(self, key: str, default: Value | None = None) -> Value | None:
        return self.entries.get(key, default)

    def __getitem__(self, key: str) -> Value:
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def keys(self):
        return self.entries.keys()

    def items(self) -> Iterator[tuple[str, Value]]:
        """Iterate ``(key, value)`` pairs in insertion order."""
        return iter(self.entries.items())

    # -- Typed accessors ------------------------------------------------

    def _get_typed(self, key: str, expected: type) -> Value:
        value = self.entries[key]
        if not isinstance(value, expected):
            raise TomlTypeError(
                f"key {key!r} holds {value.type.name.lower()}, "
                f"not {expected.type.name.lower()}"
            )
        return value

    def get_as_table(self, key: str) -> Table:
        return self._get_typed(key, Table)

    def get_as_array(self, key: str) -> Array:
        return self._get_typed(key, Array)

    def get_as_string(self, key: str) -> str:
        return self._get_typed(key, VString).value

    def get_as_integer(self, key: str) -> int:
        return self._get_typed(key, VInteger).value

    def get_as_float(self, key: str) -> float:
        return self._get_typed(key, VFloat).value

    def get_as_datetime(self, key: str) -> VDateTime:
        return self._get_typed(key, VDateTime)

    def get_as_boolean(self, key: str) -> bool:
        return self._get_typed(key, VBoolean).value

    def to_python(self) -> dict[str, Any]:
        return {k: v.to_python() for k, v in self.entries.items()}


Value = Union[Table, Array, VString, VInteger, VFloat, VDateTime, VBoolean]
