"""Lexical scanners: keys, strings, numbers, booleans and datetimes.

Every scanner takes a :class:`~toml_core.cursor.Cursor` positioned on the
first byte it owns (for strings: the first byte after the opening
delimiter) and leaves it on the first byte it did not consume.
"""

from __future__ import annotations

import re
from enum import Enum, auto

from .cursor import Cursor
from .errors import ErrorKind
from .model import VBoolean, VDateTime, VFloat, VInteger, VString


_BARE_KEY_BYTES = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_-"
)

_ESCAPES = {
    b"b": b"\b",
    b"t": b"\t",
    b"n": b"\n",
    b"f": b"\f",
    b"r": b"\r",
    b'"': b'"',
    b"\\": b"\\",
}

_HEX_DIGITS = b"0123456789abcdefABCDEF"

# (largest scalar, lead byte marker, continuation byte count)
_UTF8_FORMS = (
    (0x7F, 0x00, 0),
    (0x7FF, 0xC0, 1),
    (0xFFFF, 0xE0, 2),
    (0x1FFFFF, 0xF0, 3),
    (0x3FFFFFF, 0xF8, 4),
    (0x7FFFFFFF, 0xFC, 5),
)

_BASE_PREFIXES = {b"0x": 16, b"0o": 8, b"0b": 2}
_BASE_DIGITS = {
    16: b"0123456789abcdefABCDEF",
    8: b"01234567",
    2: b"01",
}
_FLOAT_WORDS = (b"nan", b"inf", b"+nan", b"-nan", b"+inf", b"-inf")

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

_BOOL_FOLLOW = (b",", b"]", b"}")

_DATE = r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
_TIME = (
    r"(?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?"
)
_OFFSET = r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})"
_DATETIME_RE = re.compile(rf"^{_DATE}(?:[Tt ]{_TIME}{_OFFSET}?)?$")
_LOCAL_TIME_RE = re.compile(rf"^{_TIME}$")


def _decode(buf: bytearray) -> str:
    return bytes(buf).decode("utf-8", "surrogateescape")


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------

def is_bare_key_byte(ch: bytes) -> bool:
    return ch != b"" and ch[0] in _BARE_KEY_BYTES


def scan_bare_key(cur: Cursor) -> str:
    """Consume a maximal run of ``[A-Za-z0-9_-]``; may be empty."""
    start = cur.pos
    while is_bare_key_byte(cur.peek()):
        cur.advance()
    return cur.data[start:cur.pos].decode("ascii")


# ---------------------------------------------------------------------------
# Unicode scalar escapes
# ---------------------------------------------------------------------------

def encode_scalar(scalar: int) -> bytes:
    """UTF-8 encode *scalar* using the 1 to 6 byte forms.

    Raises ``ValueError`` for surrogates, the U+FFFE/U+FFFF non-characters
    and anything above 0x7FFFFFFF.
    """
    if 0xD800 <= scalar <= 0xDFFF or 0xFFFE <= scalar <= 0xFFFF:
        raise ValueError(f"invalid unicode scalar {scalar:#x}")
    for limit, lead, tail in _UTF8_FORMS:
        if scalar <= limit:
            out = bytearray([lead | (scalar >> (6 * tail))])
            for shift in range(tail - 1, -1, -1):
                out.append(0x80 | ((scalar >> (6 * shift)) & 0x3F))
            return bytes(out)
    raise ValueError(f"invalid unicode scalar {scalar:#x}")


def _scan_scalar(cur: Cursor, n: int) -> bytes:
    scalar = 0
    for _ in range(n):
        ch = cur.peek()
        if not ch or ch not in _HEX_DIGITS:
            raise cur.error("invalid unicode scalar", ErrorKind.UNICODE)
        scalar = scalar * 16 + int(ch, 16)
        cur.advance()
    try:
        return encode_scalar(scalar)
    except ValueError:
        raise cur.error("invalid unicode scalar", ErrorKind.UNICODE) from None


def _scan_escape(cur: Cursor, out: bytearray) -> None:
    """Decode the escape whose backslash was just consumed."""
    ch = cur.peek()
    if ch in _ESCAPES:
        out += _ESCAPES[ch]
        cur.advance()
    elif ch == b"u":
        cur.advance()
        out += _scan_scalar(cur, 4)
    elif ch == b"U":
        cur.advance()
        out += _scan_scalar(cur, 8)
    else:
        raise cur.error("invalid escape character")


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

def scan_basic_string(cur: Cursor) -> str:
    out = bytearray()
    while True:
        ch = cur.peek()
        if ch in (b"", b"\n"):
            raise cur.error("unterminated basic string")
        if ch == b'"':
            cur.advance()
            return _decode(out)
        cur.advance()
        if ch == b"\\":
            _scan_escape(cur, out)
        else:
            out += ch


def scan_literal_string(cur: Cursor) -> str:
    start = cur.pos
    while True:
        ch = cur.peek()
        if ch in (b"", b"\n"):
            raise cur.error("unterminated literal string")
        if ch == b"'":
            text = cur.data[start:cur.pos].decode("utf-8", "surrogateescape")
            cur.advance()
            return text
        cur.advance()


def _strip_leading_newline(cur: Cursor) -> None:
    if cur.startswith(b"\r\n"):
        cur.advance(2)
    elif cur.startswith(b"\n"):
        cur.advance()


def scan_multiline_basic_string(cur: Cursor) -> str:
    _strip_leading_newline(cur)
    out = bytearray()
    while not cur.startswith(b'"""'):
        ch = cur.peek()
        if not ch:
            raise cur.error("unterminated multi-line basic string")
        cur.advance()
        if ch != b"\\":
            out += ch
        elif cur.startswith(b"\n") or cur.startswith(b"\r\n"):
            # line continuation: drop the newline and the indentation after it
            cur.skip_whitespace()
        else:
            _scan_escape(cur, out)
    cur.advance(3)
    return _decode(out)


def scan_multiline_literal_string(cur: Cursor) -> str:
    _strip_leading_newline(cur)
    start = cur.pos
    while not cur.startswith(b"'''"):
        if cur.at_end():
            raise cur.error("unterminated multi-line literal string")
        cur.advance()
    text = cur.data[start:cur.pos].decode("utf-8", "surrogateescape")
    cur.advance(3)
    return text


def scan_string_value(cur: Cursor) -> VString:
    """Scan any of the four string forms, delimiters included."""
    if cur.startswith(b'"""'):
        cur.advance(3)
        return VString(scan_multiline_basic_string(cur))
    if cur.startswith(b"'''"):
        cur.advance(3)
        return VString(scan_multiline_literal_string(cur))
    if cur.peek() == b'"':
        cur.advance()
        return VString(scan_basic_string(cur))
    cur.advance()
    return VString(scan_literal_string(cur))


# ---------------------------------------------------------------------------
# Numbers and datetimes
# ---------------------------------------------------------------------------

class _Kind(Enum):
    INTEGER = auto()
    FLOAT = auto()
    DATETIME = auto()


def _date_complete(token: bytearray) -> bool:
    return len(token) == 10 and token[4:5] == b"-" and token[7:8] == b"-"


def scan_number(cur: Cursor) -> VInteger | VFloat | VDateTime:
    """Scan an integer, float or datetime token in one forward pass."""
    kind = _Kind.INTEGER
    base = 10
    is_word = any(cur.startswith(word) for word in _FLOAT_WORDS)
    if is_word:
        kind = _Kind.FLOAT

    for prefix, prefix_base in _BASE_PREFIXES.items():
        if cur.startswith(prefix):
            base = prefix_base
            cur.advance(2)
            break

    token = bytearray()
    last = b""
    has_exp = False

    while not cur.at_end():
        ch = cur.peek()

        if kind is _Kind.DATETIME:
            if ch == b"_":
                raise cur.error("invalid datetime")
            if ch.isalnum() or ch in (b"-", b":", b".", b"+"):
                token += ch
            elif (
                ch == b" "
                and _date_complete(token)
                and cur.peek(1).isdigit()
            ):
                token += ch
            else:
                break
            last = ch
            cur.advance()
            continue

        if last == b"_" and not ch.isalnum():
            raise cur.error("invalid integer or float")

        if ch in (b"+", b"-"):
            if not last and base == 10:
                token += ch
            elif last in (b"e", b"E") and not has_exp and base == 10:
                kind = _Kind.FLOAT
                has_exp = True
                token += ch
            elif ch == b"-" and base == 10:
                kind = _Kind.DATETIME
                token += ch
            else:
                break
        elif ch.isalnum():
            if base != 10 and ch not in _BASE_DIGITS[base]:
                raise cur.error("invalid integer")
            if base == 10 and ch in (b"e", b"E"):
                kind = _Kind.FLOAT
            token += ch
        elif ch == b".":
            if base != 10 or kind is not _Kind.INTEGER:
                raise cur.error("invalid float")
            kind = _Kind.FLOAT
            token += ch
        elif ch == b"_":
            if not last.isalnum():
                raise cur.error("invalid integer or float")
        elif ch == b":" and kind is _Kind.INTEGER and base == 10 and token:
            kind = _Kind.DATETIME
            token += ch
        else:
            break

        last = ch
        cur.advance()

    if last == b"_":
        raise cur.error("invalid integer or float or datetime")

    text = token.decode("ascii")

    if kind is _Kind.INTEGER:
        try:
            number = int(text, base)
        except ValueError:
            raise cur.error("invalid integer") from None
        if not _INT64_MIN <= number <= _INT64_MAX:
            raise cur.error("integer out of range")
        return VInteger(number)

    if kind is _Kind.FLOAT:
        if is_word and token not in _FLOAT_WORDS:
            raise cur.error("invalid float")
        try:
            return VFloat(float(text))
        except ValueError:
            raise cur.error("invalid float") from None

    value = parse_datetime(text)
    if value is None:
        raise cur.error("invalid datetime")
    return value


def parse_datetime(text: str) -> VDateTime | None:
    """Decompose a datetime literal into its fields, or ``None``."""
    m = _DATETIME_RE.match(text) or _LOCAL_TIME_RE.match(text)
    if m is None:
        return None
    groups = m.groupdict()

    def _int(name: str) -> int | None:
        raw = groups.get(name)
        return int(raw) if raw is not None else None

    return VDateTime(
        year=_int("year"),
        month=_int("month"),
        day=_int("day"),
        hour=_int("hour"),
        minute=_int("minute"),
        second=_int("second"),
        fraction=groups.get("fraction"),
        offset=groups.get("offset"),
    )


# ---------------------------------------------------------------------------
# Booleans
# ---------------------------------------------------------------------------

def scan_boolean(cur: Cursor) -> VBoolean | None:
    """Match ``true`` / ``false`` followed by a delimiter, else ``None``."""
    for literal, value in ((b"true", True), (b"false", False)):
        if cur.startswith(literal):
            follow = cur.peek(len(literal))
            if not follow or follow.isspace() or follow in _BOOL_FOLLOW:
                cur.advance(len(literal))
                return VBoolean(value)
    return None
