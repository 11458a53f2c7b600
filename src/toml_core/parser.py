"""Parser: values, arrays, inline tables, key/value lines and headers."""

from __future__ import annotations

from .cursor import Cursor
from .model import Array, Table, Value
from .resolver import descend, resolve_table_path
from .scanner import (
    is_bare_key_byte,
    scan_bare_key,
    scan_basic_string,
    scan_boolean,
    scan_literal_string,
    scan_number,
    scan_string_value,
)


_NUMBER_START = (b"+", b"-", b".", b"n", b"i")


class Parser:
    """Single-use parser over one complete source buffer.

    Usage::

        table = Parser(b"[server]\\nport = 8080\\n", "app.toml").parse()
        table.get_as_table("server").get_as_integer("port")   # 8080
    """

    def __init__(self, data: bytes, source_name: str = "<string>") -> None:
        self.cursor = Cursor(data, source_name)

    # -- Driver ---------------------------------------------------------

    def parse(self) -> Table:
        """Parse the whole buffer and return the root table.

        The first error aborts the parse; the partially built tree is
        dropped with the exception and never returned.
        """
        cur = self.cursor
        root = Table()
        while not cur.at_end():
            ch = cur.peek()
            if ch.isspace():
                cur.advance()
            elif ch == b"#":
                cur.skip_comment()
            elif ch == b"[":
                cur.advance()
                self.parse_table(root)
            elif is_bare_key_byte(ch) or ch in (b'"', b"'"):
                self.parse_key_values(root)
            else:
                raise cur.error("unexpected token")
        return root

    # -- Keys -----------------------------------------------------------

    def parse_key(self) -> str:
        cur = self.cursor
        ch = cur.peek()
        if ch == b'"':
            cur.advance()
            return scan_basic_string(cur)
        if ch == b"'":
            cur.advance()
            return scan_literal_string(cur)
        key = scan_bare_key(cur)
        if not key:
            raise cur.error("unexpected token")
        return key

    def parse_key_path(self) -> list[str]:
        """Parse ``key(.key)*`` with optional spaces around the dots."""
        cur = self.cursor
        path = [self.parse_key()]
        cur.skip_spaces()
        while cur.peek() == b".":
            cur.advance()
            cur.skip_spaces()
            path.append(self.parse_key())
            cur.skip_spaces()
        return path

    def _assign(self, table: Table, path: list[str], value: Value) -> None:
        for key in path[:-1]:
            table = descend(table, key, self.cursor)
        table.set(path[-1], value)

    # -- Key/value lines ------------------------------------------------

    def _parse_assignment(self, table: Table, unterminated: str) -> None:
        """Parse ``key = value`` into *table*; the cursor is on the key."""
        cur = self.cursor
        path = self.parse_key_path()
        if cur.at_end():
            raise cur.error(unterminated)
        if cur.peek() != b"=":
            raise cur.error("expected '='")
        cur.advance()
        cur.skip_spaces()
        if cur.at_end():
            raise cur.error(unterminated)
        self._assign(table, path, self.parse_value())

    def parse_key_values(self, table: Table) -> None:
        """Consume ``key = value`` lines into *table* until a header or EOF."""
        cur = self.cursor
        while True:
            cur.skip_whitespace()
            ch = cur.peek()
            if not ch or ch == b"[":
                return
            if ch == b"#":
                cur.skip_comment()
                continue
            self._parse_assignment(table, "unterminated key value pair")
            self._expect_line_end()

    def _expect_line_end(self) -> None:
        """Allow trailing spaces and a comment, then require a newline."""
        cur = self.cursor
        cur.skip_spaces()
        if cur.peek() == b"#":
            cur.skip_comment()
        if cur.startswith(b"\r\n"):
            cur.advance(2)
        elif cur.peek() == b"\n":
            cur.advance()
        elif not cur.at_end():
            raise cur.error("new line expected")

    # -- Table headers --------------------------------------------------

    def parse_table(self, root: Table) -> Table:
        """Parse a header (the first ``[`` already consumed) and its body.

        Returns the table the header resolved to.
        """
        cur = self.cursor
        is_array = cur.peek() == b"["
        if is_array:
            cur.advance()

        cur.skip_spaces()
        path: list[str] = []
        if cur.peek() != b"]":
            path = self.parse_key_path()

        closing = b"]]" if is_array else b"]"
        if not cur.startswith(closing):
            if cur.at_end() or cur.peek() in (b"\n", b"\r"):
                raise cur.error("unterminated table header")
            if cur.peek() == b"]":
                raise cur.error("expected ']]'")
            raise cur.error("unexpected token")
        cur.advance(len(closing))

        if not path:
            raise cur.error("empty table name")

        table = resolve_table_path(root, path, cur, is_array=is_array)
        self._expect_line_end()
        self.parse_key_values(table)
        return table

    # -- Values ---------------------------------------------------------

    def parse_value(self) -> Value:
        cur = self.cursor
        ch = cur.peek()
        if ch in (b'"', b"'"):
            return scan_string_value(cur)
        if ch.isdigit() or ch in _NUMBER_START:
            return scan_number(cur)
        if ch in (b"t", b"f"):
            value = scan_boolean(cur)
            if value is None:
                raise cur.error("unexpected token")
            return value
        if ch == b"[":
            cur.advance()
            return self.parse_array()
        if ch == b"{":
            cur.advance()
            return self.parse_inline_table()
        raise cur.error("unexpected token")

    def _skip_array_filler(self) -> None:
        cur = self.cursor
        while True:
            cur.skip_whitespace()
            if cur.peek() != b"#":
                return
            cur.skip_comment()

    def parse_array(self) -> Array:
        """Parse array elements; the opening ``[`` is already consumed."""
        cur = self.cursor
        array = Array()
        while True:
            self._skip_array_filler()
            ch = cur.peek()
            if not ch:
                raise cur.error("unterminated array")
            if ch == b"]":
                cur.advance()
                return array

            array.append(self.parse_value())

            self._skip_array_filler()
            ch = cur.peek()
            if ch == b",":
                cur.advance()
            elif ch == b"]":
                cur.advance()
                return array
            elif not ch:
                raise cur.error("unterminated array")
            else:
                raise cur.error("expected ',' or ']'")

    def parse_inline_table(self) -> Table:
        """Parse ``{ k = v, ... }`` on one line; ``{`` is already consumed."""
        cur = self.cursor
        table = Table()
        cur.skip_spaces()
        if cur.peek() == b"}":
            cur.advance()
            return table

        while True:
            cur.skip_spaces()
            if cur.at_end():
                raise cur.error("unterminated inline table")
            self._parse_assignment(table, "unterminated inline table")

            cur.skip_spaces()
            ch = cur.peek()
            if ch == b",":
                cur.advance()
            elif ch == b"}":
                cur.advance()
                return table
            elif not ch:
                raise cur.error("unterminated inline table")
            else:
                raise cur.error("expected ',' or '}'")


def parse(data: bytes, source_name: str = "<string>") -> Table:
    """Parse a complete UTF-8 byte buffer into its root :class:`Table`."""
    return Parser(data, source_name).parse()
