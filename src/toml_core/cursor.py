"""Byte cursor over an immutable source buffer."""

from __future__ import annotations

from .errors import ErrorKind, TomlError, TomlSyntaxError, TomlUnicodeError


_ERRORS: dict[ErrorKind, type[TomlError]] = {
    ErrorKind.SYNTAX: TomlSyntaxError,
    ErrorKind.UNICODE: TomlUnicodeError,
}


class Cursor:
    """Tracks position, line and column while consuming *data* byte by byte.

    ``peek()`` returns a one-byte ``bytes`` slice, or ``b""`` at the end of
    input, so callers can compare against byte literals directly.
    """

    __slots__ = ("data", "source_name", "pos", "line", "column")

    def __init__(self, data: bytes, source_name: str = "<string>") -> None:
        self.data = data
        self.source_name = source_name
        self.pos = 0
        self.line = 1
        self.column = 1

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def peek(self, offset: int = 0) -> bytes:
        i = self.pos + offset
        return self.data[i:i + 1]

    def startswith(self, prefix: bytes) -> bool:
        return self.data.startswith(prefix, self.pos)

    def advance(self, n: int = 1) -> None:
        for _ in range(n):
            if self.pos >= len(self.data):
                return
            if self.data[self.pos] == 0x0A:
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    # -- Skipping -------------------------------------------------------

    def skip_spaces(self) -> None:
        """Skip spaces and tabs."""
        while self.peek() in (b" ", b"\t"):
            self.advance()

    def skip_whitespace(self) -> None:
        """Skip any ASCII whitespace, newlines included."""
        while not self.at_end() and self.peek().isspace():
            self.advance()

    def skip_comment(self) -> None:
        """Skip from ``#`` up to (not including) the next newline."""
        while not self.at_end() and self.peek() != b"\n":
            self.advance()

    # -- Diagnostics ----------------------------------------------------

    def error(
        self, description: str, kind: ErrorKind = ErrorKind.SYNTAX
    ) -> TomlError:
        """Build an error located at the current line and column."""
        cls = _ERRORS.get(kind, TomlError)
        return cls(
            description,
            source_name=self.source_name,
            line=self.line,
            column=self.column,
        )
