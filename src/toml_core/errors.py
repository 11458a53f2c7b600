"""Error kinds and exceptions raised by TOML Core."""

from __future__ import annotations

from enum import IntEnum


class ErrorKind(IntEnum):
    """Error discriminant. The numeric values double as CLI exit codes."""

    OK = 0
    ERR = 1
    OS = 2
    NOMEM = 3
    SYNTAX = 4
    UNICODE = 5


class TomlError(Exception):
    """Base class for every error surfaced by TOML Core."""

    kind: ErrorKind = ErrorKind.ERR

    def __init__(
        self,
        description: str,
        *,
        source_name: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.description = description
        self.source_name = source_name
        self.line = line
        self.column = column
        super().__init__(self.message)

    @property
    def located(self) -> bool:
        return self.line is not None and self.column is not None

    @property
    def message(self) -> str:
        """``<source>:<line>:<column>: <description>`` for located errors."""
        if self.located:
            source = self.source_name or "<string>"
            return f"{source}:{self.line}:{self.column}: {self.description}"
        return self.description

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.name}, {self.message!r})"


class TomlSyntaxError(TomlError):
    """Any grammatical violation in the source."""

    kind = ErrorKind.SYNTAX


class TomlUnicodeError(TomlSyntaxError):
    """Malformed or out-of-range ``\\u`` / ``\\U`` escape."""

    kind = ErrorKind.UNICODE


class TomlOSError(TomlError):
    """The source could not be opened or read."""

    kind = ErrorKind.OS


class TomlMemoryError(TomlError):
    kind = ErrorKind.NOMEM


class TomlTypeError(TomlError, TypeError):
    """A typed accessor found a value of another variant."""

    kind = ErrorKind.ERR
