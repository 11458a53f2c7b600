"""Loaders: buffer a whole source, then hand it to the parser."""

from __future__ import annotations

import logging
import os
from typing import IO

from .errors import TomlMemoryError, TomlOSError
from .model import Table
from .parser import Parser

logger = logging.getLogger(__name__)


def loads(text: str | bytes, source_name: str = "<string>") -> Table:
    """Parse a complete document held in memory.

    *text* may be ``str`` (encoded as UTF-8) or already-encoded bytes.
    *source_name* only appears in error messages.
    """
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    logger.debug("parsing %s (%d bytes)", source_name, len(data))
    try:
        table = Parser(data, source_name).parse()
    except MemoryError:
        raise TomlMemoryError("out of memory", source_name=source_name) from None
    logger.debug("parsed %s: %d top-level keys", source_name, len(table))
    return table


def load(fp: IO, source_name: str | None = None) -> Table:
    """Read *fp* (text or binary) to the end and parse it."""
    if source_name is None:
        name = getattr(fp, "name", None)
        source_name = name if isinstance(name, str) else "<stream>"
    try:
        data = fp.read()
    except OSError as exc:
        raise TomlOSError(
            f"Error when reading {source_name} [errno {exc.errno}: {exc.strerror}]"
        ) from exc
    return loads(data, source_name)


def load_file(path: str | os.PathLike) -> Table:
    """Open *path* and parse its contents."""
    filename = os.fspath(path)
    try:
        with open(filename, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        raise TomlOSError(
            f"Cannot open file {filename} [errno {exc.errno}: {exc.strerror}]"
        ) from exc
    return loads(data, filename)
