"""``toml-core`` command: parse documents and print them.

Also usable as ``python -m toml_core.cli``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, Sequence

from .errors import ErrorKind, TomlError
from .loader import load, load_file
from .model import Array, Table, Value, VDateTime, VString

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

_QUOTE_ESCAPES = str.maketrans({
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
})


def _quote(text: str) -> str:
    return '"' + text.translate(_QUOTE_ESCAPES) + '"'


def _fmt_inline(value: Value) -> str:
    """Format a value on a single line."""
    if isinstance(value, Table):
        pairs = (f"{_quote(k)}: {_fmt_inline(v)}" for k, v in value.items())
        return "{" + ", ".join(pairs) + "}"
    if isinstance(value, Array):
        return "[" + ", ".join(_fmt_inline(v) for v in value) + "]"
    if isinstance(value, VString):
        return _quote(value.value)
    return str(value)


def _fmt_inspect(value: Value, indent: int = 0) -> str:
    """Pretty-print a value, one key or element per line."""
    pad = "  " * indent
    if isinstance(value, Table):
        if not len(value):
            return "Table {}"
        width = max(len(k) for k in value)
        lines = ["Table {"]
        for k, v in value.items():
            lines.append(f"{pad}  {k:<{width}} : {_fmt_inspect(v, indent + 1)}")
        lines.append(f"{pad}}}")
        return "\n".join(lines)

    if isinstance(value, Array):
        if not len(value):
            return "Array []"
        lines = ["Array ["]
        for i, v in enumerate(value):
            lines.append(f"{pad}  {i}: {_fmt_inspect(v, indent + 1)}")
        lines.append(f"{pad}]")
        return "\n".join(lines)

    if isinstance(value, VDateTime):
        return f"DateTime({value})"

    return _fmt_inline(value)


# ---------------------------------------------------------------------------
# Per-source processing
# ---------------------------------------------------------------------------

def _process_source(path: str, dest: IO[str], inspect: bool = False) -> ErrorKind:
    """Parse *path* (``-`` for stdin) and print it to *dest*."""
    try:
        if path == "-":
            table = load(sys.stdin.buffer, "<stdin>")
        else:
            table = load_file(path)
    except TomlError as exc:
        logger.debug("failed to parse %s: %r", path, exc)
        print(exc.message, file=sys.stderr)
        return exc.kind

    if inspect:
        print(_fmt_inspect(table), file=dest)
    else:
        print(_fmt_inline(table), file=dest)
    return ErrorKind.OK


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toml-core",
        description="Parse TOML documents and print the resulting tables.",
    )
    parser.add_argument("files", nargs="+", metavar="FILE",
                        help="document to parse ('-' reads stdin)")
    parser.add_argument("-i", "--inspect", action="store_true",
                        help="indented, one entry per line output")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; the exit code is the kind of the last failure."""
    args = _build_arg_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    rc = ErrorKind.OK
    for path in args.files:
        kind = _process_source(path, sys.stdout, inspect=args.inspect)
        if kind is not ErrorKind.OK:
            rc = kind
    return int(rc)


if __name__ == "__main__":
    sys.exit(main())
