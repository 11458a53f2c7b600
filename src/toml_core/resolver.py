"""Table-path resolution for ``[a.b.c]`` and ``[[a.b.c]]`` headers."""

from __future__ import annotations

from .cursor import Cursor
from .model import Array, Table


def descend(table: Table, key: str, cur: Cursor) -> Table:
    """Return the table under *key*, creating an empty one if absent.

    An array under *key* resolves to its last element, so a header can
    reach into the most recently opened array-of-tables entry.
    """
    value = table.get(key)
    if value is None:
        child = Table()
        table.set(key, child)
        return child
    if isinstance(value, Table):
        return value
    if isinstance(value, Array) and value.items and isinstance(value.items[-1], Table):
        return value.items[-1]
    raise cur.error(f"this key was not a table: {key!r}")


def resolve_table_path(
    root: Table, path: list[str], cur: Cursor, *, is_array: bool = False
) -> Table:
    """Walk (and grow) the document along *path*.

    For a regular header every segment is created or descended into. For an
    array-of-tables header the last segment names an array that receives a
    fresh table. Either way the returned table is the one that subsequent
    key/value lines write into.
    """
    if not path:
        raise cur.error("empty table name")

    table = root
    for key in path[:-1] if is_array else path:
        table = descend(table, key, cur)

    if not is_array:
        return table

    key = path[-1]
    value = table.get(key)
    entry = Table()
    if value is None:
        table.set(key, Array([entry]))
    elif isinstance(value, Array):
        value.append(entry)
    else:
        raise cur.error(f"this key was not an array: {key!r}")
    return entry
