"""Row view of a node and its conversion back to editable text.

The graph view shows each node as a list of rows (key, value, type).
Container fields appear as their own nodes elsewhere in the graph, so
the editable text of a node keeps only its scalar fields.

Example:
    >>> from jsonsplice.rows import NodeRow, normalize_rows
    >>> print(normalize_rows([NodeRow("x", 1, "number"), NodeRow("y", [1, 2], "array")]))
    {
      "x": 1
    }

Thread Safety:
    NodeRow is frozen; all functions are pure.

"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from jsonsplice.config import PatchConfig, resolve_config

CONTAINER_TYPES: frozenset[str] = frozenset({"object", "array"})


@dataclass(frozen=True, slots=True)
class NodeRow:
    """One displayed row of a node.

    Attributes:
        key: Field name, or None for a bare value (array item, leaf node)
        value: The field's value
        type: One of string, number, boolean, null, object, array

    """

    key: str | None
    value: Any
    type: str


def type_name(value: Any) -> str:
    """Return the row type for a Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool):  # before int
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return "unknown"


def bare_text(value: Any) -> str:
    """Text form of a value on its own: strings unquoted, the rest as JSON.

    Integral floats drop their fraction, so ``1.0`` reads ``1``.

    """
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return json.dumps(value, ensure_ascii=False)


def normalize_rows(
    rows: Iterable[NodeRow | Mapping[str, Any]] | None,
    *,
    config: PatchConfig | None = None,
) -> str:
    """Turn a node's rows into the text shown in the editor.

    - No rows gives ``{}``.
    - A single keyless row gives the bare text of its value.
    - Otherwise the keyed scalar rows become a pretty-printed object;
      container rows and keyless rows are skipped, later keys win.

    Never raises: rows that are not NodeRow or a mapping are ignored.

    """
    items = [row for row in (_coerce(r) for r in rows or ()) if row is not None]
    if not items:
        return "{}"
    if len(items) == 1 and not items[0].key:
        return bare_text(items[0].value)

    config = resolve_config(config)
    fields: dict[str, Any] = {}
    for row in items:
        if row.type in CONTAINER_TYPES or not row.key:
            continue
        fields[row.key] = row.value
    return json.dumps(fields, indent=config.dumps_indent, ensure_ascii=config.ensure_ascii)


def rows_from_value(value: Any) -> list[NodeRow]:
    """Derive the rows the graph view shows for a node's value.

    Objects give one keyed row per field and arrays one keyless row per
    item; a scalar gives a single keyless row.

    """
    if isinstance(value, dict):
        return [NodeRow(key, field, type_name(field)) for key, field in value.items()]
    if isinstance(value, list):
        return [NodeRow(None, item, type_name(item)) for item in value]
    return [NodeRow(None, value, type_name(value))]


def _coerce(row: Any) -> NodeRow | None:
    if isinstance(row, NodeRow):
        return row
    if isinstance(row, Mapping) and "value" in row:
        key = row.get("key")
        return NodeRow(
            key=key if isinstance(key, str) else None,
            value=row["value"],
            type=str(row.get("type", type_name(row["value"]))),
        )
    return None
