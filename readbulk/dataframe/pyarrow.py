"""
PyArrow backend.

Default backend, no extra dependencies. The merge itself works on
PyArrow Tables, so conversion is a no-op.
"""

from __future__ import annotations

from typing import Any

import pyarrow as pa


def from_arrow(arrow_table: pa.Table) -> pa.Table:
    """Return the table unchanged."""
    return arrow_table


def is_arrow(obj: Any) -> bool:
    return isinstance(obj, (pa.Table, pa.RecordBatch))


def is_records(obj: Any) -> bool:
    """True for a list of row dicts or a dict of columns."""
    if isinstance(obj, dict):
        return True
    if isinstance(obj, (list, tuple)):
        return all(isinstance(row, dict) for row in obj)
    return False


def to_arrow(obj: Any) -> pa.Table:
    """
    Convert pyarrow objects and plain Python records to a Table.

    Row dicts may have differing keys; missing keys become nulls, with
    columns in order of first appearance.
    """
    if isinstance(obj, pa.Table):
        return obj
    if isinstance(obj, pa.RecordBatch):
        return pa.Table.from_batches([obj])
    if isinstance(obj, dict):
        return pa.table(obj)

    rows = list(obj)
    columns: dict[str, None] = {}
    for row in rows:
        for key in row:
            columns.setdefault(key, None)

    if not columns:
        return pa.table({})

    return pa.Table.from_pylist(rows, schema=_infer_schema(rows, list(columns)))


def _infer_schema(rows: list[dict], columns: list[str]) -> pa.Schema:
    """Infer one type per column from the values present."""
    fields = []
    for name in columns:
        values = [row.get(name) for row in rows]
        fields.append(pa.field(name, pa.array(values).type))
    return pa.schema(fields)
