"""
Main merge orchestrator.

Coordinates the 3-phase merge:
1. Resolution: Output column list from all inputs
2. Typing: One Arrow type per output column
3. Construction: Align each table to the output schema, concatenate
"""

from typing import Any, Iterable

import pyarrow as pa

from readbulk._constants import DEFAULT_COLUMN_MODE
from readbulk._logging import get_logger
from readbulk.dataframe import as_arrow
from readbulk.merge._columns import resolve_columns, validate_column_mode
from readbulk.merge._types import cast_column, unify_column_types

logger = get_logger(__name__)


def merge_tables(tables: Iterable[Any], column_mode: str = DEFAULT_COLUMN_MODE) -> pa.Table:
    """
    Merge an ordered sequence of tables into one table.

    The output columns are the ordered union of all input columns (first
    appearance wins the position). Rows are concatenated in input order and
    padded with null wherever their table lacks a column.

    Args:
        tables: Tables to merge (pyarrow, pandas, polars, row dicts)
        column_mode: Column handling strategy (default "union")
            - "union": Keep all columns, fill missing with null
            - "intersection": Keep only columns present in every table
            - "strict": Fail if columns differ

    Returns:
        pyarrow.Table with merged rows

    Raises:
        InvalidArgumentError: If column_mode is unknown
        ReadBulkSchemaError: Duplicate column names, strict mode mismatch
        ReadBulkTypeError: If an input is not table shaped

    Example:
        >>> t1 = pa.table({"A": [1, 2], "B": ["x", "y"]})
        >>> t2 = pa.table({"B": ["z"], "C": [True]})
        >>> merge_tables([t1, t2]).column_names
        ['A', 'B', 'C']
    """
    validate_column_mode(column_mode)

    arrow_tables = [as_arrow(t, source=f"table {i}") for i, t in enumerate(tables)]
    if not arrow_tables:
        return pa.table({})

    columns = resolve_columns([t.column_names for t in arrow_tables], mode=column_mode)
    types = unify_column_types(arrow_tables, columns)
    schema = pa.schema([pa.field(col, types[col]) for col in columns])

    logger.debug(
        f"Merging {len(arrow_tables)} tables into {len(columns)} columns "
        f"(mode={column_mode})"
    )

    aligned = [align_table(t, schema) for t in arrow_tables]
    return pa.concat_tables(aligned)


def align_table(table: pa.Table, schema: pa.Schema) -> pa.Table:
    """
    Reshape a table to a target schema.

    Existing columns are cast to the target type, missing columns become
    all-null columns, columns not in the schema are dropped.
    """
    arrays = []
    for field in schema:
        if field.name in table.column_names:
            arrays.append(cast_column(table.column(field.name), field.type))
        else:
            arrays.append(
                pa.chunked_array([pa.nulls(table.num_rows, type=field.type)], type=field.type)
            )

    return pa.Table.from_arrays(arrays, schema=schema)
