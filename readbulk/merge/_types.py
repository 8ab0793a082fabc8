"""
Per-column type unification.

A column may be numeric in one file and text in another. Each output column
gets exactly one Arrow type:

- null-typed columns (zero-row or all-missing data) do not vote
- identical types are kept as they are
- otherwise pyarrow's permissive promotion is tried (int64 + double -> double)
- if no promotion exists the column falls back to string

String is absorbing, so unifying hierarchically (per subdirectory, then
across subdirectories) gives the same type as unifying all files at once.
"""

import pyarrow as pa
import pyarrow.compute as pc

from readbulk._logging import get_logger

logger = get_logger(__name__)

FALLBACK_TYPE = pa.string()

_PROMOTION_ERRORS = (pa.ArrowInvalid, pa.ArrowTypeError, pa.ArrowNotImplementedError)


def unify_types(types: list[pa.DataType]) -> pa.DataType:
    """Pick one type able to hold every value of every input type."""
    voting = [t for t in types if not pa.types.is_null(t)]
    if not voting:
        return pa.null()

    result = voting[0]
    for other in voting[1:]:
        result = promote(result, other)
    return result


def promote(left: pa.DataType, right: pa.DataType) -> pa.DataType:
    """Common type of two types, falling back to string."""
    if left.equals(right):
        return left

    try:
        unified = pa.unify_schemas(
            [pa.schema([("value", left)]), pa.schema([("value", right)])],
            promote_options="permissive",
        )
    except _PROMOTION_ERRORS:
        logger.debug(f"No common type for {left} and {right}, using {FALLBACK_TYPE}")
        return FALLBACK_TYPE

    return unified.field("value").type


def unify_column_types(tables: list[pa.Table], columns: list[str]) -> dict[str, pa.DataType]:
    """
    Resolve the output type of each column.

    Args:
        tables: Tables being merged
        columns: Output columns (from resolve_columns)

    Returns:
        Dict mapping column name -> Arrow type
    """
    observed: dict[str, list[pa.DataType]] = {col: [] for col in columns}

    for table in tables:
        for field in table.schema:
            if field.name in observed:
                observed[field.name].append(field.type)

    return {col: unify_types(types) for col, types in observed.items()}


def cast_column(column: pa.ChunkedArray, target: pa.DataType) -> pa.ChunkedArray:
    """
    Cast a column to its unified type.

    Values without a native cast to string (lists, structs) are converted
    through their Python representation.
    """
    if column.type.equals(target):
        return column

    try:
        return pc.cast(column, target)
    except _PROMOTION_ERRORS:
        if not (pa.types.is_string(target) or pa.types.is_large_string(target)):
            raise

    values = [None if v is None else str(v) for v in column.to_pylist()]
    return pa.chunked_array([pa.array(values, type=target)], type=target)
