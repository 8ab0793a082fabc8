"""
Column set resolution.

Handles three column modes:
- union: Keep all columns, fill missing with null (DEFAULT)
- intersection: Keep only common columns
- strict: Fail if columns differ
"""

import warnings

from readbulk._constants import COLUMN_MODES
from readbulk._exceptions import (
    ColumnModeWarning,
    InvalidArgumentError,
    ReadBulkSchemaError,
)
from readbulk._logging import get_logger

logger = get_logger(__name__)


def validate_column_mode(mode: str) -> None:
    """Raise InvalidArgumentError for unknown column modes."""
    if mode not in COLUMN_MODES:
        raise InvalidArgumentError(
            f"Invalid column_mode: '{mode}'\n"
            f"Valid options: 'union' (default), 'intersection', 'strict'"
        )


def resolve_columns(column_lists: list[list[str]], mode: str = "union") -> list[str]:
    """
    Compute the output column list for a sequence of tables.

    Args:
        column_lists: Column names of each table, in table order
        mode: Column handling strategy:
            - "union": every column, ordered by first appearance (DEFAULT)
            - "intersection": columns present in every table
            - "strict": fail if column sets differ

    Returns:
        Ordered list of output columns

    Raises:
        InvalidArgumentError: If invalid column mode specified
        ReadBulkSchemaError: On duplicate column names or strict mode violations
    """
    validate_column_mode(mode)
    _check_duplicates(column_lists)

    all_cols = union_columns(column_lists)

    # Tables without any columns (empty files) take no part in comparisons
    populated = [cols for cols in column_lists if cols]

    if mode == "union":
        return all_cols

    common_cols = common_columns(populated)

    if mode == "strict":
        _handle_strict_mode(populated, common_cols, all_cols)
        return common_cols

    _handle_intersection_mode(populated, common_cols, all_cols)
    return common_cols


def union_columns(column_lists: list[list[str]]) -> list[str]:
    """Ordered union: each column at the position of its first appearance."""
    seen: dict[str, None] = {}
    for col_list in column_lists:
        for col in col_list:
            seen.setdefault(col, None)
    return list(seen)


def common_columns(column_lists: list[list[str]]) -> list[str]:
    """Columns present in every list, in the order of the first list."""
    if not column_lists:
        return []

    common_cols = column_lists[0][:]
    for col_list in column_lists[1:]:
        common_cols = [c for c in common_cols if c in col_list]
    return common_cols


def _check_duplicates(column_lists: list[list[str]]) -> None:
    for i, cols in enumerate(column_lists):
        if len(set(cols)) != len(cols):
            duplicated = sorted({c for c in cols if cols.count(c) > 1})
            raise ReadBulkSchemaError(
                f"Table {i} has duplicate column names: {duplicated}\n"
                f"Columns must be unique within a table to be merged by name."
            )


def _handle_strict_mode(
    column_lists: list[list[str]],
    common_cols: list[str],
    all_cols: list[str],
) -> None:
    """Validate columns in strict mode and raise error if mismatched."""
    if len({frozenset(cols) for cols in column_lists}) <= 1:
        return

    per_table = [f"  Table {i}: {sorted(cols)}" for i, cols in enumerate(column_lists)]

    raise ReadBulkSchemaError(
        f"Cannot merge in strict mode: column mismatch\n"
        f"\n"
        f"Columns per table:\n" + "\n".join(per_table) + "\n"
        f"\n"
        f"Only in some tables: {sorted(set(all_cols) - set(common_cols))}\n"
        f"Common to all: {sorted(common_cols)}\n"
        f"\n"
        f"Use column_mode='union' (default) to fill missing columns with null."
    )


def _handle_intersection_mode(
    column_lists: list[list[str]],
    common_cols: list[str],
    all_cols: list[str],
) -> None:
    """Warn about dropped columns in intersection mode."""
    dropped = [c for c in all_cols if c not in common_cols]
    if not dropped:
        return

    details = []
    for col in dropped:
        sources = [i for i, cols in enumerate(column_lists) if col in cols]
        details.append(f"  - '{col}' (only in table(s) {sources})")

    logger.debug(f"Intersection dropped {len(dropped)} column(s)")

    warnings.warn(
        f"\n"
        f"merge dropped {len(dropped)} column(s)\n"
        f"\n"
        f"Reason: Using column_mode='intersection'\n"
        f"        Only columns present in ALL tables are kept.\n"
        f"\n"
        f"Dropped columns:\n" + "\n".join(details) + "\n"
        f"\n"
        f"Kept columns ({len(common_cols)}): {common_cols}",
        ColumnModeWarning,
        stacklevel=4,
    )
