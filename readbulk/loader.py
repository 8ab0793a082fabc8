"""
Load single files and tag them with provenance.

Parser errors are never caught here: a file that cannot be parsed aborts
the whole batch instead of being silently dropped.
"""

import warnings
from typing import Any, Callable, Optional

import pyarrow as pa

from readbulk._constants import (
    COLUMN_FILE,
    COLUMN_SUBDIRECTORY,
    DEFAULT_COLLISION_MODE,
    MSG_EMPTY_FILE,
    MSG_READING,
)
from readbulk._exceptions import EmptyTableWarning, ProvenanceCollisionError
from readbulk._logging import get_logger
from readbulk.dataframe import as_arrow

logger = get_logger(__name__)

Parser = Callable[..., Any]


def load_file(
    path: str,
    fun: Parser,
    *,
    file_name: str,
    subdirectory: Optional[str] = None,
    verbose: bool = True,
    on_collision: str = DEFAULT_COLLISION_MODE,
    stacklevel: int = 2,
    **kwargs,
) -> pa.Table:
    """
    Parse one file and add provenance columns.

    Args:
        path: Full path handed to the parsing function
        fun: Parsing function, called as fun(path, **kwargs)
        file_name: Value of the File column
        subdirectory: Value of the Subdirectory column; None when
            subdirectory mode is off (no column is added)
        verbose: Log a progress message before parsing
        on_collision: "overwrite" or "error" for pre-existing provenance columns
        stacklevel: warnings.warn stacklevel of the zero-row warning
        **kwargs: Forwarded verbatim to fun

    Returns:
        Parsed table. Zero-row tables are returned untagged, with a warning.

    Raises:
        ProvenanceCollisionError: on_collision="error" and a clash was found
        ReadBulkTypeError: fun returned something that is not table shaped
    """
    if verbose:
        logger.info(MSG_READING.format(file_name))

    table = as_arrow(fun(path, **kwargs), source=f"parser result for '{file_name}'")

    if table.num_rows == 0:
        warnings.warn(
            MSG_EMPTY_FILE.format(file_name), EmptyTableWarning, stacklevel=stacklevel
        )
        return table

    return add_provenance(
        table, file_name, subdirectory=subdirectory, on_collision=on_collision
    )


def add_provenance(
    table: pa.Table,
    file_name: str,
    subdirectory: Optional[str] = None,
    on_collision: str = DEFAULT_COLLISION_MODE,
) -> pa.Table:
    """
    Add Subdirectory (if given) and File as constant string columns.

    New columns are appended in that order. A column that already exists is
    replaced in place when on_collision="overwrite".
    """
    provenance = []
    if subdirectory is not None:
        provenance.append((COLUMN_SUBDIRECTORY, subdirectory))
    provenance.append((COLUMN_FILE, file_name))

    for name, value in provenance:
        table = _set_constant_column(table, name, value, file_name, on_collision)

    return table


def _set_constant_column(
    table: pa.Table, name: str, value: str, file_name: str, on_collision: str
) -> pa.Table:
    column = pa.array([value] * table.num_rows, type=pa.string())
    index = table.schema.get_field_index(name)

    if index == -1:
        return table.append_column(pa.field(name, pa.string()), column)

    if on_collision == "error":
        raise ProvenanceCollisionError(
            f"File {file_name} already has a '{name}' column.\n"
            f"Rename it in the parsing function, or use on_collision='overwrite' "
            f"to replace it with provenance values."
        )

    logger.debug(f"Overwriting existing '{name}' column of {file_name}")
    return table.set_column(index, pa.field(name, pa.string()), column)
