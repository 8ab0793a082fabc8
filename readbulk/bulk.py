"""
Read and merge many data files into one table.

Main entry point. Discovers files, parses each one, merges per
subdirectory, then across subdirectories, then onto any prior data.
"""

import os
import warnings
from typing import Any, Optional, Union

import pyarrow as pa

from readbulk._constants import (
    DEFAULT_COLLISION_MODE,
    DEFAULT_COLUMN_MODE,
    MSG_EMPTY_RESULT,
)
from readbulk._exceptions import EmptyResultWarning
from readbulk._logging import get_logger
from readbulk._options import parse_options
from readbulk.dataframe import as_arrow, create_dataframe, validate_backend
from readbulk.discover import SubdirectorySpec, iter_file_groups
from readbulk.loader import Parser, load_file
from readbulk.merge import merge_tables
from readbulk.readers import read_csv

logger = get_logger(__name__)


def read_bulk(
    directory: Union[str, os.PathLike] = ".",
    subdirectories: SubdirectorySpec = False,
    name_contains: Optional[str] = None,
    name_filter: Optional[str] = None,
    extension: Optional[str] = None,
    data: Any = None,
    verbose: bool = True,
    fun: Parser = read_csv,
    *,
    column_mode: str = DEFAULT_COLUMN_MODE,
    on_collision: str = DEFAULT_COLLISION_MODE,
    backend: Optional[str] = None,
    storage_options: Optional[dict[str, Any]] = None,
    **kwargs,
):
    """
    Read and combine multiple data files.

    Each file is parsed with `fun`, tagged with a File column (and a
    Subdirectory column in subdirectory mode), and all files are merged
    into one table. Columns missing from a file are filled with null, so
    files with differing columns can be combined without preparation.

    Args:
        directory: Folder holding the raw data, local path or fsspec URL.
            Defaults to the current working directory.
        subdirectories: False (default) if files are directly inside
            directory, True if they are in folders within directory, or
            the names of the folders to read (in that order).
        name_contains: Only read files whose name contains this string
        name_filter: Only read files whose name matches this regular expression
        extension: Only read files whose name ends with this string (e.g. ".csv")
        data: Table the new data is appended to (prior rows come first)
        verbose: Log progress ("Reading <file>") at INFO level
        fun: Parsing function, called as fun(path, **kwargs).
            Defaults to readbulk.readers.read_csv.
        column_mode: "union" (default), "intersection" or "strict"
        on_collision: "overwrite" (default) or "error" when parsed data
            already has a File/Subdirectory column
        backend: Output DataFrame backend ('pyarrow', 'pandas', 'polars').
            If None, uses global backend set by readbulk.use()
        storage_options: fsspec options used to list directories. Also
            passed to fun as storage_options when given, so the default
            readers open remote files with the same credentials.
        **kwargs: Passed on to fun

    Returns:
        Merged table (pyarrow.Table, pandas.DataFrame or polars.DataFrame)

    Raises:
        InvalidArgumentError: Invalid option, raised before any I/O
        ReadBulkBackendError: Backend unknown or not installed
        Exception: Anything raised by fun propagates and aborts the batch

    Examples:
        # Merge all files in the folder "raw_data"
        raw_data = read_bulk("raw_data")

        # Only files with extension ".csv"
        raw_data = read_bulk("raw_data", extension=".csv")

        # Files stored in separate folders within "raw_data"
        raw_data = read_bulk("raw_data", subdirectories=True)

        # Only the folders "Session1" and "Session2"
        raw_data = read_bulk("raw_data", subdirectories=["Session1", "Session2"])

        # Tab separated files, with a parser option
        raw_data = read_bulk("raw_data", fun=read_delim, null_values=["NA"])
    """
    from readbulk import _DATAFRAME_BACKEND

    options = parse_options(
        directory=directory,
        subdirectories=subdirectories,
        name_contains=name_contains,
        name_filter=name_filter,
        extension=extension,
        verbose=verbose,
        fun=fun,
        column_mode=column_mode,
        on_collision=on_collision,
        backend=backend,
        storage_options=storage_options,
    )
    output_backend = options.backend or _DATAFRAME_BACKEND
    validate_backend(output_backend)

    groups = iter_file_groups(
        options.directory,
        options.subdirectories,
        name_contains=options.name_contains,
        name_filter=options.name_filter,
        extension=options.extension,
        verbose=options.verbose,
        storage_options=options.storage_options,
    )

    if options.storage_options is not None:
        kwargs["storage_options"] = options.storage_options

    tag_subdirectory = options.subdirectories is not False

    subdirectory_tables = []
    for group in groups:
        file_tables = []
        for file, path in zip(group.files, group.paths):
            table = load_file(
                path,
                options.fun,
                file_name=file,
                subdirectory=group.subdirectory if tag_subdirectory else None,
                verbose=options.verbose,
                on_collision=options.on_collision,
                stacklevel=3,
                **kwargs,
            )
            file_tables.append(table)
        subdirectory_tables.append(merge_tables(file_tables, column_mode=options.column_mode))

    batch = merge_tables(subdirectory_tables, column_mode=options.column_mode)
    result = combine_with_prior(batch, data, column_mode=options.column_mode)

    logger.debug(f"Merged {result.num_rows} rows, {result.num_columns} columns")

    if result.num_rows == 0:
        warnings.warn(MSG_EMPTY_RESULT, EmptyResultWarning, stacklevel=2)

    return create_dataframe(output_backend, result)


def combine_with_prior(
    batch: pa.Table, data: Any = None, column_mode: str = DEFAULT_COLUMN_MODE
) -> pa.Table:
    """
    Append a newly merged batch to previously merged data.

    Prior rows come first. Without prior data the batch is returned unchanged.
    """
    if data is None:
        return batch

    prior = as_arrow(data, source="prior data")
    logger.debug(f"Combining {prior.num_rows} prior rows with {batch.num_rows} new rows")
    return merge_tables([prior, batch], column_mode=column_mode)
