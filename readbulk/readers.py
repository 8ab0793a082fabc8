"""
Default parsing functions.

Any callable taking a path as its first argument and returning a table
can be passed to read_bulk(fun=...). These are the built-in ones, backed
by pyarrow and fsspec so that paths may also be remote URLs
(s3://, gs://, memory://, ...).
"""

from typing import Any, Optional

import fsspec
import pyarrow as pa
import pyarrow.csv as pv
import pyarrow.parquet as pq

from readbulk._constants import DEFAULT_DELIMITER, DEFAULT_ENCODING, TAB_DELIMITER


def read_csv(
    path: str,
    delimiter: str = DEFAULT_DELIMITER,
    header: bool = True,
    column_names: Optional[list[str]] = None,
    skip_rows: int = 0,
    encoding: str = DEFAULT_ENCODING,
    quote_char: str = '"',
    null_values: Optional[list[str]] = None,
    column_types: Optional[dict[str, Any]] = None,
    storage_options: Optional[dict[str, Any]] = None,
) -> pa.Table:
    """
    Read a delimited text file with a header row.

    Args:
        path: Local path or fsspec URL
        delimiter: Field separator
        header: First row holds column names. If False and no column_names
            are given, columns are named f0, f1, ...
        column_names: Explicit column names (the header row, if any, is
            then read as data unless skip_rows skips it)
        skip_rows: Rows to skip before the header
        encoding: Text encoding of the file
        quote_char: Quoting character
        null_values: Strings read as null (pyarrow defaults when None)
        column_types: Column name -> Arrow type overrides
        storage_options: Passed to fsspec

    Returns:
        pyarrow.Table

    Raises:
        pyarrow.ArrowInvalid: Malformed or empty file
        FileNotFoundError: Missing file
    """
    read_options = pv.ReadOptions(
        column_names=column_names,
        autogenerate_column_names=not header and column_names is None,
        skip_rows=skip_rows,
        encoding=encoding,
    )
    parse_options = pv.ParseOptions(delimiter=delimiter, quote_char=quote_char)

    convert_kwargs: dict[str, Any] = {}
    if null_values is not None:
        convert_kwargs["null_values"] = null_values
    if column_types is not None:
        convert_kwargs["column_types"] = column_types
    convert_options = pv.ConvertOptions(**convert_kwargs)

    fs, fs_path = fsspec.core.url_to_fs(str(path), **(storage_options or {}))
    with fs.open(fs_path, "rb") as f:
        return pv.read_csv(
            f,
            read_options=read_options,
            parse_options=parse_options,
            convert_options=convert_options,
        )


def read_delim(path: str, **kwargs) -> pa.Table:
    """Read a tab separated file. Accepts the same options as read_csv()."""
    kwargs.setdefault("delimiter", TAB_DELIMITER)
    return read_csv(path, **kwargs)


def read_parquet(
    path: str,
    columns: Optional[list[str]] = None,
    storage_options: Optional[dict[str, Any]] = None,
) -> pa.Table:
    """Read a Parquet file, optionally only some columns."""
    fs, fs_path = fsspec.core.url_to_fs(str(path), **(storage_options or {}))
    with fs.open(fs_path, "rb") as f:
        return pq.read_table(f, columns=columns)
