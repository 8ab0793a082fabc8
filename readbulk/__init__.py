import importlib.metadata as _metadata

from readbulk._constants import DEFAULT_DATAFRAME_BACKEND, DataFrameBackend
from readbulk._exceptions import (
    ColumnModeWarning,
    EmptyResultWarning,
    EmptyTableWarning,
    InvalidArgumentError,
    ProvenanceCollisionError,
    ReadBulkBackendError,
    ReadBulkError,
    ReadBulkSchemaError,
    ReadBulkTypeError,
    ReadBulkWarning,
)
from readbulk._logging import set_verbosity
from readbulk.bulk import combine_with_prior, read_bulk
from readbulk.merge import merge_tables
from readbulk.readers import read_csv, read_delim, read_parquet

__version__ = _metadata.version("readbulk")

# Global DataFrame backend configuration
_DATAFRAME_BACKEND: DataFrameBackend = DEFAULT_DATAFRAME_BACKEND


def use(backend: str):
    """
    Set the global DataFrame backend for all future read_bulk() calls.

    Available backends:
        - 'pyarrow': Default, no extra dependencies
        - 'pandas': Requires pandas package
        - 'polars': Requires polars package

    Args:
        backend: Backend name to use

    Raises:
        ReadBulkBackendError: If backend is unknown or not installed

    Warning:
        This function modifies a global variable and is NOT thread-safe.
        Pass backend explicitly to read_bulk() to bypass the global:
            readbulk.read_bulk("raw_data", backend="pandas")

    Examples:
        >>> import readbulk
        >>>
        >>> readbulk.use('pandas')
        >>> df = readbulk.read_bulk('raw_data')  # pandas DataFrame
    """
    global _DATAFRAME_BACKEND

    from readbulk.dataframe import get_available_backends

    available = get_available_backends()

    if backend not in available:
        raise ReadBulkBackendError(
            f"Unknown backend: '{backend}'\n"
            f"Available backends: {available}\n"
            f"\n"
            f"To use additional backends, install required packages:\n"
            f"  pip install polars  # For Polars backend\n"
            f"  pip install pandas  # For Pandas backend"
        )

    _DATAFRAME_BACKEND = backend  # type: ignore[assignment]


def get_backend() -> DataFrameBackend:
    """
    Get the current global DataFrame backend.

    Example:
        >>> import readbulk
        >>> readbulk.get_backend()
        'pyarrow'
    """
    return _DATAFRAME_BACKEND


def verbose(level=True):
    """
    Show or hide readbulk log output.

    read_bulk(verbose=True) decides whether progress messages are emitted;
    this decides whether and where they are displayed.

    Args:
        level: Logging level to enable:
            - True or "info": Show INFO and above (default)
            - "debug": Show DEBUG and above (column counts, type fallbacks)
            - False: Disable all logging

    Example:
        >>> import readbulk
        >>> readbulk.verbose()
        >>> df = readbulk.read_bulk("raw_data")
        INFO [readbulk.loader] Reading s01.csv
    """
    set_verbosity(level)


__all__ = [
    "ColumnModeWarning",
    "EmptyResultWarning",
    "EmptyTableWarning",
    "InvalidArgumentError",
    "ProvenanceCollisionError",
    "ReadBulkBackendError",
    "ReadBulkError",
    "ReadBulkSchemaError",
    "ReadBulkTypeError",
    "ReadBulkWarning",
    "combine_with_prior",
    "get_backend",
    "merge_tables",
    "read_bulk",
    "read_csv",
    "read_delim",
    "read_parquet",
    "use",
    "verbose",
]
