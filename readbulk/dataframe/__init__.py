"""
DataFrame backend registry and table adapters.

Two directions:
    as_arrow(obj) normalizes anything a parsing function may return
    (pyarrow, pandas, polars, list of row dicts, dict of columns) into a
    pyarrow Table, which is what the merge works on.

    create_dataframe(backend, table) converts the final merged pyarrow
    Table into the DataFrame type requested by the caller.
"""

from typing import Any, Callable, Optional, Protocol

import pyarrow as pa

from readbulk._constants import AVAILABLE_BACKENDS, DataFrameBackend
from readbulk._exceptions import ReadBulkBackendError, ReadBulkTypeError
from readbulk.dataframe import pandas as _pandas
from readbulk.dataframe import polars as _polars
from readbulk.dataframe import pyarrow as _pyarrow


class BackendFactory(Protocol):
    """Protocol for backend factory functions."""

    def __call__(self, arrow_table: pa.Table) -> Any:
        """Create backend DataFrame from PyArrow Table."""
        ...


# Backend registry: name -> factory function
_BACKENDS: dict[DataFrameBackend, BackendFactory] = {}

# Input converters, tried in order: (matcher, converter)
_CONVERTERS: list[tuple[Callable[[Any], bool], Callable[[Any], pa.Table]]] = [
    (_pyarrow.is_arrow, _pyarrow.to_arrow),
    (_pandas.is_pandas, _pandas.to_arrow),
    (_polars.is_polars, _polars.to_arrow),
    (_pyarrow.is_records, _pyarrow.to_arrow),
]


def register_backend(name: DataFrameBackend, factory_fn: BackendFactory) -> None:
    """
    Register a DataFrame backend.

    Args:
        name: Backend name from DataFrameBackend literal
        factory_fn: Factory function that takes (arrow_table) -> DataFrame

    Example:
        from readbulk.dataframe.polars import from_arrow
        register_backend('polars', from_arrow)
    """
    _BACKENDS[name] = factory_fn


def create_dataframe(backend: str, arrow_table: pa.Table) -> Any:
    """
    Convert the merged PyArrow Table to the requested backend.

    Args:
        backend: Backend name ("pyarrow", "polars", "pandas")
        arrow_table: Merged PyArrow Table

    Returns:
        pyarrow.Table, pandas.DataFrame or polars.DataFrame

    Raises:
        ReadBulkBackendError: If backend is not registered or unknown
    """
    validate_backend(backend)

    factory = _BACKENDS[backend]  # type: ignore[index]
    return factory(arrow_table)


def validate_backend(backend: str) -> None:
    """
    Check that a backend name is known and registered.

    Raises:
        ReadBulkBackendError: If backend is unknown or its package is missing
    """
    if backend not in AVAILABLE_BACKENDS:
        raise ReadBulkBackendError(
            f"Unknown backend: '{backend}'\n"
            f"Available backends: {list(AVAILABLE_BACKENDS)}"
        )

    if backend not in _BACKENDS:
        raise ReadBulkBackendError(
            f"Backend '{backend}' is not registered.\n"
            f"Registered backends: {list(_BACKENDS.keys())}\n"
            f"\n"
            f"The backend requires an additional dependency:\n"
            f"  pip install {backend}"
        )


def get_available_backends() -> list[DataFrameBackend]:
    """
    Get list of currently registered backends.

    Returns:
        List of registered backend names
    """
    return list(_BACKENDS.keys())


def as_arrow(obj: Any, source: Optional[str] = None) -> pa.Table:
    """
    Normalize a table-shaped value into a PyArrow Table.

    Args:
        obj: pyarrow Table/RecordBatch, pandas DataFrame, polars DataFrame,
            list of row dicts or dict of columns
        source: Human readable origin, used in the error message

    Raises:
        ReadBulkTypeError: If obj is not table shaped
    """
    for matches, convert in _CONVERTERS:
        if matches(obj):
            return convert(obj)

    where = f" (from {source})" if source else ""
    raise ReadBulkTypeError(
        f"Cannot convert {type(obj).__name__} to a table{where}.\n"
        f"Parsing functions must return a pyarrow Table, a pandas or polars "
        f"DataFrame, a list of row dicts or a dict of columns."
    )


def _register_all_backends() -> None:
    """Register all available backends on module import."""
    # PyArrow (default, always available)
    register_backend("pyarrow", _pyarrow.from_arrow)

    # Pandas (optional)
    if _pandas.HAS_PANDAS:
        register_backend("pandas", _pandas.from_arrow)

    # Polars (optional)
    if _polars.HAS_POLARS:
        register_backend("polars", _polars.from_arrow)


# Auto-register on module import
_register_all_backends()

__all__ = [
    "as_arrow",
    "create_dataframe",
    "get_available_backends",
    "register_backend",
    "validate_backend",
]
