"""
Polars backend.

Requires polars package: pip install polars
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pyarrow as pa

from readbulk._exceptions import ReadBulkBackendError

if TYPE_CHECKING:
    import polars as pl

# Check Polars availability
try:
    import polars as pl

    HAS_POLARS = True
except ImportError:
    HAS_POLARS = False


def _require_polars() -> None:
    """Raise ReadBulkBackendError if Polars is not available."""
    if not HAS_POLARS:
        raise ReadBulkBackendError(
            "Polars backend requires polars package.\n"
            "Install with: pip install polars"
        )


def is_polars(obj: Any) -> bool:
    return HAS_POLARS and isinstance(obj, pl.DataFrame)


def to_arrow(df: pl.DataFrame) -> pa.Table:
    _require_polars()
    return df.to_arrow()


def from_arrow(arrow_table: pa.Table) -> pl.DataFrame:
    _require_polars()
    return pl.from_arrow(arrow_table)
