"""
Pandas backend.

Requires pandas package: pip install pandas
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pyarrow as pa

from readbulk._exceptions import ReadBulkBackendError

if TYPE_CHECKING:
    import pandas as pd

# Check Pandas availability
try:
    import pandas as pd

    HAS_PANDAS = True
except ImportError:
    HAS_PANDAS = False


def _require_pandas() -> None:
    """Raise ReadBulkBackendError if Pandas is not available."""
    if not HAS_PANDAS:
        raise ReadBulkBackendError(
            "Pandas backend requires pandas package.\n"
            "Install with: pip install pandas"
        )


def is_pandas(obj: Any) -> bool:
    return HAS_PANDAS and isinstance(obj, pd.DataFrame)


def to_arrow(df: pd.DataFrame) -> pa.Table:
    """Convert a pandas DataFrame, dropping its index."""
    _require_pandas()
    return pa.Table.from_pandas(df, preserve_index=False)


def from_arrow(arrow_table: pa.Table) -> pd.DataFrame:
    """Convert merged table to pandas. Nulls become NaN/None."""
    _require_pandas()
    return arrow_table.to_pandas()
