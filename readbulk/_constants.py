"""
Global constants for readbulk.

Organized by: DataFrame Backend, Provenance Columns, Column Modes, Readers.
"""

from typing import Literal

# DataFrame Backend Configuration
DataFrameBackend = Literal["pyarrow", "polars", "pandas"]
"""Valid DataFrame backend types."""

DEFAULT_DATAFRAME_BACKEND: DataFrameBackend = "pyarrow"
"""Default DataFrame backend used by readbulk."""

AVAILABLE_BACKENDS: tuple[DataFrameBackend, ...] = ("pyarrow", "polars", "pandas")
"""All supported DataFrame backends (registered or not)."""


# Provenance Columns
COLUMN_FILE = "File"
"""Name of the source file a row was read from (no directory part)."""

COLUMN_SUBDIRECTORY = "Subdirectory"
"""Subdirectory a row was read from. Only added in subdirectory mode."""

CollisionMode = Literal["overwrite", "error"]
"""What to do when parsed data already carries a provenance column."""

DEFAULT_COLLISION_MODE: CollisionMode = "overwrite"
"""
Silently replace pre-existing File/Subdirectory columns in place.

Matches the historical read_bulk behaviour. Use "error" to surface clashes.
"""


# Column Modes
ColumnMode = Literal["union", "intersection", "strict"]
"""Column handling strategy when merging tables."""

COLUMN_MODES: tuple[ColumnMode, ...] = ("union", "intersection", "strict")

DEFAULT_COLUMN_MODE: ColumnMode = "union"
"""Keep every column seen, fill missing cells with null."""


# Readers
DEFAULT_DELIMITER = ","
"""Field delimiter for the default CSV reader."""

TAB_DELIMITER = "\t"
"""Field delimiter for read_delim()."""

DEFAULT_ENCODING = "utf8"
"""Text encoding assumed by the default readers."""


# Messages
MSG_SUBDIRECTORY = "Start merging subdirectory: {}"
MSG_READING = "Reading {}"
MSG_EMPTY_FILE = "File {} has 0 rows after reading it in."
MSG_EMPTY_RESULT = (
    "Final table has 0 rows. Please check that directory was specified correctly."
)
