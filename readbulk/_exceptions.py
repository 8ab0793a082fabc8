"""
Exception and warning hierarchy for readbulk.

All readbulk-specific exceptions inherit from ReadBulkError, all warnings
from ReadBulkWarning. Errors raised by the parsing function itself are NOT
wrapped: a malformed or unreadable file propagates unchanged and aborts the
whole batch.

Usage:
    from readbulk._exceptions import InvalidArgumentError, ReadBulkError

    try:
        df = readbulk.read_bulk("raw_data", subdirectories=42)
    except InvalidArgumentError:
        # Bad option, nothing was read yet
        ...
    except ReadBulkError:
        # Catch-all for other readbulk errors
        raise
"""


class ReadBulkError(Exception):
    """Base exception for all readbulk errors."""

    pass


class InvalidArgumentError(ReadBulkError, ValueError):
    """
    Invalid invocation option.

    Raised before any I/O when:
    - subdirectories is not a bool, a string or a list of strings
    - name_filter is not a valid regular expression
    - column_mode / on_collision / backend is not a known value

    Examples:
        - "subdirectories argument should either be boolean or a list of strings, got int"
        - "Invalid name_filter regular expression '(': missing ), unterminated subpattern"
    """

    pass


class ReadBulkTypeError(ReadBulkError, TypeError):
    """
    Value is not table shaped.

    Raised when a parsing function or the prior `data` argument returns
    something that cannot be converted to a pyarrow Table.

    Examples:
        - "Cannot convert str to a table (from parser result for 'a.csv')"
    """

    pass


class ReadBulkSchemaError(ReadBulkError):
    """
    Column incompatibility between tables.

    Raised when:
    - column_mode='strict' and column sets differ
    - intersection of columns is empty in column_mode='intersection'
    """

    pass


class ProvenanceCollisionError(ReadBulkSchemaError):
    """
    Parsed data already has a File or Subdirectory column.

    Only raised with on_collision='error'. The default ('overwrite')
    replaces the existing column silently.
    """

    pass


class ReadBulkBackendError(ReadBulkError):
    """
    DataFrame backend error.

    Raised when:
    - Backend name is unknown
    - Backend dependencies (pandas, polars) are not installed

    Examples:
        - "Unknown backend: 'spark'. Available: ['pyarrow', 'pandas']"
    """

    pass


class ReadBulkWarning(UserWarning):
    """Base category for all readbulk warnings."""

    pass


class EmptyTableWarning(ReadBulkWarning):
    """A single file parsed to zero rows. The batch continues."""

    pass


class EmptyResultWarning(ReadBulkWarning):
    """The final merged table has zero rows."""

    pass


class ColumnModeWarning(ReadBulkWarning):
    """Columns were dropped by column_mode='intersection'."""

    pass
