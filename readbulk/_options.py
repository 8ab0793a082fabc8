"""
Invocation options for read_bulk().

Validated up-front with pydantic so that a bad option fails before any
file is listed or read.
"""

import os
from typing import Any, Callable, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictBool,
    StrictStr,
    ValidationError,
    field_validator,
)

from readbulk._constants import (
    DEFAULT_COLLISION_MODE,
    DEFAULT_COLUMN_MODE,
    CollisionMode,
    ColumnMode,
    DataFrameBackend,
)
from readbulk._exceptions import InvalidArgumentError
from readbulk.discover import check_subdirectories, compile_name_filter


class ReadBulkOptions(BaseModel):
    """
    Options of a single read_bulk() call.

    Everything except the prior data table and the parser's own keyword
    arguments, which are passed through untouched.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    directory: StrictStr = "."
    subdirectories: Union[StrictBool, StrictStr, list[StrictStr]] = False
    name_contains: Optional[StrictStr] = None
    name_filter: Optional[StrictStr] = None
    extension: Optional[StrictStr] = None
    verbose: StrictBool = True
    fun: Callable[..., Any]
    column_mode: ColumnMode = DEFAULT_COLUMN_MODE
    on_collision: CollisionMode = DEFAULT_COLLISION_MODE
    backend: Optional[DataFrameBackend] = None
    storage_options: Optional[dict[str, Any]] = None

    @field_validator("directory", mode="before")
    @classmethod
    def _fspath(cls, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value

    @field_validator("subdirectories", mode="before")
    @classmethod
    def _subdirectories(cls, value: Any) -> Any:
        check_subdirectories(value)
        if isinstance(value, tuple):
            return list(value)
        return value

    @field_validator("name_filter")
    @classmethod
    def _name_filter(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            compile_name_filter(value)
        return value


def parse_options(**kwargs: Any) -> ReadBulkOptions:
    """
    Build ReadBulkOptions, reporting every problem as InvalidArgumentError.

    Raises:
        InvalidArgumentError: One or more options are invalid
    """
    try:
        return ReadBulkOptions(**kwargs)
    except ValidationError as e:
        problems = [
            f"  - {'.'.join(str(loc) for loc in err['loc']) or 'options'}: {err['msg']}"
            for err in e.errors()
        ]
        raise InvalidArgumentError(
            "Invalid read_bulk() arguments:\n" + "\n".join(problems)
        ) from e
