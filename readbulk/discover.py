"""
File discovery.

Lists candidate files under a root directory, optionally one level of
subdirectories deep, and narrows them with name filters. Works on any
fsspec filesystem; plain local paths are the common case.
"""

import os
import posixpath
import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union

import fsspec
from fsspec.implementations.local import LocalFileSystem

from readbulk._constants import MSG_SUBDIRECTORY
from readbulk._exceptions import InvalidArgumentError
from readbulk._logging import get_logger

logger = get_logger(__name__)

SubdirectorySpec = Union[bool, str, list[str], tuple[str, ...]]


@dataclass
class FileGroup:
    """Files of one subdirectory ("" when subdirectory mode is off)."""

    subdirectory: str
    files: list[str] = field(default_factory=list)
    paths: list[str] = field(default_factory=list)


def check_subdirectories(subdirectories: Any) -> None:
    """
    Validate the subdirectory specification without touching the filesystem.

    Raises:
        InvalidArgumentError: If not a bool, a string or a list/tuple of strings
    """
    if isinstance(subdirectories, (bool, str)):
        return
    if isinstance(subdirectories, (list, tuple)) and all(
        isinstance(s, str) for s in subdirectories
    ):
        return

    raise InvalidArgumentError(
        "subdirectories argument should either be boolean or a list of strings, "
        f"got {type(subdirectories).__name__}"
    )


def resolve_subdirectories(
    directory: Union[str, os.PathLike],
    subdirectories: SubdirectorySpec,
    fs: Optional[fsspec.AbstractFileSystem] = None,
    storage_options: Optional[dict[str, Any]] = None,
) -> tuple[bool, list[str]]:
    """
    Turn a subdirectory specification into an ordered list of names.

    Args:
        directory: Root directory
        subdirectories:
            - False: no subdirectory mode, a single pass over the root ("")
            - True: every entry of the root, sorted by name
            - str or list of str: these subdirectories, in the given order
        fs: Filesystem to use (resolved from directory when None)
        storage_options: Passed to fsspec when fs is None

    Returns:
        (subdirectory mode active, subdirectory names)

    Raises:
        InvalidArgumentError: Invalid specification (before any I/O)
    """
    check_subdirectories(subdirectories)

    if subdirectories is False:
        return False, [""]
    if subdirectories is True:
        return True, list_entries(directory, fs=fs, storage_options=storage_options)
    if isinstance(subdirectories, str):
        return True, [subdirectories]
    return True, list(subdirectories)


def list_entries(
    directory: Union[str, os.PathLike],
    subdirectory: str = "",
    fs: Optional[fsspec.AbstractFileSystem] = None,
    storage_options: Optional[dict[str, Any]] = None,
) -> list[str]:
    """
    Visible names directly inside directory/subdirectory, sorted.

    A path that does not exist or is not a directory has no entries.
    """
    fs, root = _resolve_fs(directory, fs, storage_options)
    path = posixpath.join(root, subdirectory) if subdirectory else root

    if not fs.isdir(path):
        logger.debug(f"Not a directory, no entries: {path}")
        return []

    names = [posixpath.basename(p.rstrip("/")) for p in fs.ls(path, detail=False)]
    # Hidden entries (.DS_Store, .git, ...) are never data
    return sorted(name for name in names if name and not name.startswith("."))


def filter_files(
    files: list[str],
    name_contains: Optional[str] = None,
    name_filter: Optional[str] = None,
    extension: Optional[str] = None,
) -> list[str]:
    """
    Narrow a file list. Each supplied filter applies to the previous result.

    Args:
        files: File names
        name_contains: Keep names containing this literal substring
        name_filter: Keep names matching this regular expression (re.search)
        extension: Keep names ending with this literal suffix

    Returns:
        Filtered names, original order preserved
    """
    if name_contains is not None:
        files = [f for f in files if name_contains in f]

    if name_filter is not None:
        pattern = compile_name_filter(name_filter)
        files = [f for f in files if pattern.search(f)]

    if extension is not None:
        files = [f for f in files if f.endswith(extension)]

    return files


def compile_name_filter(name_filter: str) -> "re.Pattern[str]":
    try:
        return re.compile(name_filter)
    except re.error as e:
        raise InvalidArgumentError(
            f"Invalid name_filter regular expression '{name_filter}': {e}"
        ) from e


def iter_file_groups(
    directory: Union[str, os.PathLike],
    subdirectories: SubdirectorySpec = False,
    name_contains: Optional[str] = None,
    name_filter: Optional[str] = None,
    extension: Optional[str] = None,
    verbose: bool = True,
    fs: Optional[fsspec.AbstractFileSystem] = None,
    storage_options: Optional[dict[str, Any]] = None,
) -> Iterator[FileGroup]:
    """
    Yield the filtered files of each subdirectory, one group at a time.

    Groups are produced lazily so that the progress message for a
    subdirectory is logged right before its files are loaded.
    """
    fs, root = _resolve_fs(directory, fs, storage_options)
    active, names = resolve_subdirectories(directory, subdirectories, fs=fs)

    for subdirectory in names:
        if active and verbose:
            logger.info(MSG_SUBDIRECTORY.format(subdirectory))

        files = filter_files(
            list_entries(directory, subdirectory, fs=fs),
            name_contains=name_contains,
            name_filter=name_filter,
            extension=extension,
        )
        paths = [_user_path(fs, directory, root, subdirectory, f) for f in files]

        logger.debug(f"{len(files)} file(s) selected in '{subdirectory or root}'")
        yield FileGroup(subdirectory=subdirectory, files=files, paths=paths)


def _resolve_fs(
    directory: Union[str, os.PathLike],
    fs: Optional[fsspec.AbstractFileSystem],
    storage_options: Optional[dict[str, Any]],
) -> tuple[fsspec.AbstractFileSystem, str]:
    if fs is not None:
        return fs, fs._strip_protocol(os.fspath(directory))
    return fsspec.core.url_to_fs(os.fspath(directory), **(storage_options or {}))


def _user_path(
    fs: fsspec.AbstractFileSystem,
    directory: Union[str, os.PathLike],
    root: str,
    subdirectory: str,
    file: str,
) -> str:
    """
    Path handed to the parsing function.

    Local files keep the directory as the caller wrote it, remote files get
    a full URL so that fsspec-aware parsers can open them.
    """
    parts = [p for p in (subdirectory, file) if p]
    if isinstance(fs, LocalFileSystem):
        return os.path.join(os.fspath(directory), *parts)
    return fs.unstrip_protocol(posixpath.join(root, *parts))
