"""Pytest fixtures for readbulk tests."""

import logging
from pathlib import Path

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests (no I/O beyond tmp_path)")
    config.addinivalue_line("markers", "integration: end-to-end read_bulk() tests")
    config.addinivalue_line("markers", "polars: requires polars package")
    config.addinivalue_line("markers", "pandas: requires pandas package")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create text files below root. Keys are relative paths."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def flat_dir(tmp_path) -> Path:
    """Two CSV files with overlapping columns plus a non-CSV file."""
    return write_files(
        tmp_path / "raw_data",
        {
            "s01.csv": "A,B\n1,x\n2,y\n",
            "s02.csv": "B,C\nz,true\n",
            "notes.txt": "not,data\n",
        },
    )


@pytest.fixture
def session_dir(tmp_path) -> Path:
    """Per-session subdirectories with differing columns."""
    return write_files(
        tmp_path / "sessions",
        {
            "Session1/p1.csv": "id,rt\n1,350\n2,420\n",
            "Session1/p2.csv": "id,rt,correct\n3,390,1\n",
            "Session2/p3.csv": "id,acc\n4,0.9\n",
        },
    )


@pytest.fixture
def empty_dir(tmp_path) -> Path:
    path = tmp_path / "empty"
    path.mkdir()
    return path


@pytest.fixture(params=["pyarrow", "polars", "pandas"])
def all_backends(request):
    backend = request.param
    if backend == "polars":
        pytest.importorskip("polars")
    elif backend == "pandas":
        pytest.importorskip("pandas")
    return backend


@pytest.fixture(autouse=True)
def reset_readbulk():
    logger = logging.getLogger("readbulk")
    original_handlers = logger.handlers[:]
    original_level = logger.level
    original_propagate = logger.propagate
    yield
    import readbulk
    readbulk.use("pyarrow")
    logger.handlers = original_handlers
    logger.level = original_level
    logger.propagate = original_propagate


@pytest.fixture
def make_dir(tmp_path):
    """Factory: make_dir("name", {"a.csv": "..."}) -> Path."""

    def _make(name: str, files: dict[str, str]) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return write_files(root, files)

    return _make
