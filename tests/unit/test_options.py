"""Tests for read_bulk() option validation."""

from pathlib import Path

import pytest

from readbulk._exceptions import InvalidArgumentError
from readbulk._options import parse_options
from readbulk.readers import read_csv


class TestParseOptions:

    def test_defaults(self):
        options = parse_options(fun=read_csv)

        assert options.directory == "."
        assert options.subdirectories is False
        assert options.verbose is True
        assert options.column_mode == "union"
        assert options.on_collision == "overwrite"
        assert options.backend is None

    def test_path_directory_converted_to_str(self, tmp_path):
        options = parse_options(directory=tmp_path, fun=read_csv)

        assert options.directory == str(tmp_path)

    def test_tuple_subdirectories_become_list(self):
        options = parse_options(subdirectories=("S1", "S2"), fun=read_csv)

        assert options.subdirectories == ["S1", "S2"]

    @pytest.mark.parametrize("invalid", [1, None, 3.0, ["S1", 2], {"S1": 1}])
    def test_invalid_subdirectories(self, invalid):
        with pytest.raises(InvalidArgumentError, match="subdirectories"):
            parse_options(subdirectories=invalid, fun=read_csv)

    def test_invalid_regex(self):
        with pytest.raises(InvalidArgumentError, match="name_filter"):
            parse_options(name_filter="[a-", fun=read_csv)

    def test_fun_must_be_callable(self):
        with pytest.raises(InvalidArgumentError, match="fun"):
            parse_options(fun="read.csv")

    @pytest.mark.parametrize(
        "field, value",
        [
            ("column_mode", "outer"),
            ("on_collision", "ignore"),
            ("backend", "spark"),
            ("verbose", "yes"),
            ("extension", 5),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(InvalidArgumentError, match=field):
            parse_options(fun=read_csv, **{field: value})

    def test_every_problem_reported(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_options(fun=read_csv, column_mode="outer", verbose="yes")

        msg = str(exc_info.value)
        assert "column_mode" in msg
        assert "verbose" in msg

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            parse_options(fun=read_csv, subdirectories=1)
