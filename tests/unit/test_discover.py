"""Tests for readbulk.discover (listing and filtering files)."""

import logging
from unittest.mock import Mock

import pytest

from readbulk._exceptions import InvalidArgumentError
from readbulk.discover import (
    filter_files,
    iter_file_groups,
    list_entries,
    resolve_subdirectories,
)


class TestFilterFiles:

    FILES = ["a.csv", "ab.csv", "b.txt"]

    def test_substring_then_extension(self):
        assert filter_files(self.FILES, name_contains="a", extension=".csv") == [
            "a.csv",
            "ab.csv",
        ]

    def test_no_filters_is_noop(self):
        assert filter_files(self.FILES) == self.FILES

    def test_substring_is_literal(self):
        files = ["a.b.csv", "axb.csv"]

        assert filter_files(files, name_contains="a.b") == ["a.b.csv"]

    def test_regex_filter_uses_search(self):
        files = ["subject_01.csv", "subject_02.csv", "pilot_01.csv"]

        assert filter_files(files, name_filter=r"^subject_\d+") == [
            "subject_01.csv",
            "subject_02.csv",
        ]

    def test_extension_is_anchored_at_end(self):
        files = ["x.csv", "x.csv.bak", "xcsv"]

        assert filter_files(files, extension=".csv") == ["x.csv"]

    def test_extension_is_literal(self):
        assert filter_files(["x.csv", "xacsv"], extension=".csv") == ["x.csv"]

    def test_all_filters_combine_with_and(self):
        files = ["s1_task.csv", "s1_task.txt", "s2_task.csv", "s1_demo.csv"]

        result = filter_files(
            files, name_contains="task", name_filter="^s1", extension=".csv"
        )

        assert result == ["s1_task.csv"]

    def test_order_preserved(self):
        assert filter_files(["c.csv", "a.csv", "b.csv"], extension=".csv") == [
            "c.csv",
            "a.csv",
            "b.csv",
        ]

    def test_invalid_regex_raises(self):
        with pytest.raises(InvalidArgumentError, match="Invalid name_filter"):
            filter_files(self.FILES, name_filter="(")


class TestResolveSubdirectories:

    def test_false_means_single_pass_over_root(self, tmp_path):
        assert resolve_subdirectories(tmp_path, False) == (False, [""])

    def test_true_lists_root_entries_sorted(self, session_dir):
        active, names = resolve_subdirectories(session_dir, True)

        assert active is True
        assert names == ["Session1", "Session2"]

    def test_explicit_list_keeps_given_order(self, tmp_path):
        assert resolve_subdirectories(tmp_path, ["S2", "S1"]) == (True, ["S2", "S1"])

    def test_tuple_accepted(self, tmp_path):
        assert resolve_subdirectories(tmp_path, ("S1",)) == (True, ["S1"])

    def test_single_string_is_one_subdirectory(self, tmp_path):
        assert resolve_subdirectories(tmp_path, "S1") == (True, ["S1"])

    @pytest.mark.parametrize("invalid", [None, 1, 0, 2.5, {"S1"}, ["S1", 2]])
    def test_invalid_specification_fails_before_io(self, invalid):
        fs = Mock()

        with pytest.raises(InvalidArgumentError, match="subdirectories argument"):
            resolve_subdirectories("/does/not/matter", invalid, fs=fs)

        fs.ls.assert_not_called()
        fs.isdir.assert_not_called()


class TestListEntries:

    def test_entries_sorted(self, make_dir):
        root = make_dir("unsorted", {"b.csv": "x\n1\n", "a.csv": "x\n1\n", "c.txt": ""})

        assert list_entries(root) == ["a.csv", "b.csv", "c.txt"]

    def test_hidden_entries_skipped(self, make_dir):
        root = make_dir(
            "hidden",
            {"a.csv": "x\n1\n", ".DS_Store": "\x00\x01", ".git/config": "", "S1/b.csv": ""},
        )

        assert list_entries(root) == ["S1", "a.csv"]

    def test_subdirectory_entries(self, session_dir):
        assert list_entries(session_dir, "Session1") == ["p1.csv", "p2.csv"]

    def test_missing_directory_has_no_entries(self, tmp_path):
        assert list_entries(tmp_path / "nope") == []

    def test_file_has_no_entries(self, flat_dir):
        assert list_entries(flat_dir, "s01.csv") == []

    def test_memory_filesystem(self):
        import fsspec

        fs = fsspec.filesystem("memory")
        fs.pipe("/readbulk-list/one.csv", b"a\n1\n")
        fs.pipe("/readbulk-list/two.csv", b"a\n2\n")

        try:
            assert list_entries("memory://readbulk-list") == ["one.csv", "two.csv"]
        finally:
            fs.rm("/readbulk-list", recursive=True)


class TestIterFileGroups:

    def test_flat_mode_single_group(self, flat_dir):
        groups = list(iter_file_groups(flat_dir, extension=".csv"))

        assert len(groups) == 1
        assert groups[0].subdirectory == ""
        assert groups[0].files == ["s01.csv", "s02.csv"]

    def test_paths_join_directory_and_file(self, flat_dir):
        group = next(iter_file_groups(str(flat_dir), extension=".csv"))

        assert group.paths[0] == str(flat_dir / "s01.csv")

    def test_subdirectory_paths(self, session_dir):
        groups = list(iter_file_groups(session_dir, True))

        assert [g.subdirectory for g in groups] == ["Session1", "Session2"]
        assert groups[1].paths == [str(session_dir / "Session2" / "p3.csv")]

    def test_logs_subdirectory_before_listing(self, session_dir, caplog):
        caplog.set_level(logging.INFO, logger="readbulk")

        groups = iter_file_groups(session_dir, ["Session2"])
        assert caplog.records == []

        next(groups)

        assert [r.getMessage() for r in caplog.records] == [
            "Start merging subdirectory: Session2"
        ]

    def test_no_subdirectory_message_in_flat_mode(self, flat_dir, caplog):
        caplog.set_level(logging.INFO, logger="readbulk")

        list(iter_file_groups(flat_dir))

        assert not any("subdirectory" in r.getMessage() for r in caplog.records)

    def test_quiet_when_not_verbose(self, session_dir, caplog):
        caplog.set_level(logging.INFO, logger="readbulk")

        list(iter_file_groups(session_dir, True, verbose=False))

        assert [r for r in caplog.records if r.levelno >= logging.INFO] == []
