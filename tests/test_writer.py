"""Tests for output naming, gofmt fallback and atomic writes."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from go_test_scaffold.branch_tree.types import StructInfo
from go_test_scaffold.branch_tree.writer import format_go, output_path, write_output
from go_test_scaffold.exceptions import OutputWriteError

FREE = StructInfo(name="", is_exported=False)
WIDGET = StructInfo(name="Widget", is_exported=True)


class TestOutputPath:
    def test_free_group_plain_suffix(self, tmp_path):
        assert output_path(tmp_path / "widget.go", FREE) == tmp_path / "widget_test.go"

    def test_type_group_lowercased(self, tmp_path):
        assert output_path(tmp_path / "widget.go", WIDGET) == (
            tmp_path / "widget_widget_suite_test.go"
        )

    def test_output_dir_override(self, tmp_path):
        out = tmp_path / "out"
        assert output_path(tmp_path / "src" / "a.go", WIDGET, out) == out / "a_widget_suite_test.go"

    def test_relative_source_resolved(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert output_path("pkg.go", FREE) == tmp_path.resolve() / "pkg_test.go"


class TestFormatGo:
    def test_disabled_returns_input(self):
        assert format_go("package p", enabled=False) == "package p"

    def test_missing_gofmt_returns_input(self):
        with patch("go_test_scaffold.branch_tree.writer.shutil.which", return_value=None):
            assert format_go("package p") == "package p"

    def test_formatted_output_used(self):
        done = subprocess.CompletedProcess(["gofmt"], 0, stdout="package p\n", stderr="")
        with (
            patch("go_test_scaffold.branch_tree.writer.shutil.which", return_value="/bin/gofmt"),
            patch("go_test_scaffold.branch_tree.writer.subprocess.run", return_value=done) as run,
        ):
            assert format_go("package  p") == "package p\n"
        assert run.call_args.kwargs["input"] == "package  p"

    def test_gofmt_failure_falls_back_with_warning(self, caplog):
        failed = subprocess.CompletedProcess(["gofmt"], 2, stdout="", stderr="1:1: expected")
        with (
            patch("go_test_scaffold.branch_tree.writer.shutil.which", return_value="/bin/gofmt"),
            patch("go_test_scaffold.branch_tree.writer.subprocess.run", return_value=failed),
            caplog.at_level(logging.WARNING, logger="go_test_scaffold.branch_tree.writer"),
        ):
            assert format_go("garbage") == "garbage"
        assert "gofmt failed" in caplog.text


class TestWriteOutput:
    def test_writes_and_overwrites(self, tmp_path):
        path = tmp_path / "a_test.go"
        write_output(path, "first\n")
        write_output(path, "second\n")
        assert path.read_text() == "second\n"
        assert [p.name for p in tmp_path.iterdir()] == ["a_test.go"]

    def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "a_test.go"
        write_output(path, "x")
        assert path.read_text() == "x"

    def test_failure_raises_and_leaves_no_temp_file(self, tmp_path):
        path = tmp_path / "a_test.go"
        with (
            patch("go_test_scaffold.branch_tree.writer.os.replace", side_effect=PermissionError(13, "Permission denied")),
            pytest.raises(OutputWriteError) as excinfo,
        ):
            write_output(path, "x")
        assert excinfo.value.path == str(path)
        assert "Permission denied" in str(excinfo.value)
        assert list(tmp_path.iterdir()) == []

    def test_unwritable_target(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(OutputWriteError):
            write_output(Path(blocker) / "a_test.go", "x")
