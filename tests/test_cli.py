"""Tests for the generate and show commands."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from go_test_scaffold.cli.main import app

runner = CliRunner()


def _generate(*args: str):
    return runner.invoke(app, ["generate", "--no-gofmt", *args])


class TestGenerateCommand:
    def test_generates_files(self, go_file, widget_source, tmp_path):
        src = go_file(widget_source, "widget.go")
        out = tmp_path / "out"
        result = _generate(str(src), "-o", str(out))
        assert result.exit_code == 0, result.output
        assert "Generated" in result.output
        assert "Done" in result.output
        assert sorted(p.name for p in out.iterdir()) == [
            "widget_test.go",
            "widget_widget_suite_test.go",
        ]

    def test_scope_struct(self, go_file, widget_source, tmp_path):
        src = go_file(widget_source, "widget.go")
        out = tmp_path / "out"
        result = _generate(str(src), "-o", str(out), "--scope", "struct")
        assert result.exit_code == 0, result.output
        assert [p.name for p in out.iterdir()] == ["widget_widget_suite_test.go"]

    def test_exclude_constructors(self, go_file, widget_source, tmp_path):
        src = go_file(widget_source, "widget.go")
        out = tmp_path / "out"
        result = _generate(str(src), "-o", str(out), "--exclude-constructors")
        assert result.exit_code == 0, result.output
        free = (out / "widget_test.go").read_text()
        assert "TestNewWidget" not in free
        assert "Test_helper" in free

    def test_paths_return_drops_loop(self, go_file, tmp_path):
        src = go_file(
            "package p\n\nfunc Sum(xs []int) (t int) {\n\tfor _, x := range xs {\n\t\tt += x\n\t}\n\treturn\n}\n",
            "sum.go",
        )
        out = tmp_path / "out"
        result = _generate(str(src), "-o", str(out), "--paths", "return")
        assert result.exit_code == 0, result.output
        text = (out / "sum_test.go").read_text()
        assert "range" not in text
        assert '"L7: return"' in text

    def test_invalid_scope_rejected(self, go_file, widget_source):
        result = _generate(str(go_file(widget_source)), "--scope", "module")
        assert result.exit_code != 0

    def test_no_functions_is_success(self, go_file, tmp_path):
        src = go_file("package p\n\nvar X = 1\n", "vars.go")
        out = tmp_path / "out"
        result = _generate(str(src), "-o", str(out))
        assert result.exit_code == 0
        assert "No testable functions/methods found." in result.output
        assert list(out.iterdir()) == []

    def test_missing_file_stops_run(self, go_file, widget_source, tmp_path):
        later = go_file(widget_source, "widget.go")
        out = tmp_path / "out"
        result = _generate(str(tmp_path / "missing.go"), str(later), "-o", str(out))
        assert result.exit_code == 1
        assert "missing.go" in result.output
        assert list(out.iterdir()) == []

    def test_parse_error_continues_with_next_file(self, go_file, widget_source, tmp_path):
        bad = go_file("package p\n\nfunc broken( {\n", "bad.go")
        good = go_file(widget_source, "widget.go")
        out = tmp_path / "out"
        result = _generate(str(bad), str(good), "-o", str(out))
        assert result.exit_code == 1
        assert "parse error" in result.output
        assert (out / "widget_test.go").exists()

    def test_log_dir_records_events(self, go_file, widget_source, tmp_path):
        src = go_file(widget_source, "widget.go")
        logs = tmp_path / "logs"
        result = _generate(str(src), "-o", str(tmp_path / "out"), "--log-dir", str(logs))
        assert result.exit_code == 0, result.output
        entry = json.loads(next(logs.glob("*.jsonl")).read_text().splitlines()[0])
        assert entry["event_type"] == "generate.file"
        assert entry["data"]["status"] == "success"
        assert entry["data"]["functions"] == 4
        assert len(entry["data"]["written"]) == 2


class TestShowCommand:
    def test_tree_output(self, go_file, branchy_source):
        result = runner.invoke(app, ["show", str(go_file(branchy_source))])
        assert result.exit_code == 0, result.output
        assert "package sample" in result.output
        assert "free functions" in result.output
        assert "L13: return 0" in result.output

    def test_json_output(self, go_file, widget_source):
        src = go_file(widget_source, "widget.go")
        result = runner.invoke(
            app, ["show", str(src), "--json", "--scope", "struct", "--paths", "return"]
        )
        assert result.exit_code == 0, result.output
        report = json.loads(result.output)
        assert report["package_name"] == "widget"
        assert [g["name"] for g in report["groups"]] == ["Widget"]
        grow = report["groups"][0]["methods"][0]
        assert grow["name"] == "Grow"
        assert [b["kind"] for b in grow["branches"]] == ["if", "return"]
        assert all(b["reaches_return"] for b in grow["branches"])

    def test_parse_error(self, go_file):
        result = runner.invoke(app, ["show", str(go_file("package p\nfunc (", "bad.go"))])
        assert result.exit_code == 1
        assert "error" in result.output
