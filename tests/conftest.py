"""Shared fixtures for all tests."""

from textwrap import dedent

import pytest

from go_test_scaffold.config import Config
from go_test_scaffold.logging.logger import RunLogger

# Nested else-if chains ending in returns.
BRANCHY_SOURCE = dedent("""\
    package sample

    func F(s, i int) int {
        if s == 0 {
            return 1
        } else if s == 1 {
            if i == 0 {
                return 2
            } else if i == 1 {
                return 3
            }
        }
        return 0
    }
""")

WIDGET_SOURCE = dedent("""\
    package widget

    type Widget struct {
        size int
    }

    func NewWidget(size int) *Widget {
        return &Widget{size: size}
    }

    func (w *Widget) Grow(n int) int {
        if n < 0 {
            return w.size
        }
        w.size += n
        return w.size
    }

    func (w Widget) Size() int {
        return w.size
    }

    func helper(x int) int {
        for i := 0; i < x; i++ {
            x--
        }
        return x
    }
""")


@pytest.fixture
def tmp_config(tmp_path):
    """Config writing into a temp directory, gofmt disabled for stable output."""
    config = Config(output_dir=tmp_path / "out", gofmt=False, log_dir=tmp_path / "logs")
    config.ensure_dirs()
    return config


@pytest.fixture
def run_logger(tmp_config):
    """RunLogger writing to temp dir."""
    return RunLogger(tmp_config.log_dir)


@pytest.fixture
def go_file(tmp_path):
    """Factory writing Go source to tmp_path/<name> and returning its path."""

    def _write(source: str, name: str = "sample.go"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def branchy_source():
    return BRANCHY_SOURCE


@pytest.fixture
def widget_source():
    return WIDGET_SOURCE
