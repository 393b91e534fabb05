"""Persist rendered scaffolds: output naming, optional gofmt, atomic writes."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from go_test_scaffold.exceptions import OutputWriteError

if TYPE_CHECKING:
    from go_test_scaffold.branch_tree.types import StructInfo

logger = logging.getLogger(__name__)

GOFMT_TIMEOUT_S = 30.0


def output_path(src: str | Path, group: StructInfo, output_dir: Path | None = None) -> Path:
    """``<base>_test.go`` for free functions, ``<base>_<type>_suite_test.go`` for a type."""
    src_path = Path(src).resolve()
    base = src_path.name.removesuffix(".go")
    if group.is_free:
        name = f"{base}_test.go"
    else:
        name = f"{base}_{group.name.lower()}_suite_test.go"
    directory = Path(output_dir) if output_dir is not None else src_path.parent
    return directory / name


def format_go(text: str, *, enabled: bool = True) -> str:
    """Run text through gofmt when available; fall back to the raw text.

    A gofmt failure is logged as a warning, never raised: the unformatted
    scaffold is still valid input for the user to fix by hand.
    """
    if not enabled:
        return text
    gofmt = shutil.which("gofmt")
    if gofmt is None:
        logger.debug("gofmt not found on PATH, writing unformatted output")
        return text
    try:
        proc = subprocess.run(
            [gofmt],
            input=text,
            capture_output=True,
            text=True,
            timeout=GOFMT_TIMEOUT_S,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.warning("gofmt could not run (%s), writing unformatted output", exc)
        return text
    if proc.returncode != 0:
        logger.warning("gofmt failed, writing unformatted output: %s", proc.stderr.strip())
        return text
    return proc.stdout


def write_output(path: Path, text: str) -> None:
    """Write text to path via a sibling temp file so no partial file is left."""
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
        raise OutputWriteError(str(path), exc.strerror or str(exc)) from exc
