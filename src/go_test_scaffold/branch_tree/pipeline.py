"""End-to-end generation for one source file: analyze, filter, render, write."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from go_test_scaffold.branch_tree import analyze_file
from go_test_scaffold.branch_tree.filters import apply_filters
from go_test_scaffold.branch_tree.renderer import RenderContext, render_group
from go_test_scaffold.branch_tree.writer import format_go, output_path, write_output
from go_test_scaffold.exceptions import OutputWriteError, RenderError

if TYPE_CHECKING:
    from go_test_scaffold.config import Config
    from go_test_scaffold.exceptions import ScaffoldError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GroupOutcome:
    group: str
    path: Path
    error: ScaffoldError | None = None


@dataclass(slots=True)
class FileOutcome:
    source: str
    function_count: int = 0
    groups: list[GroupOutcome] = field(default_factory=list)

    @property
    def written(self) -> list[Path]:
        return [g.path for g in self.groups if g.error is None]

    @property
    def failed(self) -> list[GroupOutcome]:
        return [g for g in self.groups if g.error is not None]

    @property
    def nothing_to_generate(self) -> bool:
        return not self.groups


def generate_file(src: str | Path, config: Config) -> FileOutcome:
    """Generate every scaffold for one Go file.

    InputError and GoParseError propagate before anything is written.
    RenderError and OutputWriteError are recorded per group; files already
    written for sibling groups are kept.
    """
    analysis = analyze_file(src)
    outcome = FileOutcome(source=str(src), function_count=analysis.function_count)
    if analysis.function_count == 0:
        return outcome

    groups = apply_filters(analysis.groups, config)
    context = RenderContext(
        package_name=analysis.package_name,
        source_name=Path(src).name,
        pending_message=config.pending_message,
    )
    for group in groups:
        path = output_path(src, group, config.output_dir)
        try:
            text = format_go(render_group(group, context), enabled=config.gofmt)
            write_output(path, text)
        except (RenderError, OutputWriteError) as exc:
            logger.error("%s", exc)
            outcome.groups.append(GroupOutcome(group=group.name, path=path, error=exc))
            continue
        logger.info("Generated %s", path)
        outcome.groups.append(GroupOutcome(group=group.name, path=path))
    return outcome
