"""Go test scaffold generation from filtered branch trees."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from go_test_scaffold.branch_tree.types import BranchKind, is_exported
from go_test_scaffold.exceptions import RenderError

if TYPE_CHECKING:
    from go_test_scaffold.branch_tree.types import Branch, StructInfo

_INDENT = "\t"

# Kinds whose excerpt is a bare marker pointing back at their owning statement
_BACK_REFERENCED: frozenset[BranchKind] = frozenset(
    {BranchKind.ELSE, BranchKind.DEFAULT, BranchKind.SELECT_DEFAULT}
)


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Naming context shared by every group rendered from one source file."""

    package_name: str
    source_name: str  # base name of the analyzed file, e.g. "widget.go"
    pending_message: str = "not implemented"


def go_quote(text: str) -> str:
    """Quote text as a Go interpreted string literal."""
    # JSON string escapes are a subset of Go's.
    return json.dumps(text, ensure_ascii=False)


def branch_label(branch: Branch) -> str:
    """Sub-test name for a branch: ``L<line>: <header>``."""
    kind = branch.kind
    excerpt = branch.excerpt
    if kind == BranchKind.IF_GROUP:
        text = f"if-chain {excerpt}"
    elif kind == BranchKind.IF:
        text = f"if {excerpt}"
    elif kind == BranchKind.ELSE_IF:
        text = f"else if {excerpt}"
    elif kind in _BACK_REFERENCED:
        text = f"{excerpt} of L{branch.origin_line}" if branch.origin_line else excerpt
    elif kind in (BranchKind.SWITCH, BranchKind.TYPE_SWITCH):
        text = f"switch {excerpt}" if excerpt else "switch"
    elif kind in (BranchKind.CASE, BranchKind.SELECT_CASE):
        text = f"case {excerpt}"
    else:
        text = excerpt
    return f"L{branch.line}: {text.strip()}"


def entry_point_name(name: str, suffix: str = "") -> str:
    """Go test entry point name; unexported names keep their case after ``Test_``."""
    if is_exported(name):
        return f"Test{name}{suffix}"
    return f"Test_{name}{suffix}"


def _unique(name: str, used: set[str]) -> str:
    candidate = name
    n = 2
    while candidate in used:
        candidate = f"{name}_{n}"
        n += 1
    used.add(candidate)
    return candidate


def _header(context: RenderContext) -> list[str]:
    return [
        f"// Test scaffold generated by go-test-scaffold from {context.source_name}.",
        "// Replace each pending t.Skip with real assertions.",
        "",
        f"package {context.package_name}",
        "",
        'import "testing"',
    ]


def _pending(lines: list[str], depth: int, context: RenderContext) -> None:
    lines.append(f"{_INDENT * depth}t.Skip({go_quote(context.pending_message)})")


def _subtest(
    lines: list[str], name: str, depth: int, body: list[Branch], context: RenderContext
) -> None:
    pad = _INDENT * depth
    lines.append(f"{pad}t.Run({go_quote(name)}, func(t *testing.T) {{")
    _branches(lines, body, depth + 1, context)
    lines.append(f"{pad}}})")


def _branches(
    lines: list[str], branches: list[Branch], depth: int, context: RenderContext
) -> None:
    if not branches:
        _pending(lines, depth, context)
        return
    for branch in branches:
        _subtest(lines, branch_label(branch), depth, branch.children, context)


def _entry_point(lines: list[str], name: str) -> None:
    lines.append("")
    lines.append(f"func {name}(t *testing.T) {{")


def render_free_functions(group: StructInfo, context: RenderContext) -> str:
    """One top-level test entry point per free function."""
    lines = _header(context)
    used: set[str] = set()
    for func in group.methods:
        _entry_point(lines, _unique(entry_point_name(func.name), used))
        _branches(lines, func.branches, 1, context)
        lines.append("}")
    return "\n".join(lines) + "\n"


def render_suite(group: StructInfo, context: RenderContext) -> str:
    """A single entry point for the type with one sub-test per method."""
    lines = _header(context)
    _entry_point(lines, entry_point_name(group.name, "Suite"))
    for func in group.methods:
        _subtest(lines, func.name, 1, func.branches, context)
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_group(group: StructInfo, context: RenderContext) -> str:
    """Render one group with the shape matching its kind."""
    if not group.methods:
        raise RenderError(group.name, "group has no functions")
    if not context.package_name:
        raise RenderError(group.name, "package name is empty")
    if group.is_free:
        return render_free_functions(group, context)
    return render_suite(group, context)
