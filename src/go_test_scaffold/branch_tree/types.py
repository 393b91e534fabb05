"""Data types for the branch tree.

A ``Branch`` forest per function, ``FuncInfo`` per function or method and
``StructInfo`` per owning type. Everything is built once per run by the
extractor and grouper, then mutated only by the filter chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

# Name of the synthetic group holding receiver-less functions.
FREE_GROUP_NAME = ""


class BranchKind(StrEnum):
    IF_GROUP = "if_group"
    IF = "if"
    ELSE_IF = "else_if"
    ELSE = "else"
    FOR = "for"
    RANGE = "range"
    SWITCH = "switch"
    TYPE_SWITCH = "type_switch"
    CASE = "case"
    DEFAULT = "default"
    SELECT = "select"
    SELECT_CASE = "select_case"
    SELECT_DEFAULT = "select_default"
    BLOCK = "block"
    RETURN = "return"


@dataclass(slots=True)
class Branch:
    """One control-flow node of a function body."""

    kind: BranchKind
    line: int  # 1-based line of the statement start
    excerpt: str  # header only: condition, loop clause, tag expression
    children: list[Branch] = field(default_factory=list)
    # else / default clauses point back at the statement that owns them
    origin_line: int | None = None
    origin_excerpt: str | None = None
    # Written only by mark_reachability(); see filters.prune_to_returns
    reaches_return: bool = False

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass(slots=True)
class FuncInfo:
    """One analyzed function or method."""

    name: str
    receiver: str  # "" for free functions
    is_exported: bool
    line: int = 0
    branches: list[Branch] = field(default_factory=list)


@dataclass(slots=True)
class StructInfo:
    """Methods grouped by owning type, or the synthetic free-function group."""

    name: str
    is_exported: bool
    methods: list[FuncInfo] = field(default_factory=list)

    @property
    def is_free(self) -> bool:
        return self.name == FREE_GROUP_NAME


def is_exported(name: str) -> bool:
    """Go export rule: identifier starts with an upper-case letter."""
    return bool(name) and name[0].isupper()


def compute_reaches_return(branch: Branch) -> bool:
    """Pure recomputation: True if branch or any descendant is a return."""
    if branch.kind == BranchKind.RETURN:
        return True
    return any(compute_reaches_return(child) for child in branch.children)


def mark_reachability(branches: list[Branch]) -> None:
    """Bottom-up pass writing ``reaches_return`` on every node of a forest."""
    for branch in branches:
        mark_reachability(branch.children)
        branch.reaches_return = branch.kind == BranchKind.RETURN or any(
            child.reaches_return for child in branch.children
        )


def iter_branches(branches: list[Branch]):
    """Depth-first, pre-order walk over a forest."""
    for branch in branches:
        yield branch
        yield from iter_branches(branch.children)


@dataclass(slots=True)
class Analysis:
    """Complete analysis result for a single Go file."""

    file_path: str
    package_name: str
    groups: list[StructInfo]

    @property
    def function_count(self) -> int:
        return sum(len(g.methods) for g in self.groups)
