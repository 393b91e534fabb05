"""Pydantic report models for dumping an analysis as JSON."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from go_test_scaffold.branch_tree.types import BranchKind

if TYPE_CHECKING:
    from go_test_scaffold.branch_tree.types import Analysis, Branch, FuncInfo, StructInfo


class BranchModel(BaseModel):
    kind: BranchKind
    line: int
    excerpt: str
    reaches_return: bool
    origin_line: int | None = None
    children: list[BranchModel] = []

    @classmethod
    def from_branch(cls, branch: Branch) -> BranchModel:
        return cls(
            kind=branch.kind,
            line=branch.line,
            excerpt=branch.excerpt,
            reaches_return=branch.reaches_return,
            origin_line=branch.origin_line,
            children=[cls.from_branch(c) for c in branch.children],
        )


class FunctionModel(BaseModel):
    name: str
    receiver: str
    is_exported: bool
    line: int
    branches: list[BranchModel] = []

    @classmethod
    def from_func(cls, func: FuncInfo) -> FunctionModel:
        return cls(
            name=func.name,
            receiver=func.receiver,
            is_exported=func.is_exported,
            line=func.line,
            branches=[BranchModel.from_branch(b) for b in func.branches],
        )


class GroupModel(BaseModel):
    name: str
    is_exported: bool
    methods: list[FunctionModel] = []

    @classmethod
    def from_group(cls, group: StructInfo) -> GroupModel:
        return cls(
            name=group.name,
            is_exported=group.is_exported,
            methods=[FunctionModel.from_func(f) for f in group.methods],
        )


class AnalysisReport(BaseModel):
    file_path: str
    package_name: str
    groups: list[GroupModel] = []

    @classmethod
    def from_analysis(cls, analysis: Analysis) -> AnalysisReport:
        return cls(
            file_path=analysis.file_path,
            package_name=analysis.package_name,
            groups=[GroupModel.from_group(g) for g in analysis.groups],
        )
