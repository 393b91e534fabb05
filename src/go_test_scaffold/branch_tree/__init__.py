"""Branch tree: Go control flow reduced to nested test scaffolding.

Public API:
    analyze_file(file_path) -> Analysis
    analyze_source(source, file_path="<source>") -> Analysis
    apply_filters(groups, config) -> list[StructInfo]
"""

from __future__ import annotations

import logging
from pathlib import Path

from go_test_scaffold.branch_tree.extractor import BranchExtractor
from go_test_scaffold.branch_tree.filters import apply_filters
from go_test_scaffold.branch_tree.grouper import group_functions
from go_test_scaffold.branch_tree.parser import ParsedFile, parse_file, parse_source
from go_test_scaffold.branch_tree.types import (
    Analysis,
    Branch,
    BranchKind,
    FuncInfo,
    StructInfo,
    is_exported,
)

logger = logging.getLogger(__name__)


def build_analysis(parsed: ParsedFile) -> Analysis:
    """Extract every function's branches and group them by receiver."""
    extractor = BranchExtractor(parsed.source)
    functions: list[FuncInfo] = []
    for decl in parsed.functions:
        branches = extractor.extract(decl.body)
        logger.debug(
            "%s: %s%s -> %d top-level branch(es)",
            parsed.file_path,
            f"{decl.receiver_type}." if decl.receiver_type else "",
            decl.name,
            len(branches),
        )
        functions.append(
            FuncInfo(
                name=decl.name,
                receiver=decl.receiver_type,
                is_exported=is_exported(decl.name),
                line=decl.line,
                branches=branches,
            )
        )
    return Analysis(
        file_path=parsed.file_path,
        package_name=parsed.package_name,
        groups=group_functions(parsed.type_names, functions),
    )


def analyze_source(source: bytes | str, file_path: str = "<source>") -> Analysis:
    """Analyze Go source held in memory. Raises GoParseError."""
    return build_analysis(parse_source(source, file_path))


def analyze_file(file_path: str | Path) -> Analysis:
    """Read and analyze a Go file. Raises InputError or GoParseError."""
    return build_analysis(parse_file(file_path))


__all__ = [
    "Analysis",
    "Branch",
    "BranchKind",
    "FuncInfo",
    "StructInfo",
    "analyze_file",
    "analyze_source",
    "apply_filters",
    "build_analysis",
]
