"""Filter chain: structural passes over the grouped branch trees.

Every pass takes the full group list, may mutate method and branch lists
in place, and returns a possibly shorter list. ``apply_filters`` is the
single entry point; it reads options only from the Config it is given.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from go_test_scaffold.branch_tree.types import Branch, StructInfo, mark_reachability
from go_test_scaffold.config import PathMode, Scope

if TYPE_CHECKING:
    from collections.abc import Iterable

    from go_test_scaffold.config import Config

logger = logging.getLogger(__name__)


def filter_by_scope(groups: list[StructInfo], scope: Scope) -> list[StructInfo]:
    """Keep the free group (func), the named groups (struct), or everything (all)."""
    scope = Scope(scope)
    if scope == Scope.FUNC:
        return [g for g in groups if g.is_free]
    if scope == Scope.STRUCT:
        return [g for g in groups if not g.is_free]
    return groups


def prune_to_returns(branches: list[Branch]) -> list[Branch]:
    """Top-down prune keeping only branches flagged ``reaches_return``.

    Reads flags written by ``mark_reachability`` and never writes them: a
    surviving branch was flagged because some child was flagged, and that
    child survives too, so every kept flag stays true after pruning.
    """
    kept: list[Branch] = []
    for branch in branches:
        if branch.reaches_return:
            branch.children = prune_to_returns(branch.children)
            kept.append(branch)
    return kept


def filter_by_paths(groups: list[StructInfo], paths: PathMode) -> list[StructInfo]:
    """Under ``return``, drop every branch that cannot lead to a return."""
    if PathMode(paths) != PathMode.RETURN:
        return groups
    for group in groups:
        for func in group.methods:
            mark_reachability(func.branches)
            func.branches = prune_to_returns(func.branches)
    return groups


def is_constructor_name(func_name: str, type_name: str, prefixes: Iterable[str]) -> bool:
    """Naming heuristic: ``<prefix><TypeName>``, compared case-insensitively."""
    lowered = func_name.lower()
    return any(lowered == f"{prefix}{type_name}".lower() for prefix in prefixes)


def filter_constructors(
    groups: list[StructInfo],
    type_names: Iterable[str],
    prefixes: Iterable[str] = ("New",),
) -> list[StructInfo]:
    """Remove presumed constructors of known types from the free group.

    Pure name matching; no signature or return-type check is made.
    """
    names = [name for name in type_names if name]
    prefixes = tuple(prefixes)
    for group in groups:
        if not group.is_free:
            continue
        kept = []
        for func in group.methods:
            owner = next((n for n in names if is_constructor_name(func.name, n, prefixes)), None)
            if owner is None:
                kept.append(func)
            else:
                logger.debug("Treating %s as constructor of %s", func.name, owner)
        group.methods = kept
    return groups


def drop_empty_groups(groups: list[StructInfo]) -> list[StructInfo]:
    return [g for g in groups if g.methods]


def apply_filters(groups: list[StructInfo], config: Config) -> list[StructInfo]:
    """Run the whole chain in its fixed order.

    Type names are captured before the scope filter so the constructor
    heuristic sees every type regardless of scope.
    """
    type_names = [g.name for g in groups if not g.is_free]

    if config.exclude_constructors and config.emits_types:
        groups = filter_constructors(groups, type_names, config.constructor_prefixes)
    groups = filter_by_scope(groups, config.scope)
    groups = filter_by_paths(groups, config.paths)

    before = len(groups)
    groups = drop_empty_groups(groups)
    if len(groups) != before:
        logger.info("Dropped %d empty group(s)", before - len(groups))
    return groups
