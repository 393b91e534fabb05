"""Group analyzed functions under their owning type."""

from __future__ import annotations

from go_test_scaffold.branch_tree.types import (
    FREE_GROUP_NAME,
    FuncInfo,
    StructInfo,
    is_exported,
)


def group_functions(type_names: list[str], functions: list[FuncInfo]) -> list[StructInfo]:
    """Attach every FuncInfo to the StructInfo named by its receiver.

    The free-function group always exists and comes first, followed by
    declared types in declaration order, then types first seen only as a
    receiver (e.g. methods on ``type Celsius float64``), in order of
    first appearance. Methods keep source order within each group.
    """
    free = StructInfo(name=FREE_GROUP_NAME, is_exported=False)
    groups: list[StructInfo] = [free]
    by_name: dict[str, StructInfo] = {FREE_GROUP_NAME: free}

    def _group(name: str) -> StructInfo:
        group = by_name.get(name)
        if group is None:
            group = StructInfo(name=name, is_exported=is_exported(name))
            by_name[name] = group
            groups.append(group)
        return group

    for name in type_names:
        _group(name)
    for func in functions:
        _group(func.receiver).methods.append(func)
    return groups
