"""CLI show command: preview the filtered branch tree without writing files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from go_test_scaffold.config import PathMode, Scope
from go_test_scaffold.exceptions import ScaffoldError

if TYPE_CHECKING:
    from go_test_scaffold.branch_tree.types import Branch

console = Console()


def _add_branches(node: Tree, branches: list[Branch]) -> None:
    from go_test_scaffold.branch_tree.renderer import branch_label

    for branch in branches:
        style = "green" if branch.reaches_return else "dim"
        child = node.add(f"[{style}]{escape(branch_label(branch))}[/{style}]")
        _add_branches(child, branch.children)


def show_cmd(
    source: Annotated[Path, typer.Argument(help="Go source file to analyze.")],
    scope: Annotated[Scope, typer.Option(help="Emit free functions, types, or both.")] = Scope.ALL,
    paths: Annotated[
        PathMode, typer.Option(help="Keep all branches, or only those reaching a return.")
    ] = PathMode.ALL,
    exclude_constructors: Annotated[
        bool,
        typer.Option(
            "--exclude-constructors/--keep-constructors",
            help="Skip free functions named New<Type> when type suites are generated.",
        ),
    ] = False,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
) -> None:
    """Show the branch tree that generate would render."""
    from go_test_scaffold.branch_tree import analyze_file, apply_filters
    from go_test_scaffold.branch_tree.models import AnalysisReport
    from go_test_scaffold.config import Config

    config = Config(scope=scope, paths=paths, exclude_constructors=exclude_constructors)
    try:
        analysis = analyze_file(source)
    except ScaffoldError as exc:
        console.print(f"[red]error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=1) from None

    analysis.groups = apply_filters(analysis.groups, config)

    if output_json:
        typer.echo(AnalysisReport.from_analysis(analysis).model_dump_json(indent=2))
        return

    if not analysis.groups:
        console.print("No testable functions/methods found.")
        return

    root = Tree(f"[bold]package {escape(analysis.package_name)}[/bold]")
    for group in analysis.groups:
        label = "free functions" if group.is_free else f"type {group.name}"
        group_node = root.add(f"[cyan]{escape(label)}[/cyan]")
        for func in group.methods:
            func_node = group_node.add(f"[bold]{escape(func.name)}[/bold] (L{func.line})")
            _add_branches(func_node, func.branches)
    console.print(root)
