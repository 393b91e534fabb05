"""CLI generate command: write test scaffolds for Go source files."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from go_test_scaffold.config import PathMode, Scope
from go_test_scaffold.exceptions import GoParseError, InputError

console = Console()


def generate_cmd(
    sources: Annotated[list[Path], typer.Argument(help="Go source files to scaffold.")],
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
    output_dir: Annotated[
        Path | None, typer.Option("-o", "--output-dir", help="Write files here instead.")
    ] = None,
    gofmt: Annotated[bool, typer.Option("--gofmt/--no-gofmt", help="Format with gofmt.")] = True,
    log_dir: Annotated[
        Path | None, typer.Option("--log-dir", help="Append JSONL run events here.")
    ] = None,
) -> None:
    """Generate nested test scaffolds, one file per type plus one for free functions."""
    from go_test_scaffold.branch_tree.pipeline import generate_file
    from go_test_scaffold.config import Config
    from go_test_scaffold.logging.logger import RunLogger

    config = Config(
        scope=scope,
        paths=paths,
        exclude_constructors=exclude_constructors,
        output_dir=output_dir,
        gofmt=gofmt,
        log_dir=log_dir,
    )
    config.ensure_dirs()
    run_log = RunLogger(config.log_dir)

    failed = False
    for src in sources:
        try:
            with run_log.timed("generate.file", source=str(src)) as event:
                outcome = generate_file(src, config)
                event["functions"] = outcome.function_count
                event["written"] = [str(p) for p in outcome.written]
                event["failed"] = [g.group for g in outcome.failed]
        except InputError as exc:
            console.print(f"[red]error:[/red] {escape(str(exc))}", soft_wrap=True)
            raise typer.Exit(code=1) from None
        except GoParseError as exc:
            console.print(f"[red]parse error:[/red] {escape(str(exc))}", soft_wrap=True)
            failed = True
            continue

        if outcome.nothing_to_generate:
            console.print("No testable functions/methods found.", soft_wrap=True)
            continue

        for group in outcome.groups:
            if group.error is None:
                console.print(f"Generated {escape(str(group.path))}", soft_wrap=True)
            else:
                console.print(f"[red]error:[/red] {escape(str(group.error))}", soft_wrap=True)
        if outcome.failed:
            failed = True
        else:
            console.print(f"Done {escape(str(src))}", soft_wrap=True)

    if failed:
        raise typer.Exit(code=1)
