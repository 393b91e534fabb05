"""Root Typer app for the go-test-scaffold CLI."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="go-test-scaffold",
    help="go-test-scaffold: nested Go test stubs that mirror each function's branches.",
    no_args_is_help=True,
)


def _register_commands() -> None:
    """Register all CLI commands."""
    from go_test_scaffold.cli.generate_cmd import generate_cmd
    from go_test_scaffold.cli.show_cmd import show_cmd

    app.command(name="generate")(generate_cmd)
    app.command(name="show")(show_cmd)


_register_commands()
