#!/usr/bin/env python3
"""
Main CLI entry point for dokumentovac
"""

import typer
from rich.table import Table

from dokumentovac import __version__
from dokumentovac.commands import auth, documents
from dokumentovac.config.settings import get_config_dir, get_env_info, validate_all_env_vars
from dokumentovac.utils.logging_utils import get_log_path, setup_logging
from dokumentovac.utils.output import console


def version():
    """Show dokumentovac version"""
    typer.echo(f"dokumentovac version {__version__}")


def config():
    """Show environment settings and file locations"""
    table = Table(title="Environment")
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_column("Default", style="dim")
    table.add_column("Description", style="dim")

    for name, info in get_env_info().items():
        if not info["is_set"]:
            value = "[dim]not set[/dim]"
        elif info["valid"]:
            value = str(info["value"])
        else:
            value = f"[red]{info['value']} (invalid)[/red]"
        table.add_row(name, value, str(info["default"] or ""), info["description"])

    console.print(table)
    console.print(f"\n[dim]Config dir:[/dim] {get_config_dir()}")
    console.print(f"[dim]Log file:[/dim] {get_log_path()}")


def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
):
    """
    dokumentovac - terminal client for the Dokumentovač document service

    [bold]Examples:[/bold]

    Sign in:
        [cyan]dokumentovac login --email jan@example.sk[/cyan]

    Open the documents view:
        [cyan]dokumentovac browse[/cyan]

    List invoices:
        [cyan]dokumentovac list --tag faktura --search 2024[/cyan]
    """
    errors = validate_all_env_vars()
    if errors:
        for error in errors:
            console.print(f"[red]Error: {error}[/red]")
        raise typer.Exit(1)

    setup_logging(verbose=verbose)


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(
        name="dokumentovac",
        help="Terminal client for the Dokumentovač document service",
        rich_markup_mode="rich",
    )

    for module in (documents, auth):
        for command in module.app.registered_commands:
            app.registered_commands.append(command)

    app.command()(config)
    app.command()(version)
    app.callback()(main)
    return app


app = create_app()


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
