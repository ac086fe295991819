"""
Session commands for dokumentovac: login, logout, whoami.
"""

from typing import Optional

import typer

from ..services.credentials import CredentialProvider
from ..ui import messages
from ..utils.output import console

app = typer.Typer(help="Manage the stored session")


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    token: Optional[str] = typer.Option(
        None, "--token", help="Access token (prompted for when omitted)"
    ),
):
    """Store an access token for later commands"""
    if token is None:
        token = typer.prompt("Token", hide_input=True)

    credentials = CredentialProvider.from_session()
    if not credentials.login(token.strip(), email.strip()):
        console.print("[red]Error: Email and token are required[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✅ Prihlásený ako {credentials.user}[/green]")


@app.command()
def logout():
    """Forget the stored session"""
    credentials = CredentialProvider.from_session()
    if not credentials.is_authenticated:
        console.print("[yellow]Not logged in[/yellow]")
        return
    credentials.logout()
    console.print("[green]Odhlásený[/green]")


@app.command()
def whoami():
    """Show the signed-in user"""
    credentials = CredentialProvider.from_session()
    if not credentials.is_authenticated:
        console.print(f"[yellow]{messages.LOGIN_REQUIRED}[/yellow]")
        raise typer.Exit(1)
    console.print(credentials.user or "[dim](token from environment)[/dim]")
