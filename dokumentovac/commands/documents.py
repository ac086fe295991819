"""
Document commands for dokumentovac.

Every command reads the stored session, talks to the document service once
and prints the result with rich. ``browse`` opens the interactive view.
"""

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
from rich.table import Table

from ..config.constants import DEFAULT_PAGE_SIZE
from ..exceptions import (
    DokumentovacError,
    ServiceError,
    UnauthenticatedError,
    UserCancelledError,
    ValidationError,
)
from ..services.credentials import CredentialProvider
from ..services.document_service import DocumentServiceClient
from ..services.downloads import FileSaver
from ..ui import messages
from ..ui.forms import DocumentForm, FormMode
from ..ui.query_state import QueryState, build_request_params
from ..ui.viewmodels import DocumentListItem, clamp_page, to_list_item, total_pages
from ..utils.output import console, is_non_interactive, print_json

app = typer.Typer(help="Browse and manage documents")

T = TypeVar("T")


def _require_token(credentials: CredentialProvider) -> str:
    token = credentials.token
    if not token:
        raise UnauthenticatedError(messages.LOGIN_REQUIRED)
    return token


def _call(
    operation: Callable[[DocumentServiceClient, str], Awaitable[T]], fallback: str
) -> T:
    """Run one service operation with the stored token.

    Service errors are printed with the service's own message when it sent
    one, otherwise with ``fallback``.
    """
    try:
        token = _require_token(CredentialProvider.from_session())
    except UnauthenticatedError as e:
        console.print(f"[red]{e.message}[/red]")
        console.print("[dim]Run 'dokumentovac login' first[/dim]")
        raise typer.Exit(1) from e

    async def run() -> T:
        async with DocumentServiceClient() as client:
            return await operation(client, token)

    try:
        return asyncio.run(run())
    except ServiceError as e:
        console.print(f"[red]{e.user_message(fallback)}[/red]")
        raise typer.Exit(1) from e
    except DokumentovacError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


@app.command("list")
def list_documents(
    search: str = typer.Option("", "--search", "-s", help="Search in name and description"),
    tag: str = typer.Option("", "--tag", "-t", help="Show only documents with this tag"),
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    limit: int = typer.Option(DEFAULT_PAGE_SIZE, "--limit", "-n", help="Documents per page"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List one page of documents"""
    state = QueryState(search=search, tag=tag, page=page)
    params = build_request_params(state, limit)

    result = _call(
        lambda client, token: client.list_documents(token, params.as_query()),
        messages.DOCUMENTS_LOAD_FAILED,
    )
    docs = [to_list_item(record) for record in result.records]
    pages = total_pages(result.total, limit)

    if json_output:
        print_json(
            {
                "documents": [_document_dict(doc) for doc in docs],
                "total": result.total,
                "page": state.page,
                "total_pages": pages,
            }
        )
        return

    if not docs:
        console.print(f"[yellow]{messages.NO_DOCUMENTS}[/yellow]")
        last_page = clamp_page(state.page, pages)
        if pages and state.page > last_page:
            console.print(f"[dim]Posledná strana: {last_page}[/dim]")
        return

    table = Table(title="Dokumenty")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Názov", style="magenta")
    table.add_column("Tag", style="green")
    table.add_column("Popis")
    table.add_column("Súbor", style="blue")
    table.add_column("Vytvorené", style="yellow")

    for doc in docs:
        table.add_row(
            str(doc.id),
            doc.name,
            doc.tag_display,
            doc.description_display,
            doc.file_display,
            doc.created_display,
        )

    console.print(table)
    summary = messages.documents_count(result.total)
    if pages > 1:
        summary = f"{messages.page_info(state.page, pages)} | {summary}"
    console.print(f"\n[dim]{summary}[/dim]")


@app.command()
def tags(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List the tags in use"""
    tag_list = _call(lambda client, token: client.list_tags(token), messages.UNEXPECTED_ERROR)

    if json_output:
        print_json(tag_list)
        return

    if not tag_list:
        console.print("[yellow]No tags found[/yellow]")
        return

    for tag in tag_list:
        console.print(f"[cyan]{tag}[/cyan]")


@app.command()
def create(
    name: str = typer.Option(..., "--name", help="Document name"),
    file: Path = typer.Option(..., "--file", "-f", help="File to attach"),
    tag: str = typer.Option("", "--tag", "-t", help="Tag"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
):
    """Create a document with an attached file"""
    form = DocumentForm(FormMode.CREATE)
    form.name = name
    form.tag = tag
    form.description = description
    form.set_file(file)
    submission = _validated(form)

    created = _call(
        lambda client, token: client.create_document(token, submission),
        messages.CREATE_FAILED,
    )
    console.print(f"[green]✅ {messages.DOCUMENT_CREATED}[/green]")
    if created.get("id") is not None:
        console.print(f"[dim]ID: {created['id']}[/dim]")


@app.command()
def edit(
    doc_id: int = typer.Argument(..., help="Document ID"),
    name: str = typer.Option(..., "--name", help="New name"),
    tag: str = typer.Option("", "--tag", "-t", help="New tag"),
    description: str = typer.Option("", "--description", "-d", help="New description"),
):
    """Replace the name, tag and description of a document"""
    form = DocumentForm(
        FormMode.EDIT,
        DocumentListItem(id=doc_id, name=name, tag=tag, description=description),
    )
    submission = _validated(form)

    _call(
        lambda client, token: client.update_document(token, doc_id, submission),
        messages.UPDATE_FAILED,
    )
    console.print(f"[green]✅ {messages.DOCUMENT_UPDATED}[/green]")


@app.command()
def delete(
    doc_id: int = typer.Argument(..., help="Document ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a document"""
    if not yes:
        if is_non_interactive():
            console.print("[red]Error: Refusing to delete without --yes in non-interactive mode[/red]")
            raise typer.Exit(1)
        try:
            _confirm(messages.CONFIRM_DELETE)
        except UserCancelledError as e:
            console.print("[yellow]Zrušené[/yellow]")
            raise typer.Exit(0) from e

    _call(lambda client, token: client.delete_document(token, doc_id), messages.DELETE_FAILED)
    console.print(f"[green]✅ {messages.DOCUMENT_DELETED}[/green]")


@app.command()
def download(
    doc_id: int = typer.Argument(..., help="Document ID"),
    name: str = typer.Option(..., "--name", "-o", help="File name to save as"),
    directory: Optional[Path] = typer.Option(
        None, "--dir", help="Target directory (defaults to the configured download dir)"
    ),
):
    """Download the file attached to a document"""
    content = _call(
        lambda client, token: client.download_document(token, doc_id),
        messages.DOWNLOAD_FAILED,
    )
    try:
        path = FileSaver(directory).save(name, content)
    except OSError as e:
        console.print(f"[red]{messages.DOWNLOAD_FAILED}: {e}[/red]")
        raise typer.Exit(1) from e
    console.print(f"[green]{messages.download_saved(str(path))}[/green]")


@app.command()
def browse(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Initial search"),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Initial tag filter"),
    page: Optional[int] = typer.Option(None, "--page", "-p", help="Initial page"),
    theme: Optional[str] = typer.Option(None, "--theme", help="Textual theme"),
):
    """Open the interactive documents view"""
    from ..ui.app import run_app

    location = None
    if search is not None or tag is not None or page is not None:
        location = QueryState(search=search or "", tag=tag or "", page=page or 1).to_location()

    try:
        run_app(DocumentServiceClient(), CredentialProvider.from_session(), location, theme)
    except KeyboardInterrupt:
        pass
    except DokumentovacError as e:
        console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1) from e


def _confirm(question: str) -> None:
    if not typer.confirm(question):
        raise UserCancelledError(question=question)


def _validated(form: DocumentForm):
    try:
        return form.submit()
    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e


def _document_dict(doc: DocumentListItem) -> dict[str, Any]:
    return {
        "id": doc.id,
        "name": doc.name,
        "tag": doc.tag,
        "description": doc.description,
        "file_name": doc.file_name,
        "file_url": doc.file_url,
        "created_at": doc.created_at.isoformat() if doc.created_at else None,
    }
