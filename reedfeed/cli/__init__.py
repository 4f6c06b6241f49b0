"""
Command-Line Interface

CLI commands for reedfeed.

Commands:
    reedfeed import    - Import a document and start a reading session
    reedfeed read      - Show the current chunk, or move through the session
    reedfeed info      - Display the current session
    reedfeed reset     - Delete the current session
    reedfeed markdown  - Print the text extracted from a document
    reedfeed chunks    - List the chunks a document would be split into

Usage:
    # Import a book and read the first chunk
    reedfeed import moby-dick.epub
    reedfeed read

    # Step forward / back / jump (1-based)
    reedfeed read --next
    reedfeed read --prev
    reedfeed read --goto 120

    # Inspect the reconstruction of a PDF
    reedfeed markdown paper.pdf > paper.md
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from reedfeed.config import ReaderConfig
from reedfeed.errors import ReedfeedError

__all__ = ["main", "app"]

app = typer.Typer(
    name="reedfeed",
    help="Read documents one bite-sized chunk at a time",
    no_args_is_help=True,
)
console = Console()


def _config(ctx: typer.Context) -> ReaderConfig:
    if isinstance(ctx.obj, ReaderConfig):
        return ctx.obj
    return ReaderConfig()


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/] {message}")
    raise typer.Exit(code=1)


def _show_chunk(title: str, text: str, position: int, total: int) -> None:
    console.print(Panel(
        Markdown(text),
        title=title,
        subtitle=f"{position + 1} / {total}",
    ))


@app.callback()
def callback(
    ctx: typer.Context,
    session: Optional[Path] = typer.Option(
        None,
        "--session", "-s",
        help="Session file (default: ~/.reedfeed/session.json)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Read documents one bite-sized chunk at a time."""
    load_dotenv()
    config = ReaderConfig() if session is None else ReaderConfig(session_path=session)
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = config


@app.command("import")
def import_(
    ctx: typer.Context,
    path: Path = typer.Argument(
        ...,
        help="PDF, EPUB or plain-text file to import",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Import a document and start a new reading session."""
    from reedfeed.api import import_file
    from reedfeed.storage import JsonSessionStore

    config = _config(ctx)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"Importing {path.name}...")
            session = import_file(path, config)
    except ReedfeedError as exc:
        _fail(f"Could not import {path.name}: {exc}")

    JsonSessionStore(config.session_path).save(session)

    console.print(Panel(
        f"[green]Imported {path.name}[/]\n\n"
        f"  Title: {session.title}\n"
        f"  Chunks: {len(session.chunks)}",
        title="Import Complete",
    ))


@app.command()
def read(
    ctx: typer.Context,
    next_: bool = typer.Option(False, "--next", "-n", help="Move to the next chunk"),
    prev: bool = typer.Option(False, "--prev", "-p", help="Move to the previous chunk"),
    goto: Optional[int] = typer.Option(
        None,
        "--goto", "-g",
        min=1,
        help="Jump to chunk number (1-based)",
    ),
) -> None:
    """Show the current chunk, optionally moving first."""
    from reedfeed.storage import JsonSessionStore

    store = JsonSessionStore(_config(ctx).session_path)
    try:
        session = store.load()
    except ReedfeedError as exc:
        _fail(f"{exc}. Run 'reedfeed reset' or import a new file.")
    if session is None or not session.chunks:
        console.print("[yellow]No reading session. Run 'reedfeed import FILE' first.[/]")
        raise typer.Exit(code=1)

    if goto is not None:
        moved = session.at(goto - 1)
    elif next_:
        moved = session.at(session.position + 1)
    elif prev:
        moved = session.at(session.position - 1)
    else:
        moved = session

    if moved.position != session.position:
        store.save(moved)

    _show_chunk(moved.title, moved.current() or "", moved.position, len(moved.chunks))
    if next_ and moved.position == session.position:
        console.print("[dim]End of document.[/]")


@app.command()
def info(ctx: typer.Context) -> None:
    """Display the current reading session."""
    from reedfeed.storage import JsonSessionStore

    config = _config(ctx)
    try:
        session = JsonSessionStore(config.session_path).load()
    except ReedfeedError as exc:
        _fail(f"{exc}. Run 'reedfeed reset' or import a new file.")
    if session is None:
        console.print("[yellow]No reading session.[/]")
        return

    table = Table(title=f"Session: {session.title}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right", style="green")

    table.add_row("Chunks", str(len(session.chunks)))
    table.add_row("Position", str(session.position + 1))
    table.add_row("Finished", "yes" if session.is_finished else "no")
    table.add_row("File", str(config.session_path))

    console.print(table)


@app.command()
def reset(ctx: typer.Context) -> None:
    """Delete the current reading session."""
    from reedfeed.storage import JsonSessionStore

    JsonSessionStore(_config(ctx).session_path).clear()
    console.print("[green]Session cleared.[/]")


@app.command()
def markdown(
    ctx: typer.Context,
    path: Path = typer.Argument(
        ...,
        help="PDF, EPUB or plain-text file",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Print the text extracted from a document."""
    from reedfeed.api import extract_text

    try:
        text = extract_text(path.read_bytes(), path.name, _config(ctx))
    except ReedfeedError as exc:
        _fail(f"Could not read {path.name}: {exc}")

    console.print(text, markup=False, highlight=False, soft_wrap=True)


@app.command()
def chunks(
    ctx: typer.Context,
    path: Path = typer.Argument(
        ...,
        help="PDF, EPUB or plain-text file",
        exists=True,
        dir_okay=False,
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit", "-l",
        min=1,
        help="Only show the first N chunks",
    ),
) -> None:
    """List the chunks a document is split into."""
    from reedfeed.api import import_file

    try:
        session = import_file(path, _config(ctx))
    except ReedfeedError as exc:
        _fail(f"Could not read {path.name}: {exc}")

    shown = session.chunks[:limit] if limit else session.chunks

    table = Table(title=f"{session.title} ({len(session.chunks)} chunks)")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Chars", justify="right", style="dim")
    table.add_column("Chunk")

    for index, text in enumerate(shown, start=1):
        table.add_row(str(index), str(len(text)), text)

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()
