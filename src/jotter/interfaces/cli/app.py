"""CLI application for jotter using Rich and Typer."""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jotter.core.allocator import allocate_stem
from jotter.core.assembler import DocumentWriteError, EmptyDocumentError, assemble
from jotter.core.config import NOTIFY_ENABLED, setup_logging
from jotter.core.entries import (
    EntryError,
    write_entry,
    write_image_entry,
    write_link_entry,
)
from jotter.core.notify import CommandNotifier, Notifier, NullNotifier
from jotter.core.repository import list_records
from jotter.core.settings import ConfigError, resolve_journal_dir
from jotter.core.types import RecordKind

app = typer.Typer(
    name="jotter",
    help="jotter - a journal kept as files, assembled into one page",
    no_args_is_help=True,
)
add_app = typer.Typer(help="Add a new entry to the journal.", no_args_is_help=True)
app.add_typer(add_app, name="add")

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


def _target_dir(directory: Optional[str], use_cwd: bool) -> Path:
    """Resolve the journal directory from --dir, --cwd or configuration."""
    if directory:
        return Path(directory).expanduser()
    if use_cwd:
        return Path.cwd()
    try:
        return resolve_journal_dir()
    except ConfigError as e:
        _fail(str(e))


def _notifier(enabled: Optional[bool]) -> Notifier:
    if enabled is None:
        enabled = NOTIFY_ENABLED
    if enabled:
        return CommandNotifier()
    return NullNotifier()


DirOption = typer.Option(
    None,
    "--dir",
    "-d",
    help="Journal directory (default: configured JOTTER_JOURNAL_DIR)",
)
CwdOption = typer.Option(
    False,
    "--cwd/--configured",
    help="Use the current directory instead of the configured one",
)


@app.command()
def stem(
    directory: Optional[str] = typer.Argument(
        None, help="Directory to allocate in (default: current directory)"
    ),
):
    """Print a new, unused entry stem for a directory."""
    target = Path(directory).expanduser() if directory else Path.cwd()
    typer.echo(allocate_stem(target))


@app.command()
def build(
    use_cwd: bool = CwdOption,
    directory: Optional[str] = DirOption,
    notify: Optional[bool] = typer.Option(
        None,
        "--notify/--no-notify",
        help="Send a desktop notification (default: $JOTTER_NOTIFY)",
    ),
    recursive: bool = typer.Option(
        False, "--recursive", "-r", help="Include entries in subdirectories"
    ),
):
    """Assemble the journal into index.html."""
    target = _target_dir(directory, use_cwd)

    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        _fail(f"Cannot create journal directory {target}: {e}")

    try:
        result = assemble(target, recursive=recursive)
    except EmptyDocumentError:
        _fail(f"Nothing to show: no journal entries in {target}")
    except DocumentWriteError as e:
        _fail(str(e))

    message = f"Journal written to {result.path} ({result.record_count} entries)"
    console.print(f"[green]{escape(message)}[/green]")
    _notifier(notify).notify(message)


@app.command("list")
def list_entries(
    use_cwd: bool = CwdOption,
    directory: Optional[str] = DirOption,
):
    """Show the journal's entries in document order."""
    target = _target_dir(directory, use_cwd)
    if not target.is_dir():
        _fail(f"Journal directory not found: {target}")

    records = list_records(target)
    if not records:
        console.print("[dim]No entries yet.[/dim]")
        return

    table = Table(title=escape(f"Entries in {target}"), show_header=True)
    table.add_column("#", style="dim")
    table.add_column("Title")
    table.add_column("Kind", style="cyan")
    table.add_column("Preview")

    for i, record in enumerate(records, 1):
        preview = " ".join((record.content or "").split())[:60]
        table.add_row(
            str(i), escape(record.title), record.kind.value, escape(preview)
        )

    console.print(table)


def _text_or_editor(text: Optional[str]) -> str:
    if text is not None:
        return text
    edited = typer.edit()
    if edited is None:
        _fail("Editor closed without saving; no entry written")
    return edited


def _add_text(
    kind: RecordKind, text: Optional[str], directory: Optional[str], use_cwd: bool
):
    target = _target_dir(directory, use_cwd)
    try:
        path = write_entry(target, kind, _text_or_editor(text))
    except (EntryError, OSError) as e:
        _fail(str(e))
    console.print(f"[green]Added {escape(path.name)}[/green]")


TextArgument = typer.Argument(None, help="Entry text (default: open $EDITOR)")


@add_app.command("heading")
def add_heading(
    text: Optional[str] = TextArgument,
    use_cwd: bool = CwdOption,
    directory: Optional[str] = DirOption,
):
    """Add a heading."""
    _add_text(RecordKind.HEADING, text, directory, use_cwd)


@add_app.command("item")
def add_item(
    text: Optional[str] = TextArgument,
    use_cwd: bool = CwdOption,
    directory: Optional[str] = DirOption,
):
    """Add a list item."""
    _add_text(RecordKind.ITEM, text, directory, use_cwd)


@add_app.command("html")
def add_html(
    text: Optional[str] = TextArgument,
    use_cwd: bool = CwdOption,
    directory: Optional[str] = DirOption,
):
    """Add a raw HTML snippet, emitted verbatim."""
    _add_text(RecordKind.RAW_HTML, text, directory, use_cwd)


@add_app.command("link")
def add_link(
    href: str = typer.Option(..., "--href", help="Link target"),
    text: str = typer.Option(..., "--text", help="Link text"),
    use_cwd: bool = CwdOption,
    directory: Optional[str] = DirOption,
):
    """Add a link."""
    target = _target_dir(directory, use_cwd)
    try:
        path = write_link_entry(target, href, text)
    except (EntryError, OSError) as e:
        _fail(str(e))
    console.print(f"[green]Added {escape(path.name)}[/green]")


@add_app.command("image")
def add_image(
    source: Path = typer.Argument(..., help="PNG or JPG file to copy in"),
    use_cwd: bool = CwdOption,
    directory: Optional[str] = DirOption,
):
    """Add an image by copying an existing file."""
    target = _target_dir(directory, use_cwd)
    try:
        path = write_image_entry(target, source)
    except (EntryError, OSError) as e:
        _fail(str(e))
    console.print(f"[green]Added {escape(path.name)}[/green]")


@app.callback()
def main(
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
    ),
):
    """jotter - a journal kept as files, assembled into one page."""
    setup_logging("DEBUG" if debug else None)


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
