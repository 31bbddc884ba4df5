"""CLI interface for folio."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from folio.blog.collection import SortOrder, assemble
from folio.config import FolioConfig, load_config, merge_cli_overrides
from folio.errors import IngestReport

app = typer.Typer(
    name="folio",
    help="Inspect a directory of markdown blog posts.",
    no_args_is_help=True,
)

console = Console()
_stderr_console = Console(stderr=True)

DirectoryArg = Annotated[
    Optional[Path],
    typer.Argument(
        help="Blog content directory. Defaults to the configured directory.",
        show_default=False,
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from folio import __version__

        console.print(f"folio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .folio.toml file."),
    ] = None,
) -> None:
    """Folio - list, show and check markdown blog posts."""
    # Diagnostics are printed by the commands themselves; their WARNING log
    # records only surface with --verbose.
    level = logging.DEBUG if verbose else logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = load_config(config_path)


def _config(ctx: typer.Context, **overrides: object) -> FolioConfig:
    config = ctx.obj if isinstance(ctx.obj, FolioConfig) else load_config()
    return merge_cli_overrides(config, **overrides)


def _print_diagnostics(report: IngestReport) -> None:
    for diag in report.diagnostics:
        label = "[red]skipped[/red]" if diag.skipped else "[yellow]warning[/yellow]"
        _stderr_console.print(
            f"{label} {escape(diag.source)} ({diag.kind.value}): {escape(diag.message)}"
        )


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    directory: DirectoryArg = None,
    order: Annotated[
        Optional[SortOrder],
        typer.Option("--order", "-o", help="Sort by date: asc or desc."),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table or json."),
    ] = "table",
) -> None:
    """List every valid post, sorted by publication date."""
    if output_format not in ("table", "json"):
        console.print(f"[red]Error:[/red] Unsupported format: {escape(output_format)}")
        raise typer.Exit(1)

    config = _config(ctx, content_dir=directory, sort_order=order)
    report = IngestReport()
    collection = assemble(config.content_dir, order=config.content.sort_order, report=report)
    _print_diagnostics(report)

    if output_format == "json":
        print(json.dumps([meta.model_dump() for meta in collection.list()], indent=2))
        return

    if not len(collection):
        console.print("[yellow]No posts yet.[/yellow]")
        return

    table = Table(title=f"Posts in {config.content_dir}")
    table.add_column("Date", no_wrap=True)
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Tags")
    for meta in collection.list():
        table.add_row(
            meta.date,
            escape(meta.slug),
            escape(meta.title),
            escape(meta.author),
            escape(", ".join(meta.tags)),
        )
    console.print(table)


@app.command("show")
def show_cmd(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Slug of the post to show.")],
    directory: DirectoryArg = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: html or json."),
    ] = "html",
) -> None:
    """Print one post's rendered HTML (or full JSON record)."""
    if output_format not in ("html", "json"):
        console.print(f"[red]Error:[/red] Unsupported format: {escape(output_format)}")
        raise typer.Exit(1)

    config = _config(ctx, content_dir=directory)
    report = IngestReport()
    post = assemble(config.content_dir, report=report).find_by_slug(slug)
    _print_diagnostics(report)

    if post is None:
        console.print(f"[red]Error:[/red] Post not found: {escape(slug)}")
        raise typer.Exit(1)

    if output_format == "json":
        print(json.dumps(post.to_dict(), indent=2))
    else:
        print(post.content)


@app.command("check")
def check_cmd(
    ctx: typer.Context,
    directory: DirectoryArg = None,
) -> None:
    """Ingest every post file and report any that would be skipped."""
    config = _config(ctx, content_dir=directory)
    report = IngestReport()
    assemble(config.content_dir, report=report)

    _print_diagnostics(report)
    console.print(report.summary_text(include_diagnostics=False), markup=False)

    if report.has_errors:
        raise typer.Exit(1)
    console.print("[bold green]All posts valid.[/bold green]")
