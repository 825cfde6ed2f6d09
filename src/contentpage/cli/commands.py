"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from contentpage.config import Settings, load_config
from contentpage.core.ordering import build_navigation
from contentpage.core.parse import parse_file
from contentpage.core.pipeline import load_pages, run_build
from contentpage.core.render import render, render_document
from contentpage.errors import MalformedDocument


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, verbose: bool = False) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    if verbose:
        overrides = {**(overrides or {}), "log_level": "DEBUG"}
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, force=True)
    return settings


def _echo_errors(errors: list[MalformedDocument]) -> None:
    for e in errors:
        typer.echo(f"  malformed: {e}", err=True)


Verbose = Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output")]


def check_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to check")],
    verbose: Verbose = False,
    ):
    """Parse every page and report malformed front matter."""
    settings = _settings(verbose=verbose)
    pages, errors = load_pages(Path(path), settings.parser_config)
    for page in pages:
        typer.echo(f"  ok: {page.path} ({len(page.blocks)} blocks)")
    _echo_errors(errors)
    typer.echo(f"Checked {len(pages) + len(errors)} page(s), {len(errors)} malformed")
    if errors:
        raise typer.Exit(1)


def render_cmd(
    path: Annotated[str, typer.Argument(help="Content file to render")],
    fmt: Annotated[Optional[str], typer.Option("--format", "-f", help="html, md or json")] = None,
    standalone: Annotated[Optional[bool], typer.Option("--standalone/--fragment", help="Wrap HTML in a full document")] = None,
    verbose: Verbose = False,
    ):
    """Render a single page to stdout."""
    settings = _settings(overrides={"output_format": fmt, "standalone": standalone}, verbose=verbose)
    try:
        page = parse_file(Path(path), settings.parser_config)
    except MalformedDocument as e:
        _fail("Malformed document", e)
    except OSError as e:
        _fail(f"Cannot read {path}", e)

    output = render(page, settings.output_format, settings.parser_config)
    if settings.output_format == 'html' and settings.standalone:
        output = render_document(page, output)
    typer.echo(output, nl=False)


def build_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to build")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", "-f", help="html, md or json")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    drafts: Annotated[Optional[bool], typer.Option("--drafts/--no-drafts", help="Include draft pages")] = None,
    verbose: Verbose = False,
    ):
    """Render every page under path and write the navigation index."""
    settings = _settings(overrides={
        "output_dir": out, "output_format": fmt,
        "parser_config": parser, "include_drafts": drafts,
    }, verbose=verbose)
    output_dir = Path(settings.output_dir)

    try:
        result = run_build(
            path, output_dir, settings.output_format, settings.parser_config,
            settings.include_drafts, settings.standalone,
        )
    except OSError as e:
        _fail("Build failed", e)

    for src, dest in result.written:
        typer.echo(f"  {src} -> {dest}")
    for src in result.drafts:
        typer.echo(f"  draft: {src}")
    _echo_errors(result.errors)
    typer.echo(f"Built {len(result.written)} page(s) to {output_dir}/")
    if not result.ok:
        typer.echo(f"Error: {len(result.errors)} page(s) excluded from the build", err=True)
        raise typer.Exit(1)


def list_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to list")],
    verbose: Verbose = False,
    ):
    """Print pages grouped by directory in navigation order."""
    settings = _settings(verbose=verbose)
    src = Path(path)
    pages, errors = load_pages(src, settings.parser_config)
    if not pages and not errors:
        typer.echo("No pages found.")
        raise typer.Exit(1)

    root = src if src.is_dir() else src.parent
    for section, entries in build_navigation(pages, root).items():
        typer.echo(f"{section}/")
        for entry in entries:
            weight = "-" if entry["weight"] is None else entry["weight"]
            typer.echo(f"  [{weight}] {entry['title'] or entry['slug']} ({entry['path']})")
    _echo_errors(errors)
    if errors:
        raise typer.Exit(1)
