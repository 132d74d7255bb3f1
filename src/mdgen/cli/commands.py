"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdgen.config import Settings, load_config
from mdgen.core.pipeline import ConvertError, convert_project, discover_markdown, plan_outputs
from mdgen.logging import LoggingReporter, configure_logging


RootsOpt = Annotated[Optional[list[str]], typer.Option("--root", help="Markdown root directory (repeatable)")]
GeneratedOpt = Annotated[Optional[str], typer.Option("--generated-dir", help="Root holding generated markdown")]
OutOpt = Annotated[Optional[str], typer.Option("--out-dir", help="Output directory for generated Kotlin")]
GroupOpt = Annotated[Optional[str], typer.Option("--group", help="Project group for '.' package shortcuts")]
PagesOpt = Annotated[Optional[str], typer.Option("--pages-package", help="Package for generated pages")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def convert_cmd(
    roots: RootsOpt = None,
    generated: GeneratedOpt = None,
    out: OutOpt = None,
    group: GroupOpt = None,
    pages: PagesOpt = None,
    default_root: Annotated[Optional[str], typer.Option("--default-root", help="Root layout composable wrapping each page")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Convert every markdown file under the roots into a Kotlin page."""
    configure_logging(verbose=verbose)
    settings = _settings(overrides={
        "markdown_roots": roots or None, "generated_dir": generated, "output_dir": out,
        "group": group, "pages_package": pages, "default_root": default_root,
        "parser_config": parser,
    })
    reporter = LoggingReporter()
    try:
        targets = convert_project(settings, reporter)
    except ConvertError as e:
        _fail(str(e))
    for t in targets:
        typer.echo(f"  {t.relative_path} -> {t.output_path}")
    typer.echo(f"Converted {len(targets)} document(s) to {settings.output_dir}/")
    if reporter.warnings:
        typer.echo(f"{len(reporter.warnings)} warning(s); unresolved references were left as written")


def plan_cmd(
    roots: RootsOpt = None,
    generated: GeneratedOpt = None,
    out: OutOpt = None,
    group: GroupOpt = None,
    pages: PagesOpt = None,
    ):
    """Show which Kotlin file each markdown file would produce, without writing anything."""
    settings = _settings(overrides={
        "markdown_roots": roots or None, "generated_dir": generated, "output_dir": out,
        "group": group, "pages_package": pages,
    })
    source_roots = settings.roots()
    files = discover_markdown(source_roots)
    if not files:
        typer.echo("No markdown files found.")
        raise typer.Exit(1)
    try:
        targets = plan_outputs(files, source_roots, Path(settings.output_dir), settings.group, settings.pages_package)
    except ConvertError as e:
        _fail(str(e))
    for t in targets:
        typer.echo(f"  {t.relative_path} -> {t.output_path} ({t.package}.{t.fun_name}, {t.route})")
