"""Main Typer application for blogkit."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from blogkit.cli.errorhandler import handle_cli_errors
from blogkit.config import BlogkitConfig, load_config, write_default_config
from blogkit.content import load_posts
from blogkit.issues import Issue, Severity
from blogkit.lint import lint_tree
from blogkit.logging_setup import configure_logging
from blogkit.output import verify_output

app = typer.Typer(
    name="blogkit",
    help="Lint Markdown blog content and check the generated site against it",
    add_completion=False,
)

console = Console()
logger = logging.getLogger(__name__)

_SEVERITY_STYLE = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to .blogkit.toml (default: search upward)"),
]
ContentDirOption = Annotated[
    Path | None, typer.Option("--content-dir", help="Markdown content directory")
]
DebugOption = Annotated[bool, typer.Option("--debug", help="Show full tracebacks")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Configure logging before any command runs."""
    configure_logging(verbose=verbose)


def _load_settings(
    config_path: Path | None,
    *,
    content_dir: Path | None = None,
    output_dir: Path | None = None,
) -> BlogkitConfig:
    config = load_config(Path.cwd(), config_path=config_path)
    updates = {}
    if content_dir is not None:
        updates["content_dir"] = content_dir.resolve()
    if output_dir is not None:
        updates["output_dir"] = output_dir.resolve()
    if updates:
        config = config.model_copy(update=updates)
    logger.debug("Content dir %s, output dir %s", config.content_dir, config.output_dir)
    return config


def _issue_table(title: str, issues: list[Issue]) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("File", style="cyan", overflow="fold")
    table.add_column("Rule")
    table.add_column("Severity")
    table.add_column("Message", overflow="fold")
    for issue in issues:
        style = _SEVERITY_STYLE[issue.severity]
        table.add_row(
            escape(issue.path.as_posix()),
            issue.rule,
            f"[{style}]{issue.severity.value}[/{style}]",
            escape(issue.message),
        )
    return table


def _print_issues(title: str, issues: list[Issue], fmt: OutputFormat) -> None:
    if fmt is OutputFormat.JSON:
        typer.echo(json.dumps([issue.to_dict() for issue in issues], indent=2))
        return
    if issues:
        console.print(_issue_table(title, issues))


def _exit_code(issues: list[Issue], *, strict: bool) -> int:
    if any(issue.is_error for issue in issues):
        return 1
    if strict and any(issue.severity is Severity.WARNING for issue in issues):
        return 1
    return 0


@app.command()
def lint(
    config_path: ConfigOption = None,
    content_dir: ContentDirOption = None,
    strict: Annotated[bool, typer.Option("--strict", help="Treat warnings as errors")] = False,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Report format")
    ] = OutputFormat.TABLE,
    debug: DebugOption = False,
) -> None:
    """Check front matter and bodies of every post."""
    with handle_cli_errors(debug=debug):
        config = _load_settings(config_path, content_dir=content_dir)
        tree = load_posts(config.content_dir, exclude=config.lint.exclude, tz=config.tz)
        report = lint_tree(tree, config.lint)

    _print_issues("Lint issues", report.issues, output_format)
    if output_format is OutputFormat.TABLE:
        console.print(
            f"Checked {report.checked} file(s): "
            f"[bold red]{len(report.errors)} error(s)[/bold red], "
            f"[yellow]{len(report.warnings)} warning(s)[/yellow]"
        )
    code = _exit_code(report.issues, strict=strict)
    if code:
        raise typer.Exit(code)


@app.command()
def posts(
    config_path: ConfigOption = None,
    content_dir: ContentDirOption = None,
    drafts: Annotated[bool, typer.Option("--drafts/--no-drafts", help="Include draft posts")] = True,
    debug: DebugOption = False,
) -> None:
    """List posts with their date, draft flag and size."""
    with handle_cli_errors(debug=debug):
        config = _load_settings(config_path, content_dir=content_dir)
        tree = load_posts(
            config.content_dir, include_drafts=drafts, exclude=config.lint.exclude, tz=config.tz
        )

    table = Table(title=f"Posts in {config.content_dir}")
    table.add_column("Date", no_wrap=True)
    table.add_column("Title", overflow="fold")
    table.add_column("Path", style="cyan", overflow="fold")
    table.add_column("Draft")
    table.add_column("Words", justify="right")

    ordered = sorted(
        tree.posts,
        key=lambda p: (p.date is None, p.date.timestamp() if p.date else 0.0, p.path.as_posix()),
    )
    for post in ordered:
        table.add_row(
            post.date.date().isoformat() if post.date else "[red]-[/red]",
            escape(post.title) if post.title else "[red](untitled)[/red]",
            escape(post.path.as_posix()),
            "[yellow]yes[/yellow]" if post.draft else "no",
            str(post.word_count),
        )
    console.print(table)
    console.print(f"{len(tree.published)} published, {len(tree.drafts)} draft(s)")
    if tree.failures:
        console.print(f"[red]{len(tree.failures)} file(s) could not be parsed; run 'blogkit lint'[/red]")


@app.command()
def verify(
    config_path: ConfigOption = None,
    content_dir: ContentDirOption = None,
    output_dir: Annotated[Path | None, typer.Option("--output-dir", help="Generated site directory")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Treat warnings as errors")] = False,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Report format")
    ] = OutputFormat.TABLE,
    debug: DebugOption = False,
) -> None:
    """Check that the generated site matches the content."""
    with handle_cli_errors(debug=debug):
        config = _load_settings(config_path, content_dir=content_dir, output_dir=output_dir)
        tree = load_posts(config.content_dir, exclude=config.lint.exclude, tz=config.tz)
        issues = verify_output(tree, config.output_dir, ugly_urls=config.ugly_urls)

    _print_issues("Output issues", issues, output_format)
    if output_format is OutputFormat.TABLE and not issues:
        console.print(f"[green]{config.output_dir} is up to date with {len(tree.published)} post(s)[/green]")
    code = _exit_code(issues, strict=strict)
    if code:
        raise typer.Exit(code)


@app.command("config")
def show_config(
    config_path: ConfigOption = None,
    init: Annotated[bool, typer.Option("--init", help="Write a default .blogkit.toml here")] = False,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file with --init")] = False,
    debug: DebugOption = False,
) -> None:
    """Show the effective configuration, or create a default one."""
    with handle_cli_errors(debug=debug):
        if init:
            path = write_default_config(Path.cwd(), overwrite=force)
            console.print(f"Wrote {path}")
            return
        config = _load_settings(config_path)

    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))
