"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console

from blogkit.config.exceptions import ConfigError, ConfigExistsError
from blogkit.exceptions import (
    BlogkitError,
    ContentDirectoryNotFoundError,
    OutputDirectoryNotFoundError,
)

console = Console(stderr=True)


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Turn blogkit errors into a readable message and exit code 1.

    Args:
        debug: If True, re-raise so the full traceback is shown.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit, typer.Exit):
        raise
    except ConfigExistsError as e:
        if debug:
            raise
        console.print(f"[bold yellow]Config exists:[/bold yellow] {e}")
        console.print("Pass [bold]--force[/bold] to overwrite it.")
        raise typer.Exit(1) from e
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]Invalid configuration:[/bold red] {e}")
        raise typer.Exit(1) from e
    except ContentDirectoryNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]Content not found:[/bold red] {e}")
        console.print("Set [bold]content_dir[/bold] in .blogkit.toml or pass --content-dir.")
        raise typer.Exit(1) from e
    except OutputDirectoryNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]Site not built:[/bold red] {e}")
        raise typer.Exit(1) from e
    except BlogkitError as e:
        if debug:
            raise
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e
