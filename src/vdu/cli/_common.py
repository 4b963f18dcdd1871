"""Shared CLI helpers."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console

from ..config import VduConfig, load_config
from ..exceptions import VduError
from ..logging_config import setup_logging

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    **overrides,
) -> VduConfig:
    """Set up logging and build the config from files, environment and CLI options."""
    if verbose and quiet:
        console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(1)
    setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)
    with handle_errors():
        return load_config(config_file=config, verbose=verbose, quiet=quiet, **overrides)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print vdu errors in red and exit with status 1."""
    try:
        yield
    except VduError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)
