"""``vdu view``: terminal treemap of a running server's snapshot."""

from pathlib import Path
from typing import Optional

import typer

from ..viewer import fetch_snapshot
from . import app
from ._common import handle_errors, resolve_config


@app.command()
def view(
    url: str = typer.Argument(..., help="Base URL of a running `vdu serve`"),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Fetch the snapshot from URL and browse it in the terminal."""
    from ..viewer.terminal import TreemapApp

    settings = resolve_config(config=config, verbose=verbose)

    with handle_errors():
        tree = fetch_snapshot(url)

    TreemapApp(tree, settings).run()
