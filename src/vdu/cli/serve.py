"""``vdu serve``: scan a directory and serve its treemap to a browser."""

from pathlib import Path
from typing import Optional

import typer

from ..scanning import build_tree_from_path
from ..server.lifecycle import launch_server
from . import app
from ._common import console, handle_errors, resolve_config
from .progress import ScanProgress


@app.command()
def serve(
    path: Path = typer.Argument(..., help="Directory to scan"),
    host: Optional[str] = typer.Option(None, help="Host to bind to [default: localhost]"),
    port: Optional[int] = typer.Option(None, help="Port to listen on [default: any free port]"),
    no_browser: bool = typer.Option(False, "--no-browser", help="Don't open browser"),
    bundle: Optional[Path] = typer.Option(
        None, "--bundle", help="Directory or tar archive to serve as the web viewer"
    ),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also append log records to this file"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Scan PATH, then serve the snapshot and web viewer until Ctrl+C."""
    settings = resolve_config(
        config=config,
        verbose=verbose,
        log_file=log_file,
        host=host,
        port=port,
        open_browser=False if no_browser else None,
        bundle_path=str(bundle) if bundle is not None else None,
    )

    with handle_errors():
        with ScanProgress() as progress:
            tree = build_tree_from_path(path, progress=progress)
        launch_server(tree, settings, console=console, verbose=verbose)
