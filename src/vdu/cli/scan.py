"""``vdu scan``: scan a directory and print its size summary."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..scanning import build_tree_from_path
from ..scanning.builder import format_size
from . import app
from ._common import console, handle_errors, resolve_config
from .progress import ScanProgress


@app.command()
def scan(
    path: Path = typer.Argument(..., help="Directory to scan"),
    show_tree: bool = typer.Option(False, "--tree", help="Print every node with its aggregates"),
    top: int = typer.Option(10, "--top", "-t", help="Largest direct children to list", min=0),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
) -> None:
    """Scan PATH and report total size, entry count and the largest children."""
    resolve_config(config=config, verbose=verbose, quiet=quiet)

    with handle_errors(), ScanProgress() as progress:
        tree = build_tree_from_path(path, progress=progress)

    if show_tree:
        typer.echo(str(tree), nl=False)
        return

    console.print(f"[bold]{escape(str(tree.root.path if tree.root else path))}[/bold]")
    console.print(f"  {tree.total_count():,} entries, {format_size(tree.total_size())}")

    children = sorted(
        (node for _, node in tree.children()), key=lambda n: n.num_bytes, reverse=True
    )
    if not children or top == 0:
        return

    table = Table(show_edge=False, box=None, padding=(0, 2))
    table.add_column("Size", justify="right", style="cyan")
    table.add_column("Entries", justify="right", style="dim")
    table.add_column("Path")
    for node in children[:top]:
        table.add_row(format_size(node.num_bytes), f"{node.size:,}", escape(node.path))
    console.print()
    console.print(table)
