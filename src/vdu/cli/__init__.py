"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="vdu",
    help="vdu - visual disk usage treemap",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .scan import scan as _scan  # noqa: F401, E402
from .serve import serve as _serve  # noqa: F401, E402
from .view import view as _view  # noqa: F401, E402
