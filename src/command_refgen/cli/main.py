"""command-refgen CLI entry point."""

from __future__ import annotations

import typer

from .. import __build__, __version__
from .commands.generate import generate_app

app = typer.Typer(
    name="command-refgen",
    help="📚 Code metrics and command reference generator for Python projects",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(generate_app, name="generate", rich_help_panel="📄 Reports")


@app.command(rich_help_panel="ℹ️  Information")
def version() -> None:
    """Show version information."""
    typer.echo(f"command-refgen {__version__} (build {__build__})")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
