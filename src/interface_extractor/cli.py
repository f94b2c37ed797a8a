from __future__ import annotations

import logging
from pathlib import Path
import typing as t

import typer

from .config.settings import settings

app = typer.Typer(add_completion=False, help="Generate Go interfaces from structs tagged with a marker comment")

USAGE = "Usage: <path-to-go-file-or-folder>"


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


@app.command()
def generate(
    path: t.Optional[Path] = typer.Argument(None, help="Path to a Go source file or folder"),
    marker: t.Optional[str] = typer.Argument(None, help="Marker comment that tags a struct (default: settings.MARKER)"),
    formatter: t.Optional[str] = typer.Option(None, help="Formatter backend: goimports, gofmt or none"),
    dry_run: bool = typer.Option(False, help="Print generated files instead of writing them"),
    strict: t.Optional[bool] = typer.Option(None, "--strict/--no-strict", help="Fail on duplicate tagged structs or methods"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    from .errors import InterfaceExtractorError
    from .formatter import get_formatter
    from .generator import generate_interfaces

    if path is None:
        typer.echo(USAGE)
        raise typer.Exit(1)

    _configure_logging(verbose)

    try:
        generated = generate_interfaces(
            path,
            marker,
            formatter=get_formatter(formatter or settings.FORMATTER),
            write=not dry_run,
            strict=strict,
        )
    except InterfaceExtractorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if dry_run:
        for item in generated:
            typer.echo(f"// {item.path}")
            typer.echo(item.source, nl=False)


if __name__ == "__main__":  # pragma: no cover
    app()
