"""CLI interface for ksum.

Typer-based command-line interface with Rich output formatting. Results go to
stdout; diagnostics, timing and logs go to stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ksum import __version__
from ksum.config import CONFIG_FILE, default_config, load_config, save_config, validate_config
from ksum.exceptions import ConfigError, KsumError, LineError, LineErrorGroup
from ksum.ingest.lines import ErrorPolicy
from ksum.pipeline import SearchPipeline
from ksum.timing import measure_duration

__all__ = ["app"]

app = typer.Typer(
    name="ksum",
    help="Find k values in a line-delimited list that sum to a target and print their product.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

EXIT_NO_SOLUTION = 1
EXIT_INPUT_ERROR = 2


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log progress to stderr"),
    ] = False,
) -> None:
    """ksum — complement-sum search over numeric records."""
    _configure_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def version() -> None:
    """Show ksum version."""
    console.print(f"ksum {__version__}")


@app.command()
def init(
    path: Annotated[
        Path,
        typer.Argument(help="Where to write the config file"),
    ] = Path(CONFIG_FILE),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Write a default config file."""
    if path.exists() and not force:
        err_console.print(
            f"[yellow]{path} already exists.[/yellow] Use [bold]--force[/bold] to overwrite."
        )
        raise typer.Exit(code=1)

    try:
        save_config(default_config(), path)
    except ConfigError as e:
        err_console.print(f"[red]Failed to write config:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Wrote default config[/green] to {path}")


@app.command()
def solve(
    path: Annotated[
        str,
        typer.Argument(help="Input file, one integer per line ('-' for stdin)"),
    ] = "-",
    size: Annotated[
        int | None,
        typer.Option("--size", "-k", help="Number of values to combine (2 or 3)"),
    ] = None,
    target: Annotated[
        int | None,
        typer.Option("--target", "-t", help="Required sum (default 2020)"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a ksum.toml config file"),
    ] = None,
    on_error: Annotated[
        ErrorPolicy | None,
        typer.Option("--on-error", help="Stop at the first bad line or report all of them"),
    ] = None,
    measure: Annotated[
        bool,
        typer.Option(
            "--time",
            help=(
                "Report wall-clock duration on stderr when the search ends,"
                " before the result or the no-solution message"
            ),
        ),
    ] = False,
) -> None:
    """Search the input and print the product of the matched values."""
    logger = logging.getLogger(__name__)

    try:
        config = load_config(config_path) if config_path is not None else default_config()
        if size is not None:
            config.search.size = size
        if target is not None:
            config.search.target = target
        if on_error is not None:
            config.input.on_error = on_error.value
        if measure:
            config.report.measure_duration = True
        validate_config(config)
    except ConfigError as e:
        err_console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_INPUT_ERROR) from e

    pipeline = SearchPipeline(config)

    with measure_duration(config.report.measure_duration, err_console):
        try:
            if path == "-":
                match = pipeline.run(typer.get_binary_stream("stdin"))
            else:
                with Path(path).open("rb") as source:
                    match = pipeline.run(source)
        except OSError as e:
            err_console.print(f"[red]Cannot open input:[/red] {escape(str(e))}")
            raise typer.Exit(code=EXIT_INPUT_ERROR) from e
        except LineErrorGroup as e:
            for error in e.errors:
                _print_line_error(error)
            raise typer.Exit(code=EXIT_INPUT_ERROR) from e
        except LineError as e:
            _print_line_error(e)
            raise typer.Exit(code=EXIT_INPUT_ERROR) from e
        except KsumError as e:
            logger.error("Search failed: %s", e)
            err_console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(code=EXIT_INPUT_ERROR) from e

    if match is None:
        err_console.print("No solutions found")
        raise typer.Exit(code=EXIT_NO_SOLUTION)

    console.print(str(match.product))


def _print_line_error(error: LineError) -> None:
    err_console.print(f"[red]{escape(str(error))}[/red]")


def _configure_logging(level: int) -> None:
    """Route ksum log records to stderr through Rich."""
    pkg_logger = logging.getLogger("ksum")
    pkg_logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        pkg_logger.addHandler(RichHandler(console=err_console, show_path=False))
