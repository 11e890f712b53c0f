"""Main CLI entry point and application setup."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

import click
from click.exceptions import Exit
from rich.console import Console
from rich.markup import escape

from librarian import __version__
from librarian.cli.commands import browse, stats
from librarian.cli.config import load_config
from librarian.core.loader import load_library
from librarian.core.models import RecordSet


@dataclass
class Context:
    """CLI context that holds shared resources."""

    console: Console
    config: dict = field(default_factory=dict)
    library_path: Path | None = None
    debug: bool = False
    _records: RecordSet | None = None

    @property
    def records(self) -> RecordSet:
        """The loaded library, read on first access."""
        if self._records is None:
            if self.library_path is None:
                raise click.UsageError(
                    "No library given. Use --library, LIBRARIAN_LIBRARY "
                    "or the 'library' config key."
                )
            self._records = load_library(self.library_path)
        return self._records


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.WARNING
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_console(no_color: bool = False, width: int | None = None) -> Console:
    """Create Rich console with appropriate settings."""
    return Console(
        no_color=no_color,
        width=width or 120,
        highlight=not no_color,
        color_system=None if no_color else "auto",
    )


class LibrarianGroup(click.Group):
    """Custom group that handles KeyboardInterrupt and reports errors."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except KeyboardInterrupt:
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print("[yellow]Interrupted[/yellow]")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            raise
        except Exception as e:
            debug = getattr(ctx.obj, "debug", False) if ctx.obj else False
            if debug:
                raise
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
            else:
                click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


@click.group(cls=LibrarianGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--library",
    "-l",
    type=click.Path(path_type=Path),
    help="Library JSON export (array of books or object with 'books')",
)
@click.version_option(
    version=__version__, prog_name="librarian", message="librarian version %(version)s"
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: Path | None,
    library: Path | None,
) -> None:
    """Catalogue browser.

    Search, filter and summarize a book library exported as JSON.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)

    try:
        config_data = load_config(config)
    except ValueError as e:
        if debug:
            raise
        click.echo(f"Error loading config file: {e}", err=True)
        ctx.exit(1)

    console = create_console(no_color=no_color or bool(config_data.get("no_color")))

    if library is None and config_data.get("library"):
        library = Path(config_data["library"]).expanduser()

    ctx.obj = Context(
        console=console,
        config=config_data,
        library_path=library,
        debug=debug,
    )


cli.add_command(browse.search)
cli.add_command(browse.tags)
cli.add_command(browse.formats)
cli.add_command(stats.stats)


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
