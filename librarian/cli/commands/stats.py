"""Library statistics command."""

import click
import msgspec

from librarian.cli.formatters import format_statistics
from librarian.search.stats import aggregate


@click.command()
@click.option(
    "--output",
    "-o",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def stats(ctx: click.Context, output: str) -> None:
    """Show statistics for the whole library."""
    summary = aggregate(ctx.obj.records)

    if output == "json":
        click.echo(msgspec.json.encode(summary.to_dict()).decode())
        return

    ctx.obj.console.print(format_statistics(summary))
