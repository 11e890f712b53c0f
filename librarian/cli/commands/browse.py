"""Search and facet browsing commands."""

import click
import msgspec

from librarian.cli.formatters import (
    format_counts_table,
    format_page_footer,
    format_records_table,
)
from librarian.search import (
    ALL_FORMATS,
    BrowseState,
    FilterCriteria,
    SortOrder,
    TagLogic,
)

SORT_CHOICES = [order.value for order in SortOrder]


@click.command()
@click.argument("query", required=False, default="")
@click.option(
    "--format",
    "-f",
    "fmt",
    default=ALL_FORMATS,
    help="Only books available in this format (e.g. epub, pdf)",
)
@click.option("--tag", "-t", "tags", multiple=True, help="Filter by tag (repeatable)")
@click.option(
    "--any-tag",
    is_flag=True,
    help="Match books with any selected tag instead of all of them",
)
@click.option(
    "--sort",
    "-s",
    type=click.Choice(SORT_CHOICES),
    default=None,
    help="Sort order",
)
@click.option(
    "--page", "-p", type=click.IntRange(min=1), default=1, help="Page number (1-based)"
)
@click.option(
    "--page-size", type=click.IntRange(min=1), default=None, help="Results per page"
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def search(ctx: click.Context, query: str, **kwargs) -> None:
    """Search and filter books.

    Supports the search box syntax:
    - Terms: asimov (matches title, authors, tags, publisher)
    - Phrases: "machine learning"
    - Fields: author:Asimov, title:Foundation, tag:scifi, publisher:Tor
    - Boolean: dune OR foundation (AND is implicit)
    - Exclusion: -tag:fantasy
    """
    obj = ctx.obj
    config = obj.config

    if kwargs["any_tag"]:
        logic = TagLogic.OR
    else:
        logic = TagLogic(str(config.get("tag_logic", "AND")).upper())

    criteria = FilterCriteria(
        query=query,
        format=kwargs["fmt"].strip().lower(),
        tags=tuple(tag.strip() for tag in kwargs["tags"]),
        tag_logic=logic,
        sort=SortOrder(kwargs["sort"] or config.get("sort", SortOrder.DATE_NEWEST.value)),
    )
    state = BrowseState(criteria=criteria).go_to(kwargs["page"])
    page_size = kwargs["page_size"] or int(config.get("page_size", 24))

    page = state.results(obj.records, page_size=page_size)

    if kwargs["output"] == "json":
        payload = {
            "query": query,
            "page": page.number,
            "page_size": page.page_size,
            "total_items": page.total_items,
            "total_pages": page.total_pages,
            "items": [record.to_dict() for record in page.items],
        }
        click.echo(msgspec.json.encode(payload).decode())
        return

    console = obj.console
    console.print(format_records_table(page))
    console.print(format_page_footer(page), style="dim")


@click.command()
@click.argument("text", required=False, default="")
@click.option(
    "--limit", "-n", type=click.IntRange(min=1), default=50, help="Maximum tags to show"
)
@click.pass_context
def tags(ctx: click.Context, text: str, limit: int) -> None:
    """List tags by frequency, optionally filtered by TEXT."""
    facets = ctx.obj.records.facets
    matching = facets.search_tags(text)
    shown = dict(list(matching.items())[:limit])

    title = f"Tags matching '{text}'" if text.strip() else "Tags"
    ctx.obj.console.print(format_counts_table(shown, title, label="Tag", colored=True))
    if len(matching) > len(shown):
        ctx.obj.console.print(
            f"{len(matching) - len(shown)} more tags not shown", style="dim"
        )


@click.command()
@click.pass_context
def formats(ctx: click.Context) -> None:
    """List the file formats present in the library with book counts."""
    facets = ctx.obj.records.facets
    if not facets.format_counts:
        ctx.obj.console.print("[yellow]No formats found[/yellow]")
        return
    ctx.obj.console.print(
        format_counts_table(facets.format_counts, "Formats", label="Format")
    )
