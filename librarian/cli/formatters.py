"""Table formatters for Rich console output.

Provides table formatting for result pages, tag and format facets, and
library statistics.
"""

from rich.box import ROUNDED
from rich.console import Group
from rich.table import Table
from rich.text import Text

from librarian.core.colors import tag_color
from librarian.core.models import Record
from librarian.search.pagination import Page
from librarian.search.stats import CountedValue, LibraryStatistics

MAX_TAGS_PER_ROW = 3


def format_tags(tags: tuple[str, ...] | list[str], limit: int | None = None) -> Text:
    """Render tags as colored text."""
    text = Text()
    shown = [tag.strip() for tag in tags if tag.strip()]
    if limit is not None:
        hidden = len(shown) - limit
        shown = shown[:limit]
    else:
        hidden = 0

    for i, tag in enumerate(shown):
        if i:
            text.append(" ")
        text.append(tag, style=tag_color(tag).style)

    if hidden > 0:
        text.append(f" +{hidden}", style="dim")
    return text


def format_records_table(page: Page[Record], title: str | None = None) -> Table:
    """Format a page of records as a Rich table."""
    table = Table(
        title=title,
        box=ROUNDED,
        show_header=True,
        header_style="bold cyan",
        title_style="bold",
        row_styles=["none", "dim"],
    )

    table.add_column("#", style="dim", width=5, justify="right")
    table.add_column("Title", style="none")
    table.add_column("Authors", style="none")
    table.add_column("Formats", style="magenta", width=12)
    table.add_column("Tags")
    table.add_column("Added", style="yellow", width=10)

    if not page.items:
        table.add_row("", "[dim]No books match the current filters[/dim]", "", "", "", "")
        return table

    for offset, record in enumerate(page.items):
        added = record.added_at
        table.add_row(
            str(page.start + offset),
            record.title,
            record.authors,
            ", ".join(f.strip().lower() for f in record.formats),
            format_tags(record.tags, limit=MAX_TAGS_PER_ROW),
            added.strftime("%Y-%m-%d") if added else "",
        )

    return table


def format_page_footer(page: Page[Record]) -> str:
    """Format the result count and page position."""
    if not page.total_items:
        return "0 results"
    return (
        f"{page.total_items} results, showing {page.start}-{page.end} "
        f"(page {page.number} of {page.total_pages})"
    )


def format_counts_table(
    values: list[CountedValue] | dict[str, int],
    title: str,
    label: str = "Name",
    colored: bool = False,
) -> Table:
    """Format facet values and counts as a table."""
    if isinstance(values, dict):
        values = [CountedValue(name, count) for name, count in values.items()]

    table = Table(title=title, box=ROUNDED, header_style="bold cyan", title_style="bold")
    table.add_column(label)
    table.add_column("Count", justify="right", style="green")

    if not values:
        table.add_row("[dim]None[/dim]", "")
    for value in values:
        name = Text(value.name, style=tag_color(value.name).style) if colored else value.name
        table.add_row(name, str(value.count))

    return table


def format_statistics(stats: LibraryStatistics) -> Group:
    """Format library statistics as a group of tables."""
    summary = Table(box=ROUNDED, show_header=False, title="Library Overview", title_style="bold")
    summary.add_column("Metric", style="bold")
    summary.add_column("Value", justify="right", style="cyan")
    summary.add_row("Total books", str(stats.total_books))
    summary.add_row("Total authors", str(stats.unique_author_count))
    summary.add_row("Languages", str(len(stats.top_languages)))
    summary.add_row("File formats", str(len(stats.top_formats)))

    cloud = Text()
    for i, tag in enumerate(stats.top_tags):
        if i:
            cloud.append("  ")
        style = tag_color(tag.name).style
        if tag.weight >= 1.6:
            style = f"bold {style}"
        cloud.append(tag.name, style=style)

    return Group(
        summary,
        format_counts_table(stats.top_authors, "Top Authors", label="Author"),
        format_counts_table(stats.top_languages, "Languages", label="Language"),
        format_counts_table(stats.top_formats, "Formats", label="Format"),
        Text("Popular Tags", style="bold"),
        cloud,
    )
