"""Renderer for CLI output.

This module prints franchises to the console: each franchise's entry titles one
per line in release order, a blank line between franchises, and a final count.
- Uses Rich for all output so --no-color and recording consoles behave the
  same as the rest of the CLI.
- Titles are printed without markup or highlighting; catalog titles regularly
  contain brackets.
"""

from rich.console import Console

from anifranchise.catalog.models import Franchise


def render_franchises(
    franchises: list[Franchise],
    console: Console | None = None,
    *,
    show_dates: bool = False,
) -> None:
    """Render franchises as plain title listings.

    Args:
        franchises: The franchises to render, already ordered.
        console: Optional Console instance to use for rendering.
        show_dates: Prefix each title with its start date.

    Returns:
        None. Prints the listing and summary to the console.
    """
    console = console or Console()

    for franchise in franchises:
        for entry in franchise.entries:
            line = f"{entry.start_date}  {entry.title}" if show_dates else entry.title
            console.print(line, markup=False, highlight=False)
        console.print()

    count = len(franchises)
    console.print(f"{count} franchise{'s' if count != 1 else ''}", style="bold")
