"""Tests for the renderer module."""

import io

import pytest
from rich.console import Console

from anifranchise.catalog.models import Franchise, FranchiseEntry, FuzzyDate
from anifranchise.cli.renderer import render_franchises


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, no_color=True, width=120), buffer


@pytest.fixture
def franchises() -> list[Franchise]:
    """Two franchises, one with a title that looks like Rich markup."""
    return [
        Franchise(
            title="[Oshi no Ko]",
            entries=(
                FranchiseEntry(
                    id=150672,
                    title="[Oshi no Ko]",
                    start_date=FuzzyDate(year=2023, month=4, day=12),
                ),
                FranchiseEntry(
                    id=166531,
                    title="[Oshi no Ko] 2nd Season",
                    start_date=FuzzyDate(year=2024),
                ),
            ),
        ),
        Franchise(
            title="Ping Pong the Animation",
            entries=(
                FranchiseEntry(
                    id=20592,
                    title="Ping Pong the Animation",
                    start_date=FuzzyDate(),
                ),
            ),
        ),
    ]


def test_render_franchises(franchises: list[Franchise]) -> None:
    """Entries are printed one per line with a blank line after each franchise."""
    console, buffer = _console()
    render_franchises(franchises, console=console)

    assert buffer.getvalue().splitlines() == [
        "[Oshi no Ko]",
        "[Oshi no Ko] 2nd Season",
        "",
        "Ping Pong the Animation",
        "",
        "2 franchises",
    ]


def test_render_with_dates(franchises: list[Franchise]) -> None:
    """Dates are printed as far as they are known."""
    console, buffer = _console()
    render_franchises(franchises, console=console, show_dates=True)

    lines = buffer.getvalue().splitlines()
    assert lines[0] == "2023-04-12  [Oshi no Ko]"
    assert lines[1] == "2024  [Oshi no Ko] 2nd Season"
    assert lines[3] == "?  Ping Pong the Animation"


def test_render_singular_count(franchises: list[Franchise]) -> None:
    """A single franchise is counted in the singular."""
    console, buffer = _console()
    render_franchises(franchises[1:], console=console)
    assert buffer.getvalue().splitlines()[-1] == "1 franchise"


def test_render_nothing() -> None:
    """An empty result still prints the count."""
    console, buffer = _console()
    render_franchises([], console=console)
    assert buffer.getvalue() == "0 franchises\n"
