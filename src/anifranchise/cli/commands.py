"""CLI commands for anifranchise.

This module implements the user-facing commands:
- ``franchises``: fetch a user's completed anime list from AniList and print it
  grouped into franchises.
- ``version``: print the installed version.

Design:
- Typer app and Console are instantiated at module level for reuse across
  commands.
- Annotated is used for CLI argument/option definitions to provide type safety
  and help text.
- Options left unset on the command line fall back to environment variables and
  the config file through ``resolve_setting``.
- Exit codes are defined as an Enum; any fetch failure exits non-zero with the
  error message and never prints a partial listing.
"""

import asyncio
import json
import sys
import time
from enum import Enum
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.traceback import install as install_traceback

from anifranchise.catalog.clients.anilist import AniListClient
from anifranchise.catalog.errors import FetchError
from anifranchise.catalog.models import Franchise
from anifranchise.catalog.rate_limit import DEFAULT_REQUESTS_PER_MINUTE, RateLimiter
from anifranchise.catalog.settings import CatalogSettings
from anifranchise.cli.renderer import render_franchises
from anifranchise.core.franchises import franchise_query_shape, get_franchises
from anifranchise.core.relation_filter import RelationFilter, RelationPolicy
from anifranchise.utils.config import resolve_setting
from anifranchise.utils.debug import error, set_debug

install_traceback(show_locals=False)

app = typer.Typer(
    name="anifranchise",
    help="Group an AniList user's completed anime into franchises.",
    add_completion=False,
)
console = Console()


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


USERNAME = Annotated[str, typer.Argument(help="AniList user name")]

POLICY = Annotated[
    Optional[str],
    typer.Option(
        "--policy",
        "-p",
        help="Relation policy joining titles: "
        + ", ".join(p.value for p in RelationPolicy),
    ),
]

REQUESTS_PER_MINUTE = Annotated[
    Optional[int],
    typer.Option(
        "--requests-per-minute",
        min=1,
        help="Maximum catalog requests per minute",
    ),
]

TIMEOUT = Annotated[
    Optional[float],
    typer.Option(
        "--timeout",
        min=0.0,
        help="Abort the build if it is still running after this many seconds",
    ),
]

SHOW_DATES = Annotated[
    bool,
    typer.Option("--dates", help="Show each title's start date"),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option("--json", help="Output franchises in JSON format"),
]

NO_COLOR = Annotated[
    bool,
    typer.Option("--no-color", help="Disable colored output"),
]

VERBOSE = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log build rounds and requests to stderr"),
]


def build_client(relation_filter: RelationFilter, requests_per_minute: int) -> AniListClient:
    """Create the AniList client for one CLI run."""
    settings = CatalogSettings()
    return AniListClient(
        settings,
        query_shape=franchise_query_shape(
            relation_filter, page_size=settings.ANILIST_PAGE_SIZE
        ),
        rate_limiter=RateLimiter(requests_per_minute),
    )


def _to_json(franchises: list[Franchise]) -> str:
    return json.dumps(
        [franchise.model_dump(mode="json") for franchise in franchises], indent=2
    )


@app.command()
def franchises(
    username: USERNAME,
    policy: POLICY = None,
    requests_per_minute: REQUESTS_PER_MINUTE = None,
    timeout: TIMEOUT = None,
    show_dates: SHOW_DATES = False,
    json_output: JSON_OUTPUT = False,
    no_color: NO_COLOR = False,
    verbose: VERBOSE = False,
) -> None:
    """Fetch USERNAME's completed anime and print them grouped by franchise."""
    out = Console(no_color=True) if no_color else console
    if verbose:
        set_debug(True)

    policy_name = resolve_setting(
        "relations.policy", default=RelationPolicy.KIND_AWARE.value, cli_value=policy
    )
    rpm = resolve_setting(
        "catalog.requests_per_minute",
        default=DEFAULT_REQUESTS_PER_MINUTE,
        cli_value=requests_per_minute,
    )
    build_timeout = resolve_setting("build.timeout", default=0.0, cli_value=timeout)

    # Env and config values skip Typer's own option checks.
    try:
        relation_filter = RelationFilter.from_name(policy_name)
        if rpm < 1:
            raise ValueError(f"requests per minute must be at least 1, got {rpm}")
        if build_timeout < 0:
            raise ValueError(f"timeout must not be negative, got {build_timeout}")
        client = build_client(relation_filter, rpm)
    except ValueError as e:
        out.print(f"[red]Error: {e}[/red]", highlight=False)
        raise typer.Exit(ExitCode.ERROR)
    deadline = time.monotonic() + build_timeout if build_timeout else None

    try:
        with out.status(f"[cyan]Building franchises for {username}...", spinner="dots"):
            result = asyncio.run(
                get_franchises(client, username, relation_filter, deadline=deadline)
            )
    except FetchError as e:
        error(f"Franchise build failed: {e}")
        out.print(f"[red]Error: {e}[/red]", highlight=False)
        raise typer.Exit(ExitCode.ERROR)

    if json_output:
        sys.stdout.write(_to_json(result) + "\n")
    else:
        render_franchises(result, console=out, show_dates=show_dates)


@app.command()
def version() -> None:
    """Show the version of anifranchise."""
    from anifranchise.__about__ import __version__

    console.print(f"anifranchise version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
