"""Command-line interface for anifranchise.

This package provides the Typer app and Rich console used by every CLI command.

- app: The Typer application object, exposed as the ``anifranchise`` console
  script.
- console: Rich Console instance for consistent, styled output.
"""

from anifranchise.cli.commands import app, console, main

__all__ = ["app", "console", "main"]
