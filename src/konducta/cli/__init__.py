"""
CLI layer for konducta.

Provides a Typer application. All run logic lives in ``konducta.bot``;
this package handles only terminal transport: argument parsing and
coloured output.

Entry point::

    konducta --help
"""

from konducta.cli.app import app

__all__ = ["app"]
