"""Command line interface for glove80-flash."""

from glove80_flash.cli.app import app, main


__all__ = ["app", "main"]
