"""Decorators for CLI commands."""

from glove80_flash.cli.decorators.error_handling import handle_errors


__all__ = ["handle_errors"]
