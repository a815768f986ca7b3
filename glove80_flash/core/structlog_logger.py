"""Structlog logger factory and utilities for glove80-flash."""

from typing import Any

import structlog


def get_struct_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger with the given name.

    Args:
        name: The logger name, usually __name__

    Returns:
        A bound structlog logger instance
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]


class StructlogMixin:
    """Mixin class to add structured logging capabilities to services.

    The bound logger carries the service class name so every event emitted
    by a service can be traced back to it.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the mixin."""
        super().__init__(*args, **kwargs)
        self._logger: structlog.stdlib.BoundLogger | None = None

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Get or create a logger for this service with bound context."""
        if getattr(self, "_logger", None) is None:
            base_logger = get_struct_logger(self.__class__.__module__)
            self._logger = base_logger.bind(service=self.__class__.__name__)
        return self._logger  # type: ignore[return-value]

    def log_operation(
        self, operation: str, **context: Any
    ) -> structlog.stdlib.BoundLogger:
        """Get a logger bound to a specific operation.

        Args:
            operation: Name of the operation being performed
            **context: Additional context for the operation

        Returns:
            Logger bound with operation context
        """
        return self.logger.bind(operation=operation, **context)
