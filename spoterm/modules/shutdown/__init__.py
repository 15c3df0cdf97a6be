"""Signal-aware runner that stops watchers before the process exits."""

from .coordinator import ShutdownCoordinator

__all__ = ['ShutdownCoordinator']
