from __future__ import annotations


class SyncBusError(Exception):
    """Base class for bus errors."""


class InvalidCapacityError(SyncBusError, ValueError):
    """Raised when a bus is created with a capacity hint of 2 or less."""

    def __init__(self, capacity: object):
        self.capacity = capacity
        super().__init__(f"capacity must be an int greater than 2, got {capacity!r}")


class BusBusyError(SyncBusError, RuntimeError):
    """Raised when a mutating bus operation is re-entered while another is active."""
