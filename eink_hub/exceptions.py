"""
Error types raised by the device store.
"""


class StoreError(Exception):
    """The device store failed to complete an operation."""


class ConflictError(StoreError):
    """A device with the same id or MAC already exists."""
