"""
Per-device playlist rotation.

Cursors live in memory for the lifetime of the process and are not
persisted; after a restart every device starts again at the first image.
"""

from threading import Lock
from typing import Dict, Optional, Sequence


class RotationCursorTable:
    """Maps device id -> index of the next playlist entry to serve."""

    def __init__(self) -> None:
        self._cursors: Dict[str, int] = {}
        self._lock = Lock()

    def advance(self, device_id: str, length: int) -> Optional[int]:
        """
        Return the index to serve now and move the cursor past it.

        Returns None for an empty playlist, leaving the cursor untouched.
        The read and the increment happen under one lock so concurrent
        check-ins for a device each get a distinct index.
        """
        if length <= 0:
            return None

        with self._lock:
            index = self._cursors.get(device_id, 0) % length
            self._cursors[device_id] = (index + 1) % length
            return index

    def select(self, device_id: str, images: Sequence[str], default: str) -> str:
        """Pick the image to serve, falling back to ``default`` when empty."""
        index = self.advance(device_id, len(images))
        if index is None:
            return default
        return images[index]

    def peek(self, device_id: str) -> int:
        """Current raw cursor value (0 if the device was never rotated)."""
        with self._lock:
            return self._cursors.get(device_id, 0)
