"""Tracking of library paths that are being changed."""

import threading
from collections import Counter
from pathlib import PurePath
from typing import Callable, List

from loguru import logger


class LibraryMonitor:
    """
    Keeps the set of paths currently being written by the organizer.

    A path is locked while a change is in progress on it or on one of its
    parent folders. Listeners registered with add_listener are called with
    the path when a change completes with refresh requested.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._changing: Counter = Counter()
        self._listeners: List[Callable[[str], None]] = []

    def add_listener(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def is_path_locked(self, path: str) -> bool:
        """Check if a path or one of its parents is being changed."""
        candidate = PurePath(path)
        with self._lock:
            for changing in self._changing:
                changing_path = PurePath(changing)
                if candidate == changing_path or changing_path in candidate.parents:
                    return True
        return False

    def report_change_beginning(self, path: str) -> None:
        with self._lock:
            self._changing[path] += 1
        logger.debug(f"Change beginning: {path}")

    def report_change_complete(self, path: str, refresh: bool = True) -> None:
        """
        Release a path reported by report_change_beginning.

        Args:
            path: Path that was changed.
            refresh: Notify listeners so the library picks up the change.
        """
        with self._lock:
            self._changing[path] -= 1
            if self._changing[path] <= 0:
                del self._changing[path]
        logger.debug(f"Change complete: {path}")

        if not refresh:
            return

        for listener in self._listeners:
            try:
                listener(path)
            except Exception as e:
                logger.warning(f"Error notifying change of {path}: {e}")
