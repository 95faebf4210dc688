"""Access scope module - the file-access gate the scanner registers photo paths with."""

import os
import threading
from typing import Dict, Protocol, Set
import logging

logger = logging.getLogger(__name__)


class AccessScope(Protocol):
    """Capability handed to the scanner for granting read access to paths."""

    def allow_directory(self, path: str, recursive: bool) -> None:
        ...

    def allow_file(self, path: str) -> None:
        ...


def _normalize(path: str) -> str:
    return os.path.normcase(os.path.abspath(path))


class FsScope:
    """
    In-process access scope.

    Grants are additive and idempotent; nothing is ever revoked. Registration
    is guarded by a lock so several scans may share one scope.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._files: Set[str] = set()
        # directory -> recursive flag
        self._directories: Dict[str, bool] = {}

    def allow_directory(self, path: str, recursive: bool) -> None:
        """Allow the children of a directory, or all descendants when recursive."""
        key = _normalize(path)
        with self._lock:
            self._directories[key] = self._directories.get(key, False) or recursive
        logger.debug(f"Allowed directory {key} (recursive={recursive})")

    def allow_file(self, path: str) -> None:
        key = _normalize(path)
        with self._lock:
            self._files.add(key)
        logger.debug(f"Allowed file {key}")

    def is_allowed(self, path: str) -> bool:
        """
        Check whether a path is covered by a grant.

        Args:
            path: File or directory path

        Returns:
            True if the path was allowed directly, is a child of an allowed
            directory, or is a descendant of a recursively allowed directory
        """
        key = _normalize(path)
        with self._lock:
            if key in self._files or key in self._directories:
                return True

            parent = os.path.dirname(key)
            if parent in self._directories:
                return True

            # Walk up looking for a recursive grant
            while True:
                if self._directories.get(parent):
                    return True
                next_parent = os.path.dirname(parent)
                if next_parent == parent:
                    return False
                parent = next_parent

    def check(self, path: str) -> None:
        """
        Raise PermissionError unless the path is inside the scope.

        Raises:
            PermissionError: If no grant covers the path
        """
        if not self.is_allowed(path):
            raise PermissionError(f"Path is outside the allowed scope: {path}")
