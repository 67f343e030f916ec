"""Run-scoped registry of document ids, shared across validation workers."""

from __future__ import annotations

import threading


class IdRegistry:
    """Maps document id -> path of the first file that declared it.

    Thread-safe.  The check and the registration happen under one lock, so
    two workers racing on the same id cannot both become its owner.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._owners: dict[str, str] = {}

    def claim(self, doc_id: str, file: str) -> str | None:
        """Register *file* as owner of *doc_id* unless someone else already is.

        Returns the existing owner's path, or ``None`` when the claim succeeded
        (or *file* already owned the id).
        """
        with self._lock:
            owner = self._owners.get(doc_id)
            if owner is None:
                self._owners[doc_id] = file
                return None
            return None if owner == file else owner

    def owner(self, doc_id: str) -> str | None:
        with self._lock:
            return self._owners.get(doc_id)

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._owners)

    def __len__(self) -> int:
        with self._lock:
            return len(self._owners)
