"""
Per-crawl deduplication of discovered URLs.
"""
from __future__ import annotations

import threading
from typing import Set
from urllib.parse import urlsplit, urlunsplit

__all__ = ("VisitedSet", "normalize_url")


def normalize_url(url: str) -> str:
    """
    Normalize URL for deduplication: lower-case scheme and host,
    drop the fragment, use ``/`` for an empty path. The query string is kept.
    """
    parts = urlsplit(url)
    path = parts.path or "/"
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ""))


class VisitedSet:
    """Set of normalized URLs seen by one crawl, with atomic check-and-insert."""

    def __init__(self) -> None:
        self._seen: Set[str] = set()
        self._lock = threading.Lock()

    def mark_if_new(self, url: str) -> bool:
        """Record *url* and return True on first sight; return False afterwards."""
        key = normalize_url(url)
        with self._lock:
            if key in self._seen:
                return False
            self._seen.add(key)
            return True

    def __contains__(self, url: object) -> bool:
        if not isinstance(url, str):
            return False
        key = normalize_url(url)
        with self._lock:
            return key in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)
