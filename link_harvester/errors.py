"""
Exception hierarchy for LinkHarvester.

Each class names the scope an error is fatal to: the whole process, a single
seed, or a single fetch.
"""
from __future__ import annotations

__all__ = (
    "HarvestError",
    "SeedListError",
    "InvalidSeedError",
    "SinkError",
    "FetchError",
    "CrawlCancelled",
)


class HarvestError(Exception):
    """Base class for all LinkHarvester errors."""


class SeedListError(HarvestError):
    """Seed list is missing or unreadable; no crawl can start."""


class InvalidSeedError(HarvestError):
    """Seed URL has no usable host, so no site identity can be derived."""


class SinkError(HarvestError):
    """Output directory or per-site file could not be created."""


class FetchError(HarvestError):
    """A single page fetch failed (transport error, timeout or bad status)."""

    def __init__(self, url: str, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class CrawlCancelled(HarvestError):
    """Stop signal observed while waiting for a fetch slot."""
