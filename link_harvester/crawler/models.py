"""
Data models for the LinkHarvester crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union
from urllib.parse import urlsplit

from link_harvester.errors import InvalidSeedError


@dataclass(slots=True)
class PageData:
    """Holds the URL and content of a fetched page (text or binary)."""

    url: str
    content: Union[str, bytes]
    content_type: str = ""


@dataclass(frozen=True, slots=True)
class SiteIdentity:
    """Scope of one crawl: host for scoping/limiting, short name for output naming."""

    domain: str
    site_name: str

    @classmethod
    def from_seed(cls, seed: str) -> SiteIdentity:
        """
        Derive the identity from a seed URL.

        ``https://www.example.co.uk/news`` gives domain ``www.example.co.uk``
        and site name ``example``. Raises :class:`InvalidSeedError` when the
        seed has no host.
        """
        try:
            parts = urlsplit(seed.strip())
            # port is validated lazily by urllib
            _ = parts.port
        except (AttributeError, ValueError) as exc:
            raise InvalidSeedError(f"cannot parse seed URL {seed!r}: {exc}") from exc

        domain = parts.netloc
        host = (parts.hostname or "").removeprefix("www.")
        site_name = host.split(".", 1)[0]
        if not domain or not site_name:
            raise InvalidSeedError(f"could not extract site name from URL: {seed!r}")
        return cls(domain=domain, site_name=site_name)


class CrawlState(str, Enum):
    """Lifecycle of a single site crawl."""

    INIT = "init"
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


@dataclass(slots=True)
class CrawlResult:
    """Summary of one finished site crawl."""

    seed: str
    site_name: str
    domain: str
    output_path: Path
    fetched: int = 0
    discovered: int = 0
    errors: int = 0
    cancelled: bool = False
    state: CrawlState = CrawlState.DONE
    duration: float = 0.0
    error_urls: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, object]:
        return {
            "seed": self.seed,
            "site_name": self.site_name,
            "domain": self.domain,
            "output_path": str(self.output_path),
            "fetched": self.fetched,
            "discovered": self.discovered,
            "errors": self.errors,
            "cancelled": self.cancelled,
            "state": self.state.value,
            "duration": round(self.duration, 3),
            "error_urls": list(self.error_urls),
        }


__all__ = ["PageData", "SiteIdentity", "CrawlState", "CrawlResult"]
