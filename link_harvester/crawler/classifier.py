"""
Link classification rules deciding which discovered URLs a crawl follows.
"""
from __future__ import annotations

from typing import Any, Final
from urllib.parse import urlsplit

__all__ = ("is_valid_link", "is_in_domain", "is_same_host", "BLOCKED_MARKERS", "BLOCKED_SUFFIXES")

BLOCKED_MARKERS: Final[tuple[str, ...]] = ("mailto:", "tel:", "javascript:", "#")
BLOCKED_SUFFIXES: Final[tuple[str, ...]] = (".pdf", ".jpg", ".png", ".gif", ".doc", ".docx")


def is_valid_link(url: Any, site_name: Any) -> bool:
    """
    Return True if *url* is an in-scope page link for the site *site_name*.

    The checks are plain substring tests: the URL must mention ``http`` and the
    site's short name, must not be a mailto/tel/javascript or fragment link,
    and must not end in a document or image extension. Matching on the short
    name admits unrelated hosts sharing it and misses subdomains without it;
    use :func:`is_in_domain` for an exact host check.
    """
    if not isinstance(url, str) or not isinstance(site_name, str):
        return False
    return (
        "http" in url
        and site_name in url
        and not any(marker in url for marker in BLOCKED_MARKERS)
        and not url.endswith(BLOCKED_SUFFIXES)
    )


def is_in_domain(url: Any, domain: Any) -> bool:
    """Return True if the host of *url* is *domain* or one of its subdomains."""
    if not isinstance(url, str) or not isinstance(domain, str) or not domain:
        return False
    try:
        parts = urlsplit(url)
        host = (parts.hostname or "").lower()
    except ValueError:
        return False
    base = (urlsplit(f"//{domain}").hostname or "").lower().removeprefix("www.")
    if not host or not base:
        return False
    host = host.removeprefix("www.")
    return host == base or host.endswith("." + base)


def _host_port(url: str) -> tuple[str, int | None]:
    parts = urlsplit(url)
    return (parts.hostname or "").lower(), parts.port


def is_same_host(url: Any, domain: Any) -> bool:
    """
    Return True if *url* points at exactly the host (and port) *domain*.

    This is the fetch boundary of a crawl: links elsewhere may still be
    recorded, but they are never requested.
    """
    if not isinstance(url, str) or not isinstance(domain, str) or not domain:
        return False
    try:
        host, port = _host_port(url)
        want_host, want_port = _host_port(f"//{domain}")
    except ValueError:
        return False
    return bool(host) and host == want_host and port == want_port
