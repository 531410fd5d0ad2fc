"""
Fetch/parse collaborator: downloads pages over aiohttp, extracts anchors with
BeautifulSoup and reports what happens through registered hooks.

The crawl engine only relies on the hook registration methods, :meth:`visit`
and the limiter passed in, so any object offering the same surface can stand
in for :class:`Collector`.
"""
from __future__ import annotations

import asyncio
from typing import Callable, List, Optional
from urllib.parse import urljoin

from aiohttp import ClientError, ClientSession, ClientTimeout
from bs4 import BeautifulSoup
from bs4.element import Tag

from link_harvester.config import HarvestConfig
from link_harvester.crawler.classifier import is_same_host
from link_harvester.crawler.governor import PolitenessGovernor
from link_harvester.crawler.models import PageData
from link_harvester.errors import FetchError
from link_harvester.logger import site_logger

__all__ = ("Collector", "LinkHook", "RequestHook", "ErrorHook", "make_resolver")

Resolver = Callable[[str], str]
LinkHook = Callable[[str, Resolver], None]
RequestHook = Callable[[str], None]
ErrorHook = Callable[[str, BaseException], None]


def make_resolver(base_url: str) -> Resolver:
    """Return a function turning an href found on *base_url* into an absolute URL."""

    def resolve(href: str) -> str:
        return urljoin(base_url, href.strip())

    return resolve


class Collector:
    """
    Fetches pages through a :class:`PolitenessGovernor` and fires hooks.

    Redirects are followed by hand and only while they stay on the
    governor's host; a redirect elsewhere is a fetch error.
    """

    MAX_REDIRECTS = 10
    _REDIRECT_STATUS = (301, 302, 303, 307, 308)

    def __init__(
        self,
        config: HarvestConfig,
        governor: PolitenessGovernor,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.config = config
        self.governor = governor
        self.session = session
        self._owns_session = session is None
        self._link_hooks: List[LinkHook] = []
        self._request_hooks: List[RequestHook] = []
        self._error_hooks: List[ErrorHook] = []
        self.logger = site_logger(governor.domain)

    async def __aenter__(self) -> Collector:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    # ------------------------------------------------------------------ hooks

    def on_link(self, hook: LinkHook) -> LinkHook:
        self._link_hooks.append(hook)
        return hook

    def on_request(self, hook: RequestHook) -> RequestHook:
        self._request_hooks.append(hook)
        return hook

    def on_error(self, hook: ErrorHook) -> ErrorHook:
        self._error_hooks.append(hook)
        return hook

    # ------------------------------------------------------------------ visit

    async def visit(self, url: str) -> Optional[PageData]:
        """
        Fetch *url* and fire ``on_link`` for every ``<a href>`` on the page.

        Fetch failures are reported to the ``on_error`` hooks and yield None.
        """
        async with self.governor.slot():
            for hook in self._request_hooks:
                hook(url)
            try:
                page = await self._fetch(url)
            except FetchError as exc:
                for error_hook in self._error_hooks:
                    error_hook(url, exc)
                return None

        if isinstance(page.content, str) and page.content:
            self._dispatch_links(page)
        return page

    async def _fetch(self, url: str) -> PageData:
        if not self.session:
            raise RuntimeError("Session not initialized")
        target = url
        try:
            for _ in range(self.MAX_REDIRECTS + 1):
                async with self.session.get(target, allow_redirects=False) as resp:
                    location = resp.headers.get("Location")
                    if resp.status in self._REDIRECT_STATUS and location:
                        target = urljoin(target, location)
                        if not is_same_host(target, self.governor.domain):
                            raise FetchError(
                                url, f"not following redirect to {target}: outside {self.governor.domain}",
                                resp.status,
                            )
                        continue
                    if resp.status >= 400:
                        raise FetchError(url, f"HTTP {resp.status} {resp.reason or ''}".strip(), resp.status)
                    mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                    if "html" not in mime:
                        self.logger.debug("Skipping non-HTML %s (%s)", url, mime or "unknown type")
                        return PageData(target, b"", mime)
                    text = await resp.text(errors="replace")
                    return PageData(target, text, mime)
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchError(url, f"{type(exc).__name__}: {exc}") from exc
        raise FetchError(url, f"stopped after {self.MAX_REDIRECTS} redirects")

    def _dispatch_links(self, page: PageData) -> None:
        soup = BeautifulSoup(page.content, "html.parser")
        resolve = make_resolver(page.url)
        for tag in soup.find_all("a", href=True):
            if not isinstance(tag, Tag):
                continue
            href = tag.get("href")
            if not isinstance(href, str):
                continue
            for hook in self._link_hooks:
                hook(href, resolve)
