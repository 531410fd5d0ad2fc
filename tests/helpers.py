# File: tests/helpers.py
"""Shared test doubles and aiohttp test-server helpers."""
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from aiohttp import web

from link_harvester.crawler.collector import make_resolver
from link_harvester.errors import FetchError

Graph = Union[Dict[str, List[str]], Callable[[str], List[str]]]


class FakeCollector:
    """
    In-memory stand-in for the aiohttp collector.

    *graph* maps a visited URL to the hrefs found on it (or is a callable
    doing the same); URLs in *failing* fire the error hooks instead.
    """

    def __init__(self, graph: Graph, failing: Iterable[str] = ()) -> None:
        self.graph = graph
        self.failing = set(failing)
        self.visits: List[str] = []
        self.governor = None
        self._link_hooks: list = []
        self._request_hooks: list = []
        self._error_hooks: list = []

    def factory(self, config, governor) -> "FakeCollector":
        self.governor = governor
        return self

    async def __aenter__(self) -> "FakeCollector":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    def on_link(self, hook):
        self._link_hooks.append(hook)
        return hook

    def on_request(self, hook):
        self._request_hooks.append(hook)
        return hook

    def on_error(self, hook):
        self._error_hooks.append(hook)
        return hook

    def _links(self, url: str) -> List[str]:
        if callable(self.graph):
            return self.graph(url)
        return self.graph.get(url, [])

    async def visit(self, url: str) -> None:
        async with self.governor.slot():
            for hook in self._request_hooks:
                hook(url)
            self.visits.append(url)
            await asyncio.sleep(0)
            if url in self.failing:
                for hook in self._error_hooks:
                    hook(url, FetchError(url, "HTTP 500 Internal Server Error", 500))
                return None
        resolve = make_resolver(url)
        for href in self._links(url):
            for hook in self._link_hooks:
                hook(href, resolve)
        return None


def read_lines(path: Path) -> List[str]:
    return path.read_text(encoding="utf-8").splitlines()


async def serve_app(app: web.Application, port: int, host: str = "localhost") -> AsyncIterator[str]:
    """Start *app* on *host*:*port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()


def html_app(pages: Dict[str, str], statuses: Optional[Dict[str, int]] = None) -> web.Application:
    """Build an app serving *pages* (path -> HTML body) and error *statuses*."""
    app = web.Application()
    hits: Dict[str, int] = {}
    app["hits"] = hits

    def make_handler(path: str, body: str):
        async def handler(_):
            hits[path] = hits.get(path, 0) + 1
            return web.Response(text=body, content_type="text/html")

        return handler

    def make_error(path: str, status: int):
        async def handler(_):
            hits[path] = hits.get(path, 0) + 1
            return web.Response(status=status, text="error")

        return handler

    for path, body in pages.items():
        app.router.add_get(path, make_handler(path, body))
    for path, status in (statuses or {}).items():
        app.router.add_get(path, make_error(path, status))
    return app
