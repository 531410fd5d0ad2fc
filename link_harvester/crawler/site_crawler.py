"""
Crawl of a single site: traversal, deduplication and output of in-scope links.
"""
from __future__ import annotations

import asyncio
import time
from functools import partial
from typing import Callable, List, Optional

from link_harvester.config import HarvestConfig
from link_harvester.crawler.classifier import is_in_domain, is_same_host, is_valid_link
from link_harvester.crawler.collector import Collector, Resolver
from link_harvester.crawler.governor import PolitenessGovernor
from link_harvester.crawler.models import CrawlResult, CrawlState, SiteIdentity
from link_harvester.crawler.sink import OutputSink
from link_harvester.crawler.visited import VisitedSet, normalize_url
from link_harvester.errors import CrawlCancelled
from link_harvester.logger import site_logger

__all__ = ("SiteCrawler", "CollectorFactory")

CollectorFactory = Callable[[HarvestConfig, PolitenessGovernor], Collector]


class SiteCrawler:
    """
    Crawls one seed's site and appends every newly discovered in-scope URL
    to ``<output_dir>/<site_name>.txt``.

    Only URLs on the seed's exact host (and port) are fetched. Links that pass
    the classifier but live on another host are recorded, not followed.

    ``run()`` raises :class:`~link_harvester.errors.InvalidSeedError` or
    :class:`~link_harvester.errors.SinkError` when the crawl cannot start.
    Errors on individual pages are logged and counted, never raised.
    """

    def __init__(
        self,
        seed: str,
        config: HarvestConfig,
        *,
        collector_factory: Optional[CollectorFactory] = None,
    ) -> None:
        self.seed = seed.strip()
        self.config = config
        self.state = CrawlState.INIT
        self.identity: Optional[SiteIdentity] = None
        self.visited = VisitedSet()
        self.fetched = 0
        self.discovered = 0
        self.error_urls: List[str] = []
        self._collector_factory = collector_factory or Collector
        self._stop_event = asyncio.Event()
        self._seed_key = normalize_url(self.seed)
        self.logger = site_logger(self.seed)

    def stop(self) -> None:
        """Ask the crawl to wind down: queued URLs are dropped, the sink is still closed."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    async def run(self) -> CrawlResult:
        start = time.monotonic()
        identity = SiteIdentity.from_seed(self.seed)
        self.identity = identity
        self.logger = site_logger(identity.site_name)
        governor = PolitenessGovernor(
            identity.domain,
            parallelism=self.config.parallelism,
            delay=self.config.delay,
            stop_event=self._stop_event,
        )

        with OutputSink(self.config.output_dir, identity.site_name) as sink:
            self.logger.info("Allowed domain: %s, writing to %s", identity.domain, sink.path)
            queue: asyncio.Queue[str] = asyncio.Queue()
            try:
                async with self._collector_factory(self.config, governor) as collector:
                    collector.on_request(self._count_request)
                    collector.on_error(self._report_error)
                    collector.on_link(partial(self._handle_link, identity, sink, queue))
                    self.state = CrawlState.RUNNING
                    await self._traverse(collector, queue)
            finally:
                self.state = CrawlState.DRAINING

        self.state = CrawlState.DONE
        duration = time.monotonic() - start
        self.logger.info(
            "Finished %s: %d links visited, %d discovered, %d errors in %.2f s",
            self.seed, self.fetched, self.discovered, len(self.error_urls), duration,
        )
        return CrawlResult(
            seed=self.seed,
            site_name=identity.site_name,
            domain=identity.domain,
            output_path=sink.path,
            fetched=self.fetched,
            discovered=self.discovered,
            errors=len(self.error_urls),
            cancelled=self.stopped,
            state=self.state,
            duration=duration,
            error_urls=list(self.error_urls),
        )

    async def _traverse(self, collector: Collector, queue: asyncio.Queue[str]) -> None:
        queue.put_nowait(self.seed)
        workers = [
            asyncio.create_task(self._worker(collector, queue))
            for _ in range(self.config.parallelism)
        ]
        try:
            if self.config.crawl_timeout is None:
                await queue.join()
            else:
                await asyncio.wait_for(queue.join(), timeout=self.config.crawl_timeout)
        except asyncio.TimeoutError:
            self.logger.warning(
                "Crawl of %s stopped after %.1f s timeout", self.seed, self.config.crawl_timeout
            )
            self.stop()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

    async def _worker(self, collector: Collector, queue: asyncio.Queue[str]) -> None:
        while True:
            url = await queue.get()
            try:
                if not self.stopped:
                    await collector.visit(url)
            except CrawlCancelled:
                self.logger.debug("Dropped %s: crawl stopped", url)
            except Exception:
                self.logger.exception("Unexpected error while crawling %s", url)
                self.error_urls.append(url)
            finally:
                queue.task_done()

    # ------------------------------------------------------------------ hooks

    def _count_request(self, url: str) -> None:
        self.fetched += 1
        self.logger.debug("Visiting %s", url)

    def _report_error(self, url: str, exc: BaseException) -> None:
        self.error_urls.append(url)
        self.logger.error("Error visiting %s: %s", url, exc)

    def _in_scope(self, identity: SiteIdentity, url: str) -> bool:
        if not is_valid_link(url, identity.site_name):
            return False
        return not self.config.strict_scope or is_in_domain(url, identity.domain)

    def _handle_link(
        self,
        identity: SiteIdentity,
        sink: OutputSink,
        queue: asyncio.Queue[str],
        href: str,
        resolve: Resolver,
    ) -> None:
        try:
            absolute = resolve(href)
        except ValueError:
            return
        if not self._in_scope(identity, absolute) or not self.visited.mark_if_new(absolute):
            return

        sink.write(absolute)
        self.discovered += 1
        if self.stopped or normalize_url(absolute) == self._seed_key:
            return
        if is_same_host(absolute, identity.domain):
            queue.put_nowait(absolute)
        else:
            self.logger.debug("Recorded off-host %s without following it", absolute)
