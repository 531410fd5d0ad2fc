"""link_harvester.supervisor: запуск по одному SiteCrawler на каждый seed и ожидание всех."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Set, Union

from link_harvester.config import HarvestConfig
from link_harvester.crawler.models import CrawlResult, SiteIdentity
from link_harvester.crawler.site_crawler import SiteCrawler
from link_harvester.errors import HarvestError, SeedListError
from link_harvester.logger import LOGGER_NAME

__all__ = ["HarvestReport", "CrawlSupervisor", "read_seeds"]

CrawlerFactory = Callable[[str, HarvestConfig], SiteCrawler]


def read_seeds(path: Union[str, Path]) -> List[str]:
    """Читает список seed-URL: по одному на строку, пустые строки пропускаются."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SeedListError(f"error reading seed list {p}: {exc}") from exc
    return [line.strip() for line in text.splitlines() if line.strip()]


@dataclass(slots=True)
class HarvestReport:
    """Итог запуска: успешные обходы и отброшенные seed-ы с причиной."""

    results: List[CrawlResult] = field(default_factory=list)
    failed_seeds: Dict[str, str] = field(default_factory=dict)
    duration: float = 0.0

    @property
    def total_fetched(self) -> int:
        return sum(r.fetched for r in self.results)

    def as_dict(self) -> dict[str, object]:
        return {
            "sites": [r.as_dict() for r in self.results],
            "failed_seeds": dict(self.failed_seeds),
            "total_fetched": self.total_fetched,
            "duration": round(self.duration, 3),
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


class CrawlSupervisor:
    """Параллельно обходит все seed-ы; сбой одного seed не затрагивает остальные."""

    def __init__(
        self,
        config: HarvestConfig,
        *,
        crawler_factory: CrawlerFactory = SiteCrawler,
    ) -> None:
        self.config = config
        self._crawler_factory = crawler_factory
        self._active: Set[SiteCrawler] = set()
        self.logger = logging.getLogger(LOGGER_NAME)

    def stop(self) -> None:
        """Останавливает все запущенные обходы."""
        for crawler in list(self._active):
            crawler.stop()

    async def run(self, seeds: Iterable[str]) -> HarvestReport:
        seeds = [s.strip() for s in seeds if s and s.strip()]
        report = HarvestReport()
        start = time.monotonic()
        seeds = self._claim_outputs(seeds, report)

        limit = self.config.max_concurrent_sites
        if limit is None:
            await asyncio.gather(*(self._crawl_one(seed, report) for seed in seeds))
        else:
            pending: asyncio.Queue[str] = asyncio.Queue()
            for seed in seeds:
                pending.put_nowait(seed)
            workers = [
                asyncio.create_task(self._pool_worker(pending, report))
                for _ in range(min(limit, len(seeds)))
            ]
            await asyncio.gather(*workers)

        report.duration = time.monotonic() - start
        self.logger.info(
            "Scraping completed for all websites: %d crawled, %d failed, %d links visited",
            len(report.results), len(report.failed_seeds), report.total_fetched,
        )
        return report

    async def _pool_worker(self, pending: asyncio.Queue[str], report: HarvestReport) -> None:
        while True:
            try:
                seed = pending.get_nowait()
            except asyncio.QueueEmpty:
                return
            await self._crawl_one(seed, report)

    async def _crawl_one(self, seed: str, report: HarvestReport) -> None:
        self.logger.info("Starting scrape for: %s", seed)
        crawler: Optional[SiteCrawler] = None
        try:
            crawler = self._crawler_factory(seed, self.config)
            self._active.add(crawler)
            result = await crawler.run()
        except HarvestError as exc:
            self.logger.error("Skipping seed %s: %s", seed, exc)
            report.failed_seeds[seed] = str(exc)
            return
        except Exception as exc:
            self.logger.exception("Crawl of %s failed", seed)
            report.failed_seeds[seed] = f"{type(exc).__name__}: {exc}"
            return
        finally:
            if crawler is not None:
                self._active.discard(crawler)
        report.results.append(result)

    def _claim_outputs(self, seeds: List[str], report: HarvestReport) -> List[str]:
        """
        Give each output file to the first seed that maps to it.

        Later seeds with the same site name would truncate and interleave the
        same <site>.txt, so they are failed up front. Seeds without a usable
        identity pass through and fail inside their own crawl.
        """
        owners: Dict[str, str] = {}
        kept: List[str] = []
        for seed in seeds:
            try:
                name = SiteIdentity.from_seed(seed).site_name
            except HarvestError:
                kept.append(seed)
                continue
            if name in owners:
                reason = f"output {name}.txt already belongs to seed {owners[name]}"
                self.logger.error("Skipping seed %s: %s", seed, reason)
                report.failed_seeds[seed] = reason
                continue
            owners[name] = seed
            kept.append(seed)
        return kept
