# File: link_harvester/engine.py
"""link_harvester.engine: точка сборки — чтение seed-ов и запуск CrawlSupervisor."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from link_harvester.config import HarvestConfig
from link_harvester.logger import logger
from link_harvester.supervisor import CrawlSupervisor, HarvestReport, read_seeds

__all__ = ["start_harvest"]


async def start_harvest(
    cfg: HarvestConfig, seeds_file: Optional[Union[str, Path]] = None
) -> HarvestReport:
    """
    Читает seed-файл и обходит все сайты.

    Список seed-ов читается один раз, до старта обходов. Если файла нет,
    пробрасывается SeedListError и ни один обход не запускается.
    """
    seeds = read_seeds(seeds_file or cfg.seeds_file)
    logger.info("Loaded %d seeds, writing results to %s", len(seeds), cfg.output_dir)
    supervisor = CrawlSupervisor(cfg)
    return await supervisor.run(seeds)
