"""Logging for **LinkHarvester**.

Many site crawls share one log stream, so crawl-level records are tagged with
the site they belong to::

      from link_harvester.logger import site_logger
      log = site_logger("example")
      log.info("Visiting %s", url)   # ... | [example] Visiting ...

Records logged without a site (supervisor, CLI) carry ``-`` in that column.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Final, MutableMapping, Union

LOGGER_NAME: Final[str] = "LinkHarvester"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | [%(site)s] %(message)s"

_LevelT = Union[int, str]


class _SiteDefault(logging.Filter):
    """Fills ``record.site`` for records that did not come through a SiteLogger."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "site"):
            record.site = "-"
        return True


class SiteLogger(logging.LoggerAdapter):
    """Adapter stamping every record with the crawl's site name."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("site", self.extra["site"])
        kwargs["extra"] = extra
        return msg, kwargs


def site_logger(site: str) -> SiteLogger:
    return SiteLogger(logging.getLogger(LOGGER_NAME), {"site": site})


def _handler(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(_SiteDefault())
    return handler


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """(Re)configure the project logger: stdout, plus a rotating *log_file* if given.

    Existing handlers are closed and replaced, so calling this again (as the
    CLI does per invocation) never duplicates output.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for old in list(lg.handlers):
        old.close()
        lg.removeHandler(old)

    lg.addHandler(_handler(logging.StreamHandler(sys.stdout), log_format))
    if log_file is not None:
        rotating = RotatingFileHandler(
            filename=str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        lg.addHandler(_handler(rotating, log_format))

    lg.propagate = False
    return lg


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "site_logger", "SiteLogger", "LOGGER_NAME", "DEFAULT_FORMAT"]
