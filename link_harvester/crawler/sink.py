"""
Append-only per-site output file.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, TextIO

from link_harvester.errors import SinkError
from link_harvester.logger import site_logger

__all__ = ("OutputSink",)


class OutputSink:
    """Writes one discovered URL per line to ``<output_dir>/<site_name>.txt``."""

    def __init__(self, output_dir: Path | str, site_name: str) -> None:
        self.path = Path(output_dir) / f"{site_name}.txt"
        self._fh: Optional[TextIO] = None
        self.logger = site_logger(site_name)

    def open(self) -> OutputSink:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SinkError(f"error creating directory {self.path.parent}: {exc}") from exc
        try:
            self._fh = self.path.open("w", encoding="utf-8")
        except OSError as exc:
            raise SinkError(f"error creating file {self.path}: {exc}") from exc
        self.logger.debug("Opened output %s", self.path)
        return self

    @property
    def closed(self) -> bool:
        return self._fh is None

    def write(self, url: str) -> None:
        if self._fh is None:
            raise SinkError(f"output {self.path} is not open")
        self._fh.write(url + "\n")

    def close(self) -> None:
        if self._fh is None:
            return
        self._fh.flush()
        self._fh.close()
        self._fh = None

    def __enter__(self) -> OutputSink:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
