# File: tests/test_logger.py
import logging

import pytest

from link_harvester.logger import LOGGER_NAME, configure, site_logger


@pytest.fixture()
def log_file(tmp_path):
    path = tmp_path / "harvest.log"
    configure(level="DEBUG", log_file=path)
    yield path
    configure()


def test_records_carry_site_name(log_file):
    site_logger("example").info("Visiting %s", "http://example.com/a")
    logging.getLogger(LOGGER_NAME).info("Scraping completed")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert lines[0].endswith("[example] Visiting http://example.com/a")
    assert lines[1].endswith("[-] Scraping completed")


def test_configure_replaces_handlers(tmp_path):
    configure(log_file=tmp_path / "one.log")
    lg = configure()
    try:
        assert len(lg.handlers) == 1
        assert lg.propagate is False
    finally:
        configure()
