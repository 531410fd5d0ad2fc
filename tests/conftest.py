# File: tests/conftest.py
from __future__ import annotations

from typing import Callable, Iterable

import pytest

from helpers import FakeCollector, Graph
from link_harvester.config import HarvestConfig


@pytest.fixture()
def make_config(tmp_path) -> Callable[..., HarvestConfig]:
    """
    Return a factory for HarvestConfig writing into a temporary output dir.
    Politeness delay defaults to zero to keep tests fast.
    """

    def _make(**overrides) -> HarvestConfig:
        values = {
            "seeds_file": tmp_path / "urls.txt",
            "output_dir": tmp_path / "raw-results",
            "delay": 0.0,
            "timeout": 5.0,
            "user_agent": "TestAgent/1.0",
        }
        values.update(overrides)
        return HarvestConfig(**values)

    return _make


@pytest.fixture()
def fake_collector() -> Callable[..., FakeCollector]:
    def _make(graph: Graph, failing: Iterable[str] = ()) -> FakeCollector:
        return FakeCollector(graph, failing)

    return _make
