# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from link_harvester.config import HarvestConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("output_dir: out\nparallelism: 4", ".yaml", None),
        (json.dumps({"output_dir": "out", "parallelism": 4}), ".json", None),
        ("parallelism: 0", ".yaml", ValidationError),
        ("unknown_field: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken json", ".json", ValueError),
        ("output_dir = 'out'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, HarvestConfig)
        assert cfg.output_dir == Path("out")
        assert cfg.parallelism == 4
        assert cfg.delay == 1.0


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None)
    assert cfg.seeds_file == Path("urls.txt")
    assert cfg.output_dir == Path("raw-results")
    assert cfg.parallelism == 2
    assert cfg.delay == 1.0
    assert cfg.crawl_timeout is None
    assert cfg.max_concurrent_sites is None
    assert cfg.strict_scope is False


def test_default_yaml_is_picked_up(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("delay: 0.5\n", encoding="utf-8")
    assert load_config(None).delay == 0.5


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_config_is_frozen():
    cfg = HarvestConfig()
    with pytest.raises(ValidationError):
        cfg.parallelism = 5
