import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_mirror.config import MirrorConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("seed_url: http://example.com\noutput_dir: out", ".yaml", None),
        (json.dumps({"seed_url": "http://example.com", "output_dir": "out"}), ".json", None),
        ("{}", ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- a\n- b", ".yml", TypeError),
        ("[1, 2]", ".json", TypeError),
        ("{broken", ".json", ValueError),
        ("seed_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, MirrorConfig)
        assert cfg.seed_url == "http://example.com"
        assert cfg.output_dir == Path("out")
        assert cfg.max_parallelism == 1
        assert cfg.request_timeout is None


def test_overrides_take_precedence(tmp_path):
    cfg_path = write_file(
        tmp_path, "seed_url: https://example.com/\noutput_dir: out\nmax_parallelism: 2", ".yaml"
    )
    cfg = load_config(cfg_path, max_parallelism=8, output_dir=None)
    assert cfg.max_parallelism == 8
    assert cfg.output_dir == Path("out")


def test_seed_is_kept_verbatim():
    cfg = load_config(None, seed_url="https://example.com", output_dir="out")
    assert cfg.seed_url == "https://example.com"


@pytest.mark.parametrize(
    "overrides",
    [
        {"seed_url": "ftp://example.com", "output_dir": "out"},
        {"seed_url": "example.com", "output_dir": "out"},
        {"seed_url": "https://example.com", "output_dir": "out", "max_parallelism": 0},
        {"seed_url": "https://example.com", "output_dir": "out", "request_timeout": -1},
        {"seed_url": "https://example.com", "output_dir": "out", "depth": 3},
        {"output_dir": "out"},
    ],
)
def test_invalid_settings(overrides, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValidationError):
        load_config(None, **overrides)


def test_default_config_file_is_used(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "seed_url: https://example.com/\noutput_dir: mirror\n", encoding="utf-8"
    )
    cfg = load_config(None)
    assert cfg.seed_url == "https://example.com/"
    assert cfg.output_dir == Path("mirror")


def test_explicit_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_config_is_frozen(basic_config):
    with pytest.raises(ValidationError):
        basic_config.max_parallelism = 4
