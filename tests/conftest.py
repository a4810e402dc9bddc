# File: tests/conftest.py
from pathlib import Path
from typing import Dict, List

import pytest

from site_mirror.config import MirrorConfig
from site_mirror.errors import TransportError
from site_mirror.logger import configure


class FakeFetcher:
    """Serves canned page bodies and records every requested URL."""

    def __init__(self, pages: Dict[str, bytes]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def get(self, url: str) -> bytes:
        self.calls.append(url)
        try:
            return self.pages[url]
        except KeyError:
            raise TransportError("connection refused", url) from None


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests point the logger at CliRunner streams; restore it afterwards."""
    yield
    configure(level="INFO")


@pytest.fixture()
def out_dir(tmp_path) -> Path:
    return tmp_path / "out"


@pytest.fixture()
def basic_config(out_dir) -> MirrorConfig:
    """
    Return a basic valid MirrorConfig for crawler tests.
    """
    return MirrorConfig(seed_url="https://example.com/", output_dir=out_dir)


@pytest.fixture()
def fake_fetcher():
    """Factory building a FakeFetcher from a url -> html mapping."""

    def _make(pages: Dict[str, str]) -> FakeFetcher:
        return FakeFetcher({url: html.encode("utf-8") for url, html in pages.items()})

    return _make
