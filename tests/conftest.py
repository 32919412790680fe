from __future__ import annotations

import pytest

from catholicnews.config import AppConfig, SourceConfig


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        sources=[
            SourceConfig(identifier="vatican", name="Vatican News", url="https://vatican.example.com/rss"),
            SourceConfig(identifier="cna", name="Catholic News Agency", url="https://cna.example.com/rss"),
            SourceConfig(identifier="ncr", name="National Catholic Register", url="https://ncr.example.com/rss"),
        ]
    )
