"""Shared test fixtures for the VidEmbed provider test suite."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from vidembed.domain.entities import ExtractorLink, SubtitleFile
from vidembed.infrastructure.config.schema import AppConfig

MAIN_URL = "https://vidembed.cc"


@pytest.fixture(autouse=True)
def _clear_vidembed_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep VIDEMBED_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("VIDEMBED_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture()
def app_config() -> AppConfig:
    """Validated config with defaults and the canonical main URL."""
    return AppConfig(main_url=MAIN_URL, environment="test")


class LinkCollector:
    """Records everything a provider emits through its callbacks."""

    def __init__(self) -> None:
        self.links: list[ExtractorLink] = []
        self.subtitles: list[SubtitleFile] = []

    def on_link(self, link: ExtractorLink) -> None:
        self.links.append(link)

    def on_subtitle(self, subtitle: SubtitleFile) -> None:
        self.subtitles.append(subtitle)


@pytest.fixture()
def collector() -> LinkCollector:
    return LinkCollector()
