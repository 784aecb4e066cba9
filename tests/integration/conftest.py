"""Shared fixtures for integration tests.

These tests wire real components together (load_config, VidEmbedProvider,
the default extractor registry) with HTTP mocked via respx.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
import respx
import yaml

from vidembed.infrastructure.config.load import load_config
from vidembed.plugins.vidembed import VidEmbedProvider

MIRROR_URL = "https://vidembed.mirror.test"


@pytest.fixture()
def respx_mock() -> Iterator[respx.MockRouter]:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def mirror_config_file(tmp_path: Path) -> Path:
    """YAML config pointing the provider at a mirror domain."""
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump(
            {
                "environment": "test",
                "provider": {"main_url": MIRROR_URL},
                "http": {"timeout_seconds": 5.0, "user_agent": "TestAgent/1.0"},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture()
async def provider(mirror_config_file: Path) -> AsyncIterator[VidEmbedProvider]:
    """Provider built from a real layered config; client closed on teardown."""
    config = load_config(config_path=mirror_config_file)
    instance = VidEmbedProvider(config)
    yield instance
    await instance.cleanup()
