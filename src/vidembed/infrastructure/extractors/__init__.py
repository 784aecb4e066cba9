"""Extractors that turn embedded player URLs into playable links."""

from __future__ import annotations

import httpx

from .doodstream import DoodStreamExtractor
from .mp4upload import Mp4UploadExtractor
from .registry import ExtractorRegistry
from .streamtape import StreamtapeExtractor
from .vidstream import Vidstream
from .xstreamcdn import XStreamCdnExtractor

__all__ = [
    "DoodStreamExtractor",
    "ExtractorRegistry",
    "Mp4UploadExtractor",
    "StreamtapeExtractor",
    "Vidstream",
    "XStreamCdnExtractor",
    "build_default_registry",
]


def build_default_registry(http_client: httpx.AsyncClient) -> ExtractorRegistry:
    """Registry with every bundled hoster extractor sharing *http_client*."""
    return ExtractorRegistry(
        [
            StreamtapeExtractor(http_client),
            DoodStreamExtractor(http_client),
            Mp4UploadExtractor(http_client),
            XStreamCdnExtractor(http_client),
        ]
    )
