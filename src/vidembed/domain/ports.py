"""Protocols the host expects providers and extractors to satisfy."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from .entities import (
    ExtractorLink,
    HomePageResponse,
    LoadResponse,
    SearchResponse,
    SubtitleFile,
    TvType,
)

LinkCallback = Callable[[ExtractorLink], None]
SubtitleCallback = Callable[[SubtitleFile], None]


@runtime_checkable
class MainAPI(Protocol):
    """
    Contract between the host application and a content provider.

    A provider module exports a module-level variable named `plugin` that:
    - has `name`, `main_url`, `has_quick_search`, `has_main_page` and
      `supported_types` attributes
    - implements the four async operations below
    """

    name: str
    main_url: str
    has_quick_search: bool
    has_main_page: bool
    supported_types: frozenset[TvType]

    async def search(self, query: str) -> list[SearchResponse]: ...

    async def load(self, url: str) -> LoadResponse | None: ...

    async def get_main_page(self) -> HomePageResponse | None: ...

    async def load_links(
        self,
        data: str,
        is_casting: bool,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool: ...


@runtime_checkable
class ExtractorApi(Protocol):
    """Turns an embedded player URL into playable media links.

    Implementations handle hoster-specific extraction (token URLs, packed
    JavaScript, JSON APIs, ...).
    """

    @property
    def name(self) -> str:
        """Extractor name (also the primary domain it handles, e.g. 'streamtape')."""
        ...

    @property
    def main_url(self) -> str: ...

    @property
    def requires_referer(self) -> bool: ...

    @property
    def supported_domains(self) -> frozenset[str]:
        """Second-level domains of mirrors this extractor also serves."""
        ...

    async def get_url(
        self, url: str, referer: str | None = None
    ) -> list[ExtractorLink]:
        """Return playable links for *url* (empty list when none were found)."""
        ...
