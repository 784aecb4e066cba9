"""Shared base class for httpx-based providers.

Holds the boilerplate every scraping provider needs: client lifecycle,
URL normalisation, safe fetch/parse and semaphore creation.

This base class lives in the *infrastructure* layer because it depends
on ``httpx``, ``bs4`` and ``structlog``.  The *domain* layer only knows
``MainAPI``; providers that inherit from ``HttpxProviderBase``
structurally satisfy that Protocol.
"""

from __future__ import annotations

import asyncio

import httpx
import structlog
from bs4 import BeautifulSoup

from vidembed.domain.entities import HomePageResponse, LoadResponse, SearchResponse, TvType
from vidembed.domain.ports import LinkCallback, SubtitleCallback
from vidembed.infrastructure.common.html_selectors import parse_html
from vidembed.infrastructure.common.urls import fix_url
from vidembed.infrastructure.config.schema import AppConfig

from .constants import (
    DEFAULT_CLIENT_TIMEOUT,
    DEFAULT_HOME_TIMEOUT,
    DEFAULT_MAX_CONCURRENT,
    DEFAULT_USER_AGENT,
)


class HttpxProviderBase:
    """Shared base for httpx-based providers.

    Subclasses **must** set:
    - ``name``
    - ``main_url``

    Subclasses **must** override:
    - ``search()``, ``load()``, ``load_links()``
    - ``get_main_page()`` when ``has_main_page`` is true

    Passing an ``AppConfig`` overrides ``main_url``, timeouts, concurrency
    and User-Agent.
    """

    # --- Must be set by subclass ---
    name: str = ""
    main_url: str = ""

    # --- Overridable defaults ---
    has_quick_search: bool = False
    has_main_page: bool = False
    supported_types: frozenset[TvType] = frozenset()

    _max_concurrent: int = DEFAULT_MAX_CONCURRENT
    _timeout: float = DEFAULT_CLIENT_TIMEOUT
    _home_timeout: float = DEFAULT_HOME_TIMEOUT
    _user_agent: str = DEFAULT_USER_AGENT

    def __init__(self, config: AppConfig | None = None) -> None:
        self._client: httpx.AsyncClient | None = None
        if config is not None:
            self.main_url = config.main_url
            self._max_concurrent = config.http_max_concurrent
            self._timeout = config.http_timeout_seconds
            self._home_timeout = config.http_home_timeout_seconds
            self._user_agent = config.http_user_agent
        self._log = structlog.get_logger(self.name.lower() or __name__)

    # ------------------------------------------------------------------
    # Client lifecycle
    # ------------------------------------------------------------------

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Create httpx client if not already running."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers={"User-Agent": self._user_agent},
            )
        return self._client

    async def cleanup(self) -> None:
        """Close httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------

    def fix_url(self, url: str) -> str:
        """Turn protocol-relative and site-relative links into absolute URLs."""
        return fix_url(url, self.main_url)

    async def _safe_fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        context: str = "",
        **kwargs: object,
    ) -> httpx.Response | None:
        """Fetch *url* with structured error logging.

        Returns ``None`` on failure instead of raising.
        """
        client = await self._ensure_client()
        prefix = self.name.lower()
        try:
            handler = getattr(client, method.lower(), client.get)
            resp = await handler(url, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.TimeoutException:
            self._log.warning(f"{prefix}_timeout", url=url, context=context)
        except httpx.HTTPStatusError as exc:
            self._log.warning(
                f"{prefix}_http_error",
                url=url,
                status=exc.response.status_code,
                context=context,
            )
        except httpx.HTTPError as exc:
            self._log.warning(
                f"{prefix}_fetch_error",
                url=url,
                error=str(exc),
                context=context,
            )
        return None

    async def _fetch_soup(
        self,
        url: str,
        *,
        context: str = "",
        **kwargs: object,
    ) -> BeautifulSoup | None:
        """GET *url* and parse it; ``None`` when the fetch failed."""
        resp = await self._safe_fetch(url, context=context, **kwargs)
        if resp is None:
            return None
        return parse_html(resp.text)

    def _new_semaphore(self) -> asyncio.Semaphore:
        """Create a bounded semaphore for concurrent page fetches."""
        return asyncio.Semaphore(self._max_concurrent)

    # ------------------------------------------------------------------
    # Provider operations (subclass must implement)
    # ------------------------------------------------------------------

    async def search(self, query: str) -> list[SearchResponse]:
        raise NotImplementedError(f"{type(self).__name__}.search() not implemented")

    async def load(self, url: str) -> LoadResponse | None:
        raise NotImplementedError(f"{type(self).__name__}.load() not implemented")

    async def get_main_page(self) -> HomePageResponse | None:
        raise NotImplementedError(
            f"{type(self).__name__}.get_main_page() not implemented"
        )

    async def load_links(
        self,
        data: str,
        is_casting: bool,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        raise NotImplementedError(
            f"{type(self).__name__}.load_links() not implemented"
        )
