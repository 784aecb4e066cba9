"""Vidstream player extractor.

Vidstream clones (VidEmbed, GogoStream, ...) serve a ``streaming.php``
page listing one ``li.linkserver`` per mirror; each ``data-video``
attribute is an embed URL on a third-party hoster which the
:class:`ExtractorRegistry` resolves.
"""

from __future__ import annotations

import httpx
import structlog

from vidembed.domain.ports import LinkCallback
from vidembed.infrastructure.common.html_selectors import extract_attr, parse_html
from vidembed.infrastructure.common.urls import fix_url

from ..providers.constants import DEFAULT_EXTRACTOR_TIMEOUT
from .registry import ExtractorRegistry

log = structlog.get_logger(__name__)


class Vidstream:
    """Fans the mirrors of a Vidstream ``streaming.php`` page out to the registry."""

    name = "Vidstream"

    def __init__(
        self,
        main_url: str,
        http_client: httpx.AsyncClient,
        registry: ExtractorRegistry,
    ) -> None:
        self.main_url = main_url.rstrip("/")
        self._http = http_client
        self._registry = registry

    def get_extractor_url(self, video_id: str) -> str:
        return f"{self.main_url}/streaming.php?id={video_id}"

    async def get_url(
        self,
        video_id: str,
        is_casting: bool,
        callback: LinkCallback,
    ) -> bool:
        """Resolve every mirror of *video_id*; ``False`` if the page is unreachable."""
        url = self.get_extractor_url(video_id)
        try:
            resp = await self._http.get(url, timeout=DEFAULT_EXTRACTOR_TIMEOUT)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            log.warning("vidstream_fetch_error", url=url, error=str(exc))
            return False

        soup = parse_html(resp.text)
        mirrors = [
            fix_url(data_video, self.main_url)
            for li in soup.select("ul.list-server-items > li.linkserver")
            if (data_video := extract_attr(li, "", "data-video"))
        ]
        log.debug(
            "vidstream_mirrors",
            video_id=video_id,
            count=len(mirrors),
            is_casting=is_casting,
        )

        for mirror in mirrors:
            await self._registry.load_extractor(mirror, url, callback)
        return True
