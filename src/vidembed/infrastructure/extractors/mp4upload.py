"""Mp4Upload extractor.

The embed page configures a video.js player via
``player.src({type: "video/mp4", src: "https://..."})``, either in plain
script or inside a Dean Edwards packed block.
"""

from __future__ import annotations

import re

import httpx
import structlog

from vidembed.domain.entities import ExtractorLink, get_quality_from_name
from vidembed.domain.exceptions import ExtractorError

from ..providers.constants import DEFAULT_EXTRACTOR_TIMEOUT
from .player_config import iter_unpacked_scripts

log = structlog.get_logger(__name__)

_SRC_RE = re.compile(
    r"""player\.src\(\s*\{\s*type:\s*["'][^"']+["'],\s*src:\s*["']([^"']+)["']""",
    re.DOTALL,
)
_HEIGHT_RE = re.compile(r"\bHEIGHT=(\d{3,4})\b")


class Mp4UploadExtractor:
    """Extracts the direct MP4 URL from Mp4Upload embed pages."""

    main_url = "https://www.mp4upload.com"
    requires_referer = True
    supported_domains = frozenset({"mp4upload"})

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "mp4upload"

    async def get_url(
        self, url: str, referer: str | None = None
    ) -> list[ExtractorLink]:
        headers = {"Referer": referer} if referer else {}
        resp = await self._http.get(
            url,
            headers=headers,
            follow_redirects=True,
            timeout=DEFAULT_EXTRACTOR_TIMEOUT,
        )
        resp.raise_for_status()
        html = resp.text

        video_url: str | None = None
        quality_hint = ""
        for script in (html, *iter_unpacked_scripts(html)):
            m = _SRC_RE.search(script)
            if m:
                video_url = m.group(1)
                height = _HEIGHT_RE.search(script)
                quality_hint = f"{height.group(1)}p" if height else ""
                break

        if video_url is None:
            raise ExtractorError("Mp4Upload stream URL not found")

        log.debug("mp4upload_resolved", video_url=video_url)
        return [
            ExtractorLink(
                source="Mp4Upload",
                name="Mp4Upload",
                url=video_url,
                referer=self.main_url + "/",
                quality=get_quality_from_name(quality_hint),
                is_m3u8=".m3u8" in video_url,
            )
        ]
