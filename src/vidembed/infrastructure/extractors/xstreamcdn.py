"""XStreamCdn (Fembed) extractor.

Fembed mirrors expose a JSON API next to the embed page::

    POST https://<mirror>/api/source/<video id>
    -> {"success": true, "data": [{"file": "...", "label": "720p", "type": "mp4"}]}
"""

from __future__ import annotations

from urllib.parse import urlparse

import httpx
import structlog

from vidembed.domain.entities import ExtractorLink, get_quality_from_name
from vidembed.domain.exceptions import ExtractorError

from ..providers.constants import DEFAULT_EXTRACTOR_TIMEOUT

log = structlog.get_logger(__name__)

_DOMAINS = frozenset(
    {
        "xstreamcdn",
        "fembed",
        "fembed-hd",
        "feurl",
        "femax20",
        "fcdn",
        "embedsito",
        "diasfem",
        "suzihaza",
        "vanfem",
    }
)


def _extract_video_id(url: str) -> str | None:
    """``https://fembed-hd.com/v/abc123#`` → ``abc123``."""
    path = urlparse(url).path.rstrip("/")
    segments = [s for s in path.split("/") if s]
    if len(segments) < 2 or segments[0] not in ("v", "f", "e"):
        return None
    return segments[1]


class XStreamCdnExtractor:
    """Queries the Fembed source API for all available qualities."""

    main_url = "https://embedsito.com"
    requires_referer = False
    supported_domains = _DOMAINS

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "xstreamcdn"

    async def get_url(
        self, url: str, referer: str | None = None
    ) -> list[ExtractorLink]:
        video_id = _extract_video_id(url)
        if video_id is None:
            log.warning("xstreamcdn_invalid_url", url=url)
            return []

        parsed = urlparse(url)
        api_url = f"{parsed.scheme}://{parsed.netloc}/api/source/{video_id}"
        resp = await self._http.post(
            api_url,
            headers={"Referer": url, "X-Requested-With": "XMLHttpRequest"},
            timeout=DEFAULT_EXTRACTOR_TIMEOUT,
        )
        resp.raise_for_status()

        try:
            payload = resp.json()
        except ValueError as exc:
            raise ExtractorError(f"Invalid JSON from {api_url}") from exc

        if not isinstance(payload, dict) or not payload.get("success"):
            raise ExtractorError(f"Source API refused video {video_id}")

        links: list[ExtractorLink] = []
        for source in payload.get("data") or []:
            file_url = source.get("file")
            if not file_url:
                continue
            label = str(source.get("label") or "")
            links.append(
                ExtractorLink(
                    source="XStreamCdn",
                    name=f"XStreamCdn {label}".strip(),
                    url=file_url,
                    referer=url,
                    quality=get_quality_from_name(label),
                    is_m3u8=source.get("type") == "hls" or ".m3u8" in file_url,
                )
            )
        return links
