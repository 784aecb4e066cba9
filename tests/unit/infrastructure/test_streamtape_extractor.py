"""Tests for StreamtapeExtractor."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from vidembed.domain.entities import Quality
from vidembed.infrastructure.extractors.streamtape import StreamtapeExtractor


def _mock_client(html: str, *, status: int = 200, url: str = "") -> AsyncMock:
    resp = MagicMock()
    resp.status_code = status
    resp.text = html
    resp.url = url or "https://streamtape.com/e/abc123"
    client = AsyncMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(return_value=resp)
    return client


class TestStreamtapeExtractor:
    def test_metadata(self) -> None:
        extractor = StreamtapeExtractor(http_client=MagicMock(spec=httpx.AsyncClient))
        assert extractor.name == "streamtape"
        assert extractor.requires_referer is False
        assert "strtape" in extractor.supported_domains

    @pytest.mark.asyncio
    async def test_extracts_video_url(self) -> None:
        html = """
        <html>
        <div id="robotlink">/streamtape.com/get_video?id=abc123&expires=1700000000&ip=1.2.3.4&token=AAAA-BBBB</div>
        </html>
        """
        extractor = StreamtapeExtractor(http_client=_mock_client(html))
        links = await extractor.get_url("https://streamtape.com/e/abc123")

        assert len(links) == 1
        link = links[0]
        assert link.url.startswith("https://streamtape.com/get_video?id=abc123")
        assert link.url.endswith("&stream=1")
        assert link.referer == "https://streamtape.com/"
        assert link.quality is Quality.UNKNOWN
        assert link.is_m3u8 is False

    @pytest.mark.asyncio
    async def test_corrects_token(self) -> None:
        html = """
        <html>
        <script>
        var x = 'id=abc&expires=1700000000&ip=1.2.3.4&token=WRONG-TOKEN'
        document.getElementById('robotlink').innerHTML = '&token=CORRECT-TOKEN-123';
        </script>
        </html>
        """
        extractor = StreamtapeExtractor(http_client=_mock_client(html))
        links = await extractor.get_url("https://streamtape.com/e/abc")

        assert "token=CORRECT-TOKEN-123" in links[0].url
        assert "WRONG-TOKEN" not in links[0].url

    @pytest.mark.asyncio
    async def test_uses_final_host_after_redirect(self) -> None:
        html = "<div>'id=x&expires=1&ip=y&token=z'</div>"
        client = _mock_client(html, url="https://shavetape.cash/e/x")
        links = await StreamtapeExtractor(http_client=client).get_url(
            "https://streamtape.com/e/x"
        )
        assert links[0].url.startswith("https://shavetape.cash/get_video?")
        assert links[0].referer == "https://shavetape.cash/"

    @pytest.mark.asyncio
    async def test_video_not_found(self) -> None:
        html = "<html><body><h1>Video not found</h1></body></html>"
        extractor = StreamtapeExtractor(http_client=_mock_client(html))
        assert await extractor.get_url("https://streamtape.com/e/gone") == []

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        extractor = StreamtapeExtractor(http_client=_mock_client("", status=404))
        assert await extractor.get_url("https://streamtape.com/e/gone") == []

    @pytest.mark.asyncio
    async def test_no_params(self) -> None:
        extractor = StreamtapeExtractor(http_client=_mock_client("<html></html>"))
        assert await extractor.get_url("https://streamtape.com/e/abc") == []
