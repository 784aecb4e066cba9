"""Tests for Mp4UploadExtractor."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from vidembed.domain.entities import Quality
from vidembed.domain.exceptions import ExtractorError
from vidembed.infrastructure.extractors.mp4upload import Mp4UploadExtractor

_PLAIN_HTML = """
<html><script>
var player = videojs('player');
player.src({type: "video/mp4", src: "https://a4.mp4upload.com:183/d/xyz/video.mp4"});
// WIDTH=1280 HEIGHT=720
</script></html>
"""

_PACKED_HTML = """
<html><script>
eval(function(p,a,c,k,e,d){while(c--)if(k[c])p=p.replace(new RegExp('\\\\b'+c.toString(a)+'\\\\b','g'),k[c]);return p}('0.1({2:"3/4",5:"https://s1.mp4upload.com/d/x/video.mp4"})',10,6,'player|src|type|video|mp4|src'.split('|')))
</script></html>
"""


def _mock_client(html: str) -> AsyncMock:
    resp = MagicMock()
    resp.status_code = 200
    resp.text = html
    resp.raise_for_status = MagicMock()
    client = AsyncMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(return_value=resp)
    return client


class TestMp4UploadExtractor:
    def test_metadata(self) -> None:
        extractor = Mp4UploadExtractor(http_client=MagicMock(spec=httpx.AsyncClient))
        assert extractor.name == "mp4upload"
        assert extractor.requires_referer is True

    @pytest.mark.asyncio
    async def test_plain_player_source(self) -> None:
        client = _mock_client(_PLAIN_HTML)
        links = await Mp4UploadExtractor(http_client=client).get_url(
            "https://www.mp4upload.com/embed-xyz.html",
            referer="https://vidembed.cc/streaming.php?id=1",
        )

        assert len(links) == 1
        assert links[0].url == "https://a4.mp4upload.com:183/d/xyz/video.mp4"
        assert links[0].quality is Quality.HD
        assert links[0].referer == "https://www.mp4upload.com/"
        headers = client.get.call_args.kwargs["headers"]
        assert headers == {"Referer": "https://vidembed.cc/streaming.php?id=1"}

    @pytest.mark.asyncio
    async def test_packed_player_source(self) -> None:
        links = await Mp4UploadExtractor(http_client=_mock_client(_PACKED_HTML)).get_url(
            "https://www.mp4upload.com/embed-x.html"
        )

        assert [link.url for link in links] == [
            "https://s1.mp4upload.com/d/x/video.mp4"
        ]
        assert links[0].quality is Quality.UNKNOWN

    @pytest.mark.asyncio
    async def test_no_source_raises(self) -> None:
        extractor = Mp4UploadExtractor(http_client=_mock_client("<html>File was deleted</html>"))
        with pytest.raises(ExtractorError):
            await extractor.get_url("https://www.mp4upload.com/embed-gone.html")

    @pytest.mark.asyncio
    async def test_http_error_propagates(self) -> None:
        request = httpx.Request("GET", "https://www.mp4upload.com/embed-x.html")
        response = httpx.Response(404, request=request)
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get = AsyncMock(return_value=response)

        with pytest.raises(httpx.HTTPStatusError):
            await Mp4UploadExtractor(http_client=client).get_url(
                "https://www.mp4upload.com/embed-x.html"
            )
