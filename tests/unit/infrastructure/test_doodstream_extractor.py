"""Tests for DoodStreamExtractor."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from vidembed.infrastructure.extractors.doodstream import DoodStreamExtractor

_EMBED_HTML = """
<html><script>
$.get('/pass_md5/12345-67-890/abcdef', function(data) {
  return makePlay() + "?token=xyz789abc&expiry=" + Date.now();
});
function makePlay(){ return "&token=xyz789abc"; }
</script></html>
"""


def _resp(text: str, *, status: int = 200, url: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.text = text
    resp.url = url or "https://dood.la/e/abc123"
    return resp


class TestDoodStreamExtractor:
    def test_metadata(self) -> None:
        extractor = DoodStreamExtractor(http_client=MagicMock(spec=httpx.AsyncClient))
        assert extractor.name == "doodstream"
        assert {"dood", "ds2play"} <= extractor.supported_domains

    def test_normalize_embed_url(self) -> None:
        extractor = DoodStreamExtractor(http_client=MagicMock(spec=httpx.AsyncClient))
        assert extractor._normalize_embed_url("https://dood.la/d/abc") == (
            "https://dood.la/e/abc"
        )
        assert extractor._normalize_embed_url("https://dood.la/e/abc") == (
            "https://dood.la/e/abc"
        )

    @pytest.mark.asyncio
    async def test_resolves_pass_md5(self) -> None:
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get = AsyncMock(
            side_effect=[
                _resp(_EMBED_HTML),
                _resp("https://cdn.dood.video/files/abc~"),
            ]
        )

        links = await DoodStreamExtractor(http_client=client).get_url(
            "https://dood.la/d/abc123"
        )

        assert len(links) == 1
        assert links[0].url.startswith(
            "https://cdn.dood.video/files/abc~?token=xyz789abc&expiry="
        )
        assert links[0].referer == "https://dood.la/e/abc123"

        embed_call, pass_call = client.get.call_args_list
        assert embed_call.args[0] == "https://dood.la/e/abc123"
        assert pass_call.args[0] == "https://dood.la/pass_md5/12345-67-890/abcdef"
        assert pass_call.kwargs["headers"]["Referer"] == "https://dood.la/e/abc123"

    @pytest.mark.asyncio
    async def test_captcha_page(self) -> None:
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get = AsyncMock(
            return_value=_resp('<div class="cf-turnstile" data-sitekey="x"></div>')
        )
        assert await DoodStreamExtractor(http_client=client).get_url(
            "https://dood.la/e/abc"
        ) == []

    @pytest.mark.asyncio
    async def test_missing_pass_md5(self) -> None:
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get = AsyncMock(return_value=_resp("<html>nothing</html>"))
        assert await DoodStreamExtractor(http_client=client).get_url(
            "https://dood.la/e/abc"
        ) == []

    @pytest.mark.asyncio
    async def test_invalid_video_base(self) -> None:
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get = AsyncMock(side_effect=[_resp(_EMBED_HTML), _resp("RELOAD")])
        assert await DoodStreamExtractor(http_client=client).get_url(
            "https://dood.la/e/abc"
        ) == []

    @pytest.mark.asyncio
    async def test_embed_http_error(self) -> None:
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get = AsyncMock(return_value=_resp("", status=403))
        assert await DoodStreamExtractor(http_client=client).get_url(
            "https://dood.la/e/abc"
        ) == []
