"""vidembed.cc provider.

Scrapes VidEmbed (a Vidstream clone) via plain HTML pages:
- GET /search.html?keyword=... for search
- GET <detail page> for title, description and the episode list
- GET /, /movies, /series, /recommended-series, /cinema-movies for the home page
- GET <episode page> → iframe → streaming.php mirrors for playable links

Every episode page embeds ``streaming.php?id=...``; its mirrors go through
the Vidstream extractor, and the "Beta Server" mirror (the site's own
JWPlayer) is parsed here directly for sources and subtitle tracks.
"""

from __future__ import annotations

import asyncio
import re

from bs4 import BeautifulSoup, Tag

from vidembed.domain.entities import (
    ExtractorLink,
    HomePageList,
    HomePageResponse,
    LoadResponse,
    MovieLoadResponse,
    MovieSearchResponse,
    SearchResponse,
    ShowStatus,
    SubtitleFile,
    TvSeriesEpisode,
    TvSeriesLoadResponse,
    TvSeriesSearchResponse,
    TvType,
    get_quality_from_name,
)
from vidembed.domain.ports import LinkCallback, SubtitleCallback
from vidembed.infrastructure.common.html_selectors import extract_attr, extract_text
from vidembed.infrastructure.config.schema import AppConfig
from vidembed.infrastructure.extractors import (
    ExtractorRegistry,
    Vidstream,
    build_default_registry,
)
from vidembed.infrastructure.extractors.player_config import (
    extract_sources,
    extract_tracks,
)
from vidembed.infrastructure.providers.httpx_base import HttpxProviderBase

_EPISODE_NUM_RE = re.compile(r"Episode (\d+)")
_IFRAME_ID_RE = re.compile(r"id=([^&]*)")

_HOME_PATHS = ("", "/movies", "/series", "/recommended-series", "/cinema-movies")

_BETA_SERVER = "beta server"


def _strip_episode_suffix(title: str) -> str:
    """``"Show Name Episode 3"`` → ``"Show Name"``."""
    if "Episode" not in title:
        return title
    return title.split("Episode", 1)[0].strip()


def _parse_year(date: str | None) -> int | None:
    """First ``-``-separated token of a ``YYYY-MM-DD`` string as int."""
    if not date:
        return None
    try:
        return int(date.split("-")[0])
    except ValueError:
        return None


def _poster_from_onerror(onerror: str | None) -> str | None:
    """``this.src='https://.../cover.png';`` → ``https://.../cover.png``."""
    if not onerror or "=" not in onerror:
        return None
    value = re.sub(r"[';]", "", onerror.split("=", 1)[1]).strip()
    return value or None


class VidEmbedProvider(HttpxProviderBase):
    """Provider for vidembed.cc using httpx + BeautifulSoup."""

    name = "VidEmbed"
    main_url = "https://vidembed.cc"
    has_quick_search = False
    has_main_page = True
    supported_types = frozenset(
        {TvType.ANIME, TvType.ANIME_MOVIE, TvType.TV_SERIES, TvType.MOVIE}
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        extractors: ExtractorRegistry | None = None,
    ) -> None:
        super().__init__(config)
        self._extractors = extractors

    async def _ensure_extractors(self) -> ExtractorRegistry:
        if self._extractors is None:
            self._extractors = build_default_registry(await self._ensure_client())
        return self._extractors

    # ------------------------------------------------------------------
    # search
    # ------------------------------------------------------------------

    def _parse_search_block(self, block: Tag) -> SearchResponse | None:
        href = extract_attr(block, "a", "href")
        title = extract_text(block, ".name")
        if not href or not title:
            return None

        return TvSeriesSearchResponse(
            name=_strip_episode_suffix(title),
            url=self.fix_url(href),
            api_name=self.name,
            type=TvType.TV_SERIES,
            poster_url=extract_attr(block, "img", "src"),
            year=_parse_year(extract_text(block, ".date")),
            # Episode counts are not shown in search results
            episodes=None,
        )

    async def search(self, query: str) -> list[SearchResponse]:
        """Search VidEmbed; every hit is reported as a TV series."""
        if not query:
            return []

        soup = await self._fetch_soup(
            f"{self.main_url}/search.html",
            params={"keyword": query},
            context="search",
        )
        if soup is None:
            return []

        results = [
            result
            for block in soup.select(".listing.items > .video-block")
            if (result := self._parse_search_block(block)) is not None
        ]
        self._log.info("vidembed_search", query=query, count=len(results))
        return results

    # ------------------------------------------------------------------
    # load
    # ------------------------------------------------------------------

    def _parse_episode(self, block: Tag) -> TvSeriesEpisode:
        raw_name = extract_text(block, ".name")
        if raw_name is None:
            ep_title = ""
        elif "Episode" in raw_name:
            ep_title = "Episode " + raw_name.split("Episode", 1)[1].strip()
        else:
            ep_title = raw_name

        ep_num: int | None = None
        m = _EPISODE_NUM_RE.search(ep_title)
        if m:
            ep_num = int(m.group(1))

        return TvSeriesEpisode(
            name=ep_title,
            season=None,
            episode=ep_num,
            data=self.fix_url(extract_attr(block, "a", "href", default="")),
            poster_url=extract_attr(block, "img", "src"),
            date=extract_text(block, ".meta > .date"),
        )

    def _build_load_response(self, soup: BeautifulSoup, url: str) -> LoadResponse | None:
        heading = extract_text(soup, "h1, h2, h3")
        if not heading:
            return None
        title = _strip_episode_suffix(heading)
        description = extract_text(soup, ".post-entry")

        blocks = soup.select(".listing.items.lists > .video-block")

        poster: str | None = None
        for block in blocks:
            poster = _poster_from_onerror(extract_attr(block, "img", "onerror"))
            if poster is not None:
                break

        # The site lists newest first
        episodes = [self._parse_episode(block) for block in reversed(blocks)]
        year = _parse_year(episodes[0].date) if episodes else None

        if len(episodes) == 1 and episodes[0].name == title:
            return MovieLoadResponse(
                name=title,
                url=url,
                api_name=self.name,
                type=TvType.MOVIE,
                data_url=episodes[0].data,
                poster_url=poster,
                year=year,
                plot=description,
            )

        return TvSeriesLoadResponse(
            name=title,
            url=url,
            api_name=self.name,
            type=TvType.TV_SERIES,
            episodes=episodes,
            poster_url=poster,
            year=year,
            plot=description,
            show_status=ShowStatus.ONGOING,
        )

    async def load(self, url: str) -> LoadResponse | None:
        """Load a detail page as a movie (single matching entry) or a series."""
        soup = await self._fetch_soup(url, context="load")
        if soup is None:
            return None

        response = self._build_load_response(soup, url)
        if response is None:
            self._log.warning("vidembed_load_no_title", url=url)
            return None

        self._log.info("vidembed_load", url=url, type=response.type.value)
        return response

    # ------------------------------------------------------------------
    # get_main_page
    # ------------------------------------------------------------------

    def _parse_home_item(self, block: Tag) -> SearchResponse:
        name = extract_text(block, "div.name", default="")
        link = self.fix_url(extract_attr(block, "a", "href", default=""))
        image = extract_attr(block, ".picture > img", "src")

        if "Season" in name or "Episode" in name:
            return TvSeriesSearchResponse(
                name=name,
                url=link,
                api_name=self.name,
                type=TvType.TV_SERIES,
                poster_url=image,
            )
        return MovieSearchResponse(
            name=name,
            url=link,
            api_name=self.name,
            type=TvType.MOVIE,
            poster_url=image,
        )

    async def _fetch_home_lists(
        self, url: str, sem: asyncio.Semaphore
    ) -> list[HomePageList]:
        async with sem:
            soup = await self._fetch_soup(
                url, timeout=self._home_timeout, context="main_page"
            )
        if soup is None:
            return []

        return [
            HomePageList(
                name=extract_text(section, ".widget-title", default=""),
                items=[
                    self._parse_home_item(block)
                    for block in section.select(".video-block")
                ],
            )
            for section in soup.select("div.main-inner")
        ]

    async def get_main_page(self) -> HomePageResponse | None:
        """Fetch all listing pages in parallel and merge their widgets."""
        sem = self._new_semaphore()
        urls = [f"{self.main_url}{path}" for path in _HOME_PATHS]
        pages = await asyncio.gather(*(self._fetch_home_lists(u, sem) for u in urls))

        home_lists = [home_list for page in pages for home_list in page]
        self._log.info("vidembed_main_page", lists=len(home_lists))
        return HomePageResponse(items=home_lists)

    # ------------------------------------------------------------------
    # load_links
    # ------------------------------------------------------------------

    async def _load_beta_server(
        self,
        server_url: str,
        iframe_link: str,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> None:
        """Read sources and subtitle tracks from the site's own JWPlayer page."""
        resp = await self._safe_fetch(
            server_url,
            headers={"referer": iframe_link},
            context="beta_server",
        )
        if resp is None:
            return
        html = resp.text

        for file_url, label in extract_sources(html):
            callback(
                ExtractorLink(
                    source=self.name,
                    name=f"{self.name} {label}",
                    url=file_url,
                    referer=server_url,
                    quality=get_quality_from_name(label),
                    is_m3u8=file_url.endswith(".m3u8"),
                )
            )
        for file_url, label in extract_tracks(html):
            subtitle_callback(SubtitleFile(lang=label or "Unknown", url=file_url))

    async def load_links(
        self,
        data: str,
        is_casting: bool,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        """Emit every playable link of an episode page through the callbacks.

        Returns ``False`` when the page has no embedded player.
        """
        episode_soup = await self._fetch_soup(data, context="episode")
        if episode_soup is None:
            return False
        iframe_link = extract_attr(episode_soup, "iframe", "src")
        if not iframe_link:
            self._log.warning("vidembed_no_iframe", url=data)
            return False

        # https://vidembed.cc/streaming.php?id=MzUwNTY2&... -> MzUwNTY2
        m = _IFRAME_ID_RE.search(iframe_link)
        if m:
            vidstream = Vidstream(
                self.main_url,
                await self._ensure_client(),
                await self._ensure_extractors(),
            )
            await vidstream.get_url(m.group(1), is_casting, callback)

        streaming_soup = await self._fetch_soup(
            self.fix_url(iframe_link), context="streaming"
        )
        if streaming_soup is None:
            return True

        servers = [
            (extract_text(server, ""), self.fix_url(data_video))
            for server in streaming_soup.select(".list-server-items > .linkserver")
            if (data_video := extract_attr(server, "", "data-video"))
        ]
        for label, server_url in servers:
            if label.lower().strip() == _BETA_SERVER:
                await self._load_beta_server(
                    server_url, iframe_link, subtitle_callback, callback
                )
        return True


plugin = VidEmbedProvider()
