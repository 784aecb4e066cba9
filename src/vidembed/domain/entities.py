"""Domain entities shared between the host and its content providers.

Pure value objects — no framework dependencies, no I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum


class TvType(str, Enum):
    """Content kind shown by the host (drives which UI it renders)."""

    MOVIE = "Movie"
    ANIME_MOVIE = "AnimeMovie"
    TV_SERIES = "TvSeries"
    CARTOON = "Cartoon"
    ANIME = "Anime"
    TORRENT = "Torrent"
    DOCUMENTARY = "Documentary"


class ShowStatus(str, Enum):
    COMPLETED = "Completed"
    ONGOING = "Ongoing"


class Quality(IntEnum):
    """Ranked quality tiers (higher value = better quality)."""

    UNKNOWN = 0
    SD = 10  # 360p - 480p
    HD = 20  # 720p
    FULL_HD = 30  # 1080p
    UHD = 40  # 1440p and up


_QUALITY_NAMES: dict[str, Quality] = {
    "360": Quality.SD,
    "480": Quality.SD,
    "720": Quality.HD,
    "1080": Quality.FULL_HD,
    "1440": Quality.UHD,
    "2160": Quality.UHD,
    "4k": Quality.UHD,
    "4K": Quality.UHD,
}

_QUALITY_TOKEN_RE = re.compile(r"(\d{3,4})\s*[pP]")


def get_quality_from_name(name: str | None) -> Quality:
    """Map a player label like ``"720p"`` or ``"1080 P"`` to a :class:`Quality`."""
    if not name:
        return Quality.UNKNOWN

    normalized = name.replace("p", "").replace("P", "").strip()
    quality = _QUALITY_NAMES.get(normalized)
    if quality is not None:
        return quality

    # Labels such as "HD 720p (Auto)"
    m = _QUALITY_TOKEN_RE.search(name)
    if m:
        return _QUALITY_NAMES.get(m.group(1), Quality.UNKNOWN)
    return Quality.UNKNOWN


# ---------------------------------------------------------------------------
# Search results
# ---------------------------------------------------------------------------


@dataclass
class SearchResponse:
    """A single search/listing hit pointing at a detail page."""

    name: str
    url: str
    api_name: str
    type: TvType
    poster_url: str | None = None
    year: int | None = None


@dataclass
class MovieSearchResponse(SearchResponse):
    pass


@dataclass
class TvSeriesSearchResponse(SearchResponse):
    episodes: int | None = None


# ---------------------------------------------------------------------------
# Detail pages
# ---------------------------------------------------------------------------


@dataclass
class TvSeriesEpisode:
    """One playable entry of a series.

    ``data`` is handed back verbatim to ``load_links``.
    """

    name: str
    season: int | None
    episode: int | None
    data: str
    poster_url: str | None = None
    date: str | None = None


@dataclass
class LoadResponse:
    name: str
    url: str
    api_name: str
    type: TvType
    poster_url: str | None = None
    year: int | None = None
    plot: str | None = None
    imdb_url: str | None = None
    rating: int | None = None


@dataclass
class MovieLoadResponse(LoadResponse):
    data_url: str = ""


@dataclass
class TvSeriesLoadResponse(LoadResponse):
    episodes: list[TvSeriesEpisode] = field(default_factory=list)
    show_status: ShowStatus | None = None


# ---------------------------------------------------------------------------
# Home page
# ---------------------------------------------------------------------------


@dataclass
class HomePageList:
    """Named row of search results (one widget on the site's landing page)."""

    name: str
    items: list[SearchResponse] = field(default_factory=list)


@dataclass
class HomePageResponse:
    items: list[HomePageList] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExtractorLink:
    """A resolved media URL the host player can open directly."""

    source: str  # Provider/extractor label, e.g. "VidEmbed"
    name: str  # Display label, e.g. "VidEmbed 720 P"
    url: str
    referer: str
    quality: Quality = Quality.UNKNOWN
    is_m3u8: bool = False  # True for HLS playlists


@dataclass(frozen=True)
class SubtitleFile:
    lang: str
    url: str
