from .entities import (
    ExtractorLink,
    HomePageList,
    HomePageResponse,
    LoadResponse,
    MovieLoadResponse,
    MovieSearchResponse,
    Quality,
    SearchResponse,
    ShowStatus,
    SubtitleFile,
    TvSeriesEpisode,
    TvSeriesLoadResponse,
    TvSeriesSearchResponse,
    TvType,
    get_quality_from_name,
)
from .exceptions import DuplicateExtractorError, ExtractorError, ProviderError
from .ports import ExtractorApi, LinkCallback, MainAPI, SubtitleCallback

__all__ = [
    "DuplicateExtractorError",
    "ExtractorApi",
    "ExtractorError",
    "ExtractorLink",
    "HomePageList",
    "HomePageResponse",
    "LinkCallback",
    "LoadResponse",
    "MainAPI",
    "MovieLoadResponse",
    "MovieSearchResponse",
    "ProviderError",
    "Quality",
    "SearchResponse",
    "ShowStatus",
    "SubtitleCallback",
    "SubtitleFile",
    "TvSeriesEpisode",
    "TvSeriesLoadResponse",
    "TvSeriesSearchResponse",
    "TvType",
    "get_quality_from_name",
]
