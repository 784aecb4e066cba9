"""Registry that dispatches embedded player URLs to per-hoster extractors."""

from __future__ import annotations

import httpx
import structlog

from vidembed.domain.exceptions import DuplicateExtractorError, ExtractorError
from vidembed.domain.ports import ExtractorApi, LinkCallback
from vidembed.infrastructure.common.urls import extract_domain

log = structlog.get_logger(__name__)


class ExtractorRegistry:
    """Dispatches a player URL to the extractor registered for its domain.

    URLs whose domain has no extractor are ignored (``load_extractor``
    returns ``False``).
    """

    def __init__(self, extractors: list[ExtractorApi] | None = None) -> None:
        self._extractors: dict[str, ExtractorApi] = {}
        self._domain_map: dict[str, ExtractorApi] = {}
        for extractor in extractors or []:
            self.register(extractor)

    def register(self, extractor: ExtractorApi) -> None:
        """Register an extractor under its name.

        Each of its ``supported_domains`` is mapped too, so URL dispatch
        finds the extractor on mirror domains (``fembed-hd`` → xstreamcdn).
        """
        if extractor.name in self._extractors:
            raise DuplicateExtractorError(
                f"Extractor {extractor.name!r} is already registered"
            )
        self._extractors[extractor.name] = extractor
        for domain in extractor.supported_domains:
            self._domain_map[domain] = extractor
        log.debug("extractor_registered", extractor=extractor.name)

    def find(self, url: str) -> ExtractorApi | None:
        """Return the extractor responsible for *url*, if any."""
        domain = extract_domain(url)
        if not domain:
            return None
        return self._extractors.get(domain) or self._domain_map.get(domain)

    async def load_extractor(
        self,
        url: str,
        referer: str | None,
        callback: LinkCallback,
    ) -> bool:
        """Resolve *url* and feed every resulting link to *callback*.

        Returns ``True`` when at least one link was emitted.
        """
        extractor = self.find(url)
        if extractor is None:
            log.debug("extractor_not_found", url=url)
            return False

        hoster = extractor.name
        try:
            links = await extractor.get_url(
                url, referer=referer if extractor.requires_referer else None
            )
        except ExtractorError as exc:
            log.warning("extractor_no_media", hoster=hoster, url=url, error=str(exc))
            return False
        except httpx.TimeoutException:
            log.warning("extractor_timeout", hoster=hoster, url=url)
            return False
        except httpx.HTTPError as exc:
            log.warning(
                "extractor_http_error",
                hoster=hoster,
                url=url,
                error=str(exc),
            )
            return False
        except Exception:
            log.exception("extractor_error", hoster=hoster, url=url)
            return False

        if not links:
            log.warning("extractor_failed", hoster=hoster, url=url)
            return False

        for link in links:
            callback(link)
        log.info("extractor_success", hoster=hoster, links=len(links))
        return True
