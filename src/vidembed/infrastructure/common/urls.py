from __future__ import annotations

from urllib.parse import urlparse


def fix_url(url: str, main_url: str) -> str:
    """Make *url* absolute.

    ``//cdn/x`` gets an ``https:`` scheme, ``/x`` is joined onto *main_url*;
    anything else is returned unchanged.
    """
    if url.startswith("//"):
        return f"https:{url}"
    if url.startswith("/"):
        return f"{main_url.rstrip('/')}{url}"
    return url


def extract_domain(url: str) -> str:
    """Extract the second-level domain from a URL.

    Returns the second-to-last segment of the hostname (e.g.
    ``"streamtape"`` from ``"https://streamtape.com/e/abc"``).  Handles
    ``www.`` prefixes automatically since ``parts[-2]`` skips them.

    Returns ``""`` when the URL cannot be parsed or has fewer than
    two hostname segments.
    """
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return ""
    parts = hostname.split(".")
    return parts[-2] if len(parts) >= 2 else ""
