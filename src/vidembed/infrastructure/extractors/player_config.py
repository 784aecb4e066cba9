"""Text-level extraction of JWPlayer-style configuration from embed pages.

Players on these sites are configured inline, e.g.::

    playerInstance.setup({
        sources: [{file: 'https://.../master.m3u8', label: 'hls P', type: 'hls'}],
        tracks: [{file: 'https://.../en.vtt', label: 'English', kind: 'captions'}],
    });

The helpers below pull ``(file, label)`` pairs out of such scripts with
regular expressions; there is no JavaScript evaluation.
"""

from __future__ import annotations

import re

# Group 1: file, group 2: label
_SOURCE_RE = re.compile(
    r"""sources:[\W\w]*?file:\s*["'](.*?)["'][\W\w]*?label:\s*["'](.*?)["']"""
)
_TRACK_RE = re.compile(
    r"""tracks:[\W\w]*?file:\s*["'](.*?)["'][\W\w]*?label:\s*["'](.*?)["']"""
)

_PACKED_RE = re.compile(
    r"eval\s*\(\s*function\s*\(\s*p\s*,\s*a\s*,\s*c\s*,\s*k\s*,\s*e\s*,\s*d\s*\)"
)


def extract_sources(html: str) -> list[tuple[str, str]]:
    """Return ``(file, label)`` for every ``sources:`` declaration."""
    return [(m.group(1), m.group(2)) for m in _SOURCE_RE.finditer(html)]


def extract_tracks(html: str) -> list[tuple[str, str]]:
    """Return ``(file, label)`` for every ``tracks:`` declaration."""
    return [(m.group(1), m.group(2)) for m in _TRACK_RE.finditer(html)]


def unpack_p_a_c_k(packed: str) -> str | None:
    """Unpack Dean Edwards packed JavaScript.

    Format: eval(function(p,a,c,k,e,d){...}('payload',base,count,'dict'.split('|')))

    The algorithm replaces base-N encoded tokens in the payload
    with words from the dictionary.
    """
    match = re.search(
        r"}\('(.*?)',\s*(\d+),\s*(\d+),\s*'([^']*)'\s*\.split\('\|'\)",
        packed,
        re.DOTALL,
    )
    if not match:
        return None

    payload = match.group(1)
    base = int(match.group(2))
    count = int(match.group(3))
    keywords = match.group(4).split("|")

    if len(keywords) < count:
        keywords.extend([""] * (count - len(keywords)))

    def _replace_word(m: re.Match[str]) -> str:
        word = m.group(0)
        try:
            index = int(word, base)
        except ValueError:
            return word
        if index < len(keywords) and keywords[index]:
            return keywords[index]
        return word

    return re.sub(r"\b\w+\b", _replace_word, payload)


def iter_unpacked_scripts(html: str) -> list[str]:
    """Unpack every packed script block found in *html*."""
    scripts: list[str] = []
    for pm in _PACKED_RE.finditer(html):
        chunk = html[pm.start() : pm.start() + 65536]
        unpacked = unpack_p_a_c_k(chunk)
        if unpacked:
            scripts.append(unpacked)
    return scripts
