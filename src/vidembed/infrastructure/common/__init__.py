from __future__ import annotations

from .html_selectors import extract_attr, extract_text, parse_html
from .urls import extract_domain, fix_url

__all__ = [
    "extract_attr",
    "extract_domain",
    "extract_text",
    "fix_url",
    "parse_html",
]
