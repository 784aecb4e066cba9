"""Provider and extractor exceptions."""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for all provider-related errors."""


class ExtractorError(ProviderError):
    """Raised when an extractor recognizes a page but finds no media in it."""


class DuplicateExtractorError(ProviderError):
    """Raised when two extractors register under the same name."""
