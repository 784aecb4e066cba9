from __future__ import annotations

from .vidembed import VidEmbedProvider, plugin

__all__ = ["VidEmbedProvider", "plugin"]
