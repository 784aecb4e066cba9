"""VidEmbed content provider for media-aggregator hosts."""

__version__ = "0.1.0"
