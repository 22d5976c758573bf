"""
YouTube Search Layer.

This package handles all outbound communication with the YouTube web search page.
"""

from .client import SearchRequest, YouTubeSearchClient

__all__ = ["SearchRequest", "YouTubeSearchClient"]
