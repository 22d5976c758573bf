"""
Core provider engine.

The `YouTubeProvider` is the single object a host needs: it builds search
requests, turns response bodies into track records, and delegates audio
acquisition to the `ProcessOrchestrator`.
"""

from .provider import YouTubeProvider

__all__ = ["YouTubeProvider"]
