"""
Data Models Layer.

This package contains the data structures used throughout the provider:
the Pydantic configuration model and the immutable search result records.
"""

from .config import ProviderConfig
from .track import QueryResult, TrackRecord

__all__ = ["ProviderConfig", "QueryResult", "TrackRecord"]
