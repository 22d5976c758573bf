"""
Web Scraping Layer.

This package contains modules for cutting the embedded results payload out
of a YouTube search page and parsing it into track records.
"""

from .response_extractor import ResponseExtractor
from .result_parser import ResultParser, parse_duration

__all__ = ["ResponseExtractor", "ResultParser", "parse_duration"]
