"""
yt-provider: search YouTube and save results as local audio files.
"""

__version__ = "0.1.0"
