"""
Media Processing Layer.

This package is responsible for turning a track into a local audio file:
resolving direct media URLs and starting the external download and
transcode processes.
"""

from .orchestrator import ProcessOrchestrator
from .resolver import MediaResolver
from .tools import ExternalTool

__all__ = ["ExternalTool", "MediaResolver", "ProcessOrchestrator"]
