"""
MediaSort - copy media files into date-based folders

MediaSort copies JPG and MP4 files into folders named after the capture
date stored in their metadata.
"""

from .core import main
from .models import CancelToken, RunConfig, RunSummary
from .runner import RunHandle, run, start_run

__all__ = ["main", "run", "start_run", "RunConfig", "RunSummary", "RunHandle", "CancelToken"]
