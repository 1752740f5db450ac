"""Exception hierarchy for MediaSort."""

from pathlib import Path


class MediaSortError(Exception):
    """Base error for all MediaSort exceptions."""


class ValidationError(MediaSortError):
    """Raised when the run configuration is invalid."""


class MetadataError(MediaSortError):
    """Raised when a media file's metadata cannot be parsed."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"Could not read metadata from '{path.name}': {message}")
        self.path = path


class TransferError(MediaSortError):
    """Raised when copying or deleting a single file fails."""

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = path
