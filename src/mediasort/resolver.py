"""
Capture date extraction from embedded media metadata.
Requires: ExifTool command-line tool and PyExifTool Python library.
"""

import datetime
from typing import Any

import exiftool
from exiftool.exceptions import ExifToolException

from mediasort.errors import MetadataError
from mediasort.models import MediaFile, MediaKind

# Metadata tag holding the capture/creation date for each media kind
DATE_TAGS: dict[MediaKind, str] = {
    MediaKind.IMAGE: "EXIF:DateTimeOriginal",
    MediaKind.VIDEO: "QuickTime:CreateDate",
}

ERROR_TAG = "ExifTool:Error"


def parse_exif_date(value: Any) -> datetime.date | None:
    """
    Parse an ExifTool date value, keeping only the calendar date.

    Args:
        value: Tag value such as "2023:05:01 10:20:30" or "2023:05:01 10:20:30+09:00"

    Returns:
        Date with time of day and timezone dropped, or None when the value is
        zeroed or not a date
    """
    date_str = str(value).strip()

    # Validate minimum length to avoid index errors
    if len(date_str) < 10:
        return None

    try:
        return datetime.datetime.strptime(date_str[:10].replace("-", ":"), "%Y:%m:%d").date()
    except ValueError:
        # Cameras without a clock write 0000:00:00 00:00:00
        return None


def get_capture_date(metadata: dict[str, Any], kind: MediaKind) -> datetime.date | None:
    """
    Locate the capture date tag for the media kind in a metadata dictionary.

    Returns:
        Capture date or None when the tag is absent or unusable
    """
    tag = DATE_TAGS[kind]
    if tag not in metadata:
        return None
    return parse_exif_date(metadata[tag])


class DateResolver:
    """
    Reads capture dates through a single long-running ExifTool process.

    Every call re-reads the file from disk; nothing is cached.
    """

    def __init__(self, helper: exiftool.ExifToolHelper | None = None):
        self._helper = helper if helper is not None else exiftool.ExifToolHelper()

    def __enter__(self) -> "DateResolver":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Stop the ExifTool process if it was started."""
        if self._helper.running:
            self._helper.terminate()

    def read_metadata(self, file: MediaFile) -> dict[str, Any]:
        """
        Read all metadata of a file.

        Raises:
            MetadataError: If ExifTool cannot parse the file
        """
        try:
            data = self._helper.get_metadata(str(file.path))
        except ExifToolException as e:
            raise MetadataError(file.path, str(e)) from e

        if not data:
            raise MetadataError(file.path, "no metadata returned")

        metadata = data[0]
        if ERROR_TAG in metadata:
            raise MetadataError(file.path, str(metadata[ERROR_TAG]))
        return metadata

    def resolve(self, file: MediaFile) -> datetime.date | None:
        """
        Return the capture date of an image or the creation date of a video.

        Raises:
            MetadataError: If the file cannot be parsed as a media container
        """
        return get_capture_date(self.read_metadata(file), file.kind)
