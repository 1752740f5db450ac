"""
Destination folder computation for media files.
"""

import datetime
from typing import Protocol

from mediasort.errors import MetadataError
from mediasort.models import (
    DEFAULT_DIRECTORY_TEMPLATE,
    DIRECTORY_TEMPLATES,
    ERROR_SUBFOLDER,
    MediaFile,
    PlanAction,
    PlanResult,
    RunConfig,
)

NO_DATE_REASON = "No capture date found."


class Resolver(Protocol):
    def resolve(self, file: MediaFile) -> datetime.date | None: ...


def format_date_folder(value: datetime.date, template: str = DEFAULT_DIRECTORY_TEMPLATE) -> str:
    """
    Generate a folder name for a date.

    Args:
        value: Capture date or fallback date
        template: Key of DIRECTORY_TEMPLATES

    Returns:
        Folder name, possibly nested (e.g. "2024/01")
    """
    # Use template dictionary with fallback to default format
    format_str = DIRECTORY_TEMPLATES.get(template, DIRECTORY_TEMPLATES[DEFAULT_DIRECTORY_TEMPLATE])
    return value.strftime(format_str)


def plan(file: MediaFile, config: RunConfig, resolver: Resolver) -> PlanResult:
    """
    Decide the destination folder for a media file.

    A resolved capture date always wins. Only when no date can be resolved
    does the file go to the error folder, dated by its modification time,
    and only if copying errors is enabled.
    """
    try:
        date = resolver.resolve(file)
        reason = NO_DATE_REASON
    except MetadataError as e:
        date = None
        reason = str(e)

    if date is not None:
        folder = config.dest_dir / format_date_folder(date, config.directory_template)
        return PlanResult(PlanAction.DESTINATION, folder)

    if config.copy_errors and config.error_dir is not None:
        fallback = format_date_folder(file.modified_date, config.directory_template)
        folder = config.error_dir / ERROR_SUBFOLDER / fallback
        return PlanResult(PlanAction.ERROR_FALLBACK, folder, reason)

    return PlanResult(PlanAction.REJECTED, reason=reason)
