"""
Copying media files into their destination folders.
"""

import shutil
from pathlib import Path

from mediasort.errors import TransferError
from mediasort.models import MediaFile, OutcomeStatus, TransferOutcome


def copy_to_folder(file: MediaFile, folder: Path) -> Path:
    """
    Create the folder and copy the file into it under its original name.
    A file with the same name already in the folder is overwritten.

    Returns:
        Path of the copy

    Raises:
        TransferError: If the folder cannot be created or the copy fails
    """
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        raise TransferError(file.path, f"Permission denied: cannot create directory '{folder}'.") from e
    except OSError as e:
        raise TransferError(file.path, f"Error creating directory '{folder}': {str(e)}") from e

    target = folder / file.name
    try:
        shutil.copy2(file.path, target)
    except PermissionError as e:
        raise TransferError(file.path, "Permission denied: cannot copy file.") from e
    except FileNotFoundError as e:
        raise TransferError(file.path, "Source file no longer exists.") from e
    except OSError as e:
        raise TransferError(file.path, f"File system error: {str(e)}") from e
    return target


def delete_source(file: MediaFile) -> None:
    """
    Remove the original file after a successful copy.

    Raises:
        TransferError: If the file cannot be removed
    """
    try:
        file.path.unlink()
    except PermissionError as e:
        raise TransferError(file.path, "Permission denied: cannot delete source file.") from e
    except OSError as e:
        raise TransferError(file.path, f"Error deleting source file: {str(e)}") from e


def execute(
    file: MediaFile, folder: Path, delete: bool, fallback: bool = False
) -> TransferOutcome:
    """
    Copy a file into folder and optionally delete the original.

    Args:
        file: File to transfer
        folder: Destination folder, created when missing
        delete: Delete the source after a successful copy
        fallback: The folder is an error fallback folder

    Returns:
        FAILED when the copy fails (source untouched), otherwise COPIED or
        COPIED_TO_ERROR_FALLBACK; a failed delete is reported in delete_error
    """
    try:
        target = copy_to_folder(file, folder)
    except TransferError as e:
        return TransferOutcome(OutcomeStatus.FAILED, file, reason=str(e))

    status = OutcomeStatus.COPIED_TO_ERROR_FALLBACK if fallback else OutcomeStatus.COPIED
    if not delete:
        return TransferOutcome(status, file, target)

    try:
        delete_source(file)
    except TransferError as e:
        return TransferOutcome(status, file, target, delete_error=str(e))
    return TransferOutcome(status, file, target, deleted=True)
