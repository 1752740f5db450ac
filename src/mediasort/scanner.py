"""
Discovery of media files in the source tree.
"""

import os
from pathlib import Path

from mediasort.models import MEDIA_EXTENSIONS, MediaFile, MediaKind


def get_media_kind(path: Path) -> MediaKind | None:
    """Return the media kind for a recognized extension, None otherwise."""
    name = path.name.lower()
    for extension, kind in MEDIA_EXTENSIONS.items():
        if name.endswith(f".{extension}"):
            return kind
    return None


def get_entries(directory: Path) -> list[os.DirEntry[str]]:
    """
    Get directory entries sorted by lowercase name.

    Returns an empty list when the directory cannot be listed.
    """
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError:
        # Unreadable or vanished directory contributes nothing
        return []
    return sorted(entries, key=lambda e: e.name.lower())


def collect_media_files(root: Path, recursive: bool = True) -> list[MediaFile]:
    """
    Collect media files below root, depth-first.

    Args:
        root: Directory to scan
        recursive: Descend into subdirectories

    Returns:
        Media files in traversal order
    """
    media_files: list[MediaFile] = []

    for entry in get_entries(root):
        try:
            is_dir = entry.is_dir()
            is_link = entry.is_symlink()
        except OSError:
            continue

        if is_dir:
            # Symlinked directories are not followed to avoid cycles
            if recursive and not is_link:
                media_files.extend(collect_media_files(Path(entry.path), recursive))
            continue

        kind = get_media_kind(Path(entry.name))
        if kind is None:
            continue

        try:
            modified = entry.stat().st_mtime
        except OSError:
            continue

        media_files.append(MediaFile(Path(entry.path).absolute(), kind, modified))

    return media_files
