"""
Shared fixtures for the MediaSort test suite.
"""
import datetime
import os
from pathlib import Path

import pytest

from mediasort.errors import MetadataError
from mediasort.models import MediaFile, MediaKind, RunConfig


def make_file(path: Path, content: bytes = b"dummy content", modified: datetime.datetime | None = None) -> Path:
    """Create a file with the given content; create parent dirs as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if modified is not None:
        ts = modified.timestamp()
        os.utime(path, (ts, ts))
    return path


def make_media(path: Path, kind: MediaKind = MediaKind.IMAGE, modified: datetime.datetime | None = None) -> MediaFile:
    """Create a file on disk and return it as MediaFile."""
    make_file(path, modified=modified)
    return MediaFile(path.absolute(), kind, path.stat().st_mtime)


class FakeResolver:
    """Resolver returning prepared dates (or errors) by file name."""

    def __init__(self, dates: dict[str, datetime.date | Exception | None] | None = None):
        self.dates = dates or {}
        self.calls: list[str] = []

    def resolve(self, file: MediaFile) -> datetime.date | None:
        self.calls.append(file.name)
        value = self.dates.get(file.name)
        if isinstance(value, Exception):
            raise value
        return value


def metadata_error(name: str) -> MetadataError:
    return MetadataError(Path(name), "File format error")


@pytest.fixture
def src(tmp_path: Path) -> Path:
    """Empty source directory."""
    d = tmp_path / "source"
    d.mkdir()
    return d


@pytest.fixture
def dst(tmp_path: Path) -> Path:
    """Empty destination directory."""
    d = tmp_path / "dest"
    d.mkdir()
    return d


@pytest.fixture
def err(tmp_path: Path) -> Path:
    """Empty error directory."""
    d = tmp_path / "errors"
    d.mkdir()
    return d


@pytest.fixture
def run_config(src: Path, dst: Path, err: Path) -> RunConfig:
    """RunConfig with default flags and an error directory set."""
    return RunConfig(source_dir=src, dest_dir=dst, error_dir=err)
