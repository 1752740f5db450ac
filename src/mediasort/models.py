import datetime
import enum
import threading
import time
import tomllib
from collections.abc import Callable
from dataclasses import dataclass, field, fields
from functools import lru_cache
from pathlib import Path
from typing import Any


@lru_cache(maxsize=1)
def _get_pyproject_data() -> dict[str, Any]:
    """
    Load data from pyproject.toml located in the project root.
    Cached to prevent multiple file reads.
    Assumes structure: project_root/src/mediasort/models.py
    """
    try:
        pyproject_path = Path(__file__).parents[2] / "pyproject.toml"

        if not pyproject_path.is_file():
            return {}

        with open(pyproject_path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def _get_script_version() -> str:
    """Get version directly from pyproject.toml [project] section."""
    data = _get_pyproject_data()
    return str(data.get("project", {}).get("version", "0.0.0"))


def _get_script_date() -> str:
    """Get date directly from pyproject.toml [tool.mediasort] section."""
    data = _get_pyproject_data()
    return str(data.get("tool", {}).get("mediasort", {}).get("date", ""))


def _get_script_repo() -> str:
    """Get repository URL from [project.urls]."""
    data = _get_pyproject_data()
    return str(data.get("project", {}).get("urls", {}).get("Repository", ""))


def _get_script_name() -> str:
    """Get project name from [project]."""
    data = _get_pyproject_data()
    return str(data.get("project", {}).get("name", "mediasort"))


def _get_script_author() -> str:
    """Get first author name from [project.authors]."""
    data = _get_pyproject_data()
    authors = data.get("project", {}).get("authors", [])
    if isinstance(authors, list) and len(authors) > 0:
        return str(authors[0].get("name", ""))
    return ""


def _get_script_license() -> str:
    """Get license identifier from [project]."""
    data = _get_pyproject_data()
    # New format: license = "MIT" (string)
    # Old format: license = { text = "MIT" } (dict)
    lic = data.get("project", {}).get("license", "")
    if isinstance(lic, dict):
        return str(lic.get("text", ""))
    return str(lic)


# Template format mappings for destination folder names
DIRECTORY_TEMPLATES: dict[str, str] = {
    "YYYY-MM-DD": "%Y-%m-%d",
    "YYYYMMDD": "%Y%m%d",
    "YYYY.MM.DD": "%Y.%m.%d",
    "YYYY_MM_DD": "%Y_%m_%d",
    "YYYY-MM": "%Y-%m",
    "YYYY/MM/DD": "%Y/%m/%d",
    "YYYY/MM": "%Y/%m",
}

DEFAULT_DIRECTORY_TEMPLATE = "YYYY-MM-DD"

# Subfolder of the error directory that receives files without a capture date
ERROR_SUBFOLDER = "error"


@dataclass
class Colors:
    """Terminal color codes."""

    reset: str = "\033[0m"
    red: str = "\033[31m"
    green: str = "\033[32m"
    yellow: str = "\033[33m"
    cyan: str = "\033[36m"
    magenta: str = "\033[35m"


# global Colors instance
colors = Colors()


def colorize(text: str, color: str) -> str:
    """Wrap text in color codes."""
    return f"{color}{text}{colors.reset}"


class MediaKind(enum.Enum):
    """Kind of media file, decides which metadata tag holds the date."""

    IMAGE = "image"
    VIDEO = "video"


# Recognized extensions, compared case-insensitively
MEDIA_EXTENSIONS: dict[str, MediaKind] = {
    "jpg": MediaKind.IMAGE,
    "mp4": MediaKind.VIDEO,
}


@dataclass(frozen=True)
class MediaFile:
    """A media file found in the source tree."""

    path: Path
    kind: MediaKind
    modified: float

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def modified_date(self) -> datetime.date:
        """Local calendar date of the last modification."""
        return datetime.datetime.fromtimestamp(self.modified).date()


@dataclass(frozen=True)
class RunConfig:
    """Configuration of a single sorting run."""

    source_dir: Path
    dest_dir: Path
    error_dir: Path | None = None
    include_subfolders: bool = True
    copy_errors: bool = False
    delete_source: bool = False
    directory_template: str = DEFAULT_DIRECTORY_TEMPLATE


@dataclass(frozen=True)
class AppConfig:
    """Application configuration with default values."""

    run: RunConfig

    # Formatting
    indent: str = "    "
    terminal_clear: str = "\r\033[K\r"

    # Flags
    quiet: bool = False
    show_version: bool = False
    show_errors: bool = False
    show_settings: bool = False
    verbose: bool = False
    yes: bool = False

    # Runtime metadata
    script_name: str = field(default_factory=_get_script_name)
    script_version: str = field(default_factory=_get_script_version)
    script_date: str = field(default_factory=_get_script_date)
    script_author: str = field(default_factory=_get_script_author)
    script_repo: str = field(default_factory=_get_script_repo)
    script_license: str = field(default_factory=_get_script_license)

    # Runtime state
    start_time: float = field(default_factory=time.time)

    def print_config(self) -> None:
        """
        Print all configuration properties alphabetically.
        Run settings are listed with a "run." prefix.
        """
        print(f"{colorize('RAW Settings:', colors.yellow)}")

        values: dict[str, Any] = {f"run.{f.name}": getattr(self.run, f.name) for f in fields(self.run)}
        values.update({key: value for key, value in self.__dict__.items() if key != "run"})

        for key in sorted(values):
            if key == "terminal_clear":
                continue
            print(f"{self.indent}{key}: {colorize(str(values[key]), colors.cyan)}")


class PlanAction(enum.Enum):
    DESTINATION = "destination"
    ERROR_FALLBACK = "error_fallback"
    REJECTED = "rejected"


@dataclass(frozen=True)
class PlanResult:
    """Where a file should go, or why it should not be transferred."""

    action: PlanAction
    folder: Path | None = None
    reason: str = ""


class OutcomeStatus(enum.Enum):
    COPIED = "copied"
    COPIED_TO_ERROR_FALLBACK = "copied_to_error_fallback"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class TransferOutcome:
    """Result of handling one media file."""

    status: OutcomeStatus
    file: MediaFile
    destination: Path | None = None
    reason: str = ""
    deleted: bool = False
    delete_error: str = ""

    @property
    def copied(self) -> bool:
        return self.status in (OutcomeStatus.COPIED, OutcomeStatus.COPIED_TO_ERROR_FALLBACK)


@dataclass(frozen=True)
class ErrorEntry:
    path: Path
    reason: str


@dataclass(frozen=True)
class ProgressEvent:
    """Emitted after each processed file."""

    processed: int
    total: int
    deleted: int
    file: MediaFile
    outcome: TransferOutcome


@dataclass
class RunSummary:
    """Final counts of a run, complete or cancelled."""

    total: int = 0
    processed: int = 0
    copied: int = 0
    deleted: int = 0
    cancelled: bool = False
    errors: list[ErrorEntry] = field(default_factory=list)
    outcomes: list[TransferOutcome] = field(default_factory=list)


class CancelToken:
    """Cancellation flag set by the caller and read by the worker."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()


ProgressCallback = Callable[[ProgressEvent], None]
LogCallback = Callable[[str, str], None]
