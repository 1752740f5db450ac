#!/usr/bin/env python3
"""
Copy media files into date-based folders by reading their capture date.
Requires: ExifTool command-line tool and PyExifTool Python library.
"""

import subprocess
import sys

from mediasort.args import get_config
from mediasort.errors import ValidationError
from mediasort.models import AppConfig, MediaFile, RunSummary, colorize, colors
from mediasort.print import (
    print_footer,
    print_header,
    print_log,
    print_process_file,
    printe,
)
from mediasort.runner import start_run, validate_config
from mediasort.scanner import collect_media_files


def check_exiftool_availability() -> None:
    """Check if ExifTool command-line tool is available."""
    try:
        subprocess.run(["exiftool", "-ver"], capture_output=True, check=True)
    except (subprocess.SubprocessError, FileNotFoundError):
        print("\033[0;31mExifTool command-line tool is not installed or not in PATH.\033[0m")
        print("Please download and install it from: \033[0;36mhttps://exiftool.org/\033[0m")
        sys.exit(1)


def check_conditions(cfg: AppConfig) -> None:
    """Check if all conditions are met to run the script."""
    # Show version and exit when requested with --version
    if cfg.show_version:
        date_str = f" ({cfg.script_date})" if cfg.script_date else ""
        msg = (
            f"{colorize(cfg.script_name, colors.green)} "
            f"version {colorize(cfg.script_version, colors.cyan)}{date_str} "
            f"by {colorize(cfg.script_author, colors.cyan)}"
        )
        printe(msg, 0)

    check_exiftool_availability()

    try:
        validate_config(cfg.run)
    except ValidationError as e:
        printe(str(e), 1)

    # Check for conflicting quiet and verbose modes
    if cfg.quiet and cfg.verbose:
        printe("Cannot use both quiet mode and verbose mode.", 1)


def prompt_user(file_count: int, cfg: AppConfig) -> bool:
    """Prompt user for confirmation before proceeding."""
    if cfg.yes:
        return True
    action = "copy and delete" if cfg.run.delete_source else "copy"
    question = f"Do you want to {action} {file_count} files? (yes/No): "
    answer = input(colorize(question, colors.yellow)).strip().lower()
    if answer in ("y", "yes"):
        return True
    print("Operation cancelled by user.")
    return False


def sort_files(cfg: AppConfig, files: list[MediaFile] | None = None) -> RunSummary:
    """
    Run the sorting on the background worker and wait for it.
    Ctrl+C requests cancellation; the file being copied is finished first.
    """
    if not cfg.quiet:
        print(f"{colorize('Copying files:', colors.yellow)}")

    handle = start_run(
        cfg.run,
        on_progress=lambda event: print_process_file(event, cfg),
        on_log=lambda level, message: print_log(level, message, cfg),
        files=files,
    )

    while True:
        try:
            return handle.result()
        except KeyboardInterrupt:
            handle.cancel()
            print(f"{cfg.terminal_clear}{cfg.indent}Cancelling after the current file...")


def main() -> None:
    """Main function to run the media sorting process."""
    # Get configuration (from args module)
    cfg = get_config()
    # Condition checks
    check_conditions(cfg)
    # Print header
    print_header(cfg)

    files = collect_media_files(cfg.run.source_dir, cfg.run.include_subfolders)
    file_count = len(files)
    if not cfg.quiet:
        print(f"{colorize('Folder info:', colors.yellow)}")
        print(f"{cfg.indent}Matching files: {colorize(str(file_count), colors.cyan)}")

    if file_count == 0:
        print("No media files to process. Exiting.")
        sys.exit(0)

    if not prompt_user(file_count, cfg):
        sys.exit(0)

    summary = sort_files(cfg, files)

    # Print footer
    print_footer(summary, cfg)


if __name__ == "__main__":
    main()
