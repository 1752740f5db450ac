"""
Output logic for MediaSort.
"""

import sys
import time

from mediasort.models import (
    ERROR_SUBFOLDER,
    AppConfig,
    ProgressEvent,
    RunSummary,
    colorize,
    colors,
)

LEVEL_COLORS: dict[str, str] = {
    "info": colors.cyan,
    "warning": colors.yellow,
    "error": colors.red,
}


def get_schema(cfg: AppConfig) -> str:
    """Get schema string based on current configuration."""
    file_org = "FileName.Ext"
    arrow = colorize("→", colors.yellow)
    folder = colorize(cfg.run.directory_template, colors.cyan)
    return f"{file_org} {arrow} {cfg.run.dest_dir}/{folder}/{file_org}"


def get_fallback_schema(cfg: AppConfig) -> str:
    """Get schema string for files without capture date."""
    file_org = "FileName.Ext"
    arrow = colorize("→", colors.yellow)
    folder = colorize(cfg.run.directory_template, colors.cyan)
    return f"{file_org} {arrow} {cfg.run.error_dir}/{ERROR_SUBFOLDER}/{folder}/{file_org}"


def get_status(value: bool) -> str:
    """Get colored ON/OFF status."""
    return colorize("ON", colors.green) if value else colorize("OFF", colors.red)


def get_elapsed_time(start_time: float) -> tuple[str, str]:
    """Get elapsed time since script start."""
    elapsed_time = (time.time() - start_time) * 1000
    time_factor = "ms" if elapsed_time < 1000 else "s"
    elapsed_time = elapsed_time / 1000 if elapsed_time >= 1000 else elapsed_time
    return f"{elapsed_time:.2f}", time_factor


def print_schema(cfg: AppConfig) -> None:
    """Print the schema based on current configuration."""
    print(f"{colorize('Schema:', colors.yellow)}")
    print(f"{cfg.indent}{get_schema(cfg)}")
    if cfg.run.copy_errors:
        print(f"{cfg.indent}{get_fallback_schema(cfg)} (no capture date)")


def print_progress(item: int, total: int, message: str, cfg: AppConfig) -> None:
    """Print progress of file processing."""
    percentage = (item / total) * 100 if total > 0 else 0
    msg = f"{cfg.terminal_clear}{cfg.indent}File {item} of {total}: {message} ({percentage:.0f}%)"
    print(msg, end="", flush=True)


def printe(message: str, exit_code: int = 1) -> None:
    """Print error message and exit with given exit code."""
    msg = message if exit_code == 0 else f"{colorize('Error', colors.red)}: {message}"
    print(msg)
    sys.exit(exit_code)


def print_settings(cfg: AppConfig) -> None:
    """Print settings using AppConfig internal method."""
    cfg.print_config()


def print_header(cfg: AppConfig) -> None:
    """Print the header information based on current configuration."""
    print(
        f"{colorize('Media Sorter Script', colors.green)} ({colorize(cfg.script_name, colors.green)}) v{cfg.script_version}"
    )
    if cfg.show_settings and not cfg.quiet:
        print_settings(cfg)
    print_schema(cfg)
    if cfg.quiet:
        return
    print(f"{colorize('Settings:', colors.yellow)}")
    print(f"{cfg.indent}Source: {colorize(str(cfg.run.source_dir), colors.cyan)}")
    print(f"{cfg.indent}Destination: {colorize(str(cfg.run.dest_dir), colors.cyan)}")
    if cfg.verbose:
        print(f"{cfg.indent}Verbose mode: {get_status(cfg.verbose)}")
    if cfg.verbose or not cfg.run.include_subfolders:
        print(f"{cfg.indent}Include subfolders: {get_status(cfg.run.include_subfolders)}")
    if cfg.verbose or cfg.run.copy_errors:
        print(f"{cfg.indent}Copy files without date: {get_status(cfg.run.copy_errors)}")
    if cfg.run.copy_errors:
        print(f"{cfg.indent}Error folder: {colorize(str(cfg.run.error_dir), colors.cyan)}")
    if cfg.verbose or cfg.run.delete_source:
        print(f"{cfg.indent}Delete source after copy: {get_status(cfg.run.delete_source)}")


def print_log(level: str, message: str, cfg: AppConfig) -> None:
    """Print a run log message. Info is shown in verbose mode only, nothing in quiet mode."""
    if cfg.quiet or (level == "info" and not cfg.verbose):
        return
    color = LEVEL_COLORS.get(level, colors.cyan)
    print(f"{cfg.terminal_clear}{cfg.indent}{colorize(level.upper(), color)} {message}")


def print_process_file(event: ProgressEvent, cfg: AppConfig) -> None:
    """Print progress after a single file was processed."""
    if cfg.quiet or cfg.verbose:
        return
    name = colorize(event.file.name, colors.cyan)
    message = f"{name}, deleted: {event.deleted}" if cfg.run.delete_source else name
    print_progress(event.processed, event.total, message, cfg)


def print_file_errors(summary: RunSummary, cfg: AppConfig) -> None:
    """Print files that could not be sorted with the reason."""
    if not summary.errors:
        return
    print(f"{colorize(f'Files with errors ({len(summary.errors)}):', colors.yellow)}")
    for entry in summary.errors:
        print(
            f"{cfg.indent}{colorize(str(entry.path), colors.cyan)}: {colorize(entry.reason, colors.red)}"
        )


def print_footer(summary: RunSummary, cfg: AppConfig) -> None:
    """Print the footer summary based on the run summary and configuration."""
    if not cfg.verbose and not cfg.quiet and summary.processed:
        print(f"{cfg.terminal_clear}{cfg.indent}Done.")
    if (not cfg.quiet or cfg.show_errors) and summary.errors:
        print_file_errors(summary, cfg)

    time_elapsed, time_factor = get_elapsed_time(cfg.start_time)
    print(f"{colorize('Summary:', colors.yellow)}")
    if summary.cancelled:
        print(f"{cfg.indent}{colorize('Run cancelled.', colors.red)}")
    print(f"{cfg.indent}Processed files: {summary.processed} of {summary.total}")
    print(f"{cfg.indent}Copied files: {summary.copied}")
    print(f"{cfg.indent}Deleted files: {summary.deleted}")
    print(f"{cfg.indent}Files with errors: {len(summary.errors)}")
    print(f"{cfg.indent}Completed in: {colorize(time_elapsed, colors.cyan)} {time_factor}.")
