"""
Orchestration of a sorting run on a single background worker.
"""

import dataclasses
import signal
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from mediasort.errors import ValidationError
from mediasort.models import (
    CancelToken,
    ErrorEntry,
    LogCallback,
    MediaFile,
    OutcomeStatus,
    PlanAction,
    ProgressCallback,
    ProgressEvent,
    RunConfig,
    RunSummary,
    TransferOutcome,
)
from mediasort.planner import Resolver, plan
from mediasort.resolver import DateResolver
from mediasort.scanner import collect_media_files
from mediasort.transfer import execute

CompleteCallback = Callable[[RunSummary], None]


def validate_config(config: RunConfig) -> None:
    """
    Check the configuration before any work starts.

    Raises:
        ValidationError: If a required directory does not exist
    """
    if not config.source_dir.is_dir():
        raise ValidationError(
            f"The source directory '{config.source_dir}' does not exist or is not a directory."
        )
    if not config.dest_dir.is_dir():
        raise ValidationError(
            f"The destination directory '{config.dest_dir}' does not exist or is not a directory."
        )
    if config.copy_errors and config.error_dir is None:
        raise ValidationError("An error directory is required with --copy-errors.")
    if config.copy_errors and not config.error_dir.is_dir():
        raise ValidationError(
            f"The error directory '{config.error_dir}' does not exist or is not a directory."
        )


def _no_log(level: str, message: str) -> None:
    pass


def transfer_file(file: MediaFile, config: RunConfig, resolver: Resolver) -> TransferOutcome:
    """Plan and transfer a single file."""
    result = plan(file, config, resolver)

    if result.action is PlanAction.REJECTED or result.folder is None:
        return TransferOutcome(OutcomeStatus.SKIPPED, file, reason=result.reason)

    fallback = result.action is PlanAction.ERROR_FALLBACK
    outcome = execute(file, result.folder, config.delete_source, fallback=fallback)
    if fallback and outcome.copied:
        outcome = dataclasses.replace(outcome, reason=result.reason)
    return outcome


def record_outcome(summary: RunSummary, outcome: TransferOutcome, log: LogCallback) -> None:
    """Update counters and the error list with one outcome."""
    summary.outcomes.append(outcome)
    file = outcome.file

    if outcome.status is OutcomeStatus.SKIPPED:
        summary.errors.append(ErrorEntry(file.path, outcome.reason))
        log("warning", f"{file.name}: {outcome.reason}")
        return

    if outcome.status is OutcomeStatus.FAILED:
        summary.errors.append(ErrorEntry(file.path, outcome.reason))
        log("error", f"{file.name}: {outcome.reason}")
        return

    summary.copied += 1
    if outcome.status is OutcomeStatus.COPIED_TO_ERROR_FALLBACK:
        log("warning", f"{file.name}: {outcome.reason} Copied to {outcome.destination}")
    else:
        log("info", f"{file.name} -> {outcome.destination}")

    if outcome.deleted:
        summary.deleted += 1
    elif outcome.delete_error:
        reason = f"Copied, but could not delete source: {outcome.delete_error}"
        summary.errors.append(ErrorEntry(file.path, reason))
        log("error", f"{file.name}: {reason}")


def _run_files(
    config: RunConfig,
    resolver: Resolver,
    cancel_token: CancelToken | None,
    on_progress: ProgressCallback | None,
    on_log: LogCallback | None,
    files: list[MediaFile] | None,
) -> RunSummary:
    log = on_log or _no_log
    if files is None:
        files = collect_media_files(config.source_dir, config.include_subfolders)
    summary = RunSummary(total=len(files))
    log("info", f"Found {summary.total} media files in '{config.source_dir}'.")

    for file in files:
        if cancel_token is not None and cancel_token.is_cancelled():
            log("warning", f"Run cancelled after {summary.processed} of {summary.total} files.")
            break

        outcome = transfer_file(file, config, resolver)
        record_outcome(summary, outcome, log)
        summary.processed += 1

        if on_progress is not None:
            on_progress(
                ProgressEvent(summary.processed, summary.total, summary.deleted, file, outcome)
            )

    summary.cancelled = cancel_token is not None and cancel_token.is_cancelled()
    return summary


def run(
    config: RunConfig,
    cancel_token: CancelToken | None = None,
    on_progress: ProgressCallback | None = None,
    on_log: LogCallback | None = None,
    resolver: Resolver | None = None,
    files: list[MediaFile] | None = None,
) -> RunSummary:
    """
    Sort all media files of the source directory, one file at a time.

    Cancellation is checked before each file; a file already being copied
    is finished first. Nothing is rolled back.

    Args:
        config: Run configuration
        cancel_token: Token checked before each file
        on_progress: Called after every processed file
        on_log: Called with (level, message) for log output
        resolver: Date resolver, an ExifTool based one is started when omitted
        files: Media files to process, the source directory is scanned when omitted

    Returns:
        Summary with counts and error entries

    Raises:
        ValidationError: If the configuration is invalid
    """
    validate_config(config)

    if resolver is None:
        with DateResolver() as exif_resolver:
            return _run_files(config, exif_resolver, cancel_token, on_progress, on_log, files)
    return _run_files(config, resolver, cancel_token, on_progress, on_log, files)


class RunHandle:
    """Handle of a run executing on the background worker."""

    def __init__(self, future: Future[RunSummary], cancel_token: CancelToken):
        self._future = future
        self._cancel_token = cancel_token

    def cancel(self) -> None:
        """Request cancellation; repeated calls have no further effect."""
        self._cancel_token.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancel_token.is_cancelled()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> RunSummary:
        """Wait for the run to finish and return its summary."""
        return self._future.result(timeout)


def start_run(
    config: RunConfig,
    on_progress: ProgressCallback | None = None,
    on_log: LogCallback | None = None,
    on_complete: CompleteCallback | None = None,
    resolver: Resolver | None = None,
    files: list[MediaFile] | None = None,
) -> RunHandle:
    """
    Validate the configuration and start the run on a background worker.

    on_complete receives the summary after the last progress event.
    SIGINT is blocked on the worker thread so Ctrl+C only reaches the main
    thread and never the ExifTool process started from the worker.

    Raises:
        ValidationError: If the configuration is invalid; nothing is started
    """
    validate_config(config)
    cancel_token = CancelToken()

    def work() -> RunSummary:
        if hasattr(signal, "pthread_sigmask"):
            signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGINT})
        summary = run(config, cancel_token, on_progress, on_log, resolver, files)
        if on_complete is not None:
            on_complete(summary)
        return summary

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mediasort")
    future = executor.submit(work)
    executor.shutdown(wait=False)
    return RunHandle(future, cancel_token)
