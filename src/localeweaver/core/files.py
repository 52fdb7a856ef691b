"""File I/O and per-locale fan-out shared by the codecs and output writers.

Reads and writes go through here so that every OS-level failure reaches
the caller as a LocalizeFileError naming the path. Per-locale work runs on
a thread pool; every task is joined before the first failure, in
submission order, is re-raised. Work that succeeded stays done.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from localeweaver.diagnostics import ErrorTemplate, LocalizeFileError

__all__ = ["read_text_file", "run_concurrently", "write_text_file"]

logger = logging.getLogger(__name__)


def read_text_file(path: Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        FileNotFoundError: When path does not exist (callers decide whether
            a missing file is an error)
        LocalizeFileError: On any other OS-level failure
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise LocalizeFileError(
            ErrorTemplate.file_read_failed(str(path), str(exc)), path=str(path)
        ) from exc


def write_text_file(path: Path, text: str, *, kind: str) -> None:
    """Write a UTF-8 text file, creating parent directories first.

    Args:
        path: Destination file
        text: Complete file contents
        kind: What is being written ("XLIFF", "XLB", "output"), used in errors

    Raises:
        LocalizeFileError: When the directory or the file cannot be written
    """
    directory = path.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LocalizeFileError(
            ErrorTemplate.directory_create_failed(kind, str(directory), str(exc)),
            path=str(directory),
        ) from exc
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise LocalizeFileError(
            ErrorTemplate.file_write_failed(kind, str(path), str(exc)), path=str(path)
        ) from exc
    logger.debug("Wrote %s file %s", kind, path)


def run_concurrently[K, T](
    tasks: Mapping[K, Callable[[], T]],
    *,
    max_workers: int | None = None,
) -> dict[K, T]:
    """Run independent tasks on a thread pool and join all of them.

    Args:
        tasks: Task per key (typically per locale), in reporting order
        max_workers: Pool size (default: one thread per task, at least one)

    Returns:
        Results keyed like tasks

    Raises:
        Exception: The first failure in key order, after every task finished
    """
    if not tasks:
        return {}
    workers = max_workers if max_workers is not None else len(tasks)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures: dict[K, Future[T]] = {key: executor.submit(task) for key, task in tasks.items()}

    results: dict[K, T] = {}
    first_failure: BaseException | None = None
    for key, future in futures.items():
        exc = future.exception()
        if exc is None:
            results[key] = future.result()
            continue
        logger.error("Task for '%s' failed: %s", key, exc)
        if first_failure is None:
            first_failure = exc
    if first_failure is not None:
        raise first_failure
    return results
