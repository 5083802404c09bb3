"""Lock file discovery for a file or directory path."""

from __future__ import annotations

import logging
import os
import sys
from typing import List

from common.logging_utils import is_debug_enabled, log_discovered_files
from constants import Constants, ExitCodes

logger = logging.getLogger(__name__)


def _is_lock_file(name: str) -> bool:
    return name.endswith(Constants.LOCK_FILE_SUFFIX)


def discover_lock_files(path: str, recursive: bool = False, lang: str = "") -> List[str]:
    """Find the lock files to process.

    Args:
        path: A single ``.lock`` file or a directory containing them.
        recursive: Descend into sub-directories when ``path`` is a directory.
        lang: Language label, only used for logging.

    Returns:
        Sorted list of lock file paths.
    """
    if not os.path.exists(path):
        logger.error("Path not found: %s", path)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if os.path.isfile(path):
        if not _is_lock_file(path):
            logger.error("Provided file is not a %s file: %s", Constants.LOCK_FILE_SUFFIX, path)
            sys.exit(ExitCodes.FILE_ERROR.value)
        return [path]

    lock_files: List[str] = []
    try:
        if recursive:
            for root, dirs, files in os.walk(path):
                dirs.sort()
                lock_files.extend(os.path.join(root, f) for f in files if _is_lock_file(f))
        else:
            with os.scandir(path) as entries:
                for entry in entries:
                    if entry.is_file() and _is_lock_file(entry.name):
                        lock_files.append(entry.path)
    except OSError as e:
        logger.error("Couldn't list lock files in %s: %s", path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    lock_files.sort()
    if is_debug_enabled(logger):
        log_discovered_files(logger, lang or "any", lock_files)

    if not lock_files:
        logger.error("No %s files found in %s", Constants.LOCK_FILE_SUFFIX, path)
        sys.exit(ExitCodes.FILE_ERROR.value)
    return lock_files


def report_name(lock_file_path: str, base_path: str) -> str:
    """Name of the report for a lock file, relative to the scanned path.

    ``ruby/Gemfile.lock`` scanned from ``ruby`` gives ``Gemfile``; nested
    files keep their sub-directory, e.g. ``app/Gemfile``, so the report tree
    mirrors the scanned tree and two lock files never share a report.
    """
    if os.path.isdir(base_path):
        rel = os.path.relpath(lock_file_path, base_path)
    else:
        rel = os.path.basename(lock_file_path)
    return rel[: -len(Constants.LOCK_FILE_SUFFIX)] if _is_lock_file(rel) else rel
