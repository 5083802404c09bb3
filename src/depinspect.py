"""depinspect - dependency confusion checker for Gemfile.lock and yarn.lock files.

Two commands are available:

    remotes   List every remote found in .lock files
    analyze   Report registry dependencies resolved from another remote

The process exits with one of ``constants.ExitCodes``.
"""
import json
import logging
import os
import sys
from typing import Dict, List, Optional

from args import build_parser, parse_args
from cli_config import apply_config, load_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from lockfile import LockFile, build_lock_file
from lockfile.scan import discover_lock_files, report_name
from registry import Registry, RegistryError, load_registry

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    configure_logging(getattr(args, "LOG_LEVEL", None))

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            logger.error("Cannot open log file %s: %s", log_file, e)
            sys.exit(ExitCodes.FILE_ERROR.value)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        ))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def create_directory(path: str) -> None:
    """Create the output directory, aborting the run on failure."""
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logging.error("Error creating directory %s: %s", path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def export_json(data, path: str) -> None:
    """Write ``data`` as indented JSON to ``path``.

    Args:
        data: JSON serializable report.
        path: File path to export the JSON.
    """
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=2)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def parse_lock_file(path: str, lang: str, verbose: bool = False) -> Optional[LockFile]:
    """Parse one lock file, or return None if it cannot be read.

    A read failure only skips this file; the rest of the batch continues.
    """
    lock_file = build_lock_file(lang)
    try:
        lock_file.parse_file(path)
    except OSError as e:
        logging.warning("Error opening file %s, skipping: %s", path, e)
        return None

    if verbose:
        lock_file.dump_remotes()
    return lock_file


def list_remotes(filenames: List[str], output_folder: str, lang: str,
                 grep: str = "", verbose: bool = False) -> List[str]:
    """Collect the remote URLs matching ``grep`` across every lock file.

    Writes the deduplicated, sorted list to ``remotes.json`` in ``output_folder``.

    Returns:
        list: The matched remote URLs.
    """
    matched = set()
    for filename in filenames:
        logging.info("Parsing file: %s", filename)
        lock_file = parse_lock_file(filename, lang, verbose)
        if lock_file is None:
            continue
        matched.update(lock_file.match_remote_urls(grep))

    remote_urls = sorted(matched)
    logging.info("Found %d remote(s)", len(remote_urls))
    export_json(remote_urls, os.path.join(output_folder, Constants.REMOTES_OUTPUT_FILE))
    return remote_urls


def analyze_dependencies(filenames: List[str], output_folder: str, lang: str,
                         registry: Registry, base_path: str = "",
                         verbose: bool = False) -> Dict[str, Dict[str, List[str]]]:
    """Detect registry dependencies resolved from other remotes, per lock file.

    Each lock file is parsed independently. A report is written only for
    files with at least one mismatch.

    Returns:
        dict: Lock file path -> {remote URL: [dependency names]}, non-empty only.
    """
    results: Dict[str, Dict[str, List[str]]] = {}
    for filename in filenames:
        logging.info("Parsing file: %s", filename)
        lock_file = parse_lock_file(filename, lang, verbose)
        if lock_file is None:
            continue

        mismatches = registry.get_dependency_mismatches(lock_file)
        if not mismatches:
            continue

        logging.warning("Dependency mismatches found for %s", filename)
        results[filename] = mismatches
        output_file = report_name(filename, base_path or filename) + Constants.ANALYZE_OUTPUT_SUFFIX
        output_path = os.path.join(output_folder, output_file)
        create_directory(os.path.dirname(output_path))
        export_json(mismatches, output_path)
    return results


def _resolve_lang(args) -> str:
    lang = getattr(args, "LANG", None)
    if lang not in Constants.SUPPORTED_LANGS:
        if lang:
            logging.error("Error inferring language: unsupported language '%s'", lang)
        else:
            logging.error("Error inferring language: no language specified (use --ruby or --js)")
        sys.exit(ExitCodes.USAGE_ERROR.value)
    return lang


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    if not args.action:
        build_parser().print_help(sys.stderr)
        sys.exit(ExitCodes.USAGE_ERROR.value)

    _setup_logging(args)
    apply_config(args, load_config(args.CONFIG))
    if args.LOG_LEVEL:
        logging.getLogger().setLevel(getattr(logging, args.LOG_LEVEL, logging.INFO))

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    lang = _resolve_lang(args)
    filenames = discover_lock_files(args.PATH, recursive=bool(args.RECURSIVE), lang=lang)

    if args.action == "remotes":
        create_directory(args.OUTPUT_DIR)
        list_remotes(filenames, args.OUTPUT_DIR, lang, args.GREP or "", args.VERBOSE)
        sys.exit(ExitCodes.SUCCESS.value)

    try:
        registry = load_registry(args.REGISTRY)
    except RegistryError as e:
        logging.error("Error building registry: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    logging.info("Registry loaded: %s (%d dependencies)", registry.url, len(registry.dependencies))

    create_directory(args.OUTPUT_DIR)
    results = analyze_dependencies(
        filenames, args.OUTPUT_DIR, lang, registry,
        base_path=args.PATH, verbose=args.VERBOSE,
    )

    if results:
        logging.warning("Dependency mismatches found in %d lock file(s).", len(results))
        if args.ERROR_ON_MISMATCH:
            logging.error("Mismatches present, exiting with non-zero status code.")
            sys.exit(ExitCodes.MISMATCH_FOUND.value)
    else:
        logging.info("No dependency mismatches found.")

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
