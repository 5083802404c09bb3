"""Argument parsing functionality for depinspect."""

import argparse

from constants import Constants, LockFileTypes


def _add_common_options(parser):
    """Options shared by every sub-command."""
    parser.add_argument("--path",
                        dest="PATH",
                        help="A .lock file or a directory containing .lock files",
                        action="store", type=str,
                        required=True)

    lang_group = parser.add_mutually_exclusive_group()
    lang_group.add_argument("--ruby",
                            dest="LANG",
                            help="Parse Gemfile.lock files",
                            action="store_const",
                            const=LockFileTypes.RUBY.value)
    lang_group.add_argument("--js",
                            dest="LANG",
                            help="Parse yarn.lock files",
                            action="store_const",
                            const=LockFileTypes.JS.value)

    parser.add_argument("-o", "--output-dir",
                        dest="OUTPUT_DIR",
                        help="Directory the JSON reports are written to",
                        action="store",
                        type=str)
    parser.add_argument("-r", "--recursive",
                        dest="RECURSIVE",
                        help="Recursively scan directories for .lock files.",
                        action="store_true",
                        default=None)
    parser.add_argument("-v", "--verbose",
                        dest="VERBOSE",
                        help="Print the dependencies parsed from each .lock file",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)


def build_parser():
    """Build the top-level parser with its sub-commands."""
    parser = argparse.ArgumentParser(
        prog="depinspect",
        description=(
            "depinspect - analyze dependencies and list remotes in .lock files"
        ),
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", metavar="command")

    remotes = subparsers.add_parser(
        "remotes",
        help="List every remote found in .lock files",
        description="List every remote found in .lock files",
    )
    _add_common_options(remotes)
    remotes.add_argument("--grep",
                         dest="GREP",
                         help="Substring to match against remote URLs (case-insensitive)",
                         action="store",
                         type=str)

    analyze = subparsers.add_parser(
        "analyze",
        help="Analyze .lock files for dependencies resolved from the wrong remote",
        description="Analyze .lock files for dependencies resolved from the wrong remote",
    )
    _add_common_options(analyze)
    analyze.add_argument("--registry",
                         dest="REGISTRY",
                         help=f"Registry file in JSON format (default: {Constants.DEFAULT_REGISTRY_FILE})",
                         action="store",
                         type=str)
    analyze.add_argument("--error-on-mismatch",
                         dest="ERROR_ON_MISMATCH",
                         help="Exit with a non-zero status code if mismatches are found.",
                         action="store_true")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
