"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    USAGE_ERROR = 2
    MISMATCH_FOUND = 3


class LockFileTypes(Enum):
    """Lock file flavours supported by the program.

    Args:
        Enum (string): Language flag selecting the lock file parser.
    """

    RUBY = "ruby"
    JS = "js"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_LANGS = [
        LockFileTypes.RUBY.value,
        LockFileTypes.JS.value,
    ]
    LOCK_FILE_SUFFIX = ".lock"
    DEFAULT_REGISTRY_FILE = "registry.json"
    REMOTES_OUTPUT_DIR = "remotes_output"
    ANALYZE_OUTPUT_DIR = "analyze_output"
    REMOTES_OUTPUT_FILE = "remotes.json"
    ANALYZE_OUTPUT_SUFFIX = "_output.json"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL_ENV = "DEPINSPECT_LOG_LEVEL"
    CONFIG_SECTION = "depinspect"

    # Gemfile.lock markers
    GEMFILE_REMOTE_PREFIX = "  remote:"
    GEMFILE_SPECS_PREFIX = "  specs:"
    GEMFILE_DEPENDENCY_REGEXP = r"^ {4}\S"

    # yarn.lock markers
    YARN_DEPENDENCY_LINE_SUFFIX = ":"
    YARN_REMOTE_PREFIX = '  resolved "'
    YARN_DEP_VERSION_SEPARATOR = "@"
