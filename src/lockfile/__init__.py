"""Lock file parsers and the factory selecting one by language flag."""

from constants import LockFileTypes
from lockfile.base import LockFile
from lockfile.gemfile import GemfileLock
from lockfile.models import Dependency, Remote
from lockfile.yarn import YarnLock

_PARSERS = {
    LockFileTypes.RUBY.value: GemfileLock,
    LockFileTypes.JS.value: YarnLock,
}


def build_lock_file(lang: str) -> LockFile:
    """Return an empty parser for ``lang`` ("ruby" or "js").

    Raises:
        ValueError: If the language is not supported.
    """
    try:
        return _PARSERS[lang]()
    except KeyError:
        raise ValueError(f"Unsupported language: {lang}") from None


__all__ = [
    "Dependency",
    "GemfileLock",
    "LockFile",
    "Remote",
    "YarnLock",
    "build_lock_file",
]
