"""Parser for yarn.lock (v1) files.

Each entry is a header naming the package followed by indented fields:

    "@babel/core@^7.0.0", "@babel/core@^7.1.0":
      version "7.1.0"
      resolved "https://registry.yarnpkg.com/@babel/core/-/core-7.1.0.tgz#abc"

The remote is the part of the ``resolved`` URL before ``/<name>/``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Optional

from constants import Constants, LockFileTypes
from lockfile.base import Line, LockFile, iter_lines

logger = logging.getLogger(__name__)

_SEP = Constants.YARN_DEP_VERSION_SEPARATOR


class YarnState(Enum):
    """Scope of the line currently being read."""
    IDLE = "idle"
    IN_DEPENDENCY = "in_dependency"


def dependency_name_from_header(line: str) -> Optional[str]:
    """Extract the package name from an entry header.

    ``"@scope/pkg@1.0.0":`` gives ``@scope/pkg`` and ``"pkg@^2.3.1":`` gives
    ``pkg``. Returns None when no name can be derived.
    """
    header = line[:-1] if line.endswith(Constants.YARN_DEPENDENCY_LINE_SUFFIX) else line
    if header.startswith('"'):
        header = header[1:]
    if not header:
        return None

    if header[0] == _SEP:
        name = _SEP + header[1:].split(_SEP, 1)[0]
    else:
        name = header.split(_SEP, 1)[0]

    name = name.replace('"', "")
    if not name or name == _SEP:
        return None
    return name


def remote_url_from_resolved(line: str, dependency_name: str) -> str:
    """Extract the registry URL from a ``resolved`` line.

    The URL is everything before ``/<dependency_name>/``; if that segment is
    absent the whole resolved value is returned.
    """
    value = line[len(Constants.YARN_REMOTE_PREFIX):] if line.startswith(Constants.YARN_REMOTE_PREFIX) else line
    if value.endswith('"'):
        value = value[:-1]
    return value.split(f"/{dependency_name}/", 1)[0]


class YarnLock(LockFile):
    """yarn.lock model built line by line."""

    lang = LockFileTypes.JS.value

    def parse(self, stream: Iterable[Line]) -> None:
        state = YarnState.IDLE
        current_dependency: Optional[str] = None

        for line in iter_lines(stream):
            if state is YarnState.IDLE and line.endswith(Constants.YARN_DEPENDENCY_LINE_SUFFIX):
                current_dependency = dependency_name_from_header(line)
                if current_dependency is None:
                    logger.debug("Skipping malformed dependency header: %r", line)
                    continue
                state = YarnState.IN_DEPENDENCY
            elif state is YarnState.IN_DEPENDENCY and line.startswith(Constants.YARN_REMOTE_PREFIX):
                remote_url = remote_url_from_resolved(line, current_dependency)
                if not remote_url:
                    logger.debug("Skipping resolved line without URL: %r", line)
                    continue
                self._add_dependency(remote_url, current_dependency)
            elif line == "":
                state = YarnState.IDLE
                current_dependency = None
