"""Parser for Ruby Gemfile.lock files.

Only the indentation matters to this parser:

    GEM
      remote: https://rubygems.org/
      specs:
        actioncable (5.2.2)
          actionpack (= 5.2.2)

``remote:`` and ``specs:`` are indented by two spaces, direct dependencies by
four and dependencies of dependencies by six. Only four-space lines are kept.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterable

from constants import Constants, LockFileTypes
from lockfile.base import Line, LockFile, iter_lines

logger = logging.getLogger(__name__)

_DEPENDENCY_RE = re.compile(Constants.GEMFILE_DEPENDENCY_REGEXP)


class GemfileState(Enum):
    """Scope of the line currently being read."""
    IDLE = "idle"
    IN_REMOTE = "in_remote"
    IN_SPECS = "in_specs"


class GemfileLock(LockFile):
    """Gemfile.lock model built line by line."""

    lang = LockFileTypes.RUBY.value

    def parse(self, stream: Iterable[Line]) -> None:
        state = GemfileState.IDLE
        current_remote = ""

        for line in iter_lines(stream):
            if line.startswith(Constants.GEMFILE_REMOTE_PREFIX):
                url = line[len(Constants.GEMFILE_REMOTE_PREFIX):].strip()
                if not url:
                    logger.debug("Skipping remote declaration without URL")
                    current_remote = ""
                    state = GemfileState.IDLE
                    continue
                current_remote = url
                self._add_remote(url)
                state = GemfileState.IN_REMOTE
            elif state is not GemfileState.IDLE and line.startswith(Constants.GEMFILE_SPECS_PREFIX):
                state = GemfileState.IN_SPECS
            elif state is GemfileState.IN_SPECS and _DEPENDENCY_RE.match(line):
                self._add_dependency(current_remote, line.split()[0])
            elif line == "":
                state = GemfileState.IDLE
