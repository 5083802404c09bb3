"""Common contract shared by the lock file parsers.

Each concrete parser owns its own ``remotes`` mapping (remote URL -> Remote)
and only has to implement ``parse``; querying and dumping the model is shared.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import IO, Dict, Iterable, List, Optional, Union

from common.logging_utils import Timer, extra_context, is_debug_enabled
from lockfile.models import Remote

logger = logging.getLogger(__name__)

Line = Union[str, bytes]


def iter_lines(stream: Iterable[Line]):
    """Yield text lines without their line terminator.

    Accepts binary or text streams. A single trailing carriage return is
    dropped so CRLF files parse like LF ones.
    """
    for raw in stream:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        line = raw[:-1] if raw.endswith("\n") else raw
        if line.endswith("\r"):
            line = line[:-1]
        yield line


class LockFile(ABC):
    """A parsed lock file: which remote supplies which dependency."""

    lang = ""

    def __init__(self) -> None:
        self.remotes: Dict[str, Remote] = {}

    @abstractmethod
    def parse(self, stream: Iterable[Line]) -> None:
        """Consume the whole stream and populate ``self.remotes``."""

    def parse_file(self, path: str) -> None:
        """Open ``path`` in binary mode and parse it.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        with Timer() as t:
            with open(path, "rb") as fh:
                self.parse(fh)
        if is_debug_enabled(logger):
            logger.debug(
                "Parsed lock file",
                extra=extra_context(
                    event="parse",
                    component="lockfile",
                    action=type(self).__name__,
                    target=path,
                    count=len(self.remotes),
                    duration_ms=t.duration_ms(),
                ),
            )

    def _add_remote(self, url: str) -> Remote:
        remote = self.remotes.get(url)
        if remote is None:
            remote = Remote(url)
            self.remotes[url] = remote
        return remote

    def _add_dependency(self, remote_url: str, dependency_name: str) -> None:
        self._add_remote(remote_url).add_dependency(dependency_name)

    def match_remote_urls(self, grep: str = "") -> List[str]:
        """Return remote URLs containing ``grep``, ignoring case.

        An empty ``grep`` returns every known remote URL.
        """
        if not grep:
            return list(self.remotes)
        needle = grep.lower()
        return [url for url in self.remotes if needle in url.lower()]

    def get_remote_urls_with_dependency_mismatch(self, registry_url: str, dependency: str) -> List[str]:
        """Return every remote other than ``registry_url`` that resolves ``dependency``."""
        return [
            url
            for url, remote in self.remotes.items()
            if url != registry_url and remote.has_dependency(dependency)
        ]

    def dump_remotes(self, out: Optional[IO[str]] = None) -> None:
        """Write a human readable dump of every remote and its dependencies."""
        out = out if out is not None else sys.stdout
        for url, remote in self.remotes.items():
            out.write(f"{url}\n")
            for name in remote.dependency_names():
                out.write(f"  {name}\n")
            out.write("--------------------\n")
