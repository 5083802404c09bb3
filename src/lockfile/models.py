"""Entities extracted from lock files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class Dependency:
    """A named package, version suffix already stripped."""
    name: str


@dataclass
class Remote:
    """A source URL and the dependencies resolved from it."""
    url: str
    dependencies: Dict[str, Dependency] = field(default_factory=dict)

    def add_dependency(self, name: str) -> None:
        self.dependencies[name] = Dependency(name)

    def has_dependency(self, name: str) -> bool:
        return name in self.dependencies

    def dependency_names(self):
        """Sorted dependency names, for reporting."""
        return sorted(self.dependencies)
