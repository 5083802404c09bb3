"""Trusted private registry and dependency mismatch detection."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when the registry file cannot be loaded."""


@dataclass(frozen=True)
class Registry:
    """A trusted URL and the dependencies expected to come from it."""
    url: str
    dependencies: Tuple[str, ...] = ()

    def get_dependency_mismatches(self, lock_file) -> Dict[str, List[str]]:
        """See :func:`detect_mismatches`."""
        return detect_mismatches(self, lock_file)


def detect_mismatches(registry: Registry, lock_file) -> Dict[str, List[str]]:
    """Find registry dependencies resolved from another remote.

    For each dependency listed in the registry (in registry order), every
    remote of ``lock_file`` other than the registry URL that resolves it gets
    the name appended to its list. Remotes without a mismatch are left out of
    the result.

    Example:
        A registry ``https://packages.acme.io/`` listing ``active_kafka`` and
        ``cityhash``, and a Gemfile.lock resolving both from
        ``https://rubygems.org/``, gives
        ``{"https://rubygems.org/": ["active_kafka", "cityhash"]}``.

    Args:
        registry: Trusted registry.
        lock_file: Parsed lock file (any ``lockfile.base.LockFile``).

    Returns:
        Mapping of remote URL -> mismatched dependency names.
    """
    mismatches: Dict[str, List[str]] = {}
    for dependency in registry.dependencies:
        for remote_url in lock_file.get_remote_urls_with_dependency_mismatch(registry.url, dependency):
            mismatches.setdefault(remote_url, []).append(dependency)

    if is_debug_enabled(logger):
        logger.debug(
            "Mismatch detection finished",
            extra=extra_context(
                event="decision",
                component="registry",
                action="detect_mismatches",
                outcome="mismatch" if mismatches else "clean",
                count=sum(len(v) for v in mismatches.values()),
            ),
        )
    return mismatches


def _lookup(data: Dict[str, Any], key: str, default: Any) -> Any:
    """Case-insensitive key lookup: ``Url``, ``url`` and ``URL`` all match."""
    if key in data:
        return data[key]
    lowered = key.lower()
    for k, v in data.items():
        if isinstance(k, str) and k.lower() == lowered:
            return v
    return default


def parse_registry(data: Any) -> Registry:
    """Build a Registry from a decoded ``{"Url": ..., "Dependencies": [...]}`` document.

    Raises:
        RegistryError: If the document does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise RegistryError("registry document must be a JSON object")

    url = _lookup(data, "Url", "")
    if url is None:
        url = ""
    if not isinstance(url, str):
        raise RegistryError("registry 'Url' must be a string")

    dependencies = _lookup(data, "Dependencies", [])
    if dependencies is None:
        dependencies = []
    if not isinstance(dependencies, list) or not all(isinstance(d, str) for d in dependencies):
        raise RegistryError("registry 'Dependencies' must be a list of strings")

    return Registry(url=url, dependencies=tuple(dependencies))


def load_registry(path: str) -> Registry:
    """Load the registry JSON file at ``path``.

    Raises:
        RegistryError: If the file cannot be read or is not a valid registry.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as e:
        raise RegistryError(f"cannot read registry file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RegistryError(f"invalid JSON in registry file {path}: {e}") from e

    registry = parse_registry(data)
    logger.debug("Registry %s lists %d dependencies", registry.url, len(registry.dependencies))
    return registry
