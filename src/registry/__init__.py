"""Trusted registry model."""

from registry.private import (
    Registry,
    RegistryError,
    detect_mismatches,
    load_registry,
    parse_registry,
)

__all__ = [
    "Registry",
    "RegistryError",
    "detect_mismatches",
    "load_registry",
    "parse_registry",
]
