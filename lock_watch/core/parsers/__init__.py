"""Lockfile parsers for the Node.js ecosystem."""

from .base import BaseParser, PackageVersionMap, ParsedLockfile
from .nodejs import NpmLockParser, YarnLockParser
from .registry import ParserRegistry

# Register built-in parsers
registry = ParserRegistry()
registry.register(NpmLockParser())
registry.register(YarnLockParser())

# Convenience exports
detect_and_parse = registry.detect_and_parse

__all__ = [
    "BaseParser",
    "PackageVersionMap",
    "ParsedLockfile",
    "NpmLockParser",
    "YarnLockParser",
    "ParserRegistry",
    "registry",
    "detect_and_parse",
]
