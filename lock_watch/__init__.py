"""LockWatch - check npm and yarn lockfiles for packages on an affected list."""

__version__ = "0.1.0"

from .core.analyzer import LockfileAnalyzer
from .core.matcher import match_affected
from .core.parsers import detect_and_parse
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "LockfileAnalyzer",
    "detect_and_parse",
    "match_affected",
    "ConsoleFormatter",
    "JSONFormatter",
]
