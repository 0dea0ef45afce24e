"""Core lockfile parsing and matching logic for LockWatch."""

from .affected import parse_affected_names
from .analyzer import AnalysisReport, LockfileAnalyzer
from .errors import ErrorKind, LockfileError
from .matcher import AffectedPackage, AffectedPackageMatcher, AnalysisResult, match_affected
from .parsers import ParsedLockfile, detect_and_parse

__all__ = [
    "AffectedPackage",
    "AffectedPackageMatcher",
    "AnalysisReport",
    "AnalysisResult",
    "ErrorKind",
    "LockfileAnalyzer",
    "LockfileError",
    "ParsedLockfile",
    "detect_and_parse",
    "match_affected",
    "parse_affected_names",
]
