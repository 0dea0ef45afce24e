"""End-to-end analysis of a lockfile against the affected package list."""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, List, Optional

from ..utils.logging import get_logger
from .errors import ReadFailureError, UnsupportedFormatError
from .matcher import AffectedPackageMatcher, AnalysisResult
from .parsers import ParserRegistry, registry as default_registry


@dataclass
class AnalysisReport:
    """Result of analyzing one lockfile, with parse notes and timing."""

    file_name: str
    result: AnalysisResult
    diagnostics: List[str] = field(default_factory=list)
    analysis_time: float = 0.0


class LockfileAnalyzer:
    """Runs dispatch, parsing and matching for a single lockfile."""

    def __init__(self, parser_registry: Optional[ParserRegistry] = None) -> None:
        """Initialize the analyzer.

        Args:
            parser_registry: Registry used to pick a parser (defaults to the
                built-in npm and yarn parsers)
        """
        self.registry = parser_registry or default_registry
        self.matcher = AffectedPackageMatcher()
        self.logger = get_logger("LockfileAnalyzer")

    def analyze(
        self,
        file_name: str,
        content: str,
        affected_names: AbstractSet[str]
    ) -> AnalysisReport:
        """Analyze lockfile content that has already been read.

        Args:
            file_name: Bare name of the lockfile, used to pick the parser
            content: Complete text of the lockfile
            affected_names: Names to look for

        Returns:
            Analysis report

        Raises:
            LockfileError: If the file is unsupported or cannot be parsed
        """
        start_time = time.perf_counter()

        parsed = self.registry.detect_and_parse(file_name, content)
        result = self.matcher.match(parsed.packages, affected_names)

        elapsed = time.perf_counter() - start_time
        self.logger.debug(
            f"{file_name}: scanned {result.scanned_count} packages, "
            f"{len(result.found)} affected ({elapsed:.3f}s)"
        )

        return AnalysisReport(
            file_name=file_name,
            result=result,
            diagnostics=list(parsed.diagnostics),
            analysis_time=elapsed,
        )

    def analyze_file(
        self,
        path: Path,
        affected_names: AbstractSet[str],
        encoding: str = "utf-8-sig"
    ) -> AnalysisReport:
        """Read a lockfile from disk and analyze it.

        The parser is chosen from the file's name only; the rest of the path is
        ignored.

        Args:
            path: Path to the lockfile
            affected_names: Names to look for
            encoding: Text encoding of the file

        Returns:
            Analysis report

        Raises:
            ReadFailureError: If the file cannot be read or decoded
            LockfileError: If the file is unsupported or cannot be parsed
        """
        # Reject unsupported names before touching the file
        if self.registry.find_parser_for_file(path.name) is None:
            raise UnsupportedFormatError()

        try:
            content = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            self.logger.debug(f"Failed to read {path}: {e}")
            raise ReadFailureError() from e

        return self.analyze(path.name, content, affected_names)
