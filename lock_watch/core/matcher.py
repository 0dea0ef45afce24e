"""Matching of lockfile packages against the affected package list."""

from dataclasses import dataclass, field
from typing import AbstractSet, Any, Dict, List, Mapping

from ..utils.logging import get_logger


@dataclass(frozen=True)
class AffectedPackage:
    """A lockfile package whose name is on the affected list."""

    name: str
    version: str


@dataclass
class AnalysisResult:
    """Outcome of matching one lockfile against the affected list."""

    found: List[AffectedPackage] = field(default_factory=list)
    scanned_count: int = 0

    @property
    def has_matches(self) -> bool:
        return bool(self.found)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form of the result."""
        return {
            "found": [{"name": pkg.name, "version": pkg.version} for pkg in self.found],
            "scanned_count": self.scanned_count,
        }


class AffectedPackageMatcher:
    """Intersects parsed lockfile packages with a set of affected names."""

    def __init__(self) -> None:
        self.logger = get_logger("AffectedPackageMatcher")

    def match(
        self,
        packages: Mapping[str, str],
        affected_names: AbstractSet[str]
    ) -> AnalysisResult:
        """Find the affected packages present in a lockfile.

        Matches are reported in the lockfile's package order, not the order of
        the affected list.

        Args:
            packages: Package name -> version mapping from a parser
            affected_names: Names to look for

        Returns:
            Matched packages and the number of distinct packages scanned
        """
        found = [
            AffectedPackage(name=name, version=version)
            for name, version in packages.items()
            if name in affected_names
        ]

        for pkg in found:
            self.logger.debug(f"MATCH: {pkg.name} {pkg.version}")

        return AnalysisResult(found=found, scanned_count=len(packages))


def match_affected(
    packages: Mapping[str, str],
    affected_names: AbstractSet[str]
) -> AnalysisResult:
    """Match a package mapping against affected names."""
    return AffectedPackageMatcher().match(packages, affected_names)
