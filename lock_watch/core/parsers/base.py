"""Base parser class and data models for lockfile parsing."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List

# Package name -> resolved version, in the order packages were first seen
PackageVersionMap = Dict[str, str]


@dataclass
class ParsedLockfile:
    """Packages extracted from a single lockfile."""

    packages: PackageVersionMap = field(default_factory=dict)
    file_name: str = ""
    parser_type: str = ""
    diagnostics: List[str] = field(default_factory=list)

    def add_package(self, name: str, version: str) -> bool:
        """Record a package unless an earlier definition already exists.

        Args:
            name: Package name
            version: Resolved version

        Returns:
            True if the package was recorded, False if it was a duplicate
        """
        if name in self.packages:
            return False
        self.packages[name] = version
        return True

    def add_diagnostic(self, message: str) -> None:
        """Attach a non-fatal note about the parse."""
        self.diagnostics.append(message)

    @property
    def package_count(self) -> int:
        return len(self.packages)


class BaseParser(ABC):
    """Abstract base class for lockfile parsers.

    Parsers are selected by exact file name and operate on the full decoded
    text of the file. They keep no state between calls.
    """

    file_name: str = ""
    parser_type: str = ""

    def can_parse(self, file_name: str) -> bool:
        """Check if this parser handles files with the given name.

        Args:
            file_name: Bare file name as supplied by the caller

        Returns:
            True if the name matches exactly
        """
        return file_name == self.file_name

    @abstractmethod
    def parse(self, content: str) -> ParsedLockfile:
        """Parse lockfile content.

        Args:
            content: Complete text of the lockfile

        Returns:
            Parsed packages from the file

        Raises:
            LockfileError: If the content cannot be turned into packages
        """

    def _new_result(self) -> ParsedLockfile:
        return ParsedLockfile(file_name=self.file_name, parser_type=self.parser_type)
