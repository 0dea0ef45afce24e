"""Node.js lockfile parsers."""

import json
from typing import Any, List, Tuple

from ...utils.logging import get_logger
from ..errors import EmptyResultError, InvalidSchemaError, MalformedInputError
from .base import BaseParser, ParsedLockfile

NODE_MODULES = "node_modules/"
YARN_METADATA_HEADER = "__metadata:"


def install_path_to_name(install_path: str) -> str:
    """Extract the package name from a package-lock install path.

    The innermost package wins for nested paths, so
    ``node_modules/a/node_modules/@scope/b`` yields ``@scope/b``.

    Args:
        install_path: Key of the lockfile's ``packages`` mapping

    Returns:
        Package name, or an empty string if the path is not under node_modules
    """
    index = install_path.rfind(NODE_MODULES)
    if index == -1:
        return ""
    return install_path[index + len(NODE_MODULES):]


def specifier_to_name(specifier: str) -> str:
    """Extract the package name from a yarn.lock specifier.

    ``"@babel/core@^7.0.0"`` gives ``@babel/core``; a specifier without a
    version suffix is returned as-is.
    """
    specifier = specifier.strip()
    if specifier.startswith('"'):
        specifier = specifier[1:]
    if specifier.endswith('"'):
        specifier = specifier[:-1]

    at_index = specifier.rfind("@")
    if at_index > 0:
        return specifier[:at_index]
    return specifier


class NpmLockParser(BaseParser):
    """Parser for npm package-lock.json files."""

    file_name = "package-lock.json"
    parser_type = "npm"

    def __init__(self) -> None:
        self.logger = get_logger("NpmLockParser")

    def parse(self, content: str) -> ParsedLockfile:
        """Parse a package-lock.json document.

        Only the flat ``packages`` mapping (lockfile versions 2 and 3) is read.

        Args:
            content: Text of the package-lock.json file

        Returns:
            Parsed packages, in document order

        Raises:
            MalformedInputError: If the content is not valid JSON
            InvalidSchemaError: If the document has no ``packages`` mapping
        """
        try:
            data = json.loads(content)
        except ValueError as e:
            self.logger.debug(f"JSON decode failed: {e}")
            raise MalformedInputError() from e

        packages = data.get("packages") if isinstance(data, dict) else None
        if not isinstance(packages, dict):
            raise InvalidSchemaError()

        result = self._new_result()
        unversioned: List[str] = []

        for install_path, entry in packages.items():
            # Root project entry
            if install_path == "":
                continue

            name = install_path_to_name(install_path)
            if not name:
                continue

            version = self._entry_version(entry)
            if result.add_package(name, version) and not version:
                unversioned.append(name)

        if unversioned:
            result.add_diagnostic(
                f"{len(unversioned)} package(s) have no version in the lockfile: "
                f"{', '.join(unversioned[:5])}{' ...' if len(unversioned) > 5 else ''}"
            )

        if isinstance(data.get("dependencies"), dict):
            result.add_diagnostic(
                "The legacy 'dependencies' section was not read; only 'packages' entries were scanned."
            )

        self.logger.debug(f"Parsed {result.package_count} packages from {self.file_name}")
        return result

    @staticmethod
    def _entry_version(entry: Any) -> str:
        # Workspace links carry "resolved"/"link" but no version
        if isinstance(entry, dict) and isinstance(entry.get("version"), str):
            return entry["version"]
        return ""


class YarnLockParser(BaseParser):
    """Parser for yarn.lock files (classic and Berry formats)."""

    file_name = "yarn.lock"
    parser_type = "yarn"

    def __init__(self) -> None:
        self.logger = get_logger("YarnLockParser")

    def parse(self, content: str) -> ParsedLockfile:
        """Parse yarn.lock content.

        Args:
            content: Text of the yarn.lock file

        Returns:
            Parsed packages, in the order their blocks appear

        Raises:
            EmptyResultError: If no package with a version was found
        """
        result = self._new_result()
        pending: Tuple[str, ...] = ()

        for line in content.split("\n"):
            pending = self._scan_line(line, pending, result)

        if pending:
            self._note_unresolved(pending, result)

        if not result.packages:
            raise EmptyResultError()

        self.logger.debug(f"Parsed {result.package_count} packages from {self.file_name}")
        return result

    def _scan_line(
        self,
        line: str,
        pending: Tuple[str, ...],
        result: ParsedLockfile
    ) -> Tuple[str, ...]:
        """Consume one line and return the names still waiting for a version.

        Args:
            line: Raw line, without its trailing newline
            pending: Names declared by the current block header
            result: Packages collected so far

        Returns:
            Pending names after this line
        """
        if line.startswith(YARN_METADATA_HEADER):
            return ()

        if line and not line.startswith(" ") and not line.startswith("#"):
            header = line.strip()
            if not header.endswith(":"):
                return pending
            if pending:
                self._note_unresolved(pending, result)
            return self._header_names(header[:-1])

        stripped = line.strip()
        if stripped.startswith("version") and pending:
            _, _, value = stripped.partition(" ")
            version = value.replace('"', "").strip()
            for name in pending:
                result.add_package(name, version)
            return ()

        return pending

    @staticmethod
    def _header_names(header: str) -> Tuple[str, ...]:
        names: List[str] = []
        for specifier in header.split(","):
            name = specifier_to_name(specifier)
            if name:
                names.append(name)
        return tuple(names)

    def _note_unresolved(self, names: Tuple[str, ...], result: ParsedLockfile) -> None:
        message = f"No version line found for {', '.join(names)}"
        self.logger.debug(message)
        result.add_diagnostic(message)
