"""Configuration for LockWatch."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Mapping, Optional

from .core.affected import format_affected_names, parse_affected_names
from .utils.logging import get_logger

AFFECTED_LIST_ENV_VAR = "LOCKWATCH_AFFECTED_LIST"
DEFAULT_AFFECTED_LIST_PATH = Path.home() / ".lockwatch_affected.txt"

# Packages published with malicious versions in the September 2025 npm compromise
DEFAULT_AFFECTED_PACKAGES: FrozenSet[str] = frozenset({
    "ansi-regex",
    "ansi-styles",
    "backslash",
    "chalk",
    "chalk-template",
    "color",
    "color-convert",
    "color-name",
    "color-string",
    "debug",
    "error-ex",
    "has-ansi",
    "is-arrayish",
    "simple-swizzle",
    "slice-ansi",
    "strip-ansi",
    "supports-color",
    "supports-hyperlinks",
    "wrap-ansi",
})

logger = get_logger("config")


@dataclass
class LockWatchConfig:
    """Settings for where the affected package list lives."""

    affected_list_path: Path = DEFAULT_AFFECTED_LIST_PATH
    default_affected: FrozenSet[str] = field(default_factory=lambda: DEFAULT_AFFECTED_PACKAGES)
    encoding: str = "utf-8-sig"

    def load_affected_names(self) -> FrozenSet[str]:
        """Load the affected list, falling back to the built-in one.

        Returns:
            Set of affected package names
        """
        if not self.affected_list_path.exists():
            logger.debug(f"No affected list at {self.affected_list_path}, using built-in list")
            return self.default_affected

        text = self.affected_list_path.read_text(encoding=self.encoding)
        return parse_affected_names(text)

    def save_affected_names(self, names: Iterable[str]) -> None:
        """Write the affected list, one name per line.

        Args:
            names: Package names to store
        """
        self.affected_list_path.parent.mkdir(parents=True, exist_ok=True)
        # Written without a BOM; "utf-8-sig" only matters when reading
        self.affected_list_path.write_text(format_affected_names(names), encoding="utf-8")
        logger.debug(f"Saved affected list to {self.affected_list_path}")

    def reset_affected_names(self) -> None:
        """Remove the stored list so the built-in one applies again."""
        if self.affected_list_path.exists():
            self.affected_list_path.unlink()


def load_config(environ: Optional[Mapping[str, str]] = None) -> LockWatchConfig:
    """Build configuration from the environment.

    Args:
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Configuration instance
    """
    environ = os.environ if environ is None else environ
    list_path = environ.get(AFFECTED_LIST_ENV_VAR)
    if list_path:
        return LockWatchConfig(affected_list_path=Path(list_path).expanduser())
    return LockWatchConfig()
