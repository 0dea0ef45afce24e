"""Registry that dispatches lockfiles to their parser by file name."""

from typing import Dict, List, Optional

from ...utils.logging import get_logger
from ..errors import AnalysisError, LockfileError, UnsupportedFormatError
from .base import BaseParser, ParsedLockfile


class ParserRegistry:
    """Registry of lockfile parsers keyed by the file name they accept."""

    def __init__(self) -> None:
        """Initialize the parser registry."""
        self._parsers: Dict[str, BaseParser] = {}
        self.logger = get_logger("ParserRegistry")

    def register(self, parser: BaseParser) -> None:
        """Register a parser under its file name.

        Args:
            parser: Parser instance to register

        Raises:
            ValueError: If another parser already claims the same file name
        """
        if parser.file_name in self._parsers:
            raise ValueError(f"A parser is already registered for {parser.file_name}")
        self._parsers[parser.file_name] = parser

    def get_parser(self, parser_type: str) -> Optional[BaseParser]:
        """Get a registered parser by type.

        Args:
            parser_type: Parser type (e.g. 'npm', 'yarn')

        Returns:
            Parser instance or None if not found
        """
        for parser in self._parsers.values():
            if parser.parser_type == parser_type:
                return parser
        return None

    def find_parser_for_file(self, file_name: str) -> Optional[BaseParser]:
        """Find the parser that accepts the given file name.

        Args:
            file_name: Bare file name, compared exactly

        Returns:
            Parser that can handle the file or None
        """
        for parser in self._parsers.values():
            if parser.can_parse(file_name):
                return parser
        return None

    def get_supported_file_names(self) -> List[str]:
        """Get the file names that have a parser, in registration order."""
        return list(self._parsers.keys())

    def detect_and_parse(self, file_name: str, content: str) -> ParsedLockfile:
        """Select a parser by file name and parse the content with it.

        Args:
            file_name: Bare file name of the lockfile
            content: Complete text of the lockfile

        Returns:
            Parsed packages

        Raises:
            UnsupportedFormatError: If no parser accepts the file name
            LockfileError: For any parse failure; unexpected exceptions are
                wrapped in AnalysisError
        """
        parser = self.find_parser_for_file(file_name)
        if parser is None:
            raise UnsupportedFormatError()

        self.logger.debug(f"Parsing {file_name} with {type(parser).__name__}")
        try:
            return parser.parse(content)
        except LockfileError:
            raise
        except Exception as e:
            self.logger.warning(f"Unexpected error while parsing {file_name}: {e!r}")
            raise AnalysisError() from e
