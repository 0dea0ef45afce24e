"""Error types raised while analyzing a lockfile."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of analysis failure."""

    UNSUPPORTED_FORMAT = "unsupported_format"
    MALFORMED_INPUT = "malformed_input"
    INVALID_SCHEMA = "invalid_schema"
    EMPTY_RESULT = "empty_result"
    READ_FAILURE = "read_failure"
    UNKNOWN = "unknown"


class LockfileError(Exception):
    """Base class for every failure surfaced to the user.

    The message is user-facing and is shown as-is by the output formatters.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    default_message: str = "An unknown error occurred during analysis."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnsupportedFormatError(LockfileError):
    """The file name is not one of the recognized lockfile names."""

    kind = ErrorKind.UNSUPPORTED_FORMAT
    default_message = "Please upload a file named 'package-lock.json' or 'yarn.lock'"


class MalformedInputError(LockfileError):
    """The lockfile content is not valid JSON."""

    kind = ErrorKind.MALFORMED_INPUT
    default_message = "Failed to parse file. Please ensure it's a valid JSON file."


class InvalidSchemaError(LockfileError):
    """The JSON document has no 'packages' property."""

    kind = ErrorKind.INVALID_SCHEMA
    default_message = "Invalid package-lock.json format: 'packages' property is missing."


class EmptyResultError(LockfileError):
    """The yarn.lock scan produced no packages."""

    kind = ErrorKind.EMPTY_RESULT
    default_message = "Could not find any packages. Is this a valid yarn.lock file?"


class ReadFailureError(LockfileError):
    """The file content could not be read."""

    kind = ErrorKind.READ_FAILURE
    default_message = "Error reading the file."


class AnalysisError(LockfileError):
    """Unexpected failure while parsing."""

    kind = ErrorKind.UNKNOWN
