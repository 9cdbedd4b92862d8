"""Parser error types."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Category of a media query parse failure."""

    UNKNOWN_FEATURE = "unknown_feature"
    MALFORMED_VALUE = "malformed_value"
    UNEXPECTED_TOKEN = "unexpected_token"
    UNBALANCED_GROUP = "unbalanced_group"


class ParseError(Exception):
    """Raised when a media query string cannot be parsed.

    Attributes:
        fragment: The offending substring of the source (may be empty at end of input).
        position: 0-based offset of *fragment* within the source.
        line: 1-based line of *position*, if known.
        column: 1-based column of *position*, if known.
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(
        self,
        message: str,
        fragment: str = "",
        position: int | None = None,
        line: int | None = None,
        column: int | None = None,
    ):
        self.message = message
        self.fragment = fragment
        self.position = position
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class UnknownFeatureError(ParseError):
    """A feature name is not recognised, or carries a prefix it does not accept."""

    kind = ErrorKind.UNKNOWN_FEATURE


class MalformedValueError(ParseError):
    """A feature value does not have the shape its feature expects."""

    kind = ErrorKind.MALFORMED_VALUE


class UnexpectedTokenError(ParseError):
    """The query is structurally invalid."""

    kind = ErrorKind.UNEXPECTED_TOKEN


class UnbalancedGroupError(UnexpectedTokenError):
    """A parenthesis is opened without being closed, or closed without being opened."""

    kind = ErrorKind.UNBALANCED_GROUP
