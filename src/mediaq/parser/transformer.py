"""Lark Transformer that converts a media query parse tree into a MediaQueryList."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError

from mediaq.model.query import (
    And,
    Comparator,
    Condition,
    FeatureTest,
    MediaFeature,
    MediaQuery,
    MediaQueryList,
    MediaType,
)
from mediaq.parser.coerce import RawValue, coerce_value
from mediaq.parser.errors import (
    MalformedValueError,
    ParseError,
    UnbalancedGroupError,
    UnexpectedTokenError,
    UnknownFeatureError,
)

__all__ = ["MediaQueryTransformer", "parse_media_query_list"]

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_PREFIXES: dict[str, Comparator] = {
    "min-": Comparator.GE,
    "max-": Comparator.LE,
}


def _split_feature_name(name: str) -> tuple[Comparator, str]:
    """Split ``min-width`` into (GE, "width"); unprefixed names compare with EQ."""
    for prefix, comparator in _PREFIXES.items():
        if name.startswith(prefix):
            return comparator, name[len(prefix):]
    return Comparator.EQ, name


def _resolve_feature_name(text: str, position: int) -> tuple[Comparator, MediaFeature]:
    """Map a feature name as written to its comparator and feature."""
    name = text.lower()
    comparator, base = _split_feature_name(name)
    try:
        feature = MediaFeature(base)
    except ValueError:
        logger.debug("Rejecting unknown media feature %r", name)
        raise UnknownFeatureError(
            f"Unknown media feature: {text!r}", fragment=text, position=position
        ) from None
    if comparator is not Comparator.EQ and not feature.is_range:
        raise UnknownFeatureError(
            f"Media feature {feature.value!r} does not accept a {comparator.prefix!r} prefix",
            fragment=text,
            position=position,
        )
    return comparator, feature


class _Modifier:
    """Marker for a leading ``not`` or ``only``."""

    def __init__(self, token: Token):
        self.token = token
        self.keyword = str(token).lower()


class MediaQueryTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into model objects.

    Feature names, units and keywords are validated here; the grammar only
    checks the structure.
    """

    def __init__(self, source: str = ""):
        super().__init__()
        self.source = source

    # ---- values ----

    def dimension(self, items: list[Token]) -> RawValue:
        token = items[0]
        return RawValue("dimension", str(token), token.start_pos)

    def number(self, items: list[Token]) -> RawValue:
        token = items[0]
        return RawValue("number", str(token), token.start_pos)

    def keyword(self, items: list[Token]) -> RawValue:
        token = items[0]
        return RawValue("keyword", str(token), token.start_pos)

    def ratio(self, items: list[Token]) -> RawValue:
        first, last = items[0], items[-1]
        text = self.source[first.start_pos:last.end_pos] or f"{first}/{last}"
        return RawValue("ratio", text, first.start_pos, terms=(str(first), str(last)))

    # ---- structural ----

    def modifier(self, items: list[Token]) -> _Modifier:
        return _Modifier(items[0])

    def media_type(self, items: list[Token]) -> MediaType:
        token = items[0]
        try:
            return MediaType(str(token).lower())
        except ValueError:
            raise UnexpectedTokenError(
                f"Unknown media type: {str(token)!r}",
                fragment=str(token),
                position=token.start_pos,
            ) from None

    def feature(self, items: list[object]) -> FeatureTest:
        token: Token = items[0]  # type: ignore[assignment]
        raw: RawValue | None = items[1] if len(items) > 1 else None  # type: ignore[assignment]
        comparator, feature = _resolve_feature_name(str(token), token.start_pos)
        if raw is None:
            if comparator is not Comparator.EQ:
                raise MalformedValueError(
                    f"Media feature {str(token).lower()!r} requires a value",
                    fragment=str(token),
                    position=token.start_pos,
                )
            return FeatureTest(feature, comparator)
        return FeatureTest(feature, comparator, coerce_value(raw, feature))

    def query(self, items: list[object]) -> MediaQuery:
        modifier = items[0]
        rest = items[1:]
        media_type: MediaType | None = None
        if rest and isinstance(rest[0], MediaType):
            media_type = rest[0]
            rest = rest[1:]

        negated = False
        only = False
        if isinstance(modifier, _Modifier):
            if modifier.keyword == "only" and media_type is None:
                raise UnexpectedTokenError(
                    "'only' must be followed by a media type",
                    fragment=str(modifier.token),
                    position=modifier.token.start_pos,
                )
            negated = modifier.keyword == "not"
            only = modifier.keyword == "only"

        condition: Condition | None = None
        features = [item for item in rest if isinstance(item, FeatureTest)]
        if features:
            condition = functools.reduce(And, features)

        return MediaQuery(
            media_type=media_type or MediaType.ALL,
            condition=condition,
            negated=negated,
            only=only,
        )

    def start(self, items: list[MediaQuery]) -> MediaQueryList:
        return MediaQueryList(tuple(items))


@functools.lru_cache(maxsize=None)
def _get_parser() -> Lark:
    """Build the LALR parser once; Lark parsers are safe to share between calls."""
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="lalr",
        start="start",
    )


def _locate(source: str, position: int) -> tuple[int, int]:
    """Convert a 0-based offset into a 1-based (line, column) pair."""
    line = source.count("\n", 0, position) + 1
    column = position - (source.rfind("\n", 0, position) + 1) + 1
    return line, column


def _check_groups(source: str) -> None:
    """Raise UnbalancedGroupError for the first unmatched parenthesis."""
    opened: list[int] = []
    for index, char in enumerate(source):
        if char == "(":
            opened.append(index)
        elif char == ")":
            if not opened:
                raise UnbalancedGroupError(
                    "Unmatched ')'", fragment=")", position=index
                )
            opened.pop()
    if opened:
        raise UnbalancedGroupError(
            "Unclosed '('", fragment=source[opened[-1]:], position=opened[-1]
        )


def _value_error(source: str, position: int) -> ParseError | None:
    """Return the error for a grammar failure inside a feature value, if it is one.

    A failure between a feature's ``:`` and its closing ``)`` means the value
    has the wrong shape; the whole value becomes the fragment. Unknown
    feature names are still reported as such.
    """
    opened = source.rfind("(", 0, position)
    if opened == -1 or ")" in source[opened + 1:position]:
        return None
    colon = source.find(":", opened + 1, position)
    if colon == -1:
        return None
    name = source[opened + 1:colon]
    name_start = opened + 1 + len(name) - len(name.lstrip())
    try:
        _, feature = _resolve_feature_name(name.strip(), name_start)
    except UnknownFeatureError as exc:
        return exc
    closed = source.find(")", position)
    if closed == -1:
        closed = len(source)
    raw = source[colon + 1:closed]
    text = raw.strip()
    value_start = colon + 1 + len(raw) - len(raw.lstrip())
    if not text:
        return MalformedValueError(
            f"Missing value for {name.strip().lower()!r}", fragment="", position=value_start
        )
    return MalformedValueError(
        f"Invalid value {text!r} for {feature.value}", fragment=text, position=value_start
    )


def _translate_lark_error(source: str, exc: UnexpectedInput) -> ParseError:
    """Turn a Lark exception into a ParseError pointing at the offending text."""
    if isinstance(exc, UnexpectedToken):
        token = exc.token
        if token.type == "$END":
            return UnexpectedTokenError(
                "Unexpected end of media query", fragment="", position=len(source)
            )
        position = token.start_pos if token.start_pos is not None else exc.pos_in_stream
        return _value_error(source, position) or UnexpectedTokenError(
            f"Unexpected {str(token)!r}", fragment=str(token), position=position
        )
    if isinstance(exc, UnexpectedCharacters):
        position = exc.pos_in_stream
        return _value_error(source, position) or UnexpectedTokenError(
            f"Unexpected character {source[position]!r}",
            fragment=source[position],
            position=position,
        )
    position = len(source)
    return UnexpectedTokenError("Unexpected end of media query", fragment="", position=position)


def parse_media_query_list(source: str) -> MediaQueryList:
    """Parse a media query list such as ``"screen and (min-width: 600px), print"``.

    Parsing is all-or-nothing: any malformed query fails the whole list.
    Raises a :class:`ParseError` subclass describing the first problem found.
    """
    try:
        _check_groups(source)
        try:
            tree = _get_parser().parse(source)
        except UnexpectedInput as e:
            raise _translate_lark_error(source, e) from e
        try:
            result = MediaQueryTransformer(source).transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, ParseError):
                raise e.orig_exc from None
            raise
    except ParseError as e:
        if e.position is not None and e.line is None:
            e.line, e.column = _locate(source, e.position)
        raise

    logger.debug("Parsed %d media queries from %r", len(result), source)
    return result
