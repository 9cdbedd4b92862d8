from mediaq.parser.errors import (
    ErrorKind,
    MalformedValueError,
    ParseError,
    UnbalancedGroupError,
    UnexpectedTokenError,
    UnknownFeatureError,
)
from mediaq.parser.transformer import parse_media_query_list

parse = parse_media_query_list

__all__ = [
    "ErrorKind",
    "MalformedValueError",
    "ParseError",
    "UnbalancedGroupError",
    "UnexpectedTokenError",
    "UnknownFeatureError",
    "parse",
    "parse_media_query_list",
]
