"""mediaq - parse CSS media queries and evaluate them against an environment."""

from mediaq.evaluator import evaluate, evaluate_condition, match_query, matches, resolve_feature
from mediaq.model import (
    And,
    Comparator,
    Environment,
    FeatureTest,
    Length,
    MediaFeature,
    MediaQuery,
    MediaQueryList,
    MediaType,
    Orientation,
    Ratio,
    Resolution,
)
from mediaq.parser import (
    MalformedValueError,
    ParseError,
    UnbalancedGroupError,
    UnexpectedTokenError,
    UnknownFeatureError,
    parse,
)

__version__ = "0.1.0"

__all__ = [
    "And",
    "Comparator",
    "Environment",
    "FeatureTest",
    "Length",
    "MalformedValueError",
    "MediaFeature",
    "MediaQuery",
    "MediaQueryList",
    "MediaType",
    "Orientation",
    "ParseError",
    "Ratio",
    "Resolution",
    "UnbalancedGroupError",
    "UnexpectedTokenError",
    "UnknownFeatureError",
    "__version__",
    "evaluate",
    "evaluate_condition",
    "match_query",
    "matches",
    "parse",
    "resolve_feature",
]
