"""Media query evaluator: decides whether a parsed query list applies to an environment.

Feature tests whose environment value is missing evaluate to *unknown*.
Unknown propagates through ``and`` (unless the other side is false) and
through ``not``, and a query whose result is unknown does not match.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Optional, Union

from mediaq.model.environment import Environment
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
from mediaq.model.values import Length, Orientation, Ratio, Resolution
from mediaq.parser import ParseError, parse

__all__ = [
    "evaluate",
    "evaluate_condition",
    "match_query",
    "matches",
    "resolve_feature",
]

logger = logging.getLogger(__name__)

# None means "unknown".
_Truth = Optional[bool]

EnvValue = Union[Fraction, Ratio, Orientation, int]


def _number(value: float | None) -> Fraction | None:
    if value is None:
        return None
    return Fraction(value)


def resolve_feature(feature: MediaFeature, env: Environment) -> EnvValue | None:
    """Return the environment's value for *feature*, or None if unknown.

    - lengths          -> CSS pixels as a Fraction
    - 'resolution'     -> dppx as a Fraction
    - ratios           -> supplied or derived Ratio
    - 'orientation'    -> supplied or derived Orientation
    - 'color'          -> bits per color component
    """
    if feature is MediaFeature.WIDTH:
        return _number(env.width)
    if feature is MediaFeature.HEIGHT:
        return _number(env.height)
    if feature is MediaFeature.DEVICE_WIDTH:
        return _number(env.device_width)
    if feature is MediaFeature.DEVICE_HEIGHT:
        return _number(env.device_height)
    if feature is MediaFeature.RESOLUTION:
        return _number(env.resolution)
    if feature is MediaFeature.ORIENTATION:
        return env.effective_orientation()
    if feature is MediaFeature.ASPECT_RATIO:
        return env.effective_aspect_ratio()
    if feature is MediaFeature.DEVICE_ASPECT_RATIO:
        return env.effective_device_aspect_ratio()
    if feature is MediaFeature.COLOR:
        return env.color
    raise ValueError(f"Unknown media feature: {feature!r}")


def _compare(order: int, comparator: Comparator) -> bool:
    """Apply *comparator* to a -1/0/1 ordering of environment vs. test value."""
    if comparator is Comparator.GE:
        return order >= 0
    if comparator is Comparator.LE:
        return order <= 0
    return order == 0


def _order(left: Fraction | int, right: Fraction | int) -> int:
    return (left > right) - (left < right)


def _evaluate_feature(test: FeatureTest, env: Environment) -> _Truth:
    actual = resolve_feature(test.feature, env)
    if actual is None:
        logger.debug("Environment does not supply %s; %s is unknown", test.feature.value, test)
        return None

    expected = test.value
    if expected is None:
        # Existence test: any supplied value, zero included, means the capability exists.
        return True

    if isinstance(expected, Orientation):
        return actual is expected
    if isinstance(expected, Ratio):
        return _compare(actual.compare(expected), test.comparator)  # type: ignore[union-attr]
    if isinstance(expected, Length):
        px = expected.to_px(Fraction(env.font_size))
        return _compare(_order(actual, px), test.comparator)  # type: ignore[arg-type]
    if isinstance(expected, Resolution):
        return _compare(_order(actual, expected.dppx), test.comparator)  # type: ignore[arg-type]
    return _compare(_order(actual, expected), test.comparator)  # type: ignore[arg-type]


def _evaluate(condition: Condition, env: Environment) -> _Truth:
    if isinstance(condition, And):
        left = _evaluate(condition.left, env)
        if left is False:
            return False
        right = _evaluate(condition.right, env)
        if right is False:
            return False
        if left is None or right is None:
            return None
        return True
    return _evaluate_feature(condition, env)


def evaluate_condition(condition: Condition, env: Environment) -> bool:
    """Evaluate a condition tree; unknown results count as False."""
    return _evaluate(condition, env) is True


def _type_matches(media_type: MediaType, env: Environment) -> bool:
    if media_type.deprecated:
        return False
    return media_type is MediaType.ALL or media_type is env.media_type


def _match(query: MediaQuery, env: Environment) -> _Truth:
    result: _Truth
    if not _type_matches(query.media_type, env):
        result = False
    elif query.condition is None:
        result = True
    else:
        result = _evaluate(query.condition, env)

    # 'only' is a legacy-browser guard and has no effect here.
    if query.negated and result is not None:
        return not result
    return result


def match_query(query: MediaQuery, env: Environment) -> bool:
    """Return True if a single media query applies to *env*."""
    return _match(query, env) is True


def evaluate(query_list: MediaQueryList, env: Environment) -> bool:
    """Return True if any query in *query_list* applies to *env*.

    An empty list never matches.
    """
    return any(match_query(query, env) for query in query_list.queries)


def matches(source: str, env: Environment) -> bool:
    """Parse *source* and evaluate it against *env* in one step.

    A query list that fails to parse does not apply; the error is logged
    and False is returned.
    """
    try:
        query_list = parse(source)
    except ParseError as exc:
        logger.warning("Invalid media query %r: %s", source, exc)
        return False
    return evaluate(query_list, env)
