"""Coerce raw feature values from the parse tree into model values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from fractions import Fraction

from mediaq.model.query import FeatureValue, MediaFeature, ValueKind
from mediaq.model.values import (
    LENGTH_UNITS,
    RESOLUTION_UNITS,
    Length,
    Orientation,
    Ratio,
    Resolution,
)
from mediaq.parser.errors import MalformedValueError

__all__ = ["RawValue", "coerce_value"]

_DIMENSION_RE = re.compile(r"(?P<number>[+-]?(?:\d*\.\d+|\d+))(?P<unit>[a-zA-Z]+)")


@dataclass(frozen=True)
class RawValue:
    """A feature value as it appeared in the source, before coercion.

    *kind* is one of ``"dimension"``, ``"number"``, ``"ratio"`` or
    ``"keyword"``. For ratios *terms* holds the two numbers as written.
    """

    kind: str
    text: str
    position: int
    terms: tuple[str, ...] = ()


def _malformed(raw: RawValue, feature: MediaFeature, expected: str) -> MalformedValueError:
    return MalformedValueError(
        f"Invalid value {raw.text!r} for {feature.value}: expected {expected}",
        fragment=raw.text,
        position=raw.position,
    )


def _split_dimension(raw: RawValue, feature: MediaFeature, expected: str) -> tuple[Fraction, str]:
    match = _DIMENSION_RE.fullmatch(raw.text)
    if match is None:
        raise _malformed(raw, feature, expected)
    return Fraction(match.group("number")), match.group("unit").lower()


def _coerce_length(raw: RawValue, feature: MediaFeature) -> Length:
    expected = "a non-negative length such as 600px"
    if raw.kind == "number":
        # Only zero may omit its unit.
        value = Fraction(raw.text)
        if value != 0:
            raise _malformed(raw, feature, expected)
        return Length(value, "px")
    if raw.kind != "dimension":
        raise _malformed(raw, feature, expected)
    value, unit = _split_dimension(raw, feature, expected)
    if unit not in LENGTH_UNITS or value < 0:
        raise _malformed(raw, feature, expected)
    return Length(value, unit)


def _coerce_resolution(raw: RawValue, feature: MediaFeature) -> Resolution:
    expected = "a non-negative resolution in dppx, x, dpi or dpcm"
    if raw.kind != "dimension":
        raise _malformed(raw, feature, expected)
    value, unit = _split_dimension(raw, feature, expected)
    if unit not in RESOLUTION_UNITS or value < 0:
        raise _malformed(raw, feature, expected)
    return Resolution(value, unit)


def _coerce_ratio(raw: RawValue, feature: MediaFeature) -> Ratio:
    expected = "a ratio of two positive integers such as 16/9"
    if raw.kind != "ratio":
        raise _malformed(raw, feature, expected)
    try:
        numerator, denominator = (int(term) for term in raw.terms)
    except ValueError:
        raise _malformed(raw, feature, expected) from None
    if numerator <= 0 or denominator <= 0:
        raise _malformed(raw, feature, expected)
    return Ratio(numerator, denominator)


def _coerce_orientation(raw: RawValue, feature: MediaFeature) -> Orientation:
    if raw.kind == "keyword":
        try:
            return Orientation(raw.text.lower())
        except ValueError:
            pass
    raise _malformed(raw, feature, "portrait or landscape")


def _coerce_integer(raw: RawValue, feature: MediaFeature) -> int:
    expected = "a non-negative integer"
    if raw.kind != "number":
        raise _malformed(raw, feature, expected)
    try:
        value = int(raw.text)
    except ValueError:
        raise _malformed(raw, feature, expected) from None
    if value < 0:
        raise _malformed(raw, feature, expected)
    return value


_COERCERS = {
    ValueKind.LENGTH: _coerce_length,
    ValueKind.RESOLUTION: _coerce_resolution,
    ValueKind.RATIO: _coerce_ratio,
    ValueKind.ORIENTATION: _coerce_orientation,
    ValueKind.INTEGER: _coerce_integer,
}


def coerce_value(raw: RawValue, feature: MediaFeature) -> FeatureValue:
    """Convert *raw* into the value type *feature* expects.

    Raises :class:`MalformedValueError` if the value has the wrong shape.
    """
    return _COERCERS[feature.value_kind](raw, feature)
