"""Media query model: MediaQueryList, MediaQuery, and the condition tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from mediaq.model.values import Length, Orientation, Ratio, Resolution

__all__ = [
    "And",
    "Comparator",
    "Condition",
    "FeatureTest",
    "FeatureValue",
    "MediaFeature",
    "MediaQuery",
    "MediaQueryList",
    "MediaType",
    "ValueKind",
    "iter_features",
]


class MediaType(Enum):
    """Media types a query may name.

    Only ``all``, ``screen`` and ``print`` can match. The deprecated types
    are still accepted by the parser but never match any environment.
    """

    ALL = "all"
    SCREEN = "screen"
    PRINT = "print"
    TTY = "tty"
    TV = "tv"
    PROJECTION = "projection"
    HANDHELD = "handheld"
    BRAILLE = "braille"
    EMBOSSED = "embossed"
    AURAL = "aural"
    SPEECH = "speech"

    @property
    def deprecated(self) -> bool:
        return self not in (MediaType.ALL, MediaType.SCREEN, MediaType.PRINT)

    def __str__(self) -> str:
        return self.value


class ValueKind(Enum):
    """Shape of the value a media feature accepts."""

    LENGTH = "length"
    RATIO = "ratio"
    RESOLUTION = "resolution"
    ORIENTATION = "orientation"
    INTEGER = "integer"


class MediaFeature(Enum):
    """Media features understood by the parser and evaluator."""

    WIDTH = "width"
    HEIGHT = "height"
    DEVICE_WIDTH = "device-width"
    DEVICE_HEIGHT = "device-height"
    RESOLUTION = "resolution"
    ORIENTATION = "orientation"
    ASPECT_RATIO = "aspect-ratio"
    DEVICE_ASPECT_RATIO = "device-aspect-ratio"
    COLOR = "color"

    @property
    def value_kind(self) -> ValueKind:
        return _VALUE_KINDS[self]

    @property
    def is_range(self) -> bool:
        """True if the feature accepts ``min-`` / ``max-`` prefixes."""
        return self is not MediaFeature.ORIENTATION


_VALUE_KINDS: dict[MediaFeature, ValueKind] = {
    MediaFeature.WIDTH: ValueKind.LENGTH,
    MediaFeature.HEIGHT: ValueKind.LENGTH,
    MediaFeature.DEVICE_WIDTH: ValueKind.LENGTH,
    MediaFeature.DEVICE_HEIGHT: ValueKind.LENGTH,
    MediaFeature.RESOLUTION: ValueKind.RESOLUTION,
    MediaFeature.ORIENTATION: ValueKind.ORIENTATION,
    MediaFeature.ASPECT_RATIO: ValueKind.RATIO,
    MediaFeature.DEVICE_ASPECT_RATIO: ValueKind.RATIO,
    MediaFeature.COLOR: ValueKind.INTEGER,
}


class Comparator(Enum):
    """Comparison implied by a feature name prefix."""

    EQ = "="
    GE = ">="
    LE = "<="

    @property
    def prefix(self) -> str:
        return _PREFIXES[self]


_PREFIXES: dict[Comparator, str] = {
    Comparator.EQ: "",
    Comparator.GE: "min-",
    Comparator.LE: "max-",
}

FeatureValue = Union[Length, Ratio, Resolution, Orientation, int]


@dataclass(frozen=True)
class FeatureTest:
    """A single parenthesised feature test such as ``(min-width: 600px)``.

    A test whose *value* is None is an existence test, e.g. ``(color)``.
    """

    feature: MediaFeature
    comparator: Comparator = Comparator.EQ
    value: FeatureValue | None = None

    @property
    def name(self) -> str:
        """The feature name as written, including any prefix."""
        return f"{self.comparator.prefix}{self.feature.value}"

    @property
    def is_existence_test(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        if self.value is None:
            return f"({self.name})"
        return f"({self.name}: {self.value})"


@dataclass(frozen=True)
class And:
    """Conjunction of two conditions."""

    left: Condition
    right: Condition

    def __str__(self) -> str:
        return f"{self.left} and {self.right}"


Condition = Union[FeatureTest, And]


def iter_features(condition: Condition | None) -> Iterator[FeatureTest]:
    """Yield the feature tests of *condition* in source order."""
    if condition is None:
        return
    if isinstance(condition, And):
        yield from iter_features(condition.left)
        yield from iter_features(condition.right)
    else:
        yield condition


@dataclass(frozen=True)
class MediaQuery:
    """One comma-separated alternative of a media query list."""

    media_type: MediaType = MediaType.ALL
    condition: Condition | None = None
    negated: bool = False
    # Legacy-browser gating keyword; it never changes how a query matches.
    only: bool = False

    @property
    def features(self) -> list[FeatureTest]:
        return list(iter_features(self.condition))

    def __str__(self) -> str:
        parts: list[str] = []
        if self.negated:
            parts.append("not")
        elif self.only:
            parts.append("only")
        if self.condition is None:
            parts.append(str(self.media_type))
            return " ".join(parts)
        # "all and" is implied when a condition is present.
        if self.media_type is not MediaType.ALL or self.only:
            parts.append(f"{self.media_type} and")
        parts.append(str(self.condition))
        return " ".join(parts)


@dataclass(frozen=True)
class MediaQueryList:
    """Comma-separated media queries; matches if any member matches."""

    queries: tuple[MediaQuery, ...] = ()

    def __len__(self) -> int:
        return len(self.queries)

    def __iter__(self) -> Iterator[MediaQuery]:
        return iter(self.queries)

    def __str__(self) -> str:
        return ", ".join(str(q) for q in self.queries)
