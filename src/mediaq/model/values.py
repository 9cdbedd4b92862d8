"""Value types carried by media feature tests: lengths, ratios, resolutions, orientation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction

__all__ = [
    "LENGTH_UNITS",
    "RESOLUTION_UNITS",
    "Length",
    "Orientation",
    "Ratio",
    "Resolution",
    "format_number",
]

# Absolute lengths in CSS pixels per unit. em/rem are resolved against the
# environment's font size at evaluation time.
_ABSOLUTE_LENGTHS: dict[str, Fraction] = {
    "px": Fraction(1),
    "in": Fraction(96),
    "cm": Fraction(96) / Fraction("2.54"),
    "mm": Fraction(96) / Fraction("25.4"),
    "q": Fraction(96) / Fraction("101.6"),
    "pt": Fraction(96, 72),
    "pc": Fraction(16),
}
_FONT_RELATIVE_LENGTHS = frozenset({"em", "rem"})

LENGTH_UNITS = frozenset(_ABSOLUTE_LENGTHS) | _FONT_RELATIVE_LENGTHS

# Dots per CSS pixel for each resolution unit.
_RESOLUTIONS: dict[str, Fraction] = {
    "dppx": Fraction(1),
    "x": Fraction(1),
    "dpi": Fraction(1, 96),
    "dpcm": Fraction("2.54") / Fraction(96),
}

RESOLUTION_UNITS = frozenset(_RESOLUTIONS)


def _decimal_places(denominator: int) -> int | None:
    """Digits after the point needed to write 1/denominator exactly, or None if it repeats."""
    twos = fives = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1
    if denominator != 1:
        return None
    return max(twos, fives)


def format_number(value: Fraction) -> str:
    """Render a number the way it would be written in CSS (``600``, ``1.5``).

    Decimals are written out in full, never in exponent form, so the text
    parses back to the same value.
    """
    if value.denominator == 1:
        return str(value.numerator)
    places = _decimal_places(value.denominator)
    if places is None:
        return format(Decimal(value.numerator) / Decimal(value.denominator), "f")
    scaled = abs(value.numerator) * 10**places // value.denominator
    digits = str(scaled).rjust(places + 1, "0")
    sign = "-" if value < 0 else ""
    return f"{sign}{digits[:-places]}.{digits[-places:].rstrip('0')}"


class Orientation(Enum):
    """Viewport orientation."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Length:
    """A non-negative length such as ``600px`` or ``40em``."""

    value: Fraction
    unit: str = "px"

    def to_px(self, font_size: Fraction | float = 16) -> Fraction:
        """Convert to CSS pixels; *font_size* is the px size of one em."""
        if self.unit in _FONT_RELATIVE_LENGTHS:
            return self.value * Fraction(font_size)
        return self.value * _ABSOLUTE_LENGTHS[self.unit]

    def __str__(self) -> str:
        return f"{format_number(self.value)}{self.unit}"


@dataclass(frozen=True)
class Resolution:
    """A non-negative resolution such as ``2dppx`` or ``192dpi``."""

    value: Fraction
    unit: str = "dppx"

    @property
    def dppx(self) -> Fraction:
        """The resolution in dots per CSS pixel."""
        return self.value * _RESOLUTIONS[self.unit]

    def __str__(self) -> str:
        return f"{format_number(self.value)}{self.unit}"


@dataclass(frozen=True)
class Ratio:
    """A positive integer ratio such as ``16/9``.

    Ratios compare by cross-multiplication so that ``16/9`` and ``32/18``
    are ordered exactly without floating-point error. Equality (``==``)
    stays structural; use :meth:`compare` for numeric equality.
    """

    numerator: int
    denominator: int

    @classmethod
    def from_string(cls, text: str) -> Ratio:
        """Parse ``"16/9"`` (whitespace around the slash allowed)."""
        left, sep, right = text.partition("/")
        if not sep:
            raise ValueError(f"Invalid ratio: {text!r}")
        numerator, denominator = int(left.strip()), int(right.strip())
        if numerator <= 0 or denominator <= 0:
            raise ValueError(f"Ratio terms must be positive: {text!r}")
        return cls(numerator, denominator)

    @classmethod
    def from_dimensions(cls, width: Fraction | float, height: Fraction | float) -> Ratio | None:
        """Return width/height in lowest terms, or None if either side is not positive."""
        w, h = Fraction(width), Fraction(height)
        if w <= 0 or h <= 0:
            return None
        quotient = w / h
        return cls(quotient.numerator, quotient.denominator)

    def compare(self, other: Ratio) -> int:
        """Return -1, 0 or 1 as self is less than, equal to, or greater than *other*."""
        left = self.numerator * other.denominator
        right = other.numerator * self.denominator
        return (left > right) - (left < right)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"
