"""Environment snapshot a media query list is evaluated against."""

from __future__ import annotations

from dataclasses import dataclass

from mediaq.model.query import MediaType
from mediaq.model.values import Orientation, Ratio


@dataclass(frozen=True)
class Environment:
    """Immutable description of the rendering surface at one point in time.

    Any feature field left as None is treated as unknown: tests that need
    it never match. Orientation and aspect ratios are derived from the
    dimensions unless supplied explicitly.

    Attributes:
        width: Viewport width in CSS pixels.
        height: Viewport height in CSS pixels.
        device_width: Output device width in CSS pixels.
        device_height: Output device height in CSS pixels.
        resolution: Device pixel ratio, in dppx.
        orientation: Explicit orientation; derived from width/height if None.
        aspect_ratio: Explicit viewport ratio; derived from width/height if None.
        device_aspect_ratio: Explicit device ratio; derived from device dimensions if None.
        color: Bits per color component; 0 for a monochrome device.
        media_type: The media type the environment reports.
        font_size: Size of one ``em`` / ``rem`` in CSS pixels.
    """

    width: float | None = None
    height: float | None = None
    device_width: float | None = None
    device_height: float | None = None
    resolution: float | None = None
    orientation: Orientation | None = None
    aspect_ratio: Ratio | None = None
    device_aspect_ratio: Ratio | None = None
    color: int | None = None
    media_type: MediaType = MediaType.SCREEN
    font_size: float = 16.0

    def effective_orientation(self) -> Orientation | None:
        if self.orientation is not None:
            return self.orientation
        if self.width is None or self.height is None:
            return None
        if self.width >= self.height:
            return Orientation.LANDSCAPE
        return Orientation.PORTRAIT

    def effective_aspect_ratio(self) -> Ratio | None:
        if self.aspect_ratio is not None:
            return self.aspect_ratio
        if self.width is None or self.height is None:
            return None
        return Ratio.from_dimensions(self.width, self.height)

    def effective_device_aspect_ratio(self) -> Ratio | None:
        if self.device_aspect_ratio is not None:
            return self.device_aspect_ratio
        if self.device_width is None or self.device_height is None:
            return None
        return Ratio.from_dimensions(self.device_width, self.device_height)
