"""Coordinate conversion from normalized bottom-left boxes to pixel regions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NormalizedBox:
    """Box in [0,1] image fractions, origin at the bottom-left corner."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_pixel_rect(
        cls, left: float, top: float, width: float, height: float, image_width: int, image_height: int
    ) -> "NormalizedBox":
        """Express a top-left-origin pixel rectangle in normalized bottom-left terms."""
        return cls(
            x=left / image_width,
            y=1.0 - (top + height) / image_height,
            width=width / image_width,
            height=height / image_height,
        )

    def contained(self) -> bool:
        return (
            0.0 <= self.x
            and 0.0 <= self.y
            and 0.0 <= self.width
            and 0.0 <= self.height
            and self.x + self.width <= 1.0
            and self.y + self.height <= 1.0
        )

    def clipped(self) -> "NormalizedBox":
        if self.contained():
            return self
        x0 = _clamp_unit(self.x)
        y0 = _clamp_unit(self.y)
        x1 = _clamp_unit(self.x + self.width)
        y1 = _clamp_unit(self.y + self.height)
        return NormalizedBox(x=x0, y=y0, width=max(0.0, x1 - x0), height=max(0.0, y1 - y0))


@dataclass(frozen=True, slots=True)
class RecognizedTextRegion:
    text: str
    confidence: float
    x: float
    y: float
    width: float
    height: float


def _clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


def to_pixel_box(box: NormalizedBox, image_width: int, image_height: int) -> tuple[float, float, float, float]:
    """Scale ``box`` to pixels and flip it to a top-left origin.

    Returns ``(x, y, width, height)``.
    """
    x = box.x * image_width
    y = (1.0 - box.y - box.height) * image_height
    width = box.width * image_width
    height = box.height * image_height
    return x, y, width, height


def to_pixel_region(
    text: str,
    confidence: float,
    box: NormalizedBox,
    image_width: int,
    image_height: int,
) -> RecognizedTextRegion:
    # engines occasionally report boxes a hair outside the unit square
    x, y, width, height = to_pixel_box(box.clipped(), image_width, image_height)
    return RecognizedTextRegion(
        text=text,
        confidence=_clamp_unit(confidence),
        x=x,
        y=max(0.0, y),  # 1.0 - y - h can round to -1e-17 for boxes touching the top edge
        width=width,
        height=height,
    )
