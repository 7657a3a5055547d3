"""Axis-aligned bounding box in the mask's map units."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned extent.

    Created once per run from the mask and shared read-only by every
    clip.  ``min < max`` is not enforced; an inflation margin larger than
    half the extent is the caller's problem.

    Attributes:
        min_x: Western edge.
        min_y: Southern edge.
        max_x: Eastern edge.
        max_y: Northern edge.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def projwin(self) -> tuple[float, float, float, float]:
        """Upper-left / lower-right window ``(min_x, max_y, max_x, min_y)``."""
        return (self.min_x, self.max_y, self.max_x, self.min_y)

    def to_list(self) -> list[float]:
        """``[min_x, min_y, max_x, max_y]`` for JSON transport."""
        return [self.min_x, self.min_y, self.max_x, self.max_y]
