"""Shared footprint registry for prop placement."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Circle:
    """A circular footprint on the XZ plane."""

    x: float
    z: float
    r: float

    def overlaps(self, x: float, z: float, r: float) -> bool:
        return math.hypot(self.x - x, self.z - z) < self.r + r


class OccupancyRegistry:
    """Footprint circles claimed so far.

    One registry is created per prop-generation call and handed to every
    placer, so props from different placers never overlap.
    """

    def __init__(self) -> None:
        self.circles: list[Circle] = []

    def add(self, x: float, z: float, r: float) -> None:
        self.circles.append(Circle(x, z, r))

    def is_free(self, x: float, z: float, r: float) -> bool:
        """Return True if a circle at ``(x, z)`` with radius *r* overlaps nothing."""
        return not any(c.overlaps(x, z, r) for c in self.circles)

    def __len__(self) -> int:
        return len(self.circles)

    def __iter__(self) -> Iterator[Circle]:
        return iter(self.circles)
