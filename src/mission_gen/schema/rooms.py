"""Room definitions -- the axis-aligned boxes every other entity lives in."""

from __future__ import annotations

from pydantic import BaseModel


class Room(BaseModel):
    """An axis-aligned room, positioned by its centre."""

    id: str
    """Unique identifier (e.g. 'room_3')."""

    x: float
    y: float
    z: float
    """Centre of the room volume."""

    width: float
    """Full extent along X."""

    depth: float
    """Full extent along Z."""

    height: float
    """Full extent along Y (floor to ceiling)."""

    floor_color: int | None = None
    """Packed 0xRRGGBB tint for the floor material."""

    wall_color: int | None = None
    """Packed 0xRRGGBB tint for the wall material."""

    # -- bounds ---------------------------------------------------------------

    @property
    def min_x(self) -> float:
        return self.x - self.width / 2

    @property
    def max_x(self) -> float:
        return self.x + self.width / 2

    @property
    def min_z(self) -> float:
        return self.z - self.depth / 2

    @property
    def max_z(self) -> float:
        return self.z + self.depth / 2

    @property
    def floor_y(self) -> float:
        return self.y - self.height / 2

    @property
    def ceiling_y(self) -> float:
        return self.y + self.height / 2

    @property
    def area(self) -> float:
        return self.width * self.depth

    def contains_point(self, x: float, z: float, margin: float = 0.0) -> bool:
        """Return True if ``(x, z)`` lies inside the room inset by *margin*.

        A negative *margin* grows the room instead.
        """
        return (
            self.min_x + margin <= x <= self.max_x - margin
            and self.min_z + margin <= z <= self.max_z - margin
        )
