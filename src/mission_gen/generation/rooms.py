"""Room layout by randomized incremental growth.

Rooms are grown one at a time off a random existing "anchor" room in a random
cardinal direction.  The first room sits at the origin; every accepted
placement records an (anchor, new) edge, so the edges form a spanning tree
over the rooms -- the *main path* used first for door placement.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mission_gen.generation.core.geometry import ROOM_OVERLAP_MARGIN, rooms_overlap
from mission_gen.generation.core.ids import IdAllocator
from mission_gen.generation.core.rng import LevelRNG
from mission_gen.schema.rooms import Room

logger = logging.getLogger(__name__)


class RoomLayoutError(RuntimeError):
    """Raised when no non-overlapping layout is found after all attempts."""


@dataclass(frozen=True)
class RoomTemplate:
    width: float
    depth: float
    height: float


FIRST_ROOM = RoomTemplate(width=12, depth=16, height=4)

ROOM_TEMPLATES: tuple[RoomTemplate, ...] = (
    RoomTemplate(width=12, depth=16, height=4),
    RoomTemplate(width=16, depth=20, height=4),
    RoomTemplate(width=20, depth=24, height=4),
    RoomTemplate(width=14, depth=14, height=4),
)

FLOOR_COLORS = (0x444455, 0x404050, 0x453530, 0x332744, 0x303120, 0x353535, 0x334B33)
WALL_COLORS = (0x555566, 0x504260, 0x555240, 0x444455, 0x404050, 0x454D45, 0x446A44)

# +Z, +X, -Z, -X
_DIRECTIONS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

# Gap left between an anchor's wall and the new room's wall
ROOM_SPACING = 0.1

MAX_LAYOUT_ATTEMPTS = 5
MAX_PLACEMENT_TRIES = 40


class RoomGenerator:
    """Lays out a set of non-overlapping axis-aligned rooms."""

    def __init__(self, rng: LevelRNG, ids: IdAllocator) -> None:
        self.rng = rng
        self.ids = ids

    def generate_rooms(self, count: int) -> tuple[list[Room], list[tuple[str, str]]]:
        """Lay out *count* rooms and return ``(rooms, main_path_edges)``.

        Raises
        ------
        RoomLayoutError
            If every one of :data:`MAX_LAYOUT_ATTEMPTS` layouts got stuck.
        """
        for attempt in range(1, MAX_LAYOUT_ATTEMPTS + 1):
            layout = self._try_layout(count)
            if layout is not None:
                rooms, edges = layout
                logger.info(
                    "Laid out %d rooms on attempt %d", len(rooms), attempt,
                )
                return rooms, edges
            logger.warning("Room layout attempt %d/%d failed", attempt, MAX_LAYOUT_ATTEMPTS)

        raise RoomLayoutError(
            f"Failed to lay out {count} non-overlapping rooms "
            f"after {MAX_LAYOUT_ATTEMPTS} attempts"
        )

    def _try_layout(self, count: int) -> tuple[list[Room], list[tuple[str, str]]] | None:
        """One layout attempt; ``None`` if some room could not be placed."""
        self.ids.reset("room")
        rooms = [self._create_room(0.0, 0.0, FIRST_ROOM)]
        edges: list[tuple[str, str]] = []

        for _ in range(1, count):
            template = self.rng.random_choice(ROOM_TEMPLATES)
            placed = self._place_next_to_existing(rooms, template)
            if placed is None:
                return None

            x, z, anchor_id = placed
            room = self._create_room(x, z, template)
            rooms.append(room)
            edges.append((anchor_id, room.id))

        return rooms, edges

    def _place_next_to_existing(
        self,
        rooms: list[Room],
        template: RoomTemplate,
    ) -> tuple[float, float, str] | None:
        """Find a free spot flush against a random anchor room."""
        for _ in range(MAX_PLACEMENT_TRIES):
            anchor = self.rng.random_choice(rooms)
            dx, dz = self.rng.random_choice(_DIRECTIONS)

            x, z = anchor.x, anchor.z
            if dx != 0:
                x += dx * (anchor.width / 2 + template.width / 2 + ROOM_SPACING)
            else:
                z += dz * (anchor.depth / 2 + template.depth / 2 + ROOM_SPACING)

            candidate = Room(
                id="candidate", x=x, y=0.0, z=z,
                width=template.width, depth=template.depth, height=template.height,
            )
            if not any(rooms_overlap(candidate, r, ROOM_OVERLAP_MARGIN) for r in rooms):
                return x, z, anchor.id
        return None

    def _create_room(self, x: float, z: float, template: RoomTemplate) -> Room:
        return Room(
            id=self.ids.next("room"),
            x=x,
            y=0.0,
            z=z,
            width=template.width,
            depth=template.depth,
            height=template.height,
            floor_color=self.rng.random_choice(FLOOR_COLORS),
            wall_color=self.rng.random_choice(WALL_COLORS),
        )
