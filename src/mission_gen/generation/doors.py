"""Door placement and the room connectivity graph.

Doors are cut first along the main-path edges recorded by the room layout
(guaranteeing a spanning tree of connections), then a handful of extra
"loop" doors are added between other adjacent rooms so the level is not a
pure tree.  The resulting :class:`RoomGraph` is the authoritative notion of
which rooms connect.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Sequence

from mission_gen.config import Difficulty, GenerationOptions
from mission_gen.generation.core.geometry import compute_door_geometry, rooms_adjacent
from mission_gen.generation.core.ids import IdAllocator
from mission_gen.generation.core.rng import LevelRNG
from mission_gen.schema.doors import Door, DoorType
from mission_gen.schema.rooms import Room

logger = logging.getLogger(__name__)

DOOR_HEIGHT = 3.0
DOOR_PROXIMITY_RADIUS = 2.5

# Chance each candidate loop door is actually cut
_LOOP_DOOR_CHANCE: dict[Difficulty, float] = {
    Difficulty.EASY: 0.2,
    Difficulty.MEDIUM: 0.3,
    Difficulty.HARD: 0.4,
}

# Extra doors are capped at this fraction of the room count
_MAX_LOOP_FRACTION = 0.5


@dataclass
class DoorLink:
    """One door joining two rooms."""

    door_id: str
    room_a: str
    room_b: str
    locked: bool = False

    def joins(self, a: str, b: str) -> bool:
        return {self.room_a, self.room_b} == {a, b}

    def other(self, room_id: str) -> str:
        """Return the room on the far side of the door from *room_id*."""
        return self.room_b if room_id == self.room_a else self.room_a


@dataclass
class RoomGraph:
    """Room adjacency derived from door links.

    Two adjacency views are kept: ``adj_all`` over every door, and
    ``adj_unlocked`` over proximity doors only.  Neighbour lists are in link
    order so that anything driven by the RNG iterates deterministically.
    """

    links: list[DoorLink] = field(default_factory=list)
    main_path_edges: list[tuple[str, str]] = field(default_factory=list)

    # -- adjacency views -----------------------------------------------------

    @property
    def adj_all(self) -> dict[str, list[str]]:
        return self._adjacency(unlocked_only=False)

    @property
    def adj_unlocked(self) -> dict[str, list[str]]:
        return self._adjacency(unlocked_only=True)

    def _adjacency(self, unlocked_only: bool) -> dict[str, list[str]]:
        adj: dict[str, list[str]] = {}
        for link in self.links:
            if unlocked_only and link.locked:
                continue
            for a, b in ((link.room_a, link.room_b), (link.room_b, link.room_a)):
                neighbours = adj.setdefault(a, [])
                if b not in neighbours:
                    neighbours.append(b)
        return adj

    # -- queries -------------------------------------------------------------

    def neighbors(self, room_id: str, unlocked_only: bool = False) -> list[str]:
        return self._adjacency(unlocked_only).get(room_id, [])

    def links_for_door(self, door_id: str) -> list[DoorLink]:
        return [link for link in self.links if link.door_id == door_id]

    def has_link(self, a: str, b: str) -> bool:
        return any(link.joins(a, b) for link in self.links)

    def reachable_from(
        self,
        start: str,
        *,
        unlocked_only: bool = False,
        excluding_door: str | None = None,
    ) -> set[str]:
        """Room ids reachable from *start* by walking door links.

        Parameters
        ----------
        start:
            Room id to start from (always included in the result).
        unlocked_only:
            Only walk through proximity doors.
        excluding_door:
            Treat this door as impassable, e.g. to ask where a key can go
            without needing the door it opens.
        """
        visited = {start}
        queue: deque[str] = deque([start])
        while queue:
            room_id = queue.popleft()
            for link in self.links:
                if link.door_id == excluding_door:
                    continue
                if unlocked_only and link.locked:
                    continue
                if room_id not in (link.room_a, link.room_b):
                    continue
                nxt = link.other(room_id)
                if nxt not in visited:
                    visited.add(nxt)
                    queue.append(nxt)
        return visited

    # -- mutation (validator repairs) ----------------------------------------

    def add_link(self, door_id: str, a: str, b: str, locked: bool = False) -> None:
        self.links.append(DoorLink(door_id=door_id, room_a=a, room_b=b, locked=locked))

    def remove_door(self, door_id: str) -> None:
        self.links = [link for link in self.links if link.door_id != door_id]

    def unlock_door(self, door_id: str) -> None:
        for link in self.links_for_door(door_id):
            link.locked = False


def build_room_graph(
    links: Sequence[DoorLink],
    doors: Sequence[Door],
    main_path_edges: Sequence[tuple[str, str]],
) -> RoomGraph:
    """Assemble a :class:`RoomGraph` from links whose door exists.

    A link's lock state is taken from its door's type.
    """
    door_by_id = {d.id: d for d in doors}
    graph_links: list[DoorLink] = []
    for link in links:
        door = door_by_id.get(link.door_id)
        if door is None:
            continue
        graph_links.append(DoorLink(
            door_id=link.door_id,
            room_a=link.room_a,
            room_b=link.room_b,
            locked=door.type == DoorType.LOCKED,
        ))
    return RoomGraph(links=graph_links, main_path_edges=list(main_path_edges))


class DoorGenerator:
    """Cuts doors between adjacent rooms and builds the room graph."""

    def __init__(self, rng: LevelRNG, ids: IdAllocator) -> None:
        self.rng = rng
        self.ids = ids

    def generate_doors(
        self,
        rooms: list[Room],
        main_path_edges: list[tuple[str, str]],
        options: GenerationOptions,
    ) -> tuple[list[Door], RoomGraph]:
        """Return ``(doors, graph)`` for a room layout."""
        by_id = {r.id: r for r in rooms}
        doors: list[Door] = []
        links: list[DoorLink] = []

        for a_id, b_id in main_path_edges:
            a, b = by_id.get(a_id), by_id.get(b_id)
            if a is None or b is None:
                continue
            if not rooms_adjacent(a, b):
                logger.debug("Main-path edge %s-%s not adjacent, skipped", a_id, b_id)
                continue
            door = self._create_door(a, b)
            if door is None:
                logger.debug("No room for a door on main-path edge %s-%s", a_id, b_id)
                continue
            doors.append(door)
            links.append(DoorLink(door_id=door.id, room_a=a_id, room_b=b_id))

        loop_doors, loop_links = self._add_loop_doors(rooms, links, options)
        doors.extend(loop_doors)
        links.extend(loop_links)

        logger.info(
            "Placed %d doors (%d main path, %d loops)",
            len(doors), len(doors) - len(loop_doors), len(loop_doors),
        )
        return doors, build_room_graph(links, doors, main_path_edges)

    def _add_loop_doors(
        self,
        rooms: list[Room],
        existing_links: list[DoorLink],
        options: GenerationOptions,
    ) -> tuple[list[Door], list[DoorLink]]:
        pairs: list[tuple[Room, Room]] = []
        for i, a in enumerate(rooms):
            for b in rooms[i + 1:]:
                if not rooms_adjacent(a, b):
                    continue
                if any(link.joins(a.id, b.id) for link in existing_links):
                    continue
                pairs.append((a, b))

        self.rng.shuffle(pairs)

        max_extra = min(int(len(rooms) * _MAX_LOOP_FRACTION), len(pairs))
        chance = _LOOP_DOOR_CHANCE[options.difficulty]

        doors: list[Door] = []
        links: list[DoorLink] = []
        for a, b in pairs:
            if len(doors) >= max_extra:
                break
            if not self.rng.chance(chance):
                continue
            door = self._create_door(a, b)
            if door is None:
                continue
            doors.append(door)
            links.append(DoorLink(door_id=door.id, room_a=a.id, room_b=b.id))
        return doors, links

    def _create_door(self, a: Room, b: Room) -> Door | None:
        geometry = compute_door_geometry(a, b)
        if geometry is None:
            return None
        return Door(
            id=self.ids.next("door"),
            x=geometry.x,
            y=0.0,
            z=geometry.z,
            axis=geometry.axis,
            width=geometry.width,
            height=DOOR_HEIGHT,
            type=DoorType.PROXIMITY,
            proximity_radius=DOOR_PROXIMITY_RADIUS,
        )
