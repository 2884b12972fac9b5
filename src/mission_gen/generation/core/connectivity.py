"""Approximate, geometry-only notions of which rooms connect.

These are separate from :class:`~mission_gen.generation.doors.RoomGraph`,
the authoritative door-link graph.  They only look at positions, so they can
over- or under-connect tightly packed layouts:

- :func:`proximity_neighbors` -- rooms whose centres are close; used to
  measure "how far from the start" for objective placement.
- :func:`door_proximity_reachable` -- rooms joined by any door lying near
  both of their bounds; used by the validator's connectivity repair.
"""

from __future__ import annotations

from collections import deque
from typing import Sequence

from mission_gen.generation.core.geometry import room_distance
from mission_gen.schema.doors import Door
from mission_gen.schema.rooms import Room

# Centre distance, as a multiple of the room's larger side, counted as "nearby"
PROXIMITY_FACTOR = 1.5

# How far outside a room's bounds a door may sit and still serve that room
DOOR_PROXIMITY_MARGIN = 2.0


def proximity_neighbors(room: Room, rooms: Sequence[Room]) -> list[Room]:
    """Rooms whose centre lies within 1.5x *room*'s larger dimension."""
    reach = max(room.width, room.depth) * PROXIMITY_FACTOR
    return [
        other for other in rooms
        if other.id != room.id and room_distance(room, other) < reach
    ]


def proximity_distances(start: Room, rooms: Sequence[Room]) -> dict[str, int]:
    """BFS hop counts from *start* over :func:`proximity_neighbors`."""
    distances = {start.id: 0}
    queue: deque[Room] = deque([start])
    while queue:
        room = queue.popleft()
        for other in proximity_neighbors(room, rooms):
            if other.id not in distances:
                distances[other.id] = distances[room.id] + 1
                queue.append(other)
    return distances


def door_proximity_reachable(
    rooms: Sequence[Room],
    doors: Sequence[Door],
    start_id: str,
) -> set[str]:
    """Room ids reachable from *start_id* through doors near both rooms."""
    by_id = {r.id: r for r in rooms}
    if start_id not in by_id:
        return set()

    visited: set[str] = set()
    queue: deque[str] = deque([start_id])
    while queue:
        room_id = queue.popleft()
        if room_id in visited:
            continue
        visited.add(room_id)
        current = by_id[room_id]

        nearby_doors = [
            d for d in doors
            if current.contains_point(d.x, d.z, margin=-DOOR_PROXIMITY_MARGIN)
        ]
        if not nearby_doors:
            continue
        for other in rooms:
            if other.id in visited:
                continue
            if any(
                other.contains_point(d.x, d.z, margin=-DOOR_PROXIMITY_MARGIN)
                for d in nearby_doors
            ):
                queue.append(other.id)
    return visited
