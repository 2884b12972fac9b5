"""Axis-aligned room geometry shared by the layout, door and repair passes."""

from __future__ import annotations

import math
from dataclasses import dataclass

from mission_gen.schema.doors import Door, DoorAxis
from mission_gen.schema.rooms import Room

# Rooms closer than this on both axes count as overlapping during layout
ROOM_OVERLAP_MARGIN = 0.05

# Extra centre separation (beyond touching walls) still treated as adjacent
ADJACENCY_SLACK = 0.6

# Door openings keep this far from the ends of the shared wall span
DOOR_CORNER_BUFFER = 1.5
MIN_DOOR_OVERLAP = 4.0
MAX_DOOR_WIDTH = 2.0

# Doors sit in the gap between two facing walls, so containment is checked
# against room bounds grown by half the widest gap adjacency allows.
DOOR_WALL_TOLERANCE = ADJACENCY_SLACK / 2 + 0.05

# Widest gap between facing walls a single door may bridge
MAX_DOOR_GAP = 4.0


@dataclass(frozen=True)
class DoorGeometry:
    """Where a door between two rooms goes and how wide it is."""

    x: float
    z: float
    axis: DoorAxis
    width: float


def rooms_overlap(a: Room, b: Room, margin: float = 0.0) -> bool:
    """Return True if the XZ footprints of *a* and *b* intersect (grown by *margin*)."""
    overlap_x = abs(a.x - b.x) < a.width / 2 + b.width / 2 + margin
    overlap_z = abs(a.z - b.z) < a.depth / 2 + b.depth / 2 + margin
    return overlap_x and overlap_z


def rooms_adjacent(a: Room, b: Room) -> bool:
    """Return True if *a* and *b* share a wall (within :data:`ADJACENCY_SLACK`).

    The rooms must overlap when projected onto one horizontal axis and be
    nearly touching along the other.
    """
    if abs(a.x - b.x) < (a.width + b.width) / 2:
        if abs(a.z - b.z) <= (a.depth + b.depth) / 2 + ADJACENCY_SLACK:
            return True
    if abs(a.z - b.z) < (a.depth + b.depth) / 2:
        if abs(a.x - b.x) <= (a.width + b.width) / 2 + ADJACENCY_SLACK:
            return True
    return False


def compute_door_geometry(a: Room, b: Room) -> DoorGeometry | None:
    """Place a door in the shared wall of two adjacent rooms.

    The overlapping wall span is shrunk by :data:`DOOR_CORNER_BUFFER` at each
    end; if less than :data:`MIN_DOOR_OVERLAP` remains there is no room for a
    door and ``None`` is returned.
    """
    # Stacked along Z: the shared wall runs along X
    if abs(a.x - b.x) < (a.width + b.width) / 2:
        lo = max(a.min_x, b.min_x) + DOOR_CORNER_BUFFER
        hi = min(a.max_x, b.max_x) - DOOR_CORNER_BUFFER
        if hi - lo >= MIN_DOOR_OVERLAP:
            if a.z < b.z:
                z = (a.max_z + b.min_z) / 2
            else:
                z = (a.min_z + b.max_z) / 2
            return DoorGeometry(
                x=(lo + hi) / 2,
                z=z,
                axis=DoorAxis.Z,
                width=min(hi - lo, MAX_DOOR_WIDTH),
            )

    # Side by side along X: the shared wall runs along Z
    if abs(a.z - b.z) < (a.depth + b.depth) / 2:
        lo = max(a.min_z, b.min_z) + DOOR_CORNER_BUFFER
        hi = min(a.max_z, b.max_z) - DOOR_CORNER_BUFFER
        if hi - lo >= MIN_DOOR_OVERLAP:
            if a.x < b.x:
                x = (a.max_x + b.min_x) / 2
            else:
                x = (a.min_x + b.max_x) / 2
            return DoorGeometry(
                x=x,
                z=(lo + hi) / 2,
                axis=DoorAxis.X,
                width=min(hi - lo, MAX_DOOR_WIDTH),
            )

    return None


def door_in_room(door: Door, room: Room) -> bool:
    """Return True if the door centre lies in *room* (wall-gap tolerant)."""
    return room.contains_point(door.x, door.z, margin=-DOOR_WALL_TOLERANCE)


def door_in_wall_gap(door: Door, a: Room, b: Room) -> bool:
    """Return True if the door centre lies in the open gap between facing walls.

    *a* and *b* must overlap when projected onto one axis and be apart on the
    other by at most :data:`MAX_DOOR_GAP`; the door has to sit inside the
    shared span and between the two facing walls (wall-gap tolerant).
    """
    if max(a.min_x, b.min_x) <= door.x <= min(a.max_x, b.max_x):
        near = min(a.max_z, b.max_z)
        far = max(a.min_z, b.min_z)
        if 0 <= far - near <= MAX_DOOR_GAP:
            if near - DOOR_WALL_TOLERANCE <= door.z <= far + DOOR_WALL_TOLERANCE:
                return True
    if max(a.min_z, b.min_z) <= door.z <= min(a.max_z, b.max_z):
        near = min(a.max_x, b.max_x)
        far = max(a.min_x, b.min_x)
        if 0 <= far - near <= MAX_DOOR_GAP:
            if near - DOOR_WALL_TOLERANCE <= door.x <= far + DOOR_WALL_TOLERANCE:
                return True
    return False


def door_links_rooms(door: Door, a: Room, b: Room) -> bool:
    """Return True if the door can join *a* and *b*: inside both, or in the gap between them."""
    return (door_in_room(door, a) and door_in_room(door, b)) or door_in_wall_gap(door, a, b)


def room_distance(a: Room, b: Room) -> float:
    """Centre-to-centre distance on the XZ plane."""
    return math.hypot(a.x - b.x, a.z - b.z)
