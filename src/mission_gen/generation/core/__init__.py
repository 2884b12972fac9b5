"""Core primitives shared by every level generator."""

from mission_gen.generation.core.connectivity import (
    door_proximity_reachable,
    proximity_distances,
    proximity_neighbors,
)
from mission_gen.generation.core.geometry import (
    DoorGeometry,
    compute_door_geometry,
    door_in_room,
    door_in_wall_gap,
    door_links_rooms,
    room_distance,
    rooms_adjacent,
    rooms_overlap,
)
from mission_gen.generation.core.ids import IdAllocator
from mission_gen.generation.core.rng import LevelRNG

__all__ = [
    # rng
    "LevelRNG",
    # ids
    "IdAllocator",
    # geometry
    "DoorGeometry",
    "compute_door_geometry",
    "door_in_room",
    "door_in_wall_gap",
    "door_links_rooms",
    "room_distance",
    "rooms_adjacent",
    "rooms_overlap",
    # connectivity
    "door_proximity_reachable",
    "proximity_distances",
    "proximity_neighbors",
]
