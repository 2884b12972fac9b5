"""Level schema for generated missions.

Every entity of a level -- rooms, doors, spawns, objectives, triggers and
props -- is a Pydantic model that serialises cleanly to/from JSON.  The
:class:`Level` is the single contract handed to the renderer, physics and
network layers of the host game.
"""

from .actors import (
    EnemySpawn,
    EnemyType,
    PickupSpawn,
    PickupType,
    SpawnPoint,
    Waypoint,
)
from .doors import Door, DoorAxis, DoorType
from .level import Level
from .objectives import (
    MISSION_COMPLETE,
    Objective,
    Trigger,
    complete_objective_effect,
)
from .props import Prop, PropLoot, PropType
from .rooms import Room

__all__ = [
    # actors
    "EnemySpawn",
    "EnemyType",
    "PickupSpawn",
    "PickupType",
    "SpawnPoint",
    "Waypoint",
    # doors
    "Door",
    "DoorAxis",
    "DoorType",
    # level
    "Level",
    # objectives
    "MISSION_COMPLETE",
    "Objective",
    "Trigger",
    "complete_objective_effect",
    # props
    "Prop",
    "PropLoot",
    "PropType",
    # rooms
    "Room",
]
