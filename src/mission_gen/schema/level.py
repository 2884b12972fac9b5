"""Top-level container that bundles a whole generated mission."""

from __future__ import annotations

from pydantic import BaseModel

from .actors import EnemySpawn, PickupSpawn, SpawnPoint
from .doors import Door
from .objectives import Objective, Trigger
from .props import Prop
from .rooms import Room


class Level(BaseModel):
    """The complete level description handed to renderer/physics consumers.

    Consumers treat it as read-only; only the validator's repair pass
    mutates a level after generation.
    """

    name: str
    briefing: str
    rooms: list[Room] = []
    doors: list[Door] = []
    player_spawn: SpawnPoint | None = None
    enemies: list[EnemySpawn] = []
    pickups: list[PickupSpawn] = []
    objectives: list[Objective] = []
    triggers: list[Trigger] = []
    props: list[Prop] = []

    # -- convenience lookups ------------------------------------------------

    def get_room(self, room_id: str) -> Room | None:
        """Return the room with the given id, or ``None``."""
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def get_objective(self, objective_id: str) -> Objective | None:
        """Return the objective with the given id, or ``None``."""
        for objective in self.objectives:
            if objective.id == objective_id:
                return objective
        return None
