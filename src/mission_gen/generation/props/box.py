"""Loose wooden boxes."""

from __future__ import annotations

from mission_gen.generation.props.base import LootEntry, PropConfig, PropPlacer
from mission_gen.schema.props import Prop, PropType
from mission_gen.schema.rooms import Room

BOX = PropConfig(
    type=PropType.CRATE_WOOD,
    health=50,
    loot_chance=0.8,
    loot_table=(
        LootEntry("weapon", 1, 1, 2),
        LootEntry("ammo-pistol", 10, 30, 4),
        LootEntry("ammo-rifle", 8, 20, 3),
        LootEntry("ammo-shotgun", 5, 12, 2),
        LootEntry("health", 15, 35, 3),
        LootEntry("armor", 5, 20, 1),
        LootEntry("ammo-pistol", 5, 15, 2),
    ),
)


class BoxPlacer(PropPlacer):
    """Zero to two single wooden boxes per room."""

    def generate_for_room(self, room: Room, props: list[Prop]) -> None:
        for _ in range(self.rng.random_int(0, 2)):
            self.place_single(room, BOX, props)
