"""Sturdier crates, occasionally stacked two high."""

from __future__ import annotations

from mission_gen.generation.props.base import LootEntry, PropConfig, PropPlacer
from mission_gen.schema.props import Prop, PropType
from mission_gen.schema.rooms import Room

CRATE = PropConfig(
    type=PropType.CRATE,
    health=75,
    loot_chance=0.9,
    loot_table=(
        LootEntry("weapon", 1, 1, 3),
        LootEntry("ammo-pistol", 15, 35, 4),
        LootEntry("ammo-rifle", 10, 25, 3),
        LootEntry("ammo-shotgun", 5, 15, 2),
        LootEntry("health", 20, 40, 2),
        LootEntry("armor", 10, 25, 2),
        LootEntry("ammo-pistol", 10, 20, 2),
    ),
)

STACK_CHANCE = 0.2
STACK_LAYERS = 2


class CratePlacer(PropPlacer):
    """Zero to two crates per room; some are stacked."""

    def generate_for_room(self, room: Room, props: list[Prop]) -> None:
        for _ in range(self.rng.random_int(0, 2)):
            layers = STACK_LAYERS if self.rng.chance(STACK_CHANCE) else 1
            self.place_single(room, CRATE, props, layers=layers)
