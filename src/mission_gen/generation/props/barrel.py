"""Barrels, some of them explosive."""

from __future__ import annotations

from mission_gen.generation.props.base import LootEntry, PropConfig, PropPlacer
from mission_gen.schema.props import Prop, PropType
from mission_gen.schema.rooms import Room

BARRELS_PER_ROOM = 2
EXPLOSIVE_CHANCE = 0.3


def _barrel_loot(explosive: bool) -> tuple[LootEntry, ...]:
    return (
        LootEntry("ammo-rifle", 10, 25, 2),
        LootEntry("ammo-pistol", 15, 30, 2),
        LootEntry("health", 20, 40, 2),
        LootEntry("armor", 5, 15, 1),
        LootEntry("weapon", 1, 1, 0 if explosive else 1),
    )


BARREL = PropConfig(
    type=PropType.BARREL,
    health=100,
    loot_chance=0.6,
    loot_table=_barrel_loot(explosive=False),
)

EXPLOSIVE_BARREL = PropConfig(
    type=PropType.BARREL_EXPLOSIVE,
    health=50,
    loot_chance=0.3,
    loot_table=_barrel_loot(explosive=True),
)


class BarrelPlacer(PropPlacer):
    """Two barrels per room, kept a little further from the walls."""

    wall_buffer = 1.2

    def generate_for_room(self, room: Room, props: list[Prop]) -> None:
        for _ in range(BARRELS_PER_ROOM):
            explosive = self.rng.chance(EXPLOSIVE_CHANCE)
            self.place_single(room, EXPLOSIVE_BARREL if explosive else BARREL, props)
