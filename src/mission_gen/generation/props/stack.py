"""Three-crate pyramids: two side by side with one balanced on top."""

from __future__ import annotations

import logging
import math

from mission_gen.generation.props.base import (
    FOOTPRINT_RADIUS,
    LootEntry,
    PropConfig,
    PropPlacer,
)
from mission_gen.schema.props import Prop, PropType
from mission_gen.schema.rooms import Room

logger = logging.getLogger(__name__)

STACKS_PER_ROOM = 1

# Centre-to-centre spacing of the two bottom crates
BOTTOM_SPACING = 1.0

BOTTOM_LOOT_CHANCE = 0.9
BOTTOM_LOOT: tuple[LootEntry, ...] = (
    LootEntry("ammo-rifle", 15, 30, 4),
    LootEntry("ammo-pistol", 20, 40, 3),
    LootEntry("ammo-shotgun", 5, 15, 2),
    LootEntry("health", 15, 30, 2),
    LootEntry("armor", 10, 25, 1),
    LootEntry("weapon", 1, 1, 2),
)

TOP_LOOT_CHANCE = 0.5
TOP_LOOT: tuple[LootEntry, ...] = (
    LootEntry("weapon", 1, 1, 3),
    LootEntry("ammo-rifle", 20, 40, 2),
    LootEntry("ammo-pistol", 25, 50, 2),
    LootEntry("ammo-shotgun", 10, 20, 1),
    LootEntry("health", 25, 50, 1),
    LootEntry("armor", 15, 30, 1),
)


class StackPlacer(PropPlacer):
    """One crate pyramid per room."""

    def generate_for_room(self, room: Room, props: list[Prop]) -> None:
        for _ in range(STACKS_PER_ROOM):
            self._place_stack(room, props)

    def _choose_type(self) -> PropType:
        # Box stacks are plain crates; the rest are crate or metal crate
        if self.rng.chance(0.5):
            return PropType.CRATE
        return PropType.CRATE if self.rng.chance(0.5) else PropType.CRATE_METAL

    def _place_stack(self, room: Room, props: list[Prop]) -> None:
        prop_type = self._choose_type()
        config = PropConfig(
            type=prop_type,
            health=150 if prop_type == PropType.CRATE_METAL else 100,
        )

        position = self.find_valid_position(room, FOOTPRINT_RADIUS)
        if position is None:
            logger.debug("No room for a crate stack in %s", room.id)
            return
        x, z = position

        if not self.can_stack(room, 2, config.scale):
            logger.debug("Crate stack too tall for %s, placing a single crate", room.id)
            loot = self.maybe_loot(BOTTOM_LOOT_CHANCE, BOTTOM_LOOT)
            self.place_prop(room, config, x, z, props, rot_y=0.0, loot=loot)
            self.registry.add(x, z, FOOTPRINT_RADIUS)
            return

        half = BOTTOM_SPACING / 2
        for dx in (-half, half):
            loot = self.maybe_loot(BOTTOM_LOOT_CHANCE, BOTTOM_LOOT)
            self.place_prop(room, config, x + dx, z, props, rot_y=0.0, loot=loot)

        loot = self.maybe_loot(TOP_LOOT_CHANCE, TOP_LOOT)
        self.place_prop(room, config, x, z, props, layer=1, rot_y=math.pi / 4, loot=loot)

        self.registry.add(x, z, FOOTPRINT_RADIUS)
        self.record_hotspot(x, z, room)
