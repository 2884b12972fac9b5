"""Shared placement logic for the prop placers.

Each placer subclasses :class:`PropPlacer` and only supplies its own tables
and per-room counts; position search, loot rolls and stacking live here.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from mission_gen.generation.core.rng import LevelRNG
from mission_gen.generation.props.registry import OccupancyRegistry
from mission_gen.schema.doors import Door
from mission_gen.schema.props import Prop, PropLoot, PropType
from mission_gen.schema.rooms import Room

logger = logging.getLogger(__name__)

POSITION_TRIES = 100

# Props stay out of the square this far from two walls at once
CORNER_ZONE = 3.0

DOOR_RADIUS = 1.5
DOOR_CLEARANCE = 2.0

FOOTPRINT_RADIUS = 1.0

# Stacks must leave this much headroom below the ceiling
CEILING_CLEARANCE = 0.5

STACK_HOTSPOT_WEIGHT = 2.0


@dataclass(frozen=True)
class LootEntry:
    """One row of a loot table."""

    type: str
    min: int
    max: int
    weight: float


@dataclass(frozen=True)
class PropConfig:
    """Static description of one kind of prop a placer emits."""

    type: PropType
    health: int
    loot_chance: float = 0.0
    loot_table: tuple[LootEntry, ...] = ()
    scale: float = 1.0


@dataclass
class Hotspot:
    """A weighted point of interest, e.g. the base of a crate stack."""

    x: float
    z: float
    room_id: str
    weight: float


class PropPlacer(ABC):
    """Base class for the prop placers.

    Parameters
    ----------
    rng:
        The level RNG, shared with every other generator.
    registry:
        Footprints claimed so far, shared by all placers.
    doors:
        Doors whose surroundings must stay clear.
    hotspots:
        Sink for hotspots recorded at stack bases.
    """

    wall_buffer: float = 1.0

    def __init__(
        self,
        rng: LevelRNG,
        registry: OccupancyRegistry,
        doors: Sequence[Door] = (),
        hotspots: list[Hotspot] | None = None,
    ) -> None:
        self.rng = rng
        self.registry = registry
        self.doors = list(doors)
        self.hotspots = hotspots if hotspots is not None else []

    @abstractmethod
    def generate_for_room(self, room: Room, props: list[Prop]) -> None:
        """Append this placer's props for *room* to *props*."""

    # -- shared helpers ------------------------------------------------------

    def find_valid_position(self, room: Room, radius: float) -> tuple[float, float] | None:
        """Rejection-sample a free spot for a footprint of *radius* in *room*."""
        inset = radius + self.wall_buffer
        if room.width <= 2 * inset or room.depth <= 2 * inset:
            return None

        for _ in range(POSITION_TRIES):
            x = self.rng.random_float(room.min_x + inset, room.max_x - inset)
            z = self.rng.random_float(room.min_z + inset, room.max_z - inset)
            if self._in_corner(room, x, z):
                continue
            if self._near_door(x, z, radius):
                continue
            if not self.registry.is_free(x, z, radius):
                continue
            return x, z
        return None

    def maybe_loot(self, chance: float, table: Sequence[LootEntry]) -> PropLoot | None:
        """Roll *chance* for loot, then pick a row of *table* by weight."""
        if not table or not self.rng.chance(chance):
            return None
        entry = table[self.rng.weighted_index([e.weight for e in table])]
        return PropLoot(type=entry.type, amount=self.rng.random_int(entry.min, entry.max))

    def can_stack(self, room: Room, layers: int, scale: float = 1.0) -> bool:
        """Return True if *layers* props of *scale* fit under the ceiling."""
        return room.floor_y + layers * scale <= room.ceiling_y - CEILING_CLEARANCE

    def place_prop(
        self,
        room: Room,
        config: PropConfig,
        x: float,
        z: float,
        props: list[Prop],
        *,
        layer: int = 0,
        rot_y: float | None = None,
        loot: PropLoot | None = None,
        health: int | None = None,
    ) -> Prop:
        """Create a prop at ``(x, z)`` on the given stack *layer* and append it."""
        if rot_y is None:
            rot_y = self.rng.random_float(0, math.pi * 2)
        prop = Prop(
            type=config.type,
            x=x,
            y=room.floor_y + layer * config.scale,
            z=z,
            scale=config.scale,
            rot_y=rot_y,
            health=config.health if health is None else health,
            loot=loot,
            room_id=room.id,
        )
        props.append(prop)
        return prop

    def place_single(
        self,
        room: Room,
        config: PropConfig,
        props: list[Prop],
        layers: int = 1,
    ) -> bool:
        """Place one prop (or a column of *layers*) on a free footprint.

        Returns False if no position was found.  A column that would clip
        the ceiling collapses to a single prop.
        """
        position = self.find_valid_position(room, FOOTPRINT_RADIUS)
        if position is None:
            logger.debug("No room for %s in %s", config.type.value, room.id)
            return False

        if layers > 1 and not self.can_stack(room, layers, config.scale):
            logger.debug("Stack of %d %s too tall for %s", layers, config.type.value, room.id)
            layers = 1

        x, z = position
        for layer in range(layers):
            loot = self.maybe_loot(config.loot_chance, config.loot_table) if layer == 0 else None
            self.place_prop(room, config, x, z, props, layer=layer, loot=loot)

        self.registry.add(x, z, FOOTPRINT_RADIUS)
        if layers > 1:
            self.record_hotspot(x, z, room)
        return True

    def record_hotspot(self, x: float, z: float, room: Room) -> None:
        self.hotspots.append(Hotspot(x=x, z=z, room_id=room.id, weight=STACK_HOTSPOT_WEIGHT))

    # -- constraint checks ---------------------------------------------------

    @staticmethod
    def _in_corner(room: Room, x: float, z: float) -> bool:
        near_x_wall = x - room.min_x < CORNER_ZONE or room.max_x - x < CORNER_ZONE
        near_z_wall = z - room.min_z < CORNER_ZONE or room.max_z - z < CORNER_ZONE
        return near_x_wall and near_z_wall

    def _near_door(self, x: float, z: float, radius: float) -> bool:
        exclusion = DOOR_RADIUS + DOOR_CLEARANCE + radius
        return any(math.hypot(x - d.x, z - d.z) < exclusion for d in self.doors)
