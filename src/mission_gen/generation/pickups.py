"""Pickup placement: spawn-room supplies, door keys and scattered loot."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from mission_gen.config import GenerationOptions
from mission_gen.generation.core.ids import IdAllocator
from mission_gen.generation.core.rng import LevelRNG
from mission_gen.generation.doors import RoomGraph
from mission_gen.schema.actors import PickupSpawn, PickupType
from mission_gen.schema.doors import Door, DoorType
from mission_gen.schema.rooms import Room

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickupConfig:
    min_amount: int
    max_amount: int
    spawn_chance: float


PICKUP_CONFIGS: dict[PickupType, PickupConfig] = {
    PickupType.WEAPON_PISTOL: PickupConfig(1, 2, 0.95),
    PickupType.WEAPON_RIFLE: PickupConfig(1, 2, 0.8),
    PickupType.WEAPON_SHOTGUN: PickupConfig(1, 1, 0.7),
    PickupType.AMMO_PISTOL: PickupConfig(20, 40, 1.0),
    PickupType.AMMO_RIFLE: PickupConfig(15, 35, 1.0),
    PickupType.AMMO_SHOTGUN: PickupConfig(8, 16, 0.9),
    PickupType.HEALTH: PickupConfig(25, 60, 0.9),
    PickupType.ARMOR: PickupConfig(20, 50, 0.6),
    PickupType.KEY: PickupConfig(1, 1, 1.0),
}

# (type, min count, max count) always placed in the player's starting room
_SPAWN_SUPPLIES: list[tuple[PickupType, int, int]] = [
    (PickupType.AMMO_PISTOL, 3, 5),
    (PickupType.AMMO_RIFLE, 2, 4),
    (PickupType.AMMO_SHOTGUN, 1, 2),
    (PickupType.HEALTH, 2, 4),
    (PickupType.ARMOR, 2, 3),
]

# (type, min count, max count) scattered over the non-spawn rooms
_SCATTERED: list[tuple[PickupType, int, int]] = [
    (PickupType.WEAPON_PISTOL, 2, 3),
    (PickupType.WEAPON_RIFLE, 1, 2),
    (PickupType.WEAPON_SHOTGUN, 0, 1),
    (PickupType.AMMO_PISTOL, 2, 3),
    (PickupType.AMMO_RIFLE, 1, 2),
    (PickupType.HEALTH, 2, 4),
    (PickupType.ARMOR, 1, 2),
]

# Shotguns only show up in levels with at least this many rooms
_SHOTGUN_MIN_ROOMS = 3

WALL_MARGIN = 1.5
MIN_PICKUP_SPACING = 1.5
POSITION_TRIES = 10
SPAWN_SUPPLY_TRIES = 16
KEY_NEAR_DOOR_CHANCE = 0.5


class PickupGenerator:
    """Scatters pickups across a level.

    A generator instance keeps the list of pickups placed so far for spacing
    checks; it is reset at the start of every :meth:`generate_pickups` call.
    """

    def __init__(self, rng: LevelRNG, ids: IdAllocator) -> None:
        self.rng = rng
        self.ids = ids
        self._placed: list[PickupSpawn] = []

    def generate_pickups(
        self,
        rooms: list[Room],
        doors: list[Door],
        graph: RoomGraph,
        options: GenerationOptions,
    ) -> list[PickupSpawn]:
        self._placed = []
        if not rooms:
            return []

        spawn_room = rooms[0]
        for pickup_type, low, high in _SPAWN_SUPPLIES:
            self._place_in_room(pickup_type, spawn_room, low, high)

        others = rooms[1:]
        if others:
            self._place_keys(rooms, doors, graph)
            for pickup_type, low, high in _SCATTERED:
                if pickup_type == PickupType.WEAPON_SHOTGUN and len(rooms) < _SHOTGUN_MIN_ROOMS:
                    continue
                self._scatter(pickup_type, others, low, high)

        logger.info("Placed %d pickups", len(self._placed))
        return list(self._placed)

    # -- placement passes ----------------------------------------------------

    def _place_in_room(self, pickup_type: PickupType, room: Room, low: int, high: int) -> None:
        count = self.rng.random_int(low, high)
        for _ in range(count):
            position = self._find_position(room, SPAWN_SUPPLY_TRIES)
            if position is None:
                logger.debug("No space for %s supply in %s", pickup_type.value, room.id)
                continue
            self._add(pickup_type, room, position)

    def _place_keys(self, rooms: list[Room], doors: list[Door], graph: RoomGraph) -> None:
        """Place one key per locked door where it can be fetched without that door."""
        spawn_room = rooms[0]
        locked = [d for d in doors if d.type == DoorType.LOCKED and d.key_id]

        for door in locked:
            reachable = graph.reachable_from(
                spawn_room.id, unlocked_only=True, excluding_door=door.id,
            )
            linked_ids: set[str] = set()
            for link in graph.links_for_door(door.id):
                linked_ids.update((link.room_a, link.room_b))

            near_door = self.rng.chance(KEY_NEAR_DOOR_CHANCE)
            pool = [
                r for r in rooms[1:]
                if r.id in reachable and (r.id in linked_ids) == near_door
            ]
            room = self.rng.random_choice(pool) if pool else spawn_room

            position = self._find_position(room, POSITION_TRIES)
            if position is None:
                logger.warning("Could not place key %r for %s", door.key_id, door.id)
                continue
            self._add(PickupType.KEY, room, position, key_id=door.key_id)

    def _scatter(self, pickup_type: PickupType, rooms: list[Room], low: int, high: int) -> None:
        config = PICKUP_CONFIGS[pickup_type]
        count = self.rng.random_int(low, high)
        for _ in range(count):
            if self.rng.random_float(0, 1) > config.spawn_chance:
                continue
            room = self.rng.random_choice(rooms)
            position = self._find_position(room, POSITION_TRIES)
            if position is None:
                logger.debug("Dropped %s in %s, no free spot", pickup_type.value, room.id)
                continue
            self._add(pickup_type, room, position)

    # -- helpers -------------------------------------------------------------

    def _find_position(self, room: Room, tries: int) -> tuple[float, float] | None:
        for _ in range(tries):
            x = self.rng.random_float(room.min_x + WALL_MARGIN, room.max_x - WALL_MARGIN)
            z = self.rng.random_float(room.min_z + WALL_MARGIN, room.max_z - WALL_MARGIN)
            if not self._too_close(x, z):
                return x, z
        return None

    def _too_close(self, x: float, z: float) -> bool:
        return any(
            math.hypot(p.x - x, p.z - z) < MIN_PICKUP_SPACING for p in self._placed
        )

    def _add(
        self,
        pickup_type: PickupType,
        room: Room,
        position: tuple[float, float],
        key_id: str | None = None,
    ) -> None:
        config = PICKUP_CONFIGS[pickup_type]
        amount = self.rng.random_int(config.min_amount, config.max_amount)
        x, z = position
        pickup = PickupSpawn(
            id=self.ids.next("pickup"),
            type=pickup_type,
            x=x,
            y=room.floor_y,
            z=z,
            amount=amount,
            key_id=key_id,
            room_id=room.id,
        )
        self._placed.append(pickup)
