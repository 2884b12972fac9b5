"""Enemy placement.

Every non-spawn room gets a guaranteed minimum garrison, then the remaining
budget is spread over rooms weighted by area and free capacity.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from mission_gen.config import Difficulty, GenerationOptions
from mission_gen.generation.core.ids import IdAllocator
from mission_gen.generation.core.rng import LevelRNG
from mission_gen.schema.actors import EnemySpawn, EnemyType, Waypoint
from mission_gen.schema.rooms import Room

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnemyConfig:
    """Base stats and patrol behaviour for one enemy type."""

    health: int
    speed: float
    alert_radius: float
    fov: float
    waypoint_chance: float
    min_waypoints: int
    max_waypoints: int


ENEMY_CONFIGS: dict[EnemyType, EnemyConfig] = {
    EnemyType.GUARD: EnemyConfig(
        health=38, speed=1.05, alert_radius=9, fov=math.pi * 0.7,
        waypoint_chance=0.4, min_waypoints=1, max_waypoints=2,
    ),
    EnemyType.SOLDIER: EnemyConfig(
        health=50, speed=1.1, alert_radius=10, fov=math.pi * 0.75,
        waypoint_chance=0.5, min_waypoints=1, max_waypoints=3,
    ),
    EnemyType.OFFICER: EnemyConfig(
        health=65, speed=0.95, alert_radius=11, fov=math.pi * 0.8,
        waypoint_chance=0.6, min_waypoints=2, max_waypoints=4,
    ),
}

# Cumulative-roll type weights per difficulty, in guard/soldier/officer order
_TYPE_WEIGHTS: dict[Difficulty, list[tuple[EnemyType, float]]] = {
    Difficulty.EASY: [
        (EnemyType.GUARD, 0.6), (EnemyType.SOLDIER, 0.3), (EnemyType.OFFICER, 0.1),
    ],
    Difficulty.MEDIUM: [
        (EnemyType.GUARD, 0.4), (EnemyType.SOLDIER, 0.5), (EnemyType.OFFICER, 0.1),
    ],
    Difficulty.HARD: [
        (EnemyType.GUARD, 0.2), (EnemyType.SOLDIER, 0.5), (EnemyType.OFFICER, 0.3),
    ],
}

MIN_ROOM_SIZE = 5.0
MIN_PER_ROOM = 4
MAX_PER_ROOM = 7

# Spacing ladder for the guaranteed garrison; relaxed until something fits
_GARRISON_SPACINGS = (1.8, 1.2, 0.8, 0.4)
FILL_SPACING = 2.0

POSITION_TRIES = 28
WAYPOINT_TRIES = 5

# Stat multiplier is 0.9 + uniform(0, 0.2)
_JITTER_BASE = 0.9
_JITTER_SPAN = 0.2


def room_enemy_cap(room: Room, difficulty: Difficulty) -> int:
    """Maximum number of enemies *room* may hold."""
    cap = MIN_PER_ROOM
    if room.area > 160:
        cap += 1
    if room.area > 280:
        cap += 1
    if difficulty == Difficulty.HARD:
        cap += 1
    return min(cap, MAX_PER_ROOM)


def spawn_margin(room: Room) -> float:
    """Inset from the walls used for enemy positions and waypoints."""
    return min(2.2, max(1.0, min(room.width, room.depth) * 0.18))


class EnemyGenerator:
    """Populates rooms with guards, soldiers and officers."""

    def __init__(self, rng: LevelRNG, ids: IdAllocator) -> None:
        self.rng = rng
        self.ids = ids

    def generate_enemies(
        self,
        rooms: list[Room],
        options: GenerationOptions,
    ) -> list[EnemySpawn]:
        """Place enemies in every room except the first (player spawn) room."""
        enemies: list[EnemySpawn] = []

        candidates = [
            r for r in rooms[1:]
            if r.width >= MIN_ROOM_SIZE and r.depth >= MIN_ROOM_SIZE
        ]
        if not candidates:
            logger.info("No candidate rooms for enemies")
            return enemies

        counts = {r.id: 0 for r in candidates}
        caps = {r.id: room_enemy_cap(r, options.difficulty) for r in candidates}
        total_capacity = sum(caps.values())

        min_required = len(candidates) * MIN_PER_ROOM
        low = max(min_required, max(0, min(options.min_enemies, options.max_enemies)))
        high = max(low, options.max_enemies)
        requested = self.rng.random_int(low, high)
        target = min(requested, total_capacity)

        # Pass 1: guaranteed garrison
        for room in candidates:
            for i in range(MIN_PER_ROOM):
                enemy = None
                for spacing in _GARRISON_SPACINGS:
                    enemy = self._spawn_in_room(room, enemies, options.difficulty, spacing)
                    if enemy is not None:
                        break
                if enemy is None:
                    logger.warning(
                        "Could not place garrison enemy %d/%d in %s",
                        i + 1, MIN_PER_ROOM, room.id,
                    )
                    continue
                enemies.append(enemy)
                counts[room.id] += 1

        # Pass 2: fill up to the target, favouring big rooms with free capacity
        max_tries = max(20, target * 14)
        tries = 0
        while len(enemies) < target and tries < max_tries:
            tries += 1
            room = self._pick_room(candidates, counts, caps)
            if room is None:
                break
            enemy = self._spawn_in_room(room, enemies, options.difficulty, FILL_SPACING)
            if enemy is None:
                continue
            enemies.append(enemy)
            counts[room.id] += 1

        logger.info(
            "Spawned %d/%d enemies in %d rooms (requested range %d-%d)",
            len(enemies), target, len(candidates), low, high,
        )
        return enemies

    # -- helpers -------------------------------------------------------------

    def _pick_room(
        self,
        rooms: list[Room],
        counts: dict[str, int],
        caps: dict[str, int],
    ) -> Room | None:
        eligible: list[tuple[Room, float]] = []
        for room in rooms:
            free = caps[room.id] - counts[room.id]
            if free > 0:
                eligible.append((room, room.area * free))

        total = sum(w for _, w in eligible)
        if not eligible or total <= 0:
            return None

        roll = self.rng.random_float(0, total)
        for room, weight in eligible:
            roll -= weight
            if roll <= 0:
                return room
        return eligible[-1][0]

    def _choose_type(self, difficulty: Difficulty) -> EnemyType:
        roll = self.rng.random_float(0, 1)
        cumulative = 0.0
        for enemy_type, weight in _TYPE_WEIGHTS[difficulty]:
            cumulative += weight
            if roll < cumulative:
                return enemy_type
        return _TYPE_WEIGHTS[difficulty][-1][0]

    def _jitter(self) -> float:
        return _JITTER_BASE + self.rng.random_float(0, _JITTER_SPAN)

    def _spawn_in_room(
        self,
        room: Room,
        enemies: list[EnemySpawn],
        difficulty: Difficulty,
        min_spacing: float,
    ) -> EnemySpawn | None:
        enemy_type = self._choose_type(difficulty)
        config = ENEMY_CONFIGS[enemy_type]
        margin = spawn_margin(room)

        position = None
        for _ in range(POSITION_TRIES):
            x = self.rng.random_float(room.min_x + margin, room.max_x - margin)
            z = self.rng.random_float(room.min_z + margin, room.max_z - margin)
            if room.contains_point(x, z, margin) and self._clear_of_enemies(
                x, z, room.id, enemies, min_spacing,
            ):
                position = (x, z)
                break

        if position is None:
            logger.debug("No free position for a %s in %s", enemy_type.value, room.id)
            return None

        x, z = position
        health = round(config.health * self._jitter())
        speed = config.speed * self._jitter()
        alert_radius = config.alert_radius * self._jitter()
        fov = config.fov * self._jitter()
        facing = self.rng.random_float(0, math.pi * 2)

        waypoints = None
        if self.rng.chance(config.waypoint_chance):
            count = self.rng.random_int(config.min_waypoints, config.max_waypoints)
            waypoints = self._generate_waypoints(room, count, margin)

        enemy = EnemySpawn(
            id=self.ids.next("enemy"),
            type=enemy_type,
            x=x,
            y=room.floor_y + 0.1,
            z=z,
            room_id=room.id,
            facing_angle=facing,
            health=health,
            speed=speed,
            alert_radius=alert_radius,
            fov=fov,
            waypoints=waypoints,
        )
        logger.debug("Spawned %s %s in %s", enemy_type.value, enemy.id, room.id)
        return enemy

    @staticmethod
    def _clear_of_enemies(
        x: float,
        z: float,
        room_id: str,
        enemies: list[EnemySpawn],
        min_spacing: float,
    ) -> bool:
        for e in enemies:
            if e.room_id != room_id:
                continue
            if (x - e.x) ** 2 + (z - e.z) ** 2 < min_spacing * min_spacing:
                return False
        return True

    def _generate_waypoints(self, room: Room, count: int, margin: float) -> list[Waypoint]:
        waypoints: list[Waypoint] = []
        for _ in range(count):
            point = Waypoint(x=room.x, z=room.z)
            for _ in range(WAYPOINT_TRIES):
                x = self.rng.random_float(room.min_x + margin, room.max_x - margin)
                z = self.rng.random_float(room.min_z + margin, room.max_z - margin)
                if room.contains_point(x, z, margin):
                    point = Waypoint(x=x, z=z)
                    break
            waypoints.append(point)
        return waypoints
