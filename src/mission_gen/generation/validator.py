"""Post-generation validation and repair.

:class:`LevelValidator` walks a finished level, records every problem it
finds and repairs it in place -- moving, rewiring or deleting entities.  It
never raises: a slightly under-populated but structurally sound level is
preferred over aborting generation.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from mission_gen.generation.core.connectivity import DOOR_PROXIMITY_MARGIN, door_proximity_reachable
from mission_gen.generation.core.geometry import (
    ROOM_OVERLAP_MARGIN,
    compute_door_geometry,
    door_in_room,
    door_links_rooms,
    room_distance,
    rooms_overlap,
)
from mission_gen.generation.core.rng import LevelRNG
from mission_gen.generation.doors import DOOR_PROXIMITY_RADIUS, RoomGraph
from mission_gen.schema.actors import PickupType, SpawnPoint
from mission_gen.schema.doors import Door, DoorAxis, DoorType
from mission_gen.schema.level import Level
from mission_gen.schema.objectives import Trigger, complete_objective_effect
from mission_gen.schema.rooms import Room

logger = logging.getLogger(__name__)

ENEMY_MARGIN = 1.5
PICKUP_MARGIN = 0.5
PROP_MARGIN = 0.5
REPOSITION_TRIES = 20

# Overlapping rooms are pushed apart to this multiple of their half-extent sum
PUSH_FACTOR = 1.1

SYNTHETIC_TRIGGER_HALF_EXTENT = 2.0

REPAIR_DOOR_WIDTH = 1.5
REPAIR_DOOR_HEIGHT = 2.5
REPAIR_DOOR_RADIUS = 2.0


class ValidationReport(BaseModel):
    """Outcome of one validation pass."""

    is_valid: bool = True
    """True if the level needed no repairs."""

    issues: list[str] = []
    """Every problem found, in check order."""

    fixed_issues: list[str] = []
    """Every repair applied, in check order."""


class LevelValidator:
    """Checks a generated level against its structural invariants and repairs it."""

    def __init__(self, rng: LevelRNG) -> None:
        self.rng = rng

    def validate_and_repair(self, level: Level, graph: RoomGraph) -> ValidationReport:
        report = ValidationReport()

        self._check_rooms(level, report)
        self._check_doors(level, graph, report)
        self._check_enemies(level, report)
        self._check_pickups(level, report)
        self._check_props(level, report)
        self._check_keys(level, graph, report)
        self._check_objectives(level, report)
        self._check_player_spawn(level, report)
        self._check_connectivity(level, graph, report)

        report.is_valid = not report.issues
        for issue in report.issues:
            logger.warning("Validation issue: %s", issue)
        if report.fixed_issues:
            logger.info("Applied %d repairs", len(report.fixed_issues))
        return report

    # -- geometry ------------------------------------------------------------

    def _check_rooms(self, level: Level, report: ValidationReport) -> None:
        # Pushing one room can create a new overlap, so sweep until stable
        for _ in range(max(1, len(level.rooms))):
            moved = False
            for i, earlier in enumerate(level.rooms):
                for later in level.rooms[i + 1:]:
                    if not rooms_overlap(earlier, later, ROOM_OVERLAP_MARGIN):
                        continue
                    report.issues.append(f"Rooms {earlier.id} and {later.id} are overlapping")
                    self._push_apart(later, earlier)
                    report.fixed_issues.append(
                        f"Moved room {later.id} to resolve overlap with {earlier.id}"
                    )
                    moved = True
            if not moved:
                return

    @staticmethod
    def _push_apart(room: Room, other: Room) -> None:
        """Move *room* away from *other* along the dominant separating axis."""
        dx = room.x - other.x
        dz = room.z - other.z
        if abs(dx) >= abs(dz):
            direction = 1.0 if dx >= 0 else -1.0
            room.x = other.x + direction * (room.width + other.width) / 2 * PUSH_FACTOR
        else:
            direction = 1.0 if dz >= 0 else -1.0
            room.z = other.z + direction * (room.depth + other.depth) / 2 * PUSH_FACTOR

    def _check_doors(self, level: Level, graph: RoomGraph, report: ValidationReport) -> None:
        kept: list[Door] = []
        for door in level.doors:
            if self._door_is_valid(level, graph, door):
                kept.append(door)
                continue
            report.issues.append(f"Door {door.id} is not inside the rooms it links")
            graph.remove_door(door.id)
            report.fixed_issues.append(f"Removed orphaned door {door.id}")
        level.doors = kept

    @staticmethod
    def _door_is_valid(level: Level, graph: RoomGraph, door: Door) -> bool:
        links = graph.links_for_door(door.id)
        if not links:
            return any(door_in_room(door, room) for room in level.rooms)
        for link in links:
            room_a = level.get_room(link.room_a)
            room_b = level.get_room(link.room_b)
            if room_a is None or room_b is None or not door_links_rooms(door, room_a, room_b):
                return False
        return True

    # -- spawns and props ----------------------------------------------------

    def _find_position(self, room: Room, margin: float) -> tuple[float, float] | None:
        for _ in range(REPOSITION_TRIES):
            x = self.rng.random_float(room.min_x + margin, room.max_x - margin)
            z = self.rng.random_float(room.min_z + margin, room.max_z - margin)
            if room.contains_point(x, z, margin):
                return x, z
        return None

    def _check_enemies(self, level: Level, report: ValidationReport) -> None:
        kept = []
        for enemy in level.enemies:
            room = level.get_room(enemy.room_id)
            if room is not None and room.contains_point(enemy.x, enemy.z, ENEMY_MARGIN):
                kept.append(enemy)
                continue

            report.issues.append(f"Enemy {enemy.id} is outside room bounds")
            position = self._find_position(room, ENEMY_MARGIN) if room is not None else None
            if position is None:
                report.fixed_issues.append(f"Removed enemy {enemy.id} from invalid position")
                continue
            enemy.x, enemy.z = position
            kept.append(enemy)
            report.fixed_issues.append(f"Repositioned enemy {enemy.id} inside room {room.id}")
        level.enemies = kept

    def _check_pickups(self, level: Level, report: ValidationReport) -> None:
        kept = []
        for pickup in level.pickups:
            room = level.get_room(pickup.room_id)
            if room is not None and room.contains_point(pickup.x, pickup.z, PICKUP_MARGIN):
                kept.append(pickup)
                continue

            report.issues.append(f"Pickup {pickup.id} ({pickup.type.value}) is outside room bounds")
            position = self._find_position(room, PICKUP_MARGIN) if room is not None else None
            if position is None:
                report.fixed_issues.append(f"Removed pickup {pickup.id} from invalid position")
                continue
            pickup.x, pickup.z = position
            kept.append(pickup)
            report.fixed_issues.append(f"Repositioned pickup {pickup.id} inside room {room.id}")
        level.pickups = kept

    @staticmethod
    def _check_props(level: Level, report: ValidationReport) -> None:
        kept = []
        for prop in level.props:
            room = level.get_room(prop.room_id) if prop.room_id else None
            if room is not None and room.contains_point(prop.x, prop.z, PROP_MARGIN):
                kept.append(prop)
                continue
            report.issues.append(f"Prop {prop.type.value} at ({prop.x:.1f}, {prop.z:.1f}) is outside its room")
            report.fixed_issues.append(f"Removed prop {prop.type.value} at ({prop.x:.1f}, {prop.z:.1f})")
        level.props = kept

    # -- locks and objectives ------------------------------------------------

    @staticmethod
    def _check_keys(level: Level, graph: RoomGraph, report: ValidationReport) -> None:
        if not level.rooms:
            return
        start = level.rooms[0].id
        for door in level.doors:
            if door.type != DoorType.LOCKED:
                continue
            reachable = graph.reachable_from(start, unlocked_only=True, excluding_door=door.id)
            solvable = door.key_id is not None and any(
                p.type == PickupType.KEY and p.key_id == door.key_id and p.room_id in reachable
                for p in level.pickups
            )
            if solvable:
                continue
            report.issues.append(f"Locked door {door.id} has no reachable key {door.key_id!r}")
            door.type = DoorType.PROXIMITY
            door.key_id = None
            if door.proximity_radius is None:
                door.proximity_radius = DOOR_PROXIMITY_RADIUS
            graph.unlock_door(door.id)
            report.fixed_issues.append(f"Converted door {door.id} to a proximity door")

    def _check_objectives(self, level: Level, report: ValidationReport) -> None:
        for objective in level.objectives:
            if any(t.completes(objective.id) for t in level.triggers):
                continue
            report.issues.append(f"Objective {objective.id} has no associated trigger")
            if not level.rooms:
                continue
            room = self.rng.random_choice(level.rooms)
            trigger = Trigger(
                id=f"trigger_{objective.id}",
                x=room.x,
                y=room.y,
                z=room.z,
                half_width=SYNTHETIC_TRIGGER_HALF_EXTENT,
                half_depth=SYNTHETIC_TRIGGER_HALF_EXTENT,
                half_height=SYNTHETIC_TRIGGER_HALF_EXTENT,
                on_enter=complete_objective_effect(objective.id),
                once=True,
            )
            level.triggers.append(trigger)
            if objective.trigger_id is None:
                objective.trigger_id = trigger.id
            report.fixed_issues.append(f"Added trigger for objective {objective.id} in {room.id}")

    @staticmethod
    def _check_player_spawn(level: Level, report: ValidationReport) -> None:
        if level.player_spawn is not None:
            return
        report.issues.append("No player spawn point set")
        if not level.rooms:
            return
        room = level.rooms[0]
        level.player_spawn = SpawnPoint(
            x=room.x,
            y=room.floor_y + 0.1,
            z=room.z - room.depth / 4,
        )
        report.fixed_issues.append(f"Set player spawn in {room.id}")

    # -- connectivity --------------------------------------------------------

    def _check_connectivity(self, level: Level, graph: RoomGraph, report: ValidationReport) -> None:
        if not level.rooms:
            return
        start = level.rooms[0].id
        reached = door_proximity_reachable(level.rooms, level.doors, start)
        unreached_count = len(level.rooms) - len(reached)
        if not unreached_count:
            return

        report.issues.append(f"Found {unreached_count} unreachable rooms")
        forced: set[str] = set()
        for _ in range(unreached_count):
            room, closest = self._pick_repair(level.rooms, reached)
            door = self._repair_door(room, closest)
            level.doors.append(door)
            graph.add_link(door.id, room.id, closest.id)
            report.fixed_issues.append(
                f"Added door {door.id} to connect unreachable room {room.id} to {closest.id}"
            )
            # A new door can bring a whole cluster of rooms into reach
            forced.add(room.id)
            reached = door_proximity_reachable(level.rooms, level.doors, start) | forced
            if len(reached) == len(level.rooms):
                return

    @staticmethod
    def _pick_repair(rooms: list[Room], reached: set[str]) -> tuple[Room, Room]:
        """Choose an unreached room and the reached room to join it to.

        Pairs with facing walls close enough for a door to reach both come
        first, so the new door survives a later pass.
        """
        inside = [r for r in rooms if r.id in reached]
        outside = [r for r in rooms if r.id not in reached]
        for room in outside:
            bridgeable = [r for r in inside if _bridgeable(room, r)]
            if bridgeable:
                return room, min(bridgeable, key=lambda r: room_distance(room, r))
        room = outside[0]
        return room, min(inside, key=lambda r: room_distance(room, r))

    @staticmethod
    def _repair_door(room: Room, other: Room) -> Door:
        geometry = compute_door_geometry(room, other)
        if geometry is not None:
            x, z, axis = geometry.x, geometry.z, geometry.axis
        else:
            x = (room.x + other.x) / 2
            z = (room.z + other.z) / 2
            axis = DoorAxis.X if abs(other.x - room.x) > abs(other.z - room.z) else DoorAxis.Z
        return Door(
            id=f"door_repair_{room.id}_{other.id}",
            x=x,
            y=0.0,
            z=z,
            axis=axis,
            width=REPAIR_DOOR_WIDTH,
            height=REPAIR_DOOR_HEIGHT,
            type=DoorType.PROXIMITY,
            proximity_radius=REPAIR_DOOR_RADIUS,
        )


def _bridgeable(a: Room, b: Room) -> bool:
    """True if a door placed by :func:`compute_door_geometry` would join *a* and *b*."""
    geometry = compute_door_geometry(a, b)
    if geometry is None:
        return False
    return all(
        room.contains_point(geometry.x, geometry.z, margin=-DOOR_PROXIMITY_MARGIN)
        for room in (a, b)
    )
