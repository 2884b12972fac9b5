"""Tests for post-generation validation and repair."""

import pytest

from mission_gen.generation.core.geometry import door_links_rooms
from mission_gen.generation.core.rng import LevelRNG
from mission_gen.generation.doors import DoorLink, RoomGraph
from mission_gen.generation.validator import LevelValidator, ValidationReport
from mission_gen.schema import (
    Door,
    DoorAxis,
    DoorType,
    EnemySpawn,
    EnemyType,
    Level,
    Objective,
    PickupSpawn,
    PickupType,
    Prop,
    PropType,
    Room,
    SpawnPoint,
    Trigger,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _room(room_id: str, x: float, width: float = 12, depth: float = 16) -> Room:
    return Room(id=room_id, x=x, y=0, z=0, width=width, depth=depth, height=4)


def _door(door_id: str, x: float, door_type=DoorType.PROXIMITY, key_id=None) -> Door:
    return Door(
        id=door_id, x=x, y=0, z=0, axis=DoorAxis.X, width=2, height=3,
        type=door_type, key_id=key_id,
        proximity_radius=2.5 if door_type == DoorType.PROXIMITY else None,
    )


def _enemy(enemy_id: str, room_id: str, x: float, z: float = 0.0) -> EnemySpawn:
    return EnemySpawn(
        id=enemy_id, type=EnemyType.GUARD, x=x, y=-1.9, z=z, room_id=room_id,
        facing_angle=0, health=38, speed=1.0, alert_radius=9, fov=2.0,
    )


def _pickup(pickup_id: str, room_id: str, x: float, pickup_type=PickupType.HEALTH,
            key_id=None) -> PickupSpawn:
    return PickupSpawn(
        id=pickup_id, type=pickup_type, x=x, y=-2, z=0, room_id=room_id, key_id=key_id,
    )


def _two_room_level(**kwargs) -> tuple[Level, RoomGraph]:
    """Two wall-sharing rooms joined by one proximity door."""
    rooms = [_room("room_1", 0), _room("room_2", 12.1)]
    doors = kwargs.pop("doors", [_door("door_1", 6.05)])
    graph = kwargs.pop("graph", RoomGraph(links=[DoorLink("door_1", "room_1", "room_2")]))
    level = Level(
        name="Test Site",
        briefing="",
        rooms=rooms,
        doors=doors,
        player_spawn=SpawnPoint(x=0, y=-1.9, z=-4),
        **kwargs,
    )
    return level, graph


def _validate(level: Level, graph: RoomGraph) -> ValidationReport:
    return LevelValidator(LevelRNG(1)).validate_and_repair(level, graph)


def _assert_doors_join_their_rooms(level: Level, graph: RoomGraph) -> None:
    for door in level.doors:
        for link in graph.links_for_door(door.id):
            room_a, room_b = level.get_room(link.room_a), level.get_room(link.room_b)
            assert door_links_rooms(door, room_a, room_b), f"door={door.id}"


# ---------------------------------------------------------------------------
# Clean level
# ---------------------------------------------------------------------------

class TestCleanLevel:
    def test_no_issues(self):
        level, graph = _two_room_level(
            enemies=[_enemy("enemy_1", "room_2", 12.1)],
            pickups=[_pickup("pickup_1", "room_1", 1.0)],
            props=[Prop(type=PropType.CRATE, x=14, y=-2, z=2, room_id="room_2")],
        )
        report = _validate(level, graph)
        assert report.is_valid
        assert report.issues == []
        assert report.fixed_issues == []
        assert len(level.enemies) == 1
        assert len(level.pickups) == 1
        assert len(level.props) == 1


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

class TestRooms:
    def test_overlapping_rooms_pushed_apart(self):
        level = Level(name="t", briefing="", rooms=[_room("room_1", 0), _room("room_2", 5)],
                      player_spawn=SpawnPoint(x=0, y=-1.9, z=-4))
        report = _validate(level, RoomGraph())
        assert not report.is_valid
        assert "Rooms room_1 and room_2 are overlapping" in report.issues
        assert level.rooms[1].x == pytest.approx(13.2)
        assert level.rooms[0].x == 0

    def test_push_along_z(self):
        rooms = [_room("room_1", 0), Room(id="room_2", x=1, y=0, z=6, width=12, depth=16, height=4)]
        level = Level(name="t", briefing="", rooms=rooms, player_spawn=SpawnPoint(x=0, y=0, z=0))
        _validate(level, RoomGraph())
        assert level.rooms[1].z == pytest.approx(17.6)
        assert level.rooms[1].x == 1

    def test_linked_door_survives_push(self):
        level, graph = _two_room_level(doors=[_door("door_1", 5.5)])
        level.rooms[1].x = 11
        report = _validate(level, graph)
        assert "Rooms room_1 and room_2 are overlapping" in report.issues
        assert level.rooms[1].x == pytest.approx(13.2)
        assert "Door door_1 is not inside the rooms it links" in report.issues
        assert [d.id for d in level.doors] == ["door_repair_room_2_room_1"]
        assert level.doors[0].x == pytest.approx(6.6)
        _assert_doors_join_their_rooms(level, graph)

        second = _validate(level, graph)
        assert second.is_valid, second.issues
        assert [d.id for d in level.doors] == ["door_repair_room_2_room_1"]


class TestDoors:
    def test_misplaced_door_removed_and_room_reconnected(self):
        level, graph = _two_room_level(doors=[_door("door_1", 40)])
        report = _validate(level, graph)
        assert "Door door_1 is not inside the rooms it links" in report.issues
        assert "Found 1 unreachable rooms" in report.issues
        assert [d.id for d in level.doors] == ["door_repair_room_2_room_1"]
        repair = level.doors[0]
        assert repair.x == pytest.approx(6.05)
        assert repair.type == DoorType.PROXIMITY
        assert graph.links_for_door("door_1") == []
        assert graph.has_link("room_1", "room_2")

    def test_unlinked_door_kept_when_inside_a_room(self):
        level, graph = _two_room_level(doors=[_door("door_1", 6.05), _door("door_x", 0)])
        report = _validate(level, graph)
        assert [d.id for d in level.doors] == ["door_1", "door_x"]
        assert report.is_valid

    def test_unlinked_door_outside_all_rooms_removed(self):
        level, graph = _two_room_level(doors=[_door("door_1", 6.05), _door("door_x", 80)])
        _validate(level, graph)
        assert [d.id for d in level.doors] == ["door_1"]


class TestConnectivity:
    def test_distant_room_gets_repair_door(self):
        level, graph = _two_room_level()
        level.rooms.append(_room("room_3", 100))
        report = _validate(level, graph)
        assert "Found 1 unreachable rooms" in report.issues
        repair = level.doors[-1]
        assert repair.id == "door_repair_room_3_room_2"
        assert repair.width == 1.5
        assert repair.proximity_radius == 2.0
        assert graph.reachable_from("room_1") == {"room_1", "room_2", "room_3"}

    def test_repair_door_bridges_wall_gap(self):
        level, graph = _two_room_level()
        level.rooms.append(_room("room_3", 26.1))
        report = _validate(level, graph)
        assert "Found 1 unreachable rooms" in report.issues
        repair = level.doors[-1]
        assert repair.id == "door_repair_room_3_room_2"
        assert repair.x == pytest.approx(19.1)
        _assert_doors_join_their_rooms(level, graph)

        second = _validate(level, graph)
        assert second.is_valid, second.issues
        assert len(level.doors) == 2

    def test_stacked_room_gets_gap_door(self):
        level, graph = _two_room_level()
        level.rooms.append(Room(id="room_3", x=12.1, y=0, z=17.1, width=12, depth=16, height=4))
        _validate(level, graph)
        assert level.doors[-1].id == "door_repair_room_3_room_2"
        assert (level.doors[-1].x, level.doors[-1].z) == pytest.approx((12.1, 8.55))
        _assert_doors_join_their_rooms(level, graph)
        assert _validate(level, graph).is_valid


# ---------------------------------------------------------------------------
# Spawns and props
# ---------------------------------------------------------------------------

class TestEnemies:
    def test_enemy_outside_repositioned(self):
        level, graph = _two_room_level(enemies=[_enemy("enemy_1", "room_2", 30)])
        report = _validate(level, graph)
        assert "Enemy enemy_1 is outside room bounds" in report.issues
        (enemy,) = level.enemies
        assert level.rooms[1].contains_point(enemy.x, enemy.z, 1.5)

    def test_enemy_in_tiny_room_removed(self):
        level, graph = _two_room_level(enemies=[_enemy("enemy_1", "room_3", 30)])
        level.rooms.append(Room(id="room_3", x=30, y=0, z=0, width=2, depth=2, height=4))
        report = _validate(level, graph)
        assert level.enemies == []
        assert "Removed enemy enemy_1 from invalid position" in report.fixed_issues

    def test_enemy_with_unknown_room_removed(self):
        level, graph = _two_room_level(enemies=[_enemy("enemy_1", "room_9", 0)])
        _validate(level, graph)
        assert level.enemies == []


class TestPickupsAndProps:
    def test_pickup_outside_repositioned(self):
        level, graph = _two_room_level(pickups=[_pickup("pickup_1", "room_1", 5.9)])
        report = _validate(level, graph)
        assert "Pickup pickup_1 (health) is outside room bounds" in report.issues
        (pickup,) = level.pickups
        assert level.rooms[0].contains_point(pickup.x, pickup.z, 0.5)

    def test_prop_without_room_removed(self):
        level, graph = _two_room_level(props=[Prop(type=PropType.BARREL, x=0, y=-2, z=0)])
        report = _validate(level, graph)
        assert level.props == []
        assert len(report.fixed_issues) == 1

    def test_prop_outside_room_removed(self):
        prop = Prop(type=PropType.BARREL, x=5.8, y=-2, z=0, room_id="room_1")
        level, graph = _two_room_level(props=[prop])
        _validate(level, graph)
        assert level.props == []


# ---------------------------------------------------------------------------
# Locks, objectives and spawn
# ---------------------------------------------------------------------------

class TestKeys:
    def _locked_level(self, pickups):
        return _two_room_level(
            doors=[_door("door_1", 6.05, DoorType.LOCKED, key_id="red")],
            graph=RoomGraph(links=[DoorLink("door_1", "room_1", "room_2", locked=True)]),
            pickups=pickups,
        )

    def test_reachable_key_keeps_lock(self):
        key = _pickup("pickup_1", "room_1", 0, PickupType.KEY, key_id="red")
        level, graph = self._locked_level([key])
        report = _validate(level, graph)
        assert report.is_valid
        assert level.doors[0].type == DoorType.LOCKED

    def test_missing_key_unlocks_door(self):
        level, graph = self._locked_level([])
        report = _validate(level, graph)
        assert "Locked door door_1 has no reachable key 'red'" in report.issues
        door = level.doors[0]
        assert door.type == DoorType.PROXIMITY
        assert door.key_id is None
        assert door.proximity_radius == 2.5
        assert graph.reachable_from("room_1", unlocked_only=True) == {"room_1", "room_2"}

    def test_key_behind_its_own_door_unlocks_door(self):
        key = _pickup("pickup_1", "room_2", 12.1, PickupType.KEY, key_id="red")
        level, graph = self._locked_level([key])
        _validate(level, graph)
        assert level.doors[0].type == DoorType.PROXIMITY


class TestObjectives:
    def test_objective_with_trigger_is_fine(self):
        trigger = Trigger(id="t1", x=0, y=0, z=0, half_width=1, half_depth=1, half_height=1,
                          on_enter="objective:complete:obj_1")
        level, graph = _two_room_level(
            objectives=[Objective(id="obj_1", title="Go", trigger_id="t1")],
            triggers=[trigger],
        )
        assert _validate(level, graph).is_valid

    def test_missing_trigger_synthesized(self):
        level, graph = _two_room_level(objectives=[Objective(id="obj_1", title="Kill")])
        report = _validate(level, graph)
        assert report.issues == ["Objective obj_1 has no associated trigger"]
        (trigger,) = level.triggers
        assert trigger.id == "trigger_obj_1"
        assert trigger.completes("obj_1")
        assert (trigger.half_width, trigger.half_depth, trigger.half_height) == (2.0, 2.0, 2.0)
        assert level.objectives[0].trigger_id == "trigger_obj_1"

    def test_second_pass_is_clean(self):
        level, graph = _two_room_level(objectives=[Objective(id="obj_1", title="Kill")])
        _validate(level, graph)
        assert _validate(level, graph).is_valid


class TestPlayerSpawn:
    def test_missing_spawn_set_in_first_room(self):
        level, graph = _two_room_level()
        level.player_spawn = None
        report = _validate(level, graph)
        assert "No player spawn point set" in report.issues
        spawn = level.player_spawn
        assert (spawn.x, spawn.y, spawn.z) == (0, pytest.approx(-1.9), -4)


def test_empty_level_is_left_alone():
    level = Level(name="t", briefing="")
    report = _validate(level, RoomGraph())
    assert report.issues == ["No player spawn point set"]
    assert level.player_spawn is None
