"""Tests for objective and trigger generation."""

import pytest

from mission_gen.generation.core.ids import IdAllocator
from mission_gen.generation.core.rng import LevelRNG
from mission_gen.generation.doors import RoomGraph
from mission_gen.generation.objectives import (
    ELIMINATE_TITLE,
    EXIT_HALF_HEIGHT,
    EXIT_TITLE,
    INTEL_HALF_HEIGHT,
    INTEL_TITLE,
    ObjectiveGenerator,
)
from mission_gen.schema import MISSION_COMPLETE, Room


def _chain(count: int, step: float = 12.1) -> list[Room]:
    return [
        Room(id=f"room_{i + 1}", x=i * step, y=0, z=0, width=12, depth=16, height=4)
        for i in range(count)
    ]


def _generate(seed: int, rooms: list[Room]):
    return ObjectiveGenerator(LevelRNG(seed), IdAllocator()).generate_objectives(
        rooms, RoomGraph(),
    )


class TestSingleRoom:
    def test_eliminate_only(self):
        objectives, triggers = _generate(1, _chain(1))
        assert [o.title for o in objectives] == [ELIMINATE_TITLE]
        assert objectives[0].id == "obj_1"
        assert objectives[0].trigger_id is None
        assert triggers == []

    def test_no_rooms(self):
        assert _generate(1, []) == ([], [])


class TestSmallLevels:
    def test_three_rooms_skip_intel(self):
        objectives, triggers = _generate(2, _chain(3))
        assert [o.title for o in objectives] == [ELIMINATE_TITLE, EXIT_TITLE]
        (exit_trigger,) = triggers
        assert exit_trigger.id == "trigger_exit_1"
        assert exit_trigger.require_objectives == ["obj_1"]

    def test_exit_falls_back_to_any_other_room(self):
        # A two-room chain has no room two hops away
        objectives, triggers = _generate(2, _chain(2))
        assert len(objectives) == 2
        assert triggers[0].x == pytest.approx(12.1)


class TestFullObjectiveSet:
    @pytest.mark.parametrize("seed", range(10))
    def test_objectives_and_ids(self, seed):
        objectives, triggers = _generate(seed, _chain(5))
        assert [o.id for o in objectives] == ["obj_1", "obj_2", "obj_3"]
        assert [o.title for o in objectives] == [ELIMINATE_TITLE, INTEL_TITLE, EXIT_TITLE]
        assert [t.id for t in triggers] == ["trigger_intel_1", "trigger_exit_2"]
        assert objectives[1].trigger_id == "trigger_intel_1"
        assert objectives[2].trigger_id == "trigger_exit_2"

    @pytest.mark.parametrize("seed", range(10))
    def test_intel_room_is_distant(self, seed):
        rooms = _chain(5)
        _, triggers = _generate(seed, rooms)
        # Rooms 4 and 5 are at least three proximity hops from the start
        assert triggers[0].x in (rooms[3].x, rooms[4].x), f"seed={seed}"

    @pytest.mark.parametrize("seed", range(10))
    def test_exit_room_is_distant(self, seed):
        rooms = _chain(5)
        _, triggers = _generate(seed, rooms)
        assert triggers[1].x in (rooms[2].x, rooms[3].x, rooms[4].x), f"seed={seed}"

    def test_trigger_shapes(self):
        rooms = _chain(5)
        _, (intel, exit_trigger) = _generate(3, rooms)
        for trigger in (intel, exit_trigger):
            assert trigger.half_width == 5.0
            assert trigger.half_depth == 7.0
            assert trigger.once
        assert intel.half_height == INTEL_HALF_HEIGHT
        assert exit_trigger.half_height == EXIT_HALF_HEIGHT

    def test_exit_trigger_wiring(self):
        objectives, (intel, exit_trigger) = _generate(3, _chain(5))
        assert intel.on_enter == "objective:complete:obj_2"
        assert not intel.is_exit
        assert exit_trigger.on_enter == f"objective:complete:obj_3,{MISSION_COMPLETE}"
        assert exit_trigger.is_exit
        assert exit_trigger.require_objectives == ["obj_1", "obj_2"]
        assert exit_trigger.completes("obj_3")

    def test_far_apart_rooms_still_get_objectives(self):
        rooms = _chain(5, step=100)
        objectives, triggers = _generate(4, rooms)
        assert len(objectives) == 3
        assert all(t.x != rooms[0].x for t in triggers)
