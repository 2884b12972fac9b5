"""Tests for level and batch metric computation."""

import pytest

from mission_gen.analysis.metrics import (
    compute_batch_metrics,
    compute_level_metrics,
    count_loop_doors,
    summarize,
)
from mission_gen.analysis.models import LevelMetrics
from mission_gen.config import GenerationOptions
from mission_gen.generation.doors import DoorLink, RoomGraph
from mission_gen.generation.pipeline import LevelGenerator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_metrics(**overrides) -> LevelMetrics:
    defaults = dict(
        seed=1, name="Ghost Site", difficulty="medium", room_count=6, door_count=6,
        loop_door_count=1, enemy_count=20,
        enemies_by_type={"guard": 8, "soldier": 10, "officer": 2},
        pickup_count=25, pickups_by_type={"health": 5}, prop_count=40,
        objective_count=3, trigger_count=3, total_area=1500.0, enemy_density=1.33,
        reachable_rooms=6, issues=1, fixed_issues=1,
    )
    defaults.update(overrides)
    return LevelMetrics(**defaults)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestCountLoopDoors:
    def test_counts_links_off_main_path(self):
        graph = RoomGraph(
            links=[DoorLink("d1", "a", "b"), DoorLink("d2", "c", "b"), DoorLink("d3", "a", "c")],
            main_path_edges=[("a", "b"), ("b", "c")],
        )
        assert count_loop_doors(graph) == 1

    def test_empty_graph(self):
        assert count_loop_doors(RoomGraph()) == 0


class TestSummarize:
    def test_values(self):
        s = summarize([1, 2, 3, 4])
        assert s.mean == pytest.approx(2.5)
        assert s.std == pytest.approx(1.118, abs=1e-3)
        assert (s.min, s.median, s.max) == (1, 2.5, 4)

    def test_empty(self):
        s = summarize([])
        assert (s.mean, s.std, s.min, s.median, s.max) == (0, 0, 0, 0, 0)


class TestLevelMetrics:
    def test_from_generated_level(self):
        result = LevelGenerator(7).run(GenerationOptions(seed=7))
        m = compute_level_metrics(result, "medium", seed=7)
        level = result.level

        assert m.seed == 7
        assert m.name == level.name
        assert m.room_count == len(level.rooms)
        assert m.door_count == len(level.doors)
        assert m.enemy_count == len(level.enemies)
        assert sum(m.enemies_by_type.values()) == m.enemy_count
        assert sum(m.pickups_by_type.values()) == m.pickup_count
        assert m.reachable_rooms == m.room_count
        assert m.loop_door_count == m.door_count - (m.room_count - 1)
        assert m.total_area == pytest.approx(sum(r.area for r in level.rooms))
        assert m.enemy_density == pytest.approx(m.enemy_count / m.total_area * 100)
        assert m.issues == len(result.report.issues)


class TestBatchMetrics:
    def test_aggregates(self):
        levels = [
            _make_metrics(room_count=6, fixed_issues=0),
            _make_metrics(room_count=8, reachable_rooms=7,
                          enemies_by_type={"guard": 10, "soldier": 10}),
        ]
        batch = compute_batch_metrics(levels, "medium", failures=1)

        assert batch.num_levels == 2
        assert batch.failures == 1
        assert batch.rooms.mean == pytest.approx(7.0)
        assert batch.clean_rate == pytest.approx(0.5)
        assert batch.fully_connected_rate == pytest.approx(0.5)
        assert batch.enemy_type_share["guard"] == pytest.approx(18 / 40)
        assert batch.enemy_type_share["officer"] == pytest.approx(2 / 40)
        assert sum(batch.enemy_type_share.values()) == pytest.approx(1.0)

    def test_empty_batch(self):
        batch = compute_batch_metrics([], "hard", failures=3)
        assert batch.num_levels == 0
        assert batch.clean_rate == 0.0
        assert batch.enemy_type_share == {"guard": 0.0, "soldier": 0.0, "officer": 0.0}
