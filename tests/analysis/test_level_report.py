"""Tests for the text report generators."""

from mission_gen.analysis.metrics import compute_batch_metrics
from mission_gen.analysis.models import LevelMetrics
from mission_gen.analysis.report import generate_batch_report, generate_level_report
from mission_gen.generation.validator import ValidationReport


def _make_metrics(**overrides) -> LevelMetrics:
    defaults = dict(
        seed=42, name="Phantom Delta", difficulty="hard", room_count=8, door_count=9,
        loop_door_count=2, enemy_count=30,
        enemies_by_type={"guard": 6, "soldier": 15, "officer": 9},
        pickup_count=28, pickups_by_type={"health": 6, "key": 1}, prop_count=50,
        hotspot_count=9, objective_count=3, trigger_count=3, total_area=2400.0,
        enemy_density=1.25, reachable_rooms=8,
    )
    defaults.update(overrides)
    return LevelMetrics(**defaults)


class TestLevelReport:
    def test_contains_sections(self):
        report = generate_level_report(_make_metrics())
        assert "Level Report: Phantom Delta" in report
        assert "Seed: 42 | Difficulty: hard" in report
        for section in ("## Layout", "## Population", "## Mission"):
            assert section in report
        assert "9 (2 loops)" in report
        assert "8/8" in report
        assert "officer" in report

    def test_validation_section_optional(self):
        assert "## Validation" not in generate_level_report(_make_metrics())

    def test_validation_lines(self):
        validation = ValidationReport(
            is_valid=False,
            issues=["Objective obj_1 has no associated trigger"],
            fixed_issues=["Added trigger for objective obj_1 in room_3"],
        )
        report = generate_level_report(_make_metrics(), validation)
        assert "## Validation" in report
        assert "Clean: no" in report
        assert "! Objective obj_1 has no associated trigger" in report
        assert "+ Added trigger for objective obj_1 in room_3" in report


class TestBatchReport:
    def test_contains_sections(self):
        batch = compute_batch_metrics([_make_metrics(), _make_metrics(room_count=10)], "hard")
        report = generate_batch_report(batch)
        assert "Batch Report: hard" in report
        assert "Levels: 2 | Layout failures: 0" in report
        for section in ("## Per-Level Counts", "## Enemy Mix", "## Structure"):
            assert section in report
        assert "Rooms" in report
        assert "30.0%" in report  # officer share
