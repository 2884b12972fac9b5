"""Text reports for generated levels and batches."""

from __future__ import annotations

from mission_gen.analysis.models import BatchMetrics, LevelMetrics, StatSummary
from mission_gen.generation.validator import ValidationReport


def generate_level_report(
    metrics: LevelMetrics,
    validation: ValidationReport | None = None,
) -> str:
    """Human-readable summary of one level."""
    m = metrics
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(f"Level Report: {m.name}")
    lines.append(f"Seed: {m.seed} | Difficulty: {m.difficulty}")
    lines.append("=" * 60)

    lines.append("")
    lines.append("## Layout")
    lines.append(f"  Rooms:       {m.room_count} ({m.total_area:.0f} sq units)")
    lines.append(f"  Doors:       {m.door_count} ({m.loop_door_count} loops)")
    lines.append(f"  Reachable:   {m.reachable_rooms}/{m.room_count}")

    lines.append("")
    lines.append("## Population")
    lines.append(f"  Enemies:     {m.enemy_count} ({m.enemy_density:.2f} per 100 sq units)")
    for enemy_type, count in sorted(m.enemies_by_type.items()):
        lines.append(f"    {enemy_type:16s} {count}")
    lines.append(f"  Pickups:     {m.pickup_count}")
    for pickup_type, count in sorted(m.pickups_by_type.items()):
        lines.append(f"    {pickup_type:16s} {count}")
    lines.append(f"  Props:       {m.prop_count} ({m.hotspot_count} hotspots)")

    lines.append("")
    lines.append("## Mission")
    lines.append(f"  Objectives:  {m.objective_count}")
    lines.append(f"  Triggers:    {m.trigger_count}")

    if validation is not None:
        lines.append("")
        lines.append("## Validation")
        lines.append(f"  Clean: {'yes' if validation.is_valid else 'no'}")
        for issue in validation.issues:
            lines.append(f"  ! {issue}")
        for fix in validation.fixed_issues:
            lines.append(f"  + {fix}")

    lines.append("")
    return "\n".join(lines)


def _stat_line(label: str, s: StatSummary) -> str:
    return (
        f"  {label:12s} mean={s.mean:6.1f}  std={s.std:5.1f}"
        f"  min={s.min:4.0f}  median={s.median:5.1f}  max={s.max:4.0f}"
    )


def generate_batch_report(batch: BatchMetrics) -> str:
    """Human-readable summary of a batch of levels."""
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(f"Batch Report: {batch.difficulty}")
    lines.append(f"Levels: {batch.num_levels:,} | Layout failures: {batch.failures}")
    lines.append("=" * 60)

    lines.append("")
    lines.append("## Per-Level Counts")
    lines.append(_stat_line("Rooms", batch.rooms))
    lines.append(_stat_line("Doors", batch.doors))
    lines.append(_stat_line("Loop doors", batch.loop_doors))
    lines.append(_stat_line("Enemies", batch.enemies))
    lines.append(_stat_line("Pickups", batch.pickups))
    lines.append(_stat_line("Props", batch.props))

    lines.append("")
    lines.append("## Enemy Mix")
    for enemy_type, share in batch.enemy_type_share.items():
        lines.append(f"  {enemy_type:12s} {share:.1%}")

    lines.append("")
    lines.append("## Structure")
    lines.append(f"  Needed no repairs: {batch.clean_rate:.1%}")
    lines.append(f"  Fully connected:   {batch.fully_connected_rate:.1%}")

    lines.append("")
    return "\n".join(lines)
