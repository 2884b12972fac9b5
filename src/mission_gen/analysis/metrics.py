"""Pure metric computation for generated levels.

No side effects, no I/O.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence

import numpy as np

from mission_gen.analysis.models import BatchMetrics, LevelMetrics, StatSummary
from mission_gen.generation.doors import RoomGraph
from mission_gen.generation.pipeline import GenerationResult
from mission_gen.schema.actors import EnemyType


def count_loop_doors(graph: RoomGraph) -> int:
    """Number of door links that do not lie on the main path."""
    main_path = {frozenset(edge) for edge in graph.main_path_edges}
    return sum(
        1 for link in graph.links
        if frozenset((link.room_a, link.room_b)) not in main_path
    )


def compute_level_metrics(
    result: GenerationResult,
    difficulty: str,
    seed: int | None = None,
) -> LevelMetrics:
    level = result.level
    total_area = sum(r.area for r in level.rooms)
    reachable = (
        len(result.graph.reachable_from(level.rooms[0].id)) if level.rooms else 0
    )

    return LevelMetrics(
        seed=seed,
        name=level.name,
        difficulty=difficulty,
        room_count=len(level.rooms),
        door_count=len(level.doors),
        loop_door_count=count_loop_doors(result.graph),
        enemy_count=len(level.enemies),
        enemies_by_type=dict(Counter(e.type.value for e in level.enemies)),
        pickup_count=len(level.pickups),
        pickups_by_type=dict(Counter(p.type.value for p in level.pickups)),
        prop_count=len(level.props),
        hotspot_count=len(result.hotspots),
        objective_count=len(level.objectives),
        trigger_count=len(level.triggers),
        total_area=total_area,
        enemy_density=len(level.enemies) / total_area * 100 if total_area else 0.0,
        reachable_rooms=reachable,
        issues=len(result.report.issues),
        fixed_issues=len(result.report.fixed_issues),
    )


def summarize(values: Sequence[float]) -> StatSummary:
    """Mean/std/min/median/max of *values* (all zero for an empty batch)."""
    if len(values) == 0:
        return StatSummary(mean=0.0, std=0.0, min=0.0, median=0.0, max=0.0)
    arr = np.asarray(values, dtype=float)
    return StatSummary(
        mean=float(arr.mean()),
        std=float(arr.std()),
        min=float(arr.min()),
        median=float(np.median(arr)),
        max=float(arr.max()),
    )


def compute_batch_metrics(
    levels: list[LevelMetrics],
    difficulty: str,
    failures: int = 0,
) -> BatchMetrics:
    total = len(levels)

    type_counts: Counter[str] = Counter()
    for m in levels:
        type_counts.update(m.enemies_by_type)
    total_enemies = sum(type_counts.values())
    share = {
        t.value: (type_counts[t.value] / total_enemies if total_enemies else 0.0)
        for t in EnemyType
    }

    return BatchMetrics(
        num_levels=total,
        failures=failures,
        difficulty=difficulty,
        rooms=summarize([m.room_count for m in levels]),
        doors=summarize([m.door_count for m in levels]),
        loop_doors=summarize([m.loop_door_count for m in levels]),
        enemies=summarize([m.enemy_count for m in levels]),
        pickups=summarize([m.pickup_count for m in levels]),
        props=summarize([m.prop_count for m in levels]),
        enemy_type_share=share,
        clean_rate=(
            sum(1 for m in levels if m.fixed_issues == 0) / total if total else 0.0
        ),
        fully_connected_rate=(
            sum(1 for m in levels if m.reachable_rooms == m.room_count) / total
            if total else 0.0
        ),
    )
