"""Pydantic v2 models for generated-level statistics.

Per-level metrics are computed from one pipeline run; batch metrics
aggregate many seeds.  All are serializable to/from JSON.
"""

from __future__ import annotations

from pydantic import BaseModel


class LevelMetrics(BaseModel):
    """Counts and ratios for a single generated level."""

    seed: int | None = None
    name: str
    difficulty: str
    room_count: int
    door_count: int
    loop_door_count: int
    """Doors that are not on the main path (includes validator repairs)."""
    enemy_count: int
    enemies_by_type: dict[str, int]
    pickup_count: int
    pickups_by_type: dict[str, int]
    prop_count: int
    hotspot_count: int = 0
    objective_count: int
    trigger_count: int
    total_area: float
    enemy_density: float
    """Enemies per 100 square units of floor."""
    reachable_rooms: int
    """Rooms reachable from the spawn room over the door graph."""
    issues: int = 0
    """Problems the validator found."""
    fixed_issues: int = 0


class StatSummary(BaseModel):
    """Distribution summary of one metric across a batch."""

    mean: float
    std: float
    min: float
    median: float
    max: float


class BatchMetrics(BaseModel):
    """Aggregate statistics over many generated levels."""

    num_levels: int
    failures: int = 0
    """Seeds whose room layout could not be satisfied."""
    difficulty: str
    rooms: StatSummary
    doors: StatSummary
    loop_doors: StatSummary
    enemies: StatSummary
    pickups: StatSummary
    props: StatSummary
    enemy_type_share: dict[str, float]
    """Fraction of all enemies of each type."""
    clean_rate: float
    """Fraction of levels that needed no validator repairs."""
    fully_connected_rate: float
    """Fraction of levels whose door graph reaches every room."""
