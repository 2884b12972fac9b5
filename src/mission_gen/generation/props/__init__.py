"""Prop generation: a shared occupancy registry and five prop placers."""

from mission_gen.generation.props.barrel import BarrelPlacer
from mission_gen.generation.props.base import (
    Hotspot,
    LootEntry,
    PropConfig,
    PropPlacer,
)
from mission_gen.generation.props.box import BoxPlacer
from mission_gen.generation.props.crate import CratePlacer
from mission_gen.generation.props.generator import PropGenerator
from mission_gen.generation.props.registry import Circle, OccupancyRegistry
from mission_gen.generation.props.stack import StackPlacer
from mission_gen.generation.props.weapon import WeaponPlacer

__all__ = [
    "BarrelPlacer",
    "BoxPlacer",
    "Circle",
    "CratePlacer",
    "Hotspot",
    "LootEntry",
    "OccupancyRegistry",
    "PropConfig",
    "PropGenerator",
    "PropPlacer",
    "StackPlacer",
    "WeaponPlacer",
]
