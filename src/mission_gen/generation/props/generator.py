"""Prop generation across all rooms of a level."""

from __future__ import annotations

import logging
from typing import Sequence

from mission_gen.generation.core.rng import LevelRNG
from mission_gen.generation.props.barrel import BarrelPlacer
from mission_gen.generation.props.base import Hotspot, PropPlacer
from mission_gen.generation.props.box import BoxPlacer
from mission_gen.generation.props.crate import CratePlacer
from mission_gen.generation.props.registry import OccupancyRegistry
from mission_gen.generation.props.stack import StackPlacer
from mission_gen.generation.props.weapon import WeaponPlacer
from mission_gen.schema.actors import SpawnPoint
from mission_gen.schema.doors import Door
from mission_gen.schema.props import Prop
from mission_gen.schema.rooms import Room

logger = logging.getLogger(__name__)

MIN_ROOM_SIZE = 5.0

# Keep the area around the player's start clear
PLAYER_SPAWN_RADIUS = 2.5


class PropGenerator:
    """Runs the five prop placers over every room with a shared registry."""

    def __init__(
        self,
        rng: LevelRNG,
        doors: Sequence[Door] = (),
        player_spawn: SpawnPoint | None = None,
    ) -> None:
        self.rng = rng
        self.doors = list(doors)
        self.player_spawn = player_spawn

    def generate_props(self, rooms: list[Room]) -> tuple[list[Prop], list[Hotspot]]:
        """Return ``(props, hotspots)`` for *rooms*."""
        registry = OccupancyRegistry()
        if self.player_spawn is not None:
            registry.add(self.player_spawn.x, self.player_spawn.z, PLAYER_SPAWN_RADIUS)

        props: list[Prop] = []
        hotspots: list[Hotspot] = []
        placers: list[PropPlacer] = [
            cls(self.rng, registry, self.doors, hotspots)
            for cls in (BoxPlacer, CratePlacer, BarrelPlacer, WeaponPlacer, StackPlacer)
        ]

        candidates = [r for r in rooms if r.width >= MIN_ROOM_SIZE and r.depth >= MIN_ROOM_SIZE]
        for room in candidates:
            for placer in placers:
                placer.generate_for_room(room, props)

        logger.info(
            "Placed %d props (%d hotspots) in %d/%d rooms",
            len(props), len(hotspots), len(candidates), len(rooms),
        )
        return props, hotspots
