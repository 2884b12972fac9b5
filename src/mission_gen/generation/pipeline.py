"""End-to-end level generation.

:class:`LevelGenerator` wires the individual generators together around one
shared :class:`LevelRNG`.  Because every generator draws from that stream in
a fixed order, a level is fully determined by its seed and options.

Usage::

    from mission_gen.generation.pipeline import generate_level

    level = generate_level(seed=1, min_rooms=6, max_rooms=6)
    print(level.model_dump_json(indent=2))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mission_gen.config import GenerationOptions
from mission_gen.generation.briefing import generate_briefing, generate_level_name
from mission_gen.generation.core.ids import IdAllocator
from mission_gen.generation.core.rng import LevelRNG
from mission_gen.generation.doors import DoorGenerator, RoomGraph
from mission_gen.generation.enemies import EnemyGenerator
from mission_gen.generation.objectives import ObjectiveGenerator
from mission_gen.generation.pickups import PickupGenerator
from mission_gen.generation.props import Hotspot, PropGenerator
from mission_gen.generation.rooms import RoomGenerator
from mission_gen.generation.validator import LevelValidator, ValidationReport
from mission_gen.schema.actors import SpawnPoint
from mission_gen.schema.level import Level
from mission_gen.schema.rooms import Room

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """A generated level plus the intermediate artefacts that produced it."""

    level: Level
    graph: RoomGraph
    report: ValidationReport
    hotspots: list[Hotspot] = field(default_factory=list)


def player_spawn_for(room: Room) -> SpawnPoint:
    """Spawn at the room's X centre, a quarter of its depth toward -Z."""
    return SpawnPoint(
        x=room.x,
        y=room.floor_y + 0.1,
        z=room.z - room.depth / 4,
        facing_angle=0.0,
    )


class LevelGenerator:
    """Runs the full generation pipeline on one RNG stream.

    Each call to :meth:`run` continues the same stream, so two calls on one
    instance give different levels.  Create a fresh generator (or use
    :func:`generate_level`) to reproduce a level from its seed.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.rng = LevelRNG(seed)

    def run(self, options: GenerationOptions | None = None) -> GenerationResult:
        """Generate, validate and return a level with its graph and report.

        Raises
        ------
        RoomLayoutError
            If the room layout cannot be satisfied.
        """
        options = options or GenerationOptions()
        ids = IdAllocator()

        room_count = self.rng.random_int(options.min_rooms, options.max_rooms)
        logger.info(
            "Generating %s level with %d rooms (seed=%s)",
            options.difficulty.value, room_count, self.rng.seed,
        )

        rooms, main_path = RoomGenerator(self.rng, ids).generate_rooms(room_count)
        doors, graph = DoorGenerator(self.rng, ids).generate_doors(rooms, main_path, options)
        enemies = EnemyGenerator(self.rng, ids).generate_enemies(rooms, options)

        player_spawn = player_spawn_for(rooms[0])

        props, hotspots = PropGenerator(self.rng, doors, player_spawn).generate_props(rooms)
        pickups = PickupGenerator(self.rng, ids).generate_pickups(rooms, doors, graph, options)
        objectives, triggers = ObjectiveGenerator(self.rng, ids).generate_objectives(rooms, graph)

        level = Level(
            name=generate_level_name(self.rng),
            briefing=generate_briefing(self.rng),
            rooms=rooms,
            doors=doors,
            player_spawn=player_spawn,
            enemies=enemies,
            pickups=pickups,
            objectives=objectives,
            triggers=triggers,
            props=props,
        )

        report = LevelValidator(self.rng).validate_and_repair(level, graph)
        logger.info(
            "Generated %r: %d rooms, %d doors, %d enemies, %d pickups, %d props",
            level.name, len(level.rooms), len(level.doors), len(level.enemies),
            len(level.pickups), len(level.props),
        )
        return GenerationResult(level=level, graph=graph, report=report, hotspots=hotspots)

    def generate(self, options: GenerationOptions | None = None) -> Level:
        return self.run(options).level


def generate_level(options: GenerationOptions | None = None, **overrides) -> Level:
    """Generate a level from *options* (with keyword *overrides*) on a fresh RNG.

    Overrides are validated like the options themselves, e.g.
    ``generate_level(seed=7, difficulty="hard")``.
    """
    base = options or GenerationOptions()
    if overrides:
        base = GenerationOptions(**{**base.model_dump(), **overrides})
    return LevelGenerator(base.seed).generate(base)
