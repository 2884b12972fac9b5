"""Mission objectives and their trigger volumes.

Room distance here is measured over :func:`proximity_neighbors` (rooms with
nearby centres), not over the door graph.
"""

from __future__ import annotations

import logging

from mission_gen.generation.core.connectivity import proximity_distances, proximity_neighbors
from mission_gen.generation.core.ids import IdAllocator
from mission_gen.generation.core.rng import LevelRNG
from mission_gen.generation.doors import RoomGraph
from mission_gen.schema.objectives import (
    MISSION_COMPLETE,
    Objective,
    Trigger,
    complete_objective_effect,
)
from mission_gen.schema.rooms import Room

logger = logging.getLogger(__name__)

ELIMINATE_TITLE = "Eliminate all hostiles"
INTEL_TITLE = "Retrieve classified intelligence"
EXIT_TITLE = "Escape through the exit"

# Intel only appears in levels with more than this many rooms
INTEL_MIN_ROOMS = 3
INTEL_MIN_DISTANCE = 3
EXIT_MIN_DISTANCE = 2

# Rooms with at most this many nearby rooms count as edge rooms
EDGE_ROOM_MAX_NEIGHBORS = 2

# Trigger boxes cover the room minus this inset on every side
TRIGGER_INSET = 1.0
INTEL_HALF_HEIGHT = 2.0
EXIT_HALF_HEIGHT = 2.5


class ObjectiveGenerator:
    """Builds the objective list and the triggers that complete them."""

    def __init__(self, rng: LevelRNG, ids: IdAllocator) -> None:
        self.rng = rng
        self.ids = ids

    def generate_objectives(
        self,
        rooms: list[Room],
        graph: RoomGraph,
    ) -> tuple[list[Objective], list[Trigger]]:
        objectives: list[Objective] = []
        triggers: list[Trigger] = []
        if not rooms:
            return objectives, triggers

        start = rooms[0]
        trigger_count = 0

        # Completed by the host game's kill tracking
        objectives.append(Objective(id=self.ids.next("obj"), title=ELIMINATE_TITLE))

        if len(rooms) > INTEL_MIN_ROOMS:
            intel_room = self._find_distant_room(start, rooms, INTEL_MIN_DISTANCE)
            if intel_room is None:
                logger.warning("No room found for the intel objective")
            else:
                trigger_count += 1
                objective = Objective(
                    id=self.ids.next("obj"),
                    title=INTEL_TITLE,
                    trigger_id=f"trigger_intel_{trigger_count}",
                )
                triggers.append(self._room_trigger(
                    objective.trigger_id, intel_room,
                    on_enter=complete_objective_effect(objective.id),
                    half_height=INTEL_HALF_HEIGHT,
                ))
                objectives.append(objective)

        exit_room = self._find_distant_room(start, rooms, EXIT_MIN_DISTANCE, prefer_edge=True)
        if exit_room is None:
            logger.info("Single-room level, no exit objective")
        else:
            trigger_count += 1
            objective = Objective(
                id=self.ids.next("obj"),
                title=EXIT_TITLE,
                trigger_id=f"trigger_exit_{trigger_count}",
            )
            trigger = self._room_trigger(
                objective.trigger_id, exit_room,
                on_enter=f"{complete_objective_effect(objective.id)},{MISSION_COMPLETE}",
                half_height=EXIT_HALF_HEIGHT,
                require_objectives=[o.id for o in objectives],
                is_exit=True,
            )
            triggers.append(trigger)
            objectives.append(objective)

        logger.info("Created %d objectives, %d triggers", len(objectives), len(triggers))
        return objectives, triggers

    def _find_distant_room(
        self,
        start: Room,
        rooms: list[Room],
        min_distance: int,
        prefer_edge: bool = False,
    ) -> Room | None:
        """Pick a room at least *min_distance* proximity hops from *start*.

        Falls back to any non-start room; ``None`` only for a single room.
        """
        by_id = {r.id: r for r in rooms}
        candidates = []
        for room_id, distance in proximity_distances(start, rooms).items():
            if distance < min_distance:
                continue
            room = by_id[room_id]
            if prefer_edge and len(proximity_neighbors(room, rooms)) > EDGE_ROOM_MAX_NEIGHBORS:
                continue
            candidates.append(room)

        if candidates:
            return self.rng.random_choice(candidates)
        others = [r for r in rooms if r.id != start.id]
        if others:
            return self.rng.random_choice(others)
        return None

    @staticmethod
    def _room_trigger(
        trigger_id: str,
        room: Room,
        *,
        on_enter: str,
        half_height: float,
        require_objectives: list[str] | None = None,
        is_exit: bool = False,
    ) -> Trigger:
        return Trigger(
            id=trigger_id,
            x=room.x,
            y=room.y,
            z=room.z,
            half_width=room.width / 2 - TRIGGER_INSET,
            half_depth=room.depth / 2 - TRIGGER_INSET,
            half_height=half_height,
            on_enter=on_enter,
            once=True,
            require_objectives=require_objectives,
            is_exit=is_exit,
        )
