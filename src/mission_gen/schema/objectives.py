"""Mission objectives and the trigger volumes that complete them."""

from __future__ import annotations

from pydantic import BaseModel

OBJECTIVE_COMPLETE_PREFIX = "objective:complete:"
MISSION_COMPLETE = "mission:complete"


def complete_objective_effect(objective_id: str) -> str:
    """Return the ``on_enter`` effect token that completes *objective_id*."""
    return f"{OBJECTIVE_COMPLETE_PREFIX}{objective_id}"


class Objective(BaseModel):
    """A mission objective shown to the player."""

    id: str
    title: str
    trigger_id: str | None = None
    """Trigger that completes this objective, if any.

    Objectives without a trigger are completed by the host game (e.g.
    "eliminate all hostiles" by kill tracking).
    """


class Trigger(BaseModel):
    """An axis-aligned box volume that fires effects when entered."""

    id: str
    x: float
    y: float
    z: float
    """Box centre."""

    half_width: float
    half_depth: float
    half_height: float

    on_enter: str
    """Comma-separated effects, e.g. ``'objective:complete:obj_3,mission:complete'``."""

    once: bool = True
    """Fire only the first time the volume is entered."""

    require_objectives: list[str] | None = None
    """Objective ids that must be complete before this trigger is active."""

    is_exit: bool = False

    @property
    def effects(self) -> list[str]:
        """The individual effect tokens of ``on_enter``."""
        return [e.strip() for e in self.on_enter.split(",") if e.strip()]

    def completes(self, objective_id: str) -> bool:
        """Return True if entering this trigger completes *objective_id*."""
        return complete_objective_effect(objective_id) in self.effects
