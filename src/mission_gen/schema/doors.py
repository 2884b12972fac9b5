"""Door definitions -- openings cut into the shared wall of two rooms."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DoorAxis(str, Enum):
    """The horizontal axis a door is walked through along."""

    X = "x"
    Z = "z"


class DoorType(str, Enum):
    """How a door decides to open."""

    PROXIMITY = "proximity"
    """Opens automatically when the player is within ``proximity_radius``."""

    LOCKED = "locked"
    """Opens only once the player holds the key named by ``key_id``."""


class Door(BaseModel):
    """A single door between two rooms."""

    id: str
    """Unique identifier (e.g. 'door_4')."""

    x: float
    y: float
    z: float
    """Centre of the door opening."""

    axis: DoorAxis
    width: float
    """Horizontal size of the opening."""

    height: float
    """Vertical size of the opening."""

    type: DoorType = DoorType.PROXIMITY

    key_id: str | None = None
    """Key required to open a locked door (e.g. 'red')."""

    proximity_radius: float | None = None
    """Auto-open radius for proximity doors."""

    require_objectives: list[str] | None = None
    """Objective ids that must be complete before this door may ever open."""
