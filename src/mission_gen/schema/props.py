"""Prop definitions -- crates, barrels and loose weapons."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class PropType(str, Enum):
    CRATE = "crate"
    CRATE_WOOD = "crate_wood"
    CRATE_METAL = "crate_metal"
    BARREL = "barrel"
    BARREL_EXPLOSIVE = "barrel_explosive"
    WEAPON_PISTOL = "weapon_pistol"
    WEAPON_RIFLE = "weapon_rifle"
    WEAPON_SHOTGUN = "weapon_shotgun"


class PropLoot(BaseModel):
    """What a destructible prop drops when broken."""

    type: str
    """Resource name ('ammo-pistol', 'health', 'weapon', ...)."""

    amount: int


class Prop(BaseModel):
    """A single prop instance. Stacked props share x/z and differ in y."""

    type: PropType
    x: float
    y: float
    z: float
    scale: float = 1.0
    rot_y: float = 0.0
    health: int = 100
    loot: PropLoot | None = None
    room_id: str | None = None
    """Room the prop was placed in."""
