"""Spawn definitions for enemies and pickups."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class EnemyType(str, Enum):
    """Enemy tiers, in increasing order of toughness."""

    GUARD = "guard"
    SOLDIER = "soldier"
    OFFICER = "officer"


class PickupType(str, Enum):
    """Everything the player can walk over and collect."""

    WEAPON_PISTOL = "weapon-pistol"
    WEAPON_RIFLE = "weapon-rifle"
    WEAPON_SHOTGUN = "weapon-shotgun"
    AMMO_PISTOL = "ammo-pistol"
    AMMO_RIFLE = "ammo-rifle"
    AMMO_SHOTGUN = "ammo-shotgun"
    HEALTH = "health"
    ARMOR = "armor"
    KEY = "key"


class SpawnPoint(BaseModel):
    """Player spawn position and facing."""

    x: float
    y: float
    z: float
    facing_angle: float = 0.0
    """Radians; 0 looks along +Z."""


class Waypoint(BaseModel):
    """A patrol point on the floor of the enemy's room."""

    x: float
    z: float


class EnemySpawn(BaseModel):
    """A single enemy placed in a room."""

    id: str
    type: EnemyType
    x: float
    y: float
    z: float
    room_id: str
    """Room this enemy belongs to; its position stays inside that room."""

    facing_angle: float
    health: int
    speed: float
    alert_radius: float
    fov: float
    """Field of view in radians."""

    waypoints: list[Waypoint] | None = None
    """Patrol route, or ``None`` for a stationary enemy."""


class PickupSpawn(BaseModel):
    """A single pickup placed in a room."""

    id: str
    type: PickupType
    x: float
    y: float
    z: float
    amount: int = 1
    key_id: str | None = None
    """For key pickups: the key this pickup grants (e.g. 'red')."""

    room_id: str
