"""Weapons lying around as world props."""

from __future__ import annotations

from mission_gen.generation.props.base import PropConfig, PropPlacer
from mission_gen.schema.props import Prop, PropType
from mission_gen.schema.rooms import Room

WEAPONS_PER_ROOM = 1

_WEAPON_WEIGHTS: list[tuple[PropType, int]] = [
    (PropType.WEAPON_PISTOL, 5),
    (PropType.WEAPON_RIFLE, 3),
    (PropType.WEAPON_SHOTGUN, 2),
]


class WeaponPlacer(PropPlacer):
    """One weapon prop per room; weapons are indestructible and drop nothing."""

    def generate_for_room(self, room: Room, props: list[Prop]) -> None:
        for _ in range(WEAPONS_PER_ROOM):
            index = self.rng.weighted_index([w for _, w in _WEAPON_WEIGHTS])
            config = PropConfig(type=_WEAPON_WEIGHTS[index][0], health=0)
            self.place_single(room, config, props)
