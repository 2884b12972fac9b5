"""Tests for room geometry helpers."""

import pytest

from mission_gen.generation.core.geometry import (
    compute_door_geometry,
    door_in_room,
    door_in_wall_gap,
    door_links_rooms,
    room_distance,
    rooms_adjacent,
    rooms_overlap,
)
from mission_gen.schema import Door, DoorAxis, Room


def _room(room_id: str, x: float, z: float, width: float = 12, depth: float = 16) -> Room:
    return Room(id=room_id, x=x, y=0, z=z, width=width, depth=depth, height=4)


def _door(x: float, z: float) -> Door:
    return Door(id="door_1", x=x, y=0, z=z, axis=DoorAxis.X, width=2, height=3)


class TestRoomsOverlap:
    def test_same_position_overlaps(self):
        assert rooms_overlap(_room("a", 0, 0), _room("b", 0, 0))

    def test_partial_overlap(self):
        assert rooms_overlap(_room("a", 0, 0), _room("b", 5, 3))

    def test_spaced_rooms_do_not_overlap(self):
        assert not rooms_overlap(_room("a", 0, 0), _room("b", 12.1, 0), margin=0.05)

    def test_margin_extends_footprint(self):
        a, b = _room("a", 0, 0), _room("b", 12.04, 0)
        assert not rooms_overlap(a, b)
        assert rooms_overlap(a, b, margin=0.05)


class TestRoomsAdjacent:
    def test_side_by_side(self):
        assert rooms_adjacent(_room("a", 0, 0), _room("b", 12.1, 0))

    def test_stacked(self):
        assert rooms_adjacent(_room("a", 0, 0), _room("b", 0, 16.1))

    def test_too_far_apart(self):
        assert not rooms_adjacent(_room("a", 0, 0), _room("b", 13.0, 0))

    def test_diagonal_is_not_adjacent(self):
        assert not rooms_adjacent(_room("a", 0, 0), _room("b", 12.1, 16.1))


class TestComputeDoorGeometry:
    def test_side_by_side_door(self):
        geom = compute_door_geometry(_room("a", 0, 0), _room("b", 12.1, 0))
        assert geom is not None
        assert geom.axis == DoorAxis.X
        assert geom.x == pytest.approx(6.05)
        assert geom.z == pytest.approx(0.0)
        assert geom.width == 2.0

    def test_stacked_door(self):
        geom = compute_door_geometry(_room("a", 0, 0), _room("b", 0, 16.1))
        assert geom is not None
        assert geom.axis == DoorAxis.Z
        assert geom.x == pytest.approx(0.0)
        assert geom.z == pytest.approx(8.05)

    def test_order_of_rooms_does_not_matter(self):
        a, b = _room("a", 0, 0), _room("b", 0, 16.1)
        assert compute_door_geometry(a, b) == compute_door_geometry(b, a)

    def test_door_centred_in_shared_span(self):
        # Shared X span is [-2, 6]; shrunk by 1.5 each end -> [-0.5, 4.5]
        geom = compute_door_geometry(_room("a", 0, 0), _room("b", 4, 16.1, width=12))
        assert geom is not None
        assert geom.x == pytest.approx(2.0)

    def test_small_overlap_has_no_door(self):
        # Shared X span is only 2 units wide
        assert compute_door_geometry(_room("a", 0, 0), _room("b", 10, 16.1)) is None


class TestDoorInRoom:
    def test_door_in_wall_gap_counts_for_both_rooms(self):
        a, b = _room("a", 0, 0), _room("b", 12.1, 0)
        door = _door(6.05, 0)
        assert door_in_room(door, a)
        assert door_in_room(door, b)

    def test_door_far_outside(self):
        assert not door_in_room(_door(7.0, 0), _room("a", 0, 0))


class TestDoorInWallGap:
    def test_door_between_pushed_rooms(self):
        # Walls at x=6 and x=7.2 leave a gap wider than the wall tolerance
        a, b = _room("a", 0, 0), _room("b", 13.2, 0)
        door = _door(6.6, 0)
        assert not door_in_room(door, a)
        assert not door_in_room(door, b)
        assert door_in_wall_gap(door, a, b)
        assert door_links_rooms(door, a, b)

    def test_stacked_gap(self):
        a, b = _room("a", 0, 0), _room("b", 1, 17.6)
        assert door_in_wall_gap(_door(0.5, 8.8), a, b)
        assert door_in_wall_gap(_door(0.5, 8.8), b, a)

    def test_door_outside_shared_span(self):
        a, b = _room("a", 0, 0), _room("b", 13.2, 0)
        assert not door_in_wall_gap(_door(6.6, 9), a, b)

    def test_door_inside_one_room_only(self):
        a, b = _room("a", 0, 0), _room("b", 13.2, 0)
        assert not door_in_wall_gap(_door(5.5, 0), a, b)
        assert not door_links_rooms(_door(5.5, 0), a, b)

    def test_gap_too_wide(self):
        a, b = _room("a", 0, 0), _room("b", 100, 0)
        assert not door_in_wall_gap(_door(50, 0), a, b)

    def test_diagonal_rooms_have_no_gap(self):
        a, b = _room("a", 0, 0), _room("b", 13, 17)
        assert not door_in_wall_gap(_door(6.5, 8.5), a, b)


def test_room_distance():
    assert room_distance(_room("a", 0, 0), _room("b", 3, 4)) == pytest.approx(5.0)
