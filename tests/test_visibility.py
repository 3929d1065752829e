import pytest

from delver.dungeon import Dungeon
from delver.dungeon.cells import Point
from delver.dungeon.grid import Grid
from delver.dungeon.tiles import FLOOR
from delver.dungeon.visibility import VisibilityIndex, combine, dedupe


def test_combine_keeps_duplicates_and_order():
    a = [Point(1, 1), Point(2, 2)]
    b = [Point(2, 2), Point(3, 3)]
    merged = combine(a, b)
    assert merged == [Point(1, 1), Point(2, 2), Point(2, 2), Point(3, 3)]
    assert a == [Point(1, 1), Point(2, 2)]
    assert dedupe(merged) == [Point(1, 1), Point(2, 2), Point(3, 3)]


def test_stray_points_reports_undug_cells():
    grid = Grid(5, 5)
    grid.set(Point(1, 1), FLOOR)

    class FakeRoom:
        visible = [Point(1, 1), Point(2, 2), Point(1, 1)]

    index = VisibilityIndex()
    index.register_room(FakeRoom)
    assert index.stray_points(grid) == [(FakeRoom, Point(2, 2))]
    assert len(index) == 3
    assert index.points_for(FakeRoom) == FakeRoom.visible
    assert index.points_for(FakeRoom) is not FakeRoom.visible
    assert index.unique_points(FakeRoom) == [Point(1, 1), Point(2, 2)]


@pytest.mark.parametrize("seed", [11, 22, 33, 44, 55, 66])
def test_generated_visibility_never_points_at_empty_tiles(seed):
    d = Dungeon(seed=seed, size=(70, 45))
    assert d.visibility.stray_points(d.grid) == []
    for door in d.doors:
        for p in door.visible:
            assert d.grid.in_bounds(p)


@pytest.mark.parametrize("seed", [5, 64, 2718])
def test_player_room_is_revealed_on_the_map(seed):
    d = Dungeon(seed=seed, size=(70, 45))
    revealed = d.map.visible_points
    assert set(d.player_room.visible) == revealed
    assert d.map.is_visible(d.player.point)
