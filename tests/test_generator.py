import random

import pytest

from delver.dungeon import ConnectivityStalled, DungeonBuilder, GeneratorConfig
from delver.dungeon.cells import Point
from delver.dungeon.entities import Exit, Monster, Player, StaticTile
from delver.dungeon.rooms import Room
from delver.dungeon.tiles import DOOR, FLOOR
from tests.dungeon_test_utils import rooms_reachable


def _room(x, y, w=8, h=6):
    return Room(Point(x, y), Point(x + w, y + h))


def test_nearest_skips_self_and_direct_connections():
    a, b, c = _room(0, 0), _room(12, 0), _room(40, 0)
    rooms = [a, b, c]
    assert DungeonBuilder.nearest(rooms, a) is b
    a.connected.append(b)
    b.connected.append(a)
    assert DungeonBuilder.nearest(rooms, a) is c


def test_nearest_breaks_ties_by_scan_order():
    center = _room(20, 20)
    left, right = _room(8, 20), _room(32, 20)
    assert DungeonBuilder.nearest([center, left, right], center) is left
    assert DungeonBuilder.nearest([center, right, left], center) is right


def test_nearest_returns_none_when_everything_is_joined():
    a, b = _room(0, 0), _room(12, 0)
    a.connected.append(b)
    b.connected.append(a)
    assert DungeonBuilder.nearest([a, b], a) is None


def test_generate_rejects_zero_rooms():
    builder = DungeonBuilder(GeneratorConfig(seed=1))
    with pytest.raises(ValueError):
        builder.generate(room_count=0)


def test_valid_point_requires_a_generated_layout():
    builder = DungeonBuilder(GeneratorConfig(seed=1))
    with pytest.raises(RuntimeError):
        builder.valid_point()


def test_single_room_needs_no_corridors():
    cfg = GeneratorConfig(width=40, height=20, room_count=1, seed=9)
    result = DungeonBuilder(cfg).generate()
    assert len(result.rooms) == 1
    assert result.corridors == [] and result.doors == []
    assert result.tracker.sets == 1
    assert result.player_room is result.rooms[0]
    assert result.player.point == result.rooms[0].center
    assert result.rooms[0].contains(result.exit.point)


def test_overflowing_corridors_stall_after_iteration_budget():
    cfg = GeneratorConfig(
        width=80, height=50, room_count=3, seed=4, max_corridor_steps=1, max_connect_iterations=50
    )
    builder = DungeonBuilder(cfg)
    with pytest.raises(ConnectivityStalled) as exc:
        builder.generate()
    assert exc.value.sets == 3
    assert builder.ctx.metrics["step_overflows"] == 50
    assert builder.ctx.metrics["connect_iterations"] == 50


@pytest.mark.parametrize("seed", [1, 7, 42, 1234, 99999])
def test_generation_connects_every_room(seed):
    cfg = GeneratorConfig(width=80, height=50, room_count=6, seed=seed)
    result = DungeonBuilder(cfg, random.Random(seed)).generate()
    rooms = result.rooms
    assert len(rooms) == 6
    assert result.tracker.sets == 1
    assert len(rooms_reachable(rooms[0])) == len(rooms)
    m = result.metrics
    assert m["set_merges"] == len(rooms) - 1
    outcomes = m["dead_ends"] + m["early_merges"] + m["wall_joins"] + m["path_joins"]
    assert outcomes == m["corridors_attempted"] - m["step_overflows"]
    assert m["doors_created"] == len(result.doors) == m["corridors_carved"] + m["wall_joins"]
    assert set(m["phase_ms"]) == {"place_rooms", "connect_rooms", "place_exit_and_player"}


@pytest.mark.parametrize("seed", [3, 5, 8])
def test_monsters_sit_on_room_floor_under_later_objects(seed):
    cfg = GeneratorConfig(width=80, height=50, room_count=5, seed=seed)
    result = DungeonBuilder(cfg).generate()
    assert len(result.monsters) == 5
    for room, monster in zip(result.rooms, result.monsters):
        assert room.contains(monster.point)
        assert result.grid.kind(monster.point) is FLOOR
        stack = result.map.objects_at(monster.point)
        # Floor tile first, monster right above it; corridors never touch floor.
        assert isinstance(stack[0], StaticTile) and stack[0].kind is FLOOR
        assert stack[1] is monster


@pytest.mark.parametrize("seed", [2024, 5150, 8])
def test_doors_mark_origin_exits_or_recorded_connections(seed):
    cfg = GeneratorConfig(width=80, height=50, room_count=7, seed=seed)
    result = DungeonBuilder(cfg).generate()
    assert result.doors
    for door in result.doors:
        assert result.grid.kind(door.point) is DOOR
        assert door.room in result.rooms
        assert door.corridor in result.corridors
        if door.reason == "exit":
            assert door.room is door.corridor.origin
        else:
            assert door.reason == "join"
            origin = door.corridor.origin
            # A walk that slips round a corner can run back into its own room.
            assert door.room is origin or door.room in origin.connected


def test_exit_and_player_are_placed_once():
    cfg = GeneratorConfig(width=80, height=50, room_count=5, seed=77)
    result = DungeonBuilder(cfg).generate()
    objects = list(result.map.objects())
    assert sum(isinstance(o, Exit) for o in objects) == 1
    assert sum(isinstance(o, Player) for o in objects) == 1
    assert sum(isinstance(o, Monster) for o in objects) == 5
    assert result.map.player is result.player
    assert any(r.contains(result.exit.point) for r in result.rooms)
