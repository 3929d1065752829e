import json

import pytest

from delver.dungeon import Dungeon, GeneratorConfig, NoSpaceForRoom, derive_seed
from delver.dungeon import dungeon as dungeon_mod
from delver.dungeon.errors import ConnectivityStalled
from tests.dungeon_test_utils import DOOR, WALKABLE, iter_tiles


def test_same_seed_same_layout():
    runs = [Dungeon(seed=314159, size=(70, 45)) for _ in range(3)]
    grids = {tuple(d.grid.rows()) for d in runs}
    assert len(grids) == 1
    assert len({tuple(d.player.point) for d in runs}) == 1
    assert len({tuple(d.exit.point) for d in runs}) == 1
    assert len({tuple((door.point, door.reason) for door in d.doors) for d in runs}) == 1


def test_different_seeds_usually_differ():
    layouts = {tuple(Dungeon(seed=s, size=(70, 45)).grid.rows()) for s in (1, 2, 3)}
    assert len(layouts) > 1


def test_derived_seeds_are_deterministic():
    assert derive_seed(42, 0) == 42
    assert derive_seed(42, 1) == derive_seed(42, 1)
    assert derive_seed(42, 1) != derive_seed(42, 2)
    assert 0 <= derive_seed(2**40, 3) < 2**31


def test_retries_after_a_failed_attempt(monkeypatch):
    calls = []
    real_generate = dungeon_mod.DungeonBuilder.generate

    def flaky_generate(self, room_count=None):
        calls.append(1)
        if len(calls) == 1:
            raise ConnectivityStalled(2, "forced")
        return real_generate(self, room_count)

    monkeypatch.setattr(dungeon_mod.DungeonBuilder, "generate", flaky_generate)
    d = Dungeon(seed=10, size=(70, 45))
    assert d.attempts == 2
    assert len(calls) == 2
    assert d.tracker.sets == 1


def test_rooms_that_cannot_fit_raise_after_all_attempts():
    with pytest.raises(NoSpaceForRoom):
        Dungeon(GeneratorConfig(width=20, height=12, room_count=10, seed=3))


def test_invalid_config_is_rejected():
    with pytest.raises(ValueError):
        Dungeon(seed=1, size=(3, 3))
    with pytest.raises(ValueError):
        Dungeon(seed=1, size=(40,))


def test_random_seed_is_recorded():
    d = Dungeon(size=(70, 45))
    assert isinstance(d.seed, int)
    assert Dungeon(seed=d.seed, size=(70, 45)).grid.rows() == d.grid.rows()


def test_ascii_overlays_exit_and_player():
    d = Dungeon(seed=123, size=(70, 45))
    lines = d.to_ascii().splitlines()
    assert len(lines) == 45 and all(len(line) == 70 for line in lines)
    px, py = d.player.point
    assert lines[py][px] == "@"
    ex, ey = d.exit.point
    if (ex, ey) != (px, py):
        assert lines[ey][ex] == "E"
    assert set("".join(lines)) <= set("CRTWD@E")


def test_json_round_trips_layout():
    d = Dungeon(seed=77, size=(70, 45))
    data = json.loads(d.to_json())
    assert data["seed"] == 77
    assert data["grid"] == d.grid.rows()
    assert len(data["rooms"]) == len(d.rooms)
    assert data["player"] == list(d.player.point)
    assert data["metrics"]["tiles"]["door"] == len(list(iter_tiles(d.grid.rows(), DOOR)))
    assert sorted(map(tuple, data["visible"])) == sorted(map(tuple, d.map.visible_points))
    for room in data["rooms"]:
        assert room["connected"], "every room has at least one connection"


def test_is_walkable_matches_grid():
    d = Dungeon(seed=8, size=(70, 45))
    rows = d.grid.rows()
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            assert d.is_walkable(x, y) == (ch in WALKABLE)
    assert not d.is_walkable(-1, 0)
    assert not d.is_walkable(70, 0)
