"""End-to-end checks on the default 50x30, five-room layout."""
import pytest

from delver.dungeon import Dungeon, GeneratorConfig
from delver.dungeon.entities import Exit, Monster, Player
from tests.dungeon_test_utils import rooms_reachable


@pytest.mark.parametrize("seed", [1, 42, 2024, 31337])
def test_default_five_room_layout(seed):
    d = Dungeon(GeneratorConfig(seed=seed))
    assert (d.width, d.height) == (50, 30)
    assert len(d.rooms) == 5
    assert len(d.monsters) == 5
    objects = list(d.map.objects())
    assert sum(isinstance(o, Monster) for o in objects) == 5
    assert sum(isinstance(o, Exit) for o in objects) == 1
    assert sum(isinstance(o, Player) for o in objects) == 1
    assert d.tracker.sets == 1
    assert len(rooms_reachable(d.player_room)) == 5
    assert 1 <= d.attempts <= d.config.generation_attempts
    assert d.metrics["attempts"] == d.attempts
    assert d.metrics["seed"] == seed


def test_legacy_size_tuple_with_depth():
    d = Dungeon(seed=5, size=(60, 40, 1))
    assert (d.width, d.height) == (60, 40)
    assert len(d.grid.rows()) == 40
    assert all(len(row) == 60 for row in d.grid.rows())
