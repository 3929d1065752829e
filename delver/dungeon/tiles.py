"""Generation-time tile classification.

The grid only ever persists EMPTY, FLOOR, PATH, WALL and DOOR. The three
transient kinds pick which static tile object is pushed onto the map and are
collapsed by :func:`persisted_kind` before the grid is written.
"""
from enum import Enum


class TileKind(Enum):
    EMPTY = "C"  # undug rock
    FLOOR = "R"
    PATH = "T"
    VERTICAL_WALL = "|"
    HORIZONTAL_WALL = "-"
    WALL = "W"
    PATH_WALL = "+"
    DOOR = "D"


EMPTY = TileKind.EMPTY
FLOOR = TileKind.FLOOR
PATH = TileKind.PATH
VERTICAL_WALL = TileKind.VERTICAL_WALL
HORIZONTAL_WALL = TileKind.HORIZONTAL_WALL
WALL = TileKind.WALL
PATH_WALL = TileKind.PATH_WALL
DOOR = TileKind.DOOR

WALKABLE = frozenset({FLOOR, PATH, DOOR})

_COLLAPSE = {
    VERTICAL_WALL: WALL,
    HORIZONTAL_WALL: WALL,
    PATH_WALL: EMPTY,
}


def persisted_kind(kind: TileKind) -> TileKind:
    return _COLLAPSE.get(kind, kind)


__all__ = [
    "TileKind",
    "EMPTY",
    "FLOOR",
    "PATH",
    "VERTICAL_WALL",
    "HORIZONTAL_WALL",
    "WALL",
    "PATH_WALL",
    "DOOR",
    "WALKABLE",
    "persisted_kind",
]
