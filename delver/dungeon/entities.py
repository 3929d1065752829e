"""Objects the generator pushes onto the map.

These are deliberately thin: the game layer owns behaviour, the generator
only needs something to stack at a coordinate.
"""
from __future__ import annotations

from dataclasses import dataclass

from .cells import Point
from .tiles import DOOR, FLOOR, HORIZONTAL_WALL, PATH, PATH_WALL, VERTICAL_WALL, TileKind

_SOLID = {VERTICAL_WALL, HORIZONTAL_WALL, PATH_WALL}


@dataclass
class StaticTile:
    point: Point
    kind: TileKind

    @property
    def solid(self) -> bool:
        return self.kind in _SOLID

    @property
    def name(self) -> str:
        return self.kind.name.lower()

    @classmethod
    def for_kind(cls, point: Point, kind: TileKind) -> "StaticTile":
        if kind not in (FLOOR, PATH, DOOR, VERTICAL_WALL, HORIZONTAL_WALL, PATH_WALL):
            raise ValueError(f"no static tile for {kind}")
        return cls(point, kind)


@dataclass
class Monster:
    point: Point
    solid: bool = True
    name: str = "monster"


@dataclass
class Exit:
    point: Point
    solid: bool = False
    name: str = "exit"


@dataclass
class Player:
    point: Point
    solid: bool = True
    name: str = "player"


__all__ = ["StaticTile", "Monster", "Exit", "Player"]
