from __future__ import annotations

from typing import Iterator, List, Optional

from .cells import Point
from .errors import OutOfRangeCoordinate
from .tiles import EMPTY, TileKind, persisted_kind


class Grid:
    """Tile kinds plus the feature that carved each cell.

    Storage is column-major (``kinds[x][y]``). Owners are only consulted while
    generating, to attribute collisions to a room.
    """

    __slots__ = ("width", "height", "kinds", "owners")

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.kinds: List[List[TileKind]] = [[EMPTY for _ in range(height)] for _ in range(width)]
        self.owners: List[List[Optional[object]]] = [[None for _ in range(height)] for _ in range(width)]

    def in_bounds(self, p: Point) -> bool:
        return 0 <= p.x < self.width and 0 <= p.y < self.height

    def _check(self, p: Point) -> None:
        if not (0 <= p.x < self.width and 0 <= p.y < self.height):
            raise OutOfRangeCoordinate(p.x, p.y, self.width, self.height)

    def kind(self, p: Point) -> TileKind:
        self._check(p)
        return self.kinds[p.x][p.y]

    def owner(self, p: Point):
        self._check(p)
        return self.owners[p.x][p.y]

    def set(self, p: Point, kind: TileKind, owner=None) -> TileKind:
        """Write ``kind`` (collapsed to its persisted form) and its owner."""
        self._check(p)
        stored = persisted_kind(kind)
        self.kinds[p.x][p.y] = stored
        self.owners[p.x][p.y] = owner
        return stored

    def points(self) -> Iterator[Point]:
        for x in range(self.width):
            for y in range(self.height):
                yield Point(x, y)

    def count(self, kind: TileKind) -> int:
        return sum(1 for column in self.kinds for k in column if k is kind)

    def rows(self) -> List[str]:
        return ["".join(self.kinds[x][y].value for x in range(self.width)) for y in range(self.height)]
