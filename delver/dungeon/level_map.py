"""Per-cell object stacks: the storage contract the generator writes through."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from .cells import Point
from .errors import OutOfRangeCoordinate


class DungeonMap:
    """Stack of placed objects per coordinate; the most recent one is current."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._stacks: Dict[Point, List[object]] = {}
        self._visible: Set[Point] = set()
        self.player = None

    def _check(self, p: Point) -> Point:
        p = Point(*p)
        if not (0 <= p.x < self.width and 0 <= p.y < self.height):
            raise OutOfRangeCoordinate(p.x, p.y, self.width, self.height)
        return p

    def place_object(self, point: Point, obj) -> None:
        point = self._check(point)
        self._stacks.setdefault(point, []).append(obj)

    def get_object(self, point: Point) -> Optional[object]:
        stack = self._stacks.get(self._check(point))
        if not stack:
            return None
        return stack[-1]

    def is_empty(self, point: Point) -> bool:
        return not self._stacks.get(self._check(point))

    def objects_at(self, point: Point) -> List[object]:
        """Objects at ``point``, bottom first."""
        return list(self._stacks.get(self._check(point), ()))

    def objects(self) -> Iterable[object]:
        for stack in self._stacks.values():
            yield from stack

    def set_visible(self, points: Iterable[Point], visible: bool = True) -> None:
        for p in points:
            p = self._check(p)
            if visible:
                self._visible.add(p)
            else:
                self._visible.discard(p)

    def is_visible(self, point: Point) -> bool:
        return self._check(point) in self._visible

    @property
    def visible_points(self) -> Set[Point]:
        return set(self._visible)
