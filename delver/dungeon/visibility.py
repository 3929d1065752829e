"""Which points a renderer may disclose once a feature is discovered.

Lists are append-only and merged by concatenation, so a point can appear more
than once. Revealing is idempotent for callers; ``unique_points`` exists for
those that want each point exactly once.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Protocol, Sequence, Tuple

from .cells import Point
from .tiles import EMPTY

if TYPE_CHECKING:
    from .grid import Grid


class Feature(Protocol):
    """Anything that owns grid cells: rooms and corridors."""

    visible: List[Point]

    @property
    def origin(self): ...


def combine(*lists: Sequence[Point]) -> List[Point]:
    out: List[Point] = []
    for points in lists:
        out.extend(points)
    return out


def dedupe(points: Iterable[Point]) -> List[Point]:
    seen = set()
    out = []
    for p in points:
        if p not in seen:
            seen.add(p)
            out.append(p)
    return out


class VisibilityIndex:
    def __init__(self):
        self.rooms = []
        self.corridors = []
        self.doors = []

    def register_room(self, room) -> None:
        self.rooms.append(room)

    def register_corridor(self, corridor) -> None:
        self.corridors.append(corridor)

    def register_door(self, door) -> None:
        self.doors.append(door)

    def points_for(self, feature: Feature) -> List[Point]:
        return list(feature.visible)

    def unique_points(self, feature: Feature) -> List[Point]:
        return dedupe(feature.visible)

    def stray_points(self, grid: "Grid") -> List[Tuple[Feature, Point]]:
        """Room or corridor points that sit on an undug cell (should be none)."""
        stray = []
        for feature in [*self.rooms, *self.corridors]:
            for p in feature.visible:
                if grid.kind(p) is EMPTY:
                    stray.append((feature, p))
        return stray

    def __len__(self) -> int:
        return sum(len(f.visible) for f in [*self.rooms, *self.corridors, *self.doors])


__all__ = ["Feature", "VisibilityIndex", "combine", "dedupe"]
