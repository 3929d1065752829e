from typing import Dict, List, NamedTuple, Tuple


class Point(NamedTuple):
    """Grid coordinate; ``x`` is the column, ``y`` the row."""
    x: int
    y: int

    def step(self, direction: int) -> "Point":
        dx, dy = DIRECTION_VECTORS[direction]
        return Point(self.x + dx, self.y + dy)

    def neighbors(self) -> List["Point"]:
        return [self.step(d) for d in DIRECTIONS]


# Move codes used by the corridor walk. Order matters: it is the order in which
# candidate moves are collected, and therefore what the RNG indexes into.
EAST, WEST, SOUTH, NORTH = 0, 1, 2, 3
DIRECTIONS = (EAST, WEST, SOUTH, NORTH)
DIRECTION_VECTORS: Dict[int, Tuple[int, int]] = {
    EAST: (1, 0),
    WEST: (-1, 0),
    SOUTH: (0, 1),
    NORTH: (0, -1),
}
