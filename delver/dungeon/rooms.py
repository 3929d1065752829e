import math
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List

from .cells import Point
from .errors import NoSpaceForRoom
from .tiles import FLOOR, HORIZONTAL_WALL, VERTICAL_WALL

if TYPE_CHECKING:
    from .context import GenerationContext


@dataclass(eq=False)
class Room:
    """Axis-aligned room.

    ``max_corner`` is exclusive for carving: the footprint spans
    ``min_corner .. max_corner - 1`` with the outer ring as wall (corners left
    undug). Collision checks use the inclusive box ``[min_corner, max_corner]``,
    which keeps at least one undug cell between neighbouring rooms.
    """
    min_corner: Point
    max_corner: Point
    index: int = -1
    connected: List["Room"] = field(default_factory=list, repr=False)
    visible: List[Point] = field(default_factory=list, repr=False)

    @property
    def origin(self) -> "Room":
        return self

    @property
    def w(self) -> int:
        return self.max_corner.x - self.min_corner.x

    @property
    def h(self) -> int:
        return self.max_corner.y - self.min_corner.y

    @property
    def center(self) -> Point:
        return Point(
            (self.min_corner.x + self.max_corner.x) // 2,
            (self.min_corner.y + self.max_corner.y) // 2,
        )

    def collides(self, other: "Room") -> bool:
        return not (
            self.min_corner.x > other.max_corner.x
            or self.max_corner.x < other.min_corner.x
            or self.min_corner.y > other.max_corner.y
            or self.max_corner.y < other.min_corner.y
        )

    def random_point(self, rng: random.Random) -> Point:
        """Uniform interior point; never on the wall ring."""
        return Point(
            rng.randrange(self.min_corner.x + 1, self.max_corner.x - 1),
            rng.randrange(self.min_corner.y + 1, self.max_corner.y - 1),
        )

    def cells(self) -> Iterator[Point]:
        for ix in range(self.min_corner.x, self.max_corner.x):
            for iy in range(self.min_corner.y, self.max_corner.y):
                yield Point(ix, iy)

    def contains(self, p: Point) -> bool:
        return self.min_corner.x <= p.x < self.max_corner.x and self.min_corner.y <= p.y < self.max_corner.y

    def distance_to(self, p: Point) -> int:
        """Truncated distance from ``p`` to the nearest point of the bounding box (0 inside)."""
        close_x = min(max(p.x, self.min_corner.x), self.max_corner.x)
        close_y = min(max(p.y, self.min_corner.y), self.max_corner.y)
        return int(math.sqrt((p.x - close_x) ** 2 + (p.y - close_y) ** 2))


def place_room(ctx: "GenerationContext", width: int, height: int) -> Room:
    """Rejection-sample a free spot for a ``width`` x ``height`` room and carve it.

    Raises NoSpaceForRoom when the room cannot fit the grid at all or no free
    spot turns up within ``max_room_attempts`` draws.
    """
    rng = ctx.rng
    span_x = ctx.grid.width - width - 1
    span_y = ctx.grid.height - height - 1
    if span_x < 1 or span_y < 1:
        raise NoSpaceForRoom(width, height, 0, len(ctx.rooms))
    limit = ctx.config.max_room_attempts
    for _ in range(limit):
        ctx.metrics['room_attempts'] += 1
        lo = Point(rng.randrange(span_x), rng.randrange(span_y))
        room = Room(lo, Point(lo.x + width, lo.y + height))
        if not any(room.collides(other) for other in ctx.rooms):
            break
    else:
        raise NoSpaceForRoom(width, height, limit, len(ctx.rooms))
    room.index = ctx.tracker.add(room)
    ctx.visibility.register_room(room)
    _carve(ctx, room)
    ctx.metrics['rooms_placed'] += 1
    return room


def _carve(ctx: "GenerationContext", room: Room) -> None:
    lo, w, h = room.min_corner, room.w, room.h

    def put(kind, x, y):
        p = Point(x, y)
        room.visible.append(p)
        ctx.place(kind, p, room)

    for i in range(1, w - 1):
        for j in range(1, h - 1):
            put(FLOOR, lo.x + i, lo.y + j)
    for i in range(1, w - 1):
        put(HORIZONTAL_WALL, lo.x + i, lo.y)
    for i in range(1, w - 1):
        put(HORIZONTAL_WALL, lo.x + i, lo.y + h - 1)
    for j in range(1, h - 1):
        put(VERTICAL_WALL, lo.x, lo.y + j)
    for j in range(1, h - 1):
        put(VERTICAL_WALL, lo.x + w - 1, lo.y + j)


__all__ = ["Room", "place_room"]
