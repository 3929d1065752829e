"""Doors placed where a corridor crosses a room boundary.

Two kinds of crossing produce a door:
    * ``exit``: the corridor left its origin room's neighbourhood; the door sits
      on the last cell before open rock and belongs to the origin room.
    * ``join``: an active corridor ran into another room's wall; the door sits
      on that wall cell and belongs to the room it leads into.

A door's ``visible`` list is held by reference. Exit doors keep receiving the
corridor's points after placement.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from .cells import Point
from .tiles import DOOR

if TYPE_CHECKING:
    from .context import GenerationContext
    from .rooms import Room

DOOR_EXIT = "exit"
DOOR_JOIN = "join"


@dataclass(eq=False)
class Door:
    point: Point
    room: "Room"
    visible: List[Point] = field(default_factory=list, repr=False)
    reason: str = DOOR_EXIT
    corridor: Optional[object] = field(default=None, repr=False)
    solid: bool = False
    name: str = "door"

    @property
    def origin(self) -> "Room":
        return self.room


def place_door(
    ctx: "GenerationContext", p: Point, room: "Room", visible: List[Point], reason: str, corridor=None
) -> Door:
    ctx.grid.set(p, DOOR, room)
    door = Door(p, room, visible, reason, corridor)
    ctx.map.place_object(p, door)
    ctx.doors.append(door)
    ctx.visibility.register_door(door)
    ctx.metrics['doors_created'] += 1
    return door


__all__ = ["Door", "DOOR_EXIT", "DOOR_JOIN", "place_door"]
