"""Corridor carving: a biased, monotone random walk between two rooms.

The walk starts at a random interior point of the origin room and heads for a
random interior point of the target room. Every step moves one cell along an
axis that still has distance left, so the walk never revisits a cell and ends
within ``|dx| + |dy|`` steps.

While the walk is still inside (or skirting) its origin room it is *inactive*.
The first step onto undug rock activates it and puts a door on the cell it just
left. From then on each undug cell becomes PATH, and the walk stops as soon as
it reaches something already built:

    * a room WALL: connect to that room and put a door on the wall cell;
    * another corridor's PATH: connect to that corridor's origin room and pool
      visibility with it.

An inactive walk that steps onto an existing PATH or DOOR connects straight to
its owner and stops without carving anything.
"""
from __future__ import annotations

import random
from enum import Enum
from typing import TYPE_CHECKING, List

from ..logging_utils import get_logger
from .cells import EAST, NORTH, SOUTH, WEST, Point
from .doors import DOOR_EXIT, DOOR_JOIN, place_door
from .errors import CorridorStepOverflow
from .tiles import DOOR, EMPTY, PATH, PATH_WALL, WALL
from .visibility import combine

if TYPE_CHECKING:
    from .context import GenerationContext
    from .rooms import Room

log = get_logger("dungeon.tunnels")


class CorridorOutcome(Enum):
    DEAD_END = "dead_end"
    MERGED_EARLY = "merged_early"
    JOINED_WALL = "joined_wall"
    JOINED_PATH = "joined_path"


class Corridor:
    def __init__(self, origin_room: "Room", target_room: "Room", rng: random.Random):
        self.origin_room = origin_room
        self.target_room = target_room
        # Target is drawn before the start point.
        self.target = target_room.random_point(rng)
        self.start = origin_room.random_point(rng)
        self.current = self.start
        self.travel_x = self.target.x - self.current.x
        self.travel_y = self.target.y - self.current.y
        self.last_move = EAST
        self.active = False
        self.steps = 0
        self.outcome = None
        self.visible: List[Point] = []
        self.first_door_visible: List[Point] = []

    @property
    def origin(self) -> "Room":
        return self.origin_room

    def __repr__(self) -> str:
        return (
            f"Corridor(origin={self.origin_room.index}, target={self.target_room.index}, "
            f"start={tuple(self.start)}, current={tuple(self.current)}, active={self.active})"
        )

    def candidate_moves(self) -> List[int]:
        moves = []
        if self.travel_x > 0:
            moves.append(EAST)
        if self.travel_x < 0:
            moves.append(WEST)
        if self.travel_y > 0:
            moves.append(SOUTH)
        if self.travel_y < 0:
            moves.append(NORTH)
        return moves

    def choose_move(self, moves: List[int], rng: random.Random, dir_change: int) -> int:
        move = moves[rng.randrange(len(moves))]
        # Keep heading the same way unless the 1-in-dir_change turn comes up.
        if self.last_move in moves and rng.randrange(dir_change) != 0:
            move = self.last_move
        return move

    def _advance(self, move: int) -> None:
        self.current = self.current.step(move)
        if move == EAST:
            self.travel_x -= 1
        elif move == WEST:
            self.travel_x += 1
        elif move == SOUTH:
            self.travel_y -= 1
        else:
            self.travel_y += 1

    def carve(self, ctx: "GenerationContext") -> CorridorOutcome:
        grid = ctx.grid
        budget = ctx.config.corridor_step_budget()
        while True:
            moves = self.candidate_moves()
            if not moves:
                return CorridorOutcome.DEAD_END
            if self.steps >= budget:
                raise CorridorStepOverflow(budget, self.origin_room.index, self.target_room.index)
            self.steps += 1
            move = self.choose_move(moves, ctx.rng, ctx.config.path_dir_change)
            self.last_move = move
            last = self.current
            self._advance(move)
            here = self.current
            kind = grid.kind(here)

            if not self.active:
                if kind is EMPTY:
                    self.active = True
                    self.visible.append(last)
                    self.first_door_visible.extend(self.origin_room.visible)
                    place_door(ctx, last, self.origin_room, self.first_door_visible, DOOR_EXIT, self)
                elif kind is PATH or kind is DOOR:
                    self._connect(ctx, grid.owner(here).origin)
                    return CorridorOutcome.MERGED_EARLY

            if self.active:
                if kind is EMPTY:
                    ctx.place(PATH, here, self)
                    self.visible.append(here)
                elif kind is WALL:
                    wall_room = grid.owner(here).origin
                    self._connect(ctx, wall_room)
                    self.visible.append(here)
                    self.first_door_visible.extend(self.visible)
                    place_door(ctx, here, wall_room, combine(self.visible, wall_room.visible), DOOR_JOIN, self)
                    return CorridorOutcome.JOINED_WALL
                elif kind is PATH:
                    other = grid.owner(here)
                    self._connect(ctx, other.origin)
                    self.first_door_visible.extend(combine(self.visible, other.visible))
                    other.visible.extend(self.visible)
                    return CorridorOutcome.JOINED_PATH

            for n in here.neighbors():
                if grid.kind(n) is EMPTY:
                    ctx.place(PATH_WALL, n, self)

    def _connect(self, ctx: "GenerationContext", room: "Room") -> None:
        if ctx.tracker.connect(self.origin_room, room):
            ctx.metrics['set_merges'] += 1
            log.debug(
                event="rooms_merged",
                origin=self.origin_room.index,
                room=room.index,
                sets=ctx.tracker.sets,
            )


def carve_corridor(ctx: "GenerationContext", origin: "Room", target: "Room") -> Corridor:
    """Walk a corridor from ``origin`` toward ``target`` and record the outcome.

    Raises CorridorStepOverflow if the walk exceeds the configured step budget;
    whatever was carved up to that point stays on the grid.
    """
    ctx.metrics['corridors_attempted'] += 1
    corridor = Corridor(origin, target, ctx.rng)
    try:
        outcome = corridor.carve(ctx)
    finally:
        ctx.metrics['corridor_steps'] += corridor.steps
        if corridor.active:
            ctx.metrics['corridors_carved'] += 1
            ctx.corridors.append(corridor)
            ctx.visibility.register_corridor(corridor)
    ctx.metrics[_OUTCOME_METRIC[outcome]] += 1
    corridor.outcome = outcome
    return corridor


_OUTCOME_METRIC = {
    CorridorOutcome.DEAD_END: 'dead_ends',
    CorridorOutcome.MERGED_EARLY: 'early_merges',
    CorridorOutcome.JOINED_WALL: 'wall_joins',
    CorridorOutcome.JOINED_PATH: 'path_joins',
}

__all__ = ["Corridor", "CorridorOutcome", "carve_corridor"]
