"""Generation failures.

Only budget exhaustion reaches callers; a caller may retry with another seed
or looser parameters. ``OutOfRangeCoordinate`` signals a bug, not bad input.
"""
from __future__ import annotations


class DungeonError(Exception):
    """Base class for dungeon generation errors."""


class NoSpaceForRoom(DungeonError):
    def __init__(self, width: int, height: int, attempts: int, placed: int = 0):
        self.width = width
        self.height = height
        self.attempts = attempts
        self.placed = placed
        super().__init__(
            f"no space for a {width}x{height} room after {attempts} attempts ({placed} rooms placed)"
        )


class CorridorStepOverflow(DungeonError):
    def __init__(self, steps: int, origin_index: int, target_index: int):
        self.steps = steps
        self.origin_index = origin_index
        self.target_index = target_index
        super().__init__(
            f"corridor from room {origin_index} to room {target_index} exceeded {steps} steps"
        )


class ConnectivityStalled(DungeonError):
    """The connection loop cannot make progress while more than one set remains."""

    def __init__(self, sets: int, reason: str):
        self.sets = sets
        self.reason = reason
        super().__init__(f"connection phase stalled with {sets} sets: {reason}")


class OutOfRangeCoordinate(DungeonError, IndexError):
    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        super().__init__(f"({x},{y}) outside {width}x{height} grid")


__all__ = [
    "DungeonError",
    "NoSpaceForRoom",
    "CorridorStepOverflow",
    "ConnectivityStalled",
    "OutOfRangeCoordinate",
]
