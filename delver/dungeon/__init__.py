"""Public dungeon package interface."""

from .config import GeneratorConfig
from .dungeon import Dungeon, derive_seed
from .errors import (
    ConnectivityStalled,
    CorridorStepOverflow,
    DungeonError,
    NoSpaceForRoom,
    OutOfRangeCoordinate,
)
from .generator import DungeonBuilder, GenerationResult
from .tiles import DOOR, EMPTY, FLOOR, PATH, WALKABLE, WALL, TileKind  # noqa: F401

__all__ = [
    "Dungeon",
    "DungeonBuilder",
    "GenerationResult",
    "GeneratorConfig",
    "derive_seed",
    "DungeonError",
    "NoSpaceForRoom",
    "CorridorStepOverflow",
    "ConnectivityStalled",
    "OutOfRangeCoordinate",
    "TileKind",
    "EMPTY",
    "FLOOR",
    "PATH",
    "WALL",
    "DOOR",
    "WALKABLE",
]
