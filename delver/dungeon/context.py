"""Mutable state shared by one generation run."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .cells import Point
from .config import GeneratorConfig
from .connectivity import ConnectivityTracker
from .entities import StaticTile
from .grid import Grid
from .level_map import DungeonMap
from .metrics import init_metrics
from .tiles import TileKind
from .visibility import VisibilityIndex


@dataclass
class GenerationContext:
    config: GeneratorConfig
    rng: random.Random
    grid: Grid
    map: DungeonMap
    tracker: ConnectivityTracker = field(default_factory=ConnectivityTracker)
    visibility: VisibilityIndex = field(default_factory=VisibilityIndex)
    metrics: Dict[str, Any] = field(default_factory=init_metrics)
    corridors: List[Any] = field(default_factory=list)
    doors: List[Any] = field(default_factory=list)
    monsters: List[Any] = field(default_factory=list)

    @classmethod
    def create(cls, config: GeneratorConfig, rng: random.Random) -> "GenerationContext":
        return cls(
            config=config,
            rng=rng,
            grid=Grid(config.width, config.height),
            map=DungeonMap(config.width, config.height),
        )

    @property
    def rooms(self):
        return self.tracker.rooms

    def place(self, kind: TileKind, p: Point, owner=None) -> None:
        """Classify ``p`` on the grid and stack the matching tile object on the map."""
        self.grid.set(p, kind, owner)
        self.map.place_object(p, StaticTile.for_kind(p, kind))
