"""Public entry point for dungeon generation.

``Dungeon`` wraps :class:`DungeonBuilder` with the constructor style callers
already use (``Dungeon(seed=..., size=(w, h))``), retries a run that packed
itself into a corner, and exposes the finished layout plus a couple of
serializers.
"""
from __future__ import annotations

import json
import random
from dataclasses import replace
from typing import Any, Dict, Optional, Sequence

from ..logging_utils import get_logger
from .config import GeneratorConfig
from .errors import ConnectivityStalled, NoSpaceForRoom
from .generator import DungeonBuilder
from .tiles import DOOR, EMPTY, FLOOR, PATH, WALKABLE, WALL

log = get_logger("dungeon")

_SEED_MODULUS = 2**31


def derive_seed(seed: int, attempt: int) -> int:
    """Seed for retry ``attempt``; attempt 0 is the configured seed itself."""
    if attempt == 0:
        return seed
    return (seed * 1_000_003 + attempt) % _SEED_MODULUS


class Dungeon:
    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        *,
        seed: Optional[int] = None,
        size: Optional[Sequence[int]] = None,
        room_count: Optional[int] = None,
    ):
        config = config or GeneratorConfig()
        overrides: Dict[str, Any] = {}
        if seed is not None:
            overrides["seed"] = seed
        if size is not None:
            # Accepts (w, h) or the older (w, h, depth) tuple; depth is ignored.
            if len(size) not in (2, 3):
                raise ValueError(f"size must be (width, height), got {size!r}")
            overrides["width"], overrides["height"] = int(size[0]), int(size[1])
        if room_count is not None:
            overrides["room_count"] = room_count
        if overrides:
            config = replace(config, **overrides)
        if config.seed is None:
            config = replace(config, seed=random.randint(1, 1_000_000))
        self.config = config.validate()
        self.seed = config.seed
        self.attempts = 0
        self._build()

    def _build(self) -> None:
        last_error = None
        for attempt in range(self.config.generation_attempts):
            self.attempts = attempt + 1
            run_seed = derive_seed(self.seed, attempt)
            builder = DungeonBuilder(self.config, random.Random(run_seed))
            try:
                result = builder.generate()
            except (NoSpaceForRoom, ConnectivityStalled) as exc:
                last_error = exc
                log.warn(event="generation_retry", seed=self.seed, attempt=self.attempts, error=type(exc).__name__)
                continue
            self._adopt(result)
            return
        raise last_error

    def _adopt(self, result) -> None:
        self.grid = result.grid
        self.map = result.map
        self.rooms = result.rooms
        self.corridors = result.corridors
        self.doors = result.doors
        self.monsters = result.monsters
        self.exit = result.exit
        self.player = result.player
        self.player_room = result.player_room
        self.tracker = result.tracker
        self.visibility = result.visibility
        self.metrics = result.metrics
        self.metrics['seed'] = self.seed
        self.metrics['attempts'] = self.attempts
        self.metrics['tiles'] = {
            'floor': self.grid.count(FLOOR),
            'wall': self.grid.count(WALL),
            'path': self.grid.count(PATH),
            'door': self.grid.count(DOOR),
            'empty': self.grid.count(EMPTY),
        }

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def is_walkable(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return self.grid.kinds[x][y] in WALKABLE

    def to_ascii(self) -> str:
        """Row-major dump of tile characters with the exit and player overlaid."""
        rows = [list(row) for row in self.grid.rows()]
        ex, ey = self.exit.point
        rows[ey][ex] = "E"
        px, py = self.player.point
        rows[py][px] = "@"
        return "\n".join("".join(row) for row in rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "grid": self.grid.rows(),
            "rooms": [
                {
                    "index": r.index,
                    "min": list(r.min_corner),
                    "max": list(r.max_corner),
                    "center": list(r.center),
                    "connected": sorted(o.index for o in r.connected),
                }
                for r in self.rooms
            ],
            "doors": [{"x": d.point.x, "y": d.point.y, "room": d.room.index, "reason": d.reason} for d in self.doors],
            "monsters": [list(m.point) for m in self.monsters],
            "exit": list(self.exit.point),
            "player": list(self.player.point),
            "visible": sorted(list(p) for p in self.map.visible_points),
            "metrics": self.metrics,
        }

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    def __repr__(self) -> str:
        return f"Dungeon(seed={self.seed}, size={self.width}x{self.height}, rooms={len(self.rooms)})"


__all__ = ["Dungeon", "derive_seed"]
