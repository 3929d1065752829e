"""Generation phases: room placement, connection loop, exit and player placement."""
from __future__ import annotations

import random
import time
from typing import Any, Dict, List, NamedTuple, Optional

from ..logging_utils import get_logger
from .cells import Point
from .config import GeneratorConfig
from .connectivity import ConnectivityTracker
from .context import GenerationContext
from .entities import Exit, Monster, Player
from .errors import ConnectivityStalled, CorridorStepOverflow
from .grid import Grid
from .level_map import DungeonMap
from .rooms import Room, place_room
from .tunnels import carve_corridor
from .visibility import VisibilityIndex

log = get_logger("dungeon.generator")


class GenerationResult(NamedTuple):
    grid: Grid
    map: DungeonMap
    rooms: List[Room]
    corridors: List[Any]
    doors: List[Any]
    monsters: List[Monster]
    exit: Exit
    player: Player
    player_room: Room
    tracker: ConnectivityTracker
    visibility: VisibilityIndex
    metrics: Dict[str, Any]


class DungeonBuilder:
    def __init__(self, config: GeneratorConfig, rng: Optional[random.Random] = None):
        self.config = config.validate()
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.ctx: Optional[GenerationContext] = None

    def generate(self, room_count: Optional[int] = None) -> GenerationResult:
        count = self.config.room_count if room_count is None else room_count
        if count < 1:
            raise ValueError("room_count must be at least 1")
        ctx = self.ctx = GenerationContext.create(self.config, self.rng)
        start = time.perf_counter()
        phase_times = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = int((pe - ps) * 1000)
            return r

        _phase('place_rooms', self._place_rooms, ctx, count)
        _phase('connect_rooms', self._connect_rooms, ctx)
        exit_obj, player, player_room = _phase('place_exit_and_player', self._place_exit_and_player, ctx)
        ctx.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        ctx.metrics['phase_ms'] = phase_times
        log.info(
            event="dungeon_generated",
            seed=self.config.seed,
            rooms=len(ctx.rooms),
            corridors=len(ctx.corridors),
            doors=len(ctx.doors),
            runtime_ms=ctx.metrics['runtime_ms'],
        )
        return GenerationResult(
            grid=ctx.grid,
            map=ctx.map,
            rooms=list(ctx.rooms),
            corridors=list(ctx.corridors),
            doors=list(ctx.doors),
            monsters=list(ctx.monsters),
            exit=exit_obj,
            player=player,
            player_room=player_room,
            tracker=ctx.tracker,
            visibility=ctx.visibility,
            metrics=ctx.metrics,
        )

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------
    def _place_rooms(self, ctx: GenerationContext, count: int) -> None:
        cfg, rng = self.config, ctx.rng
        for _ in range(count):
            width = rng.randint(cfg.min_room_width, cfg.max_room_width)
            height = rng.randint(cfg.min_room_height, cfg.max_room_height)
            room = place_room(ctx, width, height)
            # Every room gets its occupant before any corridor exists.
            spawn = room.random_point(rng)
            monster = Monster(spawn)
            ctx.map.place_object(spawn, monster)
            ctx.monsters.append(monster)
            ctx.metrics['monsters_spawned'] += 1
            log.debug(
                event="room_placed",
                index=room.index,
                min=f"{room.min_corner.x},{room.min_corner.y}",
                size=f"{room.w}x{room.h}",
            )

    # ------------------------------------------------------------------
    # Corridors
    # ------------------------------------------------------------------
    @staticmethod
    def nearest(rooms: List[Room], room: Room) -> Optional[Room]:
        """Closest room (by squared center distance) not already joined to ``room``.

        Ties go to the first room in ``rooms``.
        """
        best = None
        best_dist = None
        cx, cy = room.center
        for other in rooms:
            if other is room or room in other.connected:
                continue
            ox, oy = other.center
            dist = (ox - cx) ** 2 + (oy - cy) ** 2
            if best_dist is None or dist < best_dist:
                best, best_dist = other, dist
        return best

    def _connect_rooms(self, ctx: GenerationContext) -> None:
        rooms, tracker, rng = ctx.rooms, ctx.tracker, ctx.rng
        budget = self.config.max_connect_iterations
        iterations = 0
        while tracker.sets > 1:
            if iterations >= budget:
                raise ConnectivityStalled(tracker.sets, f"no full connection after {budget} iterations")
            iterations += 1
            ctx.metrics['connect_iterations'] = iterations
            current = rooms[rng.randrange(len(rooms))]
            near = self.nearest(rooms, current)
            if near is None:
                ctx.metrics['skipped_no_target'] += 1
                # A room with no partner is joined to every other room; if all are, one set must remain.
                if all(len(r.connected) >= len(rooms) - 1 for r in rooms):
                    raise ConnectivityStalled(tracker.sets, "every room is directly connected to every other room")
                continue
            try:
                carve_corridor(ctx, near, current)
            except CorridorStepOverflow as exc:
                ctx.metrics['step_overflows'] += 1
                log.warn(event="corridor_abandoned", origin=exc.origin_index, target=exc.target_index, steps=exc.steps)

    # ------------------------------------------------------------------
    # Exit / player
    # ------------------------------------------------------------------
    def valid_point(self) -> Point:
        """Random interior point of a random room of the last generated layout."""
        if self.ctx is None or not self.ctx.rooms:
            raise RuntimeError("valid_point() called before generate()")
        return self._valid_point(self.ctx)

    @staticmethod
    def _valid_point(ctx: GenerationContext) -> Point:
        room = ctx.rooms[ctx.rng.randrange(len(ctx.rooms))]
        return room.random_point(ctx.rng)

    def _place_exit_and_player(self, ctx: GenerationContext):
        point = self._valid_point(ctx)
        exit_obj = Exit(point)
        ctx.map.place_object(point, exit_obj)

        player_room = ctx.rooms[ctx.rng.randrange(len(ctx.rooms))]
        player = Player(player_room.center)
        ctx.map.player = player
        ctx.map.place_object(player.point, player)
        ctx.map.set_visible(player_room.visible)
        return exit_obj, player, player_room


__all__ = ["DungeonBuilder", "GenerationResult"]
