"""
project: Delver
module: dungeon_api.py
License: MIT

Dungeon layout API routes.

Layouts are generated on demand from (seed, width, height, rooms) and kept in
a small in-process cache, so repeated map and ASCII requests for the same
parameters return the identical layout.
"""

import os
import random
import threading

from flask import Blueprint, Response, current_app, jsonify, request, session

from delver.dungeon import Dungeon, DungeonError, GeneratorConfig
from delver.logging_utils import get_logger

log = get_logger("api.dungeon")

# Simple in-process cache (seed, width, height, rooms) -> Dungeon. Guarded by a lock because the
# dev server may serve requests on several threads.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()
_DUNGEON_CACHE_MAX = 8  # small LRU-ish manual cap


def _cache_disabled() -> bool:
    if os.environ.get("DELVER_DISABLE_CACHE") == "1":
        return True
    try:
        return bool(current_app.config.get("DELVER_DISABLE_CACHE"))
    except RuntimeError:  # outside an app context
        return False


def get_cached_dungeon(seed: int, size_tuple: tuple, room_count: int = 5) -> Dungeon:
    width, height = int(size_tuple[0]), int(size_tuple[1])
    if _cache_disabled():
        return Dungeon(seed=seed, size=(width, height), room_count=room_count)
    key = (seed, width, height, room_count)
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = Dungeon(seed=seed, size=(width, height), room_count=room_count)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        if len(_dungeon_cache) > _DUNGEON_CACHE_MAX:
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return dungeon


def clear_dungeon_cache() -> None:
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


class _BadRequest(ValueError):
    pass


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise _BadRequest(f"{name} must be an integer") from None


def _resolve_params():
    """Read generation parameters from the query string, session and app config."""
    cfg = current_app.config
    seed = _int_arg("seed", session.get("dungeon_seed", 0))
    if request.args.get("seed") in (None, "") and not seed:
        seed = random.randint(1, 1_000_000)
        session["dungeon_seed"] = seed
    width = _int_arg("width", cfg.get("DELVER_MAP_WIDTH", 50))
    height = _int_arg("height", cfg.get("DELVER_MAP_HEIGHT", 30))
    rooms = _int_arg("rooms", cfg.get("DELVER_ROOM_COUNT", 5))
    # Surface parameter problems as 400s before spending time on generation.
    try:
        GeneratorConfig(width=width, height=height, room_count=rooms, seed=seed).validate()
    except ValueError as exc:
        raise _BadRequest(str(exc)) from None
    return seed, width, height, rooms


def _load_dungeon():
    """Return (dungeon, None) or (None, error_response)."""
    try:
        seed, width, height, rooms = _resolve_params()
    except _BadRequest as exc:
        return None, (jsonify({"error": str(exc)}), 400)
    try:
        dungeon = get_cached_dungeon(seed, (width, height), rooms)
    except DungeonError as exc:
        log.warn(event="generation_failed", seed=seed, width=width, height=height, rooms=rooms, error=type(exc).__name__)
        return None, (jsonify({"error": type(exc).__name__, "detail": str(exc)}), 422)
    return dungeon, None


bp_dungeon = Blueprint("dungeon", __name__)


@bp_dungeon.route("/api/dungeon/map")
def dungeon_map():
    """
    Return the generated layout as JSON.
    Query: seed, width, height, rooms (all optional).
    Response: { seed, width, height, grid, rooms, doors, monsters, exit, player, visible, metrics }
    """
    dungeon, error = _load_dungeon()
    if error is not None:
        return error
    return jsonify(dungeon.to_dict())


@bp_dungeon.route("/api/dungeon/ascii")
def dungeon_ascii():
    dungeon, error = _load_dungeon()
    if error is not None:
        return error
    return Response(dungeon.to_ascii() + "\n", mimetype="text/plain")
