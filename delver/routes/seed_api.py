"""Seed management API routes.

Provides an endpoint to set the dungeon seed used by the map endpoints for the
current session.
"""
import hashlib
import random

from flask import Blueprint, jsonify, request, session

bp_seed = Blueprint("seed_api", __name__)

SEED_MAX = 2**31 - 1


def coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a positive 31-bit int."""
    if payload_seed is None or isinstance(payload_seed, bool):
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX or 1
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SEED_MAX or 1
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX or 1
    raise ValueError(f"unsupported seed type {type(payload_seed).__name__}")


@bp_seed.route("/api/dungeon/seed", methods=["POST"])
def set_seed():
    """Set (or generate) the dungeon seed.

    Body JSON (all optional):
      { "seed": <int|str|null> }
    - If seed omitted or null => random seed.
    - If seed provided (int or string) => deterministic hashing.

    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "body must be a JSON object"}), 400
    try:
        seed = coerce_seed(data.get("seed"))
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    session["dungeon_seed"] = seed
    return jsonify({"seed": seed})
