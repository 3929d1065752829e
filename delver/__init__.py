"""
project: Delver
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (optionally loaded from a
local .env) with defaults suited to development. A local `instance/` directory
holds runtime files such as the server log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so `SECRET_KEY`, `DELVER_MAP_WIDTH`, etc. can be supplied
# without exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only checkouts still serve requests; only the file log is lost.
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("ignoring non-integer %s=%r", name, raw)
        return default


app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    DELVER_MAP_WIDTH=_env_int("DELVER_MAP_WIDTH", 50),
    DELVER_MAP_HEIGHT=_env_int("DELVER_MAP_HEIGHT", 30),
    DELVER_ROOM_COUNT=_env_int("DELVER_ROOM_COUNT", 5),
    DELVER_DISABLE_CACHE=os.getenv("DELVER_DISABLE_CACHE", "0") == "1",
)

from delver.routes.dungeon_api import bp_dungeon  # noqa: E402
from delver.routes.seed_api import bp_seed  # noqa: E402

app.register_blueprint(bp_dungeon)
app.register_blueprint(bp_seed)


def create_app():
    """Return the configured Flask app instance."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal error", "error_id": error_id}), 500
