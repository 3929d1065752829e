import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delver import create_app  # noqa: E402
from delver.routes.dungeon_api import clear_dungeon_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    clear_dungeon_cache()
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _quiet_generator_logs(monkeypatch):
    """Keep generator info lines out of captured stdout unless a test opts in."""
    monkeypatch.setenv("DELVER_LOG_LEVEL", "error")
    monkeypatch.delenv("DELVER_LOG_JSON", raising=False)
    yield
