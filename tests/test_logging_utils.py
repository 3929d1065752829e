import json

from delver.logging_utils import _format, get_logger


def test_key_value_format(monkeypatch):
    monkeypatch.delenv("DELVER_LOG_JSON", raising=False)
    line = _format("info", event="dungeon_generated", seed=42, note="two words", skip=None)
    assert line.startswith("level=info ts=")
    assert "event=dungeon_generated" in line
    assert "seed=42" in line
    assert "note=two_words" in line
    assert "skip" not in line


def test_json_mode(monkeypatch):
    monkeypatch.setenv("DELVER_LOG_JSON", "1")
    rec = json.loads(_format("warn", event="corridor_abandoned", steps=3))
    assert rec["level"] == "warn"
    assert rec["event"] == "corridor_abandoned"
    assert rec["steps"] == 3
    assert isinstance(rec["ts"], int)


def test_level_filtering(monkeypatch, capsys):
    log = get_logger("test.levels")
    monkeypatch.setenv("DELVER_LOG_LEVEL", "warn")
    log.info(event="hidden")
    log.warn(event="shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "event=shown" in out
    assert "logger=test.levels" in out


def test_errors_go_to_stderr(monkeypatch, capsys):
    monkeypatch.setenv("DELVER_LOG_LEVEL", "debug")
    get_logger("test.err").error(event="boom")
    captured = capsys.readouterr()
    assert "event=boom" in captured.err
    assert captured.out == ""


def test_loggers_are_cached():
    assert get_logger("dungeon.tunnels") is get_logger("dungeon.tunnels")


def test_generation_logs_completion(monkeypatch, capsys):
    from delver.dungeon import Dungeon

    monkeypatch.setenv("DELVER_LOG_LEVEL", "info")
    Dungeon(seed=99, size=(70, 45))
    out = capsys.readouterr().out
    assert "event=dungeon_generated" in out
    assert "logger=dungeon.generator" in out


def test_server_logging_writes_rotating_file(tmp_path):
    import logging

    from delver.server import _configure_logging

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        path = _configure_logging(str(tmp_path))
        logging.getLogger("delver.test").info("hello from test")
        for h in root.handlers:
            h.flush()
        assert path.endswith("delver.log")
        with open(path, encoding="utf-8") as f:
            assert "hello from test" in f.read()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            if h not in saved_handlers:
                h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
