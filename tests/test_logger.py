import json

import pytest

from wavely.logger import init_logger


def _close(log):
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()


def test_json_output(tmp_path):
    path = tmp_path / "wavely.log"
    log = init_logger(False, str(path))
    log.info("hello")
    log.debug("hidden")
    _close(log)
    lines = path.read_text().splitlines()
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["msg"] == "hello"
    assert entry["level"] == "info"
    assert entry["caller"].startswith("test_logger.py:")


def test_debug_mode_keeps_debug(tmp_path):
    path = tmp_path / "wavely.log"
    log = init_logger(True, str(path))
    log.debug("detail")
    _close(log)
    text = path.read_text()
    assert "detail" in text
    assert "DEBUG" in text


def test_reinit_replaces_handlers(tmp_path):
    log = init_logger(False, str(tmp_path / "a.log"))
    log = init_logger(False, str(tmp_path / "b.log"))
    count = len(log.handlers)
    _close(log)
    assert count == 2


def test_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        init_logger(False, str(tmp_path / "nope" / "wavely.log"))