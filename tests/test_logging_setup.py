# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskkeeper.logging_setup import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    # Drop only what setup_logging installed; pytest manages its own capture handlers.
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler) or type(h) is logging.StreamHandler:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
def test_setup_logging_writes_file_and_filters_console(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level=logging.INFO, file_level=logging.DEBUG)

    logging.getLogger("taskkeeper.tasks").info("own record")
    logging.getLogger("thirdparty").warning("library chatter")
    for h in logging.getLogger().handlers:
        h.flush()

    err = capsys.readouterr().err
    assert "own record" in err
    assert "library chatter" not in err

    text = log_file.read_text("utf-8")
    assert log_file.name == "taskkeeper.log"
    assert "own record" in text
    assert "library chatter" in text


@pytest.mark.usefixtures("restore_root_logger")
def test_setup_logging_replaces_existing_handlers(tmp_path: Path) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)

    handlers = logging.getLogger().handlers
    assert len(handlers) == 2
    assert sum(isinstance(h, logging.FileHandler) for h in handlers) == 1
