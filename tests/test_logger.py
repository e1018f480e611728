from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ghgflow.core.logger import get_logger, home_dir, set_level


def test_home_dir_follows_environment(tmp_path: Path) -> None:
    assert home_dir() == tmp_path / "home"


def test_get_logger_writes_app_log(tmp_path: Path) -> None:
    logger = get_logger()
    logging.getLogger("ghgflow.services.ingestion.api").info("decoded upload")
    for handler in logger.handlers:
        handler.flush()

    log_file = tmp_path / "home" / "logs" / "app.log"
    assert "decoded upload" in log_file.read_text(encoding="utf-8")
    assert get_logger() is logger
    assert len(logger.handlers) == 2


def test_set_level() -> None:
    assert set_level("debug") == logging.DEBUG
    assert get_logger().level == logging.DEBUG

    with pytest.raises(ValueError):
        set_level("chatty")
