from __future__ import annotations

import logging

from popover.utils.log import LOGGER_NAME, set_level, setup_logging


def test_setup_logging_targets_package_logger(tmp_path, monkeypatch):
    monkeypatch.setenv("PVS_LOG_LEVEL", "warning")
    logger = setup_logging(tmp_path / "logs")
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.WARNING
    assert logger.handlers

    # Segunda llamada: sin handlers nuevos, solo nivel.
    n = len(logger.handlers)
    monkeypatch.delenv("PVS_LOG_LEVEL")
    setup_logging(tmp_path / "other", level=logging.DEBUG)
    assert len(logger.handlers) == n
    assert logger.level == logging.DEBUG

    set_level(logging.INFO)
    assert logging.getLogger("popover.geom.anchor").getEffectiveLevel() == logging.INFO
