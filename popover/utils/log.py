# File: popover/utils/log.py
# Project: PopoverShape (PVS)
# Version: 0.4.2
# Status: stable
# Date: 2026-10-17
# Purpose: Logging del proyecto: consola + logs/pvs.log, nivel ajustable.
# Notes:
#   - PVS_LOG_DIR / PVS_LOG_LEVEL pisan los argumentos (útil en CI y tests).
#   - Solo toca el logger "popover"; el root queda libre para la app host.
from __future__ import annotations

import logging
import os
from pathlib import Path

LOGGER_NAME = "popover"
LOG_FILENAME = "pvs.log"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _level_from_env(default: int) -> int:
    raw = os.environ.get("PVS_LOG_LEVEL", "").strip().upper()
    if not raw:
        return default
    lvl = logging.getLevelName(raw)
    return lvl if isinstance(lvl, int) else default


def setup_logging(log_dir: str | os.PathLike = "logs", level: int = logging.INFO) -> logging.Logger:
    """Configura el logger del paquete (una sola vez).

    Si el archivo no se puede abrir se sigue solo con consola. Llamadas
    posteriores solo ajustan el nivel (ver `set_level`).
    """
    global _configured
    logger = logging.getLogger(LOGGER_NAME)
    level = _level_from_env(level)
    if _configured:
        set_level(level)
        return logger

    logger.setLevel(level)
    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    logger.addHandler(console)

    target = Path(os.environ.get("PVS_LOG_DIR") or log_dir)
    try:
        target.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(target / LOG_FILENAME, encoding="utf-8")
    except OSError as e:
        logger.warning("Log a archivo deshabilitado (%s): %s", target, e)
    else:
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    _configured = True
    return logger


def set_level(level: int) -> None:
    logging.getLogger(LOGGER_NAME).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
