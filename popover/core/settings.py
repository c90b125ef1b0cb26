# File: popover/core/settings.py
# Project: PopoverShape (PVS)
# Version: 0.4.2
# Status: stable
# Date: 2026-10-17
# Purpose: Defaults de geometría/tema por proyecto (pvs_settings.json) + overrides PVS_*.
# Notes:
#   - Orden de prioridad: env var > pvs_settings.json > defaults de version.py.
#   - Valores inválidos se ignoran con warning: la config nunca rompe el arranque.
#   - No depende de Qt.
from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping

from popover.core.models import GeometryConfig, Theme, coerce_theme

log = logging.getLogger(__name__)

PROJECT_SETTINGS_FILENAME = "pvs_settings.json"

# clave JSON (con puntos) -> (env var, mínimo, máximo)
_GEOMETRY_KEYS: Dict[str, tuple[str, float, float]] = {
    "geometry.radius": ("PVS_RADIUS", 0.0, 512.0),
    "geometry.arrow_width": ("PVS_ARROW_WIDTH", 1.0, 512.0),
    "geometry.arrow_height": ("PVS_ARROW_HEIGHT", 1.0, 256.0),
    "geometry.min_body": ("PVS_MIN_BODY", 0.0, 4096.0),
    "geometry.gap": ("PVS_GAP", 0.0, 512.0),
}
THEME_ENV = "PVS_THEME"


def _candidate_dirs(start: Path | None) -> Iterator[Path]:
    here = Path.cwd() if start is None else Path(start)
    here = here.resolve()
    yield here
    yield from here.parents


def find_project_settings_path(start: Path | None = None) -> Path | None:
    """Primer pvs_settings.json encontrado desde `start` (o CWD) hacia la raíz."""
    return next(
        (d / PROJECT_SETTINGS_FILENAME for d in _candidate_dirs(start) if (d / PROJECT_SETTINGS_FILENAME).is_file()),
        None,
    )


def load_project_settings(start: Path | None = None, *, logger: logging.Logger | None = None) -> Dict[str, Any]:
    """JSON de settings como dict ({} si falta, no es un objeto o no parsea)."""
    path = find_project_settings_path(start)
    if path is None:
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        (logger or log).warning("Settings ignorados (%s): %s", path, e)
        return {}
    if not isinstance(data, dict):
        (logger or log).warning("Settings ignorados (%s): se esperaba un objeto JSON", path)
        return {}
    return data


def _deep_get(d: Mapping[str, Any], dotted: str, default: Any = None) -> Any:
    node: Any = d
    for key in dotted.split("."):
        if not isinstance(node, Mapping):
            return default
        node = node.get(key, default)
        if node is default:
            return default
    return node


def _valid_number(v: Any, lo: float, hi: float) -> bool:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    return math.isfinite(float(v)) and lo <= float(v) <= hi


def apply_project_settings(
    start: Path | None = None,
    *,
    logger: logging.Logger | None = None,
    prefer_env: bool = True,
) -> Dict[str, Any]:
    """Vuelca pvs_settings.json a variables de entorno PVS_*.

    Con `prefer_env=True` una env var ya seteada se respeta; con False, el
    JSON la reemplaza. Devuelve solo lo aplicado desde el JSON.
    """
    _log = logger or log
    data = load_project_settings(start, logger=_log)
    applied: Dict[str, Any] = {}
    if not data:
        return applied

    def export(env: str, value: Any) -> None:
        if prefer_env and os.environ.get(env):
            return
        os.environ[env] = str(value)

    for key, (env, lo, hi) in _GEOMETRY_KEYS.items():
        v = _deep_get(data, key)
        if v is None:
            continue
        if not _valid_number(v, lo, hi):
            _log.warning("Project setting ignorado %s=%r (rango %s..%s)", key, v, lo, hi)
            continue
        applied[key] = float(v)
        export(env, float(v))

    theme = _deep_get(data, "theme")
    if theme is not None:
        t = str(theme).strip().lower() if isinstance(theme, str) else None
        if t in (Theme.LIGHT.value, Theme.DARK.value):
            applied["theme"] = t
            export(THEME_ENV, t)
        else:
            _log.warning("Project setting ignorado theme=%r", theme)

    if applied:
        _log.info("Project settings aplicados: %s", applied)
    return applied


def _env_float(name: str, default: float, *, min_value: float, max_value: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return float(default)
    try:
        v = float(raw)
    except ValueError:
        log.warning("%s inválido (%r); uso default %s", name, raw, default)
        return float(default)
    if not math.isfinite(v):
        return float(default)
    return max(float(min_value), min(float(max_value), v))


def load_geometry_config(base: GeometryConfig | None = None) -> GeometryConfig:
    """GeometryConfig con overrides PVS_* (env) sobre `base` (o defaults)."""
    values = (base or GeometryConfig()).to_dict()
    for key, (env, lo, hi) in _GEOMETRY_KEYS.items():
        field = key.split(".", 1)[1]
        values[field] = _env_float(env, values[field], min_value=lo, max_value=hi)
    return GeometryConfig.from_dict(values)


def default_theme() -> Theme:
    return coerce_theme(os.environ.get(THEME_ENV, ""), Theme.LIGHT)
