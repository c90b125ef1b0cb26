from __future__ import annotations

import json
import os

import pytest

from popover.core.models import GeometryConfig, Theme
from popover.core.settings import (
    PROJECT_SETTINGS_FILENAME,
    apply_project_settings,
    default_theme,
    find_project_settings_path,
    load_geometry_config,
    load_project_settings,
)
from popover.utils.errors import PvsValidationError


def _write_settings(path, data):
    p = path / PROJECT_SETTINGS_FILENAME
    p.write_text(json.dumps(data), encoding="utf-8")
    return p


def test_settings_found_in_parent_dir(tmp_path):
    p = _write_settings(tmp_path, {"theme": "dark"})
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_project_settings_path(nested) == p.resolve()


def test_invalid_json_is_ignored(tmp_path):
    (tmp_path / PROJECT_SETTINGS_FILENAME).write_text("{nope", encoding="utf-8")
    assert load_project_settings(tmp_path) == {}
    assert apply_project_settings(tmp_path) == {}


def test_apply_sets_env_and_skips_bad_values(tmp_path):
    _write_settings(
        tmp_path,
        {"geometry": {"radius": 16, "arrow_width": "wide", "gap": -3}, "theme": "Dark"},
    )
    applied = apply_project_settings(tmp_path)
    assert applied == {"geometry.radius": 16.0, "theme": "dark"}
    assert os.environ["PVS_RADIUS"] == "16.0"
    assert "PVS_ARROW_WIDTH" not in os.environ
    assert "PVS_GAP" not in os.environ
    assert default_theme() == Theme.DARK


def test_env_wins_unless_json_preferred(tmp_path, monkeypatch):
    _write_settings(tmp_path, {"geometry": {"radius": 16}})
    monkeypatch.setenv("PVS_RADIUS", "30")
    apply_project_settings(tmp_path)
    assert os.environ["PVS_RADIUS"] == "30"
    apply_project_settings(tmp_path, prefer_env=False)
    assert os.environ["PVS_RADIUS"] == "16.0"


def test_geometry_config_from_env(monkeypatch):
    monkeypatch.setenv("PVS_RADIUS", "10")
    monkeypatch.setenv("PVS_ARROW_HEIGHT", "9999")
    monkeypatch.setenv("PVS_GAP", "oops")
    cfg = load_geometry_config()
    assert cfg.radius == 10.0
    assert cfg.arrow_height == 256.0
    assert cfg.gap == GeometryConfig().gap
    assert cfg.arrow_width == 48.0


def test_default_theme_falls_back_to_light(monkeypatch):
    assert default_theme() == Theme.LIGHT
    monkeypatch.setenv("PVS_THEME", "sepia")
    assert default_theme() == Theme.LIGHT


def test_geometry_config_validation():
    with pytest.raises(PvsValidationError):
        GeometryConfig(radius=-1.0)
    with pytest.raises(PvsValidationError):
        GeometryConfig.from_dict({"gap": "far"})
    assert GeometryConfig.from_dict(GeometryConfig(radius=5).to_dict()).radius == 5.0
