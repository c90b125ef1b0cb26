from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from popover.core.popover import Popover
from popover.svg.exporter import build_popover_svg, export_popover_svg, render_popover_svg
from popover.svg.preview_style import css_rgba, style_for_theme
from popover.utils.errors import PvsIOError, PvsValidationError

NS = {"svg": "http://www.w3.org/2000/svg"}


def _parse(result, theme="light"):
    return ET.fromstring(render_popover_svg(result, theme))


def test_svg_document_structure():
    result = Popover(width=200, height=120, instance_id="abc12345").render()
    root = _parse(result)

    assert root.get("width") == "200"
    assert root.get("height") == "132"
    assert root.get("viewBox") == "0 0 200 132"

    flt = root.find("svg:defs/svg:filter", NS)
    assert flt.get("id") == "pf-abc12345"
    assert len(flt.findall("svg:feDropShadow", NS)) == 2
    assert root.find("svg:defs/svg:clipPath", NS).get("id") == "pc-abc12345"

    paths = root.findall(".//svg:path", NS)
    assert len(paths) == 3
    d = result.outline.to_svg_d()
    assert all(p.get("d") == d for p in paths)

    body = root.find("svg:path", NS)
    assert body.get("filter") == "url(#pf-abc12345)"
    assert body.get("fill") == css_rgba(style_for_theme("light").fill)

    g = root.find("svg:g", NS)
    assert g.get("clip-path") == "url(#pc-abc12345)"
    assert g.find("svg:path", NS).get("stroke") == "rgba(255,255,255,0.5)"


def test_dark_theme_changes_colors_only():
    result = Popover(width=200, height=120, instance_id="dark0001").render()
    light = _parse(result, "light")
    dark = _parse(result, "dark")
    assert dark.find("svg:path", NS).get("fill") == "rgba(43,47,51,0.7)"
    assert dark.find("svg:path", NS).get("d") == light.find("svg:path", NS).get("d")
    assert dark.get("viewBox") == light.get("viewBox")


def test_two_popovers_do_not_share_ids():
    a = build_popover_svg(Popover(width=150, height=150).render())
    b = build_popover_svg(Popover(width=150, height=150).render())
    ids_a = {el.get("id") for el in a.iter() if el.get("id")}
    ids_b = {el.get("id") for el in b.iter() if el.get("id")}
    assert len(ids_a) == 2
    assert not ids_a & ids_b


def test_bootstrap_result_cannot_be_exported():
    with pytest.raises(PvsValidationError):
        build_popover_svg(Popover("content").render())


def test_export_forces_svg_suffix(tmp_path):
    result = Popover(width=120, height=100, placement="right").render()
    out = export_popover_svg(result, tmp_path / "nested" / "shape.txt")
    assert out == tmp_path / "nested" / "shape.svg"
    root = ET.parse(out).getroot()
    assert root.get("width") == "132"


def test_export_io_error_is_wrapped(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    result = Popover(width=120, height=100).render()
    with pytest.raises(PvsIOError):
        export_popover_svg(result, blocker / "shape.svg")
