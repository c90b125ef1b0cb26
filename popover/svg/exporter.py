# File: popover/svg/exporter.py
# Project: PopoverShape (PVS)
# Version: 0.4.1
# Status: stable
# Date: 2026-10-16
# Purpose: Export del popover como SVG standalone (relleno + sombras + trazo recortado).
# Notes:
#   - Ids de filter/clipPath con scope por instancia (pf-<id>, pc-<id>): varios
#     popovers en el mismo documento no colisionan.
#   - El trazo se recorta con el propio outline (solo la mitad interior es visible).
from __future__ import annotations

import logging
from pathlib import Path
from xml.etree.ElementTree import Element, SubElement, tostring

from popover.core.models import Theme
from popover.core.popover import RenderResult
from popover.geom.outline import fmt_num
from popover.svg.preview_style import css_rgba, style_for_theme
from popover.utils.errors import PvsIOError, PvsValidationError

log = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"


def build_popover_svg(result: RenderResult, theme: Theme | str = Theme.LIGHT) -> Element:
    """Arma el árbol <svg> del popover.

    Lanza PvsValidationError si el resultado está en bootstrap (sin outline).
    """
    if result.outline is None or result.bounding is None:
        raise PvsValidationError("Popover sin shape (auto-size aún sin medición).")

    st = style_for_theme(theme)
    w = fmt_num(result.bounding.width)
    h = fmt_num(result.bounding.height)
    d = result.outline.to_svg_d()

    svg = Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "version": "1.1",
            "width": w,
            "height": h,
            "viewBox": f"0 0 {w} {h}",
            "fill": "none",
        },
    )

    defs = SubElement(svg, "defs")
    flt = SubElement(
        defs,
        "filter",
        {"id": result.filter_id, "x": "-50%", "y": "-50%", "width": "200%", "height": "200%"},
    )
    for shadow in (st.shadow_near, st.shadow_far):
        SubElement(
            flt,
            "feDropShadow",
            {
                "dx": "0",
                "dy": fmt_num(shadow.dy),
                "stdDeviation": fmt_num(shadow.std),
                "flood-color": css_rgba(shadow.color),
            },
        )
    clip = SubElement(defs, "clipPath", {"id": result.clip_id})
    SubElement(clip, "path", {"d": d})

    SubElement(svg, "path", {"d": d, "fill": css_rgba(st.fill), "filter": f"url(#{result.filter_id})"})
    g = SubElement(svg, "g", {"clip-path": f"url(#{result.clip_id})"})
    SubElement(
        g,
        "path",
        {"d": d, "fill": "none", "stroke": css_rgba(st.stroke), "stroke-width": fmt_num(st.stroke_width)},
    )
    return svg


def render_popover_svg(result: RenderResult, theme: Theme | str = Theme.LIGHT) -> str:
    return tostring(build_popover_svg(result, theme), encoding="unicode")


def export_popover_svg(result: RenderResult, out_path: str | Path, theme: Theme | str = Theme.LIGHT) -> Path:
    """Escribe el SVG del popover. Fuerza extensión .svg."""
    p = Path(out_path)
    if p.suffix.lower() != ".svg":
        p = p.with_suffix(".svg")

    xml = render_popover_svg(result, theme)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(xml, encoding="utf-8")
    except OSError as e:
        raise PvsIOError(f"No se pudo exportar SVG: {p}") from e
    log.info("SVG exportado: %s (%s)", p, result.instance_id)
    return p
