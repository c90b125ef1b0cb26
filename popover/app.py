# File: popover/app.py
# Project: PopoverShape (PVS)
# Version: 0.4.2
# Status: stable
# Date: 2026-10-16
# Purpose: Entry-point CLI: exporta un popover a SVG.
# Notes:
#   - Sin --width/--height el eje es auto: se usa --content-size como tamaño natural.
#   - Defaults de geometría/tema desde pvs_settings.json + env vars PVS_*.
from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import Any, Callable, Optional, Sequence

from popover.core.models import ArrowAlign, Placement, Size, coerce_theme
from popover.core.popover import Popover
from popover.core.settings import apply_project_settings, default_theme, load_geometry_config
from popover.core.version import APP_SHORT, APP_VERSION
from popover.svg.exporter import export_popover_svg
from popover.utils.errors import PvsError, PvsValidationError
from popover.utils.log import get_logger, setup_logging

log = get_logger(__name__)

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*[xX]\s*(\d+(?:\.\d+)?)\s*$")


class FixedSizeHost:
    """Host de medición estático: el contenido mide siempre `natural`."""

    def __init__(self, natural: Size) -> None:
        self._natural = natural

    def measure_natural_size(self, content: Any) -> Size:
        return self._natural

    def on_natural_size_change(self, content: Any, callback: Callable[[], None]) -> Callable[[], None]:
        # El tamaño nunca cambia: nada que escuchar.
        return lambda: None


def parse_size(s: str) -> Size:
    m = _SIZE_RE.match(s or "")
    if not m:
        raise PvsValidationError(f"Tamaño inválido {s!r} (formato: WxH, ej. 140x40)")
    return Size(float(m.group(1)), float(m.group(2)))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="popover", description=f"{APP_SHORT} v{APP_VERSION}: exporta un popover a SVG.")
    ap.add_argument("out", help="Ruta del SVG de salida")
    ap.add_argument("--placement", choices=[p.value for p in Placement], default=Placement.TOP.value)
    ap.add_argument("--align", choices=[a.value for a in ArrowAlign], default=ArrowAlign.CENTER.value)
    ap.add_argument("--width", type=float, default=None, help="Ancho explícito (omitir = auto)")
    ap.add_argument("--height", type=float, default=None, help="Alto explícito (omitir = auto)")
    ap.add_argument("--content-size", default="0x0", help="Tamaño natural del contenido para ejes auto (WxH)")
    ap.add_argument("--theme", choices=["light", "dark"], default=None, help="Tema (default: settings/env)")
    ap.add_argument("--verbose", action="store_true", help="Log DEBUG.")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    apply_project_settings(logger=log, prefer_env=True)

    try:
        config = load_geometry_config()
        theme = coerce_theme(args.theme, default_theme()) if args.theme else default_theme()
        natural = parse_size(args.content_size)
        with Popover(
            None,
            measurer=FixedSizeHost(natural),
            placement=args.placement,
            arrow_align=args.align,
            width=args.width,
            height=args.height,
            theme=theme,
            config=config,
        ) as pop:
            out = export_popover_svg(pop.render(), args.out, theme)
    except PvsError as e:
        log.error("%s", e)
        return 2

    print(out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
