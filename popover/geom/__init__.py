"""Geometry engine.

Curve table, outline builder, auto-size, content frame and anchor
positioning are pure Python. Only the outline report (`outline_report`)
parses paths with svgelements.
"""

from __future__ import annotations
