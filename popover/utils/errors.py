# File: popover/utils/errors.py
# Project: PopoverShape (PVS)
# Version: 0.2.0
# Status: stable
# Date: 2026-10-12
# Purpose: Errores tipados del proyecto.
# Notes: La geometría no lanza errores (clamp); estos tipos son para config/E/S.
from __future__ import annotations


class PvsError(Exception):
    """Error base del proyecto."""


class PvsValidationError(PvsError):
    """Error de validación (config/CLI/valores de entrada)."""


class PvsIOError(PvsError):
    """Error de E/S (lectura/escritura de SVG o settings)."""
