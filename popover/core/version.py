"""PVS - version + geometry defaults.

Imported by models, geometry, svg export and the CLI; no side effects.
"""

APP_NAME = "PopoverShape"
APP_SHORT = "PVS"

# Versión semántica (mantener en sync con pyproject.toml).
APP_VERSION = "0.4.2"

# Defaults de geometría (px / unidades CSS).
# La tabla de la flecha está dibujada para 48x12.
DEFAULT_RADIUS = 24.0
DEFAULT_ARROW_WIDTH = 48.0
DEFAULT_ARROW_HEIGHT = 12.0
DEFAULT_MIN_BODY = 100.0
DEFAULT_ANCHOR_GAP = 4.0
