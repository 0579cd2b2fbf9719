# classforge/constants.py
from __future__ import annotations

DIAGRAM_SECTIONS: tuple[str, ...] = (
    "classes",
    "relations",
    "groups",
)

RELATION_TYPES: tuple[str, ...] = (
    "association",
    "aggregation",
    "composition",
    "generalization",
    "implementation",
    "dependency",
)

# Access levels offered by the class form; anything else is tolerated but flagged.
ACCESS_LEVELS: tuple[str, ...] = (
    "public",
    "private",
    "protected",
    "package",
)

DEFAULT_ACCESS = "public"
DEFAULT_RELATION_TYPE = "association"
DEFAULT_LANGUAGE = "java"

# Optional top-level section name in config files.
CONFIG_SECTION = "editor"
