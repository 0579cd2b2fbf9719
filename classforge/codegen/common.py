from __future__ import annotations

from ..model import Relation, UmlClass
from ..model_view import build_class_index, find_parent


def capitalize(name: str) -> str:
    """Upper-case the first character only (`firstName` -> `FirstName`)."""
    return name[:1].upper() + name[1:]


def parents_by_class(
    classes: list[UmlClass], relations: list[Relation]
) -> dict[str, UmlClass]:
    """Map class id -> parent class for every class with a resolvable parent."""
    index = build_class_index(classes)
    out: dict[str, UmlClass] = {}
    for cls in classes:
        parent = find_parent(cls, relations, index)
        if parent is not None:
            out[cls.id] = parent
    return out
