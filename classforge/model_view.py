from __future__ import annotations

from typing import Any, Iterable, Optional

from .model import Attribute, Method, Relation, UmlClass


def as_str(value: Any, default: str = "") -> str:
    """Convert a value to str, treating None as the default."""
    if value is None:
        return default
    return str(value)


def as_class(item: Any) -> Optional[UmlClass]:
    """View an entity as a UmlClass, accepting objects or mappings.

    Returns None for anything that cannot be read as a class; callers skip it.
    """
    if isinstance(item, UmlClass):
        return item
    if not isinstance(item, dict):
        return None

    class_id = item.get("id")
    if not isinstance(class_id, str) or not class_id:
        return None

    attributes: list[Attribute] = []
    for attr in item.get("attributes", []) or []:
        if isinstance(attr, Attribute):
            attributes.append(attr)
        elif isinstance(attr, dict) and attr.get("name") is not None:
            attributes.append(
                Attribute(
                    name=as_str(attr.get("name")),
                    type=as_str(attr.get("type")),
                    access=as_str(attr.get("access"), "public"),
                )
            )

    methods: list[Method] = []
    for method in item.get("methods", []) or []:
        if isinstance(method, Method):
            methods.append(method)
        elif isinstance(method, dict) and method.get("name") is not None:
            methods.append(
                Method(
                    name=as_str(method.get("name")),
                    return_type=as_str(method.get("return_type"), "void"),
                    access=as_str(method.get("access"), "public"),
                )
            )

    return UmlClass(
        id=class_id,
        name=as_str(item.get("name")),
        attributes=attributes,
        methods=methods,
    )


def as_relation(item: Any) -> Optional[Relation]:
    if isinstance(item, Relation):
        return item
    if not isinstance(item, dict):
        return None

    rel_id, src, dst = item.get("id"), item.get("source"), item.get("target")
    if not (isinstance(src, str) and isinstance(dst, str)):
        return None

    return Relation(
        id=as_str(rel_id),
        source=src,
        target=dst,
        type=as_str(item.get("type"), "association"),
        source_cardinality=item.get("source_cardinality"),
        target_cardinality=item.get("target_cardinality"),
    )


def view_classes(items: Iterable[Any]) -> list[UmlClass]:
    """Readable classes in input order; unreadable entries are dropped."""
    out: list[UmlClass] = []
    for item in items or []:
        cls = as_class(item)
        if cls is not None:
            out.append(cls)
    return out


def view_relations(items: Iterable[Any]) -> list[Relation]:
    out: list[Relation] = []
    for item in items or []:
        rel = as_relation(item)
        if rel is not None:
            out.append(rel)
    return out


def build_class_index(classes: Iterable[UmlClass]) -> dict[str, UmlClass]:
    """Index classes by id; the first class wins on duplicate ids."""
    index: dict[str, UmlClass] = {}
    for cls in classes:
        index.setdefault(cls.id, cls)
    return index


def find_parent(
    cls: UmlClass, relations: Iterable[Relation], index: dict[str, UmlClass]
) -> Optional[UmlClass]:
    """Resolve the parent of `cls` through its first generalization edge.

    A generalization points from parent (`source`) to child (`target`). Only the
    first matching edge is considered; if its source is unknown there is no
    parent.
    """
    for rel in relations:
        if rel.type == "generalization" and rel.target == cls.id:
            return index.get(rel.source)
    return None


def find_relation_between(
    relations: Iterable[Relation], a: str, b: str, *, exclude_id: Optional[str] = None
) -> Optional[Relation]:
    """First relation connecting `a` and `b` in either direction."""
    for rel in relations:
        if exclude_id is not None and rel.id == exclude_id:
            continue
        if rel.connects(a, b):
            return rel
    return None
