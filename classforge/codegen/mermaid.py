from __future__ import annotations

from ..model import Relation, UmlClass
from ..mermaid_fmt import (
    mm_class_decl,
    mm_class_member,
    mm_class_relation,
    mm_safe_name,
    mm_unique_id,
)

VISIBILITY_MARKERS: dict[str, str] = {
    "public": "+",
    "private": "-",
    "protected": "#",
    "package": "~",
}

# Arrow drawn from relation.source to relation.target.
RELATION_ARROWS: dict[str, str] = {
    "generalization": "<|--",
    "implementation": "<|..",
    "composition": "*--",
    "aggregation": "o--",
    "association": "-->",
    "dependency": "..>",
}


def gen_class_diagram(classes: list[UmlClass], relations: list[Relation]) -> str:
    """Generate a Mermaid classDiagram covering classes, members and relations."""
    used: set[str] = set()
    node_ids: dict[str, str] = {}

    lines: list[str] = ["classDiagram"]

    for cls in classes:
        if cls.id in node_ids:
            continue
        node_id = mm_unique_id(mm_safe_name(cls.name), used)
        node_ids[cls.id] = node_id
        lines.append(mm_class_decl(node_id, None if node_id == cls.name else cls.name))

        for attr in cls.attributes:
            marker = VISIBILITY_MARKERS.get(attr.access, "")
            text = f"{marker}{attr.type} {attr.name}" if attr.type else f"{marker}{attr.name}"
            lines.append(mm_class_member(node_id, text))

        for method in cls.methods:
            marker = VISIBILITY_MARKERS.get(method.access, "")
            lines.append(mm_class_member(node_id, f"{marker}{method.name}() {method.return_type}"))

    for rel in relations:
        src, dst = node_ids.get(rel.source), node_ids.get(rel.target)
        arrow = RELATION_ARROWS.get(rel.type)
        if src is None or dst is None or arrow is None:
            continue
        lines.append(
            mm_class_relation(
                src,
                arrow,
                dst,
                a_card=rel.source_cardinality,
                b_card=rel.target_cardinality,
            )
        )

    return "\n".join(lines) + "\n"
