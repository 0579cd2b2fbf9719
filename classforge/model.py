"""Entity shapes of a class diagram.

All entities are plain dataclasses. They are owned by exactly one `Diagram`;
code that needs to keep a copy across mutations goes through
`classforge.history.snapshot`, never through shared references.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Optional, Union

from .constants import DEFAULT_ACCESS, DEFAULT_RELATION_TYPE

ClassId = str
Number = Union[int, float]


@dataclass
class Attribute:
    name: str
    type: str = ""
    access: str = DEFAULT_ACCESS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Attribute":
        return cls(
            name=data["name"],
            type=data.get("type", "") or "",
            access=data.get("access", DEFAULT_ACCESS) or DEFAULT_ACCESS,
        )


@dataclass
class Method:
    name: str
    return_type: str = "void"
    access: str = DEFAULT_ACCESS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Method":
        return cls(
            name=data["name"],
            return_type=data.get("return_type", "void") or "void",
            access=data.get("access", DEFAULT_ACCESS) or DEFAULT_ACCESS,
        )


@dataclass
class UmlClass:
    id: ClassId
    name: str
    x: Number = 0
    y: Number = 0
    attributes: list[Attribute] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UmlClass":
        return cls(
            id=data["id"],
            name=data.get("name", "") or "",
            x=data.get("x", 0),
            y=data.get("y", 0),
            attributes=[Attribute.from_dict(a) for a in data.get("attributes", []) or []],
            methods=[Method.from_dict(m) for m in data.get("methods", []) or []],
        )


@dataclass
class Relation:
    id: str
    source: ClassId
    target: ClassId
    type: str = DEFAULT_RELATION_TYPE
    source_cardinality: Optional[str] = None
    target_cardinality: Optional[str] = None

    def connects(self, a: ClassId, b: ClassId) -> bool:
        """True when this relation joins `a` and `b`, in either direction."""
        return (self.source == a and self.target == b) or (
            self.source == b and self.target == a
        )

    def touches(self, class_id: ClassId) -> bool:
        return self.source == class_id or self.target == class_id

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Relation":
        return cls(
            id=data["id"],
            source=data["source"],
            target=data["target"],
            type=data.get("type", DEFAULT_RELATION_TYPE) or DEFAULT_RELATION_TYPE,
            source_cardinality=data.get("source_cardinality"),
            target_cardinality=data.get("target_cardinality"),
        )


@dataclass
class Group:
    id: str
    name: str = ""
    members: list[ClassId] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Group":
        return cls(
            id=data["id"],
            name=data.get("name", "") or "",
            members=list(data.get("members", []) or []),
        )


@dataclass
class Diagram:
    classes: list[UmlClass] = field(default_factory=list)
    relations: list[Relation] = field(default_factory=list)
    groups: list[Group] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.classes or self.relations or self.groups)

    def class_ids(self) -> set[ClassId]:
        return {c.id for c in self.classes}

    def get_class(self, class_id: ClassId) -> Optional[UmlClass]:
        for cls in self.classes:
            if cls.id == class_id:
                return cls
        return None

    def get_relation(self, relation_id: str) -> Optional[Relation]:
        for rel in self.relations:
            if rel.id == relation_id:
                return rel
        return None

    def get_group(self, group_id: str) -> Optional[Group]:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping form (lists/dicts/scalars only), detached from self."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Diagram":
        """Build a Diagram from a mapping that already passed validation."""
        return cls(
            classes=[UmlClass.from_dict(c) for c in data.get("classes", []) or []],
            relations=[Relation.from_dict(r) for r in data.get("relations", []) or []],
            groups=[Group.from_dict(g) for g in data.get("groups", []) or []],
        )
