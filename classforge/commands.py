"""Typed commands accepted by `classforge.mutations.apply_mutation`.

Every user intent maps to exactly one command. Update commands carry an
explicit update struct whose fields default to None, meaning "leave as is".
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from .constants import DEFAULT_RELATION_TYPE
from .model import Attribute, ClassId, Method, Number


@dataclass(frozen=True)
class ClassUpdate:
    name: Optional[str] = None
    x: Optional[Number] = None
    y: Optional[Number] = None
    attributes: Optional[tuple[Attribute, ...]] = None
    methods: Optional[tuple[Method, ...]] = None


@dataclass(frozen=True)
class RelationUpdate:
    source: Optional[ClassId] = None
    target: Optional[ClassId] = None
    type: Optional[str] = None
    source_cardinality: Optional[str] = None
    target_cardinality: Optional[str] = None


@dataclass(frozen=True)
class GroupUpdate:
    name: Optional[str] = None
    members: Optional[tuple[ClassId, ...]] = None


@dataclass(frozen=True)
class AddClass:
    recorded: ClassVar[bool] = True

    name: str = ""
    x: Number = 0
    y: Number = 0
    attributes: tuple[Attribute, ...] = ()
    methods: tuple[Method, ...] = ()


@dataclass(frozen=True)
class UpdateClass:
    recorded: ClassVar[bool] = True

    id: ClassId
    changes: ClassUpdate = field(default_factory=ClassUpdate)


@dataclass(frozen=True)
class DeleteClass:
    recorded: ClassVar[bool] = True

    id: ClassId


@dataclass(frozen=True)
class MoveClass:
    # Drag updates arrive per frame; they never enter history on their own.
    recorded: ClassVar[bool] = False

    id: ClassId
    x: Number
    y: Number


@dataclass(frozen=True)
class AddRelation:
    recorded: ClassVar[bool] = True

    source: ClassId
    target: ClassId
    type: str = DEFAULT_RELATION_TYPE
    source_cardinality: Optional[str] = None
    target_cardinality: Optional[str] = None


@dataclass(frozen=True)
class UpdateRelation:
    recorded: ClassVar[bool] = True

    id: str
    changes: RelationUpdate = field(default_factory=RelationUpdate)


@dataclass(frozen=True)
class DeleteRelation:
    recorded: ClassVar[bool] = True

    id: str


@dataclass(frozen=True)
class AddGroup:
    recorded: ClassVar[bool] = True

    name: str = ""
    members: tuple[ClassId, ...] = ()


@dataclass(frozen=True)
class UpdateGroup:
    recorded: ClassVar[bool] = True

    id: str
    changes: GroupUpdate = field(default_factory=GroupUpdate)


@dataclass(frozen=True)
class RemoveGroup:
    recorded: ClassVar[bool] = True

    id: str


@dataclass(frozen=True)
class ResetDiagram:
    recorded: ClassVar[bool] = True


Command = Union[
    AddClass,
    UpdateClass,
    DeleteClass,
    MoveClass,
    AddRelation,
    UpdateRelation,
    DeleteRelation,
    AddGroup,
    UpdateGroup,
    RemoveGroup,
    ResetDiagram,
]
