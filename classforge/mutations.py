# classforge/mutations.py
from __future__ import annotations

import copy
import logging
from typing import Callable, Dict

from .commands import (
    AddClass,
    AddGroup,
    AddRelation,
    Command,
    DeleteClass,
    DeleteRelation,
    MoveClass,
    RemoveGroup,
    ResetDiagram,
    UpdateClass,
    UpdateGroup,
    UpdateRelation,
)
from .constants import RELATION_TYPES
from .ids import IdFactory, fresh_id, new_id
from .model import Diagram, Group, Relation, UmlClass
from .model_view import find_relation_between

logger = logging.getLogger(__name__)

# Handlers mutate a private working copy in place.
Handler = Callable[[Diagram, Command, IdFactory], None]

_HANDLERS: Dict[type, Handler] = {}


def _handles(command_type: type) -> Callable[[Handler], Handler]:
    def deco(fn: Handler) -> Handler:
        _HANDLERS[command_type] = fn
        return fn
    return deco


def apply_mutation(
    diagram: Diagram, command: Command, *, id_factory: IdFactory = new_id
) -> Diagram:
    """Return the diagram that results from applying `command` to `diagram`.

    The input diagram is never modified. Commands addressing an unknown id
    leave the result equal to the input.
    """
    try:
        handler = _HANDLERS[type(command)]
    except KeyError:
        raise TypeError(f"unsupported command: {type(command).__name__}") from None

    work = copy.deepcopy(diagram)
    handler(work, command, id_factory)
    return work


# ---------------- Classes ----------------

@_handles(AddClass)
def _add_class(diagram: Diagram, cmd: AddClass, id_factory: IdFactory) -> None:
    diagram.classes.append(
        UmlClass(
            id=fresh_id(diagram.class_ids(), id_factory),
            name=cmd.name,
            x=cmd.x,
            y=cmd.y,
            attributes=[copy.copy(a) for a in cmd.attributes],
            methods=[copy.copy(m) for m in cmd.methods],
        )
    )


@_handles(UpdateClass)
def _update_class(diagram: Diagram, cmd: UpdateClass, id_factory: IdFactory) -> None:
    cls = diagram.get_class(cmd.id)
    if cls is None:
        logger.debug("update_class: unknown class id %r, ignoring", cmd.id)
        return

    changes = cmd.changes
    if changes.name is not None:
        cls.name = changes.name
    if changes.x is not None:
        cls.x = changes.x
    if changes.y is not None:
        cls.y = changes.y
    if changes.attributes is not None:
        cls.attributes = [copy.copy(a) for a in changes.attributes]
    if changes.methods is not None:
        cls.methods = [copy.copy(m) for m in changes.methods]


@_handles(DeleteClass)
def _delete_class(diagram: Diagram, cmd: DeleteClass, id_factory: IdFactory) -> None:
    if diagram.get_class(cmd.id) is None:
        logger.debug("delete_class: unknown class id %r, ignoring", cmd.id)
        return

    diagram.classes = [c for c in diagram.classes if c.id != cmd.id]
    diagram.relations = [r for r in diagram.relations if not r.touches(cmd.id)]
    for group in diagram.groups:
        group.members = [m for m in group.members if m != cmd.id]


@_handles(MoveClass)
def _move_class(diagram: Diagram, cmd: MoveClass, id_factory: IdFactory) -> None:
    cls = diagram.get_class(cmd.id)
    if cls is None:
        return
    cls.x = cmd.x
    cls.y = cmd.y


# ---------------- Relations ----------------

def _check_relation_type(rel_type: str) -> None:
    if rel_type not in RELATION_TYPES:
        raise ValueError(
            f"unknown relation type {rel_type!r} (expected one of: {', '.join(RELATION_TYPES)})"
        )


@_handles(AddRelation)
def _add_relation(diagram: Diagram, cmd: AddRelation, id_factory: IdFactory) -> None:
    _check_relation_type(cmd.type)
    known = diagram.class_ids()
    if cmd.source not in known or cmd.target not in known:
        logger.debug(
            "add_relation: endpoint not found (%r -> %r), ignoring", cmd.source, cmd.target
        )
        return

    existing = find_relation_between(diagram.relations, cmd.source, cmd.target)
    if existing is not None:
        # Direction-insensitive match: keep id and stored direction.
        existing.type = cmd.type
        existing.source_cardinality = cmd.source_cardinality
        existing.target_cardinality = cmd.target_cardinality
        return

    diagram.relations.append(
        Relation(
            id=fresh_id({r.id for r in diagram.relations}, id_factory),
            source=cmd.source,
            target=cmd.target,
            type=cmd.type,
            source_cardinality=cmd.source_cardinality,
            target_cardinality=cmd.target_cardinality,
        )
    )


@_handles(UpdateRelation)
def _update_relation(diagram: Diagram, cmd: UpdateRelation, id_factory: IdFactory) -> None:
    rel = diagram.get_relation(cmd.id)
    if rel is None:
        logger.debug("update_relation: unknown relation id %r, ignoring", cmd.id)
        return

    changes = cmd.changes
    if changes.type is not None:
        _check_relation_type(changes.type)
    source = changes.source if changes.source is not None else rel.source
    target = changes.target if changes.target is not None else rel.target

    if (source, target) != (rel.source, rel.target):
        known = diagram.class_ids()
        if source not in known or target not in known:
            logger.debug("update_relation: endpoint not found for %r, ignoring", cmd.id)
            return
        if find_relation_between(diagram.relations, source, target, exclude_id=rel.id):
            logger.debug(
                "update_relation: %r would duplicate an existing relation, ignoring", cmd.id
            )
            return

    rel.source = source
    rel.target = target
    if changes.type is not None:
        rel.type = changes.type
    if changes.source_cardinality is not None:
        rel.source_cardinality = changes.source_cardinality
    if changes.target_cardinality is not None:
        rel.target_cardinality = changes.target_cardinality


@_handles(DeleteRelation)
def _delete_relation(diagram: Diagram, cmd: DeleteRelation, id_factory: IdFactory) -> None:
    diagram.relations = [r for r in diagram.relations if r.id != cmd.id]


# ---------------- Groups ----------------

def _known_members(diagram: Diagram, members: tuple[str, ...]) -> list[str]:
    known = diagram.class_ids()
    out: list[str] = []
    for member in members:
        if member in known and member not in out:
            out.append(member)
    return out


@_handles(AddGroup)
def _add_group(diagram: Diagram, cmd: AddGroup, id_factory: IdFactory) -> None:
    diagram.groups.append(
        Group(
            id=fresh_id({g.id for g in diagram.groups}, id_factory),
            name=cmd.name,
            members=_known_members(diagram, cmd.members),
        )
    )


@_handles(UpdateGroup)
def _update_group(diagram: Diagram, cmd: UpdateGroup, id_factory: IdFactory) -> None:
    group = diagram.get_group(cmd.id)
    if group is None:
        logger.debug("update_group: unknown group id %r, ignoring", cmd.id)
        return

    if cmd.changes.name is not None:
        group.name = cmd.changes.name
    if cmd.changes.members is not None:
        group.members = _known_members(diagram, cmd.changes.members)


@_handles(RemoveGroup)
def _remove_group(diagram: Diagram, cmd: RemoveGroup, id_factory: IdFactory) -> None:
    diagram.groups = [g for g in diagram.groups if g.id != cmd.id]


@_handles(ResetDiagram)
def _reset(diagram: Diagram, cmd: ResetDiagram, id_factory: IdFactory) -> None:
    diagram.classes = []
    diagram.relations = []
    diagram.groups = []
