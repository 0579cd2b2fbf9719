"""Editor controller: the single owner of one session's diagram and history."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from . import history
from .codegen import generate
from .commands import (
    AddClass,
    AddGroup,
    AddRelation,
    ClassUpdate,
    Command,
    DeleteClass,
    DeleteRelation,
    GroupUpdate,
    MoveClass,
    RelationUpdate,
    RemoveGroup,
    ResetDiagram,
    UpdateClass,
    UpdateGroup,
    UpdateRelation,
)
from .config import EditorConfig
from .constants import DEFAULT_RELATION_TYPE
from .history import EditorState
from .ids import IdFactory, fresh_id, new_id
from .model import Attribute, ClassId, Diagram, Method, Number
from .model_view import find_relation_between

logger = logging.getLogger(__name__)


class Editor:
    """Owns an `EditorState` and exposes the editing operations.

    All reads return independent copies, so callers can never alias the live
    diagram. Every operation except `update_class_position` goes through the
    history.
    """

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        *,
        id_factory: IdFactory = new_id,
    ) -> None:
        self.config = config or EditorConfig()
        self._id_factory = id_factory
        self._state = EditorState()

    # ---------------- State access ----------------

    @property
    def undo_depth(self) -> int:
        return len(self._state.past)

    @property
    def redo_depth(self) -> int:
        return len(self._state.future)

    @property
    def diagram(self) -> Diagram:
        return history.snapshot(self._state.diagram)

    def can_undo(self) -> bool:
        return self._state.can_undo

    def can_redo(self) -> bool:
        return self._state.can_redo

    def dispatch(self, command: Command) -> None:
        self._state = history.commit(
            self._state,
            command,
            limit=self.config.history_limit,
            id_factory=self._id_factory,
        )

    def _dispatch_with_id(self, command: Command, taken: set[str]) -> str:
        new_entity_id = fresh_id(taken, self._id_factory)
        self._state = history.commit(
            self._state,
            command,
            limit=self.config.history_limit,
            id_factory=lambda: new_entity_id,
        )
        return new_entity_id

    # ---------------- Classes ----------------

    def add_class(
        self,
        name: str,
        x: Number = 0,
        y: Number = 0,
        attributes: Iterable[Attribute] = (),
        methods: Iterable[Method] = (),
    ) -> ClassId:
        cmd = AddClass(
            name=name, x=x, y=y, attributes=tuple(attributes), methods=tuple(methods)
        )
        return self._dispatch_with_id(cmd, self._state.diagram.class_ids())

    def update_class(self, class_id: ClassId, **changes: Any) -> None:
        for key in ("attributes", "methods"):
            if changes.get(key) is not None:
                changes[key] = tuple(changes[key])
        self.dispatch(UpdateClass(class_id, ClassUpdate(**changes)))

    def delete_class(self, class_id: ClassId) -> None:
        self.dispatch(DeleteClass(class_id))

    def update_class_position(self, class_id: ClassId, x: Number, y: Number) -> None:
        self.dispatch(MoveClass(class_id, x, y))

    def begin_move(self) -> None:
        """Mark the start of a drag so the whole drag undoes as one step."""
        self._state = history.checkpoint(self._state)

    # ---------------- Relations ----------------

    def add_relation(
        self,
        source: ClassId,
        target: ClassId,
        type: str = DEFAULT_RELATION_TYPE,
        source_cardinality: Optional[str] = None,
        target_cardinality: Optional[str] = None,
    ) -> Optional[str]:
        """Connect two classes; returns the relation id, or None if an end is unknown.

        If the pair is already connected the existing relation is updated and
        its id returned.
        """
        cmd = AddRelation(
            source=source,
            target=target,
            type=type,
            source_cardinality=source_cardinality,
            target_cardinality=target_cardinality,
        )
        diagram = self._state.diagram
        existing = find_relation_between(diagram.relations, source, target)
        if existing is not None:
            self.dispatch(cmd)
            return existing.id

        relation_id = self._dispatch_with_id(cmd, {r.id for r in diagram.relations})
        if self._state.diagram.get_relation(relation_id) is None:
            return None
        return relation_id

    def update_relation(self, relation_id: str, **changes: Any) -> None:
        self.dispatch(UpdateRelation(relation_id, RelationUpdate(**changes)))

    def delete_relation(self, relation_id: str) -> None:
        self.dispatch(DeleteRelation(relation_id))

    # ---------------- Groups ----------------

    def add_group(self, name: str, members: Iterable[ClassId] = ()) -> str:
        cmd = AddGroup(name=name, members=tuple(members))
        return self._dispatch_with_id(cmd, {g.id for g in self._state.diagram.groups})

    def update_group(self, group_id: str, **changes: Any) -> None:
        if changes.get("members") is not None:
            changes["members"] = tuple(changes["members"])
        self.dispatch(UpdateGroup(group_id, GroupUpdate(**changes)))

    def remove_group(self, group_id: str) -> None:
        self.dispatch(RemoveGroup(group_id))

    # ---------------- Whole diagram ----------------

    def reset_diagram(self) -> None:
        self.dispatch(ResetDiagram())

    def undo(self) -> None:
        self._state = history.undo(self._state)

    def redo(self) -> None:
        self._state = history.redo(self._state)

    def export(self, language: Optional[str] = None) -> str:
        """Generate code for the current diagram (default language from config)."""
        diagram = self._state.diagram
        return generate(
            diagram.classes,
            diagram.relations,
            language or self.config.default_language,
        )
