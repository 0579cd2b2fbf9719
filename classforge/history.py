"""Linear undo/redo over whole-diagram snapshots.

`EditorState` bundles the live diagram with its two history stacks. Every
function here is a pure transition `EditorState -> EditorState`; nothing is
modified in place, so an old state value stays valid after a transition.

Snapshots are taken through `snapshot()`, which validates the diagram and
rebuilds it from its mapping form. A snapshot therefore shares no mutable
object with the live diagram or with any other snapshot.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Optional

from .commands import Command
from .ids import IdFactory, new_id
from .model import Diagram
from .mutations import apply_mutation
from .validate import require_valid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorState:
    diagram: Diagram = field(default_factory=Diagram)
    # Oldest first; the last entry is the most recent pre-mutation state.
    past: tuple[Diagram, ...] = ()
    # The last entry is the next diagram to redo.
    future: tuple[Diagram, ...] = ()
    # Set by checkpoint(); becomes an undo step only once a position update
    # actually changes the diagram.
    pending: Optional[Diagram] = None

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)


def snapshot(diagram: Diagram) -> Diagram:
    """Deep, independent copy of `diagram`.

    Raises InvalidDiagramError if the diagram is structurally malformed.
    """
    data = diagram.to_dict()
    require_valid(data)
    return Diagram.from_dict(data)


def _push(stack: tuple[Diagram, ...], item: Diagram, limit: Optional[int]) -> tuple[Diagram, ...]:
    out = stack + (item,)
    if limit is not None and len(out) > limit:
        logger.debug("history limit %d reached, dropping %d oldest entries", limit, len(out) - limit)
        out = out[len(out) - limit:]
    return out


def commit(
    state: EditorState,
    command: Command,
    *,
    limit: Optional[int] = None,
    id_factory: IdFactory = new_id,
) -> EditorState:
    """Apply `command` and record the pre-mutation diagram if needed.

    Unrecorded commands (position updates) replace the diagram and leave both
    stacks alone, unless a checkpoint is pending. A recorded command that
    changes nothing returns `state` unchanged, so no-op updates and deletes
    never create an undo step.

    Raises InvalidDiagramError if the result is malformed (e.g. a non-string
    class name); `state` is never replaced in that case.
    """
    updated = apply_mutation(state.diagram, command, id_factory=id_factory)
    require_valid(updated.to_dict())

    if not command.recorded:
        if state.pending is None or updated == state.diagram:
            return replace(state, diagram=updated)
        return EditorState(
            diagram=updated,
            past=_push(state.past, state.pending, limit),
            future=(),
        )

    if updated == state.diagram:
        logger.debug("%s changed nothing, not recorded", type(command).__name__)
        return state

    return EditorState(
        diagram=updated,
        past=_push(state.past, snapshot(state.diagram), limit),
        future=(),
    )


def checkpoint(state: EditorState) -> EditorState:
    """Mark the current diagram as the undo point for the next position update.

    Nothing is recorded until a position update changes the diagram, so a
    drag that never moves leaves the history untouched.
    """
    return replace(state, pending=snapshot(state.diagram))


def undo(state: EditorState) -> EditorState:
    if not state.past:
        return state

    previous = state.past[-1]
    logger.debug("undo: %d step(s) left", len(state.past) - 1)
    return EditorState(
        diagram=snapshot(previous),
        past=state.past[:-1],
        future=state.future + (snapshot(state.diagram),),
    )


def redo(state: EditorState) -> EditorState:
    if not state.future:
        return state

    following = state.future[-1]
    logger.debug("redo: %d step(s) left", len(state.future) - 1)
    return EditorState(
        diagram=snapshot(following),
        past=state.past + (snapshot(state.diagram),),
        future=state.future[:-1],
    )
