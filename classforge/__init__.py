"""
classforge: editor state core for UML class diagrams.

 - Entity shapes in model.py, typed commands in commands.py
 - Pure mutations in mutations.py, snapshot undo/redo in history.py
 - Editor controller (one per session) in editor.py
 - Code export per target language in codegen/*
 - YAML config/diagram loading in io.py, CLI wiring in cli.py
"""
from .codegen import available_languages, generate
from .config import EditorConfig
from .editor import Editor
from .history import EditorState, checkpoint, commit, redo, snapshot, undo
from .model import Attribute, Diagram, Group, Method, Relation, UmlClass
from .mutations import apply_mutation
from .validate import InvalidDiagramError

__all__ = [
    "Attribute",
    "Diagram",
    "Editor",
    "EditorConfig",
    "EditorState",
    "Group",
    "InvalidDiagramError",
    "Method",
    "Relation",
    "UmlClass",
    "apply_mutation",
    "available_languages",
    "checkpoint",
    "commit",
    "generate",
    "redo",
    "snapshot",
    "undo",
]
