import itertools

import pytest

from classforge.config import EditorConfig
from classforge.editor import Editor
from classforge.model import Attribute, Method
from classforge.validate import InvalidDiagramError


@pytest.fixture
def editor():
    counter = itertools.count(1)
    return Editor(id_factory=lambda: f"e{next(counter)}")


def test_add_class_returns_new_id(editor):
    animal = editor.add_class("Animal", 10, 10, [Attribute("name", "String")])
    dog = editor.add_class("Dog")

    assert animal != dog
    assert [c.id for c in editor.diagram.classes] == [animal, dog]
    assert editor.undo_depth == 2


def test_diagram_property_is_a_detached_copy(editor):
    class_id = editor.add_class("Animal")

    view = editor.diagram
    view.classes[0].name = "Hacked"
    view.classes.clear()

    assert editor.diagram.get_class(class_id).name == "Animal"


def test_update_class_with_keyword_fields(editor):
    class_id = editor.add_class("Animal")
    editor.update_class(class_id, name="Creature", methods=[Method("eat")])

    cls = editor.diagram.get_class(class_id)
    assert cls.name == "Creature"
    assert [m.name for m in cls.methods] == ["eat"]


def test_update_class_refuses_id_change(editor):
    class_id = editor.add_class("Animal")
    with pytest.raises(TypeError):
        editor.update_class(class_id, id="other")


def test_add_relation_deduplicates_and_returns_existing_id(editor):
    a = editor.add_class("A")
    b = editor.add_class("B")

    first = editor.add_relation(a, b, "association")
    second = editor.add_relation(b, a, "composition")

    relations = editor.diagram.relations
    assert first == second
    assert len(relations) == 1
    assert relations[0].type == "composition"


def test_add_relation_to_unknown_class_returns_none(editor):
    a = editor.add_class("A")
    depth = editor.undo_depth

    assert editor.add_relation(a, "ghost") is None
    assert editor.undo_depth == depth


def test_relation_update_and_delete(editor):
    a = editor.add_class("A")
    b = editor.add_class("B")
    rel = editor.add_relation(a, b)

    editor.update_relation(rel, type="dependency", source_cardinality="1")
    assert editor.diagram.get_relation(rel).type == "dependency"

    editor.delete_relation(rel)
    assert editor.diagram.relations == []


def test_delete_class_cascades(editor):
    a = editor.add_class("A")
    b = editor.add_class("B")
    editor.add_relation(a, b)
    group = editor.add_group("pair", [a, b])

    editor.delete_class(a)

    diagram = editor.diagram
    assert all(r.source != a and r.target != a for r in diagram.relations)
    assert diagram.get_group(group).members == [b]


def test_idempotent_delete_does_not_grow_history(editor):
    editor.add_class("A")
    depth = editor.undo_depth

    editor.delete_class("missing")
    editor.delete_class("missing")

    assert editor.undo_depth == depth


def test_groups(editor):
    a = editor.add_class("A")
    group = editor.add_group("core", [a])
    editor.update_group(group, name="domain", members=[])

    assert editor.diagram.get_group(group).name == "domain"
    assert editor.diagram.get_group(group).members == []

    editor.remove_group(group)
    assert editor.diagram.groups == []


def test_position_updates_are_not_recorded_but_drags_can_be(editor):
    a = editor.add_class("A", 0, 0)
    depth = editor.undo_depth

    for step in range(10):
        editor.update_class_position(a, step, step)
    assert editor.undo_depth == depth

    editor.begin_move()
    editor.update_class_position(a, 500, 500)
    assert editor.undo_depth == depth + 1

    editor.undo()
    cls = editor.diagram.get_class(a)
    assert (cls.x, cls.y) == (9, 9)


def test_begin_move_without_movement_leaves_no_undo_step(editor):
    a = editor.add_class("A", 0, 0)
    b = editor.add_class("B", 0, 0)
    depth = editor.undo_depth

    editor.begin_move()
    editor.update_class_position(a, 0, 0)
    assert editor.undo_depth == depth

    editor.undo()
    assert editor.diagram.get_class(b) is None
    assert editor.diagram.get_class(a) is not None


def test_malformed_edits_fail_at_the_call_and_leave_state_alone(editor):
    a = editor.add_class("A")
    depth = editor.undo_depth

    with pytest.raises(InvalidDiagramError):
        editor.add_class(None)
    with pytest.raises(InvalidDiagramError):
        editor.update_class(a, name=42)
    with pytest.raises(InvalidDiagramError):
        editor.update_class_position(a, "left", 0)

    assert [c.name for c in editor.diagram.classes] == ["A"]
    assert editor.undo_depth == depth
    editor.add_class("B")
    assert editor.undo_depth == depth + 1


def test_undo_redo_and_redo_clearing(editor):
    editor.add_class("A")
    editor.add_class("B")

    editor.undo()
    assert editor.can_redo()
    assert [c.name for c in editor.diagram.classes] == ["A"]

    editor.redo()
    assert [c.name for c in editor.diagram.classes] == ["A", "B"]

    editor.undo()
    editor.add_class("C")
    assert not editor.can_redo()
    assert editor.redo_depth == 0


def test_reset_diagram(editor):
    editor.add_class("A")
    editor.reset_diagram()
    assert editor.diagram.is_empty()
    editor.undo()
    assert len(editor.diagram.classes) == 1


def test_history_limit_from_config():
    editor = Editor(EditorConfig(history_limit=2))
    for name in "ABCD":
        editor.add_class(name)

    assert editor.undo_depth == 2
    editor.undo()
    editor.undo()
    editor.undo()
    assert [c.name for c in editor.diagram.classes] == ["A", "B"]


def test_export_uses_configured_default_language():
    editor = Editor(EditorConfig(default_language="python"))
    editor.add_class("Animal")

    assert editor.export().startswith("class Animal:")
    assert editor.export("java").startswith("public class Animal {")


def test_default_id_factory_gives_unique_ids():
    editor = Editor()
    ids = {editor.add_class(str(i)) for i in range(50)}
    assert len(ids) == 50
