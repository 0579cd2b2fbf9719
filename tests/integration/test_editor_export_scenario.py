import pytest

from classforge import Editor, generate
from classforge.model import Attribute, Method


@pytest.mark.integration
def test_animal_dog_generalization_exports_subclass():
    """
    Start empty, add Animal and Dog, connect them with a generalization
    (parent = source, child = target) and export to Java.
    """
    editor = Editor()
    animal = editor.add_class("Animal", 40, 40, [Attribute("name", "String", "private")])
    dog = editor.add_class("Dog", 40, 240, methods=[Method("bark", "void")])
    relation = editor.add_relation(source=animal, target=dog, type="generalization")

    diagram = editor.diagram
    assert relation is not None

    code = generate(diagram.classes, diagram.relations, "java")

    assert "public class Dog extends Animal {" in code
    assert "public class Animal {" in code
    assert code == generate(diagram.classes, diagram.relations, "java")


@pytest.mark.integration
def test_generalization_from_child_to_parent_makes_the_target_the_superclass():
    """
    The parent of a generalization is always its source: connecting
    source=Dog, target=Animal declares Animal as the subclass of Dog.
    """
    editor = Editor()
    animal = editor.add_class("Animal")
    dog = editor.add_class("Dog")
    editor.add_relation(source=dog, target=animal, type="generalization")

    diagram = editor.diagram
    code = generate(diagram.classes, diagram.relations, "java")

    assert "public class Animal extends Dog {" in code
    assert "public class Dog {" in code
    assert "Dog <|-- Animal" in generate(diagram.classes, diagram.relations, "mermaid")


@pytest.mark.integration
def test_editing_session_undo_all_then_redo_all():
    editor = Editor()
    a = editor.add_class("Animal")
    b = editor.add_class("Dog")
    c = editor.add_class("Cat")
    editor.add_relation(a, b, "generalization")
    editor.add_relation(a, c, "generalization")
    editor.add_relation(c, b, "association", "1", "0..*")
    editor.add_group("Pets", [b, c])
    editor.update_class(a, attributes=[Attribute("legs", "int")])
    editor.delete_class(c)
    editor.update_class_position(b, 99, 99)

    recorded = editor.undo_depth
    assert recorded == 9
    final_python = editor.export("python")

    for _ in range(recorded):
        editor.undo()
    assert editor.diagram.is_empty()
    assert editor.export("java") == ""

    for _ in range(recorded):
        editor.redo()
    # The unrecorded move of Dog is part of the state pushed onto the redo stack.
    assert editor.export("python") == final_python
    assert editor.diagram.get_class(b).x == 99
    assert editor.diagram.get_group(editor.diagram.groups[0].id).members == [b]
