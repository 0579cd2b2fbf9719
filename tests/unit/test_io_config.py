from pathlib import Path

import pytest

from classforge.config import EditorConfig
from classforge.io import load_config, load_diagram
from classforge.model import Diagram
from classforge.validate import validate_diagram

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


def test_load_diagram_round_trips_into_model():
    model = load_diagram(FIXTURES / "diagrams" / "zoo.yaml")
    assert validate_diagram(model) == ([], [])

    diagram = Diagram.from_dict(model)
    assert [c.name for c in diagram.classes] == ["Animal", "Dog"]
    assert diagram.classes[1].methods[0].return_type == "boolean"
    assert diagram.relations[0].type == "generalization"
    assert diagram.groups[0].members == ["animal", "dog"]


def test_load_diagram_sanitizes_unquoted_colons(capsys):
    model = load_diagram(FIXTURES / "diagrams" / "unquoted_colon.yaml")

    attr = model["classes"][0]["attributes"][0]
    assert attr["type"] == "Map<String: Object>"
    assert "after sanitizing 1 line(s)" in capsys.readouterr().err


def test_load_diagram_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_diagram(tmp_path / "nope.yaml")


def test_load_diagram_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(TypeError, match="must be a mapping"):
        load_diagram(path)


def test_empty_file_is_an_empty_diagram(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_diagram(path) == {}


def test_load_config_with_editor_section():
    cfg = load_config(FIXTURES / "editor.yaml")
    assert cfg == EditorConfig(history_limit=50, default_language="python")


def test_config_accepts_flat_mapping_and_defaults():
    assert EditorConfig.from_mapping({}) == EditorConfig()
    assert EditorConfig.from_mapping({"history_limit": 3}).history_limit == 3
    assert EditorConfig().history_limit is None
    assert EditorConfig().default_language == "java"


@pytest.mark.parametrize(
    "data",
    [
        {"editor": {"undo_depth": 3}},
        {"history_limit": 0},
        {"history_limit": "10"},
        {"history_limit": True},
        {"default_language": ""},
        {"editor": ["java"]},
    ],
)
def test_config_rejects_bad_values(data):
    with pytest.raises(ValueError):
        EditorConfig.from_mapping(data)
