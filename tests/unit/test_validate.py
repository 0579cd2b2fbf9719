import pytest

from classforge.validate import (
    InvalidDiagramError,
    ValidateConfig,
    require_valid,
    validate_diagram,
    validate_diagram_issues,
)


def good_model():
    return {
        "classes": [
            {"id": "a", "name": "A", "x": 0, "y": 0, "attributes": [{"name": "n", "type": "int", "access": "private"}]},
            {"id": "b", "name": "B", "methods": [{"name": "run", "return_type": "void"}]},
        ],
        "relations": [{"id": "r1", "source": "a", "target": "b", "type": "generalization"}],
        "groups": [{"id": "g1", "name": "G", "members": ["a"]}],
    }


def codes(issues):
    return [iss.code for iss in issues]


def test_valid_model_has_no_issues():
    assert validate_diagram_issues(good_model()) == []
    assert validate_diagram(good_model()) == ([], [])


def test_empty_mapping_is_valid():
    assert validate_diagram_issues({}) == []


def test_non_mapping_and_non_list_sections():
    assert codes(validate_diagram_issues([])) == ["E_DIAGRAM_NOT_MAPPING"]
    assert codes(validate_diagram_issues({"classes": "A"})) == ["E_SECTION_NOT_LIST"]


def test_duplicate_and_missing_ids():
    model = good_model()
    model["classes"].append({"id": "a", "name": "Again"})
    model["classes"].append({"name": "NoId"})

    found = codes(validate_diagram_issues(model))
    assert "E_CLASS_DUPLICATE_ID" in found
    assert "E_CLASS_MISSING_ID" in found


def test_relation_to_unknown_class_and_bad_type():
    model = good_model()
    model["relations"].append({"id": "r2", "source": "a", "target": "zzz", "type": "friend"})

    issues = validate_diagram_issues(model)
    assert {"E_RELATION_UNKNOWN_CLASS", "E_RELATION_UNKNOWN_TYPE"} <= set(codes(issues))
    unknown = next(i for i in issues if i.code == "E_RELATION_UNKNOWN_CLASS")
    assert unknown.path == "/relations/1/target"


def test_relation_type_defaults_to_association():
    model = good_model()
    del model["relations"][0]["type"]
    assert validate_diagram_issues(model) == []


def test_warnings_for_access_stale_members_and_duplicate_pairs():
    model = good_model()
    model["classes"][0]["attributes"][0]["access"] = "internal"
    model["groups"][0]["members"].append("gone")
    model["relations"].append({"id": "r2", "source": "b", "target": "a", "type": "association"})

    errors, warnings = validate_diagram(model)
    assert errors == []
    assert len(warnings) == 3


def test_ignore_and_escalate():
    model = good_model()
    model["groups"][0]["members"].append("gone")

    ignored = validate_diagram_issues(model, ValidateConfig(ignore={"W_GROUP_MEMBER_UNKNOWN_CLASS"}))
    assert ignored == []

    escalated = validate_diagram_issues(
        model, ValidateConfig(escalate={"W_GROUP_MEMBER_UNKNOWN_CLASS"})
    )
    assert [i.severity for i in escalated] == ["error"]


def test_member_shape_errors():
    model = good_model()
    model["classes"][0]["attributes"] = [{"type": "int"}, "oops"]
    model["classes"][1]["methods"] = None
    model["classes"][1]["x"] = True

    found = codes(validate_diagram_issues(model))
    assert "E_MEMBER_MISSING_NAME" in found
    assert "E_MEMBER_NOT_MAPPING" in found
    assert "E_CLASS_COORD_NOT_NUMBER" in found


def test_require_valid_raises_with_issues():
    model = good_model()
    model["relations"][0]["source"] = "nope"

    with pytest.raises(InvalidDiagramError) as excinfo:
        require_valid(model)
    assert "/relations/0/source" in str(excinfo.value)
    assert excinfo.value.issues[0].code == "E_RELATION_UNKNOWN_CLASS"


def test_require_valid_ignores_warnings():
    model = good_model()
    model["groups"][0]["members"].append("gone")
    require_valid(model)
