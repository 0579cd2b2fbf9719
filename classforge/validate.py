# classforge/validate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Sequence, Tuple

from .constants import (
    ACCESS_LEVELS,
    DEFAULT_RELATION_TYPE,
    DIAGRAM_SECTIONS,
    RELATION_TYPES,
)

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    """Structured validation issue for callers that want more than strings."""

    severity: Severity
    code: str
    message: str
    path: str = ""
    hint: Optional[str] = None


@dataclass(frozen=True)
class ValidateConfig:
    """Validation configuration.

    `ignore` drops issues by code; `escalate` turns the named warnings into
    errors (the CLI's --strict escalates everything instead).
    """

    ignore: set[str] = field(default_factory=set)
    escalate: set[str] = field(default_factory=set)


class InvalidDiagramError(ValueError):
    """Raised when a diagram that must be well formed is not.

    This signals a broken core invariant (for example while snapshotting or
    restoring history), never a user-input mistake.
    """

    def __init__(self, issues: Sequence[ValidationIssue]) -> None:
        self.issues = list(issues)
        shown = "; ".join(
            f"{iss.path or '/'}: {iss.message}" for iss in self.issues[:3]
        )
        more = f" (and {len(self.issues) - 3} more)" if len(self.issues) > 3 else ""
        super().__init__(f"invalid diagram: {shown}{more}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_diagram_issues(
    model: Any, cfg: Optional[ValidateConfig] = None
) -> list[ValidationIssue]:
    """Return structured validation issues for a diagram mapping.

    This is the canonical validator. `validate_diagram()` is the string
    wrapper used by the CLI.
    """

    cfg = cfg or ValidateConfig()
    issues: list[ValidationIssue] = []

    def emit(
        severity: Severity,
        code: str,
        message: str,
        path: str = "",
        hint: Optional[str] = None,
    ) -> None:
        if code in cfg.ignore:
            return
        final_severity: Severity = (
            "error" if (severity == "warning" and code in cfg.escalate) else severity
        )
        issues.append(
            ValidationIssue(
                severity=final_severity,
                code=code,
                message=message,
                path=path,
                hint=hint,
            )
        )

    if not isinstance(model, dict):
        emit("error", "E_DIAGRAM_NOT_MAPPING", "diagram must be a mapping")
        return issues

    for section in DIAGRAM_SECTIONS:
        items = model.get(section, []) or []
        if not isinstance(items, list):
            emit(
                "error",
                "E_SECTION_NOT_LIST",
                f"diagram.{section} must be a list",
                path=f"/{section}",
            )

    class_ids: set[str] = set()
    classes = model.get("classes", []) or []
    for i, cls in enumerate(classes if isinstance(classes, list) else []):
        if not isinstance(cls, dict):
            emit(
                "error",
                "E_CLASS_NOT_MAPPING",
                "diagram.classes contains a non-mapping item",
                path=f"/classes/{i}",
            )
            continue

        class_id = cls.get("id")
        if not isinstance(class_id, str) or not class_id:
            emit(
                "error",
                "E_CLASS_MISSING_ID",
                "class is missing string `id`",
                path=f"/classes/{i}/id",
            )
        elif class_id in class_ids:
            emit(
                "error",
                "E_CLASS_DUPLICATE_ID",
                f"duplicate class id {class_id!r}",
                path=f"/classes/{i}/id",
            )
        else:
            class_ids.add(class_id)

        if not isinstance(cls.get("name", ""), str):
            emit(
                "error",
                "E_CLASS_NAME_NOT_STRING",
                f"class {class_id!r} has non-string name",
                path=f"/classes/{i}/name",
            )

        for coord in ("x", "y"):
            if coord in cls and not _is_number(cls[coord]):
                emit(
                    "error",
                    "E_CLASS_COORD_NOT_NUMBER",
                    f"class {class_id!r} has non-numeric {coord}",
                    path=f"/classes/{i}/{coord}",
                )

        for member_key, type_key in (("attributes", "type"), ("methods", "return_type")):
            members = cls.get(member_key, []) or []
            if not isinstance(members, list):
                emit(
                    "error",
                    "E_CLASS_MEMBERS_NOT_LIST",
                    f"class {class_id!r} {member_key} must be a list",
                    path=f"/classes/{i}/{member_key}",
                )
                continue

            for j, member in enumerate(members):
                path = f"/classes/{i}/{member_key}/{j}"
                if not isinstance(member, dict):
                    emit(
                        "error",
                        "E_MEMBER_NOT_MAPPING",
                        f"class {class_id!r} {member_key} contains a non-mapping item",
                        path=path,
                    )
                    continue

                if not isinstance(member.get("name"), str):
                    emit(
                        "error",
                        "E_MEMBER_MISSING_NAME",
                        f"class {class_id!r} {member_key} item is missing string `name`",
                        path=f"{path}/name",
                    )

                if not isinstance(member.get(type_key, ""), (str, type(None))):
                    emit(
                        "error",
                        "E_MEMBER_TYPE_NOT_STRING",
                        f"class {class_id!r} {member_key} item has non-string {type_key}",
                        path=f"{path}/{type_key}",
                    )

                access = member.get("access")
                if access is not None and access not in ACCESS_LEVELS:
                    emit(
                        "warning",
                        "W_MEMBER_UNKNOWN_ACCESS",
                        f"class {class_id!r} {member_key} item uses unknown access {access!r}",
                        path=f"{path}/access",
                        hint=f"Use one of: {', '.join(ACCESS_LEVELS)}",
                    )

    rels = model.get("relations", []) or []
    rel_ids: set[str] = set()
    seen_pairs: dict[frozenset[str], int] = {}
    for i, rel in enumerate(rels if isinstance(rels, list) else []):
        if not isinstance(rel, dict):
            emit(
                "error",
                "E_RELATION_NOT_MAPPING",
                "diagram.relations contains a non-mapping item",
                path=f"/relations/{i}",
            )
            continue

        rel_id = rel.get("id")
        if not isinstance(rel_id, str) or not rel_id:
            emit(
                "error",
                "E_RELATION_MISSING_ID",
                "relation is missing string `id`",
                path=f"/relations/{i}/id",
            )
        elif rel_id in rel_ids:
            emit(
                "error",
                "E_RELATION_DUPLICATE_ID",
                f"duplicate relation id {rel_id!r}",
                path=f"/relations/{i}/id",
            )
        else:
            rel_ids.add(rel_id)

        rel_type = rel.get("type", DEFAULT_RELATION_TYPE)
        if rel_type not in RELATION_TYPES:
            emit(
                "error",
                "E_RELATION_UNKNOWN_TYPE",
                f"relation {rel_id!r} has unknown type {rel_type!r}",
                path=f"/relations/{i}/type",
                hint=f"Use one of: {', '.join(RELATION_TYPES)}",
            )

        for end in ("source", "target"):
            ref = rel.get(end)
            if not isinstance(ref, str) or not ref:
                emit(
                    "error",
                    "E_RELATION_MISSING_END",
                    f"relation {rel_id!r} is missing string `{end}`",
                    path=f"/relations/{i}/{end}",
                )
            elif ref not in class_ids:
                emit(
                    "error",
                    "E_RELATION_UNKNOWN_CLASS",
                    f"relation {rel_id!r} {end} references unknown class id {ref!r}",
                    path=f"/relations/{i}/{end}",
                )

        for card in ("source_cardinality", "target_cardinality"):
            if not isinstance(rel.get(card), (str, type(None))):
                emit(
                    "error",
                    "E_RELATION_CARDINALITY_NOT_STRING",
                    f"relation {rel_id!r} has non-string {card}",
                    path=f"/relations/{i}/{card}",
                )

        src, dst = rel.get("source"), rel.get("target")
        if isinstance(src, str) and isinstance(dst, str):
            pair = frozenset((src, dst))
            if pair in seen_pairs:
                emit(
                    "warning",
                    "W_RELATION_DUPLICATE_PAIR",
                    f"relation {rel_id!r} connects the same classes as relations[{seen_pairs[pair]}]",
                    path=f"/relations/{i}",
                )
            else:
                seen_pairs[pair] = i

    groups = model.get("groups", []) or []
    group_ids: set[str] = set()
    for i, group in enumerate(groups if isinstance(groups, list) else []):
        if not isinstance(group, dict):
            emit(
                "error",
                "E_GROUP_NOT_MAPPING",
                "diagram.groups contains a non-mapping item",
                path=f"/groups/{i}",
            )
            continue

        group_id = group.get("id")
        if not isinstance(group_id, str) or not group_id:
            emit(
                "error",
                "E_GROUP_MISSING_ID",
                "group is missing string `id`",
                path=f"/groups/{i}/id",
            )
        elif group_id in group_ids:
            emit(
                "error",
                "E_GROUP_DUPLICATE_ID",
                f"duplicate group id {group_id!r}",
                path=f"/groups/{i}/id",
            )
        else:
            group_ids.add(group_id)

        members = group.get("members", []) or []
        if not isinstance(members, list):
            emit(
                "error",
                "E_GROUP_MEMBERS_NOT_LIST",
                f"group {group_id!r} members must be a list",
                path=f"/groups/{i}/members",
            )
            continue

        for j, member in enumerate(members):
            if not isinstance(member, str):
                emit(
                    "error",
                    "E_GROUP_MEMBER_NOT_STRING",
                    f"group {group_id!r} has a non-string member",
                    path=f"/groups/{i}/members/{j}",
                )
            elif member not in class_ids:
                emit(
                    "warning",
                    "W_GROUP_MEMBER_UNKNOWN_CLASS",
                    f"group {group_id!r} member references unknown class id {member!r}",
                    path=f"/groups/{i}/members/{j}",
                )

    return issues


def validate_diagram(model: Any) -> Tuple[list[str], list[str]]:
    """Perform structural validation and return (errors, warnings) as strings."""
    issues = validate_diagram_issues(model)
    errors = [iss.message for iss in issues if iss.severity == "error"]
    warnings = [iss.message for iss in issues if iss.severity == "warning"]
    return errors, warnings


def require_valid(model: Any, cfg: Optional[ValidateConfig] = None) -> None:
    """Raise InvalidDiagramError if `model` has any error-level issue."""
    errors = [iss for iss in validate_diagram_issues(model, cfg) if iss.severity == "error"]
    if errors:
        raise InvalidDiagramError(errors)
