from __future__ import annotations

from ..model import Relation, UmlClass
from .common import capitalize, parents_by_class


def _visibility(access: str) -> str:
    # PHP has no package level; the form's "package" maps to public.
    if access in ("private", "protected"):
        return access
    return "public"


def gen_php(classes: list[UmlClass], relations: list[Relation]) -> str:
    """Generate a PHP file with one class per diagram class."""
    parents = parents_by_class(classes, relations)
    lines: list[str] = ["<?php", ""]

    for cls in classes:
        header = f"class {cls.name}"
        parent = parents.get(cls.id)
        if parent is not None:
            header += f" extends {parent.name}"
        lines.append(header + " {")
        lines.append("")

        for attr in cls.attributes:
            lines.append(f"    {_visibility(attr.access)} ${attr.name};")
        lines.append("")

        lines.append("    public function __construct() {")
        lines.append("    }")
        lines.append("")

        for attr in cls.attributes:
            suffix = capitalize(attr.name)
            lines.extend(
                [
                    f"    public function get{suffix}() {{",
                    f"        return $this->{attr.name};",
                    "    }",
                    "",
                    f"    public function set{suffix}(${attr.name}) {{",
                    f"        $this->{attr.name} = ${attr.name};",
                    "    }",
                    "",
                ]
            )

        for method in cls.methods:
            lines.extend(
                [
                    f"    {_visibility(method.access)} function {method.name}() {{",
                    "        // TODO: Implement method",
                    "    }",
                    "",
                ]
            )

        lines.append("}")
        lines.append("")

    return "\n".join(lines) + "\n"
