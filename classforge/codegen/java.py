from __future__ import annotations

from ..model import Relation, UmlClass
from .common import capitalize, parents_by_class


def _modifier(access: str) -> str:
    # Java's package-private level has no keyword.
    if not access or access == "package":
        return ""
    return f"{access} "


def gen_java(classes: list[UmlClass], relations: list[Relation]) -> str:
    """Generate one Java class skeleton per class, with getters and setters."""
    parents = parents_by_class(classes, relations)
    lines: list[str] = []

    for cls in classes:
        header = f"public class {cls.name}"
        parent = parents.get(cls.id)
        if parent is not None:
            header += f" extends {parent.name}"
        lines.append(header + " {")
        lines.append("")

        for attr in cls.attributes:
            lines.append(f"    {_modifier(attr.access)}{attr.type or 'Object'} {attr.name};")
        lines.append("")

        lines.append(f"    public {cls.name}() {{")
        lines.append("    }")
        lines.append("")

        for attr in cls.attributes:
            attr_type = attr.type or "Object"
            suffix = capitalize(attr.name)
            lines.extend(
                [
                    f"    public {attr_type} get{suffix}() {{",
                    f"        return this.{attr.name};",
                    "    }",
                    "",
                    f"    public void set{suffix}({attr_type} {attr.name}) {{",
                    f"        this.{attr.name} = {attr.name};",
                    "    }",
                    "",
                ]
            )

        for method in cls.methods:
            lines.extend(
                [
                    f"    {_modifier(method.access)}{method.return_type or 'void'} {method.name}() {{",
                    "        // TODO: Implement method",
                    "    }",
                    "",
                ]
            )

        lines.append("}")
        lines.append("")

    return "\n".join(lines) + ("\n" if lines else "")
