from __future__ import annotations

from ..model import Relation, UmlClass
from .common import parents_by_class


def gen_python(classes: list[UmlClass], relations: list[Relation]) -> str:
    """Generate Python classes with a property/setter pair per attribute."""
    parents = parents_by_class(classes, relations)
    lines: list[str] = []

    for cls in classes:
        parent = parents.get(cls.id)
        if parent is not None:
            lines.append(f"class {cls.name}({parent.name}):")
        else:
            lines.append(f"class {cls.name}:")

        lines.append("    def __init__(self):")
        if parent is not None:
            lines.append("        super().__init__()")
        for attr in cls.attributes:
            type_note = f"  # {attr.type}" if attr.type else ""
            lines.append(f"        self._{attr.name} = None{type_note}")
        if parent is None and not cls.attributes:
            lines.append("        pass")
        lines.append("")

        for attr in cls.attributes:
            lines.extend(
                [
                    "    @property",
                    f"    def {attr.name}(self):",
                    f"        return self._{attr.name}",
                    "",
                    f"    @{attr.name}.setter",
                    f"    def {attr.name}(self, value):",
                    f"        self._{attr.name} = value",
                    "",
                ]
            )

        for method in cls.methods:
            lines.extend(
                [
                    f"    def {method.name}(self):",
                    f'        raise NotImplementedError("{cls.name}.{method.name}")',
                    "",
                ]
            )

        lines.append("")

    return "\n".join(lines)
