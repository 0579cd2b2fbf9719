from __future__ import annotations

import html
import re

# Mermaid class names must be alphanumeric/underscore and must not start with
# a digit.
MERMAID_ID_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def mermaid_block(code: str) -> str:
    """Wrap Mermaid source in a Markdown Mermaid code fence."""
    return "```mermaid\n" + code.rstrip() + "\n```\n"


def mm_text(text: object) -> str:
    """Escape text for Mermaid labels."""
    normalized = re.sub(r"\s+", " ", html.unescape(str(text))).strip()
    return (
        normalized.replace("&", "#amp;")
        .replace("<", "#lt;")
        .replace(">", "#gt;")
        .replace('"', "#quot;")
        .replace("|", "#124;")
    )


def assert_mm_class_name(value: str) -> str:
    if not MERMAID_ID_RE.match(value):
        raise ValueError(f"Not a Mermaid-safe class name: {value!r}")
    return value


def mm_safe_name(name: str) -> str:
    """Best-effort Mermaid class name for an arbitrary display name."""
    s = re.sub(r"[^A-Za-z0-9_]+", "_", (name or "").strip()).strip("_")
    if not s or s[0].isdigit():
        s = "C_" + s
    return s


def mm_unique_id(base: str, used: set[str]) -> str:
    candidate = base
    n = 2
    while candidate in used:
        candidate = f"{base}_{n}"
        n += 1
    used.add(candidate)
    return candidate


def mm_class_decl(name: str, label: str | None = None) -> str:
    assert_mm_class_name(name)
    if label is None:
        return f"  class {name}"
    return f'  class {name}["{mm_text(label)}"]'


def mm_class_member(name: str, text: object) -> str:
    assert_mm_class_name(name)
    # Preserve punctuation; just prevent line breaks from corrupting Mermaid.
    s = str(text).replace("\r", " ").replace("\n", " ").strip()
    s = re.sub(r"\s+", " ", s)
    return f"  {name} : {s}"


CLASS_REL_ARROWS = {"<|--", "<|..", "*--", "o--", "-->", "--", "..>", ".."}


def mm_class_relation(
    a: str,
    arrow: str,
    b: str,
    *,
    label: str | None = None,
    a_card: str | None = None,
    b_card: str | None = None,
) -> str:
    assert_mm_class_name(a)
    assert_mm_class_name(b)
    if arrow not in CLASS_REL_ARROWS:
        raise ValueError(f"unsupported class arrow: {arrow!r}")

    left = f'{a} "{mm_text(a_card)}"' if a_card else a
    right = f'"{mm_text(b_card)}" {b}' if b_card else b

    line = f"  {left} {arrow} {right}"
    if label:
        line += f" : {mm_text(label)}"
    return line
