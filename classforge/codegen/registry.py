from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from ..constants import DEFAULT_LANGUAGE
from ..model import Relation, UmlClass
from ..model_view import view_classes, view_relations
from .java import gen_java
from .mermaid import gen_class_diagram
from .php import gen_php
from .python import gen_python

logger = logging.getLogger(__name__)

RenderFn = Callable[[list[UmlClass], list[Relation]], str]


@dataclass(frozen=True)
class LanguageSpec:
    language_id: str
    title: str
    extension: str
    render: RenderFn
    aliases: tuple[str, ...] = ()


LANGUAGES: list[LanguageSpec] = [
    LanguageSpec(
        language_id="java",
        title="Java",
        extension=".java",
        render=gen_java,
    ),
    LanguageSpec(
        language_id="php",
        title="PHP",
        extension=".php",
        render=gen_php,
    ),
    LanguageSpec(
        language_id="python",
        title="Python",
        extension=".py",
        render=gen_python,
        aliases=("py",),
    ),
    LanguageSpec(
        language_id="mermaid",
        title="Mermaid class diagram",
        extension=".mmd",
        render=gen_class_diagram,
        aliases=("mmd",),
    ),
]


def available_languages() -> list[str]:
    return [spec.language_id for spec in LANGUAGES]


def resolve_language(language: str | None) -> LanguageSpec:
    """Find the spec for `language`; unknown names fall back to the default."""
    key = (language or "").strip().lower()
    for spec in LANGUAGES:
        if key == spec.language_id or key in spec.aliases:
            return spec

    logger.debug("unknown export language %r, using %r", language, DEFAULT_LANGUAGE)
    return next(spec for spec in LANGUAGES if spec.language_id == DEFAULT_LANGUAGE)


def generate(
    classes: Iterable[Any], relations: Iterable[Any], language: str | None = DEFAULT_LANGUAGE
) -> str:
    """Render `classes` and `relations` as source text in `language`.

    Pure and deterministic. Entries that cannot be read as a class or relation
    are skipped, as are relations pointing at missing classes.
    """
    spec = resolve_language(language)
    return spec.render(view_classes(classes), view_relations(relations))
