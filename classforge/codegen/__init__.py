"""Code export: turn classes and relations into source skeletons."""
from .registry import LANGUAGES, LanguageSpec, available_languages, generate, resolve_language

__all__ = ["LANGUAGES", "LanguageSpec", "available_languages", "generate", "resolve_language"]
