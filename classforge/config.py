from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from .constants import CONFIG_SECTION, DEFAULT_LANGUAGE


@dataclass(frozen=True)
class EditorConfig:
    # None keeps every undo step for the session.
    history_limit: Optional[int] = None
    default_language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        limit = self.history_limit
        if limit is not None and (
            isinstance(limit, bool) or not isinstance(limit, int) or limit < 1
        ):
            raise ValueError(f"history_limit must be a positive integer or null, got {limit!r}")
        if not isinstance(self.default_language, str) or not self.default_language.strip():
            raise ValueError(
                f"default_language must be a non-empty string, got {self.default_language!r}"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EditorConfig":
        """Build a config from a mapping, with or without an `editor:` section."""
        section = data.get(CONFIG_SECTION, data)
        if section is None:
            section = {}
        if not isinstance(section, Mapping):
            raise ValueError(f"config section {CONFIG_SECTION!r} must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(section) - known)
        if unknown:
            raise ValueError(f"unknown config key(s): {', '.join(map(str, unknown))}")
        return cls(**dict(section))
