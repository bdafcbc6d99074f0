"""Language → icon lookup for code block labels.

The host may plug in its own provider (e.g. a devicons bridge); the
default table covers the common fenced-block languages.
"""

from __future__ import annotations

from typing import Protocol


class IconProvider(Protocol):
    def get(self, language: str) -> tuple[str, str] | None:
        """Return (glyph, highlight) for a language, or None on a miss."""
        ...


_LANGUAGE_ICONS: dict[str, tuple[str, str]] = {
    "bash": ("\ue795", "DevIconBash"),
    "c": ("\ue61e", "DevIconC"),
    "cpp": ("\ue61d", "DevIconCpp"),
    "css": ("\ue749", "DevIconCss"),
    "diff": ("\uf440", "DevIconDiff"),
    "go": ("\ue627", "DevIconGo"),
    "html": ("\ue736", "DevIconHtml"),
    "java": ("\ue738", "DevIconJava"),
    "javascript": ("\ue74e", "DevIconJs"),
    "json": ("\ue60b", "DevIconJson"),
    "lua": ("\ue620", "DevIconLua"),
    "markdown": ("\ue609", "DevIconMd"),
    "python": ("\ue606", "DevIconPy"),
    "ruby": ("\ue739", "DevIconRb"),
    "rust": ("\ue7a8", "DevIconRs"),
    "sql": ("\ue706", "DevIconSql"),
    "toml": ("\ue6b2", "DevIconToml"),
    "typescript": ("\ue628", "DevIconTs"),
    "yaml": ("\ue6a8", "DevIconYaml"),
}

_ALIASES: dict[str, str] = {
    "c++": "cpp",
    "js": "javascript",
    "md": "markdown",
    "py": "python",
    "python3": "python",
    "rb": "ruby",
    "rs": "rust",
    "sh": "bash",
    "shell": "bash",
    "ts": "typescript",
    "yml": "yaml",
    "zsh": "bash",
}


class DefaultIcons:
    """Table-backed IconProvider with alias resolution."""

    def __init__(self, extra: dict[str, tuple[str, str]] | None = None):
        self._icons = dict(_LANGUAGE_ICONS)
        if extra:
            self._icons.update(extra)

    def get(self, language: str) -> tuple[str, str] | None:
        key = language.strip().lower()
        key = _ALIASES.get(key, key)
        return self._icons.get(key)
