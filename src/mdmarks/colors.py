"""Derived highlight groups.

Renderers only name highlight groups; the host owns their colours. When
a renderer needs a mix (an icon colour on a sign column background, a
border drawn in a background colour) it asks for a derived group name
here and the host resolves the definition from the registry.

// [LAW:one-source-of-truth] Derived group names are built only by _derived_name().
"""

from __future__ import annotations

from dataclasses import dataclass

PREFIX = "MdMarks"


@dataclass(frozen=True)
class DerivedHighlight:
    """Foreground taken from `foreground`'s fg (or `background`'s bg when inverse)."""

    name: str
    foreground: str
    background: str | None
    inverse: bool = False


_REGISTRY: dict[str, DerivedHighlight] = {}


def _derived_name(*parts: str) -> str:
    return "_".join((PREFIX,) + parts)


def combine(foreground: str, background: str) -> str:
    """Group drawing foreground's fg over background's bg."""
    name = _derived_name(foreground, background)
    _REGISTRY.setdefault(name, DerivedHighlight(name, foreground, background))
    return name


def inverse(highlight: str) -> str:
    """Group whose foreground is highlight's background colour."""
    name = _derived_name(highlight, "Inverse")
    _REGISTRY.setdefault(name, DerivedHighlight(name, highlight, None, inverse=True))
    return name


def lookup(name: str) -> DerivedHighlight | None:
    return _REGISTRY.get(name)


def derived() -> tuple[DerivedHighlight, ...]:
    """Every derived group created so far, in creation order."""
    return tuple(_REGISTRY.values())
