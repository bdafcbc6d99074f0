"""Callout and custom checkbox recognition.

Matching is case-insensitive against each entry's raw text.
"""

from __future__ import annotations

from enum import Enum

from mdmarks.config import Callout, CustomCheckbox, RenderConfig


class Comparison(Enum):
    EXACT = "exact"
    CONTAINS = "contains"
    STARTS = "starts"


def _matches(text: str, raw: str, comparison: Comparison) -> bool:
    text, raw = text.lower(), raw.lower()
    if comparison is Comparison.EXACT:
        return text == raw
    if comparison is Comparison.CONTAINS:
        return raw in text
    return text.startswith(raw)


def callout(config: RenderConfig, text: str, comparison: Comparison) -> Callout | None:
    for entry in config.callouts:
        if _matches(text, entry.raw, comparison):
            return entry
    return None


def checkbox(config: RenderConfig, text: str, comparison: Comparison) -> CustomCheckbox | None:
    for entry in config.checkbox.custom:
        if _matches(text, entry.raw, comparison):
            return entry
    return None
