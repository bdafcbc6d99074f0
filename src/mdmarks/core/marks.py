"""Mark records and the ordered per-pass collector.

A Mark is one decoration instruction for the host: a highlight range,
virtual text, virtual lines or a gutter sign. Marks are immutable and
regenerated from scratch every pass.

// [LAW:single-enforcer] MarkCollector.add() is the only place marks enter a pass.
// [LAW:one-source-of-truth] The conceal rule lives in _conceal_violation().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum

logger = logging.getLogger(__name__)


# ─── Data model ──────────────────────────────────────────────────────────────


class Anchor(Enum):
    """How virtual text is positioned relative to the buffer text."""

    OVERLAY = "overlay"
    INLINE = "inline"
    WIN_COL = "win_col"


class Priority(IntEnum):
    """Ordering among marks on the same position; lower draws first."""

    FILL = 0
    NORMAL = 1
    EMPHASIS = 2


# A highlight is a group name, or several names layered left to right
Highlight = str | tuple[str, ...]


@dataclass(frozen=True)
class VirtText:
    text: str
    highlight: Highlight


@dataclass(frozen=True)
class Mark:
    """One decoration. Fields left at their defaults are not applied."""

    start_row: int
    start_col: int
    conceal: bool
    end_row: int | None = None
    end_col: int | None = None
    virt_text: tuple[VirtText, ...] = ()
    anchor: Anchor | None = None
    win_col: int | None = None
    virt_lines: tuple[tuple[VirtText, ...], ...] = ()
    virt_lines_above: bool = False
    hl_group: Highlight | None = None
    hl_eol: bool = False
    hide: bool = False  # conceal the original text of the span
    sign_text: str | None = None
    sign_hl_group: str | None = None
    priority: Priority = Priority.NORMAL
    repeat_linebreak: bool = False

    @property
    def has_span(self) -> bool:
        return self.end_row is not None and self.end_col is not None

    def touches_row(self, row: int) -> bool:
        last = self.end_row if self.end_row is not None else self.start_row
        if self.end_row is not None and self.end_col == 0 and last > self.start_row:
            last -= 1
        return self.start_row <= row <= last


def _conceal_violation(mark: Mark) -> str | None:
    """Why a mark breaks the conceal rule, or None when it is valid."""
    if not mark.hide:
        return None
    if not mark.conceal:
        return "hides text without the conceal flag"
    if not mark.has_span:
        return "hides text without an explicit span"
    return None


# ─── Collector ───────────────────────────────────────────────────────────────


class MarkCollector:
    """Append-only, ordered list of marks for one pass.

    Inline virtual text needs host support; when the host has none the
    mark is refused and add() returns False so callers can fall back.
    """

    def __init__(self, supports_inline: bool = True):
        self.supports_inline = supports_inline
        self._marks: list[Mark] = []

    def __len__(self) -> int:
        return len(self._marks)

    def add(self, mark: Mark) -> bool:
        if mark.anchor is Anchor.INLINE and not self.supports_inline:
            logger.debug("inline mark refused at (%d, %d)", mark.start_row, mark.start_col)
            return False
        violation = _conceal_violation(mark)
        if violation is not None:
            logger.warning(
                "dropping mark at (%d, %d): %s", mark.start_row, mark.start_col, violation
            )
            return False
        self._marks.append(mark)
        return True

    def marks(self) -> list[Mark]:
        """The collected marks in insertion order (a copy)."""
        return list(self._marks)
