"""Display-width arithmetic for mark text.

Every width in mdmarks is measured in terminal cells, not characters:
wide glyphs such as CJK ideographs count as two cells.

// [LAW:single-enforcer] width() is the only cell measurement used by renderers.
"""

from __future__ import annotations

from rich.cells import cell_len


def width(text: str | None) -> int:
    """Cell width of text; a missing value measures 0."""
    if not text:
        return 0
    return cell_len(text)


def pad(amount: int, text: str = "") -> str:
    """Left-pad text with amount spaces (negative amounts pad nothing)."""
    return " " * max(amount, 0) + text


def pad_to(target: str, text: str) -> str:
    """Right-pad text so it occupies the same cell width as target."""
    return text + " " * max(width(target) - width(text), 0)


def leading_spaces(text: str) -> int:
    return len(text) - len(text.lstrip(" "))


def byte_to_char_index(line: str, col: int) -> int:
    """Convert a UTF-8 byte column into a str index for line.

    Columns past the end of the line clamp to len(line).
    """
    encoded = line.encode("utf-8")
    if col >= len(encoded):
        return len(line)
    return len(encoded[:col].decode("utf-8", errors="ignore"))


def char_to_byte_index(line: str, index: int) -> int:
    return len(line[:index].encode("utf-8"))
