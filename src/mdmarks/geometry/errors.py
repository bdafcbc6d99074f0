"""Data-valued failures of geometry extraction.

Extractors return either their parsed geometry or a GeometryError; the
renderer logs the error and skips that one node.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GeometryErrorKind(Enum):
    SINGLE_LINE = "single_line"
    MISSING_ROW = "missing_row"
    MULTI_LINE_ROW = "multi_line_row"
    COLUMN_MISMATCH = "column_mismatch"


@dataclass(frozen=True)
class GeometryError:
    kind: GeometryErrorKind
    node_type: str
    row: int
    details: str
