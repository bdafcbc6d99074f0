"""Buffer attach bookkeeping and per-row visibility of marks.

The host's event loop decides when to render; the Manager decides which
buffers are rendered at all and filters marks for the cursor row.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable

from mdmarks import dispatch
from mdmarks.config import RenderConfig
from mdmarks.core.marks import Mark
from mdmarks.core.node_view import Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BufferInfo:
    id: int
    path: str
    file_type: str


def file_size_mb(path: str) -> float:
    try:
        return os.stat(path).st_size / (1024 * 1024)
    except OSError:
        return 0.0


class Manager:
    def __init__(self, config: RenderConfig):
        self.config = config
        self._buffers: list[int] = []

    def is_attached(self, buffer_id: int) -> bool:
        return buffer_id in self._buffers

    def attach(self, buffer: BufferInfo) -> bool:
        if not self.should_attach(buffer):
            return False
        self._buffers.append(buffer.id)
        return True

    def detach(self, buffer_id: int) -> None:
        if buffer_id in self._buffers:
            self._buffers.remove(buffer_id)
            logger.info("detach %d", buffer_id)

    def should_attach(self, buffer: BufferInfo) -> bool:
        name = f"attach {os.path.basename(buffer.path) or buffer.id}"
        logger.info("%s: start", name)

        if buffer.id in self._buffers:
            logger.info("%s: skip, already attached", name)
            return False
        if buffer.file_type not in self.config.file_types:
            logger.info("%s: skip, file type %s not in %s", name, buffer.file_type, list(self.config.file_types))
            return False
        if not self.config.enabled:
            logger.info("%s: skip, disabled", name)
            return False
        size = file_size_mb(buffer.path)
        if size > self.config.max_file_size:
            logger.info("%s: skip, file size %f > %f", name, size, self.config.max_file_size)
            return False

        logger.info("%s: success", name)
        return True

    def render(
        self,
        buffer_id: int,
        document: Document,
        root,
        viewport_width: int,
        *,
        inline_roots: Iterable = (),
        **pass_options,
    ) -> list[Mark]:
        """Run a full pass for an attached buffer; unattached buffers get no marks."""
        if not self.is_attached(buffer_id):
            logger.debug("render %d: not attached", buffer_id)
            return []
        return dispatch.render_tree(
            document,
            root,
            self.config,
            viewport_width,
            inline_roots=inline_roots,
            **pass_options,
        )


def visible_marks(marks: Iterable[Mark], cursor_row: int | None, mode: str, config: RenderConfig) -> list[Mark]:
    """Marks to display: none outside render modes, no conceal marks on the cursor row."""
    if mode not in config.render_modes:
        return []
    return [
        mark
        for mark in marks
        if not (mark.conceal and cursor_row is not None and mark.touches_row(cursor_row))
    ]
