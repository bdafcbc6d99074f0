"""Route captures to renderers and run whole render passes.

Two-tier dispatch:
1. capture name → CaptureKind / InlineCaptureKind (unknown names are logged and skipped)
2. kind → handler, through tables that must cover every kind

// [LAW:single-enforcer] Every mark of a pass is produced under run_pass().
// [LAW:dataflow-not-control-flow] Handler choice is a table lookup, not an if-chain.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable

from mdmarks import queries
from mdmarks.config import RenderConfig
from mdmarks.core.context import RenderContext, RenderPass, WidthSource
from mdmarks.core.marks import Mark, MarkCollector
from mdmarks.core.node_view import Document, NodeView
from mdmarks.icons import DefaultIcons, IconProvider
from mdmarks.render import code, dash, heading, inline, list_item, quote, table

logger = logging.getLogger(__name__)

Capture = tuple[str, object]
Handler = Callable[[NodeView, RenderPass], None]


class CaptureKind(Enum):
    HEADING = "heading"
    DASH = "dash"
    CODE = "code"
    LIST_MARKER = "list_marker"
    CHECKBOX_UNCHECKED = "checkbox_unchecked"
    CHECKBOX_CHECKED = "checkbox_checked"
    QUOTE = "quote"
    TABLE = "table"


class InlineCaptureKind(Enum):
    CODE = "code"
    CALLOUT = "callout"


QUOTE_MARKER = "quote_marker"


def _render_quote(node: NodeView, rp: RenderPass) -> None:
    style = quote.style_for(node, rp)
    if style is None:
        return
    for name, child in queries.quote_captures(node.node):
        marker = NodeView(node.document, child)
        logger.debug("%s: %r", name, marker)
        if name == QUOTE_MARKER:
            quote.render_marker(marker, rp, style)
        else:
            logger.warning("unhandled markdown quote capture: %s", name)


_MARKDOWN_HANDLERS: dict[CaptureKind, Handler] = {
    CaptureKind.HEADING: heading.render,
    CaptureKind.DASH: dash.render,
    CaptureKind.CODE: code.render,
    CaptureKind.LIST_MARKER: list_item.render_marker,
    CaptureKind.CHECKBOX_UNCHECKED: lambda node, rp: list_item.render_checkbox(
        node, rp, rp.config.checkbox.unchecked
    ),
    CaptureKind.CHECKBOX_CHECKED: lambda node, rp: list_item.render_checkbox(
        node, rp, rp.config.checkbox.checked
    ),
    CaptureKind.QUOTE: _render_quote,
    CaptureKind.TABLE: table.render,
}

_INLINE_HANDLERS: dict[InlineCaptureKind, Handler] = {
    InlineCaptureKind.CODE: inline.render_code,
    InlineCaptureKind.CALLOUT: inline.render_shortcut,
}

for _kinds, _handlers in ((CaptureKind, _MARKDOWN_HANDLERS), (InlineCaptureKind, _INLINE_HANDLERS)):
    _missing = set(_kinds) - set(_handlers)
    if _missing:
        raise RuntimeError(f"no handler for {sorted(k.value for k in _missing)}")


def _parse_kind(kinds: type[Enum], name: str):
    try:
        return kinds(name)
    except ValueError:
        return None


class Dispatcher:
    """Feeds capture streams of one pass to the renderers."""

    def __init__(self, rp: RenderPass, document: Document):
        self.rp = rp
        self.document = document

    def _dispatch(self, language: str, kinds: type[Enum], handlers: dict, captures: Iterable[Capture]) -> None:
        for name, node in captures:
            info = NodeView(self.document, node)
            logger.debug("%s: %r", name, info)
            kind = _parse_kind(kinds, name)
            if kind is None:
                logger.warning("unhandled %s capture: %s", language, name)
                continue
            handlers[kind](info, self.rp)

    def markdown(self, captures: Iterable[Capture]) -> None:
        self._dispatch("markdown", CaptureKind, _MARKDOWN_HANDLERS, captures)

    def inline(self, captures: Iterable[Capture]) -> None:
        self._dispatch("markdown_inline", InlineCaptureKind, _INLINE_HANDLERS, captures)


def new_pass(
    config: RenderConfig,
    viewport_width: int,
    *,
    concealed: WidthSource | None = None,
    link_width: WidthSource | None = None,
    icons: IconProvider | None = None,
    supports_inline: bool = True,
) -> RenderPass:
    return RenderPass(
        config=config,
        context=RenderContext.for_config(config, viewport_width, concealed, link_width),
        marks=MarkCollector(supports_inline=supports_inline),
        icons=icons or DefaultIcons(),
    )


def run_pass(
    rp: RenderPass,
    document: Document,
    markdown: Iterable[Capture] = (),
    inline_captures: Iterable[Capture] = (),
) -> list[Mark]:
    """Dispatch a block capture stream, then an inline one; return the marks."""
    dispatcher = Dispatcher(rp, document)
    dispatcher.markdown(markdown)
    dispatcher.inline(inline_captures)
    return rp.marks.marks()


def render_tree(
    document: Document,
    root,
    config: RenderConfig,
    viewport_width: int,
    *,
    inline_roots: Iterable = (),
    **pass_options,
) -> list[Mark]:
    """Full pass over a block tree and its inline trees with the built-in queries."""
    rp = new_pass(config, viewport_width, **pass_options)
    inline_stream = (
        capture
        for inline_root in inline_roots
        for capture in queries.captures(inline_root, queries.INLINE_CAPTURES)
    )
    return run_pass(rp, document, queries.captures(root), inline_stream)
