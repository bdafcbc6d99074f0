"""Inline span renderers: code spans, callout labels, custom checkboxes."""

from __future__ import annotations

from mdmarks import components
from mdmarks.components import Comparison
from mdmarks.core import text as text_util
from mdmarks.core.context import RenderPass
from mdmarks.core.marks import Anchor, VirtText
from mdmarks.core.node_view import NodeView


def render_code(node: NodeView, rp: RenderPass) -> None:
    code = rp.config.code
    if not code.enabled or not code.draws_background:
        return
    rp.add(
        True,
        node.start_row,
        node.start_col,
        end_row=node.end_row,
        end_col=node.end_col,
        hl_group=code.highlight_inline,
    )


def render_shortcut(node: NodeView, rp: RenderPass) -> None:
    """A shortcut link is either a callout label or a custom checkbox."""
    callout = components.callout(rp.config, node.text, Comparison.EXACT)
    if callout is not None:
        rp.add(
            True,
            node.start_row,
            node.start_col,
            end_row=node.end_row,
            end_col=node.end_col,
            virt_text=(VirtText(callout.rendered, callout.highlight),),
            anchor=Anchor.OVERLAY,
        )
        return

    if not rp.config.checkbox.enabled:
        return
    checkbox = components.checkbox(rp.config, node.text, Comparison.EXACT)
    if checkbox is None:
        return
    # Refused by the collector when the host has no inline virtual text
    rp.add(
        True,
        node.start_row,
        node.start_col,
        end_row=node.end_row,
        end_col=node.end_col,
        virt_text=(VirtText(text_util.pad_to(node.text, checkbox.rendered), checkbox.highlight),),
        anchor=Anchor.INLINE,
        hide=True,
    )
