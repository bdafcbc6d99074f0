"""Thematic break renderer."""

from __future__ import annotations

from mdmarks.core.context import RenderPass
from mdmarks.core.marks import Anchor, VirtText
from mdmarks.core.node_view import NodeView


def render(node: NodeView, rp: RenderPass) -> None:
    dash = rp.config.dash
    if not dash.enabled:
        return
    width = rp.context.get_width() if dash.width == "full" else int(dash.width)
    rp.add(
        True,
        node.start_row,
        0,
        virt_text=(VirtText(dash.icon * width, dash.highlight),),
        anchor=Anchor.OVERLAY,
    )
