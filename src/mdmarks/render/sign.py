"""Gutter sign marks shared by the heading and code renderers."""

from __future__ import annotations

from mdmarks import colors
from mdmarks.core.context import RenderPass
from mdmarks.core.node_view import NodeView


def add_sign(rp: RenderPass, node: NodeView, text: str | None, highlight: str) -> None:
    sign = rp.config.sign
    if not sign.enabled or text is None:
        return
    rp.add(
        False,
        node.start_row,
        node.start_col,
        end_row=node.end_row,
        end_col=node.end_col,
        sign_text=text,
        sign_hl_group=colors.combine(highlight, sign.highlight),
    )
