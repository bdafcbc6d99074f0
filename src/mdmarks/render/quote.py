"""Block quote marker renderer with callout colouring."""

from __future__ import annotations

from dataclasses import dataclass

from mdmarks import components
from mdmarks.components import Comparison
from mdmarks.core.context import RenderPass
from mdmarks.core.marks import Anchor, VirtText
from mdmarks.core.node_view import NodeView


@dataclass(frozen=True)
class QuoteStyle:
    icon: str
    highlight: str
    repeat_linebreak: bool


def style_for(quote_node: NodeView, rp: RenderPass) -> QuoteStyle | None:
    """Icon and highlight for every marker of one quote; None when disabled."""
    quote = rp.config.quote
    if not quote.enabled:
        return None
    callout = components.callout(rp.config, quote_node.text, Comparison.CONTAINS)
    if callout is None:
        return QuoteStyle(quote.icon, quote.highlight, quote.repeat_linebreak)
    return QuoteStyle(callout.quote_icon or quote.icon, callout.highlight, quote.repeat_linebreak)


def render_marker(node: NodeView, rp: RenderPass, style: QuoteStyle) -> None:
    rp.add(
        True,
        node.start_row,
        node.start_col,
        end_row=node.end_row,
        end_col=node.end_col,
        virt_text=(VirtText(node.text.replace(">", style.icon), style.highlight),),
        anchor=Anchor.OVERLAY,
        repeat_linebreak=style.repeat_linebreak,
    )
