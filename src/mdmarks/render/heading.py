"""ATX heading renderer: icon, background, block width, borders, padding.

The node handed in is the heading's marker run (`#`..`######`).
"""

from __future__ import annotations

from mdmarks import colors
from mdmarks.config import clamp, cycle
from mdmarks.core import text as text_util
from mdmarks.core.context import RenderPass
from mdmarks.core.marks import Anchor, Priority, VirtText
from mdmarks.core.node_view import NodeView
from mdmarks.render.sign import add_sign

# Wide enough to cover any window when painted from a fixed column
_FILL = 1024


def render(node: NodeView, rp: RenderPass) -> None:
    heading = rp.config.heading
    if not heading.enabled:
        return

    level = node.width
    foreground = clamp(heading.foregrounds, level) or "Normal"
    background = clamp(heading.backgrounds, level) or "Normal"

    icon_width = _icon(node, rp, level, foreground, background)
    if heading.sign:
        add_sign(rp, node, cycle(heading.signs, level), foreground)

    rp.add(
        True,
        node.start_row,
        0,
        end_row=node.end_row + 1,
        end_col=0,
        hl_group=background,
        hl_eol=True,
    )

    width = _width(node, rp, icon_width)
    if heading.width == "block":
        # Overwrite anything beyond the block with Normal
        rp.add(
            True,
            node.start_row,
            0,
            virt_text=(VirtText(text_util.pad(_FILL), "Normal"),),
            anchor=Anchor.WIN_COL,
            win_col=width,
            priority=Priority.FILL,
        )
    if heading.border:
        _border(node, rp, level, foreground, colors.inverse(background), width)

    if heading.left_pad > 0:
        rp.add(
            False,
            node.start_row,
            0,
            virt_text=(VirtText(text_util.pad(heading.left_pad), background),),
            anchor=Anchor.INLINE,
            priority=Priority.FILL,
        )


def available_width(level: int, concealed: int) -> int:
    """Cells usable by the icon: the marker run, the space after it, minus concealed text."""
    return level + 1 - concealed


def _icon(node: NodeView, rp: RenderPass, level: int, foreground: str, background: str) -> int:
    """Place the level icon; return the width the heading prefix occupies."""
    heading = rp.config.heading
    icon = cycle(heading.icons, level)
    width = available_width(level, rp.context.concealed(node))
    if icon is None:
        return width

    padding = width - text_util.width(icon)
    if heading.position == "inline" or padding < 0:
        rp.add(
            True,
            node.start_row,
            node.start_col,
            end_row=node.end_row,
            end_col=node.end_col,
            virt_text=(VirtText(icon, (foreground, background)),),
            anchor=Anchor.INLINE,
            hide=True,
        )
        return text_util.width(icon)
    rp.add(
        True,
        node.start_row,
        node.start_col,
        end_row=node.end_row,
        end_col=node.end_col,
        virt_text=(VirtText(text_util.pad(padding, icon), (foreground, background)),),
        anchor=Anchor.OVERLAY,
    )
    return width


def _width(node: NodeView, rp: RenderPass, icon_width: int) -> int:
    heading = rp.config.heading
    if heading.width != "block":
        return rp.context.get_width()
    width = heading.left_pad + icon_width + heading.right_pad
    content = node.sibling("inline")
    if content is not None:
        width += content.width + rp.context.link_width(content) - rp.context.concealed(content)
    return max(width, heading.min_width)


def _border_line(glyph: str, left_pad: int, prefix: int, width: int, foreground: str, background: str):
    return (
        VirtText(glyph * left_pad, background),
        VirtText(glyph * prefix, foreground),
        VirtText(glyph * max(width - left_pad - prefix, 0), background),
    )


def _border(
    node: NodeView, rp: RenderPass, level: int, foreground: str, background: str, width: int
) -> None:
    heading = rp.config.heading
    prefix = level if heading.border_prefix else 0

    line_above = _border_line(heading.above, heading.left_pad, prefix, width, foreground, background)
    above = node.line("above")
    above_row = node.start_row - 1
    if above is not None and text_util.width(above) == 0 and above_row != rp.state.last_heading_border:
        rp.add(True, above_row, 0, virt_text=line_above, anchor=Anchor.OVERLAY)
    else:
        rp.add(False, node.start_row, 0, virt_lines=(line_above,), virt_lines_above=True)

    line_below = _border_line(heading.below, heading.left_pad, prefix, width, foreground, background)
    below = node.line("below")
    below_row = node.end_row + 1
    if below is not None and text_util.width(below) == 0:
        rp.add(True, below_row, 0, virt_text=line_below, anchor=Anchor.OVERLAY)
        rp.state.last_heading_border = below_row
    else:
        rp.add(False, node.end_row, 0, virt_lines=(line_below,))
