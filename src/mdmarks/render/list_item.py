"""List marker and task checkbox renderers."""

from __future__ import annotations

from mdmarks import components
from mdmarks.components import Comparison
from mdmarks.config import CheckboxState, cycle
from mdmarks.core import text as text_util
from mdmarks.core.context import RenderPass
from mdmarks.core.marks import Anchor, Priority, VirtText
from mdmarks.core.node_view import NodeView


def _sibling_checkbox(node: NodeView, rp: RenderPass) -> bool:
    """True when a checkbox renderer will draw this item's marker instead."""
    if not rp.config.checkbox.enabled:
        return False
    if node.sibling("task_list_marker_unchecked") is not None:
        return True
    if node.sibling("task_list_marker_checked") is not None:
        return True
    paragraph = node.sibling("paragraph")
    if paragraph is None:
        return False
    return components.checkbox(rp.config, paragraph.text, Comparison.STARTS) is not None


def bullet_text(marker: str, icon: str) -> str:
    """Icon placed after the marker's leading spaces, padded to the marker width."""
    # The grammar sometimes folds leading spaces into list markers:
    # https://github.com/tree-sitter-grammars/tree-sitter-markdown/issues/127
    return text_util.pad_to(marker, text_util.pad(text_util.leading_spaces(marker), icon))


def render_marker(node: NodeView, rp: RenderPass) -> None:
    if _sibling_checkbox(node, rp):
        # The checkbox supplies the visual marker, so only hide the bullet
        rp.add(True, node.start_row, node.start_col, end_row=node.end_row, end_col=node.end_col, hide=True)
        return

    bullet = rp.config.bullet
    if not bullet.enabled:
        return
    icon = cycle(bullet.icons, node.level_in_section("list"))
    if icon is None:
        return
    rp.add(
        True,
        node.start_row,
        node.start_col,
        end_row=node.end_row,
        end_col=node.end_col,
        virt_text=(VirtText(bullet_text(node.text, icon), bullet.highlight),),
        anchor=Anchor.OVERLAY,
    )
    if bullet.left_pad > 0:
        rp.add(
            False,
            node.start_row,
            0,
            virt_text=(VirtText(text_util.pad(bullet.left_pad), "Normal"),),
            anchor=Anchor.INLINE,
            priority=Priority.FILL,
        )
    if bullet.right_pad > 0:
        rp.add(
            True,
            node.start_row,
            node.end_col - 1,
            virt_text=(VirtText(text_util.pad(bullet.right_pad), "Normal"),),
            anchor=Anchor.INLINE,
        )


def render_checkbox(node: NodeView, rp: RenderPass, state: CheckboxState) -> None:
    if not rp.config.checkbox.enabled:
        return
    rp.add(
        True,
        node.start_row,
        node.start_col,
        end_row=node.end_row,
        end_col=node.end_col,
        virt_text=(VirtText(text_util.pad_to(node.text, state.icon), state.highlight),),
        anchor=Anchor.OVERLAY,
    )
