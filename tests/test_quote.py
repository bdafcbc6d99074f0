"""Tests for block quote markers and callouts."""

from mdmarks.config import RenderConfig
from mdmarks.core.marks import Anchor
from mdmarks.core.node_view import Document
from tests.harness import md, node, on_row, render, virt, with_anchor

LINES = ["> [!NOTE]", "> Some text", "", "> plain"]


def _render(config=None):
    doc = Document(LINES)
    root = md.document(doc, md.block_quote(doc, 0, 1), md.block_quote(doc, 3, 3))
    inline = md.inline_root(doc, 0, md.inline_span(doc, 0, "shortcut_link", "[!NOTE]"))
    return render(doc, root, config, inline_roots=[inline])


def _markers(marks):
    return [m for m in with_anchor(marks, Anchor.OVERLAY) if m.start_col == 0]


class TestQuote:
    def test_every_marker_replaced(self):
        markers = _markers(_render())
        assert [(m.start_row, virt(m)) for m in markers] == [(0, "▋ "), (1, "▋ "), (3, "▋ ")]

    def test_callout_colours_whole_quote(self):
        markers = _markers(_render())
        assert [m.virt_text[0].highlight for m in markers] == [
            "RenderMarkdownInfo",
            "RenderMarkdownInfo",
            "RenderMarkdownQuote",
        ]

    def test_callout_label_overlay(self):
        marks = _render()
        [label] = [m for m in with_anchor(on_row(marks, 0), Anchor.OVERLAY) if m.start_col == 2]
        assert virt(label) == "󰋽 Note"
        assert (label.start_col, label.end_col) == (2, 9)
        assert label.virt_text[0].highlight == "RenderMarkdownInfo"

    def test_callout_quote_icon(self):
        config = RenderConfig.from_dict(
            {"callouts": {"note": {"raw": "[!NOTE]", "rendered": "N", "highlight": "X", "quote_icon": "┃"}}}
        )
        markers = _markers(_render(config))
        assert [virt(m) for m in markers] == ["┃ ", "┃ ", "▋ "]

    def test_repeat_linebreak(self):
        config = RenderConfig.from_dict({"quote": {"repeat_linebreak": True}})
        assert all(m.repeat_linebreak for m in _markers(_render(config)))

    def test_disabled_still_renders_callout_label(self):
        marks = _render(RenderConfig.from_dict({"quote": {"enabled": False}}))
        assert [m.start_col for m in with_anchor(marks, Anchor.OVERLAY)] == [2]

    def test_nested_quote_markers_drawn_once(self):
        doc = Document(["> outer", "> > inner"])
        inner = node(
            "block_quote",
            (1, 2),
            (2, 0),
            node("block_quote_marker", (1, 2), (1, 4)),
            node("paragraph", (1, 4), (2, 0)),
        )
        outer = node(
            "block_quote",
            (0, 0),
            (2, 0),
            node("block_quote_marker", (0, 0), (0, 2)),
            node("paragraph", (0, 2), (1, 0)),
            node("block_continuation", (1, 0), (1, 2)),
            inner,
        )
        marks = render(doc, md.document(doc, outer))
        assert sorted((m.start_row, m.start_col) for m in marks) == [(0, 0), (1, 0), (1, 2)]
