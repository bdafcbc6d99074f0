"""Tests for heading and thematic break marks."""

from mdmarks.config import RenderConfig
from mdmarks.core.context import ConcealMap, ConcealRange
from mdmarks.core.marks import Anchor, Priority
from mdmarks.core.node_view import Document
from mdmarks.render.heading import available_width
from tests.harness import md, on_row, render, signs, virt, virt_line, with_anchor


def _config(**heading):
    heading.setdefault("icons", ["1 ", "2 ", "3 "])
    return RenderConfig.from_dict({"heading": heading})


def _render_heading(lines, row, config, **options):
    doc = Document(lines)
    return render(doc, md.document(doc, md.heading(doc, row)), config, **options)


def test_available_width():
    assert available_width(2, 0) == 3
    assert available_width(3, 2) == 2


# ─── Icon placement ──────────────────────────────────────────────────────────


class TestIcon:
    def test_overlay_pads_icon_to_marker(self):
        marks = _render_heading(["### Title"], 0, _config())
        [icon] = with_anchor(marks, Anchor.OVERLAY)
        assert virt(icon) == "  3 "
        assert (icon.start_col, icon.end_col) == (0, 3)
        assert icon.virt_text[0].highlight == ("RenderMarkdownH3", "RenderMarkdownH3Bg")

    def test_inline_position_hides_marker(self):
        marks = _render_heading(["## Title"], 0, _config(position="inline"))
        [icon] = with_anchor(marks, Anchor.INLINE)
        assert virt(icon) == "2 "
        assert icon.hide and icon.conceal
        assert (icon.start_col, icon.end_col) == (0, 2)

    def test_falls_back_to_inline_when_icon_too_wide(self):
        marks = _render_heading(["# Title"], 0, _config(icons=["HEAD "]))
        [icon] = with_anchor(marks, Anchor.INLINE)
        assert virt(icon) == "HEAD "
        assert icon.hide

    def test_concealed_marker_shrinks_room(self):
        concealed = ConcealMap([ConcealRange(0, 0, 2)])
        marks = _render_heading(["### Title"], 0, _config(), concealed=concealed)
        [icon] = with_anchor(marks, Anchor.OVERLAY)
        assert virt(icon) == "3 "

    def test_default_glyph_icons(self):
        marks = _render_heading(["## Title"], 0, RenderConfig())
        [icon] = with_anchor(marks, Anchor.OVERLAY)
        assert virt(icon) == " 󰲣 "

    def test_no_icons_configured(self):
        marks = _render_heading(["## Title"], 0, _config(icons=[]))
        assert with_anchor(marks, Anchor.OVERLAY) == []


# ─── Background, sign, width ─────────────────────────────────────────────────


class TestBackground:
    def test_background_spans_heading_row(self):
        marks = _render_heading(["## Title", "body"], 0, _config())
        [background] = [m for m in marks if m.hl_group is not None]
        assert background.hl_group == "RenderMarkdownH2Bg"
        assert background.hl_eol
        assert (background.start_row, background.end_row, background.end_col) == (0, 1, 0)

    def test_levels_past_table_reuse_last(self):
        config = RenderConfig.from_dict({"heading": {"backgrounds": ["A", "B"]}})
        marks = _render_heading(["#### Deep"], 0, config)
        [background] = [m for m in marks if m.hl_group is not None]
        assert background.hl_group == "B"

    def test_sign(self):
        marks = _render_heading(["## Title"], 0, _config())
        [sign] = signs(marks)
        assert sign.sign_text == "󰫎 "
        assert sign.sign_hl_group == "MdMarks_RenderMarkdownH2_RenderMarkdownSign"
        assert not sign.conceal

    def test_sign_disabled_globally(self):
        config = RenderConfig.from_dict({"sign": {"enabled": False}})
        assert signs(_render_heading(["## Title"], 0, config)) == []

    def test_block_width_fill(self):
        marks = _render_heading(["## Title"], 0, _config(width="block"))
        [fill] = with_anchor(marks, Anchor.WIN_COL)
        # icon area (2 + 1) plus "Title"
        assert fill.win_col == 8
        assert fill.priority is Priority.FILL
        assert virt(fill).strip() == ""

    def test_block_width_min_width(self):
        marks = _render_heading(["## Title"], 0, _config(width="block", min_width=30, left_pad=1, right_pad=1))
        [fill] = with_anchor(marks, Anchor.WIN_COL)
        assert fill.win_col == 30

    def test_block_width_counts_padding(self):
        marks = _render_heading(["## Title"], 0, _config(width="block", left_pad=2, right_pad=3))
        [fill] = with_anchor(marks, Anchor.WIN_COL)
        assert fill.win_col == 2 + 3 + 5 + 3

    def test_left_pad(self):
        marks = _render_heading(["## Title"], 0, _config(left_pad=2))
        [pad] = with_anchor(marks, Anchor.INLINE)
        assert virt(pad) == "  "
        assert pad.priority is Priority.FILL
        assert not pad.conceal

    def test_disabled(self):
        assert _render_heading(["## Title"], 0, _config(enabled=False)) == []


# ─── Borders ─────────────────────────────────────────────────────────────────


class TestBorder:
    def test_blank_neighbours_take_overlay_borders(self):
        marks = _render_heading(["", "## Title", "", "text"], 1, _config(border=True))
        [above] = with_anchor(on_row(marks, 0), Anchor.OVERLAY)
        [below] = with_anchor(on_row(marks, 2), Anchor.OVERLAY)
        assert virt(above) == "▄" * 40
        assert virt(below) == "▀" * 40
        assert above.virt_text[-1].highlight == "MdMarks_RenderMarkdownH2Bg_Inverse"

    def test_buffer_edges_become_virtual_lines(self):
        marks = _render_heading(["## Title"], 0, _config(border=True))
        lines = [m for m in marks if m.virt_lines]
        assert [m.virt_lines_above for m in lines] == [True, False]
        assert virt_line(lines[0].virt_lines[0]) == "▄" * 40

    def test_border_prefix_uses_foreground(self):
        marks = _render_heading(["", "## Title", ""], 1, _config(border=True, border_prefix=True, left_pad=1))
        [above] = with_anchor(on_row(marks, 0), Anchor.OVERLAY)
        assert [chunk.text for chunk in above.virt_text] == ["▄", "▄▄", "▄" * 37]
        assert above.virt_text[1].highlight == "RenderMarkdownH2"

    def test_adjacent_headings_share_blank_line(self):
        doc = Document(["# A", "", "## B", "", "text"])
        root = md.document(doc, md.heading(doc, 0), md.heading(doc, 2))
        marks = render(doc, root, _config(border=True))
        assert len(with_anchor(on_row(marks, 1), Anchor.OVERLAY)) == 1
        above_b = [m for m in on_row(marks, 2) if m.virt_lines and m.virt_lines_above]
        assert len(above_b) == 1


# ─── Thematic break ──────────────────────────────────────────────────────────


class TestDash:
    def _render(self, config):
        doc = Document(["text", "---"])
        return render(doc, md.document(doc, md.thematic_break(doc, 1)), config)

    def test_full_width(self):
        [dash] = self._render(RenderConfig())
        assert virt(dash) == "─" * 40
        assert dash.anchor is Anchor.OVERLAY
        assert (dash.start_row, dash.start_col) == (1, 0)

    def test_fixed_width(self):
        [dash] = self._render(RenderConfig.from_dict({"dash": {"width": 10, "icon": "="}}))
        assert virt(dash) == "=" * 10

    def test_disabled(self):
        assert self._render(RenderConfig.from_dict({"dash": {"enabled": False}})) == []
