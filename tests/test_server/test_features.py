"""Tests for the color, navigation and editing mixins."""

from __future__ import annotations

from lsprotocol.types import Color, Position, Range

RED = Color(red=1.0, green=0.0, blue=0.0, alpha=1.0)


class TestColors:
    def test_document_colors(self, server, make_document):
        document = make_document('<body bgcolor="red" text="#0000ff"></body>')
        colors = server._find_document_colors(document)
        assert [c.color for c in colors] == [RED, Color(red=0.0, green=0.0, blue=1.0, alpha=1.0)]

    def test_document_colors_in_utf16_units(self, server, make_document):
        document = make_document('<b title="\U0001f600"></b><font color="red">x</font>')
        colors = server._find_document_colors(document)
        start = len('<b title="\U0001f600"></b><font color="') + 1
        assert colors[0].range == Range(
            start=Position(line=0, character=start), end=Position(line=0, character=start + 3)
        )

    def test_color_presentations(self, server, make_document):
        document = make_document('<body bgcolor="red"></body>')
        range_ = Range(start=Position(line=0, character=15), end=Position(line=0, character=18))
        labels = [p.label for p in server._get_color_presentations(document, RED, range_)]
        assert labels == ["rgb(255, 0, 0)", "#ff0000", "hsl(0, 100%, 50%)"]


class TestNavigation:
    """Test the structural queries exposed by the server."""

    def test_hover(self, server, make_document):
        hover = server._do_hover(make_document("<p></p>"), Position(line=0, character=1))
        assert "<p>" in hover.contents.value

    def test_highlights(self, server, make_document):
        highlights = server._find_document_highlights(
            make_document("<p></p>"), Position(line=0, character=1)
        )
        assert len(highlights) == 2

    def test_highlights_in_utf16_units(self, server, make_document):
        highlights = server._find_document_highlights(
            make_document("<p>\U0001f600</p>"), Position(line=0, character=7)
        )
        assert [h.range for h in highlights] == [
            Range(start=Position(line=0, character=1), end=Position(line=0, character=2)),
            Range(start=Position(line=0, character=7), end=Position(line=0, character=8)),
        ]

    def test_links(self, server, make_document):
        links = server._find_document_links(make_document('<a href="b.html"></a>'))
        assert links[0].target == "file:///project/b.html"

    def test_symbols(self, server, make_document):
        symbols = server._find_document_symbols(make_document('<main id="m"></main>'))
        assert [s.name for s in symbols] == ["main#m"]

    def test_folding_ranges(self, server, make_document):
        ranges = server._get_folding_ranges(make_document("<ul>\n  <li></li>\n  <li></li>\n</ul>"))
        assert [(r.start_line, r.end_line) for r in ranges] == [(0, 2)]

    def test_selection_ranges(self, server, make_document):
        selections = server._get_selection_ranges(
            make_document("<p>x</p>"), [Position(line=0, character=3), Position(line=0, character=0)]
        )
        assert len(selections) == 2

    def test_matching_tag(self, server, make_document):
        position = server._find_matching_tag_position(
            make_document("<p></p>"), Position(line=0, character=1)
        )
        assert position == Position(line=0, character=5)

    def test_linked_editing(self, server, make_document):
        linked = server._find_linked_editing_ranges(
            make_document("<b></b>"), Position(line=0, character=2)
        )
        assert len(linked.ranges) == 2
        assert linked.word_pattern

    def test_linked_editing_outside_tag_name(self, server, make_document):
        linked = server._find_linked_editing_ranges(
            make_document("<b>text</b>"), Position(line=0, character=5)
        )
        assert linked is None


class TestEditing:
    """Test rename and auto insertion."""

    def test_rename(self, server, make_document):
        document = make_document("<b>x</b>")
        edit = server._do_rename(document, Position(line=0, character=1), "strong")
        assert len(edit.changes[document.uri]) == 2

    def test_auto_quote(self, server, make_document):
        document = make_document("<div id=")
        assert server._do_auto_insert(document, Position(line=0, character=8), "autoQuote") == '"$1"'

    def test_auto_quote_follows_settings(self, server, make_document):
        server.apply_settings({"html": {"completion": {"attributeDefaultValue": "singlequotes"}}})
        document = make_document("<div id=")
        assert server._do_auto_insert(document, Position(line=0, character=8), "autoQuote") == "'$1'"

    def test_auto_close(self, server, make_document):
        document = make_document("<section>")
        result = server._do_auto_insert(document, Position(line=0, character=9), "autoClose")
        assert result == "$0</section>"

    def test_kind_must_match_trigger(self, server, make_document):
        document = make_document("<div id=")
        position = Position(line=0, character=8)
        assert server._do_auto_insert(document, position, "autoClose") is None
        document = make_document("<section>")
        position = Position(line=0, character=9)
        assert server._do_auto_insert(document, position, "autoQuote") is None

    def test_start_of_document(self, server, make_document):
        document = make_document("")
        assert server._do_auto_insert(document, Position(line=0, character=0), "autoClose") is None
