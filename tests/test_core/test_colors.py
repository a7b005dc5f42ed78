"""Tests for attribute color resolution."""

from __future__ import annotations

import pytest
from lsprotocol.types import Color, Position, Range

from html_emmet_lsp._core import find_colors, get_color_presentations
from html_emmet_lsp._core.colors import (
    is_color_attribute,
    parse_css_color,
    unquoted_attribute_value,
)
from html_emmet_lsp.models import Token, TokenType

RED = Color(red=1.0, green=0.0, blue=0.0, alpha=1.0)


class TestIsColorAttribute:
    @pytest.mark.parametrize(
        "name", ["color", "bgcolor", "fill", "stroke", "stop-color", "text", "bordercolor"]
    )
    def test_known_color_attributes(self, name):
        assert is_color_attribute(name)

    def test_any_name_ending_in_color(self):
        assert is_color_attribute("data-highlightcolor")

    @pytest.mark.parametrize("name", ["class", "href", "colors", "id"])
    def test_other_attributes(self, name):
        assert not is_color_attribute(name)


class TestUnquotedAttributeValue:
    """Test trimming of quotes and whitespace from value tokens."""

    @pytest.mark.parametrize(
        ("raw", "value"),
        [('"#fff"', "#fff"), ("'red'", "red"), ("red", "red"), ('" red "', "red")],
    )
    def test_trims(self, raw, value):
        text = f"<p color={raw}>"
        start = text.index(raw)
        token = Token(TokenType.ATTRIBUTE_VALUE, start, start + len(raw), raw)
        result = unquoted_attribute_value(text, token)
        assert result.value == value
        assert text[result.start : result.end] == value

    @pytest.mark.parametrize("raw", ['""', '"  "'])
    def test_empty_value(self, raw):
        text = f"<p color={raw}>"
        start = text.index(raw)
        token = Token(TokenType.ATTRIBUTE_VALUE, start, start + len(raw), raw)
        assert unquoted_attribute_value(text, token) is None


class TestParseCssColor:
    def test_hex(self, css_service):
        assert parse_css_color("#ff0000", css_service) == RED

    def test_named(self, css_service):
        color = parse_css_color("blue", css_service)
        assert (color.red, color.green, color.blue) == (0.0, 0.0, 1.0)

    def test_rgba_alpha(self, css_service):
        assert parse_css_color("rgba(0, 0, 0, 0.5)", css_service).alpha == 0.5

    @pytest.mark.parametrize("value", ["notacolor", "12px", "red blue", ""])
    def test_not_exactly_one_color(self, value, css_service):
        assert parse_css_color(value, css_service) is None


class TestFindColors:
    """Test colors found in a host document."""

    def test_quoted_hex(self, make_document, html_service, css_service):
        document = make_document('<font color="#ff0000">x</font>')
        colors = find_colors(document, html_service, css_service)
        assert len(colors) == 1
        assert colors[0].color == RED
        # The range covers the value without its quotes.
        assert colors[0].range == Range(
            start=Position(line=0, character=13), end=Position(line=0, character=20)
        )

    def test_unquoted_value(self, make_document, html_service, css_service):
        document = make_document("<body bgcolor=red></body>")
        colors = find_colors(document, html_service, css_service)
        assert [c.color for c in colors] == [RED]
        assert colors[0].range.start == Position(line=0, character=14)

    def test_unparseable_value_skipped(self, make_document, html_service, css_service):
        document = make_document('<font color="sparkly">x</font><td bgcolor="#00f"></td>')
        colors = find_colors(document, html_service, css_service)
        assert len(colors) == 1
        assert colors[0].color.blue == 1.0

    def test_non_color_attribute_ignored(self, make_document, html_service, css_service):
        document = make_document('<div class="red" title="#fff"></div>')
        assert find_colors(document, html_service, css_service) == []

    def test_multiline_document(self, make_document, html_service, css_service):
        document = make_document('<table>\n  <td bgcolor="#00ff00"></td>\n</table>')
        colors = find_colors(document, html_service, css_service)
        assert colors[0].range.start == Position(line=1, character=15)


class TestGetColorPresentations:
    def test_opaque_color(self, make_document, css_service):
        document = make_document('<font color="#ff0000">x</font>')
        range_ = Range(start=Position(line=0, character=13), end=Position(line=0, character=20))
        labels = [p.label for p in get_color_presentations(document, RED, range_, css_service)]
        assert labels == ["rgb(255, 0, 0)", "#ff0000", "hsl(0, 100%, 50%)"]

    def test_translucent_color(self, make_document, css_service):
        document = make_document('<font color="red">x</font>')
        range_ = Range(start=Position(line=0, character=13), end=Position(line=0, character=16))
        color = Color(red=0.0, green=0.0, blue=1.0, alpha=0.5)
        labels = [p.label for p in get_color_presentations(document, color, range_, css_service)]
        assert labels[0] == "rgba(0, 0, 255, 0.5)"
        assert labels[1] == "#0000ff80"
        assert labels[2].startswith("hsla(240, 100%, 50%")
