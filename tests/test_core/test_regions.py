"""Tests for region classification."""

from __future__ import annotations

import pytest

from html_emmet_lsp._core import classify_region, classify_region_by_scanning
from html_emmet_lsp._services.html_parser import parse_html
from html_emmet_lsp.models import Region


def classify_both(text_with_cursor, with_cursor):
    text, offset, _ = with_cursor(text_with_cursor)
    structural = classify_region(text, offset, parse_html(text))
    scanned = classify_region_by_scanning(text, offset)
    return structural, scanned


class TestClassifyRegion:
    """Test classification with the structural index and by scanning."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("<div>|</div>", Region.PLAIN_MARKUP),
            ("<style>a { co|lor: red }</style>", Region.EMBEDDED_STYLE),
            ("<script>let x| = 1;</script>", Region.EMBEDDED_SCRIPT),
            ("<html><head><style>\n  a {|}\n</style></head></html>", Region.EMBEDDED_STYLE),
            ("<style>a {}</style>\n<p>|</p>", Region.PLAIN_MARKUP),
            ("<script></script><div>d|iv</div>", Region.PLAIN_MARKUP),
        ],
    )
    def test_structural_and_scanning_agree(self, text, expected, with_cursor):
        """Both strategies classify well-formed documents the same way."""
        structural, scanned = classify_both(text, with_cursor)
        assert structural is expected
        assert scanned is expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("<style>\n  a { col|", Region.EMBEDDED_STYLE),
            ("<html><head><style>\n  a|", Region.EMBEDDED_STYLE),
            ("<div>\n<style>\n  b|\n</div>", Region.EMBEDDED_STYLE),
            ("<script>\n  le|", Region.EMBEDDED_SCRIPT),
            ("<p>x</p>\n<style>\n  a|", Region.EMBEDDED_STYLE),
            ("<style>|", Region.EMBEDDED_STYLE),
        ],
    )
    def test_unterminated_block_runs_to_end(self, text, expected, with_cursor):
        """A block never closed extends to the end of the document in both strategies."""
        structural, scanned = classify_both(text, with_cursor)
        assert structural is expected
        assert scanned is expected

    @pytest.mark.parametrize(
        "text",
        ["<!-- <style> -->|", "<!-- <script> -->\n<p>|</p>", "<!-- <style> -->\n<b>x|</b>"],
    )
    def test_tags_in_comments_are_ignored(self, text, with_cursor):
        structural, scanned = classify_both(text, with_cursor)
        assert structural is Region.PLAIN_MARKUP
        assert scanned is Region.PLAIN_MARKUP

    def test_boundary_right_after_start_tag_is_inside(self, with_cursor):
        """The content span includes its first edge."""
        structural, scanned = classify_both("<style>|a {}</style>", with_cursor)
        assert structural is Region.EMBEDDED_STYLE
        assert scanned is Region.EMBEDDED_STYLE

    def test_boundary_right_before_end_tag_is_inside(self, with_cursor):
        """The content span includes its last edge."""
        structural, scanned = classify_both("<style>a {}|</style>", with_cursor)
        assert structural is Region.EMBEDDED_STYLE
        assert scanned is Region.EMBEDDED_STYLE

    def test_after_end_tag_is_markup(self, with_cursor):
        structural, scanned = classify_both("<style>a {}</style>|", with_cursor)
        assert structural is Region.PLAIN_MARKUP
        assert scanned is Region.PLAIN_MARKUP

    def test_inside_start_tag_is_markup(self, with_cursor):
        """A cursor among the attributes of ``<style>`` is not in its content."""
        structural, scanned = classify_both('<style media="s|creen">a {}</style>', with_cursor)
        assert structural is Region.PLAIN_MARKUP
        assert scanned is Region.PLAIN_MARKUP

    @pytest.mark.parametrize("offset", [-1, 100])
    def test_offset_outside_document(self, offset):
        text = "<div></div>"
        assert classify_region(text, offset, parse_html(text)) is Region.OUTSIDE_TAG_CONTENT
        assert classify_region_by_scanning(text, offset) is Region.OUTSIDE_TAG_CONTENT

    def test_without_index_falls_back_to_scanning(self, with_cursor):
        text, offset, _ = with_cursor("<style>a { |}</style>")
        assert classify_region(text, offset) is Region.EMBEDDED_STYLE

    def test_empty_document(self):
        assert classify_region("", 0, parse_html("")) is Region.PLAIN_MARKUP


class TestClassifyByScanning:
    """Test the raw-text fallback on its own."""

    def test_unterminated_style_extends_to_end(self, with_cursor):
        text, offset, _ = with_cursor("<style>\n  a { col|")
        assert classify_region_by_scanning(text, offset) is Region.EMBEDDED_STYLE

    def test_tag_name_prefix_is_not_a_style_tag(self, with_cursor):
        """``<styles>`` is not a style block."""
        text, offset, _ = with_cursor("<styles>a|</styles>")
        assert classify_region_by_scanning(text, offset) is Region.PLAIN_MARKUP

    def test_case_insensitive_tags(self, with_cursor):
        text, offset, _ = with_cursor("<SCRIPT>va|r x;</SCRIPT>")
        assert classify_region_by_scanning(text, offset) is Region.EMBEDDED_SCRIPT

    def test_last_block_before_cursor_wins(self, with_cursor):
        text, offset, _ = with_cursor("<style>a{}</style><script>|</script>")
        assert classify_region_by_scanning(text, offset) is Region.EMBEDDED_SCRIPT

    def test_region_embedded_flag(self):
        assert Region.EMBEDDED_STYLE.is_embedded
        assert Region.EMBEDDED_SCRIPT.is_embedded
        assert not Region.PLAIN_MARKUP.is_embedded
        assert not Region.OUTSIDE_TAG_CONTENT.is_embedded
