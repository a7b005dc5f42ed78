"""Tests for offset and position helpers."""

from __future__ import annotations

import logging

import pytest
from lsprotocol.types import DocumentHighlight, Position, PositionEncodingKind, Range
from pygls.workspace import PositionCodec, TextDocument

from html_emmet_lsp._logging import PlainFormatter, get_logger
from html_emmet_lsp._text import (
    from_client_position,
    get_text,
    line_offsets,
    offset_at,
    position_at,
    to_client_units,
)

TEXT = "<div>\r\n  p\n</div>"


class TestOffsets:
    """Test conversions and their clamping."""

    def test_line_offsets(self):
        assert line_offsets(TEXT) == [0, 7, 11]

    @pytest.mark.parametrize(
        ("line", "character", "offset"),
        [(0, 0, 0), (1, 2, 9), (2, 6, 17), (1, 50, 10), (9, 0, 17)],
    )
    def test_offset_at_clamps(self, line, character, offset):
        assert offset_at(TEXT, Position(line=line, character=character)) == offset

    @pytest.mark.parametrize(
        ("offset", "line", "character"), [(0, 0, 0), (9, 1, 2), (11, 2, 0), (100, 2, 6), (-4, 0, 0)]
    )
    def test_position_at_clamps(self, offset, line, character):
        assert position_at(TEXT, offset) == Position(line=line, character=character)

    def test_get_text(self):
        range_ = Range(start=Position(line=1, character=2), end=Position(line=2, character=2))
        assert get_text(TEXT, range_) == "p\n</"

    def test_get_text_inverted_range(self):
        range_ = Range(start=Position(line=2, character=0), end=Position(line=0, character=0))
        assert get_text(TEXT, range_) == ""


EMOJI_TEXT = "<p>\n<b>\U0001f600</b>x"


class TestClientPositions:
    """Test conversion to and from the client's position encoding."""

    @pytest.mark.parametrize(("character", "expected"), [(3, 3), (5, 4), (9, 8), (40, 9)])
    def test_from_utf16(self, make_document, character, expected):
        document = make_document(EMOJI_TEXT)
        position = from_client_position(document, Position(line=1, character=character))
        assert position == Position(line=1, character=expected)

    def test_offset_of_client_position(self, make_document):
        position = from_client_position(make_document(EMOJI_TEXT), Position(line=1, character=9))
        assert offset_at(EMOJI_TEXT, position) == EMOJI_TEXT.index("x")

    def test_lines_past_end_are_clamped(self, make_document):
        position = from_client_position(make_document(EMOJI_TEXT), Position(line=7, character=0))
        assert offset_at(EMOJI_TEXT, position) == len(EMOJI_TEXT)

    def test_to_utf16_converts_nested_positions(self, make_document):
        document = make_document(EMOJI_TEXT)
        highlight = DocumentHighlight(
            range=Range(start=Position(line=1, character=4), end=Position(line=1, character=8))
        )
        converted = to_client_units(document, [highlight])
        assert converted[0].range == Range(
            start=Position(line=1, character=5), end=Position(line=1, character=9)
        )
        # The input is left untouched.
        assert highlight.range.start.character == 4

    def test_utf32_documents_count_characters(self):
        document = TextDocument(
            "file:///x.html",
            EMOJI_TEXT,
            position_codec=PositionCodec(PositionEncodingKind.Utf32),
        )
        position = Position(line=1, character=8)
        assert from_client_position(document, position) == position
        assert to_client_units(document, position) == position

    def test_none_passes_through(self, make_document):
        assert to_client_units(make_document(EMOJI_TEXT), None) is None


class TestLogging:
    """Test log record formatting."""

    def test_component_label(self):
        record = logging.LogRecord("html_emmet_lsp.cache", logging.INFO, __file__, 1, "hi", None, None)
        record.component = "cache"
        assert PlainFormatter().format(record).endswith(" cache] hi")

    def test_module_name_without_package_prefix(self):
        record = logging.LogRecord(
            "html_emmet_lsp._server.base", logging.WARNING, __file__, 1, "careful", None, None
        )
        message = PlainFormatter().format(record)
        assert message.startswith("[W ")
        assert "_server.base] careful" in message

    def test_get_logger_adapter_sets_component(self, caplog):
        logger = get_logger("html_emmet_lsp.tests", "tests")
        with caplog.at_level(logging.INFO, logger="html_emmet_lsp.tests"):
            logger.info("message")
        assert caplog.records[0].component == "tests"
