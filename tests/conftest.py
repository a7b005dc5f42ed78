"""Shared fixtures for html-emmet-lsp tests."""

from __future__ import annotations

import pytest
from pygls.workspace import TextDocument

from html_emmet_lsp._server.server import HTMLLanguageServer
from html_emmet_lsp._services import CSSService, EmmetEngine, HTMLService
from html_emmet_lsp._text import position_at

CURSOR = "|"
TEST_URI = "file:///project/index.html"


def make_document(
    text: str, uri: str = TEST_URI, version: int = 1, language_id: str = "html"
) -> TextDocument:
    """Create an in-memory document like the ones the workspace holds."""
    return TextDocument(uri, source=text, version=version, language_id=language_id)


def with_cursor(text: str):
    """Strip the ``|`` cursor marker from ``text``.

    Returns the text, the marker's offset and its protocol position.
    """
    offset = text.index(CURSOR)
    text = text[:offset] + text[offset + 1 :]
    return text, offset, position_at(text, offset)


@pytest.fixture
def html_service():
    return HTMLService()


@pytest.fixture
def css_service():
    return CSSService()


@pytest.fixture
def emmet_engine():
    return EmmetEngine()


@pytest.fixture
def server():
    """Server instance that is configured but never started."""
    return HTMLLanguageServer("html-emmet-lsp-test", "0")


@pytest.fixture(name="make_document")
def make_document_fixture():
    return make_document


@pytest.fixture(name="with_cursor")
def with_cursor_fixture():
    return with_cursor
