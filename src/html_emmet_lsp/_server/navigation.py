"""Navigation mixin: hover, highlights, links, symbols and structure queries.

The HTML service works in characters of the document text; positions are
converted from and back to the client's encoding here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lsprotocol.types import LinkedEditingRanges

from html_emmet_lsp._text import from_client_position, to_client_units

from .base import LSPServerBase

if TYPE_CHECKING:
    from lsprotocol.types import (
        DocumentHighlight,
        DocumentLink,
        DocumentSymbol,
        FoldingRange,
        Hover,
        Position,
        SelectionRange,
    )
    from pygls.workspace import TextDocument

# Tag names as accepted by linked editing.
_TAG_NAME_PATTERN = r"[A-Za-z][\w:.-]*"


class NavigationMixin(LSPServerBase):
    """Delegates read-only structural queries to the HTML language service."""

    def _do_hover(self, document: TextDocument, position: Position) -> Hover | None:
        hover = self.html_service.do_hover(
            document,
            from_client_position(document, position),
            self._get_html_document(document),
            self.html_settings,
        )
        return to_client_units(document, hover)

    def _find_document_highlights(
        self, document: TextDocument, position: Position
    ) -> list[DocumentHighlight]:
        highlights = self.html_service.find_document_highlights(
            document, from_client_position(document, position), self._get_html_document(document)
        )
        return to_client_units(document, highlights)

    def _find_document_links(self, document: TextDocument) -> list[DocumentLink]:
        return to_client_units(document, self.html_service.find_document_links(document))

    def _find_document_symbols(self, document: TextDocument) -> list[DocumentSymbol]:
        symbols = self.html_service.find_document_symbols(
            document, self._get_html_document(document)
        )
        return to_client_units(document, symbols)

    def _get_folding_ranges(self, document: TextDocument) -> list[FoldingRange]:
        # Folding ranges carry line numbers only.
        return self.html_service.get_folding_ranges(document, self._get_html_document(document))

    def _get_selection_ranges(
        self, document: TextDocument, positions: list[Position]
    ) -> list[SelectionRange]:
        selections = self.html_service.get_selection_ranges(
            document,
            [from_client_position(document, position) for position in positions],
            self._get_html_document(document),
        )
        return to_client_units(document, selections)

    def _find_matching_tag_position(
        self, document: TextDocument, position: Position
    ) -> Position | None:
        matching = self.html_service.find_matching_tag_position(
            document, from_client_position(document, position), self._get_html_document(document)
        )
        return to_client_units(document, matching)

    def _find_linked_editing_ranges(
        self, document: TextDocument, position: Position
    ) -> LinkedEditingRanges | None:
        ranges = self.html_service.find_linked_editing_ranges(
            document, from_client_position(document, position), self._get_html_document(document)
        )
        if not ranges:
            return None
        return LinkedEditingRanges(
            ranges=to_client_units(document, ranges), word_pattern=_TAG_NAME_PATTERN
        )
