"""Completion mixin for providing autocompletion functionality."""

from __future__ import annotations

from typing import TYPE_CHECKING

import attrs
from lsprotocol.types import CompletionList, InsertReplaceEdit, TextEdit

from html_emmet_lsp._core import (
    classify_region,
    create_virtual_document,
    get_abbreviation_completions,
    merge_completions,
)
from html_emmet_lsp._core.regions import find_content_node
from html_emmet_lsp._logging import get_logger
from html_emmet_lsp._text import from_client_position, offset_at, to_client_units
from html_emmet_lsp.models import Region

from .base import LSPServerBase

if TYPE_CHECKING:
    from lsprotocol.types import CompletionItem, Position
    from pygls.workspace import TextDocument

    from html_emmet_lsp.models import HTMLDocument

logger = get_logger(__name__, "completion")

_ABBREVIATION_SYNTAX = "html"


class CompletionMixin(LSPServerBase):
    """Provides autocompletion functionality for the LSP server."""

    def _do_complete(self, document: TextDocument, position: Position) -> CompletionList | None:
        """Completions for ``position``, routed by the region it falls in."""
        html_document = self._get_html_document(document)
        text = document.source
        server_position = from_client_position(document, position)
        offset = offset_at(text, server_position)
        region = classify_region(text, offset, html_document)

        if region is Region.EMBEDDED_STYLE:
            return to_client_units(
                document, self._complete_in_style(document, offset, html_document)
            )
        if region is Region.EMBEDDED_SCRIPT:
            # Script completions belong to script tooling.
            return None

        html_completions = self.html_service.do_complete(
            document, server_position, html_document, self.html_settings
        )
        html_completions = to_client_units(document, html_completions)
        abbreviation_completions = get_abbreviation_completions(
            document,
            position,
            _ABBREVIATION_SYNTAX,
            self.emmet_settings,
            html_document=html_document,
            engine=self.abbreviation_engine,
        )
        return merge_completions(html_completions, abbreviation_completions)

    def _complete_in_style(
        self, document: TextDocument, offset: int, html_document: HTMLDocument
    ) -> CompletionList | None:
        node = find_content_node(html_document, offset)
        if node is None or node.content_span is None:
            return None
        start, end = node.content_span
        virtual = create_virtual_document(
            document.source[start:end],
            "css",
            fragment_start=start,
            uri=f"{document.uri}.css",
            version=document.version,
        )
        stylesheet = self.css_service.parse_stylesheet(virtual.document)
        css_completions = self.css_service.do_complete(
            virtual.document, virtual.position_in(offset), stylesheet
        )
        return CompletionList(
            is_incomplete=css_completions.is_incomplete,
            items=[
                self._map_item_out(item, virtual, document.source)
                for item in css_completions.items
            ],
        )

    def _map_item_out(self, item: CompletionItem, virtual, host_text: str) -> CompletionItem:
        """Rebuild ``item`` with its edit range moved into host coordinates."""
        edit = item.text_edit
        if isinstance(edit, TextEdit):
            edit = TextEdit(range=virtual.map_range_out(edit.range, host_text), new_text=edit.new_text)
        elif isinstance(edit, InsertReplaceEdit):
            edit = InsertReplaceEdit(
                new_text=edit.new_text,
                insert=virtual.map_range_out(edit.insert, host_text),
                replace=virtual.map_range_out(edit.replace, host_text),
            )
        else:
            return item
        return attrs.evolve(item, text_edit=edit)
