"""Editing mixin: rename and quote/tag auto insertion."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from html_emmet_lsp._text import from_client_position, offset_at, to_client_units

from .base import LSPServerBase

if TYPE_CHECKING:
    from lsprotocol.types import Position, WorkspaceEdit
    from pygls.workspace import TextDocument

AutoInsertKind = Literal["autoQuote", "autoClose"]


class EditingMixin(LSPServerBase):
    """Delegates document edits to the HTML language service."""

    def _do_rename(
        self, document: TextDocument, position: Position, new_name: str
    ) -> WorkspaceEdit | None:
        edit = self.html_service.do_rename(
            document,
            from_client_position(document, position),
            new_name,
            self._get_html_document(document),
        )
        return to_client_units(document, edit)

    def _do_auto_insert(
        self, document: TextDocument, position: Position, kind: AutoInsertKind
    ) -> str | None:
        """Text to insert after a quote or tag trigger, or ``None``.

        ``autoQuote`` applies right after ``=``; ``autoClose`` right after
        ``>`` or ``/``.
        """
        text = document.source
        position = from_client_position(document, position)
        offset = offset_at(text, position)
        previous = text[offset - 1] if offset > 0 else ""
        if kind == "autoQuote" and previous == "=":
            return self.html_service.do_quote_complete(
                document, position, self._get_html_document(document), self.html_settings
            )
        if kind == "autoClose" and previous in (">", "/"):
            return self.html_service.do_tag_complete(
                document, position, self._get_html_document(document)
            )
        return None
