"""Interfaces of the language engines the completion core delegates to."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from lsprotocol.types import (
        Color,
        ColorInformation,
        ColorPresentation,
        CompletionList,
        DocumentHighlight,
        DocumentLink,
        DocumentSymbol,
        FoldingRange,
        Hover,
        Position,
        Range,
        SelectionRange,
        WorkspaceEdit,
    )
    from pygls.workspace import TextDocument

    from html_emmet_lsp.models import (
        AbbreviationSuggestion,
        EnginePosition,
        EngineRange,
        HTMLDocument,
        Token,
    )
    from html_emmet_lsp.settings import EmmetSettings, HTMLSettings


class EngineTokenization(Protocol):
    def tokenize(self, line: str, state: Any = None) -> Any: ...


class EngineModel(Protocol):
    """Read-only document view the abbreviation engine works against."""

    def get_line_content(self, line_number: int) -> str: ...

    def get_line_count(self) -> int: ...

    def get_value_in_range(self, range_: EngineRange) -> str: ...

    def get_language_id(self) -> str: ...

    def get_offset_at(self, position: EnginePosition) -> int: ...

    @property
    def tokenization(self) -> EngineTokenization: ...


class AbbreviationEngine(Protocol):
    """Expands abbreviations such as ``ul>li*3`` into markup."""

    def is_valid_location(
        self, model: EngineModel, position: EnginePosition, syntax: str, language_id: str
    ) -> bool:
        """Whether an abbreviation typed at ``position`` may be expanded."""
        ...

    def do_complete(
        self,
        model: EngineModel,
        position: EnginePosition,
        syntax: str,
        settings: EmmetSettings,
    ) -> list[AbbreviationSuggestion] | None:
        """Candidates for the abbreviation ending at ``position``."""
        ...


class HTMLLanguageService(Protocol):
    """Structural markup analyzer."""

    def parse_html_document(self, document: TextDocument) -> HTMLDocument: ...

    def create_scanner(self, text: str) -> Iterator[Token]: ...

    def do_complete(
        self,
        document: TextDocument,
        position: Position,
        html_document: HTMLDocument,
        settings: HTMLSettings,
    ) -> CompletionList: ...

    def do_hover(
        self,
        document: TextDocument,
        position: Position,
        html_document: HTMLDocument,
        settings: HTMLSettings,
    ) -> Hover | None: ...

    def find_document_highlights(
        self, document: TextDocument, position: Position, html_document: HTMLDocument
    ) -> list[DocumentHighlight]: ...

    def find_document_links(self, document: TextDocument) -> list[DocumentLink]: ...

    def find_document_symbols(
        self, document: TextDocument, html_document: HTMLDocument
    ) -> list[DocumentSymbol]: ...

    def do_rename(
        self,
        document: TextDocument,
        position: Position,
        new_name: str,
        html_document: HTMLDocument,
    ) -> WorkspaceEdit | None: ...

    def find_matching_tag_position(
        self, document: TextDocument, position: Position, html_document: HTMLDocument
    ) -> Position | None: ...

    def find_linked_editing_ranges(
        self, document: TextDocument, position: Position, html_document: HTMLDocument
    ) -> list[Range] | None: ...

    def get_folding_ranges(
        self, document: TextDocument, html_document: HTMLDocument
    ) -> list[FoldingRange]: ...

    def get_selection_ranges(
        self, document: TextDocument, positions: list[Position], html_document: HTMLDocument
    ) -> list[SelectionRange]: ...

    def do_quote_complete(
        self,
        document: TextDocument,
        position: Position,
        html_document: HTMLDocument,
        settings: HTMLSettings,
    ) -> str | None: ...

    def do_tag_complete(
        self, document: TextDocument, position: Position, html_document: HTMLDocument
    ) -> str | None: ...


class CSSLanguageService(Protocol):
    """Stylesheet analyzer."""

    def parse_stylesheet(self, document: TextDocument) -> Any: ...

    def find_document_colors(
        self, document: TextDocument, stylesheet: Any
    ) -> list[ColorInformation]: ...

    def get_color_presentations(
        self, document: TextDocument, stylesheet: Any, color: Color, range_: Range
    ) -> list[ColorPresentation]: ...

    def do_complete(
        self, document: TextDocument, position: Position, stylesheet: Any
    ) -> CompletionList: ...
