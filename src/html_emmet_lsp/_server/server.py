from __future__ import annotations

from typing import Any

from lsprotocol.types import (
    ColorInformation,
    ColorPresentation,
    ColorPresentationParams,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeConfigurationParams,
    DidCloseTextDocumentParams,
    DocumentColorParams,
    DocumentHighlight,
    DocumentHighlightParams,
    DocumentLink,
    DocumentLinkOptions,
    DocumentLinkParams,
    DocumentSymbol,
    DocumentSymbolParams,
    FoldingRange,
    FoldingRangeParams,
    Hover,
    HoverParams,
    InitializeParams,
    LinkedEditingRangeParams,
    LinkedEditingRanges,
    Position,
    RenameParams,
    SelectionRange,
    SelectionRangeParams,
    WorkspaceEdit,
)

from html_emmet_lsp import __version__
from html_emmet_lsp._logging import get_logger
from html_emmet_lsp.constants import SERVER_NAME, all_trigger_characters

from .colors import ColorMixin
from .completion import CompletionMixin
from .editing import EditingMixin
from .navigation import NavigationMixin

logger = get_logger(__name__, "server")

AUTO_INSERT_REQUEST = "html/autoInsert"


class HTMLLanguageServer(CompletionMixin, ColorMixin, NavigationMixin, EditingMixin):
    """Language Server for HTML with embedded CSS and Emmet abbreviations."""


def _field(obj: Any, name: str) -> Any:
    """Read ``name`` from a deserialized custom-request object or a plain dict."""
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def create_server(**kwargs) -> HTMLLanguageServer:
    """Create the server and register its protocol features.

    Keyword arguments are forwarded to :class:`HTMLLanguageServer`.
    """
    server = HTMLLanguageServer(SERVER_NAME, __version__, **kwargs)

    @server.feature("initialize")
    def initialize(params: InitializeParams):
        """Apply the client's initial settings."""
        logger.info("Initializing HTML Emmet LSP server")
        options = params.initialization_options
        if isinstance(options, dict):
            server.apply_settings(options.get("settings", options))

    @server.feature("workspace/didChangeConfiguration")
    def did_change_configuration(params: DidChangeConfigurationParams):
        """Rebuild settings from the client's current configuration."""
        if isinstance(params.settings, dict):
            server.apply_settings(params.settings)

    @server.feature("textDocument/didOpen")
    def did_open(params):
        logger.info(f"Opened document: {params.text_document.uri}")

    @server.feature("textDocument/didClose")
    def did_close(params: DidCloseTextDocumentParams):
        """Drop the cached parse of a closed document."""
        server.on_document_closed(params.text_document)
        logger.info(f"Closed document: {params.text_document.uri}")

    @server.feature("shutdown")
    def shutdown(params):
        server.dispose()

    @server.feature(
        "textDocument/completion",
        CompletionOptions(trigger_characters=all_trigger_characters(), resolve_provider=False),
    )
    def completion(params: CompletionParams) -> CompletionList | None:
        """Provide completion suggestions."""
        document = server._get_document(params.text_document.uri)
        if document is None:
            return None
        return server._do_complete(document, params.position)

    @server.feature("textDocument/hover")
    def hover(params: HoverParams) -> Hover | None:
        """Provide hover information."""
        document = server._get_document(params.text_document.uri)
        if document is None:
            return None
        return server._do_hover(document, params.position)

    @server.feature("textDocument/documentHighlight")
    def document_highlight(params: DocumentHighlightParams) -> list[DocumentHighlight] | None:
        document = server._get_document(params.text_document.uri)
        if document is None:
            return None
        return server._find_document_highlights(document, params.position)

    @server.feature("textDocument/documentLink", DocumentLinkOptions(resolve_provider=False))
    def document_link(params: DocumentLinkParams) -> list[DocumentLink]:
        document = server._get_document(params.text_document.uri)
        if document is None:
            return []
        return server._find_document_links(document)

    @server.feature("textDocument/documentSymbol")
    def document_symbol(params: DocumentSymbolParams) -> list[DocumentSymbol]:
        document = server._get_document(params.text_document.uri)
        if document is None:
            return []
        return server._find_document_symbols(document)

    @server.feature("textDocument/rename")
    def rename(params: RenameParams) -> WorkspaceEdit | None:
        document = server._get_document(params.text_document.uri)
        if document is None:
            return None
        return server._do_rename(document, params.position, params.new_name)

    @server.feature("textDocument/foldingRange")
    def folding_range(params: FoldingRangeParams) -> list[FoldingRange]:
        document = server._get_document(params.text_document.uri)
        if document is None:
            return []
        return server._get_folding_ranges(document)

    @server.feature("textDocument/selectionRange")
    def selection_range(params: SelectionRangeParams) -> list[SelectionRange]:
        document = server._get_document(params.text_document.uri)
        if document is None:
            return []
        return server._get_selection_ranges(document, params.positions)

    @server.feature("textDocument/linkedEditingRange")
    def linked_editing_range(params: LinkedEditingRangeParams) -> LinkedEditingRanges | None:
        document = server._get_document(params.text_document.uri)
        if document is None:
            return None
        return server._find_linked_editing_ranges(document, params.position)

    @server.feature("textDocument/documentColor")
    def document_color(params: DocumentColorParams) -> list[ColorInformation]:
        document = server._get_document(params.text_document.uri)
        if document is None:
            return []
        return server._find_document_colors(document)

    @server.feature("textDocument/colorPresentation")
    def color_presentation(params: ColorPresentationParams) -> list[ColorPresentation]:
        document = server._get_document(params.text_document.uri)
        if document is None:
            return []
        return server._get_color_presentations(document, params.color, params.range)

    @server.feature(AUTO_INSERT_REQUEST)
    def auto_insert(params) -> str | None:
        """Quote or closing-tag text to insert after the user typed a trigger."""
        text_document = _field(params, "textDocument")
        position = _field(params, "position")
        kind = _field(params, "kind")
        if text_document is None or position is None or kind not in ("autoQuote", "autoClose"):
            return None
        document = server._get_document(_field(text_document, "uri"))
        if document is None:
            return None
        position = Position(line=_field(position, "line"), character=_field(position, "character"))
        return server._do_auto_insert(document, position, kind)

    return server
