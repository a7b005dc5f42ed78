"""Base class for LSP server with interface for mixins."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pygls.server import LanguageServer

from html_emmet_lsp._logging import get_logger
from html_emmet_lsp._services import CSSService, EmmetEngine, HTMLService
from html_emmet_lsp.cache import LanguageModelCache
from html_emmet_lsp.constants import DEFAULT_CACHE_MAX_AGE_SECONDS, DEFAULT_CACHE_MAX_ENTRIES
from html_emmet_lsp.settings import DEFAULT_EMMET_SETTINGS, DEFAULT_HTML_SETTINGS

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pygls.workspace import TextDocument

    from html_emmet_lsp._services.protocol import (
        AbbreviationEngine,
        CSSLanguageService,
        HTMLLanguageService,
    )
    from html_emmet_lsp.cache import DocumentIdentity
    from html_emmet_lsp.models import HTMLDocument

logger = get_logger(__name__, "server")


class LSPServerBase(LanguageServer):
    """Base class defining the interface needed by mixins.

    Holds the language engines, the per-document parse cache and the
    current client settings.
    """

    def __init__(
        self,
        *args,
        html_service: HTMLLanguageService | None = None,
        css_service: CSSLanguageService | None = None,
        abbreviation_engine: AbbreviationEngine | None = None,
        cache_max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        cache_max_age_seconds: float = DEFAULT_CACHE_MAX_AGE_SECONDS,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.html_service: HTMLLanguageService = html_service or HTMLService()
        self.css_service: CSSLanguageService = css_service or CSSService()
        self.abbreviation_engine: AbbreviationEngine = abbreviation_engine or EmmetEngine()
        self.html_documents: LanguageModelCache[HTMLDocument] = LanguageModelCache(
            self.html_service.parse_html_document,
            max_entries=cache_max_entries,
            max_age_seconds=cache_max_age_seconds,
        )
        self.emmet_settings = DEFAULT_EMMET_SETTINGS
        self.html_settings = DEFAULT_HTML_SETTINGS

    def _get_document(self, uri: str) -> TextDocument | None:
        """Open document for ``uri``, or ``None`` if the client never opened it."""
        document = self.workspace.text_documents.get(uri)
        if document is None:
            logger.debug(f"Request for unknown document {uri}")
        return document

    def _get_html_document(self, document: TextDocument) -> HTMLDocument:
        return self.html_documents.get(document)

    def apply_settings(self, settings: Mapping[str, Any] | None) -> None:
        """Apply client settings sent at initialization or on configuration change."""
        if not settings:
            return
        self.emmet_settings = self.emmet_settings.with_overrides(settings.get("emmet"))
        self.html_settings = self.html_settings.with_overrides(settings.get("html"))
        logger.info(
            f"Settings updated: emmet={self.emmet_settings.as_dict()} html={self.html_settings.as_dict()}"
        )

    def on_document_closed(self, document: DocumentIdentity) -> None:
        """Forget the parse of a document the client closed."""
        self.html_documents.on_document_removed(document)

    def dispose(self) -> None:
        self.html_documents.dispose()

