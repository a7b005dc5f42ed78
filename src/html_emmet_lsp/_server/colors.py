"""Color mixin for attribute color annotations and presentations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from html_emmet_lsp._core import find_colors, get_color_presentations

from .base import LSPServerBase

if TYPE_CHECKING:
    from lsprotocol.types import Color, ColorInformation, ColorPresentation, Range
    from pygls.workspace import TextDocument


class ColorMixin(LSPServerBase):
    """Provides document colors for color-bearing HTML attributes."""

    def _find_document_colors(self, document: TextDocument) -> list[ColorInformation]:
        return find_colors(document, self.html_service, self.css_service)

    def _get_color_presentations(
        self, document: TextDocument, color: Color, range_: Range
    ) -> list[ColorPresentation]:
        return get_color_presentations(document, color, range_, self.css_service)
