"""Adapter between the protocol and the abbreviation engine.

The engine works on one-based positions against a small document model;
this module provides that model, decides whether the engine may be asked at
all, and turns its candidates into protocol completion items.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple

from lsprotocol.types import (
    CompletionItem,
    CompletionList,
    InsertTextFormat,
    MarkupContent,
    MarkupKind,
    TextEdit,
)

from html_emmet_lsp._logging import get_logger
from html_emmet_lsp._text import from_client_position, offset_at, to_client_units
from html_emmet_lsp.constants import ABBREVIATION_COMPLETION_KIND
from html_emmet_lsp.models import EnginePosition, EngineRange, EngineResult
from html_emmet_lsp.settings import DEFAULT_EMMET_SETTINGS

from .coordinates import range_to_protocol_convention, to_engine_convention
from .regions import classify_region

if TYPE_CHECKING:
    from lsprotocol.types import Position
    from pygls.workspace import TextDocument

    from html_emmet_lsp._services.protocol import AbbreviationEngine
    from html_emmet_lsp.models import AbbreviationSuggestion, HTMLDocument
    from html_emmet_lsp.settings import EmmetSettings

logger = get_logger(__name__, "emmet")

_re_line_split = re.compile(r"\r?\n")


class EngineToken(NamedTuple):
    offset: int
    type: str
    language: str


@dataclass(frozen=True)
class TokenizationState:
    line_number: int = 0


class TokenizationResult(NamedTuple):
    tokens: tuple[EngineToken, ...]
    end_state: TokenizationState


class UnrestrictedTokenization:
    """Tokenizer that reports one untyped token per line.

    An untyped token places no lexical restriction on the line, so the
    engine treats every position as eligible and leaves the decision to
    region classification and its own location check.
    """

    def __init__(self, language_id: str):
        self._language_id = language_id

    def get_initial_state(self) -> TokenizationState:
        return TokenizationState()

    def tokenize(self, line: str, state: TokenizationState | None = None) -> TokenizationResult:
        state = state or self.get_initial_state()
        token = EngineToken(offset=0, type="", language=self._language_id)
        return TokenizationResult(
            tokens=(token,), end_state=TokenizationState(state.line_number + 1)
        )


class EngineTextModel:
    """A host document seen through the engine's one-based coordinates."""

    def __init__(self, text: str, language_id: str):
        self._lines = _re_line_split.split(text)
        self._language_id = language_id
        self._tokenization = UnrestrictedTokenization(language_id)

    def get_line_content(self, line_number: int) -> str:
        if 1 <= line_number <= len(self._lines):
            return self._lines[line_number - 1]
        return ""

    def get_line_count(self) -> int:
        return len(self._lines)

    def get_language_id(self) -> str:
        return self._language_id

    @property
    def tokenization(self) -> UnrestrictedTokenization:
        return self._tokenization

    def get_offset_at(self, position: EnginePosition) -> int:
        """Offset of ``position`` in the ``\\n``-joined line text, clamped."""
        line_number = max(1, min(position.line_number, len(self._lines)))
        offset = sum(len(line) + 1 for line in self._lines[: line_number - 1])
        line = self._lines[line_number - 1]
        return offset + max(0, min(position.column - 1, len(line)))

    def get_position_at(self, offset: int) -> EnginePosition:
        remaining = max(0, offset)
        for index, line in enumerate(self._lines):
            if remaining <= len(line):
                return EnginePosition(index + 1, remaining + 1)
            remaining -= len(line) + 1
        last = len(self._lines)
        return EnginePosition(last, len(self._lines[-1]) + 1)

    def get_value_in_range(self, range_: EngineRange) -> str:
        start = self.get_offset_at(range_.start)
        end = self.get_offset_at(range_.end)
        if end <= start:
            return ""
        return "\n".join(self._lines)[start:end]


def _documentation(value: Any, syntax: str) -> str | MarkupContent | None:
    if isinstance(value, str):
        return MarkupContent(kind=MarkupKind.Markdown, value=f"```{syntax}\n{value}\n```")
    return value


def to_completion_item(suggestion: AbbreviationSuggestion, syntax: str) -> CompletionItem:
    """Convert one engine candidate into a protocol completion item."""
    item_format = InsertTextFormat.Snippet if suggestion.is_snippet else InsertTextFormat.PlainText
    new_text = suggestion.insert_text or suggestion.label
    text_edit = None
    insert_text = None
    if suggestion.range is not None:
        text_edit = TextEdit(range=range_to_protocol_convention(suggestion.range), new_text=new_text)
    else:
        insert_text = new_text
    return CompletionItem(
        label=suggestion.label,
        kind=ABBREVIATION_COMPLETION_KIND,
        detail=suggestion.detail,
        documentation=_documentation(suggestion.documentation, syntax),
        insert_text=insert_text,
        insert_text_format=item_format,
        text_edit=text_edit,
        sort_text=suggestion.sort_text,
    )


def _query_engine(
    engine: AbbreviationEngine,
    model: EngineTextModel,
    position: EnginePosition,
    syntax: str,
    settings: EmmetSettings,
) -> EngineResult[list[AbbreviationSuggestion]]:
    try:
        if not engine.is_valid_location(model, position, syntax, model.get_language_id()):
            return EngineResult.ok(None)
        return EngineResult.ok(engine.do_complete(model, position, syntax, settings))
    except Exception as e:
        return EngineResult.failed(e)


def get_abbreviation_completions(
    document: TextDocument,
    position: Position,
    syntax: str,
    settings: EmmetSettings | None = None,
    *,
    html_document: HTMLDocument | None = None,
    engine: AbbreviationEngine | None = None,
) -> CompletionList | None:
    """Abbreviation expansions for ``position``, or ``None`` when there are none.

    Never offered inside ``<style>``/``<script>`` content. Engine errors are
    logged and reported as ``None``. A returned list is always incomplete so
    the client re-requests while the abbreviation grows. ``position`` and the
    returned edit ranges use the position encoding of ``document``.
    """
    settings = settings or DEFAULT_EMMET_SETTINGS
    if not settings.enabled:
        return None

    text = document.source
    position = from_client_position(document, position)
    region = classify_region(text, offset_at(text, position), html_document)
    if region.is_embedded:
        return None

    if engine is None:
        from html_emmet_lsp._services.emmet_engine import default_engine

        engine = default_engine

    model = EngineTextModel(text, document.language_id or syntax)
    result = _query_engine(engine, model, to_engine_convention(position), syntax, settings)
    if not result.succeeded:
        logger.warning(f"Abbreviation engine failed for {document.uri}: {result.error}")
        logger.debug("Abbreviation engine traceback", exc_info=result.error)
        return None

    suggestions = result.value
    if not suggestions:
        return None

    items = [to_completion_item(suggestion, syntax) for suggestion in suggestions]
    return CompletionList(is_incomplete=True, items=to_client_units(document, items))
