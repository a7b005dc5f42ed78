"""Emmet abbreviation engine backed by py-emmet."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import emmet

from html_emmet_lsp.models import (
    AbbreviationSuggestion,
    EngineRange,
    EngineSuggestionKind,
)

from . import html_data

if TYPE_CHECKING:
    from html_emmet_lsp.models import EnginePosition
    from html_emmet_lsp.settings import EmmetSettings

    from .protocol import EngineModel

STYLESHEET_SYNTAXES = frozenset({"css", "scss", "sass", "less", "stylus"})

# Markup snippet names offered while the user types a matching prefix.
SNIPPET_NAMES: tuple[str, ...] = (
    "a:link",
    "a:mail",
    "btn:r",
    "btn:s",
    "form:get",
    "form:post",
    "html:5",
    "input:checkbox",
    "input:email",
    "input:hidden",
    "input:password",
    "input:radio",
    "input:submit",
    "input:text",
    "link:css",
    "link:favicon",
    "meta:utf",
    "meta:vp",
    "script:src",
)

_CLOSERS = {")": "(", "]": "[", "}": "{"}
_OPENERS = frozenset(_CLOSERS.values())

# Compiled regex patterns for performance
_re_abbreviation_char = re.compile(r"[\w.#*$@!:+>^%/-]")
_re_html_tag_end = re.compile(r"<[^<>]*>$")
_re_leading_operators = re.compile(r"^[>+^*]+")
_re_abbreviation_start = re.compile(r"^[A-Za-z.#(\[{!@]")
_re_plain_word = re.compile(r"^[A-Za-z][\w:-]*$")
_re_number = re.compile(r"^\d+$")


def extract_abbreviation(line: str, index: int) -> tuple[str, int] | None:
    """The abbreviation ending at ``index`` of ``line`` and its start index.

    Scans backward over abbreviation characters. Text inside ``()``, ``[]``
    and ``{}`` groups is taken verbatim; a ``>`` that closes an HTML tag
    ends the abbreviation.
    """
    index = max(0, min(index, len(line)))
    start = index
    pending: list[str] = []
    while start > 0:
        char = line[start - 1]
        if pending:
            if char in _CLOSERS:
                pending.append(_CLOSERS[char])
            elif char == pending[-1]:
                pending.pop()
            start -= 1
            continue
        if char in _CLOSERS:
            pending.append(_CLOSERS[char])
        elif char in _OPENERS:
            break
        elif char == ">" and _re_html_tag_end.search(line[:start]):
            break
        elif not _re_abbreviation_char.match(char):
            break
        start -= 1

    if pending:
        return None
    abbreviation = line[start:index]
    operators = _re_leading_operators.match(abbreviation)
    if operators:
        start += operators.end()
        abbreviation = abbreviation[operators.end() :]
    if not abbreviation or not _re_abbreviation_start.match(abbreviation):
        return None
    return abbreviation, start


def _snippet_field(index: int, placeholder: str = "", *args: Any, **kwargs: Any) -> str:
    return f"${{{index}:{placeholder}}}" if placeholder else f"${{{index}}}"


class EmmetEngine:
    """Default abbreviation engine."""

    def expand(self, abbreviation: str, syntax: str = "html", snippet: bool = False) -> str:
        config: dict[str, Any] = {"syntax": syntax}
        if syntax in STYLESHEET_SYNTAXES:
            config["type"] = "stylesheet"
        if snippet:
            config["options"] = {"output.field": _snippet_field}
        return emmet.expand(abbreviation, config)

    def is_expandable(self, abbreviation: str, syntax: str) -> bool:
        """Whether offering the expansion of ``abbreviation`` makes sense.

        A plain word in markup is only expanded when it names a known tag,
        a snippet or a custom element; anything else is ordinary text.
        """
        if _re_number.match(abbreviation):
            return False
        if syntax in STYLESHEET_SYNTAXES:
            return True
        if _re_plain_word.match(abbreviation):
            word = abbreviation.lower()
            return word in html_data.TAGS or word in SNIPPET_NAMES or "-" in word
        return True

    def is_valid_location(
        self, model: EngineModel, position: EnginePosition, syntax: str, language_id: str
    ) -> bool:
        line = model.get_line_content(position.line_number)
        extracted = extract_abbreviation(line, position.column - 1)
        if extracted is None:
            return False
        _, start = extracted

        tokens = model.tokenization.tokenize(line).tokens
        if any(t.type and ("comment" in t.type or "string" in t.type) for t in tokens):
            return False
        if syntax in STYLESHEET_SYNTAXES:
            return True

        text_before = model.get_value_in_range(
            EngineRange(1, 1, position.line_number, start + 1)
        )
        if text_before.rfind("<") > text_before.rfind(">"):
            # Inside an open tag, among its attributes.
            return False
        return text_before.rfind("<!--") <= text_before.rfind("-->")

    def do_complete(
        self,
        model: EngineModel,
        position: EnginePosition,
        syntax: str,
        settings: EmmetSettings,
    ) -> list[AbbreviationSuggestion] | None:
        line = model.get_line_content(position.line_number)
        extracted = extract_abbreviation(line, position.column - 1)
        if extracted is None:
            return None
        abbreviation, start = extracted
        replace = EngineRange(position.line_number, start + 1, position.line_number, position.column)
        as_snippet = settings.show_suggestions_as_snippets

        suggestions: list[AbbreviationSuggestion] = []
        if self.is_expandable(abbreviation, syntax):
            suggestions.append(
                AbbreviationSuggestion(
                    label=abbreviation,
                    insert_text=self.expand(abbreviation, syntax, snippet=as_snippet),
                    range=replace,
                    detail="Emmet Abbreviation",
                    documentation=self.expand(abbreviation, syntax),
                    kind=EngineSuggestionKind.EXPANDED_ABBREVIATION,
                    is_snippet=as_snippet,
                )
            )

        if settings.show_abbreviation_suggestions and _re_plain_word.match(abbreviation):
            prefix = abbreviation.lower()
            for name in SNIPPET_NAMES:
                if name == prefix or not name.startswith(prefix):
                    continue
                suggestions.append(
                    AbbreviationSuggestion(
                        label=name,
                        insert_text=self.expand(name, syntax, snippet=as_snippet),
                        range=replace,
                        detail="Emmet Snippet",
                        documentation=self.expand(name, syntax),
                        kind=EngineSuggestionKind.SNIPPET,
                        is_snippet=as_snippet,
                    )
                )

        return suggestions or None


default_engine = EmmetEngine()
