"""CSS language service built on tinycss2."""

from __future__ import annotations

import colorsys
import re
from typing import TYPE_CHECKING

import tinycss2
from lsprotocol.types import (
    Color,
    ColorInformation,
    ColorPresentation,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    InsertTextFormat,
    TextEdit,
)
from tinycss2.color3 import RGBA, parse_color

from html_emmet_lsp._text import line_offsets, offset_at, range_at

from . import html_data

if TYPE_CHECKING:
    from lsprotocol.types import Position, Range
    from pygls.workspace import TextDocument

# property -> keyword values offered after "property:"
PROPERTIES: dict[str, tuple[str, ...]] = {
    "background": (),
    "background-color": (),
    "border": ("none", "solid", "dashed", "dotted"),
    "border-color": (),
    "border-radius": (),
    "bottom": ("auto",),
    "color": (),
    "cursor": ("auto", "default", "pointer", "text", "move", "not-allowed"),
    "display": ("block", "inline", "inline-block", "flex", "grid", "none", "contents"),
    "flex-direction": ("row", "row-reverse", "column", "column-reverse"),
    "font-family": ("serif", "sans-serif", "monospace", "system-ui"),
    "font-size": ("small", "medium", "large", "larger", "smaller"),
    "font-weight": ("normal", "bold", "bolder", "lighter"),
    "height": ("auto",),
    "justify-content": ("flex-start", "flex-end", "center", "space-between", "space-around"),
    "align-items": ("stretch", "flex-start", "flex-end", "center", "baseline"),
    "left": ("auto",),
    "margin": ("auto",),
    "opacity": (),
    "outline": ("none",),
    "overflow": ("visible", "hidden", "scroll", "auto"),
    "padding": (),
    "position": ("static", "relative", "absolute", "fixed", "sticky"),
    "right": ("auto",),
    "text-align": ("left", "right", "center", "justify"),
    "text-decoration": ("none", "underline", "overline", "line-through"),
    "top": ("auto",),
    "visibility": ("visible", "hidden", "collapse"),
    "width": ("auto",),
    "z-index": ("auto",),
}

NAMED_COLORS: tuple[str, ...] = (
    "black",
    "white",
    "red",
    "green",
    "blue",
    "yellow",
    "orange",
    "purple",
    "gray",
    "silver",
    "maroon",
    "navy",
    "teal",
    "olive",
    "lime",
    "aqua",
    "fuchsia",
    "transparent",
    "currentcolor",
)

_re_word_before = re.compile(r"[\w-]*$")


def _is_color_property(name: str) -> bool:
    return name == "color" or name.endswith("-color") or name in ("background", "border", "outline")


def _to_color(rgba: RGBA) -> Color:
    return Color(red=rgba.red, green=rgba.green, blue=rgba.blue, alpha=rgba.alpha)


def _channel(value: float) -> int:
    return round(max(0.0, min(1.0, value)) * 255)


def _alpha_text(alpha: float) -> str:
    return f"{round(alpha, 2):g}"


def _declarations(rules) -> list:
    """Declarations of every qualified rule, descending into at-rule blocks."""
    declarations = []
    for rule in rules:
        if rule.type == "qualified-rule":
            declarations.extend(
                node
                for node in tinycss2.parse_declaration_list(
                    rule.content, skip_comments=True, skip_whitespace=True
                )
                if node.type == "declaration"
            )
        elif rule.type == "at-rule" and rule.content is not None:
            declarations.extend(
                _declarations(
                    tinycss2.parse_rule_list(rule.content, skip_comments=True, skip_whitespace=True)
                )
            )
    return declarations


class CSSService:
    """Default stylesheet analyzer."""

    def parse_stylesheet(self, document: TextDocument) -> list:
        return tinycss2.parse_stylesheet(
            document.source, skip_comments=True, skip_whitespace=True
        )

    def find_document_colors(self, document: TextDocument, stylesheet: list) -> list[ColorInformation]:
        text = document.source
        offsets = line_offsets(text)
        colors: list[ColorInformation] = []
        for declaration in _declarations(stylesheet):
            for token in declaration.value:
                if token.type not in ("ident", "hash", "function"):
                    continue
                rgba = parse_color(token)
                if not isinstance(rgba, RGBA):
                    continue
                start = offsets[token.source_line - 1] + token.source_column - 1
                end = start + len(tinycss2.serialize([token]))
                colors.append(
                    ColorInformation(range=range_at(text, start, end, offsets), color=_to_color(rgba))
                )
        return colors

    def get_color_presentations(
        self, document: TextDocument, stylesheet: list, color: Color, range_: Range
    ) -> list[ColorPresentation]:
        """Textual forms of ``color``: rgb, hex and hsl notation."""
        red, green, blue = (_channel(c) for c in (color.red, color.green, color.blue))
        opaque = color.alpha >= 1

        if opaque:
            rgb_label = f"rgb({red}, {green}, {blue})"
            hex_label = f"#{red:02x}{green:02x}{blue:02x}"
        else:
            rgb_label = f"rgba({red}, {green}, {blue}, {_alpha_text(color.alpha)})"
            hex_label = f"#{red:02x}{green:02x}{blue:02x}{_channel(color.alpha):02x}"

        hue, lightness, saturation = colorsys.rgb_to_hls(color.red, color.green, color.blue)
        hsl_args = f"{round(hue * 360)}, {round(saturation * 100)}%, {round(lightness * 100)}%"
        hsl_label = f"hsl({hsl_args})" if opaque else f"hsla({hsl_args}, {_alpha_text(color.alpha)})"

        return [ColorPresentation(label=label) for label in (rgb_label, hex_label, hsl_label)]

    def do_complete(
        self, document: TextDocument, position: Position, stylesheet: list
    ) -> CompletionList:
        text = document.source
        offset = offset_at(text, position)
        before = text[:offset]
        partial = _re_word_before.search(before).group(0)
        edit_range = range_at(text, offset - len(partial), offset)

        block_start = before.rfind("{")
        if block_start == -1 or before.rfind("}") > block_start:
            items = self._selector_items(edit_range)
        else:
            statement = before[max(block_start, before.rfind(";")) + 1 :]
            if ":" in statement:
                name = statement.split(":", 1)[0].strip().lower()
                items = self._value_items(name, edit_range)
            else:
                items = self._property_items(edit_range)
        return CompletionList(is_incomplete=False, items=items)

    def _selector_items(self, edit_range: Range) -> list[CompletionItem]:
        return [
            CompletionItem(
                label=tag,
                kind=CompletionItemKind.Keyword,
                text_edit=TextEdit(range=edit_range, new_text=tag),
            )
            for tag in html_data.TAGS
        ]

    def _property_items(self, edit_range: Range) -> list[CompletionItem]:
        return [
            CompletionItem(
                label=name,
                kind=CompletionItemKind.Property,
                text_edit=TextEdit(range=edit_range, new_text=f"{name}: $0;"),
                insert_text_format=InsertTextFormat.Snippet,
            )
            for name in PROPERTIES
        ]

    def _value_items(self, name: str, edit_range: Range) -> list[CompletionItem]:
        items = [
            CompletionItem(
                label=value,
                kind=CompletionItemKind.Value,
                text_edit=TextEdit(range=edit_range, new_text=value),
            )
            for value in PROPERTIES.get(name, ())
        ]
        if _is_color_property(name):
            items.extend(
                CompletionItem(
                    label=color,
                    kind=CompletionItemKind.Color,
                    text_edit=TextEdit(range=edit_range, new_text=color),
                )
                for color in NAMED_COLORS
            )
        return items
