"""Color annotations for color-bearing HTML attributes such as ``bgcolor``.

Attribute values are resolved by the stylesheet analyzer: each value is
wrapped into a one-rule synthetic stylesheet and handed to its color parser.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from lsprotocol.types import Color, ColorInformation, Range

from html_emmet_lsp._text import from_client_position, get_text, range_at, to_client_units
from html_emmet_lsp.constants import COLOR_ATTRIBUTE_SUFFIX, COLOR_ATTRIBUTES
from html_emmet_lsp.models import TokenType

from .virtual_document import create_virtual_document

if TYPE_CHECKING:
    from lsprotocol.types import ColorPresentation
    from pygls.workspace import TextDocument

    from html_emmet_lsp._services.protocol import CSSLanguageService, HTMLLanguageService
    from html_emmet_lsp.models import Token


class AttributeValue(NamedTuple):
    """An attribute value with quotes and surrounding whitespace removed."""

    value: str
    start: int
    end: int


def is_color_attribute(attribute_name: str) -> bool:
    return attribute_name in COLOR_ATTRIBUTES or attribute_name.endswith(COLOR_ATTRIBUTE_SUFFIX)


def unquoted_attribute_value(text: str, token: Token) -> AttributeValue | None:
    """Trim quotes and whitespace from an attribute value token."""
    start, end = token.offset, min(token.end, len(text))
    if start >= end:
        return None
    if text[start] in "\"'":
        start += 1
        if end > start and text[end - 1] == text[start - 1]:
            end -= 1
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    if start >= end:
        return None
    return AttributeValue(text[start:end], start, end)


def parse_css_color(value: str, css_service: CSSLanguageService) -> Color | None:
    """Resolve a CSS color value; ``None`` unless it yields exactly one color."""
    virtual = create_virtual_document(value, "css-value")
    stylesheet = css_service.parse_stylesheet(virtual.document)
    colors = css_service.find_document_colors(virtual.document, stylesheet)
    if len(colors) != 1:
        return None
    return colors[0].color


def find_colors(
    document: TextDocument,
    html_service: HTMLLanguageService,
    css_service: CSSLanguageService,
) -> list[ColorInformation]:
    """Colors of every color attribute, with ranges excluding the quotes.

    Ranges are expressed in the position encoding of ``document``.
    """
    text = document.source
    colors: list[ColorInformation] = []
    attribute_name: str | None = None

    for token in html_service.create_scanner(text):
        if token.type is TokenType.EOS:
            break
        if token.type is TokenType.ATTRIBUTE_NAME:
            attribute_name = token.text.lower()
            continue
        if token.type is not TokenType.ATTRIBUTE_VALUE:
            continue

        name, attribute_name = attribute_name, None
        if not name or not is_color_attribute(name):
            continue
        value = unquoted_attribute_value(text, token)
        if value is None:
            continue
        color = parse_css_color(value.value, css_service)
        if color is not None:
            colors.append(ColorInformation(range=range_at(text, value.start, value.end), color=color))

    return to_client_units(document, colors)


def get_color_presentations(
    document: TextDocument,
    color: Color,
    range_: Range,
    css_service: CSSLanguageService,
) -> list[ColorPresentation]:
    """Replacement texts for ``color`` at the attribute value in ``range_``."""
    range_ = Range(
        start=from_client_position(document, range_.start),
        end=from_client_position(document, range_.end),
    )
    virtual = create_virtual_document(get_text(document.source, range_), "css-value")
    stylesheet = css_service.parse_stylesheet(virtual.document)
    return css_service.get_color_presentations(
        virtual.document, stylesheet, color, virtual.fragment_range()
    )
