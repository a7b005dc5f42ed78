"""HTML language service built on the tree-sitter structural index."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import urljoin

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    DocumentHighlight,
    DocumentHighlightKind,
    DocumentLink,
    DocumentSymbol,
    FoldingRange,
    FoldingRangeKind,
    Hover,
    InsertTextFormat,
    MarkupContent,
    MarkupKind,
    Range,
    SelectionRange,
    SymbolKind,
    TextEdit,
    WorkspaceEdit,
)

from html_emmet_lsp._core.colors import unquoted_attribute_value
from html_emmet_lsp._text import line_offsets, offset_at, position_at, range_at
from html_emmet_lsp.constants import VOID_ELEMENTS
from html_emmet_lsp.models import TokenType
from html_emmet_lsp.settings import DEFAULT_HTML_SETTINGS

from . import html_data
from .html_parser import parse_html, scan

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lsprotocol.types import Position
    from pygls.workspace import TextDocument

    from html_emmet_lsp.models import HTMLDocument, HTMLNode, Token
    from html_emmet_lsp.settings import HTMLSettings

# Compiled regex patterns for performance
_re_close_tag_prefix = re.compile(r"</([\w:-]*)$")
_re_open_tag_prefix = re.compile(r"<([\w:-]*)$")
_re_inside_start_tag = re.compile(r"<([\w:-]+)(\s[^<>]*)$")
_re_attribute_value_prefix = re.compile(r"([\w:-]+)\s*=\s*([\"'])([^\"']*)$")
_re_attribute_name_prefix = re.compile(r"(?:^|\s)([\w:-]*)$")
_re_quote_trigger = re.compile(r"<[\w:-]+\s[^<>]*[\w:-]\s*=$")

_LINK_ATTRIBUTES = frozenset({"href", "src"})
_QUOTE_SNIPPETS = {"doublequotes": '"$1"', "singlequotes": "'$1'"}


def _is_void(tag: str | None) -> bool:
    return tag is not None and tag.lower() in VOID_ELEMENTS


def _start_name_span(node: HTMLNode) -> tuple[int, int] | None:
    if node.tag is None:
        return None
    return node.start + 1, node.start + 1 + len(node.tag)


def _end_name_span(node: HTMLNode) -> tuple[int, int] | None:
    if node.tag is None or node.end_tag_start is None or not node.closed:
        return None
    start = node.end_tag_start + 2
    return start, start + len(node.tag)


def _node_with_tag_name_at(
    html_document: HTMLDocument, offset: int
) -> tuple[HTMLNode, list[tuple[int, int]]] | None:
    """The node whose start or end tag name contains ``offset``, and both name spans."""
    node = html_document.find_node_at(offset)
    spans = [span for span in (_start_name_span(node), _end_name_span(node)) if span]
    for start, end in spans:
        if start <= offset <= end:
            return node, spans
    return None


def _innermost_open_element(html_document: HTMLDocument, offset: int) -> HTMLNode | None:
    node: HTMLNode | None = html_document.find_node_before(offset)
    while node is not None and (node.tag is None or node.closed or _is_void(node.tag)):
        node = node.parent
    return node


def _attribute_value(value: str | None) -> str:
    if not value:
        return ""
    if value[0] in "\"'":
        value = value[1:-1] if len(value) > 1 and value[-1] == value[0] else value[1:]
    return value.strip()


class HTMLService:
    """Default structural markup analyzer."""

    def parse_html_document(self, document: TextDocument) -> HTMLDocument:
        return parse_html(document.source)

    def create_scanner(self, text: str) -> Iterator[Token]:
        return scan(text)

    # Completion

    def do_complete(
        self,
        document: TextDocument,
        position: Position,
        html_document: HTMLDocument,
        settings: HTMLSettings = DEFAULT_HTML_SETTINGS,
    ) -> CompletionList:
        text = document.source
        offset = offset_at(text, position)
        before = text[:offset]

        if match := _re_close_tag_prefix.search(before):
            items = self._close_tag_items(text, offset, match, html_document)
        elif match := _re_open_tag_prefix.search(before):
            items = self._tag_name_items(text, offset, match.group(1))
        elif match := _re_inside_start_tag.search(before):
            items = self._attribute_items(text, offset, match.group(1), match.group(2), settings)
        elif not settings.hide_auto_complete_proposals:
            items = self._end_tag_items(html_document, offset)
        else:
            items = []
        return CompletionList(is_incomplete=False, items=items)

    def _close_tag_items(
        self, text: str, offset: int, match: re.Match[str], html_document: HTMLDocument
    ) -> list[CompletionItem]:
        node = _innermost_open_element(html_document, match.start())
        if node is None or node.tag is None:
            return []
        closing = "" if text[offset : offset + 1] == ">" else ">"
        edit_range = range_at(text, match.start() + 1, offset)
        return [
            CompletionItem(
                label=f"/{node.tag}",
                kind=CompletionItemKind.Property,
                filter_text=f"/{node.tag}",
                text_edit=TextEdit(range=edit_range, new_text=f"/{node.tag}{closing}"),
                insert_text_format=InsertTextFormat.PlainText,
            )
        ]

    def _tag_name_items(self, text: str, offset: int, partial: str) -> list[CompletionItem]:
        edit_range = range_at(text, offset - len(partial), offset)
        return [
            CompletionItem(
                label=tag,
                kind=CompletionItemKind.Property,
                documentation=MarkupContent(kind=MarkupKind.Markdown, value=description),
                text_edit=TextEdit(range=edit_range, new_text=tag),
                insert_text_format=InsertTextFormat.PlainText,
            )
            for tag, description in html_data.TAGS.items()
        ]

    def _attribute_items(
        self, text: str, offset: int, tag: str, attributes_text: str, settings: HTMLSettings
    ) -> list[CompletionItem]:
        value_match = _re_attribute_value_prefix.search(attributes_text)
        if value_match and attributes_text.count(value_match.group(2)) % 2 == 1:
            partial = value_match.group(3)
            edit_range = range_at(text, offset - len(partial), offset)
            return [
                CompletionItem(
                    label=value,
                    kind=CompletionItemKind.Unit,
                    text_edit=TextEdit(range=edit_range, new_text=value),
                    insert_text_format=InsertTextFormat.PlainText,
                )
                for value in html_data.values_for(tag, value_match.group(1))
            ]

        name_match = _re_attribute_name_prefix.search(attributes_text)
        if name_match is None:
            return []
        partial = name_match.group(1)
        edit_range = range_at(text, offset - len(partial), offset)
        quotes = _QUOTE_SNIPPETS.get(settings.attribute_default_value)
        items = []
        for name, description in html_data.attributes_for(tag).items():
            new_text = f"{name}={quotes}" if quotes else name
            items.append(
                CompletionItem(
                    label=name,
                    kind=CompletionItemKind.Value,
                    documentation=MarkupContent(kind=MarkupKind.Markdown, value=description),
                    text_edit=TextEdit(range=edit_range, new_text=new_text),
                    insert_text_format=(
                        InsertTextFormat.Snippet if quotes else InsertTextFormat.PlainText
                    ),
                )
            )
        return items

    def _end_tag_items(self, html_document: HTMLDocument, offset: int) -> list[CompletionItem]:
        node = _innermost_open_element(html_document, offset)
        if node is None or node.tag is None:
            return []
        end_tag = f"</{node.tag}>"
        return [
            CompletionItem(
                label=end_tag,
                kind=CompletionItemKind.Property,
                filter_text=end_tag,
                insert_text=end_tag,
                insert_text_format=InsertTextFormat.PlainText,
            )
        ]

    # Hover

    def do_hover(
        self,
        document: TextDocument,
        position: Position,
        html_document: HTMLDocument,
        settings: HTMLSettings = DEFAULT_HTML_SETTINGS,
    ) -> Hover | None:
        text = document.source
        offset = offset_at(text, position)
        current_tag: str | None = None
        for token in self.create_scanner(text):
            if token.offset > offset or token.type is TokenType.EOS:
                break
            if token.type in (TokenType.START_TAG, TokenType.END_TAG):
                current_tag = token.text
            if token.end < offset:
                continue
            if token.type in (TokenType.START_TAG, TokenType.END_TAG):
                signature = f"<{token.text}>"
                description = html_data.TAGS.get(token.text.lower())
            elif token.type is TokenType.ATTRIBUTE_NAME:
                signature = token.text
                description = html_data.attributes_for(current_tag).get(token.text.lower())
            else:
                continue
            parts = [f"```html\n{signature}\n```"]
            if description and settings.hover_documentation:
                parts.append(description)
            return Hover(
                contents=MarkupContent(kind=MarkupKind.Markdown, value="\n\n".join(parts)),
                range=range_at(text, token.offset, token.end),
            )
        return None

    # Navigation

    def find_document_highlights(
        self, document: TextDocument, position: Position, html_document: HTMLDocument
    ) -> list[DocumentHighlight]:
        text = document.source
        hit = _node_with_tag_name_at(html_document, offset_at(text, position))
        if hit is None:
            return []
        _, spans = hit
        return [
            DocumentHighlight(range=range_at(text, start, end), kind=DocumentHighlightKind.Read)
            for start, end in spans
        ]

    def find_document_links(self, document: TextDocument) -> list[DocumentLink]:
        text = document.source
        links: list[DocumentLink] = []
        attribute_name: str | None = None
        for token in self.create_scanner(text):
            if token.type is TokenType.EOS:
                break
            if token.type is TokenType.ATTRIBUTE_NAME:
                attribute_name = token.text.lower()
                continue
            if token.type is not TokenType.ATTRIBUTE_VALUE:
                continue
            name, attribute_name = attribute_name, None
            if name not in _LINK_ATTRIBUTES:
                continue
            value = unquoted_attribute_value(text, token)
            if value is None or value.value.startswith(("#", "javascript:", "data:")):
                continue
            links.append(
                DocumentLink(
                    range=range_at(text, value.start, value.end),
                    target=urljoin(document.uri, value.value),
                )
            )
        return links

    def find_document_symbols(
        self, document: TextDocument, html_document: HTMLDocument
    ) -> list[DocumentSymbol]:
        text = document.source
        offsets = line_offsets(text)

        def to_symbol(node: HTMLNode) -> DocumentSymbol:
            node_range = range_at(text, node.start, node.end, offsets)
            return DocumentSymbol(
                name=self._symbol_name(node),
                kind=SymbolKind.Field,
                range=node_range,
                selection_range=node_range,
                children=[to_symbol(child) for child in node.children],
            )

        return [to_symbol(node) for node in html_document.roots]

    def _symbol_name(self, node: HTMLNode) -> str:
        name = node.tag or "?"
        element_id = _attribute_value(node.attributes.get("id"))
        if element_id:
            name += f"#{element_id}"
        classes = _attribute_value(node.attributes.get("class")).split()
        if classes:
            name += "".join(f".{cls}" for cls in classes)
        return name

    def do_rename(
        self,
        document: TextDocument,
        position: Position,
        new_name: str,
        html_document: HTMLDocument,
    ) -> WorkspaceEdit | None:
        text = document.source
        hit = _node_with_tag_name_at(html_document, offset_at(text, position))
        if hit is None:
            return None
        _, spans = hit
        edits = [TextEdit(range=range_at(text, start, end), new_text=new_name) for start, end in spans]
        return WorkspaceEdit(changes={document.uri: edits})

    def find_matching_tag_position(
        self, document: TextDocument, position: Position, html_document: HTMLDocument
    ) -> Position | None:
        text = document.source
        offset = offset_at(text, position)
        hit = _node_with_tag_name_at(html_document, offset)
        if hit is None:
            return None
        _, spans = hit
        if len(spans) != 2:
            return None
        (start_a, end_a), (start_b, _) = spans
        if start_a <= offset <= end_a:
            return position_at(text, start_b + offset - start_a)
        return position_at(text, start_a + offset - start_b)

    def find_linked_editing_ranges(
        self, document: TextDocument, position: Position, html_document: HTMLDocument
    ) -> list[Range] | None:
        text = document.source
        hit = _node_with_tag_name_at(html_document, offset_at(text, position))
        if hit is None or len(hit[1]) != 2:
            return None
        return [range_at(text, start, end) for start, end in hit[1]]

    def get_folding_ranges(
        self, document: TextDocument, html_document: HTMLDocument
    ) -> list[FoldingRange]:
        text = document.source
        offsets = line_offsets(text)
        ranges: list[FoldingRange] = []
        for node in html_document.walk():
            if node.end_tag_start is None or not node.closed:
                continue
            start_line = position_at(text, node.start, offsets).line
            end_line = position_at(text, node.end_tag_start, offsets).line
            if end_line - 1 > start_line:
                ranges.append(FoldingRange(start_line=start_line, end_line=end_line - 1))
        for token in self.create_scanner(text):
            if token.type is not TokenType.COMMENT:
                continue
            start_line = position_at(text, token.offset, offsets).line
            end_line = position_at(text, token.end, offsets).line
            if end_line > start_line:
                ranges.append(
                    FoldingRange(
                        start_line=start_line, end_line=end_line, kind=FoldingRangeKind.Comment
                    )
                )
        ranges.sort(key=lambda r: (r.start_line, r.end_line))
        return ranges

    def get_selection_ranges(
        self, document: TextDocument, positions: list[Position], html_document: HTMLDocument
    ) -> list[SelectionRange]:
        text = document.source
        offsets = line_offsets(text)
        results = []
        for position in positions:
            offset = offset_at(text, position, offsets)
            spans: list[tuple[int, int]] = [(0, len(text))]
            node: HTMLNode | None = html_document.find_node_at(offset)
            chain = []
            while node is not None and node.tag is not None:
                chain.append(node)
                node = node.parent
            for element in reversed(chain):
                for span in ((element.start, element.end), element.content_span):
                    if span and span[0] <= offset <= span[1] and span != spans[-1]:
                        spans.append(span)
            selection = None
            for start, end in spans:
                selection = SelectionRange(range=range_at(text, start, end, offsets), parent=selection)
            results.append(selection)
        return results

    # Auto insert

    def do_quote_complete(
        self,
        document: TextDocument,
        position: Position,
        html_document: HTMLDocument,
        settings: HTMLSettings = DEFAULT_HTML_SETTINGS,
    ) -> str | None:
        text = document.source
        offset = offset_at(text, position)
        if not _re_quote_trigger.search(text[:offset]):
            return None
        return _QUOTE_SNIPPETS.get(settings.attribute_default_value)

    def do_tag_complete(
        self, document: TextDocument, position: Position, html_document: HTMLDocument
    ) -> str | None:
        text = document.source
        offset = offset_at(text, position)
        if offset == 0:
            return None
        previous = text[offset - 1]
        if previous == ">":
            node = html_document.find_node_before(offset)
            if (
                node.tag
                and not _is_void(node.tag)
                and node.start_tag_end == offset
                and (node.end_tag_start is None or node.end_tag_start > offset)
            ):
                return f"$0</{node.tag}>"
        elif previous == "/" and text[offset - 2 : offset] == "</":
            node = _innermost_open_element(html_document, offset - 2)
            if node is not None and node.tag:
                return f"{node.tag}>"
        return None
