"""Tree-sitter HTML parser producing the structural index and token stream.

Tree-sitter reports byte offsets; everything handed out of this module uses
character offsets into the Python string.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tree_sitter import Language, Parser
from tree_sitter_html import language

from html_emmet_lsp.constants import SCRIPT_TAG, STYLE_TAG, VOID_ELEMENTS
from html_emmet_lsp.models import HTMLDocument, HTMLNode, Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tree_sitter import Node, Tree

_ELEMENT_TYPES = frozenset({"element", "script_element", "style_element"})
_RAW_TEXT_TAGS = frozenset({STYLE_TAG, SCRIPT_TAG})

_parser: Parser | None = None


def _get_parser() -> Parser:
    """Get or create the tree-sitter HTML parser singleton."""
    global _parser  # noqa: PLW0603
    if _parser is None:
        _parser = Parser(Language(language()))
    return _parser


class _OffsetMap:
    """Converts UTF-8 byte offsets into string offsets."""

    def __init__(self, text: str, source: bytes):
        self._identity = len(source) == len(text)
        self._char_at_byte: list[int] = []
        if not self._identity:
            for index, char in enumerate(text):
                self._char_at_byte.extend([index] * len(char.encode("utf-8")))
            self._char_at_byte.append(len(text))

    def __call__(self, byte_offset: int) -> int:
        if self._identity:
            return byte_offset
        return self._char_at_byte[min(byte_offset, len(self._char_at_byte) - 1)]


class ParsedSource:
    """A tree-sitter tree together with its source text."""

    def __init__(self, text: str):
        self.text = text
        self.source = text.encode("utf-8")
        self.tree: Tree = _get_parser().parse(self.source)
        self.offset = _OffsetMap(text, self.source)

    def node_text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def start(self, node: Node) -> int:
        return self.offset(node.start_byte)

    def end(self, node: Node) -> int:
        return self.offset(node.end_byte)


def _child_of_type(node: Node, *types: str) -> Node | None:
    for child in node.children:
        if child.type in types:
            return child
    return None


def _attributes(parsed: ParsedSource, tag_node: Node) -> dict[str, str | None]:
    attributes: dict[str, str | None] = {}
    for attribute in tag_node.children:
        if attribute.type != "attribute":
            continue
        name_node = _child_of_type(attribute, "attribute_name")
        if name_node is None:
            continue
        value_node = _child_of_type(attribute, "quoted_attribute_value", "attribute_value")
        value = parsed.node_text(value_node) if value_node is not None else None
        attributes[parsed.node_text(name_node).lower()] = value
    return attributes


def _build_element(parsed: ParsedSource, element: Node, parent: HTMLNode | None) -> HTMLNode:
    tag_node = _child_of_type(element, "start_tag", "self_closing_tag")
    name_node = _child_of_type(tag_node, "tag_name") if tag_node is not None else None
    node = HTMLNode(
        start=parsed.start(element),
        end=parsed.end(element),
        tag=parsed.node_text(name_node) if name_node is not None else None,
        parent=parent,
    )
    if tag_node is not None:
        node.start_tag_end = parsed.end(tag_node)
        node.attributes = _attributes(parsed, tag_node)
        if tag_node.type == "self_closing_tag":
            node.closed = True

    end_tag = _child_of_type(element, "end_tag")
    if end_tag is not None and not end_tag.is_missing and end_tag.end_byte > end_tag.start_byte:
        node.end_tag_start = parsed.start(end_tag)
        node.closed = True
    elif node.tag is not None and node.tag.lower() in _RAW_TEXT_TAGS and not node.closed:
        # An unterminated style/script block runs to the end of the element.
        node.end_tag_start = node.end

    _collect_elements(parsed, element, node, node.children)
    return node


def _new_node(parsed: ParsedSource, tag_node: Node, end: int, parent: HTMLNode | None) -> HTMLNode:
    name_node = _child_of_type(tag_node, "tag_name")
    node = HTMLNode(
        start=parsed.start(tag_node),
        end=end,
        tag=parsed.node_text(name_node) if name_node is not None else None,
        start_tag_end=parsed.end(tag_node),
        attributes=_attributes(parsed, tag_node),
        parent=parent,
    )
    if tag_node.type == "self_closing_tag":
        node.closed = True
    return node


def _close_open_node(parsed: ParsedSource, end_tag: Node, open_nodes: list[HTMLNode]) -> None:
    name_node = _child_of_type(end_tag, "tag_name", "erroneous_end_tag_name")
    if name_node is None:
        return
    name = parsed.node_text(name_node).lower()
    for index in range(len(open_nodes) - 1, -1, -1):
        node = open_nodes[index]
        if node.tag is not None and node.tag.lower() == name:
            end_tag_start = parsed.start(end_tag)
            node.end_tag_start = end_tag_start
            node.end = parsed.end(end_tag)
            node.closed = True
            # Elements opened inside it end where it is closed.
            for inner in open_nodes[index + 1 :]:
                inner.end = end_tag_start
                if inner.end_tag_start is not None:
                    inner.end_tag_start = min(inner.end_tag_start, end_tag_start)
            del open_nodes[index:]
            return


def _collect_error_region(
    parsed: ParsedSource, error: Node, parent: HTMLNode | None, into: list[HTMLNode]
) -> None:
    """Rebuild the elements of an error recovery region.

    An element left open at the end of the input comes back from tree-sitter
    as a flat ``ERROR`` node: its start tag followed by the content. Each
    start tag opens a node that the following siblings nest under, until a
    matching end tag or the end of the region.
    """
    error_end = parsed.end(error)
    open_nodes: list[HTMLNode] = []
    for child in error.children:
        owner = open_nodes[-1] if open_nodes else parent
        siblings = owner.children if open_nodes else into
        if child.type in ("start_tag", "self_closing_tag"):
            node = _new_node(parsed, child, error_end, owner)
            siblings.append(node)
            if node.closed or node.tag is None or node.tag.lower() in VOID_ELEMENTS:
                node.end = node.start_tag_end
            else:
                if node.tag.lower() in _RAW_TEXT_TAGS:
                    # An unterminated style/script block runs to the end of the region.
                    node.end_tag_start = error_end
                open_nodes.append(node)
        elif child.type in ("end_tag", "erroneous_end_tag"):
            _close_open_node(parsed, child, open_nodes)
        elif child.type in _ELEMENT_TYPES:
            siblings.append(_build_element(parsed, child, owner))
        elif child.type == "ERROR":
            _collect_error_region(parsed, child, owner, siblings)
        elif child.has_error:
            _collect_elements(parsed, child, owner, siblings)


def _collect_elements(
    parsed: ParsedSource, ts_node: Node, parent: HTMLNode | None, into: list[HTMLNode]
) -> None:
    for child in ts_node.children:
        if child.type in _ELEMENT_TYPES:
            into.append(_build_element(parsed, child, parent))
        elif child.type == "ERROR":
            _collect_error_region(parsed, child, parent, into)
        elif child.has_error:
            # Keep indexing elements found below nodes that contain errors.
            _collect_elements(parsed, child, parent, into)


def parse_html(text: str) -> HTMLDocument:
    """Build the structural index of ``text``. Never raises on malformed markup."""
    parsed = ParsedSource(text)
    roots: list[HTMLNode] = []
    root = parsed.tree.root_node
    if root.type == "ERROR":
        _collect_error_region(parsed, root, None, roots)
    else:
        _collect_elements(parsed, root, None, roots)
    return HTMLDocument(roots=roots, length=len(text))


def _walk_tokens(parsed: ParsedSource, node: Node) -> Iterator[Token]:
    node_type = node.type
    if node_type == "tag_name":
        parent_type = node.parent.type if node.parent is not None else ""
        token_type = TokenType.END_TAG if parent_type == "end_tag" else TokenType.START_TAG
        yield Token(token_type, parsed.start(node), parsed.end(node), parsed.node_text(node))
        return
    if node_type == "attribute_name":
        yield Token(
            TokenType.ATTRIBUTE_NAME, parsed.start(node), parsed.end(node), parsed.node_text(node)
        )
        return
    if node_type == "quoted_attribute_value" or (
        node_type == "attribute_value"
        and (node.parent is None or node.parent.type != "quoted_attribute_value")
    ):
        yield Token(
            TokenType.ATTRIBUTE_VALUE, parsed.start(node), parsed.end(node), parsed.node_text(node)
        )
        return
    if node_type == "comment":
        yield Token(TokenType.COMMENT, parsed.start(node), parsed.end(node), parsed.node_text(node))
        return
    if node_type in ("text", "raw_text"):
        yield Token(TokenType.CONTENT, parsed.start(node), parsed.end(node), parsed.node_text(node))
        return
    for child in node.children:
        yield from _walk_tokens(parsed, child)


def scan(text: str) -> Iterator[Token]:
    """Yield the tokens of ``text`` in document order, ending with ``EOS``."""
    parsed = ParsedSource(text)
    yield from _walk_tokens(parsed, parsed.tree.root_node)
    yield Token(TokenType.EOS, len(text), len(text), "")
