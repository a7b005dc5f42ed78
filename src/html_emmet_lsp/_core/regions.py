"""Classify an offset of a host document into the language region containing it.

The content of an element is the span ``[start_tag_end, end_tag_start]``,
inclusive at both edges: a cursor right after ``<style>`` or right before
``</style>`` is inside the style block. Completion merging relies on that
boundary rule.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from html_emmet_lsp.constants import SCRIPT_TAG, STYLE_TAG
from html_emmet_lsp.models import Region

if TYPE_CHECKING:
    from html_emmet_lsp.models import HTMLDocument, HTMLNode

EMBEDDED_REGIONS: dict[str, Region] = {
    STYLE_TAG: Region.EMBEDDED_STYLE,
    SCRIPT_TAG: Region.EMBEDDED_SCRIPT,
}

_re_embedded_open_tag = re.compile(rf"<({STYLE_TAG}|{SCRIPT_TAG})(?![\w:-])", re.IGNORECASE)
_re_comment = re.compile(r"<!--.*?(?:-->|\Z)", re.DOTALL)


def _region_for_tag(tag: str) -> Region:
    return EMBEDDED_REGIONS.get(tag.lower(), Region.PLAIN_MARKUP)


def find_content_node(html_document: HTMLDocument, offset: int) -> HTMLNode | None:
    """The tagged node whose content span contains ``offset``, edges included."""
    node = html_document.find_node_at(offset)
    span = node.content_span
    if not node.tag or span is None:
        return None
    start_tag_end, end_tag_start = span
    if start_tag_end <= offset <= end_tag_start:
        return node
    return None


def classify_region(text: str, offset: int, html_document: HTMLDocument | None = None) -> Region:
    """Region of ``offset``, using the structural index when one is available."""
    if offset < 0 or offset > len(text):
        return Region.OUTSIDE_TAG_CONTENT
    if html_document is None:
        return classify_region_by_scanning(text, offset)
    node = find_content_node(html_document, offset)
    if node is None or node.tag is None:
        return Region.PLAIN_MARKUP
    return _region_for_tag(node.tag)


def classify_region_by_scanning(text: str, offset: int) -> Region:
    """Classify without a structural index by scanning the raw text.

    Finds the last ``<style``/``<script`` opening tag before ``offset``,
    ignoring tags inside comments; the position is inside that block when it
    lies after the opening tag's ``>`` and no later than the matching closing
    tag. A block that is never closed extends to the end of the text.
    """
    if offset < 0 or offset > len(text):
        return Region.OUTSIDE_TAG_CONTENT

    comments = [match.span() for match in _re_comment.finditer(text)]
    last_open = None
    for match in _re_embedded_open_tag.finditer(text, 0, offset):
        if not any(start <= match.start() < end for start, end in comments):
            last_open = match
    if last_open is None:
        return Region.PLAIN_MARKUP

    tag = last_open.group(1).lower()
    open_tag_end = text.find(">", last_open.end())
    if open_tag_end == -1 or open_tag_end >= offset:
        # Still inside the opening tag itself.
        return Region.PLAIN_MARKUP
    content_start = open_tag_end + 1

    close_match = re.compile(rf"</{tag}\s*>", re.IGNORECASE).search(text, content_start)
    if close_match is None or offset <= close_match.start():
        return _region_for_tag(tag)
    return Region.PLAIN_MARKUP
