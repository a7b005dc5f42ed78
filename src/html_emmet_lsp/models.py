"""Data models shared by the completion core and the language services."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, NamedTuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class EnginePosition:
    """A position in the abbreviation engine's one-based convention."""

    line_number: int
    column: int


@dataclass(frozen=True)
class EngineRange:
    """A range in the abbreviation engine's one-based convention."""

    start_line_number: int
    start_column: int
    end_line_number: int
    end_column: int

    @property
    def start(self) -> EnginePosition:
        return EnginePosition(self.start_line_number, self.start_column)

    @property
    def end(self) -> EnginePosition:
        return EnginePosition(self.end_line_number, self.end_column)


class Region(Enum):
    """Language region governing completions at an offset."""

    PLAIN_MARKUP = "plain-markup"
    EMBEDDED_STYLE = "embedded-style-content"
    EMBEDDED_SCRIPT = "embedded-script-content"
    OUTSIDE_TAG_CONTENT = "outside-any-tag-content"

    @property
    def is_embedded(self) -> bool:
        return self in (Region.EMBEDDED_STYLE, Region.EMBEDDED_SCRIPT)


@dataclass(eq=False)
class HTMLNode:
    """An element of the host document.

    Offsets are character offsets into the document text. ``end_tag_start``
    is ``None`` when the element has no end tag.
    """

    start: int
    end: int
    tag: str | None = None
    start_tag_end: int | None = None
    end_tag_start: int | None = None
    closed: bool = False
    attributes: dict[str, str | None] = field(default_factory=dict)
    children: list[HTMLNode] = field(default_factory=list)
    parent: HTMLNode | None = field(default=None, repr=False)

    @property
    def first_child(self) -> HTMLNode | None:
        return self.children[0] if self.children else None

    @property
    def last_child(self) -> HTMLNode | None:
        return self.children[-1] if self.children else None

    @property
    def content_span(self) -> tuple[int, int] | None:
        """The ``(start_tag_end, end_tag_start)`` pair when both are known."""
        if self.start_tag_end is None or self.end_tag_start is None:
            return None
        return self.start_tag_end, self.end_tag_start

    def find_node_before(self, offset: int) -> HTMLNode:
        idx = bisect_left([child.start for child in self.children], offset) - 1
        if idx >= 0:
            child = self.children[idx]
            if offset > child.start:
                if offset < child.end:
                    return child.find_node_before(offset)
                last_child = child.last_child
                if last_child is not None and last_child.end == child.end:
                    return child.find_node_before(offset)
                return child
        return self

    def find_node_at(self, offset: int) -> HTMLNode:
        idx = bisect_left([child.start for child in self.children], offset) - 1
        if idx >= 0:
            child = self.children[idx]
            if child.start < offset <= child.end:
                return child.find_node_at(offset)
        return self


@dataclass(eq=False)
class HTMLDocument:
    """Structural index of a host document: its top-level nodes."""

    roots: list[HTMLNode]
    length: int = 0

    def _as_root(self) -> HTMLNode:
        return HTMLNode(start=0, end=self.length, children=self.roots)

    def find_node_at(self, offset: int) -> HTMLNode:
        """Deepest node with ``start < offset <= end``; a tagless root otherwise."""
        return self._as_root().find_node_at(offset)

    def find_node_before(self, offset: int) -> HTMLNode:
        return self._as_root().find_node_before(offset)

    def walk(self):
        """Yield every node in document order."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class TokenType(Enum):
    START_TAG = "start-tag"
    END_TAG = "end-tag"
    ATTRIBUTE_NAME = "attribute-name"
    ATTRIBUTE_VALUE = "attribute-value"
    COMMENT = "comment"
    CONTENT = "content"
    EOS = "eos"


class Token(NamedTuple):
    """A scanner token; ``offset``/``end`` are character offsets."""

    type: TokenType
    offset: int
    end: int
    text: str


class EngineSuggestionKind(Enum):
    """Suggestion kinds reported by the abbreviation engine."""

    EXPANDED_ABBREVIATION = "expanded-abbreviation"
    SNIPPET = "snippet"


@dataclass(frozen=True)
class AbbreviationSuggestion:
    """One abbreviation engine candidate, in engine coordinates."""

    label: str
    insert_text: str
    range: EngineRange | None = None
    detail: str | None = None
    documentation: Any = None
    kind: EngineSuggestionKind = EngineSuggestionKind.EXPANDED_ABBREVIATION
    is_snippet: bool = False
    sort_text: str | None = None


@dataclass(frozen=True)
class EngineResult(Generic[T]):
    """Outcome of a call across an engine boundary.

    Either ``value`` is set (possibly to ``None`` for "nothing to offer")
    or ``error`` holds the exception the engine raised.
    """

    value: T | None = None
    error: BaseException | None = None

    @classmethod
    def ok(cls, value: T | None) -> EngineResult[T]:
        return cls(value=value)

    @classmethod
    def failed(cls, error: BaseException) -> EngineResult[T]:
        return cls(error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None
