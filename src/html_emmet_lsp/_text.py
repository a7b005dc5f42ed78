"""Bounds-safe conversions between offsets and protocol positions.

Out-of-range input is clamped to the text instead of raising, so a stale
position from the client degrades a request rather than failing it.

Positions handled here count characters of the Python string. Clients count
in the position encoding negotiated at initialization (UTF-16 unless told
otherwise); ``from_client_position`` and ``to_client_units`` convert at the
protocol boundary using the document's ``position_codec``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, TypeVar

import attrs
from lsprotocol.types import Position, Range

if TYPE_CHECKING:
    from pygls.workspace import TextDocument

T = TypeVar("T")

_re_line_break = re.compile(r"\r\n|\r|\n")


def line_offsets(text: str) -> list[int]:
    """Offsets at which each line of ``text`` starts."""
    return [0, *(match.end() for match in _re_line_break.finditer(text))]


def offset_at(text: str, position: Position, offsets: list[int] | None = None) -> int:
    """Convert a zero-based protocol position into an offset into ``text``."""
    offsets = offsets if offsets is not None else line_offsets(text)
    if position.line >= len(offsets):
        return len(text)
    line_start = offsets[position.line]
    next_line_start = offsets[position.line + 1] if position.line + 1 < len(offsets) else len(text)
    line_end = next_line_start
    # Positions past the end of a line land before its line break.
    while line_end > line_start and text[line_end - 1] in "\r\n":
        line_end -= 1
    return max(min(line_start + position.character, line_end), line_start)


def position_at(text: str, offset: int, offsets: list[int] | None = None) -> Position:
    """Convert an offset into ``text`` into a zero-based protocol position."""
    offsets = offsets if offsets is not None else line_offsets(text)
    offset = max(min(offset, len(text)), 0)
    low, high = 0, len(offsets)
    while low < high:
        mid = (low + high) // 2
        if offsets[mid] > offset:
            high = mid
        else:
            low = mid + 1
    line = low - 1
    return Position(line=line, character=offset - offsets[line])


def range_at(text: str, start: int, end: int, offsets: list[int] | None = None) -> Range:
    offsets = offsets if offsets is not None else line_offsets(text)
    return Range(start=position_at(text, start, offsets), end=position_at(text, end, offsets))


def get_text(text: str, range_: Range) -> str:
    """Substring of ``text`` covered by ``range_``; empty for inverted ranges."""
    offsets = line_offsets(text)
    start = offset_at(text, range_.start, offsets)
    end = offset_at(text, range_.end, offsets)
    if end <= start:
        return ""
    return text[start:end]


def _lines(text: str, offsets: list[int]) -> list[str]:
    ends = [*offsets[1:], len(text)]
    return [text[start:end] for start, end in zip(offsets, ends)]


def from_client_position(document: TextDocument, position: Position) -> Position:
    """Re-express a client position in characters of ``document.source``."""
    text = document.source
    offsets = line_offsets(text)
    if position.line >= len(offsets):
        return position
    codec = document.position_codec
    line = _lines(text, offsets)[position.line]
    units = 0
    for index, char in enumerate(line):
        if units >= position.character:
            return Position(line=position.line, character=index)
        units += codec.client_num_units(char)
    return Position(line=position.line, character=len(line))


def _convert_positions(value, convert):
    if isinstance(value, Position):
        return convert(value)
    if isinstance(value, list):
        return [_convert_positions(item, convert) for item in value]
    if isinstance(value, dict):
        return {key: _convert_positions(item, convert) for key, item in value.items()}
    if attrs.has(type(value)):
        changes = {
            field.name: _convert_positions(getattr(value, field.name), convert)
            for field in attrs.fields(type(value))
        }
        return attrs.evolve(value, **changes)
    return value


def to_client_units(document: TextDocument, value: T) -> T:
    """Copy of ``value`` with every nested position in the client's encoding.

    ``value`` is a protocol result (an lsprotocol object, a list of them, or
    ``None``) whose positions count characters of ``document.source``.
    """
    if value is None:
        return value
    text = document.source
    lines = _lines(text, line_offsets(text))
    codec = document.position_codec
    return _convert_positions(value, lambda p: codec.position_to_client_units(lines, p))
