"""Translation between protocol and abbreviation engine coordinates.

The protocol side counts lines and characters from zero; the abbreviation
engine counts lines and columns from one. Negative input is a caller error.
"""

from __future__ import annotations

from lsprotocol.types import Position, Range

from html_emmet_lsp.models import EnginePosition, EngineRange


def to_engine_convention(position: Position) -> EnginePosition:
    return EnginePosition(line_number=position.line + 1, column=position.character + 1)


def to_protocol_convention(position: EnginePosition) -> Position:
    return Position(line=position.line_number - 1, character=position.column - 1)


def range_to_engine_convention(range_: Range) -> EngineRange:
    start = to_engine_convention(range_.start)
    end = to_engine_convention(range_.end)
    return EngineRange(
        start_line_number=start.line_number,
        start_column=start.column,
        end_line_number=end.line_number,
        end_column=end.column,
    )


def range_to_protocol_convention(range_: EngineRange) -> Range:
    return Range(
        start=to_protocol_convention(range_.start),
        end=to_protocol_convention(range_.end),
    )
