"""
Completion core: region classification, coordinate translation, virtual
documents, abbreviation completions, completion merging and attribute colors.
"""

from __future__ import annotations

from .abbreviation import EngineTextModel, get_abbreviation_completions
from .colors import find_colors, get_color_presentations
from .coordinates import (
    range_to_engine_convention,
    range_to_protocol_convention,
    to_engine_convention,
    to_protocol_convention,
)
from .merger import merge_completions
from .regions import classify_region, classify_region_by_scanning
from .virtual_document import VirtualDocument, create_virtual_document

__all__ = [
    "EngineTextModel",
    "VirtualDocument",
    "classify_region",
    "classify_region_by_scanning",
    "create_virtual_document",
    "find_colors",
    "get_abbreviation_completions",
    "get_color_presentations",
    "merge_completions",
    "range_to_engine_convention",
    "range_to_protocol_convention",
    "to_engine_convention",
    "to_protocol_convention",
]
