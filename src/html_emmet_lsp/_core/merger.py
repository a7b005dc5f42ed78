"""Combine completion lists from several sources into one response."""

from __future__ import annotations

import attrs
from lsprotocol.types import CompletionItem, CompletionList

from html_emmet_lsp.constants import ABBREVIATION_SORT_PREFIX


def rank_abbreviation_items(items: list[CompletionItem]) -> list[CompletionItem]:
    """Give abbreviation items leading sort keys and preselect the first one.

    Items that already carry a sort key keep it. New items are returned; the
    input items are left untouched.
    """
    ranked = []
    for index, item in enumerate(items):
        changes: dict[str, object] = {}
        if not item.sort_text:
            changes["sort_text"] = f"{ABBREVIATION_SORT_PREFIX}{index}"
        if index == 0:
            changes["preselect"] = True
        ranked.append(attrs.evolve(item, **changes) if changes else item)
    return ranked


def merge_completions(
    primary: CompletionList | None, abbreviations: CompletionList | None
) -> CompletionList:
    """Abbreviation items first, then the primary items.

    Labels shared between the sources are all kept, since each item inserts
    something different. Without abbreviation items the primary list is
    returned as is.
    """
    if abbreviations is None or not abbreviations.items:
        if primary is None:
            return CompletionList(is_incomplete=False, items=[])
        return primary

    primary_items = list(primary.items) if primary is not None else []
    return CompletionList(
        is_incomplete=True,
        items=[*rank_abbreviation_items(list(abbreviations.items)), *primary_items],
    )
