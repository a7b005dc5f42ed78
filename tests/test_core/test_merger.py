"""Tests for merging completion lists."""

from __future__ import annotations

from lsprotocol.types import CompletionItem, CompletionList

from html_emmet_lsp._core import merge_completions
from html_emmet_lsp._core.merger import rank_abbreviation_items


def completion_list(*labels, is_incomplete=False):
    return CompletionList(
        is_incomplete=is_incomplete, items=[CompletionItem(label=label) for label in labels]
    )


class TestMergeCompletions:
    """Test ordering, flags and tie-breaks of merged lists."""

    def test_abbreviations_come_first(self):
        merged = merge_completions(completion_list("div", "span"), completion_list("ul>li"))
        assert [item.label for item in merged.items] == ["ul>li", "div", "span"]

    def test_merged_list_is_incomplete(self):
        merged = merge_completions(completion_list("div"), completion_list("ul>li"))
        assert merged.is_incomplete is True

    def test_without_abbreviations_primary_is_returned(self):
        primary = completion_list("div")
        assert merge_completions(primary, None) is primary
        assert merge_completions(primary, completion_list()) is primary

    def test_nothing_to_merge(self):
        merged = merge_completions(None, None)
        assert merged.items == []
        assert merged.is_incomplete is False

    def test_only_abbreviations(self):
        merged = merge_completions(None, completion_list("p.x"))
        assert [item.label for item in merged.items] == ["p.x"]

    def test_duplicate_labels_are_kept(self):
        """Items from different sources insert different text, so none is dropped."""
        merged = merge_completions(completion_list("div"), completion_list("div"))
        assert [item.label for item in merged.items] == ["div", "div"]

    def test_inputs_are_not_mutated(self):
        abbreviations = completion_list("a", "b")
        merge_completions(None, abbreviations)
        assert all(item.sort_text is None for item in abbreviations.items)
        assert all(item.preselect is None for item in abbreviations.items)


class TestRankAbbreviationItems:
    """Test synthetic sort keys and preselection."""

    def test_sort_keys_follow_position(self):
        ranked = rank_abbreviation_items(completion_list("a", "b", "c").items)
        assert [item.sort_text for item in ranked] == ["0_emmet_0", "0_emmet_1", "0_emmet_2"]

    def test_first_item_preselected(self):
        ranked = rank_abbreviation_items(completion_list("a", "b").items)
        assert ranked[0].preselect is True
        assert ranked[1].preselect is None

    def test_existing_sort_key_kept(self):
        items = [CompletionItem(label="a", sort_text="zzz"), CompletionItem(label="b")]
        ranked = rank_abbreviation_items(items)
        assert ranked[0].sort_text == "zzz"
        assert ranked[1].sort_text == "0_emmet_1"

    def test_abbreviations_sort_before_primary(self):
        """Under plain string sorting, ranked abbreviation items lead."""
        merged = merge_completions(completion_list("a", "b"), completion_list("x", "y"))
        keys = sorted(merged.items, key=lambda item: item.sort_text or item.label)
        assert [item.label for item in keys][:2] == ["x", "y"]
