"""Tests for the py-emmet backed abbreviation engine."""

from __future__ import annotations

import pytest

from html_emmet_lsp._core import EngineTextModel
from html_emmet_lsp._services.emmet_engine import extract_abbreviation
from html_emmet_lsp.models import EnginePosition, EngineRange, EngineSuggestionKind
from html_emmet_lsp.settings import EmmetSettings


def model_at_end(line):
    """Single-line model and the engine position at its end."""
    return EngineTextModel(line, "html"), EnginePosition(1, len(line) + 1)


class TestExtractAbbreviation:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("ul>li*3", ("ul>li*3", 0)),
            ("  div.foo", ("div.foo", 2)),
            ("<p>a[title=x]", ("a[title=x]", 3)),
            ("text (p.x", ("p.x", 6)),
            ("x ul>(li>a)+p", ("ul>(li>a)+p", 2)),
            ("a{hello world}", ("a{hello world}", 0)),
        ],
    )
    def test_extracts(self, line, expected):
        assert extract_abbreviation(line, len(line)) == expected

    @pytest.mark.parametrize("line", ["", "   ", "a]", "> "])
    def test_nothing_to_extract(self, line):
        assert extract_abbreviation(line, len(line)) is None

    def test_index_is_clamped(self):
        assert extract_abbreviation("div", 99) == ("div", 0)


class TestEmmetEngine:
    """Test expansion and location checks."""

    def test_expand(self, emmet_engine):
        expansion = emmet_engine.expand("ul>li*2")
        assert expansion.count("<li></li>") == 2
        assert expansion.startswith("<ul>")

    def test_expand_snippet_fields(self, emmet_engine):
        assert "${" in emmet_engine.expand("a", snippet=True)

    def test_expand_stylesheet(self, emmet_engine):
        assert emmet_engine.expand("p10", "css").startswith("padding")

    @pytest.mark.parametrize(
        ("abbreviation", "expected"),
        [("div", True), ("ul>li", True), ("my-element", True), ("hello", False), ("42", False)],
    )
    def test_is_expandable(self, emmet_engine, abbreviation, expected):
        assert emmet_engine.is_expandable(abbreviation, "html") is expected

    def test_valid_location_in_text(self, emmet_engine):
        model, position = model_at_end("<div></div> ul>li")
        assert emmet_engine.is_valid_location(model, position, "html", "html")

    def test_invalid_inside_open_tag(self, emmet_engine):
        model, position = model_at_end('<div cla')
        assert not emmet_engine.is_valid_location(model, position, "html", "html")

    def test_invalid_inside_comment(self, emmet_engine):
        model = EngineTextModel("<!--\n  ul>li", "html")
        assert not emmet_engine.is_valid_location(model, EnginePosition(2, 8), "html", "html")

    def test_do_complete(self, emmet_engine):
        model, position = model_at_end("  div.foo")
        (suggestion,) = emmet_engine.do_complete(model, position, "html", EmmetSettings())
        assert suggestion.label == "div.foo"
        assert suggestion.insert_text == '<div class="foo"></div>'
        assert suggestion.range == EngineRange(1, 3, 1, 10)
        assert suggestion.kind is EngineSuggestionKind.EXPANDED_ABBREVIATION
        assert suggestion.is_snippet is False

    def test_snippet_name_suggestions(self, emmet_engine):
        model, position = model_at_end("inp")
        suggestions = emmet_engine.do_complete(model, position, "html", EmmetSettings())
        labels = [s.label for s in suggestions]
        assert "input:checkbox" in labels
        assert all(s.kind is EngineSuggestionKind.SNIPPET for s in suggestions)

    def test_snippet_suggestions_disabled(self, emmet_engine):
        model, position = model_at_end("inp")
        settings = EmmetSettings(show_abbreviation_suggestions=False)
        assert emmet_engine.do_complete(model, position, "html", settings) is None

    def test_invalid_abbreviation_raises(self, emmet_engine):
        with pytest.raises(Exception):  # noqa: B017, PT011
            emmet_engine.expand("div)")
