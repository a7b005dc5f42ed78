"""Client settings for completion and HTML features.

Settings objects are immutable: every parameter is constant, and applying
user settings builds a new object from the current values plus overrides.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

import param

from ._logging import get_logger

logger = get_logger(__name__, "settings")


class _Settings(param.Parameterized):
    """Shared override machinery for settings classes."""

    # camelCase client key (dotted for nested keys) -> parameter name
    CLIENT_KEYS: ClassVar[dict[str, str]] = {}

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> _Settings:
        """Return a new settings object with the client ``overrides`` applied.

        Unknown keys are ignored. If any value fails validation the
        current settings are kept and a warning is logged.
        """
        if not overrides:
            return self
        values = {k: v for k, v in self.param.values().items() if k != "name"}
        for key, field_name in self.CLIENT_KEYS.items():
            value = _lookup(overrides, key)
            if value is not None:
                values[field_name] = value
        try:
            return type(self)(**values)
        except ValueError as e:
            logger.warning(f"Ignoring invalid settings {dict(overrides)!r}: {e}")
            return self

    def as_dict(self) -> dict[str, Any]:
        return {k: v for k, v in self.param.values().items() if k != "name"}


def _lookup(mapping: Mapping[str, Any], dotted_key: str) -> Any:
    """Read ``a.b.c`` from nested mappings, accepting flattened keys too."""
    if dotted_key in mapping:
        return mapping[dotted_key]
    current: Any = mapping
    for part in dotted_key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


class EmmetSettings(_Settings):
    """Options gating the abbreviation completion source."""

    CLIENT_KEYS: ClassVar[dict[str, str]] = {
        "showExpandedAbbreviation": "show_expanded_abbreviation",
        "showAbbreviationSuggestions": "show_abbreviation_suggestions",
        "showSuggestionsAsSnippets": "show_suggestions_as_snippets",
    }

    show_expanded_abbreviation = param.Selector(
        default="always",
        objects=["always", "inMarkupAndStylesheetFilesOnly", "never"],
        constant=True,
        doc="When to offer the expanded abbreviation; 'never' disables the source.",
    )
    show_abbreviation_suggestions = param.Boolean(
        default=True,
        constant=True,
        doc="Offer snippet names matching the abbreviation typed so far.",
    )
    show_suggestions_as_snippets = param.Boolean(
        default=False,
        constant=True,
        doc="Insert expansions as templates with tab stops instead of plain text.",
    )

    @property
    def enabled(self) -> bool:
        return self.show_expanded_abbreviation != "never"


class HTMLSettings(_Settings):
    """Options for the HTML language service."""

    CLIENT_KEYS: ClassVar[dict[str, str]] = {
        "autoClosingTags": "auto_closing_tags",
        "completion.attributeDefaultValue": "attribute_default_value",
        "hover.documentation": "hover_documentation",
        "hover.references": "hover_references",
    }

    auto_closing_tags = param.Boolean(
        default=False,
        constant=True,
        doc="Client closes tags itself, so closing-tag proposals are hidden.",
    )
    attribute_default_value = param.Selector(
        default="doublequotes",
        objects=["doublequotes", "singlequotes", "empty"],
        constant=True,
        doc="Quotes inserted after an attribute name completion.",
    )
    hover_documentation = param.Boolean(default=True, constant=True)
    hover_references = param.Boolean(default=True, constant=True)

    @property
    def hide_auto_complete_proposals(self) -> bool:
        return self.auto_closing_tags


DEFAULT_EMMET_SETTINGS = EmmetSettings()
DEFAULT_HTML_SETTINGS = HTMLSettings()
