"""Constants shared by the completion core and the language services."""

from __future__ import annotations

from types import MappingProxyType

from lsprotocol.types import CompletionItemKind

SERVER_NAME = "html-emmet-lsp"

# Trigger characters per supported language. Markup triggers include the
# Emmet operators and digits so multipliers like ``li*3`` re-request.
_HTML_TRIGGER_CHARACTERS: tuple[str, ...] = (
    ".",
    ":",
    "<",
    '"',
    "=",
    "/",
    "!",
    "}",
    "*",
    "$",
    "]",
    ">",
    "0",
    "1",
    "2",
    "3",
    "4",
    "5",
    "6",
    "7",
    "8",
    "9",
)
_CSS_TRIGGER_CHARACTERS: tuple[str, ...] = ("/", "-", ":", "@")

TRIGGER_CHARACTERS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "html": _HTML_TRIGGER_CHARACTERS,
        "css": _CSS_TRIGGER_CHARACTERS,
    }
)

# Languages handled as a dialect of one of the supported languages.
LANGUAGE_ALIASES: MappingProxyType[str, str] = MappingProxyType(
    {
        "htm": "html",
        "xhtml": "html",
        "vue-html": "html",
        "handlebars": "html",
        "razor": "html",
        "php": "html",
        "scss": "css",
        "less": "css",
    }
)

DEFAULT_LANGUAGE = "html"


def resolve_language(language_id: str | None) -> str:
    """Map any language id onto a supported language, defaulting to HTML."""
    if not language_id:
        return DEFAULT_LANGUAGE
    language_id = language_id.lower()
    if language_id in TRIGGER_CHARACTERS:
        return language_id
    return LANGUAGE_ALIASES.get(language_id, DEFAULT_LANGUAGE)


def trigger_characters_for(language_id: str | None) -> tuple[str, ...]:
    """Ordered completion trigger characters for ``language_id``."""
    return TRIGGER_CHARACTERS[resolve_language(language_id)]


def all_trigger_characters() -> list[str]:
    """Union of every language's trigger characters, first occurrence order."""
    seen: dict[str, None] = {}
    for characters in TRIGGER_CHARACTERS.values():
        for character in characters:
            seen.setdefault(character, None)
    return list(seen)


# Tags whose content belongs to another language.
STYLE_TAG = "style"
SCRIPT_TAG = "script"

# Attribute names whose values are colors, in addition to any name ending in "color".
COLOR_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "color",
        "bgcolor",
        "bordercolor",
        "alink",
        "link",
        "vlink",
        "text",
        "stroke",
        "fill",
        "stop-color",
        "flood-color",
        "lighting-color",
    }
)
COLOR_ATTRIBUTE_SUFFIX = "color"

# Shell around a single CSS value so the stylesheet parser sees a complete rule.
CSS_VALUE_PREFIX = "* { color: "
CSS_VALUE_SUFFIX = "; }"
CSS_VALUE_URI = "color://html-attribute.css"

# Abbreviation completions all share one kind so clients render them apart
# from structural suggestions.
ABBREVIATION_COMPLETION_KIND = CompletionItemKind.Interface
ABBREVIATION_SORT_PREFIX = "0_emmet_"

# Default Bounded Parse Cache limits.
DEFAULT_CACHE_MAX_ENTRIES = 10
DEFAULT_CACHE_MAX_AGE_SECONDS = 60

VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)
