"""Built-in HTML tag and attribute data for completion and hover."""

from __future__ import annotations

TAGS: dict[str, str] = {
    "a": "Together with its href attribute, creates a hyperlink.",
    "abbr": "Represents an abbreviation or acronym.",
    "article": "A self-contained composition intended to be independently distributable.",
    "aside": "A portion of a document whose content is only indirectly related to the main content.",
    "audio": "Embeds sound content in documents.",
    "b": "Draws the reader's attention to the element's contents.",
    "blockquote": "Indicates that the enclosed text is an extended quotation.",
    "body": "Represents the content of an HTML document.",
    "br": "Produces a line break in text.",
    "button": "An interactive element activated by a user.",
    "canvas": "Draws graphics via scripting.",
    "code": "Displays its contents styled as a fragment of computer code.",
    "div": "The generic container for flow content.",
    "em": "Marks text that has stress emphasis.",
    "footer": "A footer for its nearest sectioning content or sectioning root element.",
    "form": "A document section containing interactive controls for submitting information.",
    "h1": "Level 1 section heading.",
    "h2": "Level 2 section heading.",
    "h3": "Level 3 section heading.",
    "head": "Contains machine-readable information about the document.",
    "header": "Introductory content, typically a group of introductory or navigational aids.",
    "hr": "A thematic break between paragraph-level elements.",
    "html": "The root element of an HTML document.",
    "i": "A range of text set off from the normal text for some reason.",
    "iframe": "A nested browsing context, embedding another HTML page.",
    "img": "Embeds an image into the document.",
    "input": "Creates interactive controls for web-based forms.",
    "label": "A caption for an item in a user interface.",
    "li": "An item in a list.",
    "link": "Specifies relationships between the current document and an external resource.",
    "main": "The dominant content of the body of a document.",
    "meta": "Metadata that cannot be represented by other meta-related elements.",
    "nav": "A section providing navigation links.",
    "ol": "An ordered list of items.",
    "option": "An item contained in a select, optgroup, or datalist element.",
    "p": "A paragraph.",
    "pre": "Preformatted text presented exactly as written.",
    "script": "Embeds executable code or data.",
    "section": "A generic standalone section of a document.",
    "select": "A control that provides a menu of options.",
    "span": "A generic inline container for phrasing content.",
    "strong": "Content with strong importance, seriousness, or urgency.",
    "style": "Contains style information for a document.",
    "svg": "A container defining a new coordinate system and viewport.",
    "table": "Tabular data.",
    "tbody": "Encapsulates a set of table rows.",
    "td": "A cell of a table that contains data.",
    "textarea": "A multi-line plain-text editing control.",
    "th": "A cell as a header of a group of table cells.",
    "thead": "A set of rows defining the head of the columns of the table.",
    "title": "The document's title shown in a browser's title bar or page tab.",
    "tr": "A row of cells in a table.",
    "ul": "An unordered list of items.",
    "video": "Embeds a media player which supports video playback.",
}

GLOBAL_ATTRIBUTES: dict[str, str] = {
    "class": "A space-separated list of the classes of the element.",
    "id": "Defines a unique identifier which must be unique in the whole document.",
    "style": "Contains CSS styling declarations to be applied to the element.",
    "title": "Contains a text representing advisory information related to the element.",
    "hidden": "Indicates that the element is not yet, or is no longer, relevant.",
    "lang": "Defines the language used in the element.",
    "dir": "Indicates the directionality of the element's text.",
    "tabindex": "Indicates whether the element can take input focus.",
    "role": "Defines an explicit role for the element for accessibility.",
}

TAG_ATTRIBUTES: dict[str, dict[str, str]] = {
    "a": {
        "href": "The URL that the hyperlink points to.",
        "target": "Where to display the linked URL.",
        "rel": "The relationship of the linked URL.",
        "download": "Causes the browser to treat the linked URL as a download.",
    },
    "body": {
        "bgcolor": "Background color of the document.",
        "text": "Foreground color of text.",
        "link": "Color of unvisited links.",
        "alink": "Color of active links.",
        "vlink": "Color of visited links.",
    },
    "button": {
        "type": "The default behavior of the button.",
        "disabled": "Prevents the user from interacting with the button.",
    },
    "font": {"color": "Text color.", "size": "Font size.", "face": "Font family."},
    "form": {
        "action": "The URL that processes the form submission.",
        "method": "The HTTP method to submit the form with.",
    },
    "img": {
        "src": "The image URL.",
        "alt": "Alternative text description of the image.",
        "width": "The intrinsic width of the image in pixels.",
        "height": "The intrinsic height of the image in pixels.",
    },
    "input": {
        "type": "How the input control works.",
        "name": "Name of the form control.",
        "value": "The value of the control.",
        "placeholder": "Text that appears when the control has no value.",
        "disabled": "Whether the form control is disabled.",
    },
    "link": {
        "href": "The URL of the linked resource.",
        "rel": "The relationship of the linked resource.",
    },
    "script": {"src": "URI of an external script.", "type": "The type of script."},
    "table": {"bgcolor": "Background color of the table.", "border": "Table border width."},
    "td": {"bgcolor": "Background color of the cell."},
}

ATTRIBUTE_VALUES: dict[str, tuple[str, ...]] = {
    "target": ("_blank", "_self", "_parent", "_top"),
    "rel": ("stylesheet", "icon", "noopener", "noreferrer", "nofollow"),
    "dir": ("ltr", "rtl", "auto"),
    "method": ("get", "post", "dialog"),
    "input:type": (
        "text",
        "password",
        "checkbox",
        "radio",
        "submit",
        "email",
        "number",
        "date",
        "file",
        "hidden",
    ),
    "button:type": ("button", "submit", "reset"),
}


def attributes_for(tag: str | None) -> dict[str, str]:
    """Attributes valid on ``tag``, tag-specific ones first."""
    specific = TAG_ATTRIBUTES.get(tag.lower(), {}) if tag else {}
    return {**specific, **{k: v for k, v in GLOBAL_ATTRIBUTES.items() if k not in specific}}


def values_for(tag: str | None, attribute: str) -> tuple[str, ...]:
    attribute = attribute.lower()
    if tag:
        values = ATTRIBUTE_VALUES.get(f"{tag.lower()}:{attribute}")
        if values is not None:
            return values
    return ATTRIBUTE_VALUES.get(attribute, ())
