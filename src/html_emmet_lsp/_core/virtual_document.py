"""Synthetic single-language documents built around host fragments.

A fragment lifted from the host document is wrapped in a static prefix and
suffix so a single-language analyzer can parse it standalone. The fragment
text itself is never altered, so offsets map by a constant shift.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from lsprotocol.types import Position, Range
from pygls.workspace import TextDocument

from html_emmet_lsp._text import line_offsets, offset_at, position_at
from html_emmet_lsp.constants import CSS_VALUE_PREFIX, CSS_VALUE_SUFFIX, CSS_VALUE_URI


class Shell(NamedTuple):
    """Static text placed around a fragment."""

    language_id: str
    prefix: str
    suffix: str


SHELLS: dict[str, Shell] = {
    # Stylesheet content, e.g. the body of a <style> element.
    "css": Shell("css", "", ""),
    # A single CSS value, e.g. a color attribute.
    "css-value": Shell("css", CSS_VALUE_PREFIX, CSS_VALUE_SUFFIX),
}


@dataclass(frozen=True)
class VirtualDocument:
    """A synthetic document plus the mapping back to its host."""

    document: TextDocument
    prefix_length: int
    fragment_start: int
    fragment_length: int

    @property
    def text(self) -> str:
        return self.document.source

    def map_offset_in(self, host_offset: int) -> int:
        return host_offset - self.fragment_start + self.prefix_length

    def map_offset_out(self, synthetic_offset: int) -> int:
        return synthetic_offset - self.prefix_length + self.fragment_start

    def position_in(self, host_offset: int) -> Position:
        """Synthetic-document position of a host offset."""
        return position_at(self.text, self.map_offset_in(host_offset))

    def fragment_range(self) -> Range:
        """Range of the fragment inside the synthetic document."""
        offsets = line_offsets(self.text)
        return Range(
            start=position_at(self.text, self.prefix_length, offsets),
            end=position_at(self.text, self.prefix_length + self.fragment_length, offsets),
        )

    def map_range_out(self, range_: Range, host_text: str) -> Range:
        """Translate a range reported against the synthetic document to the host.

        Endpoints falling inside the prefix or suffix are clamped to the fragment.
        """
        offsets = line_offsets(self.text)
        host_offsets = line_offsets(host_text)
        start, end = (
            self._clamp_to_fragment(self.map_offset_out(offset_at(self.text, p, offsets)))
            for p in (range_.start, range_.end)
        )
        return Range(
            start=position_at(host_text, start, host_offsets),
            end=position_at(host_text, end, host_offsets),
        )

    def _clamp_to_fragment(self, host_offset: int) -> int:
        return max(self.fragment_start, min(host_offset, self.fragment_start + self.fragment_length))


def create_virtual_document(
    fragment: str,
    shell: str = "css",
    *,
    fragment_start: int = 0,
    uri: str | None = None,
    version: int | None = 0,
) -> VirtualDocument:
    """Wrap ``fragment`` in the named shell.

    Args:
        fragment: Text lifted from the host document.
        shell: Key into :data:`SHELLS`.
        fragment_start: Host offset at which the fragment begins.
        uri: URI for the synthetic document; defaults per shell.
        version: Version to stamp on the synthetic document.
    """
    wrapper = SHELLS[shell]
    if uri is None:
        uri = CSS_VALUE_URI if shell == "css-value" else f"virtual://fragment.{wrapper.language_id}"
    document = TextDocument(
        uri,
        source=f"{wrapper.prefix}{fragment}{wrapper.suffix}",
        version=version,
        language_id=wrapper.language_id,
    )
    return VirtualDocument(
        document=document,
        prefix_length=len(wrapper.prefix),
        fragment_start=fragment_start,
        fragment_length=len(fragment),
    )
