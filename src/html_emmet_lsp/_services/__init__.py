"""
Default language engines: the tree-sitter HTML analyzer, the tinycss2 CSS
analyzer and the py-emmet abbreviation engine.
"""

from __future__ import annotations

from .css_service import CSSService
from .emmet_engine import EmmetEngine
from .html_service import HTMLService

__all__ = ["CSSService", "EmmetEngine", "HTMLService"]
