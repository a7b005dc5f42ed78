"""Mixins for the HTML Language Server."""

from __future__ import annotations

from .colors import ColorMixin
from .completion import CompletionMixin
from .editing import EditingMixin
from .navigation import NavigationMixin

__all__ = ["ColorMixin", "CompletionMixin", "EditingMixin", "NavigationMixin"]
