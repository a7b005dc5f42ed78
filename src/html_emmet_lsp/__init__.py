"""html-emmet-lsp: HTML language server with Emmet abbreviation completions."""

from __future__ import annotations

from .__version import __version__

__all__ = ["__version__"]
