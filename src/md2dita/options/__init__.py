#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/options/__init__.py
"""Options for md2dita parsers and renderers."""

from md2dita.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from md2dita.options.dita import DitaRendererOptions
from md2dita.options.markdown import MarkdownParserOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "DitaRendererOptions",
    "MarkdownParserOptions",
]
