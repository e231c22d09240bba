#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/parsers/__init__.py
"""Parsers that build md2dita document trees."""

from md2dita.parsers.base import BaseParser
from md2dita.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = [
    "BaseParser",
    "MarkdownToAstConverter",
    "markdown_to_ast",
]
