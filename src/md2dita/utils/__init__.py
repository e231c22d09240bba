#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/utils/__init__.py
"""Utility modules for md2dita package.

This package contains helpers for input acquisition, encoding resolution,
identifier generation and output writing.
"""

from md2dita.utils.encoding import strip_utf8_bom
from md2dita.utils.inputs import InputSource, read_input_source
from md2dita.utils.text import make_unique_slug, slugify

__all__ = [
    "InputSource",
    "make_unique_slug",
    "read_input_source",
    "slugify",
    "strip_utf8_bom",
]
