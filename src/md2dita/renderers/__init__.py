#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/renderers/__init__.py
"""AST renderers for md2dita document trees.

``DitaRenderer`` turns a document tree into a DITA topic, either as a stream
of events pushed to a ``ContentSink`` or as serialized XML.

Examples
--------
    >>> from md2dita.ast import Document, Heading, Text
    >>> from md2dita.renderers import DitaRenderer
    >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
    >>> xml = DitaRenderer().render_to_string(doc)

"""

from md2dita.renderers.base import BaseRenderer
from md2dita.renderers.dita import RENDERING_RULES, DitaRenderer
from md2dita.renderers.dita_metadata import BASE_KNOWN_KEYS, MetadataSerializer

__all__ = [
    "BASE_KNOWN_KEYS",
    "BaseRenderer",
    "DitaRenderer",
    "MetadataSerializer",
    "RENDERING_RULES",
]
