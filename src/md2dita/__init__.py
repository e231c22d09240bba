"""md2dita - Convert Markdown documents to DITA topics.

md2dita reads Markdown (with optional YAML front matter), builds a document
tree with mistune, and serializes the tree as a DITA topic. Serialization is
event based: the renderer pushes start-element, characters and end-element
events to a sink, which can record them, check them, or build XML with lxml.

Key Features
------------
- Input from files, URLs, byte or text streams, with encoding resolution and
  UTF-8 byte-order-mark stripping
- Headings split the document into nested topics
- Front matter becomes the topic prolog in a fixed, deterministic order
- Every node kind has an explicit rendering rule; unknown nodes are errors

Requirements
------------
- Python 3.10+
- httpx for reading remote URLs (``pip install 'md2dita[http]'``)

Examples
--------
Convert Markdown text:

    >>> from md2dita import to_dita
    >>> xml = to_dita("# Install\\n\\nRun the installer.")

Inspect the event stream:

    >>> from md2dita import parse_markdown, serialize_document
    >>> from md2dita.sinks import RecordingSink
    >>> sink = RecordingSink()
    >>> serialize_document(parse_markdown("# Title"), sink)
    >>> sink.element_names
    ['topic', 'title']

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "md2dita requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from md2dita.api import parse_markdown, serialize_document, to_dita  # noqa: E402
from md2dita.exceptions import (  # noqa: E402
    AcquisitionError,
    DependencyError,
    MalformedMetadataError,
    Md2DitaError,
    ParsingError,
    RenderingError,
    UnmappedNodeError,
    ValidationError,
)
from md2dita.options import BaseParserOptions, BaseRendererOptions, DitaRendererOptions, MarkdownParserOptions  # noqa: E402
from md2dita.utils.inputs import InputSource  # noqa: E402

__all__ = [
    "AcquisitionError",
    "BaseParserOptions",
    "BaseRendererOptions",
    "DependencyError",
    "DitaRendererOptions",
    "InputSource",
    "MalformedMetadataError",
    "MarkdownParserOptions",
    "Md2DitaError",
    "ParsingError",
    "RenderingError",
    "UnmappedNodeError",
    "ValidationError",
    "__version__",
    "parse_markdown",
    "serialize_document",
    "to_dita",
]
