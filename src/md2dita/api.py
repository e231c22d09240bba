#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/api.py
"""Public conversion functions for md2dita.

``parse_markdown`` builds a document tree, ``serialize_document`` pushes the
DITA event stream for a tree to a sink, and ``to_dita`` does both and writes
XML. Individual option fields may be passed as keyword arguments; they
override the corresponding fields of the options objects.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Optional, TypeVar

from md2dita.ast import Document
from md2dita.events import ContentSink
from md2dita.exceptions import Md2DitaError, ParsingError, ValidationError
from md2dita.options.base import CloneFrozenMixin
from md2dita.options.dita import DitaRendererOptions
from md2dita.options.markdown import MarkdownParserOptions
from md2dita.parsers.markdown import MarkdownToAstConverter
from md2dita.renderers.dita import DitaRenderer
from md2dita.utils.inputs import InputType
from md2dita.utils.io_utils import OutputType

logger = logging.getLogger(__name__)

_OptionsT = TypeVar("_OptionsT", bound=CloneFrozenMixin)


def _apply_overrides(options: Optional[_OptionsT], options_class: type[_OptionsT], overrides: dict) -> _OptionsT:
    base = options if options is not None else options_class()
    if not overrides:
        return base
    return base.create_updated(**overrides)


def _split_kwargs(kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split keyword overrides between parser and renderer options by field name.

    Raises
    ------
    ValidationError
        If a keyword names no field of either options class

    """
    parser_fields = {f.name for f in fields(MarkdownParserOptions)}
    renderer_fields = {f.name for f in fields(DitaRendererOptions)}

    parser_kwargs: dict[str, Any] = {}
    renderer_kwargs: dict[str, Any] = {}
    unmatched = []
    for key, value in kwargs.items():
        if key in parser_fields:
            parser_kwargs[key] = value
        elif key in renderer_fields:
            renderer_kwargs[key] = value
        else:
            unmatched.append(key)

    if unmatched:
        raise ValidationError(
            f"Unknown option(s): {', '.join(sorted(unmatched))}",
            parameter_name=unmatched[0],
            parameter_value=kwargs[unmatched[0]],
        )
    return parser_kwargs, renderer_kwargs


def parse_markdown(
    source: InputType,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    **kwargs: Any,
) -> Document:
    """Read Markdown and build its document tree.

    Parameters
    ----------
    source : InputSource, str, Path, bytes or file-like
        Markdown input. Strings naming a URL or Markdown file are read from
        that location; any other string is the Markdown text itself.
    parser_options : MarkdownParserOptions, optional
        Parser configuration
    kwargs : Any
        Individual parser option fields overriding ``parser_options``

    Returns
    -------
    Document
        Document tree

    Raises
    ------
    AcquisitionError
        If the input cannot be read or decoded
    ParsingError
        If the Markdown or its front matter cannot be parsed

    Examples
    --------
    >>> doc = parse_markdown("# Hello\\n\\nWorld", parse_tables=False)

    """
    parser_kwargs, renderer_kwargs = _split_kwargs(kwargs)
    if renderer_kwargs:
        raise ValidationError(
            f"Rendering options are not accepted by parse_markdown: {', '.join(sorted(renderer_kwargs))}"
        )
    options = _apply_overrides(parser_options, MarkdownParserOptions, parser_kwargs)

    try:
        return MarkdownToAstConverter(options).parse(source)
    except Md2DitaError:
        raise
    except Exception as e:
        raise ParsingError(f"Markdown parsing failed: {e!r}", parsing_stage="ast_conversion", original_error=e) from e


def serialize_document(
    doc: Document,
    sink: ContentSink,
    *,
    renderer_options: Optional[DitaRendererOptions] = None,
    **kwargs: Any,
) -> None:
    """Push the DITA event stream for a document tree to a sink.

    Parameters
    ----------
    doc : Document
        Document tree to serialize
    sink : ContentSink
        Receiver of the events
    renderer_options : DitaRendererOptions, optional
        Renderer configuration
    kwargs : Any
        Individual renderer option fields overriding ``renderer_options``

    Raises
    ------
    UnmappedNodeError
        If the tree contains a node kind with no rendering rule

    """
    parser_kwargs, renderer_kwargs = _split_kwargs(kwargs)
    if parser_kwargs:
        raise ValidationError(
            f"Parsing options are not accepted by serialize_document: {', '.join(sorted(parser_kwargs))}"
        )
    options = _apply_overrides(renderer_options, DitaRendererOptions, renderer_kwargs)
    DitaRenderer(options).serialize(doc, sink)


def to_dita(
    source: InputType,
    output: Optional[OutputType] = None,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[DitaRendererOptions] = None,
    **kwargs: Any,
) -> Optional[str]:
    """Convert Markdown to a DITA topic.

    Parameters
    ----------
    source : InputSource, str, Path, bytes or file-like
        Markdown input
    output : str, Path, IO[bytes], IO[str] or None, default None
        Destination for the XML. When None, the XML is returned as a string.
    parser_options : MarkdownParserOptions, optional
        Parser configuration
    renderer_options : DitaRendererOptions, optional
        Renderer configuration
    kwargs : Any
        Individual option fields of either options class

    Returns
    -------
    str or None
        DITA XML if ``output`` is None, otherwise None

    Examples
    --------
    >>> xml = to_dita("# Release notes\\n\\nFirst draft.", pretty_print=False)
    >>> to_dita("notes.md", "notes.dita", identifier_from_metadata=True)

    """
    parser_kwargs, renderer_kwargs = _split_kwargs(kwargs)
    doc = parse_markdown(source, parser_options=parser_options, **parser_kwargs)

    options = _apply_overrides(renderer_options, DitaRendererOptions, renderer_kwargs)
    renderer = DitaRenderer(options)
    if output is None:
        return renderer.render_to_string(doc)

    renderer.render(doc, output)
    logger.debug(f"Wrote DITA topic for {doc.metadata.get('source', 'document')}")
    return None


__all__ = [
    "parse_markdown",
    "serialize_document",
    "to_dita",
]
