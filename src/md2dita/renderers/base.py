#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/renderers/base.py
"""Base classes for AST renderers.

A renderer turns an md2dita document tree into an output format. Renderers
that produce markup do so by pushing events to a ``ContentSink``; the
string, bytes and file helpers here are built on top of that.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import BytesIO

from md2dita.ast import Document
from md2dita.events import ContentSink
from md2dita.exceptions import InvalidOptionsError
from md2dita.options.base import BaseRendererOptions
from md2dita.utils.io_utils import OutputType, write_content


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def serialize(self, doc: Document, sink: ContentSink) -> None:
        """Push the event stream for ``doc`` to ``sink``.

        Parameters
        ----------
        doc : Document
            AST Document node to serialize
        sink : ContentSink
            Receiver of the events

        Raises
        ------
        RenderingError
            If the tree contains a node the renderer cannot map

        """
        pass

    @abstractmethod
    def render(self, doc: Document, output: OutputType) -> None:
        """Render the AST to a file path or file-like object.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination

        Raises
        ------
        RenderingError
            If rendering fails

        """
        pass

    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    def render_to_bytes(self, doc: Document) -> bytes:
        """Render the AST to bytes.

        The default implementation renders into a BytesIO buffer through
        ``render``.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        bytes
            Rendered document

        """
        buffer = BytesIO()
        self.render(doc, buffer)
        return buffer.getvalue()

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_output(content: str | bytes, output: OutputType, encoding: str = "utf-8") -> None:
        """Write rendered content to a file path or stream.

        Parameters
        ----------
        content : str or bytes
            Rendered content
        output : str, Path, IO[bytes] or IO[str]
            Output destination
        encoding : str, default "utf-8"
            Encoding used when converting between text and bytes

        """
        if output is None:
            raise TypeError("An output destination is required")
        write_content(content, output, encoding=encoding)
