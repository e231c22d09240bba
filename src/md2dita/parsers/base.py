#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/parsers/base.py
"""Base classes for document parsers.

A parser turns source input into the md2dita AST. Input acquisition is shared:
every parser reads its text through ``md2dita.utils.inputs`` so encoding and
byte-order-mark handling is identical across entry points.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from md2dita.ast import Document
from md2dita.exceptions import InvalidOptionsError
from md2dita.options.base import BaseParserOptions
from md2dita.utils.inputs import InputSource, InputType, read_input_source

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for all document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Examples
    --------
        >>> class PlainParser(BaseParser):
        ...     def parse(self, input_data):
        ...         text = self._load_text_content(input_data)
        ...         return Document(children=[])

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    def _load_text_content(self, input_data: InputType) -> tuple[str, str]:
        """Read input into a decoded text buffer.

        Parameters
        ----------
        input_data : InputSource, str, Path, bytes or file-like
            Document input

        Returns
        -------
        tuple of (str, str)
            Decoded text and the source's display name

        Raises
        ------
        AcquisitionError
            If the input cannot be read or decoded

        """
        encoding = self.options.encoding if self.options is not None else None
        source = InputSource.from_any(input_data, encoding=encoding)
        return read_input_source(source), source.display_name

    @abstractmethod
    def parse(self, input_data: InputType) -> Document:
        """Parse the input document into an AST.

        Parameters
        ----------
        input_data : InputSource, str, Path, bytes or file-like
            The input document to parse

        Returns
        -------
        Document
            AST Document node representing the parsed document structure

        Raises
        ------
        AcquisitionError
            If the input cannot be read or decoded
        ParsingError
            If parsing fails

        """
        raise NotImplementedError
