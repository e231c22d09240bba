#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/options/dita.py
"""Configuration options for DITA rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from md2dita.constants import DITA_TOPIC_DOCTYPE
from md2dita.options.base import BaseRendererOptions


@dataclass(frozen=True)
class DitaRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-DITA rendering.

    Parameters
    ----------
    identifier_from_metadata : bool, default False
        Take the root topic ``id`` from the front-matter ``id`` key. When
        enabled, ``id`` joins the known front-matter keys and is no longer
        written as a generic ``data`` element.
    xml_declaration : bool, default True
        Write an XML declaration when serializing to XML.
    doctype : str or None, default DITA topic DOCTYPE
        DOCTYPE declaration written before the root element. None omits it.
    pretty_print : bool, default True
        Indent the serialized XML.

    Examples
    --------
    Take topic identifiers from front matter, compact output:

        >>> options = DitaRendererOptions(identifier_from_metadata=True, pretty_print=False)

    """

    identifier_from_metadata: bool = field(
        default=False,
        metadata={
            "help": "Use the front-matter 'id' value as the root topic id",
            "cli_name": "id-from-metadata",
            "importance": "core",
        },
    )
    xml_declaration: bool = field(
        default=True,
        metadata={"help": "Write an XML declaration", "cli_name": "no-xml-declaration", "importance": "advanced"},
    )
    doctype: Optional[str] = field(
        default=DITA_TOPIC_DOCTYPE,
        metadata={"help": "DOCTYPE declaration for the topic (None to omit)", "importance": "advanced"},
    )
    pretty_print: bool = field(
        default=True,
        metadata={"help": "Indent the serialized XML", "cli_name": "no-pretty", "importance": "core"},
    )
