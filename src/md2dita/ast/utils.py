#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes

Examples
--------
    >>> from md2dita.ast import Heading, Text, Emphasis
    >>> from md2dita.ast.utils import extract_text
    >>>
    >>> heading = Heading(level=1, content=[
    ...     Text(content="Hello "),
    ...     Emphasis(content=[Text(content="world")])
    ... ])
    >>> extract_text(heading, joiner="")
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from md2dita.ast.nodes import Code, Text, get_node_children

if TYPE_CHECKING:
    from md2dita.ast.nodes import Node


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = " ") -> str:
    """Extract plain text from a node or list of nodes.

    Text and inline code content is collected recursively through
    ``get_node_children`` and joined with ``joiner`` at each level of the
    tree. Use ``joiner=""`` when the Text nodes already carry their own
    whitespace, e.g. when deriving topic identifiers from heading text.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = " "
        String used to join text parts

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        parts = [extract_text(node, joiner=joiner) for node in node_or_nodes]
        return joiner.join(part for part in parts if part)

    node = node_or_nodes
    if isinstance(node, (Text, Code)):
        return node.content

    parts = [extract_text(child, joiner=joiner) for child in get_node_children(node)]
    return joiner.join(part for part in parts if part)


__all__ = [
    "extract_text",
]
