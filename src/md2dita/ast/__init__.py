#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/ast/__init__.py
"""Abstract Syntax Tree (AST) module for Markdown document trees.

The parser adapter builds these trees from Markdown text and the DITA
serializer walks them. Keeping the tree separate from both sides lets callers
build documents programmatically and serialize them without going through
Markdown at all.

- nodes: AST node classes representing document structure
- visitors: Visitor base class for AST traversal
- utils: Text extraction helpers

Examples
--------
    >>> from md2dita.ast import Document, Heading, Paragraph, Text
    >>> from md2dita.renderers.dita import DitaRenderer
    >>>
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])
    >>> xml = DitaRenderer().render_to_string(doc)

"""

from __future__ import annotations

from md2dita.ast.nodes import (
    Alignment,
    BlockQuote,
    Code,
    CodeBlock,
    Comment,
    CommentInline,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    FrontMatter,
    FrontMatterData,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SourceLocation,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    Underline,
    front_matter_from_mapping,
    get_node_children,
)
from md2dita.ast.utils import extract_text
from md2dita.ast.visitors import NodeVisitor

__all__ = [
    "Alignment",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Comment",
    "CommentInline",
    "DefinitionDescription",
    "DefinitionList",
    "DefinitionTerm",
    "Document",
    "Emphasis",
    "FrontMatter",
    "FrontMatterData",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "SourceLocation",
    "Strikethrough",
    "Strong",
    "Subscript",
    "Superscript",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "Underline",
    "extract_text",
    "front_matter_from_mapping",
    "get_node_children",
]
