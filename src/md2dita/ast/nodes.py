#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/ast/nodes.py
"""AST node classes for Markdown document trees.

This module defines the node hierarchy that the Markdown parser adapter
produces and the DITA serializer consumes. Each node is a dataclass holding
kind-specific attributes and its ordered children, and supports the visitor
pattern through ``accept``.

Node Hierarchy
--------------
Block-level nodes:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - FrontMatter, ThematicBreak, HTMLBlock, Comment
    - DefinitionList, DefinitionTerm, DefinitionDescription

Inline nodes:
    - Text, Emphasis, Strong, Code, Link, Image, LineBreak
    - Strikethrough, Underline, Superscript, Subscript
    - HTMLInline, CommentInline

The tree is treated as immutable once built: serializers read nodes but never
modify them.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

Alignment = Literal["left", "center", "right"]

FrontMatterData = dict[str, list[Any]]
"""Front-matter key mapped to its values in source order."""


@dataclass
class SourceLocation:
    """Where a node starts in the Markdown input.

    Parameters
    ----------
    format : str
        Input syntax, ``"markdown"`` for every node md2dita builds
    line : int or None, default = None
        1-based line of the node's first character
    column : int or None, default = None
        1-based column of the node's first character
    metadata : dict, default = empty dict
        Parser-specific extras

    """

    format: str
    line: Optional[int] = None
    column: Optional[int] = None
    metadata: dict[str, Any] = field(default_factory=dict)


class Node(ABC):
    """Base class for all AST nodes.

    Every node kind is a dataclass ending in the two fields below; the
    subclasses document only their own fields.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Parser annotations. The DITA renderer reads none of them except
        ``Document.metadata["source"]``.
    source_location : SourceLocation or None, default = None
        Position in the input, used in error messages

    """

    metadata: dict[str, Any]
    source_location: Optional[SourceLocation]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Call the visitor's ``visit_*`` method for this node kind and return its result."""
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root of a parsed Markdown document; becomes the root DITA topic.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level blocks in source order, front matter included
    metadata : dict, default = empty dict
        The ``source`` key, when present, names the document in error
        messages.

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """ATX or setext heading. A top-level heading opens a topic.

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text

    """

    level: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Run of inline content separated by blank lines.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced or indented code block.

    Parameters
    ----------
    content : str
        Literal code without the closing-fence newline
    language : str or None, default = None
        Language tag from the fence info string
    metadata : dict, default = empty dict
        Code block metadata (``info_string`` holds the raw fence info)

    """

    content: str
    language: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Quoted blocks introduced by ``>``.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the quote

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """Bullet or numbered list.

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Starting number for ordered lists
    tight : bool, default = True
        False when blank lines separate the items

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """One list entry holding block content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the list item
    task_status : {'checked', 'unchecked'} or None, default = None
        Checkbox state of a ``- [x]`` task item

    """

    children: list[Node] = field(default_factory=list)
    task_status: Optional[Literal["checked", "unchecked"]] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """GFM pipe table.

    Rows may have differing cell counts; no column validation happens here.

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Table rows (excluding header)
    header : TableRow or None, default = None
        Optional header row
    alignments : list, default = empty list
        Column alignments ('left', 'center', 'right', or None)
    caption : str or None, default = None
        Optional table caption

    """

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    alignments: list[Alignment | None] = field(default_factory=list)
    caption: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """One row of a pipe table.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells in this row
    is_header : bool, default = False
        Whether this is a header row

    """

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """One cell of a pipe table.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline content of the cell
    colspan : int, default = 1
        Number of columns this cell spans
    rowspan : int, default = 1
        Number of rows this cell spans
    alignment : {'left', 'center', 'right'} or None, default = None
        Cell alignment

    """

    content: list[Node] = field(default_factory=list)
    colspan: int = 1
    rowspan: int = 1
    alignment: Alignment | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table_cell(self)


@dataclass
class FrontMatter(Node):
    """Front-matter block holding document metadata.

    The block maps each key to an ordered list of values. Keys are
    case-sensitive and keep their source order; a key may map to an empty
    list.

    Parameters
    ----------
    data : dict of str to list, default = empty dict
        Front-matter values keyed by name
    metadata : dict, default = empty dict
        Node metadata (``format`` records the front-matter syntax)

    Examples
    --------
    >>> header = FrontMatter(data={"author": ["Jane Doe"], "keyword": ["dita", "markdown"]})
    >>> header.data["keyword"]
    ['dita', 'markdown']

    """

    data: FrontMatterData = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_front_matter(self)


@dataclass
class ThematicBreak(Node):
    """A ``---`` or ``***`` rule between blocks."""

    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_thematic_break(self)


@dataclass
class HTMLBlock(Node):
    """Raw HTML block.

    The content is kept verbatim. Serializers decide how raw markup surfaces
    in their output.

    Parameters
    ----------
    content : str
        Raw HTML content
    metadata : dict, default = empty dict
        HTML block metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_html_block(self)


@dataclass
class Comment(Node):
    """HTML comment standing alone as a block.

    Parameters
    ----------
    content : str
        Comment text content
    metadata : dict, default = empty dict
        Comment metadata (``comment_type`` records the origin)

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_comment(self)


@dataclass
class DefinitionTerm(Node):
    """Term in a definition list.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline content of the term

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_definition_term(self)


@dataclass
class DefinitionDescription(Node):
    """Description attached to a definition term.

    Parameters
    ----------
    content : list of Node, default = empty list
        Block or inline content of the description

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_definition_description(self)


@dataclass
class DefinitionList(Node):
    """Definition list: each term followed by its descriptions.

    Parameters
    ----------
    items : list of tuple, default = empty list
        List of (DefinitionTerm, list[DefinitionDescription]) tuples

    """

    items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_definition_list(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Literal text with Markdown escapes already resolved.

    Parameters
    ----------
    content : str
        Text content, unescaped

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """``*emphasis*``, rendered in italics.

    Parameters
    ----------
    content : list of Node, default = empty list
        Emphasized inline nodes

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """``**strong**`` emphasis, rendered in bold.

    Parameters
    ----------
    content : list of Node, default = empty list
        Strongly emphasized inline nodes

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """``~~struck~~`` text."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_strikethrough(self)


@dataclass
class Underline(Node):
    """``^^underlined^^`` text, only with extended inline syntax on."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_underline(self)


@dataclass
class Superscript(Node):
    """``^sup^`` text, only with extended inline syntax on."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_superscript(self)


@dataclass
class Subscript(Node):
    """``~sub~`` text, only with extended inline syntax on."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_subscript(self)


@dataclass
class Code(Node):
    """Backtick code span.

    Parameters
    ----------
    content : str
        Code text

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Inline or reference link.

    Parameters
    ----------
    url : str
        Link destination URL
    content : list of Node, default = empty list
        Inline nodes representing link text
    title : str or None, default = None
        Quoted title after the destination

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Inline image.

    Parameters
    ----------
    url : str
        Image source URL
    alt_text : str, default = ''
        Alternative text description
    title : str or None, default = None
        Quoted title after the source

    """

    url: str
    alt_text: str = ""
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_image(self)


@dataclass
class LineBreak(Node):
    """Hard or soft line break inside inline content.

    Parameters
    ----------
    soft : bool, default = False
        True for soft breaks (newline in source), False for hard breaks

    """

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_line_break(self)


@dataclass
class HTMLInline(Node):
    """Raw HTML tag inside inline content.

    Parameters
    ----------
    content : str
        Raw HTML content

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_html_inline(self)


@dataclass
class CommentInline(Node):
    """HTML comment inside inline content.

    Parameters
    ----------
    content : str
        Comment text content

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_comment_inline(self)


# ============================================================================
# Helpers
# ============================================================================


def front_matter_from_mapping(mapping: Mapping[str, Any]) -> FrontMatterData:
    """Build front-matter data from a parsed key/value mapping.

    Scalars become single-element lists, sequences keep their items in
    order, and ``None`` becomes ``[None]``. Nested mappings are kept as a
    single value so the metadata serializer can treat them as malformed.

    Parameters
    ----------
    mapping : Mapping
        Parsed front matter, e.g. the result of ``yaml.load``

    Returns
    -------
    FrontMatterData
        Ordered mapping of string keys to value lists

    Examples
    --------
    >>> front_matter_from_mapping({"author": "Jane", "keyword": ["a", "b"], "empty": []})
    {'author': ['Jane'], 'keyword': ['a', 'b'], 'empty': []}

    """
    data: FrontMatterData = {}
    for key, value in mapping.items():
        if isinstance(value, (list, tuple)):
            data[str(key)] = list(value)
        else:
            data[str(key)] = [value]
    return data


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node in document order.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list for leaf nodes)

    """
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return list(node.children)

    if isinstance(
        node,
        (
            Heading,
            Paragraph,
            Emphasis,
            Strong,
            Strikethrough,
            Underline,
            Superscript,
            Subscript,
            Link,
            TableCell,
            DefinitionTerm,
            DefinitionDescription,
        ),
    ):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        children: list[Node] = []
        if node.header:
            children.append(node.header)
        children.extend(node.rows)
        return children

    if isinstance(node, TableRow):
        return list(node.cells)

    if isinstance(node, DefinitionList):
        dl_children: list[Node] = []
        for term, descriptions in node.items:
            dl_children.append(term)
            dl_children.extend(descriptions)
        return dl_children

    return []
