#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/renderers/dita.py
"""DITA rendering from AST.

This module converts md2dita document trees into DITA topics. The renderer
walks the tree in pre-order and pushes start-element, characters and
end-element events to a ``ContentSink``, followed by a single end-of-document
event. ``render_to_string`` and ``render`` feed those events into an lxml
tree builder and serialize the result as XML.

Topic structure
---------------
The document becomes one root ``topic``. Its first heading, when only front
matter precedes it, is the root title; every later heading closes the open
topics at the same or a deeper level and opens a nested ``topic``. Blocks at
topic level go into a ``body`` that is opened on first use. Headings inside
other blocks (quotes, list items) cannot open topics and become ``p``
elements with ``outputclass="h{level}"``.

Every node kind has an entry in ``RENDERING_RULES``. A node whose kind has
no entry stops serialization with ``UnmappedNodeError`` instead of being
dropped.

"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, Optional
from urllib.parse import urlparse

from md2dita import dita_classes
from md2dita.ast.nodes import (
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
)
from md2dita.ast.utils import extract_text
from md2dita.ast.visitors import NodeVisitor
from md2dita.constants import (
    ATTRIBUTE_NAME_FORMAT,
    ATTRIBUTE_NAME_HREF,
    ATTRIBUTE_NAME_ID,
    ATTRIBUTE_NAME_OUTPUTCLASS,
    ATTRIBUTE_NAME_SCOPE,
    DEFAULT_TOPIC_ID,
    IDENTIFIER_KEY,
    MARKDOWN_LINK_EXTENSIONS,
)
from md2dita.dita_classes import DitaClass
from md2dita.events import ContentSink
from md2dita.exceptions import RenderingError, UnmappedNodeError
from md2dita.options.dita import DitaRendererOptions
from md2dita.renderers.base import BaseRenderer
from md2dita.renderers.dita_metadata import MetadataSerializer
from md2dita.sinks import LxmlTreeSink
from md2dita.utils.io_utils import OutputType
from md2dita.utils.text import make_unique_slug, slugify

logger = logging.getLogger(__name__)

# Node kind -> DITA class of the element it produces. None marks text
# passthrough and kinds whose handler picks the element from node state.
RENDERING_RULES: Mapping[type[Node], Optional[DitaClass]] = MappingProxyType(
    {
        Document: dita_classes.TOPIC_TOPIC,
        Heading: None,
        Paragraph: dita_classes.TOPIC_P,
        BlockQuote: dita_classes.TOPIC_LQ,
        List: None,
        ListItem: dita_classes.TOPIC_LI,
        CodeBlock: dita_classes.PR_D_CODEBLOCK,
        Table: dita_classes.TOPIC_SIMPLETABLE,
        TableRow: None,
        TableCell: dita_classes.TOPIC_STENTRY,
        FrontMatter: dita_classes.TOPIC_PROLOG,
        ThematicBreak: dita_classes.TOPIC_P,
        HTMLBlock: dita_classes.TOPIC_REQUIRED_CLEANUP,
        Comment: dita_classes.TOPIC_DRAFT_COMMENT,
        DefinitionList: dita_classes.TOPIC_DL,
        DefinitionTerm: dita_classes.TOPIC_DT,
        DefinitionDescription: dita_classes.TOPIC_DD,
        Text: None,
        LineBreak: None,
        Emphasis: dita_classes.HI_D_I,
        Strong: dita_classes.HI_D_B,
        Underline: dita_classes.HI_D_U,
        Strikethrough: dita_classes.HI_D_LINE_THROUGH,
        Superscript: dita_classes.HI_D_SUP,
        Subscript: dita_classes.HI_D_SUB,
        Code: dita_classes.PR_D_CODEPH,
        Link: dita_classes.TOPIC_XREF,
        Image: dita_classes.TOPIC_IMAGE,
        HTMLInline: dita_classes.TOPIC_REQUIRED_CLEANUP,
        CommentInline: dita_classes.TOPIC_DRAFT_COMMENT,
    }
)

OUTPUTCLASS_THEMATIC_BREAK = "hr"
OUTPUTCLASS_TASK_CHECKED = "task-checked"
OUTPUTCLASS_TASK_UNCHECKED = "task-unchecked"
LINK_SCOPE_EXTERNAL = "external"
LINK_FORMAT_HTML = "html"
LINK_FORMAT_MARKDOWN = "markdown"


@dataclass
class _OpenTopic:
    level: int
    body_open: bool = False


class DitaRenderer(NodeVisitor, BaseRenderer):
    """Render AST to DITA topic events and XML.

    Parameters
    ----------
    options : DitaRendererOptions or None, default = None
        DITA rendering options

    Examples
    --------
    Push events to a sink:

        >>> from md2dita.sinks import RecordingSink
        >>> sink = RecordingSink()
        >>> DitaRenderer().serialize(doc, sink)

    Serialize to XML:

        >>> xml = DitaRenderer(DitaRendererOptions(pretty_print=False)).render_to_string(doc)

    Notes
    -----
    A renderer instance keeps per-call traversal state and must not be used
    by two threads at once. Options are immutable and can be shared.

    """

    def __init__(self, options: DitaRendererOptions | None = None):
        """Initialize the DITA renderer with options."""
        BaseRenderer._validate_options_type(options, DitaRendererOptions, "dita")
        options = options or DitaRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: DitaRendererOptions = options
        self._metadata_serializer = MetadataSerializer(identifier_from_metadata=options.identifier_from_metadata)
        self._reset_state(None)

    def _reset_state(self, sink: Optional[ContentSink]) -> None:
        self._sink = sink
        self._path: list[str] = []
        self._topics: list[_OpenTopic] = []
        self._seen_ids: dict[str, int] = {}
        self._document_name: Optional[str] = None

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def serialize(self, doc: Document, sink: ContentSink) -> None:
        """Push the DITA event stream for a document to a sink.

        Parameters
        ----------
        doc : Document
            Document tree to serialize; it is not modified
        sink : ContentSink
            Receiver of the events

        Raises
        ------
        UnmappedNodeError
            If the tree contains a node kind without a rendering rule. Events
            pushed before the error must be discarded by the caller.
        RenderingError
            If the root node is not a Document

        """
        if not isinstance(doc, Document):
            raise RenderingError(
                f"Root node must be a Document, got {type(doc).__name__}", rendering_stage="dispatch"
            )

        self._reset_state(sink)
        source = doc.metadata.get("source")
        self._document_name = str(source) if source else None
        logger.debug(f"Serializing {self._document_name or 'document'} to DITA")
        try:
            self._visit(doc)
            sink.end_document()
        finally:
            topic_count = len(self._seen_ids)
            self._reset_state(None)
        logger.debug(f"Serialized {topic_count} topic(s)")

    def render_to_string(self, doc: Document) -> str:
        """Render the document as a DITA XML string.

        Parameters
        ----------
        doc : Document
            Document tree to render

        Returns
        -------
        str
            DITA topic XML

        """
        return self.render_to_bytes(doc).decode(self.options.output_encoding)

    def render_to_bytes(self, doc: Document) -> bytes:
        """Render the document as encoded DITA XML."""
        sink = LxmlTreeSink()
        self.serialize(doc, sink)
        return sink.to_bytes(
            encoding=self.options.output_encoding,
            xml_declaration=self.options.xml_declaration,
            doctype=self.options.doctype,
            pretty_print=self.options.pretty_print,
        )

    def render(self, doc: Document, output: OutputType) -> None:
        """Render the document as DITA XML to a file path or stream.

        Parameters
        ----------
        doc : Document
            Document tree to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination

        """
        self.write_output(self.render_to_bytes(doc), output, encoding=self.options.output_encoding)

    # ------------------------------------------------------------------
    # Dispatch and event helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _node_scope(self, node: Node) -> Iterator[Optional[DitaClass]]:
        """Look up the rendering rule for a node and track its path."""
        node_type = type(node)
        self._path.append(node_type.__name__)
        if node_type not in RENDERING_RULES:
            line = node.source_location.line if node.source_location is not None else None
            raise UnmappedNodeError(node_type.__name__, list(self._path), document=self._document_name, line=line)
        try:
            yield RENDERING_RULES[node_type]
        finally:
            self._path.pop()

    def _visit(self, node: Node) -> None:
        with self._node_scope(node):
            node.accept(self)

    def _visit_all(self, nodes: list[Node]) -> None:
        for node in nodes:
            self._visit(node)

    def _start(self, class_tag: DitaClass, attributes: Optional[dict[str, str]] = None) -> None:
        assert self._sink is not None
        self._sink.start_element(class_tag.local_name, class_tag, attributes or {})

    def _end(self, class_tag: DitaClass) -> None:
        assert self._sink is not None
        self._sink.end_element(class_tag.local_name)

    def _characters(self, text: str) -> None:
        assert self._sink is not None
        if text:
            self._sink.characters(text)

    def _wrap(self, node: Node, children: list[Node], attributes: Optional[dict[str, str]] = None) -> None:
        class_tag = RENDERING_RULES[type(node)]
        assert class_tag is not None
        self._start(class_tag, attributes)
        self._visit_all(children)
        self._end(class_tag)

    def _wrap_text(self, node: Node, text: str) -> None:
        class_tag = RENDERING_RULES[type(node)]
        assert class_tag is not None
        self._start(class_tag)
        self._characters(text)
        self._end(class_tag)

    # ------------------------------------------------------------------
    # Topic structure
    # ------------------------------------------------------------------

    def _root_identifier(self, doc: Document) -> str:
        if self.options.identifier_from_metadata:
            for child in doc.children:
                if isinstance(child, FrontMatter) and child.data.get(IDENTIFIER_KEY):
                    value = child.data[IDENTIFIER_KEY][0]
                    if value is not None and str(value).strip():
                        return str(value).strip()
        for child in doc.children:
            if isinstance(child, Heading):
                return slugify(extract_text(child.content, joiner=""))
        return DEFAULT_TOPIC_ID

    def _ensure_body(self) -> None:
        topic = self._topics[-1]
        if not topic.body_open:
            self._start(dita_classes.TOPIC_BODY)
            topic.body_open = True

    def _close_body(self, topic: _OpenTopic) -> None:
        if topic.body_open:
            self._end(dita_classes.TOPIC_BODY)
            topic.body_open = False

    def _close_topic(self) -> None:
        topic = self._topics.pop()
        self._close_body(topic)
        self._end(dita_classes.TOPIC_TOPIC)

    def _write_title(self, heading: Heading) -> None:
        self._start(dita_classes.TOPIC_TITLE)
        self._visit_all(heading.content)
        self._end(dita_classes.TOPIC_TITLE)

    def _write_section_front_matter(self, nodes: list[Node], start: int) -> None:
        """Write every front matter node from ``start`` up to the next heading."""
        for child in nodes[start:]:
            if isinstance(child, Heading):
                break
            if isinstance(child, FrontMatter):
                self._visit(child)

    def _open_section(self, heading: Heading) -> None:
        """Open a nested topic for a heading below the root title."""
        while len(self._topics) > 1 and self._topics[-1].level >= heading.level:
            self._close_topic()
        self._close_body(self._topics[-1])

        topic_id = make_unique_slug(slugify(extract_text(heading.content, joiner="")), self._seen_ids)
        self._start(dita_classes.TOPIC_TOPIC, {ATTRIBUTE_NAME_ID: topic_id})
        self._topics.append(_OpenTopic(level=heading.level))
        self._write_title(heading)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render the document as the root topic and its nested topics."""
        root_id = self._root_identifier(node)
        self._seen_ids[root_id] = 1
        self._start(dita_classes.TOPIC_TOPIC, {ATTRIBUTE_NAME_ID: root_id})
        self._topics.append(_OpenTopic(level=0))

        children = node.children
        first_content = next((i for i, child in enumerate(children) if not isinstance(child, FrontMatter)), None)
        titled = first_content is not None and isinstance(children[first_content], Heading)

        if titled:
            assert first_content is not None
            heading = children[first_content]
            assert isinstance(heading, Heading)
            with self._node_scope(heading):
                self._write_title(heading)
            self._topics[0].level = heading.level
            remaining = children[:first_content] + children[first_content + 1 :]
        else:
            self._start(dita_classes.TOPIC_TITLE)
            self._end(dita_classes.TOPIC_TITLE)
            remaining = list(children)

        # The prolog sits between title and body, so each topic's front matter
        # is written as soon as its title is
        self._write_section_front_matter(remaining, 0)
        for index, child in enumerate(remaining):
            if isinstance(child, Heading):
                with self._node_scope(child):
                    self._open_section(child)
                self._write_section_front_matter(remaining, index + 1)
            elif not isinstance(child, FrontMatter):
                self._ensure_body()
                self._visit(child)

        while self._topics:
            self._close_topic()

    def visit_front_matter(self, node: FrontMatter) -> None:
        """Render front matter as the topic prolog."""
        self._start(dita_classes.TOPIC_PROLOG)
        assert self._sink is not None
        self._metadata_serializer.write(node.data, self._sink)
        self._end(dita_classes.TOPIC_PROLOG)

    def visit_heading(self, node: Heading) -> None:
        """Render a heading nested inside another block as a paragraph."""
        self._start(dita_classes.TOPIC_P, {ATTRIBUTE_NAME_OUTPUTCLASS: f"h{node.level}"})
        self._visit_all(node.content)
        self._end(dita_classes.TOPIC_P)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a paragraph."""
        self._wrap(node, node.content)

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a code block, tagging its language in ``outputclass``."""
        attributes = {ATTRIBUTE_NAME_OUTPUTCLASS: f"language-{node.language}"} if node.language else None
        self._start(dita_classes.PR_D_CODEBLOCK, attributes)
        self._characters(node.content)
        self._end(dita_classes.PR_D_CODEBLOCK)

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a block quote."""
        self._wrap(node, node.children)

    def visit_list(self, node: List) -> None:
        """Render an ordered or unordered list."""
        class_tag = dita_classes.TOPIC_OL if node.ordered else dita_classes.TOPIC_UL
        self._start(class_tag)
        self._visit_all(list(node.items))
        self._end(class_tag)

    def visit_list_item(self, node: ListItem) -> None:
        """Render a list item, marking task items by their status."""
        attributes = None
        if node.task_status == "checked":
            attributes = {ATTRIBUTE_NAME_OUTPUTCLASS: OUTPUTCLASS_TASK_CHECKED}
        elif node.task_status == "unchecked":
            attributes = {ATTRIBUTE_NAME_OUTPUTCLASS: OUTPUTCLASS_TASK_UNCHECKED}
        self._wrap(node, node.children, attributes)

    def visit_table(self, node: Table) -> None:
        """Render a table as a simpletable.

        Rows are written as they are; differing cell counts are not checked.
        """
        rows: list[Node] = []
        if node.header is not None:
            rows.append(node.header)
        rows.extend(node.rows)
        self._wrap(node, rows)

    def visit_table_row(self, node: TableRow) -> None:
        """Render a header row as sthead and any other row as strow."""
        class_tag = dita_classes.TOPIC_STHEAD if node.is_header else dita_classes.TOPIC_STROW
        self._start(class_tag)
        self._visit_all(list(node.cells))
        self._end(class_tag)

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a table cell."""
        self._wrap(node, node.content)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a thematic break as an empty marker paragraph."""
        self._start(dita_classes.TOPIC_P, {ATTRIBUTE_NAME_OUTPUTCLASS: OUTPUTCLASS_THEMATIC_BREAK})
        self._end(dita_classes.TOPIC_P)

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render raw HTML as text flagged for cleanup."""
        self._wrap_text(node, node.content)

    def visit_comment(self, node: Comment) -> None:
        """Render a comment as a draft comment."""
        self._wrap_text(node, node.content)

    def visit_definition_list(self, node: DefinitionList) -> None:
        """Render a definition list; each term and its descriptions form a dlentry."""
        self._start(dita_classes.TOPIC_DL)
        for term, descriptions in node.items:
            self._start(dita_classes.TOPIC_DLENTRY)
            self._visit(term)
            self._visit_all(list(descriptions))
            self._end(dita_classes.TOPIC_DLENTRY)
        self._end(dita_classes.TOPIC_DL)

    def visit_definition_term(self, node: DefinitionTerm) -> None:
        """Render a definition term."""
        self._wrap(node, node.content)

    def visit_definition_description(self, node: DefinitionDescription) -> None:
        """Render a definition description."""
        self._wrap(node, node.content)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Pass text through as characters."""
        self._characters(node.content)

    def visit_line_break(self, node: LineBreak) -> None:
        """Render hard and soft breaks as a newline."""
        self._characters("\n")

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render emphasis as italic."""
        self._wrap(node, node.content)

    def visit_strong(self, node: Strong) -> None:
        """Render strong emphasis as bold."""
        self._wrap(node, node.content)

    def visit_underline(self, node: Underline) -> None:
        """Render underline."""
        self._wrap(node, node.content)

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render strikethrough as line-through."""
        self._wrap(node, node.content)

    def visit_superscript(self, node: Superscript) -> None:
        """Render superscript."""
        self._wrap(node, node.content)

    def visit_subscript(self, node: Subscript) -> None:
        """Render subscript."""
        self._wrap(node, node.content)

    def visit_code(self, node: Code) -> None:
        """Render inline code as codeph."""
        self._wrap_text(node, node.content)

    def visit_link(self, node: Link) -> None:
        """Render a link as an xref.

        Absolute URLs are marked external HTML targets and links to Markdown
        files keep ``format="markdown"`` so they can be resolved to the
        converted topics later. The link title is not written.
        """
        self._wrap(node, node.content, self._link_attributes(node.url))

    @staticmethod
    def _link_attributes(url: str) -> dict[str, str]:
        attributes = {ATTRIBUTE_NAME_HREF: url}
        parsed = urlparse(url)
        # A one-letter scheme is a Windows drive, not a URL
        if len(parsed.scheme) > 1:
            attributes[ATTRIBUTE_NAME_SCOPE] = LINK_SCOPE_EXTERNAL
            attributes[ATTRIBUTE_NAME_FORMAT] = LINK_FORMAT_HTML
        elif parsed.path.lower().endswith(MARKDOWN_LINK_EXTENSIONS):
            attributes[ATTRIBUTE_NAME_FORMAT] = LINK_FORMAT_MARKDOWN
        return attributes

    def visit_image(self, node: Image) -> None:
        """Render an image with its alt text as an ``alt`` child."""
        self._start(dita_classes.TOPIC_IMAGE, {ATTRIBUTE_NAME_HREF: node.url})
        if node.alt_text:
            self._start(dita_classes.TOPIC_ALT)
            self._characters(node.alt_text)
            self._end(dita_classes.TOPIC_ALT)
        self._end(dita_classes.TOPIC_IMAGE)

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render inline raw HTML as text flagged for cleanup."""
        self._wrap_text(node, node.content)

    def visit_comment_inline(self, node: CommentInline) -> None:
        """Render an inline comment as a draft comment."""
        self._wrap_text(node, node.content)


__all__ = [
    "DitaRenderer",
    "RENDERING_RULES",
]
