#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/sinks.py
"""Content sinks for DITA event streams.

Three sinks are provided:

- ``RecordingSink`` keeps every event in a list, for inspection and replay.
- ``WellFormedSink`` checks the stream is balanced before forwarding it to
  another sink.
- ``LxmlTreeSink`` builds an lxml element tree and serializes it as XML.

"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Optional

from lxml import etree

from md2dita.constants import ATTRIBUTE_NAME_CLASS, DEFAULT_OUTPUT_ENCODING
from md2dita.dita_classes import BLOCK_CONTAINERS, INLINE_PHRASES, DitaClass
from md2dita.events import Characters, ContentSink, EndDocument, EndElement, Event, StartElement
from md2dita.exceptions import RenderingError

logger = logging.getLogger(__name__)

_INDENT = "  "
_BLOCK_CONTAINER_VALUES = frozenset(str(dita_class) for dita_class in BLOCK_CONTAINERS)
_INLINE_PHRASE_VALUES = frozenset(str(dita_class) for dita_class in INLINE_PHRASES)


def _indent_block_containers(element: etree._Element, level: int = 0) -> None:
    """Indent the children of block containers, in place.

    Whitespace is added only inside elements whose class is a block container
    and whose content is elements alone. Mixed content keeps its text exactly
    as built.

    """
    children = list(element)
    if not children or element.get(ATTRIBUTE_NAME_CLASS) not in _BLOCK_CONTAINER_VALUES:
        return
    if element.text or any(child.tail for child in children):
        return
    if any(child.get(ATTRIBUTE_NAME_CLASS) in _INLINE_PHRASE_VALUES for child in children):
        return
    child_indent = "\n" + _INDENT * (level + 1)
    element.text = child_indent
    for child in children:
        child.tail = child_indent
        _indent_block_containers(child, level + 1)
    children[-1].tail = "\n" + _INDENT * level


class RecordingSink(ContentSink):
    """Sink that records events in arrival order.

    Examples
    --------
    >>> from md2dita.ast import Document, Heading, Paragraph, Text
    >>> from md2dita.renderers.dita import DitaRenderer
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Notes")]),
    ...     Paragraph(content=[Text(content="Hello")]),
    ... ])
    >>> sink = RecordingSink()
    >>> DitaRenderer().serialize(doc, sink)
    >>> [e.name for e in sink.events if isinstance(e, StartElement)]
    ['topic', 'title', 'body', 'p']

    """

    def __init__(self) -> None:
        """Initialize with an empty event list."""
        self.events: list[Event] = []

    def start_element(self, name: str, class_tag: DitaClass, attributes: Mapping[str, str]) -> None:
        """Record a start-element event."""
        self.events.append(StartElement(name, class_tag, dict(attributes)))

    def characters(self, text: str) -> None:
        """Record a characters event."""
        self.events.append(Characters(text))

    def end_element(self, name: str) -> None:
        """Record an end-element event."""
        self.events.append(EndElement(name))

    def end_document(self) -> None:
        """Record the end-of-document event."""
        self.events.append(EndDocument())

    def replay(self, sink: ContentSink) -> None:
        """Push every recorded event to another sink.

        Parameters
        ----------
        sink : ContentSink
            Sink receiving the recorded stream

        """
        for event in self.events:
            sink.push(event)

    @property
    def element_names(self) -> list[str]:
        """Names of started elements, in order."""
        return [event.name for event in self.events if isinstance(event, StartElement)]


class WellFormedSink(ContentSink):
    """Sink that enforces a balanced event stream.

    Every event is checked before it is forwarded to the delegate sink. The
    stream must have a single root element, every end event must match the
    innermost open element, and nothing may follow ``end_document``.

    Parameters
    ----------
    delegate : ContentSink or None, default = None
        Sink receiving the checked events. When None, events are only checked.

    Raises
    ------
    RenderingError
        On the first event that would make the stream malformed

    """

    def __init__(self, delegate: Optional[ContentSink] = None) -> None:
        """Initialize the checker with an empty element stack."""
        self._delegate = delegate
        self._stack: list[str] = []
        self._root_closed = False
        self._finished = False

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._stack)

    @property
    def finished(self) -> bool:
        """Whether ``end_document`` has been received."""
        return self._finished

    def _check_open(self, event_kind: str) -> None:
        if self._finished:
            raise RenderingError(f"{event_kind} received after end of document", rendering_stage="sink")

    def start_element(self, name: str, class_tag: DitaClass, attributes: Mapping[str, str]) -> None:
        """Check and forward a start-element event."""
        self._check_open("start_element")
        if self._root_closed:
            raise RenderingError(f"Second root element <{name}> started", rendering_stage="sink")
        if ATTRIBUTE_NAME_CLASS in attributes:
            raise RenderingError(
                f"Element <{name}> passes '{ATTRIBUTE_NAME_CLASS}' as an ordinary attribute", rendering_stage="sink"
            )
        self._stack.append(name)
        if self._delegate is not None:
            self._delegate.start_element(name, class_tag, attributes)

    def characters(self, text: str) -> None:
        """Check and forward a characters event."""
        self._check_open("characters")
        if not self._stack:
            raise RenderingError("Characters outside of the root element", rendering_stage="sink")
        if self._delegate is not None:
            self._delegate.characters(text)

    def end_element(self, name: str) -> None:
        """Check and forward an end-element event."""
        self._check_open("end_element")
        if not self._stack:
            raise RenderingError(f"End of <{name}> without a matching start", rendering_stage="sink")
        expected = self._stack.pop()
        if expected != name:
            raise RenderingError(f"End of <{name}> while <{expected}> is open", rendering_stage="sink")
        if not self._stack:
            self._root_closed = True
        if self._delegate is not None:
            self._delegate.end_element(name)

    def end_document(self) -> None:
        """Check and forward the end-of-document event."""
        self._check_open("end_document")
        if self._stack:
            raise RenderingError(
                f"End of document with unclosed elements: {', '.join(self._stack)}", rendering_stage="sink"
            )
        self._finished = True
        if self._delegate is not None:
            self._delegate.end_document()


class LxmlTreeSink(ContentSink):
    """Sink that builds an lxml element tree from the event stream.

    The ``class`` attribute is written first on every element, followed by
    the event's attributes in emission order. Text is escaped by lxml when
    the tree is serialized.

    Examples
    --------
    >>> from md2dita.ast import Document, Paragraph, Text
    >>> from md2dita.renderers.dita import DitaRenderer
    >>> sink = LxmlTreeSink()
    >>> DitaRenderer().serialize(Document(children=[Paragraph(content=[Text(content="Hi")])]), sink)
    >>> sink.root.tag
    'topic'

    """

    def __init__(self) -> None:
        """Initialize with a fresh tree builder."""
        self._builder = etree.TreeBuilder()
        self._root: Optional[etree._Element] = None

    @property
    def root(self) -> etree._Element:
        """Root element of the completed tree.

        Raises
        ------
        RenderingError
            If ``end_document`` has not been received yet

        """
        if self._root is None:
            raise RenderingError("Element tree requested before end of document", rendering_stage="sink")
        return self._root

    def start_element(self, name: str, class_tag: DitaClass, attributes: Mapping[str, str]) -> None:
        """Open an element in the tree builder."""
        attrs = {ATTRIBUTE_NAME_CLASS: str(class_tag)}
        attrs.update(attributes)
        try:
            self._builder.start(name, attrs)
        except ValueError as e:
            raise RenderingError(f"Cannot start <{name}>: {e}", rendering_stage="sink", original_error=e) from e

    def characters(self, text: str) -> None:
        """Append text to the current element."""
        try:
            self._builder.data(text)
        except ValueError as e:
            raise RenderingError(f"Cannot add text: {e}", rendering_stage="sink", original_error=e) from e

    def end_element(self, name: str) -> None:
        """Close the current element."""
        # lxml validates buffered text when the element is closed
        try:
            self._builder.end(name)
        except ValueError as e:
            raise RenderingError(f"Cannot close <{name}>: {e}", rendering_stage="sink", original_error=e) from e

    def end_document(self) -> None:
        """Finish the tree."""
        self._root = self._builder.close()

    def to_bytes(
        self,
        encoding: str = DEFAULT_OUTPUT_ENCODING,
        xml_declaration: bool = True,
        doctype: Optional[str] = None,
        pretty_print: bool = True,
    ) -> bytes:
        """Serialize the completed tree.

        Parameters
        ----------
        encoding : str, default = "utf-8"
            Output encoding
        xml_declaration : bool, default = True
            Whether to write an XML declaration
        doctype : str or None, default = None
            DOCTYPE declaration to write before the root element
        pretty_print : bool, default = True
            Whether to indent block containers such as ``body`` and ``ul``.
            Elements with text content are never re-indented.

        Returns
        -------
        bytes
            Serialized XML document

        """
        root = self.root
        if pretty_print:
            root = copy.deepcopy(root)
            _indent_block_containers(root)
        tree = etree.ElementTree(root)
        kwargs: dict[str, object] = {"encoding": encoding, "xml_declaration": xml_declaration}
        if doctype:
            kwargs["doctype"] = doctype
        output = etree.tostring(tree, **kwargs)
        logger.debug(f"Serialized DITA tree: {len(output)} bytes ({encoding})")
        return output


__all__ = [
    "LxmlTreeSink",
    "RecordingSink",
    "WellFormedSink",
]
