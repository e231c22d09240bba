#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_serializer_properties.py
"""Property-based tests for the DITA serializer.

Documents are generated directly as AST trees, so the properties hold for
any tree the parser could build and for hand-built trees alike.
"""

import copy

import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import assert_balanced, record_events, text_of

from md2dita.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    FrontMatter,
    Heading,
    List,
    ListItem,
    Node,
    Paragraph,
    Strong,
    Text,
    get_node_children,
)
from md2dita.events import EndElement, StartElement
from md2dita.options import MarkdownParserOptions
from md2dita.parsers.markdown import markdown_to_ast
from md2dita.renderers.dita import DitaRenderer
from md2dita.sinks import RecordingSink, WellFormedSink

_text = st.text(alphabet="abc XYZ019<&>\"'-éß漢", max_size=12)
_inline = st.one_of(
    st.builds(Text, content=_text),
    st.builds(Code, content=_text),
    st.builds(Strong, content=st.lists(st.builds(Text, content=_text), max_size=2)),
)
_paragraph = st.builds(Paragraph, content=st.lists(_inline, max_size=3))
_heading = st.builds(
    Heading, level=st.integers(min_value=1, max_value=6), content=st.lists(st.builds(Text, content=_text), max_size=2)
)
_code_block = st.builds(CodeBlock, content=_text, language=st.one_of(st.none(), st.sampled_from(["python", "bash"])))
_list = st.builds(
    List,
    ordered=st.booleans(),
    items=st.lists(st.builds(ListItem, children=st.lists(_paragraph, max_size=2)), max_size=3),
)
_quote = st.builds(BlockQuote, children=st.lists(_paragraph, max_size=2))
_block = st.one_of(_heading, _paragraph, _code_block, _list, _quote)
_front_matter = st.builds(
    FrontMatter,
    data=st.dictionaries(
        st.sampled_from(["author", "keyword", "audience", "permissions", "product", "id"]),
        st.lists(_text, max_size=2),
        max_size=4,
    ),
)

_documents_without_metadata = st.builds(Document, children=st.lists(_block, max_size=8))


@st.composite
def _documents(draw):
    children = draw(st.lists(_block, max_size=8))
    if draw(st.booleans()):
        children.insert(0, draw(_front_matter))
    if children and draw(st.booleans()):
        children.insert(draw(st.integers(min_value=0, max_value=len(children))), draw(_front_matter))
    return Document(children=children)


def _source_text(node: Node) -> str:
    if isinstance(node, (Text, Code, CodeBlock)):
        return node.content
    return "".join(_source_text(child) for child in get_node_children(node))


@pytest.mark.unit
@pytest.mark.fuzzing
class TestSerializerProperties:
    """Properties of the serializer event stream."""

    @given(_documents())
    def test_stream_balanced(self, doc):
        """Test that every stream nests and ends with end_document."""
        assert_balanced(record_events(doc))

    @given(_documents())
    def test_stream_accepted_by_checker(self, doc):
        """Test that the checking sink accepts every stream."""
        checker = WellFormedSink(RecordingSink())
        DitaRenderer().serialize(doc, checker)

        assert checker.finished

    @given(_documents())
    def test_deterministic(self, doc):
        """Test that serializing twice, with one renderer, gives identical streams."""
        renderer = DitaRenderer()
        first = RecordingSink()
        second = RecordingSink()
        renderer.serialize(doc, first)
        renderer.serialize(doc, second)

        assert first.events == second.events

    @given(_documents())
    def test_document_not_modified(self, doc):
        """Test that serialization leaves the tree unchanged."""
        before = copy.deepcopy(doc)
        record_events(doc)

        assert doc == before

    @given(_documents())
    def test_single_topic_root(self, doc):
        """Test that the stream has exactly one root, a topic."""
        events = record_events(doc)

        assert isinstance(events[0], StartElement)
        assert events[0].name == "topic"
        assert events[-2].name == "topic"

    @given(_documents())
    def test_ids_unique(self, doc):
        """Test that topic identifiers never repeat."""
        ids = [
            event.attributes["id"]
            for event in record_events(doc)
            if isinstance(event, StartElement) and "id" in event.attributes
        ]

        assert len(ids) == len(set(ids))

    @given(_documents())
    def test_prolog_is_topic_child(self, doc):
        """Test that wherever front matter sits, its prolog is a direct child of a topic."""
        open_names: list[str] = []
        for event in record_events(doc):
            if isinstance(event, StartElement):
                if event.name == "prolog":
                    assert open_names[-1] == "topic"
                open_names.append(event.name)
            elif isinstance(event, EndElement):
                open_names.pop()

    @given(_documents_without_metadata)
    def test_text_preserved_in_order(self, doc):
        """Test that all text reaches the stream in document order."""
        assert text_of(record_events(doc)) == _source_text(doc)


_markdown_alphabet = st.sampled_from(list("#*_-`>|[]()!~^:+ .1aZ\n"))


@pytest.mark.unit
@pytest.mark.fuzzing
class TestMarkdownRoundTripProperties:
    """Properties of parsed Markdown input."""

    @given(st.text(alphabet=_markdown_alphabet, max_size=80))
    def test_any_markdown_serializes(self, text):
        """Test that any parsed Markdown yields a balanced stream."""
        doc = markdown_to_ast(text, MarkdownParserOptions(parse_frontmatter=False))

        assert_balanced(record_events(doc))
