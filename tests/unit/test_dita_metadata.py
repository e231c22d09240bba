#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_dita_metadata.py
"""Unit tests for front-matter to prolog metadata serialization."""

import datetime
import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from md2dita import dita_classes
from md2dita.events import Characters, EndElement, StartElement
from md2dita.renderers.dita_metadata import BASE_KNOWN_KEYS, MetadataSerializer
from md2dita.sinks import RecordingSink, WellFormedSink


def _write(header: dict, identifier_from_metadata: bool = False) -> RecordingSink:
    sink = RecordingSink()
    MetadataSerializer(identifier_from_metadata).write(header, sink)
    return sink


def _data_pairs(sink: RecordingSink) -> list[tuple[str, str]]:
    return [
        (event.attributes["name"], event.attributes["value"])
        for event in sink.events
        if isinstance(event, StartElement) and event.name == "data"
    ]


@pytest.mark.unit
class TestOrdering:
    """Test the fixed output order of prolog metadata."""

    def test_full_header_order(self, front_matter_header):
        """Test the order of every step for a mixed header."""
        sink = _write(front_matter_header)

        assert sink.element_names == [
            "author",
            "author",
            "permissions",
            "metadata",
            "category",
            "keywords",
            "keyword",
            "keyword",
            "resourceid",
            "data",
            "data",
        ]

    def test_order_independent_of_key_order(self, front_matter_header):
        """Test that reordering the header does not change the output."""
        reversed_header = dict(reversed(list(front_matter_header.items())))

        assert _write(reversed_header).events == _write(front_matter_header).events

    def test_unknown_keys_sorted(self):
        """Test that unknown keys are written in code-point order."""
        sink = _write({"zeta": ["1"], "author": ["Jane"], "alpha": ["2"]})

        assert sink.element_names == ["author", "data", "data"]
        assert _data_pairs(sink) == [("alpha", "2"), ("zeta", "1")]

    def test_code_point_order_puts_uppercase_first(self):
        """Test that sorting is by code point, not case-insensitive."""
        serializer = MetadataSerializer()

        assert serializer.unknown_keys({"b": [], "B": [], "a": []}) == ["B", "a", "b"]

    def test_multiple_values_keep_order(self):
        """Test that values of one key keep their source order."""
        sink = _write({"tag": ["second", "first"]})

        assert _data_pairs(sink) == [("tag", "second"), ("tag", "first")]


@pytest.mark.unit
class TestValuePlacement:
    """Test text-valued and attribute-valued elements."""

    @pytest.mark.parametrize("key", ["author", "source", "publisher"])
    def test_text_valued_keys(self, key):
        """Test that these keys are written as element text."""
        sink = _write({key: ["value"]})

        assert sink.events == [
            StartElement(key, getattr(dita_classes, f"TOPIC_{key.upper()}"), {}),
            Characters("value"),
            EndElement(key),
        ]

    @pytest.mark.parametrize(
        "key,attribute",
        [("permissions", "view"), ("resourceid", "appid")],
    )
    def test_attribute_valued_keys(self, key, attribute):
        """Test that these keys are written as attributes of empty elements."""
        sink = _write({key: ["internal"]})

        assert sink.events[0].attributes == {attribute: "internal"}
        assert sink.events[1] == EndElement(key)

    def test_audience_is_attribute_valued(self):
        """Test that audience is written as an attribute inside the group."""
        sink = _write({"audience": ["admin"]})

        assert sink.element_names == ["metadata", "audience"]
        assert sink.events[1].attributes == {"audience": "admin"}
        assert sink.events[2] == EndElement("audience")

    def test_category_and_keyword_are_text_valued(self):
        """Test category and keyword text inside the group."""
        sink = _write({"category": ["guides"], "keyword": ["dita"]})

        texts = [event.text for event in sink.events if isinstance(event, Characters)]
        assert texts == ["guides", "dita"]

    def test_data_element_is_empty(self):
        """Test that data elements carry their value as an attribute only."""
        sink = _write({"product": ["widget"]})

        assert sink.events == [
            StartElement("data", dita_classes.TOPIC_DATA, {"name": "product", "value": "widget"}),
            EndElement("data"),
        ]

    def test_class_tokens(self, front_matter_header):
        """Test that each element carries the class token matching its name."""
        sink = _write(front_matter_header)

        for event in sink.events:
            if isinstance(event, StartElement):
                assert event.class_tag.local_name == event.name


@pytest.mark.unit
class TestGroupWrapper:
    """Test when the metadata group is written."""

    @pytest.mark.parametrize("key", ["audience", "category", "keyword"])
    def test_group_present_for_group_keys(self, key):
        """Test that any single group key opens the group."""
        sink = _write({key: ["x"]})

        assert sink.element_names[0] == "metadata"

    def test_group_absent_without_group_keys(self):
        """Test that other keys never open the group."""
        sink = _write({"author": ["Jane"], "permissions": ["all"], "resourceid": ["r"], "extra": ["e"]})

        assert "metadata" not in sink.element_names

    def test_keywords_wrapper_only_with_keyword(self):
        """Test that the keywords wrapper needs the keyword key."""
        sink = _write({"category": ["guides"]})

        assert "keywords" not in sink.element_names


@pytest.mark.unit
class TestValueConversion:
    """Test conversion of front-matter values to strings."""

    def test_none_is_empty_text(self):
        """Test that a null text value gives an element with no characters."""
        sink = _write({"author": [None]})

        assert sink.events == [StartElement("author", dita_classes.TOPIC_AUTHOR, {}), EndElement("author")]

    def test_none_is_empty_attribute(self):
        """Test that a null attribute value gives an empty attribute."""
        sink = _write({"permissions": [None], "misc": [None]})

        assert sink.events[0].attributes == {"view": ""}
        assert _data_pairs(sink) == [("misc", "")]

    def test_scalars_are_stringified(self):
        """Test booleans, numbers and dates."""
        sink = _write({"version": [1.5], "draft": [True], "published": [datetime.date(2024, 1, 2)], "count": [3]})

        assert _data_pairs(sink) == [
            ("count", "3"),
            ("draft", "true"),
            ("published", "2024-01-02"),
            ("version", "1.5"),
        ]

    def test_bare_value_treated_as_single_value(self):
        """Test a header value that is not wrapped in a list."""
        sink = _write({"author": "Jane"})

        assert [e.text for e in sink.events if isinstance(e, Characters)] == ["Jane"]

    def test_empty_value_list_emits_nothing(self):
        """Test that a known key with no values writes no element."""
        sink = _write({"author": [], "permissions": []})

        assert sink.events == []


@pytest.mark.unit
class TestMalformedValues:
    """Test the fallback for values that are not scalars."""

    def test_mapping_in_known_key_moves_to_data(self, caplog):
        """Test that a mapping author value is logged and written as JSON data."""
        with caplog.at_level(logging.WARNING, logger="md2dita.renderers.dita_metadata"):
            sink = _write({"author": [{"last": "Doe", "first": "Jane"}], "zeta": ["z"]})

        assert "author" not in sink.element_names
        assert _data_pairs(sink) == [("author", '{"first": "Jane", "last": "Doe"}'), ("zeta", "z")]
        assert any("author" in record.getMessage() for record in caplog.records)

    def test_nested_list_in_attribute_key(self):
        """Test a list value under an attribute-valued key."""
        sink = _write({"permissions": [["a", "b"]]})

        assert "permissions" not in sink.element_names
        assert _data_pairs(sink) == [("permissions", '["a", "b"]')]

    def test_mapping_in_unknown_key(self):
        """Test that an unknown key with a mapping value is written as JSON."""
        sink = _write({"extra": [{"b": 1, "a": 2}]})

        assert _data_pairs(sink) == [("extra", '{"a": 2, "b": 1}')]

    def test_malformed_value_keeps_other_values(self):
        """Test that well-formed values of the same key are still written."""
        sink = _write({"keyword": ["dita", {"bad": "value"}]})

        assert sink.element_names == ["metadata", "keywords", "keyword", "data"]

    def test_non_ascii_json(self):
        """Test that JSON fallback keeps non-ASCII characters."""
        sink = _write({"extra": [{"name": "Zoë"}]})

        assert _data_pairs(sink) == [("extra", '{"name": "Zoë"}')]


@pytest.mark.unit
class TestKnownKeys:
    """Test the known-key set."""

    def test_base_known_keys(self):
        """Test the fixed known-key set."""
        assert BASE_KNOWN_KEYS == {
            "author",
            "source",
            "publisher",
            "permissions",
            "audience",
            "category",
            "keyword",
            "resourceid",
        }

    def test_identifier_key_known_when_enabled(self):
        """Test that the id key is consumed when used as the topic identifier."""
        assert "id" not in MetadataSerializer().known_keys
        assert "id" in MetadataSerializer(identifier_from_metadata=True).known_keys

        assert _data_pairs(_write({"id": ["x"]}, identifier_from_metadata=True)) == []
        assert _data_pairs(_write({"id": ["x"]})) == [("id", "x")]


_KEYS = st.one_of(
    st.sampled_from(sorted(BASE_KNOWN_KEYS)),
    st.text(alphabet="abxyz_-.:0éß", min_size=1, max_size=8),
)
_VALUES = st.lists(
    st.one_of(st.none(), st.text(alphabet="ab <&é", max_size=10), st.integers(), st.booleans()), max_size=3
)


@pytest.mark.unit
@pytest.mark.fuzzing
class TestMetadataProperties:
    """Property-based tests for metadata serialization."""

    @given(st.dictionaries(_KEYS, _VALUES, max_size=8))
    def test_stream_is_balanced(self, header):
        """Test that metadata events nest correctly for any header."""
        checker = WellFormedSink()
        checker.start_element("prolog", dita_classes.TOPIC_PROLOG, {})
        MetadataSerializer().write(header, checker)
        checker.end_element("prolog")

        assert checker.depth == 0

    @given(st.dictionaries(_KEYS, _VALUES, max_size=8))
    def test_data_names_sorted(self, header):
        """Test that data elements always appear in key order."""
        names = [name for name, _ in _data_pairs(_write(header))]

        assert names == sorted(names)

    @given(st.dictionaries(_KEYS, _VALUES, max_size=8))
    def test_group_iff_group_key(self, header):
        """Test that the group wrapper appears exactly when a group key is present."""
        has_group_key = any(key in header for key in ("audience", "category", "keyword"))

        assert ("metadata" in _write(header).element_names) == has_group_key
