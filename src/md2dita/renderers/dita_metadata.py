#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/renderers/dita_metadata.py
"""Front-matter to DITA prolog metadata.

``MetadataSerializer`` writes the contents of a topic ``prolog`` from a
front-matter mapping. Output order is fixed and does not depend on the order
of keys in the source:

1. ``author``, ``source``, ``publisher`` (text)
2. ``permissions`` (``view`` attribute)
3. ``metadata`` group, only when ``audience``, ``category`` or ``keyword``
   is present: ``audience`` (``audience`` attribute), ``category`` (text),
   then ``keywords`` wrapping one ``keyword`` (text) per value
4. ``resourceid`` (``appid`` attribute)
5. every other key, sorted by code point, as empty ``data`` elements with
   ``name`` and ``value`` attributes

A ``None`` value is written as the empty string. Values that are not scalars
(mappings, lists, sets) cannot be written as text or an attribute; they are
logged and moved to the ``data`` bucket as JSON.
"""

from __future__ import annotations

import datetime
import json
import logging
from collections.abc import Mapping, Set
from typing import Any, Optional

from md2dita import dita_classes
from md2dita.constants import (
    ATTRIBUTE_NAME_APPID,
    ATTRIBUTE_NAME_AUDIENCE,
    ATTRIBUTE_NAME_NAME,
    ATTRIBUTE_NAME_VALUE,
    ATTRIBUTE_NAME_VIEW,
    IDENTIFIER_KEY,
    METADATA_GROUP_KEYS,
)
from md2dita.dita_classes import DitaClass
from md2dita.events import ContentSink
from md2dita.exceptions import MalformedMetadataError

logger = logging.getLogger(__name__)

KEY_AUTHOR = "author"
KEY_SOURCE = "source"
KEY_PUBLISHER = "publisher"
KEY_PERMISSIONS = "permissions"
KEY_AUDIENCE = "audience"
KEY_CATEGORY = "category"
KEY_KEYWORD = "keyword"
KEY_RESOURCEID = "resourceid"

BASE_KNOWN_KEYS = frozenset(
    {
        KEY_AUTHOR,
        KEY_SOURCE,
        KEY_PUBLISHER,
        KEY_PERMISSIONS,
        KEY_AUDIENCE,
        KEY_CATEGORY,
        KEY_RESOURCEID,
        KEY_KEYWORD,
    }
)


def _json_default(value: Any) -> Any:
    if isinstance(value, Set):
        return sorted(str(item) for item in value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


class MetadataSerializer:
    """Writes front-matter values as DITA prolog metadata events.

    Parameters
    ----------
    identifier_from_metadata : bool, default False
        When True, the ``id`` key is consumed as the topic identifier and is
        not written as a ``data`` element.

    Attributes
    ----------
    known_keys : frozenset of str
        Keys with a dedicated rendering step; every other key goes to the
        ``data`` bucket. Fixed at construction.

    Examples
    --------
    >>> from md2dita.sinks import RecordingSink
    >>> sink = RecordingSink()
    >>> MetadataSerializer().write({"zeta": ["1"], "author": ["Jane"], "alpha": ["2"]}, sink)
    >>> sink.element_names
    ['author', 'data', 'data']

    """

    def __init__(self, identifier_from_metadata: bool = False):
        """Build the known-key set for this serializer."""
        self.identifier_from_metadata = identifier_from_metadata
        if identifier_from_metadata:
            self.known_keys = BASE_KNOWN_KEYS | {IDENTIFIER_KEY}
        else:
            self.known_keys = BASE_KNOWN_KEYS

    def write(self, header: Mapping[str, Any], sink: ContentSink) -> None:
        """Emit prolog metadata events for a front-matter mapping.

        Parameters
        ----------
        header : Mapping[str, list]
            Front-matter keys mapped to their ordered values
        sink : ContentSink
            Receiver of the events

        """
        # key -> JSON strings for values that could not be written in place
        fallback: dict[str, list[str]] = {}

        for key, class_tag in (
            (KEY_AUTHOR, dita_classes.TOPIC_AUTHOR),
            (KEY_SOURCE, dita_classes.TOPIC_SOURCE),
            (KEY_PUBLISHER, dita_classes.TOPIC_PUBLISHER),
        ):
            self._write_text_elements(header, key, class_tag, sink, fallback)

        self._write_attribute_elements(
            header, KEY_PERMISSIONS, dita_classes.TOPIC_PERMISSIONS, ATTRIBUTE_NAME_VIEW, sink, fallback
        )

        if any(key in header for key in METADATA_GROUP_KEYS):
            self._start(sink, dita_classes.TOPIC_METADATA)
            self._write_attribute_elements(
                header, KEY_AUDIENCE, dita_classes.TOPIC_AUDIENCE, ATTRIBUTE_NAME_AUDIENCE, sink, fallback
            )
            self._write_text_elements(header, KEY_CATEGORY, dita_classes.TOPIC_CATEGORY, sink, fallback)
            if KEY_KEYWORD in header:
                self._start(sink, dita_classes.TOPIC_KEYWORDS)
                self._write_text_elements(header, KEY_KEYWORD, dita_classes.TOPIC_KEYWORD, sink, fallback)
                self._end(sink, dita_classes.TOPIC_KEYWORDS)
            self._end(sink, dita_classes.TOPIC_METADATA)

        self._write_attribute_elements(
            header, KEY_RESOURCEID, dita_classes.TOPIC_RESOURCEID, ATTRIBUTE_NAME_APPID, sink, fallback
        )

        self._write_data_elements(header, sink, fallback)

    def unknown_keys(self, header: Mapping[str, Any]) -> list[str]:
        """Keys outside the known-key set, in output order."""
        return sorted(key for key in header if key not in self.known_keys)

    @staticmethod
    def _values(header: Mapping[str, Any], key: str) -> list[Any]:
        values = header[key]
        if isinstance(values, (list, tuple)):
            return list(values)
        return [values]

    @staticmethod
    def _scalar_text(key: str, value: Any) -> str:
        """Convert a front-matter value to the string written to the output.

        Raises
        ------
        MalformedMetadataError
            If the value is a mapping, sequence or set

        """
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (datetime.date, datetime.time)):
            return value.isoformat()
        if isinstance(value, (Mapping, Set, list, tuple, bytes, bytearray)):
            raise MalformedMetadataError(key, value)
        return str(value)

    def _text_or_fallback(self, key: str, value: Any, fallback: dict[str, list[str]]) -> Optional[str]:
        try:
            return self._scalar_text(key, value)
        except MalformedMetadataError as e:
            logger.warning(f"{e.message}; writing it as a generic data element")
            fallback.setdefault(key, []).append(self._to_json(value))
            return None

    @staticmethod
    def _to_json(value: Any) -> str:
        return json.dumps(value, sort_keys=True, ensure_ascii=False, default=_json_default)

    def _write_text_elements(
        self,
        header: Mapping[str, Any],
        key: str,
        class_tag: DitaClass,
        sink: ContentSink,
        fallback: dict[str, list[str]],
    ) -> None:
        if key not in header:
            return
        for value in self._values(header, key):
            text = self._text_or_fallback(key, value, fallback)
            if text is None:
                continue
            self._start(sink, class_tag)
            if text:
                sink.characters(text)
            self._end(sink, class_tag)

    def _write_attribute_elements(
        self,
        header: Mapping[str, Any],
        key: str,
        class_tag: DitaClass,
        attribute_name: str,
        sink: ContentSink,
        fallback: dict[str, list[str]],
    ) -> None:
        if key not in header:
            return
        for value in self._values(header, key):
            text = self._text_or_fallback(key, value, fallback)
            if text is None:
                continue
            self._start(sink, class_tag, {attribute_name: text})
            self._end(sink, class_tag)

    def _write_data_elements(
        self, header: Mapping[str, Any], sink: ContentSink, fallback: dict[str, list[str]]
    ) -> None:
        data_values: dict[str, list[str]] = {}
        for key in self.unknown_keys(header):
            for value in self._values(header, key):
                try:
                    text = self._scalar_text(key, value)
                except MalformedMetadataError as e:
                    logger.warning(f"{e.message}; writing it as JSON")
                    text = self._to_json(value)
                data_values.setdefault(key, []).append(text)
        for key, values in fallback.items():
            data_values.setdefault(key, []).extend(values)

        for key in sorted(data_values):
            for text in data_values[key]:
                self._start(
                    sink, dita_classes.TOPIC_DATA, {ATTRIBUTE_NAME_NAME: key, ATTRIBUTE_NAME_VALUE: text}
                )
                self._end(sink, dita_classes.TOPIC_DATA)

    @staticmethod
    def _start(sink: ContentSink, class_tag: DitaClass, attributes: Optional[dict[str, str]] = None) -> None:
        sink.start_element(class_tag.local_name, class_tag, attributes or {})

    @staticmethod
    def _end(sink: ContentSink, class_tag: DitaClass) -> None:
        sink.end_element(class_tag.local_name)


__all__ = [
    "BASE_KNOWN_KEYS",
    "MetadataSerializer",
]
