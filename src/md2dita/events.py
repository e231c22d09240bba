#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/events.py
"""Structured-markup events and the sink interface that receives them.

The DITA serializer does not build XML itself. It pushes a flat stream of
events to a ``ContentSink``: a start-element event for each element, character
events for text, a matching end-element event, and a single end-of-document
event once the stream is complete. Sinks decide what to do with the stream
(record it, check it, or build an XML tree from it).

Escaping is the sink's job. Character events carry raw, unescaped text.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Union

from md2dita.dita_classes import DitaClass


@dataclass(frozen=True)
class StartElement:
    """Start of a DITA element.

    Parameters
    ----------
    name : str
        Element name, e.g. ``"p"``
    class_tag : DitaClass
        Value of the element's ``class`` attribute
    attributes : dict, default = empty dict
        Additional attributes in emission order

    """

    name: str
    class_tag: DitaClass
    attributes: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Characters:
    """Text content of the innermost open element."""

    text: str


@dataclass(frozen=True)
class EndElement:
    """End of the element named ``name``."""

    name: str


@dataclass(frozen=True)
class EndDocument:
    """End of the event stream."""


Event = Union[StartElement, Characters, EndElement, EndDocument]


class ContentSink(ABC):
    """Receiver of a DITA event stream.

    Serializers call these methods in document order. For every stream the
    serializer accepts, start and end events are balanced and
    ``end_document`` is called exactly once, last.

    """

    @abstractmethod
    def start_element(self, name: str, class_tag: DitaClass, attributes: Mapping[str, str]) -> None:
        """Open an element.

        Parameters
        ----------
        name : str
            Element name
        class_tag : DitaClass
            DITA class token for the element
        attributes : Mapping[str, str]
            Additional attributes; ``class`` is never included here

        """
        pass

    @abstractmethod
    def characters(self, text: str) -> None:
        """Append text to the innermost open element."""
        pass

    @abstractmethod
    def end_element(self, name: str) -> None:
        """Close the innermost open element."""
        pass

    @abstractmethod
    def end_document(self) -> None:
        """Signal that no further events follow."""
        pass

    def push(self, event: Event) -> None:
        """Deliver a recorded event to the matching sink method.

        Parameters
        ----------
        event : Event
            Event to deliver

        """
        if isinstance(event, StartElement):
            self.start_element(event.name, event.class_tag, event.attributes)
        elif isinstance(event, Characters):
            self.characters(event.text)
        elif isinstance(event, EndElement):
            self.end_element(event.name)
        elif isinstance(event, EndDocument):
            self.end_document()
        else:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")


__all__ = [
    "Characters",
    "ContentSink",
    "EndDocument",
    "EndElement",
    "Event",
    "StartElement",
]
