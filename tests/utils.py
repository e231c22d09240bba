"""Test utilities for md2dita test suite.

Helpers for inspecting recorded DITA event streams.
"""

from md2dita.events import Characters, EndDocument, EndElement, StartElement
from md2dita.renderers.dita import DitaRenderer
from md2dita.sinks import RecordingSink


def record_events(doc, options=None) -> list:
    """Serialize a document into a recording sink and return its events."""
    sink = RecordingSink()
    DitaRenderer(options).serialize(doc, sink)
    return sink.events


def assert_balanced(events: list) -> None:
    """Assert that an event stream is properly nested and terminated."""
    stack = []
    for index, event in enumerate(events):
        if isinstance(event, StartElement):
            stack.append(event.name)
        elif isinstance(event, EndElement):
            assert stack, f"End of {event.name!r} at event {index} with no open element"
            assert stack.pop() == event.name, f"Mismatched end of {event.name!r} at event {index}"
        elif isinstance(event, EndDocument):
            assert index == len(events) - 1, "end_document is not the last event"
    assert not stack, f"Unclosed elements: {stack}"
    assert isinstance(events[-1], EndDocument)


def start_events(events: list, name: str) -> list:
    """Return the start events for elements called ``name``."""
    return [event for event in events if isinstance(event, StartElement) and event.name == name]


def text_of(events: list) -> str:
    """Concatenate every characters event."""
    return "".join(event.text for event in events if isinstance(event, Characters))


def element_text(events: list, name: str, occurrence: int = 0) -> str:
    """Return the text inside the n-th element called ``name``."""
    seen = -1
    depth = 0
    parts: list[str] = []
    for event in events:
        if isinstance(event, StartElement):
            if depth:
                depth += 1
            elif event.name == name:
                seen += 1
                if seen == occurrence:
                    depth = 1
        elif isinstance(event, EndElement) and depth:
            depth -= 1
            if not depth:
                return "".join(parts)
        elif isinstance(event, Characters) and depth:
            parts.append(event.text)
    raise AssertionError(f"No element {name!r} number {occurrence}")
