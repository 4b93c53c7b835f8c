"""
Conversion of a recipe's markdown body into a flat stream of events.

The body is parsed as `CommonMark <https://commonmark.org/>`_ using
:py:mod:`marko` and the resulting document tree is flattened into a series of
:py:class:`Event` objects: container start and end events (for headings,
paragraphs, lists and list items) interleaved with text, code span, line
break and raw HTML events. For example::

    # Ingredients

    - 1 onion

Becomes::

    Event(EventType.start, Tag.heading, level=1)
    Event(EventType.text, text="Ingredients")
    Event(EventType.end, Tag.heading, level=1)
    Event(EventType.start, Tag.list)
    Event(EventType.start, Tag.item)
    Event(EventType.text, text="1 onion")
    Event(EventType.end, Tag.item)
    Event(EventType.end, Tag.list)

Paragraphs within tight lists do not produce paragraph events (mirroring the
fact that they are not rendered as ``<p>`` elements in HTML).

.. autofunction:: iter_events
"""

from typing import Any, Iterator, Optional

from dataclasses import dataclass

from enum import Enum, auto

import html

from marko import Markdown, block, inline  # type: ignore


__all__ = [
    "EventType",
    "Tag",
    "Event",
    "iter_events",
]


class EventType(Enum):
    start = auto()
    end = auto()
    text = auto()
    code = auto()
    soft_break = auto()
    hard_break = auto()
    html = auto()


class Tag(Enum):
    """Container element kinds."""

    heading = auto()
    paragraph = auto()
    list = auto()
    item = auto()
    block_quote = auto()
    code_block = auto()


@dataclass(frozen=True)
class Event:
    type: EventType

    tag: Optional[Tag] = None
    """For start and end events, the kind of container."""

    level: int = 0
    """For heading start and end events, the heading level (1-6)."""

    text: str = ""
    """For text, code and html events, the content."""

    pos: Optional[int] = None
    """
    For heading start events, the offset of the heading in the markdown
    source, with newlines normalised to "\n" (when known).
    """


def iter_inline_events(element: Any) -> Iterator[Event]:
    if isinstance(element, inline.RawText):
        yield Event(EventType.text, text=html.unescape(element.children))
    elif isinstance(element, inline.Literal):
        yield Event(EventType.text, text=element.children)
    elif isinstance(element, inline.CodeSpan):
        yield Event(EventType.code, text=element.children)
    elif isinstance(element, inline.LineBreak):
        if element.soft:
            yield Event(EventType.soft_break)
        else:
            yield Event(EventType.hard_break)
    elif isinstance(element, inline.InlineHTML):
        yield Event(EventType.html, text=element.children)
    elif isinstance(getattr(element, "children", None), list):
        # Emphasis, links, images etc. contribute only their inner text
        for child in element.children:
            yield from iter_inline_events(child)
    elif isinstance(getattr(element, "children", None), str):
        yield Event(EventType.text, text=element.children)


def iter_block_events(element: Any) -> Iterator[Event]:
    if isinstance(element, (block.Heading, block.SetextHeading)):
        yield Event(
            EventType.start,
            Tag.heading,
            level=element.level,
            pos=element.start_pos,
        )
        for child in element.children:
            yield from iter_inline_events(child)
        yield Event(EventType.end, Tag.heading, level=element.level)
    elif isinstance(element, block.Paragraph):
        tight = getattr(element, "_tight", False)
        if not tight:
            yield Event(EventType.start, Tag.paragraph)
        for child in element.children:
            yield from iter_inline_events(child)
        if not tight:
            yield Event(EventType.end, Tag.paragraph)
    elif isinstance(element, block.List):
        yield Event(EventType.start, Tag.list)
        for child in element.children:
            yield from iter_block_events(child)
        yield Event(EventType.end, Tag.list)
    elif isinstance(element, block.ListItem):
        yield Event(EventType.start, Tag.item)
        for child in element.children:
            yield from iter_block_events(child)
        yield Event(EventType.end, Tag.item)
    elif isinstance(element, block.Quote):
        yield Event(EventType.start, Tag.block_quote)
        for child in element.children:
            yield from iter_block_events(child)
        yield Event(EventType.end, Tag.block_quote)
    elif isinstance(element, (block.CodeBlock, block.FencedCode)):
        yield Event(EventType.start, Tag.code_block)
        for child in element.children:
            yield Event(EventType.text, text=child.children)
        yield Event(EventType.end, Tag.code_block)
    elif isinstance(element, block.HTMLBlock):
        yield Event(EventType.html, text=element.body)
    # Blank lines, thematic breaks and link reference definitions produce
    # no events.


def iter_events(markdown_source: str) -> Iterator[Event]:
    """
    Parse a markdown document, producing a flat stream of :py:class:`Event`
    objects in document order.
    """
    document = Markdown().parse(markdown_source)
    for element in document.children:
        yield from iter_block_events(element)
