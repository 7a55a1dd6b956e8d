"""
Markup event model

The event vocabulary shared by the upstream CommonMark adapter, the
play-script engine and the HTML serializer. A document is a flat stream of
events: block and inline containers open with a START event and close with
an END event carrying an equal tag, leaves (text, code, raw html, breaks)
stand alone.

Example:
    "Hello *world*" as one paragraph:

        Event.start(Tag(TagKind.PARAGRAPH))
        Event.text("Hello ")
        Event.start(Tag(TagKind.EMPHASIS))
        Event.text("world")
        Event.end(Tag(TagKind.EMPHASIS))
        Event.end(Tag(TagKind.PARAGRAPH))
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class TagKind(Enum):
    """Container kinds an event stream may open and close"""
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BLOCKQUOTE = "blockquote"
    CODE_BLOCK = "code_block"
    LIST = "list"
    ITEM = "item"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    STRIKETHROUGH = "strikethrough"
    LINK = "link"
    IMAGE = "image"


class EventKind(Enum):
    """Event variants"""
    START = "start"
    END = "end"
    TEXT = "text"
    CODE = "code"
    HTML = "html"
    HTML_BLOCK = "html_block"
    SOFT_BREAK = "soft_break"
    HARD_BREAK = "hard_break"
    RULE = "rule"


@dataclass(frozen=True)
class Tag:
    """
    A container tag with its attributes

    Attributes:
        kind: Container kind
        level: Heading level (1-6) for HEADING
        info: Info string of a fenced CODE_BLOCK (e.g. "python")
        start: First number of an ordered LIST, None for bullet lists
        href: Destination of a LINK or IMAGE
        title: Title of a LINK or IMAGE
        tight: A LIST whose items hold no paragraphs, only their inline content
    """
    kind: TagKind
    level: int = 0
    info: str = ""
    start: Optional[int] = None
    href: str = ""
    title: str = ""
    tight: bool = False


@dataclass(frozen=True)
class Event:
    """
    A single markup event

    Attributes:
        kind: Event variant
        tag: Container tag for START/END events, None otherwise
        text: Payload for TEXT, CODE, HTML and HTML_BLOCK events
    """
    kind: EventKind
    tag: Optional[Tag] = None
    text: str = ""

    @classmethod
    def start(cls, tag: Tag) -> "Event":
        return cls(EventKind.START, tag=tag)

    @classmethod
    def end(cls, tag: Tag) -> "Event":
        return cls(EventKind.END, tag=tag)

    @classmethod
    def text_make(cls, text: str) -> "Event":
        return cls(EventKind.TEXT, text=text)

    @classmethod
    def code(cls, text: str) -> "Event":
        return cls(EventKind.CODE, text=text)

    @classmethod
    def html(cls, text: str) -> "Event":
        return cls(EventKind.HTML, text=text)

    @classmethod
    def htmlBlock(cls, text: str) -> "Event":
        return cls(EventKind.HTML_BLOCK, text=text)

    @classmethod
    def softBreak(cls) -> "Event":
        return cls(EventKind.SOFT_BREAK)

    @classmethod
    def hardBreak(cls) -> "Event":
        return cls(EventKind.HARD_BREAK)

    @classmethod
    def rule(cls) -> "Event":
        return cls(EventKind.RULE)

    def is_start(self, kind: Optional[TagKind] = None) -> bool:
        """True for a START event (of the given tag kind, if any)"""
        if self.kind != EventKind.START:
            return False
        return kind is None or (self.tag is not None and self.tag.kind == kind)

    def is_end(self, kind: Optional[TagKind] = None) -> bool:
        """True for an END event (of the given tag kind, if any)"""
        if self.kind != EventKind.END:
            return False
        return kind is None or (self.tag is not None and self.tag.kind == kind)

    def is_text(self) -> bool:
        return self.kind == EventKind.TEXT

    def is_softBreak(self) -> bool:
        return self.kind == EventKind.SOFT_BREAK

    def is_html(self) -> bool:
        """True for inline and block-level raw HTML"""
        return self.kind in (EventKind.HTML, EventKind.HTML_BLOCK)


PARAGRAPH = Tag(TagKind.PARAGRAPH)
