"""
Parser term model

Terms are the flat intermediate representation between the heading/body
parser and the renderer. Instead of building a tree, the parser emits
bracketing terms (HEADING_START ... HEADING_END, BODY_START ... BODY_END,
DIRECTION_START ... DIRECTION_END) around leaf terms (CHARACTER, TEXT,
EVENT).

Example:
    "A (running)> Hi (waves)" parses to

        HEADING_START
        CHARACTER("A")
        DIRECTION_START TEXT("running") DIRECTION_END
        HEADING_END
        BODY_START
        TEXT(" Hi ")
        DIRECTION_START TEXT("waves") DIRECTION_END
        BODY_END
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional

from .events import Event


class TermKind(Enum):
    HEADING_START = "heading_start"
    HEADING_END = "heading_end"
    BODY_START = "body_start"
    BODY_END = "body_end"
    CHARACTER = "character"
    DIRECTION_START = "direction_start"
    DIRECTION_END = "direction_end"
    TEXT = "text"
    EVENT = "event"


@dataclass(frozen=True)
class Term:
    """
    One parser term

    Attributes:
        kind: Term variant
        text: Payload of CHARACTER and TEXT terms
        event: Payload of EVENT terms
    """
    kind: TermKind
    text: str = ""
    event: Optional[Event] = None

    @classmethod
    def character(cls, name: str) -> "Term":
        return cls(TermKind.CHARACTER, text=name)

    @classmethod
    def text_make(cls, text: str) -> "Term":
        return cls(TermKind.TEXT, text=text)

    @classmethod
    def event_make(cls, event: Event) -> "Term":
        return cls(TermKind.EVENT, event=event)


HEADING_START = Term(TermKind.HEADING_START)
HEADING_END = Term(TermKind.HEADING_END)
BODY_START = Term(TermKind.BODY_START)
BODY_END = Term(TermKind.BODY_END)
DIRECTION_START = Term(TermKind.DIRECTION_START)
DIRECTION_END = Term(TermKind.DIRECTION_END)
