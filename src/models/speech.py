"""
Speech structure models

The structured view of one parsed line, folded from the flat term stream
by the renderer before it emits markup.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .events import Event


@dataclass
class Direction:
    """
    A parenthetical stage direction

    Attributes:
        events: Inline content between the matched parentheses
    """
    events: List[Event] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.events)


# Body content alternates between plain inline events and directions
Inline = Union[Event, Direction]


@dataclass
class Heading:
    """
    Speech heading

    Attributes:
        character: Speaker name, trimmed
        direction: Direction following the name (empty when absent)
    """
    character: str
    direction: Direction = field(default_factory=Direction)


@dataclass
class Speech:
    """
    One character's turn to talk

    Attributes:
        heading: Speaker heading, None for a monologue speech
        body: Body inlines in source order
    """
    heading: Optional[Heading]
    body: List[Inline] = field(default_factory=list)


@dataclass
class PlainLine:
    """A line with no dialect meaning, rendered as an ordinary paragraph"""
    events: List[Event] = field(default_factory=list)


@dataclass
class StageDirection:
    """A line that consists of a single free-standing direction"""
    direction: Direction = field(default_factory=Direction)


Line = Union[Speech, PlainLine, StageDirection]
