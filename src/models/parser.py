"""
Parser-specific data models

Type-safe structures for parser operations and return values.
"""

from dataclasses import dataclass
from typing import List, Optional

from .tokens import Token


@dataclass
class HeadingMatch:
    """
    Result of matching the speech heading pattern at the head of a line

    Returned by heading_match() when a line starts with `Name>` or
    `Name (direction)>`.

    Attributes:
        character: Speaker name, trimmed
        direction: Heading direction text, trimmed; None when the heading
                   has no parenthetical
        length: Number of tokens the heading spans, including the `>`

    Example:
        For tokens of "A (running)> Hello!":
        HeadingMatch(character="A", direction="running", length=5)
    """
    character: str
    direction: Optional[str]
    length: int


@dataclass
class ParenMatch:
    """
    Result of searching the closing parenthesis of a direction

    Returned by paren_findMatching() when a `(` at `start` has a balanced
    `)` before the line ends.

    Attributes:
        start: Index of the opening paren token
        end: Index of the matching closing paren token
        inner: Tokens strictly between the two
    """
    start: int
    end: int
    inner: List[Token]
