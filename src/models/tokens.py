"""
Text token model

Tokens produced by the punctuation lexer when it splits a top-level text
event on the characters that carry meaning in the play-script dialect
(`>`, `(`, `)`). A single punctuation character is its own variant; a run
of two or more equal characters is one `*Run` token carrying its count.

Every token can reproduce the source text it was cut from through its
`literal` property, so joining the literals of a lexed string gives back
the string.
"""

from dataclasses import dataclass
from typing import Union

from .events import Event


class TextToken:
    """Base class of all text tokens"""

    @property
    def literal(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class PlainText(TextToken):
    """Text without any dialect punctuation"""
    text: str

    @property
    def literal(self) -> str:
        return self.text


@dataclass(frozen=True)
class Rangle(TextToken):
    """A single `>`"""

    @property
    def literal(self) -> str:
        return ">"


@dataclass(frozen=True)
class RangleRun(TextToken):
    """Two or more consecutive `>`"""
    count: int

    @property
    def literal(self) -> str:
        return ">" * self.count


@dataclass(frozen=True)
class LeftParen(TextToken):
    """A single `(`"""

    @property
    def literal(self) -> str:
        return "("


@dataclass(frozen=True)
class LeftParenRun(TextToken):
    """Two or more consecutive `(`"""
    count: int

    @property
    def literal(self) -> str:
        return "(" * self.count


@dataclass(frozen=True)
class RightParen(TextToken):
    """A single `)`"""

    @property
    def literal(self) -> str:
        return ")"


@dataclass(frozen=True)
class RightParenRun(TextToken):
    """Two or more consecutive `)`"""
    count: int

    @property
    def literal(self) -> str:
        return ")" * self.count


# Tokenizer output alphabet: lexed text or an opaque pass-through event
Token = Union[TextToken, Event]


def token_isSoftBreak(token: Token) -> bool:
    """True if the token is a soft break event"""
    return isinstance(token, Event) and token.is_softBreak()
