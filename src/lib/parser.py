"""
Heading/body parser for play-script lines

Transforms the tokens of one line (as cut by the segmenter) into the flat
term stream consumed by the renderer.

A line is one of:
1. A speech: `Name> body` or `Name (direction)> body`
2. A free-standing stage direction: `(Exit Figaro.)`
3. A plain line with no dialect meaning

Key features:
- Heading detection on the token shape, not on the raw text
- Paren depth tracking so `(running (hard) )` is one direction
- Unterminated `(` degrades to literal text
- Inline markup events pass through untouched at any paren depth

Example:
    >>> terms = line_parse(list(PunctuationLexer("A> Hi (waves)")))
    >>> [t.kind.name for t in terms]
    ['HEADING_START', 'CHARACTER', 'HEADING_END', 'BODY_START', 'TEXT',
     'DIRECTION_START', 'TEXT', 'DIRECTION_END', 'BODY_END']
"""

from typing import Iterable, List, Optional, Sequence

from ..models.events import Event
from ..models.parser import HeadingMatch, ParenMatch
from ..models.terms import (
    Term,
    HEADING_START,
    HEADING_END,
    BODY_START,
    BODY_END,
    DIRECTION_START,
    DIRECTION_END,
)
from ..models.tokens import (
    Token,
    TextToken,
    PlainText,
    Rangle,
    LeftParen,
    LeftParenRun,
    RightParen,
    RightParenRun,
    token_isSoftBreak,
)
from .errors import EngineInvariantError


def heading_match(tokens: Sequence[Token]) -> Optional[HeadingMatch]:
    """
    Match the speech heading pattern at the head of a token slice

    Recognized shapes:
        PlainText, Rangle, ...
        PlainText, LeftParen, PlainText, RightParen, Rangle, ...

    The leading PlainText must hold a non-blank speaker name. A run of
    angles (`>>`) is never a heading separator.

    Args:
        tokens: Tokens starting where a line starts

    Returns:
        HeadingMatch, or None if the slice does not start with a heading
    """
    if len(tokens) < 2 or not isinstance(tokens[0], PlainText):
        return None

    character = tokens[0].text.strip()
    if not character:
        return None

    if isinstance(tokens[1], Rangle):
        return HeadingMatch(character=character, direction=None, length=2)

    if (
        len(tokens) >= 5
        and isinstance(tokens[1], LeftParen)
        and isinstance(tokens[2], PlainText)
        and isinstance(tokens[3], RightParen)
        and isinstance(tokens[4], Rangle)
    ):
        return HeadingMatch(character=character, direction=tokens[2].text.strip(), length=5)

    return None


def heading_is(tokens: Sequence[Token]) -> bool:
    """True if the token slice starts with a speech heading"""
    return heading_match(tokens) is not None


def parens_split(tokens: Iterable[Token]) -> List[Token]:
    """
    Split paren runs into single parens

    `((` becomes two LeftParen tokens so that the depth counter sees every
    parenthesis individually. Other tokens are kept as they are.
    """
    result: List[Token] = []
    for token in tokens:
        if isinstance(token, LeftParenRun):
            result.extend(LeftParen() for _ in range(token.count))
        elif isinstance(token, RightParenRun):
            result.extend(RightParen() for _ in range(token.count))
        else:
            result.append(token)
    return result


def paren_findMatching(tokens: Sequence[Token], start: int) -> Optional[ParenMatch]:
    """
    Find the RightParen matching the LeftParen at `start` using depth tracking

    Increments depth on LeftParen, decrements on RightParen and returns
    when depth reaches 0. Event tokens do not affect depth. Paren runs
    must have been split with parens_split() first.

    Args:
        tokens: Tokens of one line
        start: Index of an opening LeftParen

    Returns:
        ParenMatch, or None if the line ends before the paren is closed

    Example:
        For "(running (hard) )":
        depth: (1 running (2 hard )1 )0 -> matches the last token
    """
    depth = 0

    for index in range(start, len(tokens)):
        token = tokens[index]
        if isinstance(token, LeftParen):
            depth += 1
        elif isinstance(token, RightParen):
            depth -= 1
            if depth == 0:
                return ParenMatch(start=start, end=index, inner=list(tokens[start + 1:index]))

    return None


def line_stripSoftBreaks(tokens: Sequence[Token]) -> List[Token]:
    """Drop the soft breaks the segmenter leaves at the end of a line"""
    end = len(tokens)
    while end > 0 and token_isSoftBreak(tokens[end - 1]):
        end -= 1
    return list(tokens[:end])


def token_isBlank(token: Token) -> bool:
    return isinstance(token, PlainText) and not token.text.strip()


class LineParser:
    """
    Parser for single play-script lines

    Handles:
    - Speech headings with and without direction
    - Body directions with nested parentheses
    - Free-standing stage direction lines
    - Monologue lines (body only, no heading extraction)
    - Plain lines
    """

    def __init__(self, monologue: bool = False) -> None:
        """
        Args:
            monologue: Parse every line as a headingless body
        """
        self.monologue = monologue

    def line_parse(self, tokens: Sequence[Token]) -> List[Term]:
        """
        Parse one line into terms

        Args:
            tokens: Tokens of the line, possibly ending with a soft break

        Returns:
            Flat term list (see models.terms)
        """
        tokens = line_stripSoftBreaks(tokens)

        if self.monologue:
            return [BODY_START, *self.body_parse(tokens), BODY_END]

        heading = heading_match(tokens)
        if heading is not None:
            return self.speech_parse(heading, tokens)

        split = parens_split(tokens)
        if stageDirection_is(split):
            return self.stageDirection_parse(split)

        return self.plain_parse(tokens)

    def speech_parse(self, heading: HeadingMatch, tokens: Sequence[Token]) -> List[Term]:
        """Terms of a line whose head matched the heading pattern"""
        terms: List[Term] = [HEADING_START, Term.character(heading.character)]

        if heading.direction is not None:
            terms.append(DIRECTION_START)
            if heading.direction:
                terms.append(Term.text_make(heading.direction))
            terms.append(DIRECTION_END)

        terms.append(HEADING_END)
        terms.append(BODY_START)
        terms.extend(self.body_parse(tokens[heading.length:]))
        terms.append(BODY_END)

        return terms

    def body_parse(self, tokens: Sequence[Token]) -> List[Term]:
        """
        Terms of a speech body

        Plain text becomes TEXT, balanced parentheticals become directions,
        an unterminated `(` stays literal, and lone `>`/`)` are dropped
        since they are structural inside a body.
        """
        tokens = parens_split(tokens)
        terms: List[Term] = []
        index = 0

        while index < len(tokens):
            token = tokens[index]

            if isinstance(token, Event):
                terms.append(Term.event_make(token))
            elif isinstance(token, PlainText):
                terms.append(Term.text_make(token.text))
            elif isinstance(token, LeftParen):
                match = paren_findMatching(tokens, index)
                if match is None:
                    terms.append(Term.text_make(token.literal))
                else:
                    terms.append(DIRECTION_START)
                    terms.extend(self.direction_parse(match.inner))
                    terms.append(DIRECTION_END)
                    index = match.end

            index += 1

        return terms

    def direction_parse(self, tokens: Sequence[Token]) -> List[Term]:
        """
        Terms enclosed by a direction's parentheses

        Nested parentheses are balanced by construction and kept as literal
        text; angles are dropped.
        """
        terms: List[Term] = []

        for token in tokens:
            if isinstance(token, Event):
                terms.append(Term.event_make(token))
            elif isinstance(token, (PlainText, LeftParen, RightParen)):
                terms.append(Term.text_make(token.literal))

        return terms

    def stageDirection_parse(self, tokens: Sequence[Token]) -> List[Term]:
        """Terms of a line holding exactly one parenthetical"""
        start = next(i for i, token in enumerate(tokens) if not token_isBlank(token))
        match = paren_findMatching(tokens, start)
        if match is None:
            raise EngineInvariantError("stage direction line lost its closing paren")

        return [DIRECTION_START, *self.direction_parse(match.inner), DIRECTION_END]

    def plain_parse(self, tokens: Sequence[Token]) -> List[Term]:
        """Terms of a plain line: every token kept, punctuation literal"""
        terms: List[Term] = []

        for token in tokens:
            if isinstance(token, TextToken):
                terms.append(Term.text_make(token.literal))
            else:
                terms.append(Term.event_make(token))

        return terms


def stageDirection_is(tokens: Sequence[Token]) -> bool:
    """
    True if the line's non-blank content is a single balanced parenthetical

    Args:
        tokens: Line tokens with paren runs already split
    """
    content = [i for i, token in enumerate(tokens) if not token_isBlank(token)]
    if not content:
        return False

    first, last = content[0], content[-1]
    if not isinstance(tokens[first], LeftParen):
        return False

    match = paren_findMatching(tokens, first)
    return match is not None and match.end == last


def line_parse(tokens: Sequence[Token], monologue: bool = False) -> List[Term]:
    """Parse one line with a throwaway LineParser"""
    return LineParser(monologue=monologue).line_parse(tokens)
