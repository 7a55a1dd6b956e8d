"""
Speech segmentation of one paragraph

Cuts the tokens of a paragraph into lines, one per speech. A soft break
ends a line only when the next line starts a new speech heading (or the
paragraph ends there), so a multi-line speech stays one line while a new
speaker splits the paragraph even without a blank line in between. A soft
break between two stand-alone stage directions ends the line as well.

Example:
    "A> Hi!\\nHow are you?\\nB> Fine." segments into

        [A> Hi!, SoftBreak, How are you?, SoftBreak]
        [B> Fine.]

Two strategies are provided:

- SpeechSegmenter works on the materialized token list and can match the
  full heading pattern (including `Name (direction)>`) after every break,
  and sees whole lines to find consecutive stage directions.
- StreamingSegmenter works on a live token stream with one token of
  lookahead and a one-token cache. It only recognizes the `Name>` shape at
  a line boundary, so `A> x\\nB (aside)> y` and `(x)\\n(y)` stay single
  lines with it.
"""

from typing import Iterator, List, Optional, Sequence

from ..models.tokens import Token, PlainText, Rangle, token_isSoftBreak
from .lookahead import Lookahead
from .parser import heading_is, parens_split, stageDirection_is


class SpeechSegmenter:
    """
    Segmenter over a materialized token list

    Attributes:
        tokens: All tokens of the paragraph
        cursor: Index of the first token not yet handed out
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = list(tokens)
        self.cursor = 0

    def line_next(self) -> Optional[List[Token]]:
        """
        Cut the next line

        Returns:
            Tokens of the line (ending with its soft break, if any), or None
            once every token has been handed out
        """
        tokens = self.tokens
        if self.cursor >= len(tokens):
            return None

        start = self.cursor
        for index in range(start, len(tokens)):
            if not token_isSoftBreak(tokens[index]):
                continue

            following = tokens[index + 1:]
            if not following or heading_is(following) or self.directions_adjacent(start, index):
                self.cursor = index + 1
                return tokens[start:self.cursor]

        self.cursor = len(tokens)
        return tokens[start:]

    def directions_adjacent(self, start: int, index: int) -> bool:
        """True if the soft break at index sits between two stand-alone directions"""
        tokens = self.tokens
        end = next(
            (i for i in range(index + 1, len(tokens)) if token_isSoftBreak(tokens[i])),
            len(tokens),
        )
        return (
            stageDirection_is(parens_split(tokens[start:index]))
            and stageDirection_is(parens_split(tokens[index + 1:end]))
        )

    def __iter__(self) -> Iterator[List[Token]]:
        return self

    def __next__(self) -> List[Token]:
        line = self.line_next()
        if line is None:
            raise StopIteration
        return line


class StreamingSegmenter:
    """
    Segmenter over a live token stream

    When it pulls a PlainText right after a soft break and the next token
    is a Rangle, that PlainText is the speaker name of the next speech. It
    is parked in a one-token cache, which is drained into the next line
    before anything else is pulled from the stream.
    """

    def __init__(self, tokens: Iterator[Token]) -> None:
        self.stream: Lookahead[Token] = Lookahead(tokens, 1)
        self.cache: Optional[Token] = None

    def line_next(self) -> Optional[List[Token]]:
        """
        Cut the next line

        Returns:
            Tokens of the line, or None once the stream is exhausted
        """
        line: List[Token] = []

        if self.cache is not None:
            line.append(self.cache)
            self.cache = None

        for token in self.stream:
            after_break = bool(line) and token_isSoftBreak(line[-1])
            if (
                after_break
                and isinstance(token, PlainText)
                and token.text.strip()
                and isinstance(self.stream.ahead(0), Rangle)
            ):
                self.cache = token
                break
            line.append(token)

        return line or None

    def __iter__(self) -> Iterator[List[Token]]:
        return self

    def __next__(self) -> List[Token]:
        line = self.line_next()
        if line is None:
            raise StopIteration
        return line
