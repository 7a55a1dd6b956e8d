"""
Punctuation lexer for play-script text

Splits a text run into the punctuation that carries meaning in the
play-script dialect and the plain text around it.

Token types:
- PlainText: any text without `>`, `(`, `)`
- Rangle / RangleRun(n): one `>` / a run of n `>`
- LeftParen / LeftParenRun(n): one `(` / a run of n `(`
- RightParen / RightParenRun(n): one `)` / a run of n `)`

Runs are maximal and never mix characters, so `)>` lexes to RightParen
followed by Rangle.

Example:
    >>> list(PunctuationLexer("A (running)> Hi"))
    [PlainText(text='A '), LeftParen(), PlainText(text='running'),
     RightParen(), Rangle(), PlainText(text=' Hi')]
"""

import re
from typing import Dict, Iterator, Tuple

from ..models.tokens import (
    TextToken,
    PlainText,
    Rangle,
    RangleRun,
    LeftParen,
    LeftParenRun,
    RightParen,
    RightParenRun,
)

_punctuation_re = re.compile(r"[>()]")

# punctuation char -> (single token, run token)
_TOKEN_TYPES: Dict[str, Tuple[type, type]] = {
    ">": (Rangle, RangleRun),
    "(": (LeftParen, LeftParenRun),
    ")": (RightParen, RightParenRun),
}


def punct_findFirst(text: str, pos: int = 0) -> int:
    """
    Find the first dialect punctuation character at or after pos

    Returns:
        Index of the character, or -1 if there is none
    """
    match = _punctuation_re.search(text, pos)
    return match.start() if match else -1


def punct_runEnd(text: str, pos: int) -> int:
    """
    Find the end of the run of text[pos] starting at pos

    Returns:
        Index one past the last character of the run
    """
    char = text[pos]
    end = pos + 1
    while end < len(text) and text[end] == char:
        end += 1
    return end


def token_make(char: str, count: int) -> TextToken:
    """Build the single or run token for `count` copies of `char`"""
    single, run = _TOKEN_TYPES[char]
    if count == 1:
        return single()
    return run(count)


class PunctuationLexer:
    """
    Lazy, restartable lexer over one text slice

    Iterating the lexer scans the text from the start every time, producing
    one token at a time.
    """

    def __init__(self, text: str) -> None:
        self.text = text

    def __iter__(self) -> Iterator[TextToken]:
        text = self.text
        pos = 0

        while pos < len(text):
            found = punct_findFirst(text, pos)
            if found < 0:
                yield PlainText(text[pos:])
                return

            if found > pos:
                yield PlainText(text[pos:found])

            run_end = punct_runEnd(text, found)
            yield token_make(text[found], run_end - found)
            pos = run_end


def text_lex(text: str) -> Iterator[TextToken]:
    """Convenience wrapper: lazily lex text into TextTokens"""
    return iter(PunctuationLexer(text))
