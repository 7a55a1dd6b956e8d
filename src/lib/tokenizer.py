"""
Event tokenizer for one paragraph

Wraps the upstream event iterator right after a paragraph START and turns
the paragraph's events into the parser's token alphabet:

- top-level TEXT events are re-lexed into TextTokens
- TEXT inside nested inline markup (emphasis, links, ...) is never re-lexed
  and passes through as an Event token, like every other event
- the paragraph END stops the tokenizer and is swallowed

After the tokenizer stops, unwrap() hands back the upstream iterator
positioned right after the paragraph END.
"""

from collections import deque
from typing import Deque, Iterator, Optional

from ..models.events import Event, EventKind, TagKind
from ..models.tokens import Token
from .lexer import PunctuationLexer


class EventTokenizer:
    """
    Iterator of Tokens over exactly one paragraph of upstream events

    Attributes:
        nest_level: Depth of inline markup currently open (0 = directly
                    inside the paragraph)
    """

    def __init__(self, upstream: Iterator[Event]) -> None:
        self.upstream = upstream
        self.nest_level = 0
        self.queue: Deque[Token] = deque()
        self.is_fused = False

    def __iter__(self) -> "EventTokenizer":
        return self

    def __next__(self) -> Token:
        while not self.queue:
            if self.is_fused:
                raise StopIteration
            self.event_pull()
        return self.queue.popleft()

    def event_pull(self) -> None:
        """
        Pull one upstream event and enqueue the tokens it produces

        Fuses the tokenizer on the paragraph END or upstream exhaustion.
        """
        event: Optional[Event] = next(self.upstream, None)

        if event is None:
            self.is_fused = True
            return

        if event.kind == EventKind.START:
            self.nest_level += 1
            self.queue.append(event)
        elif event.kind == EventKind.END:
            if self.nest_level == 0 and event.is_end(TagKind.PARAGRAPH):
                self.is_fused = True
                return
            self.nest_level = max(0, self.nest_level - 1)
            self.queue.append(event)
        elif event.kind == EventKind.TEXT and self.nest_level == 0:
            self.queue.extend(PunctuationLexer(event.text))
        else:
            self.queue.append(event)

    def unwrap(self) -> Iterator[Event]:
        """Return the upstream iterator"""
        return self.upstream
