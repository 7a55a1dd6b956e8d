"""
Play-script engine: the mode/directive state machine

PlayScript wraps an upstream Markdown event iterator and yields the same
event type with play-script paragraphs replaced by rendered speeches.

For every upstream event:
1. Paragraph START (mode not OFF): lend the upstream to an EventTokenizer,
   segment the paragraph into lines, parse and render every line, queue
   the result and take the upstream back, positioned after the paragraph.
2. Paragraph START (mode OFF): copy the paragraph through untouched.
3. HTML event holding a known directive comment: run its handler (mode
   switch or metadata fragment) instead of emitting it.
4. Anything else: pass through.

Example:
    >>> from mdplayscript.lib.markdown import events_fromMarkdown
    >>> from mdplayscript.lib.html import html_render
    >>> html_render(PlayScript(events_fromMarkdown("A> Hi!")))
    '<div class="speech"><h5><span class="character">A</span></h5><p><span>Hi!</span></p></div>\\n'
"""

from collections import deque
from contextlib import contextmanager
from typing import Deque, Iterable, Iterator, List, Optional

from ..config import appsettings, AppSettings
from ..models.events import Event, TagKind
from ..models.options import Mode, Options, Params, TitleMaker
from ..models.tokens import Token
from .directives import DirectiveRegistry, comment_extractDirective, titleBlock_make
from .errors import EngineInvariantError
from .log import LOG
from .parser import LineParser
from .renderer import HtmlRenderer
from .segmenter import SpeechSegmenter, StreamingSegmenter
from .tokenizer import EventTokenizer


class PlayScript:
    """
    Iterator of Events converting play-script paragraphs

    Attributes:
        options: Engine options
        params: Document metadata for the metadata directives
        title_maker: Builds the HTML of `playscript-make-title`
        mode: Current rendering mode
        renderer: Renderer owning the heading counter of this document
        directives: Registry of directive comments
        queue: Events produced but not yet yielded
    """

    def __init__(
        self,
        upstream: Iterable[Event],
        options: Optional[Options] = None,
        params: Optional[Params] = None,
        title_maker: Optional[TitleMaker] = None,
        settings: AppSettings = appsettings,
    ) -> None:
        """
        Args:
            upstream: Markdown events, e.g. from events_fromMarkdown()
            options: Engine options (defaults to Options())
            params: Document metadata (defaults to empty Params())
            title_maker: Title block generator (defaults to titleBlock_make)
            settings: Markup settings (class names, heading tag)
        """
        self.options = options or Options()
        self.params = params or Params()
        self.title_maker: TitleMaker = title_maker or titleBlock_make
        self.mode = self.options.mode_initial()
        self.renderer = HtmlRenderer(self.options, settings)
        self.directives = DirectiveRegistry()
        self.queue: Deque[Event] = deque()

        # None while a paragraph holds the upstream
        self._upstream: Optional[Iterator[Event]] = iter(upstream)

    def __iter__(self) -> "PlayScript":
        return self

    def __next__(self) -> Event:
        while not self.queue:
            if not self.event_process():
                raise StopIteration
        return self.queue.popleft()

    def unwrap(self) -> Iterator[Event]:
        """Return the upstream iterator"""
        return self.upstream_get()

    def upstream_get(self) -> Iterator[Event]:
        if self._upstream is None:
            raise EngineInvariantError("upstream is still lent to a paragraph")
        return self._upstream

    @contextmanager
    def upstream_borrow(self) -> Iterator[EventTokenizer]:
        """
        Lend the upstream to a paragraph tokenizer

        The upstream is given back when the block exits, also when it
        raises, so the engine never loses its cursor.
        """
        tokenizer = EventTokenizer(self.upstream_get())
        self._upstream = None
        try:
            yield tokenizer
        finally:
            self._upstream = tokenizer.unwrap()

    def event_process(self) -> bool:
        """
        Pull and handle one upstream event

        Returns:
            False once the upstream is exhausted
        """
        event = next(self.upstream_get(), None)
        if event is None:
            return False

        if event.is_start(TagKind.PARAGRAPH):
            if self.mode == Mode.OFF:
                self.paragraph_passthrough(event)
            else:
                self.paragraph_convert()
        elif event.is_html():
            self.directive_dispatch(event)
        else:
            self.queue.append(event)

        return True

    def paragraph_passthrough(self, start: Event) -> None:
        """Copy a paragraph through unchanged, up to its END"""
        self.queue.append(start)
        for event in self.upstream_get():
            self.queue.append(event)
            if event.is_end(TagKind.PARAGRAPH):
                break

    def paragraph_convert(self) -> None:
        """Segment, parse and render the paragraph the upstream is in"""
        parser = LineParser(monologue=self.mode == Mode.MONOLOGUE)
        out: List[Event] = []
        line_count = 0

        with self.upstream_borrow() as tokenizer:
            for line in self.lines_segment(tokenizer):
                self.renderer.terms_render(parser.line_parse(line), out)
                line_count += 1

        LOG(f"Paragraph rendered from {line_count} line(s) in {self.mode.name} mode", level=3)
        self.queue.extend(out)

    def lines_segment(self, tokens: Iterator[Token]) -> Iterator[List[Token]]:
        if self.options.streaming_segmentation:
            return StreamingSegmenter(tokens)
        return SpeechSegmenter(list(tokens))

    def directive_dispatch(self, event: Event) -> None:
        """Run a directive comment, or pass an unrelated HTML event through"""
        name = comment_extractDirective(event.text)
        handler = self.directives.get(name) if name else None

        if handler is None:
            self.queue.append(event)
            return

        LOG(f"Directive: {name}", level=3)
        self.queue.extend(handler(self))

    def mode_set(self, mode: Mode) -> None:
        LOG(f"Mode: {self.mode.name} -> {mode.name}", level=3)
        self.mode = mode
