"""
Renderer for parsed play-script lines

Folds the flat term stream of one line into a Speech, StageDirection or
PlainLine and appends the markup events that present it. Text stays in
TEXT events so the downstream serializer escapes it; generated markup is
emitted as HTML events.

Output of `A (aside)> Hello! (waves)`:

    <div class="speech">
      <h5><span class="character">A</span><span class="direction">aside</span></h5>
      <p><span>Hello!</span><span class="direction">waves</span></p>
    </div>
    SoftBreak
"""

from typing import List, Optional, Sequence

from ..config import appsettings, AppSettings
from ..models.events import Event, PARAGRAPH
from ..models.options import Options
from ..models.speech import (
    Direction,
    Heading,
    Inline,
    Line,
    PlainLine,
    Speech,
    StageDirection,
)
from ..models.terms import Term, TermKind
from .errors import EngineInvariantError


def terms_fold(terms: Sequence[Term]) -> Line:
    """
    Fold a line's flat terms into its structured form

    Args:
        terms: Terms produced by LineParser.line_parse()

    Returns:
        Speech when the terms hold a body, StageDirection when they hold a
        single direction outside any body, PlainLine otherwise

    Raises:
        EngineInvariantError: If the terms are not properly bracketed
    """
    heading: Optional[Heading] = None
    body: Optional[List[Inline]] = None
    direction: Optional[Direction] = None
    stage: Optional[Direction] = None
    plain: List[Event] = []
    in_heading = False

    for term in terms:
        kind = term.kind

        if kind == TermKind.HEADING_START:
            heading = Heading(character="")
            in_heading = True
        elif kind == TermKind.CHARACTER:
            if heading is None or not in_heading:
                raise EngineInvariantError("character term outside a heading")
            heading.character = term.text
        elif kind == TermKind.HEADING_END:
            in_heading = False
        elif kind == TermKind.BODY_START:
            body = []
        elif kind == TermKind.BODY_END:
            pass
        elif kind == TermKind.DIRECTION_START:
            direction = Direction()
        elif kind == TermKind.DIRECTION_END:
            if direction is None:
                raise EngineInvariantError("direction end without a direction start")
            if in_heading and heading is not None:
                heading.direction = direction
            elif body is not None:
                body.append(direction)
            else:
                stage = direction
            direction = None
        else:
            if kind == TermKind.TEXT:
                event = Event.text_make(term.text)
            elif term.event is not None:
                event = term.event
            else:
                raise EngineInvariantError("event term without an event")

            if direction is not None:
                direction.events.append(event)
            elif body is not None:
                body.append(event)
            else:
                plain.append(event)

    if body is not None:
        return Speech(heading=heading, body=body)
    if stage is not None:
        return StageDirection(direction=stage)
    return PlainLine(events=plain)


class HtmlRenderer:
    """
    Renders parsed lines as markup events

    Attributes:
        replace_softbreak: Replacement text for soft breaks inside speeches,
                           None to keep them as soft break events
        heading_anchors: Emit an id and self link on every speech heading
        heading_counter: Number of headings rendered so far; the next
                         heading's anchor index
    """

    def __init__(self, options: Optional[Options] = None, settings: AppSettings = appsettings) -> None:
        options = options or Options()
        self.settings = settings
        self.replace_softbreak = options.replace_softbreaks_with
        self.heading_anchors = options.heading_anchors
        self.heading_counter = 0

    def terms_render(self, terms: Sequence[Term], out: List[Event]) -> None:
        """Fold terms and render the resulting line into out"""
        self.line_render(terms_fold(terms), out)

    def line_render(self, line: Line, out: List[Event]) -> None:
        if isinstance(line, Speech):
            self.speech_render(line, out)
        elif isinstance(line, StageDirection):
            self.stageDirection_render(line, out)
        else:
            self.plainLine_render(line, out)

    def speech_render(self, speech: Speech, out: List[Event]) -> None:
        """
        Render a speech wrapped in its <div>, followed by one soft break

        A speech without heading (monologue) renders its body only.
        """
        out.append(Event.htmlBlock(f'<div class="{self.settings.speech_class}">'))

        if speech.heading is not None:
            self.heading_render(speech.heading, out)

        self.body_render(speech.body, out)

        out.append(Event.html('</div>'))
        out.append(Event.softBreak())

    def heading_render(self, heading: Heading, out: List[Event]) -> None:
        """Render the speaker name and heading direction"""
        tag = self.settings.heading_tag
        index = self.heading_counter
        self.heading_counter += 1

        if self.heading_anchors:
            anchor = self.settings.anchorId_make(index)
            out.append(Event.html(f'<{tag} id="{anchor}"><a class="header" href="#{anchor}">'))
        else:
            out.append(Event.html(f'<{tag}>'))

        out.append(Event.html(f'<span class="{self.settings.character_class}">'))
        out.append(Event.text_make(heading.character))
        out.append(Event.html('</span>'))

        self.direction_render(heading.direction, False, out)

        if self.heading_anchors:
            out.append(Event.html(f'</a></{tag}>'))
        else:
            out.append(Event.html(f'</{tag}>'))

    def direction_render(self, direction: Direction, trim_start: bool, out: List[Event]) -> None:
        """
        Render a direction as a styled <span>

        Args:
            direction: Direction to render; an empty one renders nothing
            trim_start: Trim leading whitespace of the first text event
            out: Output buffer
        """
        if not direction:
            return

        out.append(Event.html(f'<span class="{self.settings.direction_class}">'))
        out.extend(self.events_trim(direction.events, trim_start))
        out.append(Event.html('</span>'))

    def body_render(self, body: Sequence[Inline], out: List[Event]) -> None:
        """
        Render a speech body as a paragraph

        Each run of plain events between directions is wrapped in a <span>,
        trimmed at both edges first; a run that trims to nothing gets no
        <span> at all.
        """
        out.append(Event.html('<p>'))
        run: List[Event] = []

        for inline in body:
            if isinstance(inline, Direction):
                self.span_render(run, out)
                run = []
                self.direction_render(inline, True, out)
            else:
                run.append(inline)

        self.span_render(run, out)
        out.append(Event.html('</p>'))

    def span_render(self, run: Sequence[Event], out: List[Event]) -> None:
        events = self.events_trim(run, True)
        if events:
            out.append(Event.html('<span>'))
            out.extend(events)
            out.append(Event.html('</span>'))

    def stageDirection_render(self, line: StageDirection, out: List[Event]) -> None:
        """Render a free-standing direction as its own paragraph, followed by one soft break"""
        out.append(Event.htmlBlock(f'<p class="{self.settings.direction_class}">'))
        out.extend(self.events_trim(line.direction.events, True))
        out.append(Event.html('</p>'))
        out.append(Event.softBreak())

    def plainLine_render(self, line: PlainLine, out: List[Event]) -> None:
        """Render a plain line as an ordinary paragraph, events untouched"""
        out.append(Event.start(PARAGRAPH))
        out.extend(line.events)
        out.append(Event.end(PARAGRAPH))

    def events_trim(self, events: Sequence[Event], trim_start: bool) -> List[Event]:
        """
        Substitute soft breaks, then trim the edges of an inline event run

        Leading whitespace (if trim_start) and trailing whitespace are
        stripped across as many text events as they span, a substituted
        soft break counting as text. Text emptied by trimming is dropped.
        """
        result = [self.softBreak_substitute(event) for event in events]

        if trim_start:
            for index, event in enumerate(result):
                if not event.is_text():
                    break
                result[index] = Event.text_make(event.text.lstrip())
                if result[index].text:
                    break

        for index in range(len(result) - 1, -1, -1):
            event = result[index]
            if not event.is_text():
                break
            result[index] = Event.text_make(event.text.rstrip())
            if result[index].text:
                break

        return [event for event in result if not (event.is_text() and not event.text)]

    def softBreak_substitute(self, event: Event) -> Event:
        if event.is_softBreak() and self.replace_softbreak is not None:
            return Event.text_make(self.replace_softbreak)
        return event
