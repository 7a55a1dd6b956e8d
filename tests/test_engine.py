"""
Engine tests

Tests the mode state machine, directive comments and the upstream
hand-off of the PlayScript engine.
"""

import pytest

from mdplayscript.lib.engine import PlayScript
from mdplayscript.lib.errors import EngineInvariantError
from mdplayscript.lib.html import html_render
from mdplayscript.lib.markdown import events_fromMarkdown
from mdplayscript.models.events import Event, PARAGRAPH
from mdplayscript.models.options import Mode, Options, Params


def convert(source, **kwargs):
    return html_render(PlayScript(events_fromMarkdown(source), **kwargs))


SPEECH_A = '<div class="speech"><h5><span class="character">A</span></h5><p><span>Hi!</span></p></div>\n'


class TestModes:
    """Test mode switching directives"""

    def test_default_mode_is_playscript(self):
        """Speeches are converted without any directive"""
        assert convert("A> Hi!") == SPEECH_A

    def test_disabled_in_default(self):
        """disabled_in_default starts in OFF mode"""
        engine = PlayScript(iter([]), options=Options(disabled_in_default=True))
        assert engine.mode == Mode.OFF
        assert convert("A> Hi!", options=Options(disabled_in_default=True)) == "<p>A&gt; Hi!</p>\n"

    def test_off_then_on(self):
        """Paragraphs between off and on pass through unmodified"""
        source = "<!-- playscript-off -->\n\nA> Hi!\n\n<!-- playscript-on -->\n\nA> Hi!\n"
        assert convert(source) == "<p>A&gt; Hi!</p>\n" + SPEECH_A

    def test_on_enables_disabled_document(self):
        """playscript-on turns conversion on in a disabled document"""
        source = "<!-- playscript-on -->\n\nA> Hi!\n"
        assert convert(source, options=Options(disabled_in_default=True)) == SPEECH_A

    def test_monologue(self):
        """Monologue paragraphs have no heading, dialogue resumes after"""
        source = (
            "<!-- playscript-monologue-begin -->\n\n"
            "Text (dir)\n\n"
            "<!-- playscript-monologue-end -->\n\n"
            "A> Hi!\n"
        )
        assert convert(source) == (
            '<div class="speech"><p><span>Text</span>'
            '<span class="direction">dir</span></p></div>\n'
            + SPEECH_A
        )

    def test_monologue_ignores_headings(self):
        """`Name>` in a monologue is body text with the angle escaped"""
        source = "<!-- playscript-monologue-begin -->\n\nA> Hi!\n"
        assert convert(source) == '<div class="speech"><p><span>A Hi!</span></p></div>\n'

    def test_mode_set_directly(self):
        """mode_set() switches mode between paragraphs"""
        engine = PlayScript(iter([]))
        engine.mode_set(Mode.MONOLOGUE)
        assert engine.mode == Mode.MONOLOGUE


class TestDirectives:
    """Test directive comment handling"""

    def test_directive_consumed(self):
        """Recognized directives produce no output of their own"""
        assert convert("<!-- playscript-on -->\n") == ""

    def test_unknown_comment_passes_through(self):
        """Comments that are not directives are kept"""
        assert convert("<!-- a note -->\n") == "<!-- a note -->\n"

    def test_other_html_passes_through(self):
        """Raw HTML blocks are kept"""
        assert convert("<div>raw</div>\n") == "<div>raw</div>\n"

    def test_unknown_playscript_comment_passes_through(self):
        """A misspelled directive is an ordinary comment"""
        assert convert("<!-- playscript-of -->\n") == "<!-- playscript-of -->\n"

    def test_title_directives(self):
        """Metadata directives emit fragments from Params"""
        params = Params(title="Figaro", subtitle="A comedy", authors=["Beaumarchais", "Da Ponte"])
        source = "<!-- playscript-title -->\n\n<!-- playscript-subtitle -->\n\n<!-- playscript-authors -->\n"
        assert convert(source, params=params) == (
            '<h1 class="title">Figaro</h1>\n'
            '<h2 class="subtitle">A comedy</h2>\n'
            '<div class="authors"><span class="author">Beaumarchais</span>'
            '<span class="author">Da Ponte</span></div>\n'
        )

    def test_missing_metadata_emits_nothing(self):
        """Without params the metadata directives are silent"""
        assert convert("<!-- playscript-title -->\n\n<!-- playscript-authors -->\n") == ""

    def test_metadata_is_escaped(self):
        """Params values are escaped in fragments"""
        assert convert("<!-- playscript-title -->\n", params=Params(title="R&J")) == (
            '<h1 class="title">R&amp;J</h1>\n'
        )

    def test_make_title_default(self):
        """The default title block is a cover div"""
        params = Params(title="Figaro", authors=["Beaumarchais"])
        assert convert("<!-- playscript-make-title -->\n", params=params) == (
            '<div class="cover"><h1 class="title">Figaro</h1>'
            '<div class="authors"><span class="author">Beaumarchais</span></div></div>\n'
        )

    def test_make_title_custom(self):
        """A caller-supplied title maker is used for make-title"""
        def title_maker(params):
            return f"<header>{params.title}</header>"

        result = convert(
            "<!-- playscript-make-title -->\n",
            params=Params(title="Figaro"),
            title_maker=title_maker,
        )
        assert result == "<header>Figaro</header>\n"


class TestHeadingCounter:
    """Test anchor numbering across a document"""

    def test_counter_spans_paragraphs(self):
        """Anchor ids keep counting across paragraphs"""
        html = convert("A> x\nB> y\n\nC> z\n", options=Options(heading_anchors=True))
        assert 'id="speech-0"' in html
        assert 'id="speech-1"' in html
        assert 'id="speech-2"' in html

    def test_each_engine_starts_at_zero(self):
        """A new engine starts numbering from zero"""
        options = Options(heading_anchors=True)
        assert 'id="speech-0"' in convert("A> x", options=options)
        assert 'id="speech-0"' in convert("B> y", options=options)


class TestUpstream:
    """Test the upstream hand-off"""

    def test_unwrap_returns_rest(self):
        """unwrap() gives back the upstream after what was consumed"""
        rule = Event.rule()
        engine = PlayScript(iter([Event.rule(), rule, Event.hardBreak()]))
        next(engine)
        assert list(engine.unwrap()) == [rule, Event.hardBreak()]

    def test_borrow_blocks_access(self):
        """While lent out, the upstream is not reachable"""
        engine = PlayScript(iter([]))
        with engine.upstream_borrow():
            with pytest.raises(EngineInvariantError):
                engine.unwrap()

    def test_borrow_reclaims_on_error(self):
        """The upstream is taken back even when the paragraph fails"""
        rule = Event.rule()
        engine = PlayScript(iter([Event.text_make("x"), Event.end(PARAGRAPH), rule]))
        with pytest.raises(ValueError):
            with engine.upstream_borrow() as tokenizer:
                next(tokenizer)
                raise ValueError("boom")
        assert next(engine.unwrap()) is not None

    def test_paragraph_leaves_upstream_after_end(self):
        """Converting a paragraph consumes exactly its events"""
        rule = Event.rule()
        upstream = iter([
            Event.start(PARAGRAPH),
            Event.text_make("A> Hi!"),
            Event.end(PARAGRAPH),
            rule,
        ])
        events = list(PlayScript(upstream))
        assert events[-1] == rule


class TestStreamingSegmentation:
    """Test the engine with the streaming segmenter"""

    def test_same_output_for_simple_dialogue(self):
        """Both segmenters agree on `Name>` dialogue"""
        source = "A> Hi!\nHow are you?\nB> Fine (smiles).\n"
        assert convert(source, options=Options(streaming_segmentation=True)) == convert(source)
