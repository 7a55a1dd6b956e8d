"""
Heading parser tests

Tests recognition of speech headings and the term layout of a speech.
"""

import pytest

from mdplayscript.lib.lexer import PunctuationLexer
from mdplayscript.lib.parser import heading_match, heading_is, line_parse, LineParser
from mdplayscript.models.events import Event
from mdplayscript.models.terms import (
    Term,
    TermKind,
    HEADING_START,
    HEADING_END,
    BODY_START,
    BODY_END,
    DIRECTION_START,
    DIRECTION_END,
)


def lex(text):
    return list(PunctuationLexer(text))


class TestHeadingMatch:
    """Test the heading pattern predicate"""

    def test_simple_heading(self):
        """`Name>` matches with the trimmed name"""
        match = heading_match(lex("  Figaro > Hi"))
        assert match is not None
        assert match.character == "Figaro"
        assert match.direction is None
        assert match.length == 2

    def test_heading_with_direction(self):
        """`Name (direction)>` matches with the trimmed direction"""
        match = heading_match(lex("A ( aside )> Hi"))
        assert match is not None
        assert match.character == "A"
        assert match.direction == "aside"
        assert match.length == 5

    @pytest.mark.parametrize("text", [
        "Just a line",
        "> quoted",
        "   > blank name",
        "A>> double angle",
        "A (aside) no angle",
        "(Exit.)",
        "A ((x))> runs",
    ])
    def test_not_a_heading(self, text):
        """Other shapes are not headings"""
        assert not heading_is(lex(text))

    def test_event_first_is_not_heading(self):
        """A line starting with markup has no heading"""
        assert not heading_is([Event.code("x"), *lex("> y")])


class TestSpeechTerms:
    """Test term layout of speech lines"""

    def test_simple_speech(self):
        """Heading terms, then body terms"""
        assert line_parse(lex("A> Hi!")) == [
            HEADING_START,
            Term.character("A"),
            HEADING_END,
            BODY_START,
            Term.text_make(" Hi!"),
            BODY_END,
        ]

    def test_heading_direction_terms(self):
        """The heading direction is bracketed inside the heading"""
        assert line_parse(lex("A (aside)> Hi")) == [
            HEADING_START,
            Term.character("A"),
            DIRECTION_START,
            Term.text_make("aside"),
            DIRECTION_END,
            HEADING_END,
            BODY_START,
            Term.text_make(" Hi"),
            BODY_END,
        ]

    def test_empty_heading_direction(self):
        """`A ()>` is not the direction shape, so the line is plain"""
        terms = line_parse(lex("A ()> Hi"))
        assert HEADING_START not in terms

    def test_trailing_soft_break_dropped(self):
        """Soft breaks left at the line end by the segmenter are stripped"""
        terms = line_parse([*lex("A> Hi"), Event.softBreak()])
        assert terms[-2] == Term.text_make(" Hi")
        assert terms[-1] == BODY_END

    def test_empty_body(self):
        """A heading with nothing after it has an empty body"""
        assert line_parse(lex("A>")) == [
            HEADING_START,
            Term.character("A"),
            HEADING_END,
            BODY_START,
            BODY_END,
        ]


class TestPlainAndMonologueLines:
    """Test lines without a heading"""

    def test_plain_line_keeps_literals(self):
        """Punctuation in a plain line is literal text"""
        terms = line_parse(lex("x (y) z"))
        assert all(term.kind == TermKind.TEXT for term in terms)
        assert "".join(term.text for term in terms) == "x (y) z"

    def test_plain_line_keeps_events(self):
        """Inline events of a plain line become EVENT terms"""
        code = Event.code("x")
        assert line_parse([code]) == [Term.event_make(code)]

    def test_stage_direction_line(self):
        """A lone parenthetical is a free-standing direction"""
        assert line_parse(lex("  (Exit Figaro.) ")) == [
            DIRECTION_START,
            Term.text_make("Exit Figaro."),
            DIRECTION_END,
        ]

    def test_monologue_has_no_heading(self):
        """In monologue mode the whole line is body, even `Name>`"""
        terms = LineParser(monologue=True).line_parse(lex("A> text"))
        assert terms[0] == BODY_START
        assert HEADING_START not in terms
        assert terms[-1] == BODY_END
