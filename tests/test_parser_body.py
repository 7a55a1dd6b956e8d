"""
Body parser tests

Tests directions, paren balancing, leniency for unterminated parens and
passthrough of inline markup inside speech bodies.
"""

import pytest

from mdplayscript.lib.lexer import PunctuationLexer
from mdplayscript.lib.parser import LineParser, paren_findMatching, parens_split, stageDirection_is
from mdplayscript.models.events import Event, Tag, TagKind
from mdplayscript.models.terms import Term, TermKind, DIRECTION_START, DIRECTION_END
from mdplayscript.models.tokens import LeftParen, LeftParenRun, RightParen, PlainText


def body(text):
    """Body terms of `text` parsed as a speech body"""
    return LineParser().body_parse(list(PunctuationLexer(text)))


def texts(terms):
    return [term.text for term in terms if term.kind == TermKind.TEXT]


class TestDirections:
    """Test parenthetical directions in a body"""

    def test_single_direction(self):
        """Balanced parens become a direction"""
        assert body("Hi (waves) there") == [
            Term.text_make("Hi "),
            DIRECTION_START,
            Term.text_make("waves"),
            DIRECTION_END,
            Term.text_make(" there"),
        ]

    def test_two_directions(self):
        """Each parenthetical is its own direction"""
        terms = body("(a) x (b)")
        assert terms.count(DIRECTION_START) == 2
        assert terms.count(DIRECTION_END) == 2

    def test_nested_parens_one_direction(self):
        """`(running (hard) )` is one direction with literal inner parens"""
        terms = body("I am (running (hard) ) now")
        assert terms.count(DIRECTION_START) == 1
        start = terms.index(DIRECTION_START)
        end = terms.index(DIRECTION_END)
        assert "".join(texts(terms[start:end])) == "running (hard) "
        assert terms[end + 1] == Term.text_make(" now")

    def test_paren_runs_balance(self):
        """Runs are split so `((x))` balances"""
        terms = body("((x))")
        assert terms == [
            DIRECTION_START,
            Term.text_make("("),
            Term.text_make("x"),
            Term.text_make(")"),
            DIRECTION_END,
        ]

    def test_angle_inside_direction_dropped(self):
        """Angles inside a direction carry nothing"""
        assert texts(body("(a > b)")) == ["a ", " b"]


class TestLeniency:
    """Test malformed punctuation degrading gracefully"""

    def test_unterminated_paren_is_literal(self):
        """A `(` without a match stays literal text"""
        assert texts(body("Hi (there")) == ["Hi ", "(", "there"]

    def test_unterminated_then_balanced(self):
        """An unmatched `(` does not swallow a later direction"""
        terms = body("a ( b (c)")
        assert terms.count(DIRECTION_START) == 1
        assert Term.text_make("(") in terms

    def test_stray_closer_dropped(self):
        """A lone `)` in a body is escaped"""
        assert texts(body("a ) b")) == ["a ", " b"]

    def test_stray_angle_dropped(self):
        """A lone `>` in a body is escaped"""
        assert texts(body("x > y")) == ["x ", " y"]


class TestInlineMarkup:
    """Test inline events inside bodies and directions"""

    def test_event_passes_through(self):
        """Inline code in a body is an EVENT term"""
        code = Event.code("x")
        assert LineParser().body_parse([code]) == [Term.event_make(code)]

    def test_event_inside_direction(self):
        """Inline markup keeps its start/end pairing inside a direction"""
        emphasis = Tag(TagKind.EMPHASIS)
        tokens = [
            LeftParen(),
            Event.start(emphasis),
            Event.text_make("softly"),
            Event.end(emphasis),
            RightParen(),
        ]
        assert LineParser().body_parse(tokens) == [
            DIRECTION_START,
            Term.event_make(Event.start(emphasis)),
            Term.event_make(Event.text_make("softly")),
            Term.event_make(Event.end(emphasis)),
            DIRECTION_END,
        ]


class TestParenHelpers:
    """Test paren matching helpers"""

    def test_parens_split(self):
        """Runs become single parens"""
        assert parens_split([LeftParenRun(2)]) == [LeftParen(), LeftParen()]

    def test_find_matching_depth(self):
        """The match skips nested pairs"""
        tokens = parens_split(PunctuationLexer("(a (b) c) d"))
        match = paren_findMatching(tokens, 0)
        assert match is not None
        assert match.start == 0
        assert isinstance(tokens[match.end], RightParen)
        assert tokens[match.end + 1] == PlainText(" d")

    def test_find_matching_unclosed(self):
        """An unclosed paren has no match"""
        tokens = parens_split(PunctuationLexer("(a (b)"))
        assert paren_findMatching(tokens, 0) is None

    @pytest.mark.parametrize("text, expected", [
        ("(Exit.)", True),
        ("  (Exit.)  ", True),
        ("(a) (b)", False),
        ("(a) tail", False),
        ("(unclosed", False),
        ("plain", False),
    ])
    def test_stage_direction_predicate(self, text, expected):
        """Only one balanced parenthetical makes a stage direction line"""
        assert stageDirection_is(parens_split(PunctuationLexer(text))) is expected
