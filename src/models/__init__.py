"""
Models package for mdplayscript

Contains data structures and type definitions for the conversion pipeline.
"""

from .state import ProgramState, pipeline
from .events import Event, EventKind, Tag, TagKind
from .tokens import (
    TextToken,
    Token,
    PlainText,
    Rangle,
    RangleRun,
    LeftParen,
    LeftParenRun,
    RightParen,
    RightParenRun,
)
from .terms import Term, TermKind
from .speech import Speech, Heading, Direction, Inline, PlainLine, StageDirection
from .options import Mode, Options, Params, TitleMaker
from .directives import DirectiveSpec, DirectiveCategory, DIRECTIVE_PREFIX
from .parser import HeadingMatch, ParenMatch

__all__ = [
    "ProgramState",
    "pipeline",
    "Event",
    "EventKind",
    "Tag",
    "TagKind",
    "TextToken",
    "Token",
    "PlainText",
    "Rangle",
    "RangleRun",
    "LeftParen",
    "LeftParenRun",
    "RightParen",
    "RightParenRun",
    "Term",
    "TermKind",
    "Speech",
    "Heading",
    "Direction",
    "Inline",
    "PlainLine",
    "StageDirection",
    "Mode",
    "Options",
    "Params",
    "TitleMaker",
    "DirectiveSpec",
    "DirectiveCategory",
    "DIRECTIVE_PREFIX",
    "HeadingMatch",
    "ParenMatch",
]
