"""
mdplayscript - Play-script dialect for Markdown

Engine, parsing and rendering library.
"""

__version__ = "1.0.0"

from .engine import PlayScript
from .markdown import events_fromMarkdown
from .html import html_render
from .document import markdown_convert, document_build, params_load, stylesheet_copy
from .directives import DirectiveRegistry, titleBlock_make
from .errors import EngineInvariantError, ParamsError
from .log import LOG, state_connectToLogger

__all__ = [
    "PlayScript",
    "events_fromMarkdown",
    "html_render",
    "markdown_convert",
    "document_build",
    "params_load",
    "stylesheet_copy",
    "DirectiveRegistry",
    "titleBlock_make",
    "EngineInvariantError",
    "ParamsError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
