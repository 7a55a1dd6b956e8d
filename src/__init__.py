"""
mdplayscript - Play-script dialect for Markdown

Write plays in Markdown with `Name> line` speeches and `(direction)`
parentheticals, and convert them to styled HTML.
"""

__version__ = "1.0.0"

from .lib import (
    PlayScript,
    events_fromMarkdown,
    html_render,
    markdown_convert,
    document_build,
    DirectiveRegistry,
    LOG,
    state_connectToLogger,
)
from .models import Options, Params, Mode

__all__ = [
    "PlayScript",
    "events_fromMarkdown",
    "html_render",
    "markdown_convert",
    "document_build",
    "DirectiveRegistry",
    "Options",
    "Params",
    "Mode",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
