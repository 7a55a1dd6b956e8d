"""
Directive comment implementations for mdplayscript

Directives are HTML comments in the Markdown source, e.g.

    <!-- playscript-monologue-begin -->

Mode directives switch the engine's rendering mode. Metadata directives
emit HTML fragments built from the document Params. Every handler takes
the engine and returns the events to emit in place of the comment.
"""

import html
from typing import Any, Callable, Dict, List, Optional

from ..config import appsettings, AppSettings
from ..models.directives import DirectiveSpec, DirectiveCategory, DIRECTIVE_PREFIX
from ..models.events import Event
from ..models.options import Mode, Params


def comment_extractDirective(text: str) -> Optional[str]:
    """
    Extract the directive name candidate from an HTML comment

    Args:
        text: Content of an HTML event

    Returns:
        Comment body with whitespace and delimiters stripped, or None if
        the text is not a single HTML comment

    Example:
        >>> comment_extractDirective("<!-- playscript-on -->\\n")
        'playscript-on'
    """
    stripped = text.strip()
    if not (stripped.startswith("<!--") and stripped.endswith("-->")):
        return None
    if len(stripped) < len("<!---->"):
        return None
    return stripped[4:-3].strip()


def title_html(params: Params, settings: AppSettings = appsettings) -> Optional[str]:
    """Title heading fragment, None without a title"""
    if not params.title:
        return None
    return f'<h1 class="{settings.title_class}">{html.escape(params.title)}</h1>'


def subtitle_html(params: Params, settings: AppSettings = appsettings) -> Optional[str]:
    """Subtitle heading fragment, None without a subtitle"""
    if not params.subtitle:
        return None
    return f'<h2 class="{settings.subtitle_class}">{html.escape(params.subtitle)}</h2>'


def authors_html(params: Params, settings: AppSettings = appsettings) -> Optional[str]:
    """Authors block fragment, None without authors"""
    if not params.authors:
        return None
    names = "".join(
        f'<span class="{settings.author_class}">{html.escape(author)}</span>'
        for author in params.authors
    )
    return f'<div class="{settings.authors_class}">{names}</div>'


def titleBlock_make(params: Params) -> str:
    """
    Default title block: title, subtitle and authors in a cover <div>

    Used for `playscript-make-title` when the caller supplies no title
    maker of its own.
    """
    parts = [
        fragment
        for fragment in (title_html(params), subtitle_html(params), authors_html(params))
        if fragment is not None
    ]
    return f'<div class="{appsettings.cover_class}">' + "".join(parts) + '</div>'


def fragment_events(fragment: Optional[str]) -> List[Event]:
    """Wrap an HTML fragment as a single block-level HTML event"""
    if not fragment:
        return []
    return [Event.htmlBlock(fragment + "\n")]


class DirectiveRegistry:
    """
    Registry of directive comment specifications and handlers

    Maps directive names to DirectiveSpec objects containing metadata
    and handlers.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in directives"""
        self.specs: Dict[str, DirectiveSpec] = {}
        self.modeDirectives_register()
        self.metadataDirectives_register()

    def register(self, spec: DirectiveSpec) -> None:
        """Register a directive specification"""
        self.specs[spec.name] = spec

    def get(self, name: str) -> Optional[Callable[[Any], List[Event]]]:
        """
        Get directive handler by name

        Args:
            name: Directive name to look up

        Returns:
            Handler function or None if not found
        """
        spec = self.spec_get(name)
        return spec.handler if spec else None

    def spec_get(self, name: str) -> Optional[DirectiveSpec]:
        """Get full directive specification by name"""
        return self.specs.get(name)

    def directives_listByCategory(self, category: DirectiveCategory) -> List[DirectiveSpec]:
        """Get all directives in a category"""
        return [spec for spec in self.specs.values() if spec.category == category]

    def modeDirectives_register(self) -> None:
        """Register directives that switch the rendering mode"""

        def mode_switcher(mode: Mode) -> Callable[[Any], List[Event]]:
            """Factory for handlers that set one mode"""
            def handler(engine: Any) -> List[Event]:
                engine.mode_set(mode)
                return []
            return handler

        mode_specs = [
            ('monologue-begin', Mode.MONOLOGUE),
            ('monologue-end', Mode.PLAYSCRIPT),
            ('on', Mode.PLAYSCRIPT),
            ('off', Mode.OFF),
        ]

        for suffix, mode in mode_specs:
            name = DIRECTIVE_PREFIX + suffix
            self.register(DirectiveSpec(
                name=name,
                category=DirectiveCategory.MODE,
                handler=mode_switcher(mode),
            ))

    def metadataDirectives_register(self) -> None:
        """Register directives that splice document metadata"""

        def title_handler(engine: Any) -> List[Event]:
            """Handle playscript-title - play title heading"""
            return fragment_events(title_html(engine.params))

        def subtitle_handler(engine: Any) -> List[Event]:
            """Handle playscript-subtitle - play subtitle heading"""
            return fragment_events(subtitle_html(engine.params))

        def authors_handler(engine: Any) -> List[Event]:
            """Handle playscript-authors - author names"""
            return fragment_events(authors_html(engine.params))

        def makeTitle_handler(engine: Any) -> List[Event]:
            """Handle playscript-make-title - caller-supplied title block"""
            return fragment_events(engine.title_maker(engine.params))

        metadata_specs = [
            ('title', title_handler),
            ('subtitle', subtitle_handler),
            ('authors', authors_handler),
            ('make-title', makeTitle_handler),
        ]

        for suffix, handler in metadata_specs:
            name = DIRECTIVE_PREFIX + suffix
            self.register(DirectiveSpec(
                name=name,
                category=DirectiveCategory.METADATA,
                handler=handler,
            ))
