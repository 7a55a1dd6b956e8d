"""
HTML serialization through the markdown-it-py renderer

The Event stream is turned back into the markdown-it token list it came
from (block tokens, with the inline content of each block gathered into
one `inline` token) and handed to markdown-it's own RendererHTML. Markdown
that the play-script engine leaves alone therefore renders exactly as
markdown-it renders it.

Generated fragments travel as raw HTML: block-level HTML events become
`html_block` tokens, inline ones `html_inline` children.

Fenced code blocks can optionally be highlighted with Pygments, using the
style configured in appsettings.pygments_style.
"""

from typing import Iterable, List, Optional

from markdown_it.token import Token as MdToken
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.util import ClassNotFound

from ..config import appsettings
from ..models.events import Event, EventKind, Tag, TagKind
from .markdown import markdown_make


# tag kind -> (markdown-it token type stem, html tag)
_BLOCKS = {
    TagKind.PARAGRAPH: ("paragraph", "p"),
    TagKind.BLOCKQUOTE: ("blockquote", "blockquote"),
    TagKind.ITEM: ("list_item", "li"),
}

_INLINES = {
    TagKind.EMPHASIS: ("em", "em"),
    TagKind.STRONG: ("strong", "strong"),
    TagKind.STRIKETHROUGH: ("s", "s"),
    TagKind.LINK: ("link", "a"),
}


def code_highlight(code: str, language: str, attrs: str = "") -> str:
    """
    markdown-it `highlight` hook: color a fenced code block with inline styles

    Args:
        code: Raw code block content
        language: First word of the info string; unknown languages fall
                  back to plain text
        attrs: Rest of the info string (unused)

    Returns:
        Highlighted spans for markdown-it to wrap in <pre><code>, or "" to
        let markdown-it escape a block without a language
    """
    if not language:
        return ""

    lexer: Lexer
    try:
        lexer = get_lexer_by_name(language)
    except ClassNotFound:
        lexer = TextLexer()

    formatter = HtmlFormatter(style=appsettings.pygments_style, noclasses=True, nowrap=True)
    return highlight(code, lexer, formatter)


def container_token(tag: Tag, nesting: int) -> MdToken:
    """Build the `*_open` (nesting 1) or `*_close` (nesting -1) token of a container"""
    kind = tag.kind
    if kind == TagKind.HEADING:
        stem, html_tag = "heading", f"h{tag.level}"
    elif kind == TagKind.LIST:
        stem, html_tag = ("bullet_list", "ul") if tag.start is None else ("ordered_list", "ol")
    elif kind in _BLOCKS:
        stem, html_tag = _BLOCKS[kind]
    else:
        stem, html_tag = _INLINES[kind]

    suffix = "open" if nesting == 1 else "close"
    token = MdToken(f"{stem}_{suffix}", html_tag, nesting, block=kind not in _INLINES)

    if nesting == 1 and kind == TagKind.LINK:
        token.attrSet("href", tag.href)
        if tag.title:
            token.attrSet("title", tag.title)
    elif nesting == 1 and kind == TagKind.LIST and tag.start not in (None, 1):
        token.attrSet("start", str(tag.start))
    return token


def leaf_token(event: Event) -> MdToken:
    """Build the inline token of a leaf event"""
    kind = event.kind
    if kind == EventKind.CODE:
        return MdToken("code_inline", "code", 0, content=event.text, markup="`")
    if kind == EventKind.HTML:
        return MdToken("html_inline", "", 0, content=event.text)
    if kind == EventKind.SOFT_BREAK:
        return MdToken("softbreak", "br", 0)
    if kind == EventKind.HARD_BREAK:
        return MdToken("hardbreak", "br", 0)
    return MdToken("text", "", 0, content=event.text)


class TokenBuilder:
    """
    Rebuilds a markdown-it token list from an Event stream

    Attributes:
        tokens: Block-level tokens built so far
        blocks: Tags of the block containers currently open
        inline: `inline` token gathering the current run of inline events
        children: Child lists being filled, innermost last; an image
                  collects its alt text as children of its own
        hidden_open: The current inline run is wrapped in the hidden
                     paragraph of a tight list item
        code_tag: Tag of the code block being collected, if any
        code_parts: Text of the code block being collected
    """

    def __init__(self) -> None:
        self.tokens: List[MdToken] = []
        self.blocks: List[Tag] = []
        self.inline: Optional[MdToken] = None
        self.children: List[List[MdToken]] = []
        self.hidden_open = False
        self.code_tag: Optional[Tag] = None
        self.code_parts: List[str] = []

    def events_build(self, events: Iterable[Event]) -> List[MdToken]:
        for event in events:
            self.event_build(event)
        self.inline_flush()
        return self.tokens

    def event_build(self, event: Event) -> None:
        if self.code_tag is not None:
            if event.is_end(TagKind.CODE_BLOCK):
                self.codeBlock_close()
            else:
                self.code_parts.append(event.text)
            return

        kind = event.kind
        tag = event.tag

        if kind == EventKind.START and tag is not None:
            if tag.kind == TagKind.CODE_BLOCK:
                self.inline_flush()
                self.code_tag = tag
                self.code_parts = []
            elif tag.kind == TagKind.IMAGE:
                self.image_open(tag)
            elif tag.kind in _INLINES:
                self.inline_push(container_token(tag, 1))
            else:
                self.block_open(tag)
        elif kind == EventKind.END and tag is not None:
            if tag.kind == TagKind.IMAGE:
                self.children.pop()
            elif tag.kind in _INLINES:
                self.inline_push(container_token(tag, -1))
            else:
                self.block_close(tag)
        elif kind == EventKind.HTML_BLOCK:
            self.block_push(MdToken("html_block", "", 0, content=event.text, block=True))
        elif kind == EventKind.RULE:
            self.block_push(MdToken("hr", "hr", 0, markup="---", block=True))
        else:
            self.inline_push(leaf_token(event))

    def block_open(self, tag: Tag) -> None:
        self.inline_flush()
        self.tokens.append(container_token(tag, 1))
        self.blocks.append(tag)

    def block_close(self, tag: Tag) -> None:
        self.inline_flush()
        self.tokens.append(container_token(tag, -1))
        if self.blocks:
            self.blocks.pop()

    def block_push(self, token: MdToken) -> None:
        self.inline_flush()
        self.tokens.append(token)

    def item_isTight(self) -> bool:
        """True if the innermost open block is an item of a tight list"""
        return (
            len(self.blocks) >= 2
            and self.blocks[-1].kind == TagKind.ITEM
            and self.blocks[-2].tight
        )

    def inline_push(self, token: MdToken) -> None:
        if self.inline is None:
            if self.item_isTight():
                self.tokens.append(MdToken("paragraph_open", "p", 1, block=True, hidden=True))
                self.hidden_open = True
            self.inline = MdToken("inline", "", 0, children=[], block=True)
            self.children = [self.inline.children]
        self.children[-1].append(token)

    def inline_flush(self) -> None:
        if self.inline is None:
            return
        self.tokens.append(self.inline)
        self.inline = None
        self.children = []
        if self.hidden_open:
            self.tokens.append(MdToken("paragraph_close", "p", -1, block=True, hidden=True))
            self.hidden_open = False

    def image_open(self, tag: Tag) -> None:
        token = MdToken("image", "img", 0, children=[])
        token.attrSet("src", tag.href)
        token.attrSet("alt", "")
        if tag.title:
            token.attrSet("title", tag.title)
        self.inline_push(token)
        self.children.append(token.children)

    def codeBlock_close(self) -> None:
        tag = self.code_tag
        self.code_tag = None
        self.tokens.append(
            MdToken(
                "fence",
                "code",
                0,
                info=tag.info if tag else "",
                content="".join(self.code_parts),
                markup="```",
                block=True,
            )
        )


def tokens_fromEvents(events: Iterable[Event]) -> List[MdToken]:
    """Rebuild the markdown-it token list of an Event stream"""
    return TokenBuilder().events_build(events)


def html_render(events: Iterable[Event], highlight: bool = False) -> str:
    """
    Serialize an Event stream to an HTML string with markdown-it's renderer

    Args:
        events: Events, e.g. a PlayScript engine
        highlight: Highlight fenced code blocks with Pygments

    Returns:
        HTML fragment

    Example:
        >>> html_render(events_fromMarkdown("*Hi* <b>"))
        '<p><em>Hi</em> <b></p>\\n'
    """
    md = markdown_make({"highlight": code_highlight} if highlight else None)
    return md.renderer.render(tokens_fromEvents(events), md.options, {})
