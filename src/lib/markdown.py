"""
CommonMark upstream adapter

Parses Markdown with markdown-it-py and flattens its block and inline
token trees into the Event stream the play-script engine consumes.

markdown-it-py emits one flat list of block tokens; every `inline` block
token carries the inline tokens of its content as children. Both levels
are walked in document order here, container `*_open`/`*_close` pairs
becoming START/END events with equal tags.

Adjacent text tokens are merged so that one run of text reaches the
engine as a single TEXT event regardless of how the parser chunked it.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Set

from markdown_it import MarkdownIt
from markdown_it.token import Token as MdToken

from ..models.events import Event, Tag, TagKind


# markdown-it container name -> tag kind
_CONTAINERS = {
    "paragraph": TagKind.PARAGRAPH,
    "heading": TagKind.HEADING,
    "blockquote": TagKind.BLOCKQUOTE,
    "bullet_list": TagKind.LIST,
    "ordered_list": TagKind.LIST,
    "list_item": TagKind.ITEM,
    "em": TagKind.EMPHASIS,
    "strong": TagKind.STRONG,
    "s": TagKind.STRIKETHROUGH,
    "link": TagKind.LINK,
}


def markdown_make(options_update: Optional[Dict[str, Any]] = None) -> MarkdownIt:
    """CommonMark parser with strikethrough enabled"""
    return MarkdownIt("commonmark", options_update).enable("strikethrough")


def container_name(token: MdToken) -> str:
    """Strip the `_open`/`_close` suffix of a container token type"""
    return token.type.rsplit("_", 1)[0]


def tag_make(token: MdToken, tight: bool = False) -> Tag:
    """Build the Tag of an `*_open` token"""
    name = container_name(token)
    kind = _CONTAINERS[name]

    if kind == TagKind.HEADING:
        return Tag(kind, level=int(token.tag[1:]))
    if name == "ordered_list":
        return Tag(kind, start=int(token.attrGet("start") or 1), tight=tight)
    if name == "bullet_list":
        return Tag(kind, tight=tight)
    if kind == TagKind.LINK:
        return Tag(
            kind,
            href=str(token.attrGet("href") or ""),
            title=str(token.attrGet("title") or ""),
        )
    return Tag(kind)


def lists_findTight(tokens: Sequence[MdToken]) -> Set[int]:
    """
    Find the tight lists of a parsed document

    markdown-it marks the paragraphs directly inside the items of a tight
    list as hidden. A list is tight when its first such paragraph is.

    Returns:
        ids of the tight `*_list_open` tokens
    """
    tight: Set[int] = set()
    for index, token in enumerate(tokens):
        if token.type not in ("bullet_list_open", "ordered_list_open"):
            continue
        for following in tokens[index + 1:]:
            if following.level <= token.level:
                break
            if following.type == "paragraph_open" and following.level == token.level + 2:
                if following.hidden:
                    tight.add(id(token))
                break
    return tight


class TokenFlattener:
    """
    Turns markdown-it tokens into Events

    Attributes:
        tags: Tags of the containers currently open, so that every END
              carries the tag of its START
        tight_lists: ids of the list tokens to tag as tight
    """

    def __init__(self, tight_lists: Optional[Set[int]] = None) -> None:
        self.tags: List[Tag] = []
        self.tight_lists: Set[int] = tight_lists or set()

    def tokens_flatten(self, tokens: Iterable[MdToken]) -> Iterator[Event]:
        for token in tokens:
            yield from self.token_flatten(token)

    def token_flatten(self, token: MdToken) -> Iterator[Event]:
        # Tight list items hide their paragraphs; only the content shows
        if token.hidden:
            return

        kind = token.type

        if token.nesting == 1 and container_name(token) in _CONTAINERS:
            tag = tag_make(token, id(token) in self.tight_lists)
            self.tags.append(tag)
            yield Event.start(tag)
        elif token.nesting == -1 and container_name(token) in _CONTAINERS:
            yield Event.end(self.tags.pop())
        elif kind == "inline":
            yield from self.tokens_flatten(token.children or [])
        elif kind in ("text", "text_special"):
            yield Event.text_make(token.content)
        elif kind == "code_inline":
            yield Event.code(token.content)
        elif kind == "html_inline":
            yield Event.html(token.content)
        elif kind == "html_block":
            yield Event.htmlBlock(token.content)
        elif kind == "softbreak":
            yield Event.softBreak()
        elif kind == "hardbreak":
            yield Event.hardBreak()
        elif kind == "hr":
            yield Event.rule()
        elif kind in ("fence", "code_block"):
            tag = Tag(TagKind.CODE_BLOCK, info=token.info.strip())
            yield Event.start(tag)
            if token.content:
                yield Event.text_make(token.content)
            yield Event.end(tag)
        elif kind == "image":
            tag = Tag(
                TagKind.IMAGE,
                href=str(token.attrGet("src") or ""),
                title=str(token.attrGet("title") or ""),
            )
            yield Event.start(tag)
            yield from self.tokens_flatten(token.children or [])
            yield Event.end(tag)


def texts_merge(events: Iterable[Event]) -> Iterator[Event]:
    """Merge runs of adjacent TEXT events into one"""
    pending: Optional[str] = None

    for event in events:
        if event.is_text():
            pending = event.text if pending is None else pending + event.text
            continue
        if pending is not None:
            yield Event.text_make(pending)
            pending = None
        yield event

    if pending is not None:
        yield Event.text_make(pending)


def events_fromMarkdown(source: str, md: Optional[MarkdownIt] = None) -> Iterator[Event]:
    """
    Parse Markdown source into a lazy Event stream

    Args:
        source: Markdown text
        md: Parser to use (defaults to markdown_make())

    Returns:
        Iterator of Events in document order

    Example:
        >>> [e.kind.name for e in events_fromMarkdown("A> *Hi*")]
        ['START', 'TEXT', 'START', 'TEXT', 'END', 'END']
    """
    md = md or markdown_make()
    tokens = md.parse(source)
    flattener = TokenFlattener(lists_findTight(tokens))
    return texts_merge(flattener.tokens_flatten(tokens))
