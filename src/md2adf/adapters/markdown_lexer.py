"""Lexer adapter over markdown-it-py.

Parses with the CommonMark preset (plus GFM tables and strikethrough) and
lowers the resulting syntax tree into the closed token types of
``md2adf.core.tokens``.
"""

import logging
from typing import Iterable

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from ..core.ports import Lexer
from ..core.tokens import (
    BlockquoteToken,
    BlockToken,
    CodespanToken,
    CodeToken,
    DelToken,
    EmToken,
    HeadingToken,
    HrToken,
    InlineToken,
    LinkToken,
    ListItemToken,
    ListToken,
    OtherBlockToken,
    OtherInlineToken,
    ParagraphToken,
    StrongToken,
    TableToken,
    TextToken,
)

logger = logging.getLogger(__name__)

_LINE_BREAKS = {"softbreak", "hardbreak"}


def create_parser(tables: bool = True, strikethrough: bool = True) -> MarkdownIt:
    """Create configured markdown-it parser."""
    md = MarkdownIt("commonmark")
    if tables:
        md.enable("table")
    if strikethrough:
        md.enable("strikethrough")
    return md


class MarkdownItLexer(Lexer):
    def __init__(self, tables: bool = True, strikethrough: bool = True):
        self.md = create_parser(tables=tables, strikethrough=strikethrough)

    def tokenize(self, text: str) -> list[BlockToken]:
        tree = SyntaxTreeNode(self.md.parse(text))
        blocks = _blocks(tree.children)
        logger.debug("lexed %d block tokens from %d chars", len(blocks), len(text))
        return blocks


def _blocks(nodes: Iterable[SyntaxTreeNode]) -> list[BlockToken]:
    return [_block(node) for node in nodes]


def _block(node: SyntaxTreeNode) -> BlockToken:
    kind = node.type

    if kind in ("paragraph", "heading"):
        inline = _inline_root(node)
        text = inline.content if inline is not None else ""
        children = _inlines(inline.children) if inline is not None else ()
        if kind == "heading":
            return HeadingToken(text=text, children=children, depth=_heading_depth(node.tag))
        return ParagraphToken(text=text, children=children)

    if kind == "blockquote":
        return BlockquoteToken(children=tuple(_blocks(node.children)))

    if kind in ("bullet_list", "ordered_list"):
        ordered = kind == "ordered_list"
        items = tuple(
            ListItemToken(children=tuple(_blocks(item.children)))
            for item in node.children
            if item.type == "list_item"
        )
        start = None
        if ordered:
            start = int(node.attrs.get("start", 1))
        return ListToken(items=items, ordered=ordered, start=start)

    if kind == "fence":
        info = node.info.strip()
        lang = info.split()[0] if info else None
        return CodeToken(text=_strip_final_eol(node.content), lang=lang)

    if kind == "code_block":
        return CodeToken(text=_strip_final_eol(node.content))

    if kind == "table":
        return _table(node)

    if kind == "hr":
        return HrToken()

    return OtherBlockToken(kind=kind, text=_strip_final_eol(node.content))


def _table(node: SyntaxTreeNode) -> TableToken:
    header: tuple[str, ...] | None = None
    rows: list[tuple[str, ...]] = []
    for section in node.children:
        for tr in section.children:
            row = tuple(_cell_text(cell) for cell in tr.children)
            if section.type == "thead" and header is None:
                header = row
            else:
                rows.append(row)
    if header is None:
        return TableToken()
    return TableToken(header=header, cells=tuple(rows))


def _cell_text(cell: SyntaxTreeNode) -> str:
    inline = _inline_root(cell)
    return inline.content if inline is not None else ""


def _inline_root(node: SyntaxTreeNode) -> SyntaxTreeNode | None:
    for child in node.children:
        if child.type == "inline":
            return child
    return None


def _inlines(nodes: Iterable[SyntaxTreeNode]) -> tuple[InlineToken, ...]:
    # markdown-it splits text at breaks and some punctuation; join the pieces
    # back so mention patterns are always seen whole. Emphasis delimiter runs
    # leave empty text tokens behind, which are dropped.
    out: list[InlineToken] = []
    for node in nodes:
        token = _inline(node)
        if isinstance(token, TextToken) and not token.text:
            continue
        if isinstance(token, TextToken) and out and isinstance(out[-1], TextToken):
            out[-1] = TextToken(out[-1].text + token.text)
        else:
            out.append(token)
    return tuple(out)


def _inline(node: SyntaxTreeNode) -> InlineToken:
    kind = node.type

    if kind in ("text", "text_special"):
        return TextToken(node.content)
    if kind in _LINE_BREAKS:
        return TextToken("\n")
    if kind == "code_inline":
        return CodespanToken(node.content)

    children = _inlines(node.children)
    text = "".join(_flatten(node))

    if kind == "strong":
        return StrongToken(text=text, children=children)
    if kind == "em":
        return EmToken(text=text, children=children)
    if kind == "s":
        return DelToken(text=text, children=children)
    if kind == "link":
        title = node.attrs.get("title")
        return LinkToken(
            text=text,
            href=str(node.attrs.get("href", "")),
            title=str(title) if title is not None else None,
            children=children,
        )
    if kind == "image":
        # alt text lives in the token content
        return OtherInlineToken(kind=kind, text=node.content)
    return OtherInlineToken(kind=kind, text=text or node.content, children=children)


def _flatten(node: SyntaxTreeNode) -> Iterable[str]:
    for child in node.children:
        if child.type in _LINE_BREAKS:
            yield "\n"
        elif child.children:
            yield from _flatten(child)
        else:
            yield child.content


def _heading_depth(tag: str) -> int | None:
    if len(tag) == 2 and tag[0] == "h" and tag[1].isdigit():
        return int(tag[1])
    return None


def _strip_final_eol(text: str) -> str:
    if text.endswith("\n"):
        return text[:-1]
    return text
