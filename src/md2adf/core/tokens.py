from __future__ import annotations
from dataclasses import dataclass
from typing import Union

# Block tokens


@dataclass(frozen=True)
class ParagraphToken:
    text: str = ""
    children: tuple["InlineToken", ...] = ()


@dataclass(frozen=True)
class HeadingToken:
    text: str = ""
    children: tuple["InlineToken", ...] = ()
    depth: int | None = None  # 1-6


@dataclass(frozen=True)
class BlockquoteToken:
    children: tuple["BlockToken", ...] = ()


@dataclass(frozen=True)
class ListItemToken:
    children: tuple["BlockToken", ...] = ()


@dataclass(frozen=True)
class ListToken:
    items: tuple[ListItemToken, ...] = ()
    ordered: bool = False
    start: int | None = None


@dataclass(frozen=True)
class CodeToken:
    text: str = ""
    lang: str | None = None


@dataclass(frozen=True)
class TableToken:
    header: tuple[str, ...] | None = None
    cells: tuple[tuple[str, ...], ...] | None = None


@dataclass(frozen=True)
class HrToken:
    pass


@dataclass(frozen=True)
class SpaceToken:
    pass


@dataclass(frozen=True)
class OtherBlockToken:
    kind: str  # lexer-specific name, e.g. "html_block"
    text: str = ""


# Inline tokens


@dataclass(frozen=True)
class TextToken:
    text: str = ""


@dataclass(frozen=True)
class StrongToken:
    text: str = ""
    children: tuple["InlineToken", ...] = ()


@dataclass(frozen=True)
class EmToken:
    text: str = ""
    children: tuple["InlineToken", ...] = ()


@dataclass(frozen=True)
class DelToken:
    text: str = ""
    children: tuple["InlineToken", ...] = ()


@dataclass(frozen=True)
class CodespanToken:
    text: str = ""


@dataclass(frozen=True)
class LinkToken:
    text: str = ""
    href: str | None = None
    title: str | None = None
    children: tuple["InlineToken", ...] = ()


@dataclass(frozen=True)
class OtherInlineToken:
    kind: str  # e.g. "image", "html_inline"
    text: str = ""
    children: tuple["InlineToken", ...] = ()


BlockToken = Union[
    ParagraphToken,
    HeadingToken,
    BlockquoteToken,
    ListToken,
    ListItemToken,
    CodeToken,
    TableToken,
    HrToken,
    SpaceToken,
    OtherBlockToken,
]

InlineToken = Union[
    TextToken,
    StrongToken,
    EmToken,
    DelToken,
    CodespanToken,
    LinkToken,
    OtherInlineToken,
]
