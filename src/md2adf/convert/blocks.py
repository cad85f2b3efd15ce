"""Token stream to document tree conversion."""

from typing import Iterable

from ..core.model import (
    DEFAULT_LANGUAGE,
    Block,
    Blockquote,
    BulletList,
    Code,
    CodeBlock,
    Em,
    Heading,
    Inline,
    Link,
    ListItem,
    Mark,
    OrderedList,
    Paragraph,
    Rule,
    Strike,
    Strong,
    Table,
    TableCell,
    TableHeader,
    TableRow,
    Text,
)
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
    ParagraphToken,
    SpaceToken,
    StrongToken,
    TableToken,
    TextToken,
)


def convert_blocks(tokens: Iterable[BlockToken]) -> list[Block]:
    """
    Convert block tokens to block nodes, in order.

    Tokens with no mapping (``space``, unknown kinds without text) are
    dropped rather than raising.
    """
    nodes: list[Block] = []
    for token in tokens:
        node = convert_block(token)
        if node is not None:
            nodes.append(node)
    return nodes


def convert_block(token: BlockToken) -> Block | ListItem | None:
    if isinstance(token, ParagraphToken):
        return Paragraph(content=_inline_content(token.children, token.text))

    if isinstance(token, HeadingToken):
        return Heading(
            content=_inline_content(token.children, token.text),
            level=token.depth or 1,
        )

    if isinstance(token, BlockquoteToken):
        return Blockquote(content=convert_blocks(token.children))

    if isinstance(token, ListToken):
        items = [convert_list_item(item) for item in token.items]
        if token.ordered:
            return OrderedList(content=items)
        return BulletList(content=items)

    if isinstance(token, ListItemToken):
        return convert_list_item(token)

    if isinstance(token, CodeToken):
        return CodeBlock.of(token.text, token.lang or DEFAULT_LANGUAGE)

    if isinstance(token, TableToken):
        return convert_table(token)

    if isinstance(token, HrToken):
        return Rule()

    if isinstance(token, SpaceToken):
        return None

    if isinstance(token, OtherBlockToken) and token.text:
        return Paragraph(content=[Text(token.text)])

    return None


def convert_list_item(token: ListItemToken) -> ListItem:
    return ListItem(content=convert_blocks(token.children))


def convert_table(token: TableToken) -> Table:
    if token.header is None or token.cells is None:
        return Table(content=[])

    rows = [TableRow(content=[TableHeader(content=[_cell_paragraph(c)]) for c in token.header])]
    for row in token.cells:
        rows.append(TableRow(content=[TableCell(content=[_cell_paragraph(c)]) for c in row]))
    return Table(content=rows)


def _cell_paragraph(text: str) -> Paragraph:
    return Paragraph(content=[Text(text)])


def _inline_content(children: tuple[InlineToken, ...], text: str) -> list[Inline]:
    if children:
        content: list[Inline] = []
        for child in children:
            content.extend(convert_inline(child))
        return content
    if text:
        return [Text(text)]
    return []


def convert_inline(token: InlineToken) -> list[Inline]:
    """
    Convert one inline token into text leaves.

    Wrapping tokens convert their children first and then append their own
    mark to every text leaf, so ``strong(em(x))`` yields marks ``[em, strong]``.
    """
    children = getattr(token, "children", ())
    mark = _mark_for(token)

    if children:
        leaves: list[Inline] = []
        for child in children:
            leaves.extend(convert_inline(child))
        if mark is None:
            return leaves
        return [leaf.with_mark(mark) if isinstance(leaf, Text) else leaf for leaf in leaves]

    if isinstance(token, CodespanToken):
        return [Text(token.text, (Code(),))]
    if not token.text:
        return []
    if mark is not None:
        return [Text(token.text, (mark,))]
    return [Text(token.text)]


def _mark_for(token: InlineToken) -> Mark | None:
    if isinstance(token, StrongToken):
        return Strong()
    if isinstance(token, EmToken):
        return Em()
    if isinstance(token, DelToken):
        return Strike()
    if isinstance(token, LinkToken):
        return Link(href=token.href or "", title=token.title or "")
    return None
