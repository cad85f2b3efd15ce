from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

DOC_VERSION = 1
DEFAULT_LANGUAGE = "text"
MENTION_USER_TYPE = "APP"


# -- marks -------------------------------------------------------------------


@dataclass(frozen=True)
class Mark:
    type: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class Strong(Mark):
    type: ClassVar[str] = "strong"


@dataclass(frozen=True)
class Em(Mark):
    type: ClassVar[str] = "em"


@dataclass(frozen=True)
class Strike(Mark):
    type: ClassVar[str] = "strike"


@dataclass(frozen=True)
class Code(Mark):
    type: ClassVar[str] = "code"


@dataclass(frozen=True)
class Link(Mark):
    type: ClassVar[str] = "link"
    href: str = ""
    title: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "attrs": {"href": self.href, "title": self.title}}


# -- inline nodes ------------------------------------------------------------


@dataclass(frozen=True)
class Text:
    text: str
    marks: tuple[Mark, ...] = ()
    type: ClassVar[str] = "text"

    def with_mark(self, mark: Mark) -> "Text":
        """Return a copy with ``mark`` appended after the existing marks."""
        return Text(self.text, self.marks + (mark,))

    def has_mark(self, kind: type[Mark]) -> bool:
        return any(isinstance(m, kind) for m in self.marks)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type, "text": self.text}
        if self.marks:
            out["marks"] = [m.to_dict() for m in self.marks]
        return out


@dataclass(frozen=True)
class Mention:
    id: str
    text: str  # display text, "@"-prefixed
    user_type: str = MENTION_USER_TYPE
    type: ClassVar[str] = "mention"

    @property
    def source(self) -> str:
        """The ``@[id:name]`` span this mention was parsed from."""
        return f"@[{self.id}:{self.text[1:]}]"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "attrs": {"id": self.id, "text": self.text, "userType": self.user_type},
        }


Inline = Union[Text, Mention]


# -- block nodes -------------------------------------------------------------


@dataclass
class Branch:
    """Any node that owns an ordered content sequence."""

    content: list[Any] = field(default_factory=list)
    type: ClassVar[str] = ""

    def attrs(self) -> dict[str, Any] | None:
        return None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        attrs = self.attrs()
        if attrs is not None:
            out["attrs"] = attrs
        out["content"] = [child.to_dict() for child in self.content]
        return out


@dataclass
class Paragraph(Branch):
    content: list[Inline] = field(default_factory=list)
    type: ClassVar[str] = "paragraph"


@dataclass
class Heading(Branch):
    content: list[Inline] = field(default_factory=list)
    level: int = 1
    type: ClassVar[str] = "heading"

    def attrs(self) -> dict[str, Any]:
        return {"level": self.level}


@dataclass
class Blockquote(Branch):
    type: ClassVar[str] = "blockquote"


@dataclass
class ListItem(Branch):
    type: ClassVar[str] = "listItem"


@dataclass
class BulletList(Branch):
    content: list[ListItem] = field(default_factory=list)
    type: ClassVar[str] = "bulletList"


@dataclass
class OrderedList(Branch):
    content: list[ListItem] = field(default_factory=list)
    type: ClassVar[str] = "orderedList"


@dataclass
class CodeBlock(Branch):
    content: list[Text] = field(default_factory=list)
    language: str = DEFAULT_LANGUAGE
    type: ClassVar[str] = "codeBlock"

    @classmethod
    def of(cls, code: str, language: str | None = None) -> "CodeBlock":
        return cls(content=[Text(code)], language=language or DEFAULT_LANGUAGE)

    def attrs(self) -> dict[str, Any]:
        return {"language": self.language}


@dataclass
class TableHeader(Branch):
    content: list[Paragraph] = field(default_factory=list)
    type: ClassVar[str] = "tableHeader"


@dataclass
class TableCell(Branch):
    content: list[Paragraph] = field(default_factory=list)
    type: ClassVar[str] = "tableCell"


@dataclass
class TableRow(Branch):
    content: list[TableHeader | TableCell] = field(default_factory=list)
    type: ClassVar[str] = "tableRow"


@dataclass
class Table(Branch):
    content: list[TableRow] = field(default_factory=list)
    type: ClassVar[str] = "table"


@dataclass(frozen=True)
class Rule:
    type: ClassVar[str] = "rule"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


Block = Union[
    Paragraph, Heading, Blockquote, BulletList, OrderedList, CodeBlock, Table, Rule
]
Node = Union[Branch, Text, Mention, Rule]


@dataclass
class Document(Branch):
    content: list[Block] = field(default_factory=list)
    version: int = DOC_VERSION
    type: ClassVar[str] = "doc"

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "type": self.type,
            "content": [child.to_dict() for child in self.content],
        }


def empty_document() -> Document:
    return Document(content=[])


def plain_document(text: str) -> Document:
    """Wrap ``text`` verbatim as a single unmarked paragraph."""
    return Document(content=[Paragraph(content=[Text(text)])])


def plain_text(node: Node) -> str:
    """
    Render a node back to its literal text.

    Mentions render as their ``@[id:name]`` source span; block boundaries add
    nothing, so this is meant for comparing inline runs.
    """
    if isinstance(node, Text):
        return node.text
    if isinstance(node, Mention):
        return node.source
    if isinstance(node, Branch):
        return "".join(plain_text(child) for child in node.content)
    return ""
