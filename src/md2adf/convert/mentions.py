"""Mention splicing over an already-converted document tree."""

import dataclasses
import re

from ..core.model import (
    MENTION_USER_TYPE,
    Branch,
    Code,
    CodeBlock,
    Document,
    Mention,
    Node,
    Text,
)

# @[<id>:<display name>], id is hex-like (account ids)
MENTION_RE = re.compile(r"@\[([a-f0-9-]+):([^\]]+)\]")


def process_mentions(doc: Document) -> Document:
    """Return ``doc`` with mention patterns in plain text replaced by mention nodes."""
    return dataclasses.replace(doc, content=_process_children(doc.content))


def split_mentions(leaf: Text) -> Text | list[Text | Mention]:
    """
    Split one text leaf around its mention patterns.

    Code-marked leaves and leaves without a match come back unchanged (the
    same object). Gap text keeps the leaf's marks; empty gaps are omitted.
    A run of exactly one node is returned bare.
    """
    if leaf.has_mark(Code):
        return leaf

    parts: list[Text | Mention] = []
    pos = 0
    for m in MENTION_RE.finditer(leaf.text):
        if m.start() > pos:
            parts.append(Text(leaf.text[pos : m.start()], leaf.marks))
        parts.append(Mention(id=m.group(1), text="@" + m.group(2), user_type=MENTION_USER_TYPE))
        pos = m.end()

    if not parts:
        return leaf
    if pos < len(leaf.text):
        parts.append(Text(leaf.text[pos:], leaf.marks))
    if len(parts) == 1:
        return parts[0]
    return parts


def collect_mentions(node: Node) -> list[Mention]:
    """All mention nodes under ``node``, in document order."""
    if isinstance(node, Mention):
        return [node]
    if isinstance(node, Branch):
        found: list[Mention] = []
        for child in node.content:
            found.extend(collect_mentions(child))
        return found
    return []


def _process(node: Node) -> Node | list[Node]:
    if isinstance(node, CodeBlock):
        return node
    if isinstance(node, Text):
        return split_mentions(node)
    if isinstance(node, Branch):
        return dataclasses.replace(node, content=_process_children(node.content))
    return node


def _process_children(children: list[Node]) -> list[Node]:
    out: list[Node] = []
    for child in children:
        result = _process(child)
        if isinstance(result, list):
            out.extend(result)
        else:
            out.append(result)
    return out
