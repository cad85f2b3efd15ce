"""Main Markdown to ADF driver."""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from .adapters.markdown_lexer import MarkdownItLexer
from .convert.blocks import convert_blocks
from .convert.mentions import process_mentions
from .core.model import Document, empty_document, plain_document
from .core.ports import Lexer
from .detect import looks_like_markdown

logger = logging.getLogger(__name__)


@dataclass
class ConvertOptions:
    """Options for a single conversion."""

    # Splice @[id:name] patterns into mention nodes
    mentions: bool = True

    # Wrap text that does not look like Markdown as one literal paragraph
    detect: bool = False


@lru_cache
def get_lexer(tables: bool = True, strikethrough: bool = True) -> MarkdownItLexer:
    """Return the shared lexer for this parser configuration."""
    return MarkdownItLexer(tables=tables, strikethrough=strikethrough)


def convert_markdown(
    markdown: str,
    options: ConvertOptions | None = None,
    lexer: Lexer | None = None,
) -> Document:
    """Convert Markdown text to a document tree.

    Never raises: if lexing or conversion fails, the whole input comes back
    as one paragraph holding the raw text.

    Args:
        markdown: Raw Markdown, possibly containing ``@[id:name]`` mentions
        options: Conversion options
        lexer: Lexer to use (default: the shared markdown-it lexer)

    Returns:
        Document root
    """
    if options is None:
        options = ConvertOptions()

    if not markdown or not isinstance(markdown, str) or not markdown.strip():
        return empty_document()

    if options.detect and not looks_like_markdown(markdown):
        return plain_document(markdown)

    try:
        tokens = (lexer or get_lexer()).tokenize(markdown)
        doc = Document(content=convert_blocks(tokens))
        if options.mentions:
            doc = process_mentions(doc)
        return doc
    except Exception:
        logger.exception("Error converting markdown to ADF, falling back to plain text")
        return plain_document(markdown)


def markdown_to_adf(
    markdown: str,
    options: ConvertOptions | None = None,
    lexer: Lexer | None = None,
) -> dict[str, Any]:
    """Convert Markdown text to the ADF payload (plain dicts and lists)."""
    return convert_markdown(markdown, options=options, lexer=lexer).to_dict()
