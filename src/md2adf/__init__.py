"""Markdown to Atlassian Document Format conversion with @[id:name] mentions."""

from .converter import ConvertOptions, convert_markdown, markdown_to_adf
from .convert.mentions import process_mentions
from .core.model import Document, empty_document, plain_document
from .detect import looks_like_markdown

__version__ = "0.3.0"

__all__ = [
    "ConvertOptions",
    "Document",
    "convert_markdown",
    "empty_document",
    "looks_like_markdown",
    "markdown_to_adf",
    "plain_document",
    "process_mentions",
]
