"""Cheap heuristic for "is this Markdown?"."""

import re
from typing import Any

# Permissive on purpose: a false positive only costs a conversion.
MARKDOWN_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^#{1,6}\s+", re.MULTILINE),  # headings
    re.compile(r"\*\*.*?\*\*"),  # bold
    re.compile(r"\*.*?\*"),  # italic
    re.compile(r"`.*?`"),  # inline code
    re.compile(r"```[\s\S]*?```"),  # fenced code
    re.compile(r"^\s*[-*+]\s+", re.MULTILINE),  # unordered lists
    re.compile(r"^\s*\d+\.\s+", re.MULTILINE),  # ordered lists
    re.compile(r"^\s*>\s+", re.MULTILINE),  # blockquotes
    re.compile(r"\[.*?\]\(.*?\)"),  # links
    re.compile(r"^\s*\|.*\|.*\|", re.MULTILINE),  # table rows
    re.compile(r"^---+$", re.MULTILINE),  # horizontal rules
    # Mentions. Any id shape counts here; only hex-like ids are turned into
    # mention nodes (see convert.mentions.MENTION_RE).
    re.compile(r"@\[[^:\]]+:[^\]]+\]"),
)


def looks_like_markdown(text: Any) -> bool:
    """
    Return True if ``text`` matches any structural Markdown pattern.

    Examples:
        >>> looks_like_markdown("## Heading")
        True
        >>> looks_like_markdown("plain sentence with no markup")
        False
    """
    if not text or not isinstance(text, str):
        return False
    return any(pattern.search(text) for pattern in MARKDOWN_PATTERNS)
