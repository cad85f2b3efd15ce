"""Token-to-tree conversion and the mention pass."""

from .blocks import convert_blocks, convert_inline
from .mentions import MENTION_RE, collect_mentions, process_mentions, split_mentions

__all__ = [
    "MENTION_RE",
    "collect_mentions",
    "convert_blocks",
    "convert_inline",
    "process_mentions",
    "split_mentions",
]
