from typing import Protocol

from .tokens import BlockToken


class Lexer(Protocol):
    """
    Turn raw Markdown into block tokens. Implementations wrap an external
    tokenizer and MUST only emit the token kinds declared in ``core.tokens``.
    """

    def tokenize(self, text: str) -> list[BlockToken]:
        pass
