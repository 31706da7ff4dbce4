"""Builtin source token provider.

Runs the snippet lexer in source mode, so source and pattern tokens are
split by exactly the same rules.
"""

from __future__ import annotations

from smartpatch.lexer import Lexer, LexerMode, normalize_depths
from smartpatch.providers import register_provider
from smartpatch.tokens import Token


@register_provider("builtin")
class BuiltinTokenProvider:
    """Hand-written C-family tokenizer.

    Usage:
        >>> [t.text for t in BuiltinTokenProvider().tokenize("int x; /* n */")]
        ['int', 'x', ';']
    """

    @property
    def name(self) -> str:
        return "builtin"

    def tokenize(self, source: str) -> tuple[Token, ...]:
        lexer = Lexer(source, LexerMode.SOURCE)
        tokens = tuple(lexer.tokenize())
        return normalize_depths(tokens, final_depth=lexer.depth)
