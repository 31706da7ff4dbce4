"""Match patterns: lexed snippets with their special-case shapes.

A Pattern is what the matcher searches for. Besides ordinary token
sequences, two exact shapes denote whole-file operations:

- ``>>> ... <<<`` replaces the entire file
- ``... >>>`` appends at the end of the file

"""

from __future__ import annotations

from dataclasses import dataclass

from smartpatch.lexer import Lexer, LexerMode, normalize_depths
from smartpatch.tokens import Token, TokenKind

_REPLACE_ALL = (TokenKind.INSERTER, TokenKind.WILDCARD, TokenKind.FOLDER)
_APPEND = (TokenKind.WILDCARD, TokenKind.INSERTER)


@dataclass(frozen=True, slots=True)
class Pattern:
    """An immutable, lexed match snippet.

    Attributes:
        tokens: Pattern tokens with normalized depths
        text: The snippet text the tokens were lexed from

    """

    tokens: tuple[Token, ...]
    text: str = ""

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]

    @property
    def kinds(self) -> tuple[TokenKind, ...]:
        return tuple(token.kind for token in self.tokens)

    @property
    def is_replace_all(self) -> bool:
        """Exactly [INSERTER, WILDCARD, FOLDER]."""
        return self.kinds == _REPLACE_ALL

    @property
    def is_append(self) -> bool:
        """Exactly [WILDCARD, INSERTER]."""
        return self.kinds == _APPEND

    @property
    def has_inserter(self) -> bool:
        return any(token.kind is TokenKind.INSERTER for token in self.tokens)

    @property
    def wildcard_count(self) -> int:
        return sum(1 for token in self.tokens if token.kind is TokenKind.WILDCARD)

    def literals(self) -> list[Token]:
        """Tokens that must match a source token by text and depth."""
        return [
            token
            for token in self.tokens
            if not token.is_meta and token.kind is not TokenKind.STRING_FRAGMENT
        ]


def lex_pattern(text: str) -> Pattern:
    """Lex a match snippet into a Pattern.

    Example:
        >>> lex_pattern('"abc>>>def"').kinds
        (<TokenKind.STRING_FRAGMENT: 6>, <TokenKind.INSERTER: 2>, <TokenKind.STRING_FRAGMENT: 6>)
    """
    lexer = Lexer(text, LexerMode.PATTERN)
    tokens = tuple(lexer.tokenize())
    tokens = normalize_depths(tokens, final_depth=lexer.depth)
    return Pattern(tokens=tokens, text=text)
