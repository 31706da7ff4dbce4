"""Token and TokenKind definitions shared by the pattern and source lexers.

Both sides of a match are token streams: the pattern lexer produces tokens
from a match snippet, a source token provider produces them from the target
file. Only source tokens carry an offset.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenKind is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """Token kinds produced by the lexers.

    Meta kinds only appear in patterns:
    - WILDCARD (...), INSERTER (>>>), FOLDER (<<<)

    COMMENT only appears in patterns too; source comments are dropped.

    """

    # Meta markers (pattern only)
    WILDCARD = auto()  # ...
    INSERTER = auto()  # >>>
    FOLDER = auto()  # <<<

    # Opaque units
    DIRECTIVE = auto()  # #include
    STRING_LITERAL = auto()  # "text" or 'c'
    STRING_FRAGMENT = auto()  # piece of a literal split by a marker
    COMMENT = auto()  # // or /* */

    # Code
    OPERATOR = auto()  # == != <= >= ++ -- -> && || << >>
    IDENTIFIER = auto()
    NUMBER = auto()
    BRACKET = auto()  # { } ( ) [ ]
    SYMBOL = auto()  # any other single character


# Kinds the wildcard skips over when looking for its target
META_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.WILDCARD, TokenKind.INSERTER, TokenKind.FOLDER, TokenKind.COMMENT}
)

# Markers that record an offset instead of consuming a token
MARKER_KINDS: frozenset[TokenKind] = frozenset({TokenKind.INSERTER, TokenKind.FOLDER})

WILDCARD_TEXT = "..."
INSERTER_TEXT = ">>>"
FOLDER_TEXT = "<<<"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexed token.

    Attributes:
        kind: The token kind (from TokenKind enum)
        text: Exact literal spelling
        depth: Count of enclosing { } scopes (never negative)
        offset: Start index in the source text; None for pattern tokens

    """

    kind: TokenKind
    text: str
    depth: int = 0
    offset: int | None = None

    @property
    def is_meta(self) -> bool:
        """True for wildcards, markers, and comments."""
        return self.kind in META_KINDS

    @property
    def end(self) -> int:
        """End index in the source text (source tokens only)."""
        if self.offset is None:
            raise ValueError(f"{self!r} has no source offset")
        return self.offset + len(self.text)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        text = self.text
        if len(text) > 20:
            text = text[:17] + "..."
        where = f"@{self.offset}" if self.offset is not None else ""
        return f"Token({self.kind.name}, {text!r}, d={self.depth}{where})"
