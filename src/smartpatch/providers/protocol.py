"""Source token provider protocol.

A provider turns the full text of the target file into leaf tokens, each
with its text, absolute start offset, and nesting depth. The matcher
depends on nothing else: any tokenizer honoring this contract can be used.

Contract:
    - tokens are ordered by offset and never overlap
    - token.text == source[token.offset : token.end]
    - depth follows the same brace rule as the pattern lexer
      ({ at the outer depth, } at the inner depth)
    - comments are not emitted

"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from smartpatch.tokens import Token


@runtime_checkable
class TokenProvider(Protocol):
    """Protocol for source tokenizers.

    Thread Safety:
        Implementations must be stateless between calls; tokenize() may
        be called concurrently for different texts.
    """

    @property
    def name(self) -> str:
        """Provider identifier used by the registry and the CLI."""
        ...

    def tokenize(self, source: str) -> tuple[Token, ...]:
        """Tokenize the full source text into leaf tokens."""
        ...
