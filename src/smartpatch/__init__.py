"""
smartpatch: structural match/patch snippets for C-family source files

Locates a position in a source file with an approximate, marker-annotated
excerpt instead of line numbers, then splices replacement text in with the
surrounding indentation.

Markers in a match snippet:
    ...   skip any tokens (stays inside the current { } scope)
    >>>   insert here
    <<<   delete from the insertion point up to here

Quick Start:
    >>> from smartpatch import apply_patch
    >>> source = "int main() {\\n    return 0;\\n}\\n"
    >>> match = "int main() {\\n    >>>\\n    return 0;\\n}"
    >>> print(apply_patch(source, match, "init();\\n").text)
    int main() {
        init();
        return 0;
    }
    <BLANKLINE>

    Or take both fragments from a markdown document:

        result = apply_document(source, Path("change.md").read_text())

Installation:
    pip install smartpatch          # Builtin tokenizer (zero deps)
    pip install smartpatch[cpp]     # + tree-sitter C++ tokenizer
"""

from smartpatch.config import (
    PatchConfig,
    get_patch_config,
    patch_config_context,
    reset_patch_config,
    set_patch_config,
)
from smartpatch.engine import (
    PatchRequest,
    PatchResult,
    apply_document,
    apply_patch,
    apply_request,
)
from smartpatch.errors import (
    ExtractionError,
    MissingInserter,
    NoMatchFound,
    PatchIOError,
    SearchLimitExceeded,
    SmartPatchError,
    TokenNotFound,
)
from smartpatch.extract import PatchBlocks, extract_blocks
from smartpatch.lexer import Lexer, LexerMode
from smartpatch.location import SourceLocation
from smartpatch.matcher import Matcher, MatchResult, find_offsets
from smartpatch.pattern import Pattern, lex_pattern
from smartpatch.profiling import MatchAccumulator, get_match_accumulator, profiled_match
from smartpatch.providers import TokenProvider, get_token_provider, register_provider
from smartpatch.splicer import InsertStyle, SpliceResult, detect_style, splice
from smartpatch.tokens import Token, TokenKind

__version__ = "0.1.0"


def tokenize_source(source: str, tokenizer: str | None = None) -> tuple[Token, ...]:
    """Tokenize target source text with a registered provider.

    Args:
        source: Full text of the target file
        tokenizer: Provider name (defaults to the active config's tokenizer)

    Example:
        >>> [t.text for t in tokenize_source("a->b;")]
        ['a', '->', 'b', ';']
    """
    name = tokenizer or get_patch_config().tokenizer
    return get_token_provider(name).tokenize(source)


__all__ = [
    # Pipeline
    "apply_document",
    "apply_patch",
    "apply_request",
    "PatchRequest",
    "PatchResult",
    # Components
    "Lexer",
    "LexerMode",
    "lex_pattern",
    "Pattern",
    "tokenize_source",
    "find_offsets",
    "Matcher",
    "MatchResult",
    "splice",
    "detect_style",
    "InsertStyle",
    "SpliceResult",
    "extract_blocks",
    "PatchBlocks",
    # Tokens and locations
    "Token",
    "TokenKind",
    "SourceLocation",
    # Providers
    "TokenProvider",
    "get_token_provider",
    "register_provider",
    # Configuration
    "PatchConfig",
    "get_patch_config",
    "set_patch_config",
    "reset_patch_config",
    "patch_config_context",
    # Profiling
    "MatchAccumulator",
    "get_match_accumulator",
    "profiled_match",
    # Errors
    "SmartPatchError",
    "ExtractionError",
    "NoMatchFound",
    "TokenNotFound",
    "MissingInserter",
    "SearchLimitExceeded",
    "PatchIOError",
]
