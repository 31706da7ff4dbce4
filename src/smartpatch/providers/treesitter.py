"""tree-sitter source token provider for C and C++.

Parses the target with tree-sitter-cpp and walks its leaves. Each leaf is
re-lexed with the builtin rules so token boundaries agree with the pattern
lexer (``<vector>`` becomes ``<``, ``vector``, ``>``; ``1.5`` becomes
``1``, ``.``, ``5``). String and character literals are kept whole even
though tree-sitter splits them into quote and content leaves, and comment
nodes are dropped.

Requires the optional dependencies: pip install smartpatch[cpp]
"""

from __future__ import annotations

from typing import Any

from smartpatch.lexer import Lexer, LexerMode, normalize_depths
from smartpatch.providers import register_provider
from smartpatch.tokens import Token
from smartpatch.utils.logger import get_logger

logger = get_logger(__name__)

# Nodes treated as a single leaf
ATOMIC_NODES: frozenset[str] = frozenset(
    {"string_literal", "char_literal", "raw_string_literal", "system_lib_string"}
)
SKIPPED_NODES: frozenset[str] = frozenset({"comment"})


@register_provider("tree-sitter")
class TreeSitterTokenProvider:
    """Leaf tokens from a tree-sitter C++ parse."""

    def __init__(self) -> None:
        try:
            from tree_sitter import Language, Parser
            import tree_sitter_cpp
        except ImportError as e:
            raise ImportError(
                "tree-sitter and tree-sitter-cpp are required. "
                "Install with: pip install smartpatch[cpp]"
            ) from e
        self._parser = Parser(Language(tree_sitter_cpp.language()))

    @property
    def name(self) -> str:
        return "tree-sitter"

    def tokenize(self, source: str) -> tuple[Token, ...]:
        data = source.encode("utf-8", errors="surrogatepass")
        tree = self._parser.parse(data)
        to_char = _byte_to_char_map(source, data)

        lexer = Lexer(source, LexerMode.SOURCE)
        tokens: list[Token] = []
        for start_byte, end_byte in _leaf_spans(tree.root_node):
            start = to_char[start_byte] if to_char is not None else start_byte
            end = to_char[end_byte] if to_char is not None else end_byte
            tokens.extend(lexer.tokenize_span(start, end))

        if tree.root_node.has_error:
            logger.debug("tree-sitter reported syntax errors; matching on recovered leaves")
        return normalize_depths(tokens, final_depth=lexer.depth)


def _leaf_spans(root: Any) -> list[tuple[int, int]]:
    """Byte spans of leaf nodes in document order (iterative walk)."""
    spans: list[tuple[int, int]] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in SKIPPED_NODES:
            continue
        if node.child_count == 0 or node.type in ATOMIC_NODES:
            if node.end_byte > node.start_byte:
                spans.append((node.start_byte, node.end_byte))
            continue
        stack.extend(reversed(node.children))
    return spans


def _byte_to_char_map(source: str, data: bytes) -> list[int] | None:
    """Map UTF-8 byte offsets to string indices; None when they coincide."""
    if len(data) == len(source):
        return None
    mapping = [0] * (len(data) + 1)
    byte_pos = 0
    for index, char in enumerate(source):
        width = len(char.encode("utf-8", errors="surrogatepass"))
        for k in range(width):
            mapping[byte_pos + k] = index
        byte_pos += width
    mapping[byte_pos] = len(source)
    return mapping
